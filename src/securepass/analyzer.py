"""
Analysis pipeline: score, breach lookup, breach capping, persistence hooks.
"""

import logging
from typing import Any, Dict, Optional

from .breach_checker import BreachChecker
from .digests import record_hash
from .errors import AnalysisError
from .logger import security_logger
from .models import NOT_BREACHED, AnalysisRequest, AnalysisResult
from .password_checker import PasswordChecker

log = logging.getLogger(__name__)

BREACH_SCORE_CAP = 30
BREACH_WEAK_FLOOR = 25


def breach_warning(count: int) -> str:
    return f"⚠️ This password has been found in {count:,} data breaches. Choose a different password."


class PasswordAnalyzer:
    """Run one analysis request end to end.

    breach_checker may be None to skip lookups (results then report not
    breached). recorder is the persistence collaborator; it needs
    record_check(user_id, password_hash, result, metadata) and
    record_history(user_id, password_hash, result).
    """

    def __init__(self, breach_checker: Optional[BreachChecker] = None, recorder: Any = None):
        self.breach_checker = breach_checker
        self.recorder = recorder

    def analyze(self, request: AnalysisRequest, user_id: Optional[str] = None,
                metadata: Optional[Dict[str, Any]] = None) -> AnalysisResult:
        password = request.password

        if not password:
            result = PasswordChecker.empty_result()
        else:
            try:
                result = PasswordChecker.check_strength(password)
                status = self.breach_checker.check(password) if self.breach_checker else NOT_BREACHED
                result.apply_breach(
                    status,
                    warning=breach_warning(status.count) if status.is_breached else None,
                    cap=BREACH_SCORE_CAP,
                    weak_floor=BREACH_WEAK_FLOOR,
                )
            except AnalysisError:
                raise
            except Exception as e:
                log.exception("Password analysis failed")
                raise AnalysisError("Password analysis failed") from e

        security_logger.log_analysis(result.strength, result.score, result.is_breached, user_id)
        self._persist(request, result, user_id, metadata or {})
        return result

    def _persist(self, request: AnalysisRequest, result: AnalysisResult,
                 user_id: Optional[str], metadata: Dict[str, Any]) -> None:
        if self.recorder is None:
            return
        password_hash = record_hash(request.password)
        self.recorder.record_check(user_id, password_hash, result, metadata)
        if request.save_to_history and user_id and request.password:
            self.recorder.record_history(user_id, password_hash, result)


def analyze_password(password: str, breach_checker: Optional[BreachChecker] = None) -> AnalysisResult:
    """Convenience wrapper for one-off analyses without persistence."""
    return PasswordAnalyzer(breach_checker).analyze(AnalysisRequest(password))
