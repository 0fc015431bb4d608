"""
Data model for password analysis requests and results.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import AnalysisError, ValidationError

# Characters counted as the special-symbol class
SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>'
_SPECIAL_RE = re.compile('[' + re.escape(SPECIAL_CHARS) + ']')

# Strength tiers in ascending order with their display colors
STRENGTH_COLORS = {
    'Very Weak': '#ef4444',
    'Weak': '#f97316',
    'Fair': '#eab308',
    'Good': '#3b82f6',
    'Strong': '#22c55e',
    'Very Strong': '#10b981',
}
STRENGTH_LEVELS = tuple(STRENGTH_COLORS)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, unlike builtin round()."""
    return int(math.floor(value + 0.5))


@dataclass
class AnalysisRequest:
    """Candidate password plus the opt-in flag for per-user history."""
    password: str
    save_to_history: bool = False

    @classmethod
    def from_json(cls, payload: Any) -> 'AnalysisRequest':
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        password = payload.get("password")
        if not isinstance(password, str):
            raise ValidationError("Password must be a string")
        return cls(password=password, save_to_history=bool(payload.get("saveToHistory", False)))


@dataclass(frozen=True)
class CharacterClassProfile:
    has_lowercase: bool = False
    has_uppercase: bool = False
    has_numbers: bool = False
    has_special_chars: bool = False

    @classmethod
    def from_password(cls, password: str) -> 'CharacterClassProfile':
        """Scan the password once and record which classes appear."""
        lower = upper = digit = special = False
        for ch in password:
            if 'a' <= ch <= 'z':
                lower = True
            elif 'A' <= ch <= 'Z':
                upper = True
            elif '0' <= ch <= '9':
                digit = True
            elif _SPECIAL_RE.match(ch):
                special = True
        return cls(lower, upper, digit, special)


@dataclass(frozen=True)
class CrackTime:
    seconds: float
    display: str

    def to_dict(self) -> Dict[str, Any]:
        # JSON has no infinity; mirror JSON.stringify and emit null
        seconds = self.seconds if math.isfinite(self.seconds) else None
        return {"seconds": seconds, "display": self.display}


@dataclass(frozen=True)
class BreachStatus:
    is_breached: bool
    count: int = 0


NOT_BREACHED = BreachStatus(False, 0)


@dataclass
class AnalysisResult:
    """Outcome of one analysis. Built fresh per request."""
    score: int
    strength: str
    color: str
    suggestions: List[str]
    entropy: float
    time_to_crack: CrackTime
    checks: Dict[str, bool]
    is_breached: Optional[bool] = None
    breach_count: Optional[int] = None
    _breach_applied: bool = field(default=False, repr=False, compare=False)

    @property
    def crack_time(self) -> str:
        return self.time_to_crack.display

    def apply_breach(self, status: BreachStatus, warning: Optional[str] = None,
                     cap: int = 30, weak_floor: int = 25) -> None:
        """Attach breach status and, when breached, cap score and demote the tier.

        The demotion uses its own two-level table (Weak / Very Weak), not the
        six-level scorer thresholds.
        """
        if self._breach_applied:
            raise AnalysisError("Breach status already applied to this result")
        self._breach_applied = True
        self.is_breached = status.is_breached
        self.breach_count = status.count
        if not status.is_breached:
            return
        if warning:
            self.suggestions.insert(0, warning)
        self.score = min(self.score, cap)
        if self.score >= weak_floor:
            self.strength = 'Weak'
        else:
            self.strength = 'Very Weak'
        self.color = STRENGTH_COLORS[self.strength]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "score": self.score,
            "strength": self.strength,
            "color": self.color,
            "suggestions": list(self.suggestions),
            "entropy": round(self.entropy, 1),
            "crackTime": self.time_to_crack.display,
            "timeToCrack": self.time_to_crack.to_dict(),
            "checks": dict(self.checks),
        }
        if self.is_breached is not None:
            data["isBreached"] = self.is_breached
            data["breachCount"] = self.breach_count or 0
        return data
