"""
SecurePass - password strength analysis with k-anonymity breach lookup.
"""

from .analyzer import PasswordAnalyzer, analyze_password
from .breach_checker import BreachCache, BreachChecker
from .models import AnalysisRequest, AnalysisResult, BreachStatus, CharacterClassProfile, CrackTime
from .password_checker import PasswordChecker

__version__ = "1.0.0"

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "BreachCache",
    "BreachChecker",
    "BreachStatus",
    "CharacterClassProfile",
    "CrackTime",
    "PasswordAnalyzer",
    "PasswordChecker",
    "analyze_password",
]
