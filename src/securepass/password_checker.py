"""
Password strength scoring: entropy, heuristic score, crack time.
"""

import math
import re
from typing import Dict, List, Optional, Tuple

from .models import (
    STRENGTH_COLORS,
    AnalysisResult,
    CharacterClassProfile,
    CrackTime,
    round_half_up,
)

# Known weak passwords, matched against the lowercased candidate
COMMON_PASSWORDS = frozenset([
    'password', '123456', '123456789', 'qwerty', 'abc123', 'password123',
    'admin', 'letmein', 'welcome', 'monkey', '1234567890', 'dragon',
    'pass', 'master', 'hello', 'freedom', 'whatever', 'qazwsx',
    'trustno1', 'jordan', 'harley', 'robert', 'matthew', 'jordan23',
    'password1', '000000', 'superman', 'jennifer', 'joshua', 'hunter',
    'baseball', 'michael', 'tigger', 'michelle', 'mustang',
    'liverpool', 'football', 'access', 'buster', 'soccer', 'hockey',
    'killer', 'george', 'computer', 'jessica', 'pepper',
    'prince', 'shadow', 'cheese', 'dakota', 'sunshine', 'iloveyou',
    'princess', 'hannah', 'red123', 'alexander', 'slayer', 'qwerty123',
    'ashley', 'thomas', 'helicopter', 'thunder',
])

# Charspace contributed by each character class
LOWERCASE_SPACE = 26
UPPERCASE_SPACE = 26
DIGIT_SPACE = 10
SPECIAL_SPACE = 32

GUESSES_PER_SECOND = 1e9  # modern GPU

# (upper bound in seconds, unit length in seconds, unit name)
CRACK_TIME_BUCKETS = (
    (60, 1, "seconds"),
    (3600, 60, "minutes"),
    (86400, 3600, "hours"),
    (2629746, 86400, "days"),
    (31556952, 2629746, "months"),
    (315569520, 31556952, "years"),
    (3155695200, 315569520, "decades"),
)

STRENGTH_THRESHOLDS = (
    (90, 'Very Strong'),
    (75, 'Strong'),
    (60, 'Good'),
    (40, 'Fair'),
    (20, 'Weak'),
)

REPEAT_RE = re.compile(r'(.)\1{2,}')
SEQUENTIAL_DIGITS_RE = re.compile(r'012|123|234|345|456|567|678|789|890')
SEQUENTIAL_LETTERS_RE = re.compile(
    '|'.join(chr(c) + chr(c + 1) + chr(c + 2) for c in range(ord('a'), ord('x') + 1)),
    re.IGNORECASE | re.ASCII,
)

EMPTY_SUGGESTION = "Enter a password to get started"
ALL_CLEAR_SUGGESTION = "Excellent! Your password meets all security criteria"


class PasswordChecker:
    """Check password strength with a weighted heuristic score."""

    @staticmethod
    def is_common(password: str) -> bool:
        return password.lower() in COMMON_PASSWORDS

    @staticmethod
    def has_repeats(password: str) -> bool:
        """Any character repeated three or more times in a row."""
        return REPEAT_RE.search(password) is not None

    @staticmethod
    def has_sequential_digits(password: str) -> bool:
        return SEQUENTIAL_DIGITS_RE.search(password) is not None

    @staticmethod
    def has_sequential_letters(password: str) -> bool:
        return SEQUENTIAL_LETTERS_RE.search(password) is not None

    @staticmethod
    def calculate_entropy(password: str, profile: Optional[CharacterClassProfile] = None) -> float:
        """Worst-case entropy in bits assuming uniform picks from the classes present."""
        if profile is None:
            profile = CharacterClassProfile.from_password(password)
        charspace = 0
        if profile.has_lowercase:
            charspace += LOWERCASE_SPACE
        if profile.has_uppercase:
            charspace += UPPERCASE_SPACE
        if profile.has_numbers:
            charspace += DIGIT_SPACE
        if profile.has_special_chars:
            charspace += SPECIAL_SPACE

        if charspace == 0:
            return 0.0
        return len(password) * math.log2(charspace)

    @staticmethod
    def estimate_crack_time(entropy: float) -> CrackTime:
        """Expected time to reach a 50% chance of guessing the password."""
        try:
            average_guesses = 2.0 ** entropy / 2
        except OverflowError:
            average_guesses = math.inf
        seconds = average_guesses / GUESSES_PER_SECOND

        if seconds < 1:
            return CrackTime(seconds, "Instantly")
        for limit, unit, name in CRACK_TIME_BUCKETS:
            if seconds < limit:
                return CrackTime(seconds, f"{round_half_up(seconds / unit)} {name}")
        return CrackTime(seconds, "Centuries")

    @staticmethod
    def strength_for(score: int) -> Tuple[str, str]:
        """Map a score to its (tier, color). First threshold met wins."""
        for threshold, strength in STRENGTH_THRESHOLDS:
            if score >= threshold:
                return strength, STRENGTH_COLORS[strength]
        return 'Very Weak', STRENGTH_COLORS['Very Weak']

    @staticmethod
    def checks(password: str, profile: CharacterClassProfile) -> Dict[str, bool]:
        return {
            "hasLength": len(password) >= 8,
            "hasUppercase": profile.has_uppercase,
            "hasLowercase": profile.has_lowercase,
            "hasNumbers": profile.has_numbers,
            "hasSpecialChars": profile.has_special_chars,
            "isCommon": PasswordChecker.is_common(password),
        }

    @staticmethod
    def score(password: str, profile: CharacterClassProfile, entropy: float) -> Tuple[int, List[str]]:
        """Additive points, then penalties, then clamp to [0, 100]."""
        length = len(password)
        points = 0

        # Length
        if length >= 8:
            points += 20
        if length >= 12:
            points += 10
        if length >= 16:
            points += 10
        if length >= 20:
            points += 5

        # Character classes
        if profile.has_uppercase:
            points += 15
        if profile.has_lowercase:
            points += 15
        if profile.has_numbers:
            points += 15
        if profile.has_special_chars:
            points += 20

        if PasswordChecker.is_common(password):
            points -= 40

        # Entropy bonus
        if entropy > 40:
            points += 5
        if entropy > 60:
            points += 10
        if entropy > 80:
            points += 10

        # Patterns
        if PasswordChecker.has_repeats(password):
            points -= 10
        if PasswordChecker.has_sequential_digits(password):
            points -= 10
        if PasswordChecker.has_sequential_letters(password):
            points -= 10

        points = max(0, min(100, points))
        return points, PasswordChecker.suggestions(password, profile)

    @staticmethod
    def suggestions(password: str, profile: CharacterClassProfile) -> List[str]:
        """Remediation hints in fixed priority order."""
        issues = []

        if len(password) < 8:
            issues.append("Use at least 8 characters")
        if not profile.has_uppercase:
            issues.append("Add uppercase letters (A-Z)")
        if not profile.has_lowercase:
            issues.append("Add lowercase letters (a-z)")
        if not profile.has_numbers:
            issues.append("Include numbers (0-9)")
        if not profile.has_special_chars:
            issues.append("Add special characters (!@#$%^&*)")
        if len(password) < 12:
            issues.append("Consider using 12+ characters for better security")
        if PasswordChecker.is_common(password):
            issues.append("Avoid common passwords")
        if PasswordChecker.has_repeats(password):
            issues.append("Avoid repeating characters")
        if PasswordChecker.has_sequential_digits(password):
            issues.append("Avoid sequential numbers")

        if not issues:
            issues.append(ALL_CLEAR_SUGGESTION)
        return issues

    @staticmethod
    def empty_result() -> AnalysisResult:
        """Canned result for an empty password."""
        return AnalysisResult(
            score=0,
            strength='Very Weak',
            color=STRENGTH_COLORS['Very Weak'],
            suggestions=[EMPTY_SUGGESTION],
            entropy=0.0,
            time_to_crack=CrackTime(0.0, "Instantly"),
            checks={
                "hasLength": False,
                "hasUppercase": False,
                "hasLowercase": False,
                "hasNumbers": False,
                "hasSpecialChars": False,
                "isCommon": False,
            },
        )

    @staticmethod
    def check_strength(password: str) -> AnalysisResult:
        """Score a password without consulting the breach corpus."""
        if not password:
            return PasswordChecker.empty_result()

        profile = CharacterClassProfile.from_password(password)
        entropy = PasswordChecker.calculate_entropy(password, profile)
        score, suggestions = PasswordChecker.score(password, profile, entropy)
        strength, color = PasswordChecker.strength_for(score)

        return AnalysisResult(
            score=score,
            strength=strength,
            color=color,
            suggestions=suggestions,
            entropy=entropy,
            time_to_crack=PasswordChecker.estimate_crack_time(entropy),
            checks=PasswordChecker.checks(password, profile),
        )
