"""
samesame.strength
-----------------

Deterministic, advisory password strength grading.

A candidate earns one point for each of nine checks (three length steps,
four ASCII character classes, no triple repeat, no common fragment). A
candidate containing a common fragment also loses COMMON_FRAGMENT_PENALTY
points, floored at zero. The score then maps onto a Grade.

Notes:
- Length is counted in code points (len() of the str).
- Character classes are ASCII only; non-ASCII letters and digits do not count.
- Grading is a hint for the user, not a policy decision.
"""

from __future__ import annotations

import enum
import re
from typing import NamedTuple, Optional, Tuple, Union

LENGTH_STEPS: Tuple[int, ...] = (8, 12, 16)

PUNCTUATION = "!@#$%^&*()_+-=[]{};':,.<>?"

COMMON_FRAGMENTS: Tuple[str, ...] = (
    "123", "abc", "qwe", "asd", "zxc",
    "password", "admin", "user", "login",
    "000", "111", "222", "333",
)

COMMON_FRAGMENT_PENALTY = 2

# (upper bound inclusive, grade label), checked in order
_GRADE_BANDS = ((2, "Weak"), (4, "Medium"), (6, "Strong"))

_LOWERCASE = re.compile(r"[a-z]")
_UPPERCASE = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_PUNCTUATION = re.compile("[" + re.escape(PUNCTUATION) + "]")


class Grade(str, enum.Enum):
    """Strength label. Members compare equal to their display strings."""

    ABSENT = ""
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def for_score(cls, score: int) -> "Grade":
        for upper, label in _GRADE_BANDS:
            if score <= upper:
                return cls(label)
        return cls.VERY_STRONG


class StrengthReport(NamedTuple):
    score: int
    grade: Grade
    criteria: Tuple[str, ...]
    fragments: Tuple[str, ...]


_ABSENT_REPORT = StrengthReport(0, Grade.ABSENT, (), ())


def _has_triple_repeat(text: str) -> bool:
    for i in range(len(text) - 2):
        if text[i] == text[i + 1] == text[i + 2]:
            return True
    return False


def find_common_fragments(text: str) -> Tuple[str, ...]:
    """Return the COMMON_FRAGMENTS contained in `text`, case-insensitively."""
    lowered = text.lower()
    return tuple(fragment for fragment in COMMON_FRAGMENTS if fragment in lowered)


def assess_strength(password: Optional[Union[str, bytes, bytearray, memoryview]]) -> StrengthReport:
    """
    Score `password` and return the full breakdown.

    Bytes-like input is decoded as UTF-8, undecodable sequences replaced.
    None or empty input yields score 0 and Grade.ABSENT.
    """
    if password is None:
        return _ABSENT_REPORT
    if isinstance(password, (bytes, bytearray, memoryview)):
        password = bytes(password).decode("utf-8", errors="replace")
    if not password:
        return _ABSENT_REPORT

    length = len(password)
    fragments = find_common_fragments(password)
    checks = (
        ("length_8", length >= LENGTH_STEPS[0]),
        ("length_12", length >= LENGTH_STEPS[1]),
        ("length_16", length >= LENGTH_STEPS[2]),
        ("lowercase", _LOWERCASE.search(password) is not None),
        ("uppercase", _UPPERCASE.search(password) is not None),
        ("digit", _DIGIT.search(password) is not None),
        ("punctuation", _PUNCTUATION.search(password) is not None),
        ("no_triple_repeat", not _has_triple_repeat(password)),
        ("no_common_fragment", not fragments),
    )
    passed = tuple(name for name, ok in checks if ok)

    score = len(passed)
    if fragments:
        score = max(0, score - COMMON_FRAGMENT_PENALTY)

    return StrengthReport(score, Grade.for_score(score), passed, fragments)


def evaluate_strength(password: Optional[Union[str, bytes, bytearray, memoryview]]) -> Grade:
    """Return the Grade for `password`; Grade.ABSENT ("") for None or empty."""
    return assess_strength(password).grade
