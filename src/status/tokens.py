"""Normalize a single status fragment (a line value or a table cell) into a verdict."""

from __future__ import annotations

import re
from enum import Enum

_WHITESPACE = re.compile(r"\s+")


class ReviewStatus(Enum):
    PASSED = "passed"
    QUESTIONS = "questions"
    NOT_PASSED = "not_passed"
    UNKNOWN = "unknown"


class ThreadStatus(Enum):
    """State of the reviewer conversation on the pull request."""

    ACTIVE = "active"
    RESOLVED = "resolved"


def normalize_status(token: str) -> str:
    """Drop bold markers, collapse whitespace and lowercase.

    Whitespace runs are collapsed so "Not  Passed" still reads as "not passed"
    instead of falling through to "passed".
    """
    token = token.replace("**", "")
    return _WHITESPACE.sub(" ", token).strip().lower()


def classify_status(token: str) -> ReviewStatus:
    """Classify a status fragment such as "✅ Passed" or "**❓ Questions**".

    "not passed" is checked before "passed" since it contains it.
    """
    normalized = normalize_status(token)

    if "not passed" in normalized:
        return ReviewStatus.NOT_PASSED
    if "questions" in normalized:
        return ReviewStatus.QUESTIONS
    if "passed" in normalized:
        return ReviewStatus.PASSED
    return ReviewStatus.UNKNOWN
