"""Status extraction for per-file reviews.

A per-file review carries its verdict on a line of its own, e.g.

    **Status**: ✅ Passed
    Status: ❌ Not Passed
"""

from __future__ import annotations

import re

from .tokens import ReviewStatus, ThreadStatus, classify_status

_STATUS_LINE = re.compile(
    r"\s*(?:\*\*)?status(?:\*\*)?\s*:?\s*(?:\*\*)?\s*"
    r"(?P<value>(?:[^\w\s*]+\s*)?(?:passed|questions|not\s+passed))"
    r"\s*(?:\*\*)?\s*",
    re.IGNORECASE,
)


def find_status_line(text: str) -> str | None:
    """Return the status value of the first status line, if any."""
    for line in text.splitlines():
        m = _STATUS_LINE.fullmatch(line)
        if m:
            return m.group("value")
    return None


def extract_line_status(text: str) -> ReviewStatus:
    value = find_status_line(text)
    if value is None:
        return ReviewStatus.UNKNOWN
    return classify_status(value)


def get_per_file_thread_status(text: str) -> ThreadStatus:
    """Only an explicit pass resolves the thread."""
    if extract_line_status(text) is ReviewStatus.PASSED:
        return ThreadStatus.RESOLVED
    return ThreadStatus.ACTIVE
