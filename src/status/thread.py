"""Pick the thread status for a generated review."""

from __future__ import annotations

from .line import get_per_file_thread_status
from .table import extract_table_status
from .tokens import ThreadStatus

# Reviews containing this marker have nothing worth posting
NO_COMMENT = "NO_COMMENT"


def has_comment(response: str) -> bool:
    return NO_COMMENT not in response


def get_thread_status(response: str, whole_diff: bool) -> ThreadStatus:
    """Thread status for a per-file review (status line) or a whole-diff review (status table)."""
    if whole_diff:
        return extract_table_status(response)
    return get_per_file_thread_status(response)
