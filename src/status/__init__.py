"""Review status classification.

Turns the free-form text of a generated review into a thread status:
- per-file reviews carry a single `Status: ✅ Passed` line
- whole-diff reviews carry a markdown table with a Status column

Anything that is not an explicit pass keeps the thread active.
"""

from .line import extract_line_status, find_status_line, get_per_file_thread_status
from .table import (
    InTable,
    Seeking,
    extract_table_status,
    find_status_column,
    is_separator_row,
    parse_table_row,
)
from .thread import NO_COMMENT, get_thread_status, has_comment
from .tokens import ReviewStatus, ThreadStatus, classify_status, normalize_status

__all__ = [
    # Tokens
    "classify_status",
    "normalize_status",
    "ReviewStatus",
    "ThreadStatus",
    # Per-file
    "extract_line_status",
    "find_status_line",
    "get_per_file_thread_status",
    # Whole-diff
    "extract_table_status",
    "parse_table_row",
    "is_separator_row",
    "find_status_column",
    "Seeking",
    "InTable",
    # Dispatch
    "get_thread_status",
    "has_comment",
    "NO_COMMENT",
]
