"""Status extraction for whole-diff reviews.

A whole-diff review summarizes every file in one markdown table:

    | File Name | Status    | Comments   |
    |-----------|-----------|------------|
    | a.ts      | ✅ Passed | looks good |

The thread is resolved only when every data row of the first status table
passed. Anything unexpected keeps the thread active.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .tokens import ReviewStatus, ThreadStatus, classify_status

REQUIRED_HEADERS = ("file name", "status", "comments")

_SEPARATOR_CELL = re.compile(r":?-{3,}:?")


@dataclass(frozen=True)
class Seeking:
    """Looking for the status table header."""


@dataclass(frozen=True)
class InTable:
    """Inside the status table."""

    status_index: int
    saw_passed: bool = False


ScanState = Seeking | InTable


def parse_table_row(line: str) -> list[str]:
    """Split a markdown row into trimmed cells.

    Only the empty cells produced by the outer pipes are dropped; an empty
    interior cell is kept since an empty status is meaningful.
    """
    cells = [cell.strip() for cell in line.strip().split("|")]
    if cells and cells[0] == "":
        cells = cells[1:]
    if cells and cells[-1] == "":
        cells = cells[:-1]
    return cells


def is_separator_row(cells: list[str]) -> bool:
    return all(_SEPARATOR_CELL.fullmatch(cell.strip()) for cell in cells)


def find_status_column(cells: list[str]) -> int | None:
    """Index of the status column if this is the status table header."""
    headers = [cell.strip().lower() for cell in cells]
    if all(label in headers for label in REQUIRED_HEADERS):
        return headers.index("status")
    return None


def extract_table_status(text: str) -> ThreadStatus:
    state: ScanState = Seeking()

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line.startswith("|"):
            if isinstance(state, InTable):
                # Only the first table counts
                break
            continue

        cells = parse_table_row(line)
        if not cells:
            continue

        if isinstance(state, Seeking):
            index = find_status_column(cells)
            if index is not None:
                state = InTable(status_index=index)
            continue

        if is_separator_row(cells):
            continue

        if state.status_index >= len(cells):
            return ThreadStatus.ACTIVE

        if classify_status(cells[state.status_index]) is not ReviewStatus.PASSED:
            return ThreadStatus.ACTIVE

        state = InTable(status_index=state.status_index, saw_passed=True)

    if isinstance(state, InTable) and state.saw_passed:
        return ThreadStatus.RESOLVED
    return ThreadStatus.ACTIVE
