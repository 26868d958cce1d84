"""Review orchestration.

Drives the collaborators (diff provider, completion service, pull request
comments) through one review run. The collaborators are injected so the
runner itself does no I/O besides logging and console output.
"""

from __future__ import annotations

import logging
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from .cost import format_cost_footer, log_cost_analysis
from .models import PostedComment, ReviewResult, RunSummary, TokenUsage
from .review_config import ReviewConfig
from .status import ThreadStatus, get_thread_status, has_comment

logger = logging.getLogger(__name__)

FULL_DIFF_NAME = "Full Diff"


class DiffProvider(Protocol):
    def changed_files(self) -> list[str]: ...

    def diff(self, path: str) -> str: ...


class Reviewer(Protocol):
    def review(self, diff: str, name: str, max_tokens: int) -> ReviewResult: ...


class CommentService(Protocol):
    def delete_comments(self) -> None: ...

    def add_comment(self, path: str, body: str, status: ThreadStatus) -> None: ...


class ReviewRunner:
    """Runs one review of a pull request."""

    def __init__(
        self,
        config: ReviewConfig,
        diffs: DiffProvider,
        reviewer: Reviewer,
        comments: CommentService,
        console: Console | None = None,
    ):
        self.config = config
        self.diffs = diffs
        self.reviewer = reviewer
        self.comments = comments
        self.console = console or Console(stderr=True)
        self.usage = TokenUsage()
        self.posted: list[PostedComment] = []
        self.skipped: list[str] = []

    def _post(self, path: str, body: str, status: ThreadStatus) -> None:
        self.comments.add_comment(path, body, status)
        self.posted.append(PostedComment(path=path, body=body, status=status))

    def _review(self, diff: str, name: str) -> ReviewResult:
        result = self.reviewer.review(diff, name, self.config.max_tokens)
        self.usage = self.usage + result.usage
        return result

    def review_file(self, path: str) -> None:
        """Review a single file and post its comment."""
        review = self._review(self.diffs.diff(path), path)

        if not has_comment(review.response):
            logger.info(f"No comments for file {path}")
            self.skipped.append(path)
            return

        logger.info(f"Completed review of file {path}")
        status = get_thread_status(review.response, whole_diff=False)
        logger.debug(f"Thread status for {path}: {status.value}")
        self._post(path, review.response, status)

    def review_full_diff(self, files: list[str]) -> None:
        """Review all files at once and post a single summary comment."""
        full_diff = "".join(self.diffs.diff(path) for path in files)
        review = self._review(full_diff, FULL_DIFF_NAME)

        if not has_comment(review.response):
            logger.info("No comments for full diff")
            self.skipped.append(FULL_DIFF_NAME)
            return

        comment = review.response
        if self.config.add_cost_to_comments:
            comment += format_cost_footer(self.config.pricing.cost(self.usage).total)

        logger.info(f"Completed review for {len(files)} files")
        status = get_thread_status(review.response, whole_diff=True)
        logger.debug(f"Thread status for full diff: {status.value}")
        self._post("", comment, status)

    def run(self) -> RunSummary:
        self.usage = TokenUsage()
        self.posted = []
        self.skipped = []

        files = self.config.file_filter().apply(self.diffs.changed_files())
        self.console.print(f"[bold]Reviewing {len(files)} files[/]")

        self.comments.delete_comments()

        if self.config.review_whole_diff_at_once:
            if files:
                self.review_full_diff(files)
        else:
            for index, path in enumerate(files, start=1):
                self.console.print(f"[dim]({index}/{len(files)})[/] {escape(path)}")
                self.review_file(path)

        cost = None
        pricing = self.config.pricing
        if pricing.enabled:
            cost = log_cost_analysis(self.usage, pricing)

        self.console.print(
            f"[bold green]Pull request reviewed.[/] "
            f"{len(self.posted)} comments, {len(self.skipped)} without comments"
        )

        return RunSummary(
            files_reviewed=files,
            comments=self.posted,
            skipped=self.skipped,
            usage=self.usage,
            cost=cost,
        )
