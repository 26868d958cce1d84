"""Pydantic models for review results and run summaries."""

from pydantic import BaseModel

from .status import ThreadStatus


class TokenUsage(BaseModel):
    """Tokens consumed by one or more completions."""
    prompt_tokens: int = 0
    completion_tokens: int = 0

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
        )


class ReviewResult(BaseModel):
    """Response of the completion service for one review request."""
    response: str
    usage: TokenUsage = TokenUsage()


class PostedComment(BaseModel):
    """Comment handed to the pull request comment service."""
    path: str
    body: str
    status: ThreadStatus


class CostBreakdown(BaseModel):
    """Cost of a run in dollars."""
    prompt_cost: float
    completion_cost: float

    @property
    def total(self) -> float:
        return self.prompt_cost + self.completion_cost


class RunSummary(BaseModel):
    """Outcome of a review run."""
    files_reviewed: list[str]
    comments: list[PostedComment] = []
    skipped: list[str] = []
    usage: TokenUsage = TokenUsage()
    cost: CostBreakdown | None = None
