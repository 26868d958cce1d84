"""Token pricing and cost reporting."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from .models import CostBreakdown, TokenUsage

logger = logging.getLogger(__name__)

TOKENS_PER_PRICE_UNIT = 1_000_000


class Pricing(BaseModel):
    """Prices in dollars per million tokens."""

    prompt_per_million: float = 0.0
    completion_per_million: float = 0.0

    @property
    def enabled(self) -> bool:
        return self.prompt_per_million != 0 or self.completion_per_million != 0

    def cost(self, usage: TokenUsage) -> CostBreakdown:
        return CostBreakdown(
            prompt_cost=usage.prompt_tokens * (self.prompt_per_million / TOKENS_PER_PRICE_UNIT),
            completion_cost=usage.completion_tokens * (self.completion_per_million / TOKENS_PER_PRICE_UNIT),
        )


def format_cost_footer(total: float) -> str:
    """Footer appended to whole-diff review comments."""
    return f"\n\n💰 _It cost ${total:.6f} to create this review_"


def log_cost_analysis(usage: TokenUsage, pricing: Pricing) -> CostBreakdown:
    """Log token counts and their cost, returning the breakdown."""
    cost = pricing.cost(usage)
    logger.info("--- Cost Analysis ---")
    logger.info(f"🪙 Total Prompt Tokens     : {usage.prompt_tokens}")
    logger.info(f"🪙 Total Completion Tokens : {usage.completion_tokens}")
    logger.info(f"💵 Input Tokens Cost       : {cost.prompt_cost:.6f} $")
    logger.info(f"💵 Output Tokens Cost      : {cost.completion_cost:.6f} $")
    logger.info(f"💰 Total Cost              : {cost.total:.6f} $")
    return cost
