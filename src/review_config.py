"""Review configuration: which files to review and how.

Loaded from aicr.yaml when present:

    review:
      include_patterns: ["**/*.py", ".ts"]
      exclude_patterns: "secret.txt, docs/**"
      review_whole_diff_at_once: true

or from the pipeline task inputs (INPUT_* environment variables).
Pattern lists may be YAML lists or comma-separated strings.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .config import (
    DEFAULT_MAX_TOKENS,
    INPUT_ADD_COST_TO_COMMENTS,
    INPUT_COMPLETION_PRICE,
    INPUT_FILE_EXCLUDES,
    INPUT_FILE_EXTENSIONS,
    INPUT_MAX_TOKENS,
    INPUT_PROMPT_PRICE,
    INPUT_REVIEW_WHOLE_DIFF,
    env_bool,
    env_float,
    env_int,
    parse_bool,
)
from .cost import Pricing
from .patterns import FileFilter

CONFIG_CANDIDATES = ["aicr.yaml", ".aicr.yaml", "aicr.yml", ".aicr.yml"]


def _pattern_list(value: Any) -> list[str]:
    """Accept a list of patterns or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    elif not isinstance(value, list | tuple):
        raise ValueError(f"Expected a list of patterns or a comma-separated string, got {value!r}")
    return [str(item).strip() for item in value if str(item).strip()]


def _number(review: dict[str, Any], key: str, default, kind):
    """Read a numeric setting; missing or null means the default."""
    value = review.get(key)
    if value is None:
        return default
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid value for review.{key}: {value!r}") from None


@dataclass
class ReviewConfig:
    """Configuration for a review run."""

    include_patterns: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(default_factory=list)
    review_whole_diff_at_once: bool = False
    add_cost_to_comments: bool = False
    prompt_price_per_million: float = 0.0
    completion_price_per_million: float = 0.0
    max_tokens: int = DEFAULT_MAX_TOKENS
    skip_binary_files: bool = True

    @classmethod
    def load(cls, path: Path | str | None = None) -> ReviewConfig:
        """Load config from YAML file or return defaults."""
        if path is None:
            for candidate in CONFIG_CANDIDATES:
                if Path(candidate).exists():
                    path = candidate
                    break

        if path is None or not Path(path).exists():
            return cls.default()

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReviewConfig:
        """Create config from dictionary (e.g., parsed YAML)."""
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")

        review = data.get("review")
        if review is None:
            review = {}
        if not isinstance(review, dict):
            raise ValueError(f"'review' must be a mapping of settings, got {review!r}")

        return cls(
            include_patterns=_pattern_list(review.get("include_patterns")),
            exclude_patterns=_pattern_list(review.get("exclude_patterns")),
            review_whole_diff_at_once=parse_bool(review.get("review_whole_diff_at_once"), False),
            add_cost_to_comments=parse_bool(review.get("add_cost_to_comments"), False),
            prompt_price_per_million=_number(review, "prompt_price_per_million", 0.0, float),
            completion_price_per_million=_number(review, "completion_price_per_million", 0.0, float),
            max_tokens=_number(review, "max_tokens", DEFAULT_MAX_TOKENS, int),
            skip_binary_files=parse_bool(review.get("skip_binary_files"), True),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ReviewConfig:
        """Create config from the pipeline task inputs."""
        env = os.environ if environ is None else environ

        return cls(
            include_patterns=_pattern_list(env.get(INPUT_FILE_EXTENSIONS)),
            exclude_patterns=_pattern_list(env.get(INPUT_FILE_EXCLUDES)),
            review_whole_diff_at_once=env_bool(INPUT_REVIEW_WHOLE_DIFF, environ=env),
            add_cost_to_comments=env_bool(INPUT_ADD_COST_TO_COMMENTS, environ=env),
            prompt_price_per_million=env_float(INPUT_PROMPT_PRICE, environ=env),
            completion_price_per_million=env_float(INPUT_COMPLETION_PRICE, environ=env),
            max_tokens=env_int(INPUT_MAX_TOKENS, DEFAULT_MAX_TOKENS, environ=env),
        )

    @classmethod
    def default(cls) -> ReviewConfig:
        """Review every non-binary file, one comment per file."""
        return cls()

    @property
    def pricing(self) -> Pricing:
        return Pricing(
            prompt_per_million=self.prompt_price_per_million,
            completion_per_million=self.completion_price_per_million,
        )

    def file_filter(self) -> FileFilter:
        return FileFilter.from_strings(
            include=self.include_patterns,
            exclude=self.exclude_patterns,
            skip_binary=self.skip_binary_files,
        )

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data: dict[str, Any] = {
            "review": {
                "include_patterns": self.include_patterns,
                "exclude_patterns": self.exclude_patterns,
                "review_whole_diff_at_once": self.review_whole_diff_at_once,
                "add_cost_to_comments": self.add_cost_to_comments,
                "prompt_price_per_million": self.prompt_price_per_million,
                "completion_price_per_million": self.completion_price_per_million,
                "max_tokens": self.max_tokens,
            }
        }

        # Only include binary handling if customized
        if not self.skip_binary_files:
            data["review"]["skip_binary_files"] = False

        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
