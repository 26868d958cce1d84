"""Environment configuration for the review pipeline task.

Pipeline inputs are exposed to the task as INPUT_<NAME> environment
variables; a local .env file is honored for development runs.
"""

import logging
import os
import sys
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv

load_dotenv()

# Task inputs
INPUT_FILE_EXTENSIONS = "INPUT_FILEEXTENSIONS"
INPUT_FILE_EXCLUDES = "INPUT_FILEEXCLUDES"
INPUT_REVIEW_WHOLE_DIFF = "INPUT_REVIEWWHOLEDIFFATONCE"
INPUT_ADD_COST_TO_COMMENTS = "INPUT_ADDCOSTTOCOMMENTS"
INPUT_PROMPT_PRICE = "INPUT_PROMPTTOKENSPRICEPERMILLIONTOKENS"
INPUT_COMPLETION_PRICE = "INPUT_COMPLETIONTOKENSPRICEPERMILLIONTOKENS"
INPUT_MAX_TOKENS = "INPUT_MAXTOKENS"

# Pull request variables
TARGET_BRANCH_NAME = "SYSTEM_PULLREQUEST_TARGETBRANCHNAME"
TARGET_BRANCH = "SYSTEM_PULLREQUEST_TARGETBRANCH"

DEFAULT_MAX_TOKENS = 16384

LOG_FILE = os.environ.get("AICR_LOG_FILE")
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

_TRUE_VALUES = {"true", "yes", "1", "on"}


def parse_bool(value: Any, default: bool = False) -> bool:
    """Interpret a config or environment value as a boolean ("false" is False)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip()
    if not text:
        return default
    return text.lower() in _TRUE_VALUES


def env_bool(name: str, default: bool = False, environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return parse_bool(env.get(name), default)


def env_float(name: str, default: float = 0.0, environ: Mapping[str, str] | None = None) -> float:
    env = os.environ if environ is None else environ
    value = env.get(name)
    if value is None or not value.strip():
        return default
    return float(value)


def env_int(name: str, default: int = 0, environ: Mapping[str, str] | None = None) -> int:
    env = os.environ if environ is None else environ
    value = env.get(name)
    if value is None or not value.strip():
        return default
    return int(value)


def get_target_branch(environ: Mapping[str, str] | None = None) -> str:
    """Remote-tracking ref of the pull request's target branch.

    Raises ValueError if the pipeline did not provide a target branch.
    """
    env = os.environ if environ is None else environ

    name = env.get(TARGET_BRANCH_NAME)
    if not name:
        ref = env.get(TARGET_BRANCH)
        if ref:
            name = ref.replace("refs/heads/", "")

    if not name:
        raise ValueError("Could not find target branch")

    return f"origin/{name}"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Log to stderr, and to AICR_LOG_FILE when set."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if LOG_FILE:
        handlers.append(logging.FileHandler(LOG_FILE, mode="a"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    return logging.getLogger("src")
