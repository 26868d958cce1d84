"""Include/exclude pattern matching for changed files.

Patterns are glob-like:
- `**/` matches any number of nested directories, including none
- `**` matches anything, slashes included
- `*` matches within a single path segment
- `?` matches one character within a segment
- `.ext` (no wildcards, no slash) matches paths ending with that suffix
- a bare name without `/` also matches the file's basename, so old
  filename-only exclude lists (`secret.txt`) keep working
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class PatternKind(Enum):
    GLOB = "glob"
    EXTENSION = "extension"
    NAME = "name"


# Files with these extensions are never sent for review
BINARY_EXTENSIONS = frozenset([
    # Images
    "png", "jpg", "jpeg", "gif", "bmp", "ico", "icns", "tif", "tiff", "webp", "psd",
    # Audio / video
    "mp3", "mp4", "m4a", "wav", "ogg", "flac", "avi", "mov", "mkv", "webm", "wmv",
    # Archives
    "zip", "gz", "tgz", "bz2", "xz", "7z", "rar", "tar", "jar", "war", "nupkg",
    # Compiled / native
    "exe", "dll", "so", "dylib", "a", "lib", "o", "obj", "pdb", "class", "pyc", "wasm",
    # Documents
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx",
    # Fonts
    "ttf", "otf", "woff", "woff2", "eot",
    # Data
    "bin", "dat", "db", "sqlite", "parquet", "pkl",
])


def normalize_path(path: str) -> str:
    """Use forward slashes regardless of the platform that produced the path."""
    return path.replace("\\", "/")


def glob_to_regex(pattern: str) -> re.Pattern:
    """Convert a glob pattern to a compiled regex (use with fullmatch)."""
    parts = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "*":
            if pattern[i + 1 : i + 3] == "*/":
                parts.append(r"(?:.*/)?")
                i += 3
                continue
            if pattern[i + 1 : i + 2] == "*":
                parts.append(r".*")
                i += 2
                continue
            parts.append(r"[^/]*")
        elif ch == "?":
            parts.append(r"[^/]")
        else:
            parts.append(re.escape(ch))
        i += 1

    return re.compile("".join(parts))


def pattern_kind(pattern: str) -> PatternKind:
    """Infer what kind of pattern a (normalized) token is."""
    if any(c in pattern for c in "*?/"):
        return PatternKind.GLOB
    if pattern.startswith("."):
        return PatternKind.EXTENSION
    return PatternKind.NAME


@dataclass(frozen=True)
class GlobPattern:
    """A single include/exclude pattern, compiled once."""

    raw: str
    pattern: str = field(init=False)
    kind: PatternKind = field(init=False)
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        normalized = normalize_path(self.raw)
        object.__setattr__(self, "pattern", normalized)
        object.__setattr__(self, "kind", pattern_kind(normalized))
        object.__setattr__(self, "_regex", glob_to_regex(normalized))

    def matches(self, path: str) -> bool:
        path = normalize_path(path)

        if self.kind is PatternKind.EXTENSION:
            return path.endswith(self.pattern)

        if self._regex.fullmatch(path):
            return True

        # Slash-free patterns also apply to the basename
        if "/" not in self.pattern:
            basename = path.rsplit("/", 1)[-1]
            return self._regex.fullmatch(basename) is not None

        return False


def parse_patterns(raw: str | Iterable[str] | None) -> list[GlobPattern]:
    """Parse a comma-separated string (or list of strings) into patterns.

    Entries are trimmed and empty entries dropped.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split(",")

    patterns = []
    for item in raw:
        item = item.strip()
        if item:
            patterns.append(GlobPattern(item))
    return patterns


def matches_any(path: str, patterns: Sequence[GlobPattern | str]) -> bool:
    """True if any of the patterns matches the path."""
    for pattern in patterns:
        if isinstance(pattern, str):
            pattern = GlobPattern(pattern)
        if pattern.matches(path):
            return True
    return False


def file_extension(path: str) -> str:
    """Text after the last dot of the path, or "" for dotfiles and extensionless names."""
    index = path.rfind(".")
    if index <= 0:
        return ""
    return path[index + 1 :]


def is_binary(path: str) -> bool:
    return file_extension(normalize_path(path)) in BINARY_EXTENSIONS


@dataclass
class FileFilter:
    """Decides which changed files are eligible for review."""

    include: list[GlobPattern] = field(default_factory=list)
    exclude: list[GlobPattern] = field(default_factory=list)
    skip_binary: bool = True

    @classmethod
    def from_strings(
        cls,
        include: str | Iterable[str] | None = None,
        exclude: str | Iterable[str] | None = None,
        skip_binary: bool = True,
    ) -> FileFilter:
        return cls(
            include=parse_patterns(include),
            exclude=parse_patterns(exclude),
            skip_binary=skip_binary,
        )

    def is_eligible(self, path: str) -> bool:
        if self.skip_binary and is_binary(path):
            return False
        if self.include and not matches_any(path, self.include):
            return False
        if self.exclude and matches_any(path, self.exclude):
            return False
        return True

    def apply(self, paths: Iterable[str]) -> list[str]:
        """Filter paths, keeping their original order."""
        files = list(paths)

        if self.skip_binary:
            files = [f for f in files if not is_binary(f)]

        if self.include:
            logger.info(f"Include patterns/extensions specified: {', '.join(p.raw for p in self.include)}")
            files = [f for f in files if matches_any(f, self.include)]
        else:
            logger.info("No file extensions specified. All files will be reviewed.")

        if self.exclude:
            logger.info(f"Exclude patterns specified: {', '.join(p.raw for p in self.exclude)}")
            files = [f for f in files if not matches_any(f, self.exclude)]

        return files
