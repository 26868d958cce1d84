"""Tests for include/exclude pattern matching."""

import pytest

from src.patterns import (
    FileFilter,
    GlobPattern,
    PatternKind,
    file_extension,
    glob_to_regex,
    is_binary,
    matches_any,
    parse_patterns,
)


class TestGlobToRegex:
    """Tests for glob compilation."""

    def test_single_star_stays_in_segment(self):
        regex = glob_to_regex("src/*.ts")
        assert regex.fullmatch("src/app.ts")
        assert not regex.fullmatch("src/nested/app.ts")

    def test_double_star_slash_matches_zero_or_more_segments(self):
        regex = glob_to_regex("**/*.md")
        assert regex.fullmatch("README.md")
        assert regex.fullmatch("docs/a/b.md")
        assert regex.fullmatch("a/b/c/README.md")

    def test_double_star_slash_mid_pattern_zero_depth(self):
        regex = glob_to_regex("src/**/x.ts")
        assert regex.fullmatch("src/x.ts")
        assert regex.fullmatch("src/a/b/x.ts")
        assert not regex.fullmatch("srcx.ts")
        assert not regex.fullmatch("lib/src/x.ts")

    def test_double_star_without_slash_crosses_segments(self):
        regex = glob_to_regex("docs/**")
        assert regex.fullmatch("docs/a/b/c.md")
        assert regex.fullmatch("docs/")

    def test_question_mark(self):
        regex = glob_to_regex("?.txt")
        assert regex.fullmatch("a.txt")
        assert not regex.fullmatch("ab.txt")
        assert not regex.fullmatch("/.txt")

    def test_special_characters_are_literal(self):
        regex = glob_to_regex("file(1)+[x].ts")
        assert regex.fullmatch("file(1)+[x].ts")
        assert not regex.fullmatch("file1x.ts")

    def test_dot_is_literal(self):
        assert not glob_to_regex("*.ts").fullmatch("appxts")

    def test_anchored(self):
        regex = glob_to_regex("app.ts")
        assert not regex.fullmatch("myapp.ts")
        assert not regex.fullmatch("app.tsx")


class TestPatternKind:
    """Tests for pattern kind inference."""

    @pytest.mark.parametrize(
        "pattern,kind",
        [
            ("*.ts", PatternKind.GLOB),
            ("src/app.ts", PatternKind.GLOB),
            ("?.txt", PatternKind.GLOB),
            (".png", PatternKind.EXTENSION),
            (".gitignore", PatternKind.EXTENSION),
            ("secret.txt", PatternKind.NAME),
            ("Makefile", PatternKind.NAME),
        ],
    )
    def test_kind(self, pattern, kind):
        assert GlobPattern(pattern).kind is kind

    def test_backslashes_normalized(self):
        pattern = GlobPattern("src\\*.ts")
        assert pattern.pattern == "src/*.ts"
        assert pattern.kind is PatternKind.GLOB


class TestGlobPattern:
    """Tests for matching a single pattern."""

    def test_star_extension_matches_nested_via_basename(self):
        pattern = GlobPattern("*.ts")
        assert pattern.matches("src/app.ts")
        assert not pattern.matches("src/app.ts.map")

    def test_extension_token(self):
        pattern = GlobPattern(".png")
        assert pattern.matches("img/photo.png")
        assert not pattern.matches("img/photo.PNG")
        assert not pattern.matches("photopng")

    def test_bare_name_falls_back_to_basename(self):
        pattern = GlobPattern("secret.txt")
        assert pattern.matches("secret.txt")
        assert pattern.matches("config/secret.txt")
        assert not pattern.matches("config/secret.txt.bak")

    def test_slash_pattern_has_no_basename_fallback(self):
        pattern = GlobPattern("config/secret.txt")
        assert pattern.matches("config/secret.txt")
        assert not pattern.matches("app/config/secret.txt")

    def test_windows_paths(self):
        assert GlobPattern("src/**/*.cs").matches("src\\Services\\Api.cs")
        assert GlobPattern("*.cs").matches("src\\Api.cs")

    def test_case_sensitive(self):
        assert not GlobPattern("*.ts").matches("src/App.TS")

    def test_question_mark_pattern(self):
        pattern = GlobPattern("?.txt")
        assert pattern.matches("a.txt")
        assert pattern.matches("docs/a.txt")
        assert not pattern.matches("ab.txt")


class TestParsePatterns:
    """Tests for pattern list parsing."""

    def test_comma_separated(self):
        patterns = parse_patterns(" *.ts, .py ,, docs/** ")
        assert [p.raw for p in patterns] == ["*.ts", ".py", "docs/**"]

    def test_list(self):
        patterns = parse_patterns(["*.ts", "  ", ".py"])
        assert [p.raw for p in patterns] == ["*.ts", ".py"]

    def test_none_and_empty(self):
        assert parse_patterns(None) == []
        assert parse_patterns("") == []


class TestMatchesAny:
    """Tests for matching against several patterns."""

    def test_any_pattern(self):
        patterns = parse_patterns("*.py,.ts")
        assert matches_any("src/app.ts", patterns)
        assert matches_any("main.py", patterns)
        assert not matches_any("README.md", patterns)

    def test_accepts_strings(self):
        assert matches_any("docs/a/b.md", ["**/*.md"])

    def test_no_patterns(self):
        assert not matches_any("anything.ts", [])


class TestBinary:
    """Tests for binary file detection."""

    def test_extension(self):
        assert file_extension("img/logo.png") == "png"
        assert file_extension("Makefile") == ""
        assert file_extension(".gitignore") == ""

    def test_is_binary(self):
        assert is_binary("assets/logo.png")
        assert is_binary("lib\\native.dll")
        assert not is_binary("src/app.ts")
        assert not is_binary("Makefile")


class TestFileFilter:
    """Tests for selecting files to review."""

    FILES = [
        "src/app.ts",
        "src/app.ts.map",
        "src/util.py",
        "docs/guide.md",
        "config/secret.txt",
        "assets/logo.png",
        "README.md",
    ]

    def test_no_patterns_keeps_non_binary(self):
        result = FileFilter().apply(self.FILES)
        assert "assets/logo.png" not in result
        assert len(result) == len(self.FILES) - 1

    def test_include(self):
        result = FileFilter.from_strings(include="*.ts,.py").apply(self.FILES)
        assert result == ["src/app.ts", "src/util.py"]

    def test_exclude(self):
        result = FileFilter.from_strings(exclude="secret.txt, docs/**").apply(self.FILES)
        assert "config/secret.txt" not in result
        assert "docs/guide.md" not in result
        assert "README.md" in result

    def test_include_then_exclude(self):
        file_filter = FileFilter.from_strings(include="**/*.md", exclude="docs/**")
        assert file_filter.apply(self.FILES) == ["README.md"]

    def test_order_preserved(self):
        files = ["b.ts", "a.ts", "c.ts"]
        assert FileFilter.from_strings(include=".ts").apply(files) == files

    def test_keep_binary(self):
        file_filter = FileFilter.from_strings(include=".png", skip_binary=False)
        assert file_filter.apply(self.FILES) == ["assets/logo.png"]

    def test_is_eligible(self):
        file_filter = FileFilter.from_strings(include="*.ts", exclude="src/legacy/**")
        assert file_filter.is_eligible("src/app.ts")
        assert not file_filter.is_eligible("src/legacy/old.ts")
        assert not file_filter.is_eligible("src/app.py")
