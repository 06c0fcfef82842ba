from pathlib import Path

import pytest

from ajisai.errors import InvalidGlobError
from ajisai.globbing import compile_pattern, glob_files, match_pattern, split_pattern


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("rules/**/*.md", ("rules", "**/*.md")),
        ("rules/go/*.md", ("rules/go", "*.md")),
        ("*.md", (".", "*.md")),
        ("a/b/c.md", ("a/b", "c.md")),
        ("docs/{a,b}/x.md", ("docs", "{a,b}/x.md")),
    ],
)
def test_split_pattern(pattern: str, expected: tuple[str, str]) -> None:
    assert split_pattern(pattern) == expected


@pytest.mark.parametrize(
    ("pattern", "path", "matched"),
    [
        ("**/*.md", "a.md", True),
        ("**/*.md", "x/y/a.md", True),
        ("**/*.md", "x/a.txt", False),
        ("*.md", "x/a.md", False),
        ("rules/**", "rules/x/y.md", True),
        ("a/**/b.md", "a/b.md", True),
        ("a/**/b.md", "a/x/y/b.md", True),
        ("?.md", "a.md", True),
        ("?.md", "ab.md", False),
        ("[!a].md", "b.md", True),
        ("[!a].md", "a.md", False),
        ("[a-c].md", "b.md", True),
        ("{go,ts}/*.md", "ts/x.md", True),
        ("{go,ts}/*.md", "py/x.md", False),
        ("\\*.md", "*.md", True),
        ("\\*.md", "a.md", False),
    ],
)
def test_match_pattern(pattern: str, path: str, matched: bool) -> None:
    assert match_pattern(pattern, path) is matched


@pytest.mark.parametrize("pattern", ["", "[abc", "{a,b", "a\\"])
def test_compile_pattern_rejects_malformed(pattern: str) -> None:
    with pytest.raises(InvalidGlobError):
        compile_pattern(pattern)


def test_glob_files_returns_sorted_matches(tmp_path: Path, write_file) -> None:
    write_file(tmp_path / "b.md", "b")
    write_file(tmp_path / "a.md", "a")
    write_file(tmp_path / "nested" / "c.md", "c")
    write_file(tmp_path / "nested" / "skip.txt", "x")

    matches = glob_files(tmp_path, "**/*.md")

    assert matches == [tmp_path / "a.md", tmp_path / "b.md", tmp_path / "nested" / "c.md"]


def test_glob_files_missing_base_is_empty(tmp_path: Path) -> None:
    assert glob_files(tmp_path / "missing", "**/*.md") == []
