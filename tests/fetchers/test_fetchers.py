from pathlib import Path

import pytest

from ajisai.config.models import GitImport, LocalImport
from ajisai.errors import FetchError
from ajisai.fetchers import GitFetcher, LocalFetcher, create_fetcher
from ajisai.fetchers.git import GitCommandError


class RecordingRunner:
    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[list[str]] = []
        self.fail_on = fail_on

    def __call__(self, args: list[str]) -> str:
        self.calls.append(args)
        if self.fail_on is not None and self.fail_on in args:
            raise GitCommandError(args, "fatal: reference is not a tree")
        return ""


def test_local_fetch_copies_tree(tmp_path: Path, write_file) -> None:
    write_file(tmp_path / "presets" / "rules" / "a.md", "a")
    destination = tmp_path / "cache" / "p1"

    LocalFetcher(base_dir=tmp_path).fetch(LocalImport(path="./presets"), destination)

    assert (destination / "rules" / "a.md").read_text(encoding="utf-8") == "a"


def test_local_fetch_replaces_stale_content(tmp_path: Path, write_file) -> None:
    write_file(tmp_path / "presets" / "rules" / "a.md", "a")
    destination = tmp_path / "cache" / "p1"
    write_file(destination / "rules" / "stale.md", "old")

    LocalFetcher(base_dir=tmp_path).fetch(LocalImport(path="presets"), destination)

    assert not (destination / "rules" / "stale.md").exists()
    assert (destination / "rules" / "a.md").is_file()


def test_local_fetch_missing_source(tmp_path: Path) -> None:
    with pytest.raises(FetchError) as excinfo:
        LocalFetcher(base_dir=tmp_path).fetch(LocalImport(path="missing"), tmp_path / "cache" / "p1")

    assert excinfo.value.package_name == "p1"


def test_local_fetch_rejects_cache_inside_source(tmp_path: Path) -> None:
    (tmp_path / "presets").mkdir()

    with pytest.raises(FetchError):
        LocalFetcher(base_dir=tmp_path).fetch(
            LocalImport(path="presets"), tmp_path / "presets" / ".cache" / "p1"
        )


def test_git_clone_when_destination_missing(tmp_path: Path) -> None:
    runner = RecordingRunner()
    destination = tmp_path / "cache" / "remote"

    GitFetcher(runner=runner).fetch(
        GitImport(repository="https://example.com/r.git", revision="v1"), destination
    )

    assert runner.calls == [
        ["clone", "https://example.com/r.git", str(destination)],
        ["-C", str(destination), "checkout", "v1"],
    ]
    assert destination.parent.is_dir()


def test_git_clone_without_revision(tmp_path: Path) -> None:
    runner = RecordingRunner()
    destination = tmp_path / "cache" / "remote"

    GitFetcher(runner=runner).fetch(GitImport(repository="https://example.com/r.git"), destination)

    assert runner.calls == [["clone", "https://example.com/r.git", str(destination)]]


def test_git_update_with_revision(tmp_path: Path) -> None:
    runner = RecordingRunner()
    destination = tmp_path / "cache" / "remote"
    destination.mkdir(parents=True)

    GitFetcher(runner=runner).fetch(
        GitImport(repository="https://example.com/r.git", revision="main"), destination
    )

    assert runner.calls == [
        ["-C", str(destination), "fetch", "origin"],
        ["-C", str(destination), "checkout", "main"],
    ]


def test_git_update_without_revision_pulls(tmp_path: Path) -> None:
    runner = RecordingRunner()
    destination = tmp_path / "cache" / "remote"
    destination.mkdir(parents=True)

    GitFetcher(runner=runner).fetch(GitImport(repository="https://example.com/r.git"), destination)

    assert runner.calls == [["-C", str(destination), "pull", "origin"]]


def test_git_failure_becomes_fetch_error(tmp_path: Path) -> None:
    runner = RecordingRunner(fail_on="checkout")

    with pytest.raises(FetchError) as excinfo:
        GitFetcher(runner=runner).fetch(
            GitImport(repository="https://example.com/r.git", revision="nope"),
            tmp_path / "cache" / "remote",
        )

    assert excinfo.value.package_name == "remote"
    assert "reference is not a tree" in str(excinfo.value)


def test_create_fetcher_by_source_type(tmp_path: Path) -> None:
    assert isinstance(create_fetcher(LocalImport(path="x"), base_dir=tmp_path), LocalFetcher)
    assert isinstance(create_fetcher(GitImport(repository="r")), GitFetcher)
