from pathlib import Path
from typing import Optional

from ajisai.config.models import GitImport, ImportSource, LocalImport
from ajisai.fetchers.base import ContentFetcher
from ajisai.fetchers.git import GitFetcher, GitRunner, run_git
from ajisai.fetchers.local import LocalFetcher


def create_fetcher(
    source: ImportSource,
    base_dir: Optional[Path] = None,
    git_runner: Optional[GitRunner] = None,
) -> ContentFetcher:
    if isinstance(source, LocalImport):
        return LocalFetcher(base_dir=base_dir)
    if isinstance(source, GitImport):
        return GitFetcher(runner=git_runner)
    raise ValueError(f"Unsupported import source: {source!r}")


__all__ = [
    "ContentFetcher",
    "GitFetcher",
    "GitRunner",
    "LocalFetcher",
    "create_fetcher",
    "run_git",
]
