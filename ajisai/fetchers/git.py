from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Optional

from ajisai.config.models import GitImport
from ajisai.errors import FetchError
from ajisai.fetchers.base import ContentFetcher
from ajisai.utils import ensure_dir

logger = logging.getLogger(__name__)

GitRunner = Callable[[list[str]], str]


class GitCommandError(Exception):
    def __init__(self, args: list[str], output: str) -> None:
        self.args_list = args
        self.output = output
        super().__init__(f"git {' '.join(args)} failed: {output}")


def run_git(args: list[str]) -> str:
    executable = shutil.which("git")
    if executable is None:
        raise GitCommandError(args, "git executable not found on PATH")
    try:
        result = subprocess.run(
            [executable, *args],
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        output = "\n".join(part for part in (exc.stdout, exc.stderr) if part).strip()
        raise GitCommandError(args, output) from exc
    return result.stdout.strip()


class GitFetcher(ContentFetcher[GitImport]):
    def __init__(self, runner: Optional[GitRunner] = None) -> None:
        self._run = runner or run_git

    def fetch(self, source: GitImport, destination_dir: Path) -> None:
        package_name = destination_dir.name
        try:
            if destination_dir.exists():
                self._update(source, destination_dir)
            else:
                self._clone(source, destination_dir)
        except GitCommandError as exc:
            raise FetchError(package_name, str(exc)) from exc

    def _clone(self, source: GitImport, destination_dir: Path) -> None:
        ensure_dir(destination_dir.parent)
        logger.info("cloning %s into %s", source.repository, destination_dir)
        self._run(["clone", source.repository, str(destination_dir)])
        if source.revision:
            self._run(["-C", str(destination_dir), "checkout", source.revision])

    def _update(self, source: GitImport, destination_dir: Path) -> None:
        destination = str(destination_dir)
        if source.revision:
            logger.info("fetching %s at %s", source.repository, source.revision)
            self._run(["-C", destination, "fetch", "origin"])
            self._run(["-C", destination, "checkout", source.revision])
            return
        logger.info("pulling %s", source.repository)
        self._run(["-C", destination, "pull", "origin"])
