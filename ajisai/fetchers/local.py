from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from ajisai.config.models import LocalImport
from ajisai.errors import FetchError
from ajisai.fetchers.base import ContentFetcher
from ajisai.utils import ensure_dir, is_dir_exists, remove_dir, resolve_abs_path

logger = logging.getLogger(__name__)


class LocalFetcher(ContentFetcher[LocalImport]):
    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path.cwd()

    def fetch(self, source: LocalImport, destination_dir: Path) -> None:
        package_name = destination_dir.name
        source_dir = resolve_abs_path(source.path, base=self._base_dir)
        if not is_dir_exists(source_dir):
            raise FetchError(package_name, f"source directory does not exist: {source_dir}")
        if source_dir == destination_dir or destination_dir.is_relative_to(source_dir):
            raise FetchError(package_name, f"cache directory is inside the source: {destination_dir}")

        remove_dir(destination_dir)
        ensure_dir(destination_dir.parent)
        try:
            shutil.copytree(source_dir, destination_dir)
        except (OSError, shutil.Error) as exc:
            raise FetchError(package_name, str(exc)) from exc
        logger.info("copied %s from %s", package_name, source_dir)
