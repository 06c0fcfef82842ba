"""Canonical, extension-free address of a preset item."""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

from ajisai.constants import URI_SCHEME
from ajisai.errors import InvalidBaseError, InvalidTargetError, OutsideBaseError


class PresetType(str, Enum):
    RULES = "rules"
    PROMPTS = "prompts"


@dataclass(frozen=True)
class URI:
    """Logical location of a rule or prompt, e.g. ``ajisai://pkg/default/rules/go-style/project``.

    ``path`` is slash-separated and never carries a file extension.
    """

    package: str
    preset: str
    type: PresetType
    path: str
    scheme: str = URI_SCHEME

    def __str__(self) -> str:
        return f"{self.scheme}://{self.package}/{self.preset}/{self.type.value}/{self.path}"

    def internal_path(self, extension: str) -> str:
        """Relative output path under an agent root, e.g. ``pkg/default/go-style/project.mdc``."""
        return posixpath.join(self.package, self.preset, self.path + extension)


def path_from_base_dir(base_abs_dir: str | os.PathLike[str], target_abs_path: str | os.PathLike[str]) -> str:
    base = os.path.normpath(os.fspath(base_abs_dir))
    target = os.path.normpath(os.fspath(target_abs_path))

    if not os.path.isabs(base) or PurePath(base).suffix:
        raise InvalidBaseError(os.fspath(base_abs_dir))
    if not os.path.isabs(target) or not PurePath(target).suffix:
        raise InvalidTargetError(os.fspath(target_abs_path))

    try:
        relative = os.path.relpath(target, base)
    except ValueError as exc:
        raise OutsideBaseError(os.fspath(base_abs_dir), os.fspath(target_abs_path)) from exc
    slashed = PurePath(relative).as_posix()
    if slashed == ".." or slashed.startswith("../"):
        raise OutsideBaseError(os.fspath(base_abs_dir), os.fspath(target_abs_path))

    stem, _ = posixpath.splitext(slashed)
    return stem
