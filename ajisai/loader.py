"""Build canonical preset packages from a fetched package directory."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

from ajisai.concurrency import fan_out
from ajisai.config.manifest_repository import ManifestRepository
from ajisai.config.models import Config
from ajisai.constants import PROMPT_INTERNAL_EXTENSION, RULE_INTERNAL_EXTENSION
from ajisai.domain.manifest import PackageManifest
from ajisai.domain.models import (
    AgentPreset,
    AgentPresetPackage,
    AttachType,
    PromptItem,
    PromptMetadata,
    RuleItem,
    RuleMetadata,
)
from ajisai.domain.uri import URI, PresetType, path_from_base_dir
from ajisai.errors import (
    AjisaiError,
    FrontmatterError,
    InvalidGlobError,
    NotExportedError,
    PresetBuildError,
)
from ajisai.globbing import glob_files, split_pattern
from ajisai.markdown import parse_frontmatter

logger = logging.getLogger(__name__)

PresetItem = Union[RuleItem, PromptItem]


@dataclass(frozen=True)
class PackageLoadResult:
    package: AgentPresetPackage
    skipped: tuple[NotExportedError, ...] = ()


@dataclass(frozen=True)
class _GlobTask:
    preset_name: str
    preset_type: PresetType
    pattern: str


class AgentPresetPackageLoader:
    def __init__(
        self,
        config: Config,
        manifest_repository: Optional[ManifestRepository] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self._config = config
        self._manifests = manifest_repository or ManifestRepository()
        self._max_workers = max_workers

    def resolve_package_manifest(self, package_name: str) -> PackageManifest:
        return self._manifests.load_manifest(
            package_name, self._config.package_root(package_name)
        )

    def load_package(self, package_name: str) -> PackageLoadResult:
        imported = self._config.imported_package(package_name)
        manifest = self.resolve_package_manifest(package_name)
        root = self._config.package_root(package_name)

        preset_names: list[str] = []
        skipped: list[NotExportedError] = []
        for preset_name in dict.fromkeys(imported.include):
            if preset_name not in manifest.exports:
                warning = NotExportedError(package_name, preset_name)
                logger.warning("%s, skipping", warning)
                skipped.append(warning)
                continue
            preset_names.append(preset_name)

        glob_tasks: list[_GlobTask] = []
        for preset_name in preset_names:
            exports = manifest.exports[preset_name]
            glob_tasks.extend(
                _GlobTask(preset_name, PresetType.RULES, pattern) for pattern in exports.rules
            )
            glob_tasks.extend(
                _GlobTask(preset_name, PresetType.PROMPTS, pattern)
                for pattern in exports.prompts
            )

        results = fan_out(
            [self._bind(root, package_name, task) for task in glob_tasks],
            max_workers=self._max_workers,
        )

        rules: dict[str, dict[str, RuleItem]] = {name: {} for name in preset_names}
        prompts: dict[str, dict[str, PromptItem]] = {name: {} for name in preset_names}
        for task, items in zip(glob_tasks, results):
            for item in items:
                if isinstance(item, RuleItem):
                    rules[task.preset_name].setdefault(item.uri.path, item)
                else:
                    prompts[task.preset_name].setdefault(item.uri.path, item)

        presets = tuple(
            AgentPreset(
                name=name,
                rules=tuple(rules[name].values()),
                prompts=tuple(prompts[name].values()),
            )
            for name in preset_names
        )
        logger.debug(
            "loaded package %s: %d preset(s), %d skipped",
            package_name,
            len(presets),
            len(skipped),
        )
        return PackageLoadResult(
            package=AgentPresetPackage(package_name=package_name, presets=presets),
            skipped=tuple(skipped),
        )

    def _bind(self, root: Path, package_name: str, task: _GlobTask) -> Callable[[], list[PresetItem]]:
        def run() -> list[PresetItem]:
            try:
                return self.load_items(root, package_name, task.preset_name, task.preset_type, task.pattern)
            except (AjisaiError, OSError, UnicodeDecodeError) as exc:
                raise PresetBuildError(package_name, task.preset_name, task.pattern, exc) from exc

        return run

    def load_items(
        self,
        root: Path,
        package_name: str,
        preset_name: str,
        preset_type: PresetType,
        pattern: str,
    ) -> list[PresetItem]:
        extension = (
            RULE_INTERNAL_EXTENSION if preset_type == PresetType.RULES else PROMPT_INTERNAL_EXTENSION
        )
        base, glob = split_pattern(pattern)
        if Path(base).is_absolute():
            raise InvalidGlobError(pattern, "must be relative to the package root")
        package_dir = Path(os.path.normpath(root))
        base_dir = Path(os.path.normpath(package_dir / base))
        if base_dir != package_dir and package_dir not in base_dir.parents:
            raise InvalidGlobError(pattern, "leaves the package root")

        items: list[PresetItem] = []
        for path in glob_files(base_dir, glob):
            if not path.name.endswith(extension):
                continue
            uri = URI(
                package=package_name,
                preset=preset_name,
                type=preset_type,
                path=path_from_base_dir(base_dir, path),
            )
            raw, body = parse_frontmatter(path.read_text(encoding="utf-8"), path=path)
            if preset_type == PresetType.RULES:
                items.append(RuleItem(uri=uri, content=body, metadata=parse_rule_metadata(raw, path)))
            else:
                items.append(PromptItem(uri=uri, content=body, metadata=parse_prompt_metadata(raw)))
            logger.debug("loaded %s from %s", uri, path)
        return items


def parse_rule_metadata(raw: dict[str, Any], path: Optional[Path] = None) -> RuleMetadata:
    globs = raw.get("globs")
    if globs is None:
        globs = []
    elif isinstance(globs, str):
        globs = [globs]
    elif not isinstance(globs, list):
        raise FrontmatterError("globs must be a list of strings", path)

    return RuleMetadata(
        description=str(raw.get("description") or ""),
        attach=str(raw.get("attach") or AttachType.MANUAL.value),
        globs=tuple(str(glob) for glob in globs),
    )


def parse_prompt_metadata(raw: dict[str, Any]) -> PromptMetadata:
    return PromptMetadata(description=str(raw.get("description") or ""))
