"""Workspace configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ajisai.agent_id import AgentId
from ajisai.constants import DEFAULT_CACHE_DIR, DEFAULT_NAMESPACE, DEFAULT_PRESET_NAME
from ajisai.domain.manifest import PackageManifest
from ajisai.errors import NotImportedError
from ajisai.utils import resolve_abs_path


class ImportType(str, Enum):
    LOCAL = "local"
    GIT = "git"


@dataclass(frozen=True)
class LocalImport:
    path: str

    @property
    def type(self) -> ImportType:
        return ImportType.LOCAL


@dataclass(frozen=True)
class GitImport:
    repository: str
    revision: str = ""
    directory: str = ""

    @property
    def type(self) -> ImportType:
        return ImportType.GIT


ImportSource = Union[LocalImport, GitImport]


@dataclass(frozen=True)
class ImportedPackage:
    source: ImportSource
    include: tuple[str, ...] = (DEFAULT_PRESET_NAME,)


@dataclass(frozen=True)
class Settings:
    cache_dir: str = DEFAULT_CACHE_DIR
    namespace: str = DEFAULT_NAMESPACE
    experimental: bool = False


@dataclass(frozen=True)
class Workspace:
    imports: dict[str, ImportedPackage] = field(default_factory=dict)
    integrations: dict[AgentId, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class Config:
    settings: Settings = field(default_factory=Settings)
    workspace: Workspace = field(default_factory=Workspace)
    package: Optional[PackageManifest] = None
    base_dir: Path = field(default_factory=Path.cwd)
    path: Optional[Path] = None

    @property
    def namespace(self) -> str:
        return self.settings.namespace

    @property
    def cache_dir(self) -> Path:
        return resolve_abs_path(self.settings.cache_dir, base=self.base_dir)

    def enabled_integrations(self) -> list[AgentId]:
        return [
            agent_id
            for agent_id in AgentId
            if self.workspace.integrations.get(agent_id, False)
        ]

    def imported_package(self, package_name: str) -> ImportedPackage:
        imported = self.workspace.imports.get(package_name)
        if imported is None:
            raise NotImportedError(package_name)
        return imported

    def package_cache_root(self, package_name: str) -> Path:
        """Directory the fetcher fills for ``package_name``."""
        self.imported_package(package_name)
        return self.cache_dir / package_name

    def package_root(self, package_name: str) -> Path:
        """Directory holding the package manifest and its preset files."""
        source = self.imported_package(package_name).source
        root = self.package_cache_root(package_name)
        if isinstance(source, GitImport) and source.directory:
            return resolve_abs_path(source.directory, base=root)
        return root
