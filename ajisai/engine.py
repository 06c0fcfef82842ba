"""Workspace orchestration: fetch imports, load presets, export to agents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence, TypeVar

from ajisai.agent_id import AgentId, agent_label
from ajisai.concurrency import fan_out
from ajisai.config.models import Config
from ajisai.domain.models import AgentPresetPackage
from ajisai.errors import AjisaiError, IntegrationWriteError
from ajisai.fetchers import GitRunner, create_fetcher
from ajisai.integrations import AgentIntegration, create_integration
from ajisai.loader import AgentPresetPackageLoader, PackageLoadResult
from ajisai.utils import compact_home_paths_in_text, ensure_dir, remove_dir

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ExportOutcome:
    agent_id: AgentId
    package_name: str
    written: tuple[Path, ...] = ()
    error: Optional[str] = None


@dataclass(frozen=True)
class ApplyResult:
    written: int
    failed: int
    failures: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    outcomes: tuple[ExportOutcome, ...] = ()


@dataclass(frozen=True)
class _Settled:
    name: str
    value: object = None
    error: Optional[Exception] = None


def _settle(named_tasks: Sequence[tuple[str, Callable[[], T]]]) -> list[_Settled]:
    def guarded(name: str, task: Callable[[], T]) -> Callable[[], _Settled]:
        def run() -> _Settled:
            try:
                return _Settled(name=name, value=task())
            except (AjisaiError, OSError) as exc:
                return _Settled(name=name, error=exc)

        return run

    return fan_out([guarded(name, task) for name, task in named_tasks])


class Engine:
    def __init__(
        self,
        config: Config,
        root: Optional[Path] = None,
        git_runner: Optional[GitRunner] = None,
        loader: Optional[AgentPresetPackageLoader] = None,
    ) -> None:
        self._config = config
        self._root = root or Path.cwd()
        self._git_runner = git_runner
        self._loader = loader or AgentPresetPackageLoader(config)

    @property
    def config(self) -> Config:
        return self._config

    def integrations(self) -> list[AgentIntegration]:
        return [
            create_integration(agent_id, root=self._root)
            for agent_id in self._config.enabled_integrations()
        ]

    def fetch_package(self, package_name: str) -> Path:
        imported = self._config.imported_package(package_name)
        destination = self._config.package_cache_root(package_name)
        fetcher = create_fetcher(
            imported.source, base_dir=self._config.base_dir, git_runner=self._git_runner
        )
        fetcher.fetch(imported.source, destination)
        return destination

    def fetch(self) -> list[Path]:
        names = list(self._config.workspace.imports)
        return fan_out([self._bind_fetch(name) for name in names])

    def load(self, names: Sequence[str]) -> list[AgentPresetPackage]:
        return [self._loader.load_package(name).package for name in names]

    def clean_outputs(self) -> None:
        namespace = self._config.namespace
        fan_out([self._bind_clean(integration, namespace) for integration in self.integrations()])

    def export(self, packages: Sequence[AgentPresetPackage]) -> list[ExportOutcome]:
        namespace = self._config.namespace
        pairs = [
            (integration, package)
            for integration in self.integrations()
            for package in packages
        ]
        return [self._export_pair(integration, namespace, package) for integration, package in pairs]

    def apply(self) -> ApplyResult:
        """Clean outputs, fetch and load every import, then export it.

        A package that fails to fetch or load is reported and left out of the
        export; the remaining packages are still written.
        """
        self.clean_outputs()

        failures: list[str] = []
        skipped: list[str] = []
        packages: list[AgentPresetPackage] = []
        names = list(self._config.workspace.imports)

        settled = _settle([(name, self._bind_fetch_and_load(name)) for name in names])
        for item in settled:
            if item.error is not None:
                logger.error("package %s failed: %s", item.name, item.error)
                failures.append(f"{item.name}: {item.error}")
                continue
            result = item.value
            packages.append(result.package)
            skipped.extend(str(warning) for warning in result.skipped)

        outcomes = self.export(packages)
        failures.extend(
            f"{agent_label(outcome.agent_id)} / {outcome.package_name}: {outcome.error}"
            for outcome in outcomes
            if outcome.error is not None
        )
        written = sum(len(outcome.written) for outcome in outcomes)
        return ApplyResult(
            written=written,
            failed=len(failures),
            failures=[compact_home_paths_in_text(item) for item in failures],
            skipped=skipped,
            outcomes=tuple(outcomes),
        )

    def clean_cache(self, force: bool = False) -> list[Path]:
        """Remove cache entries and return the removed paths.

        With ``force`` the whole cache directory is recreated empty; otherwise
        only entries for packages that are no longer imported are removed.
        """
        cache_dir = self._config.cache_dir
        if force:
            remove_dir(cache_dir)
            ensure_dir(cache_dir)
            logger.info("cache %s recreated", cache_dir)
            return [cache_dir]

        if not cache_dir.is_dir():
            return []
        imported = set(self._config.workspace.imports)
        removed: list[Path] = []
        for entry in sorted(cache_dir.iterdir()):
            if entry.name in imported:
                continue
            if entry.is_dir() and not entry.is_symlink():
                remove_dir(entry)
            else:
                entry.unlink()
            logger.info("removed stale cache entry %s", entry)
            removed.append(entry)
        return removed

    def _bind_fetch(self, package_name: str) -> Callable[[], Path]:
        return lambda: self.fetch_package(package_name)

    def _bind_fetch_and_load(self, package_name: str) -> Callable[[], PackageLoadResult]:
        def run() -> PackageLoadResult:
            self.fetch_package(package_name)
            return self._loader.load_package(package_name)

        return run

    @staticmethod
    def _bind_clean(integration: AgentIntegration, namespace: str) -> Callable[[], None]:
        return lambda: integration.clean(namespace)

    @staticmethod
    def _export_pair(
        integration: AgentIntegration, namespace: str, package: AgentPresetPackage
    ) -> ExportOutcome:
        try:
            written = integration.write_package(namespace, package)
        except IntegrationWriteError as exc:
            logger.error("%s", exc)
            return ExportOutcome(
                agent_id=integration.agent_id,
                package_name=package.package_name,
                written=tuple(exc.written),
                error=str(exc.cause),
            )
        return ExportOutcome(
            agent_id=integration.agent_id,
            package_name=package.package_name,
            written=tuple(written),
        )
