"""Project canonical presets into an agent's namespaced directory layout."""

from __future__ import annotations

import logging
from abc import ABC
from pathlib import Path, PurePosixPath
from typing import Callable, Optional

from ajisai.agent_id import AgentId, agent_label
from ajisai.bridges.base import IAgentBridge, create_bridge
from ajisai.concurrency import fan_out
from ajisai.constants import GITIGNORE_CONTENT, GITIGNORE_FILENAME
from ajisai.domain.models import AgentPresetPackage, PromptItem, RuleItem
from ajisai.errors import AjisaiError, IntegrationWriteError
from ajisai.utils import atomic_write_file, ensure_dir, remove_dir

logger = logging.getLogger(__name__)


class IAgentAdapter(ABC):
    """Layout and serialization of one agent, backed by its bridge."""

    AGENT_ID: AgentId
    RULES_DIR: str
    PROMPTS_DIR: str
    RULE_EXTENSION: str
    PROMPT_EXTENSION: str

    def __init__(self) -> None:
        self._bridge = create_bridge(self.AGENT_ID)

    @property
    def bridge(self) -> IAgentBridge:
        return self._bridge

    def serialize_rule(self, rule: RuleItem) -> str:
        return self.bridge.serialize_agent_rule(self.bridge.to_agent_rule(rule))

    def serialize_prompt(self, prompt: PromptItem) -> str:
        return self.bridge.serialize_agent_prompt(self.bridge.to_agent_prompt(prompt))


class AgentIntegration:
    def __init__(
        self,
        adapter: IAgentAdapter,
        root: Optional[Path] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self._adapter = adapter
        self._root = root or Path.cwd()
        self._max_workers = max_workers

    @property
    def agent_id(self) -> AgentId:
        return self._adapter.AGENT_ID

    @property
    def label(self) -> str:
        return agent_label(self.agent_id)

    @property
    def rules_root(self) -> Path:
        return self._root.joinpath(*PurePosixPath(self._adapter.RULES_DIR).parts)

    @property
    def prompts_root(self) -> Path:
        return self._root.joinpath(*PurePosixPath(self._adapter.PROMPTS_DIR).parts)

    def rule_path(self, namespace: str, rule: RuleItem) -> Path:
        relative = rule.uri.internal_path(self._adapter.RULE_EXTENSION)
        return self.rules_root / namespace / PurePosixPath(relative)

    def prompt_path(self, namespace: str, prompt: PromptItem) -> Path:
        relative = prompt.uri.internal_path(self._adapter.PROMPT_EXTENSION)
        return self.prompts_root / namespace / PurePosixPath(relative)

    def write_package(self, namespace: str, package: AgentPresetPackage) -> list[Path]:
        """Write every item of ``package`` and return the written paths.

        A failed write does not stop the others; the first failure is raised
        once every write has settled.
        """
        tasks: list[Callable[[], Path]] = []
        for preset in package.presets:
            for rule in preset.rules:
                tasks.append(self._rule_task(namespace, rule))
            for prompt in preset.prompts:
                tasks.append(self._prompt_task(namespace, prompt))

        if not tasks:
            logger.debug("%s: package %s is empty, nothing written", self.label, package.package_name)
            return []

        tasks.append(lambda: self._write_ignore_file(self.rules_root / namespace))
        tasks.append(lambda: self._write_ignore_file(self.prompts_root / namespace))

        outcomes = fan_out([_settled(task) for task in tasks], max_workers=self._max_workers)
        written = sorted(path for path, _ in outcomes if path is not None)
        failures = [error for _, error in outcomes if error is not None]
        if failures:
            raise IntegrationWriteError(self.label, namespace, failures[0], written) from failures[0]

        logger.info("%s: wrote %d file(s) for package %s", self.label, len(written), package.package_name)
        return written

    def clean(self, namespace: str) -> None:
        fan_out(
            [
                lambda: remove_dir(self.rules_root / namespace),
                lambda: remove_dir(self.prompts_root / namespace),
            ],
            max_workers=2,
        )

    def _rule_task(self, namespace: str, rule: RuleItem) -> Callable[[], Path]:
        def run() -> Path:
            path = self.rule_path(namespace, rule)
            self._write(path, self._adapter.serialize_rule(rule))
            logger.debug("%s: wrote %s to %s", self.label, rule.uri, path)
            return path

        return run

    def _prompt_task(self, namespace: str, prompt: PromptItem) -> Callable[[], Path]:
        def run() -> Path:
            path = self.prompt_path(namespace, prompt)
            self._write(path, self._adapter.serialize_prompt(prompt))
            logger.debug("%s: wrote %s to %s", self.label, prompt.uri, path)
            return path

        return run

    def _write_ignore_file(self, namespace_dir: Path) -> Path:
        path = namespace_dir / GITIGNORE_FILENAME
        self._write(path, GITIGNORE_CONTENT)
        return path

    @staticmethod
    def _write(path: Path, content: str) -> None:
        ensure_dir(path.parent)
        atomic_write_file(path, content)


def _settled(task: Callable[[], Path]) -> Callable[[], tuple[Optional[Path], Optional[Exception]]]:
    """Wrap ``task`` so it reports its failure instead of raising it."""

    def run() -> tuple[Optional[Path], Optional[Exception]]:
        try:
            return task(), None
        except (OSError, AjisaiError) as exc:
            return None, exc

    return run
