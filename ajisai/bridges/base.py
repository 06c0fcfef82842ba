"""Bridge interface and registry.

A bridge converts canonical rule/prompt items into an agent's native shape
and back, and renders/parses that shape as file text.
"""

from __future__ import annotations

import importlib
from abc import ABCMeta, abstractmethod
from enum import Enum
from typing import Any, ClassVar, cast

from ajisai.agent_id import AgentId, agent_label
from ajisai.domain.models import PromptItem, RuleItem
from ajisai.domain.uri import URI, PresetType
from ajisai.globbing import split_alternatives

_BRIDGE_MODULES = (
    "ajisai.bridges.cursor",
    "ajisai.bridges.github_copilot",
    "ajisai.bridges.windsurf",
)


class BridgeRegistryMeta(ABCMeta):
    _registry: dict[AgentId, type["IAgentBridge"]] = {}

    def __new__(
        mcls,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        **kwargs: Any,
    ):
        cls = super().__new__(mcls, name, bases, namespace, **kwargs)
        agent_id = getattr(cls, "AGENT_ID", None)
        is_abstract = bool(getattr(cls, "__abstractmethods__", False))
        if agent_id is not None and not is_abstract:
            mcls._registry[agent_id] = cast(type["IAgentBridge"], cls)
        return cls


class IAgentBridge(metaclass=BridgeRegistryMeta):
    AGENT_ID: ClassVar[AgentId | None] = None

    @property
    def agent_label(self) -> str:
        if self.AGENT_ID is None:
            return type(self).__name__
        return agent_label(self.AGENT_ID)

    @abstractmethod
    def to_agent_rule(self, rule: RuleItem) -> Any:
        raise NotImplementedError

    @abstractmethod
    def from_agent_rule(self, rule: Any) -> RuleItem:
        raise NotImplementedError

    @abstractmethod
    def serialize_agent_rule(self, rule: Any) -> str:
        raise NotImplementedError

    @abstractmethod
    def deserialize_agent_rule(self, slug: str, text: str) -> Any:
        raise NotImplementedError

    @abstractmethod
    def to_agent_prompt(self, prompt: PromptItem) -> Any:
        raise NotImplementedError

    @abstractmethod
    def from_agent_prompt(self, prompt: Any) -> PromptItem:
        raise NotImplementedError

    @abstractmethod
    def serialize_agent_prompt(self, prompt: Any) -> str:
        raise NotImplementedError

    @abstractmethod
    def deserialize_agent_prompt(self, slug: str, text: str) -> Any:
        raise NotImplementedError


def list_registered_bridges() -> list[AgentId]:
    _load_bridge_modules()
    return sorted(BridgeRegistryMeta._registry.keys(), key=lambda item: item.value)


def create_bridge(agent_id: AgentId) -> IAgentBridge:
    _load_bridge_modules()
    bridge_class = BridgeRegistryMeta._registry.get(agent_id)
    if bridge_class is None:
        raise KeyError(f"No bridge registered for: {agent_id.value}")
    return bridge_class()


def detached_uri(preset_type: PresetType, slug: str) -> URI:
    """URI for items rebuilt from agent files, which carry no package context."""
    return URI(package="", preset="", type=preset_type, path=slug)


def enum_value(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value


def split_globs(value: str) -> tuple[str, ...]:
    """Split a comma-joined glob list, keeping commas inside `{a,b}` groups."""
    return tuple(part.strip() for part in split_alternatives(value) if part.strip())


def join_globs(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def normalize_body(content: str) -> str:
    """Collapse trailing newlines to exactly one; empty stays empty."""
    body = content.rstrip("\n")
    return f"{body}\n" if body else ""


def _load_bridge_modules() -> None:
    for module_name in _BRIDGE_MODULES:
        importlib.import_module(module_name)
