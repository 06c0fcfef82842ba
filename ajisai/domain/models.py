"""Preset data models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Union

from ajisai.domain.uri import URI
from ajisai.markdown import extract_h1_heading


class AttachType(str, Enum):
    ALWAYS = "always"
    GLOB = "glob"
    AGENT_REQUESTED = "agent-requested"
    MANUAL = "manual"

    @classmethod
    def coerce(cls, value: Union["AttachType", str]) -> Union["AttachType", str]:
        """Return the enum member for known values and the raw string otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


def ordered_unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class RuleMetadata:
    description: str = ""
    attach: Union[AttachType, str] = AttachType.MANUAL
    globs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attach", AttachType.coerce(self.attach))
        object.__setattr__(self, "globs", ordered_unique(self.globs))


@dataclass(frozen=True)
class PromptMetadata:
    description: str = ""


@dataclass(frozen=True)
class RuleItem:
    uri: URI
    content: str
    metadata: RuleMetadata = field(default_factory=RuleMetadata)

    def __post_init__(self) -> None:
        if not self.metadata.description:
            derived = extract_h1_heading(self.content)
            if derived:
                object.__setattr__(
                    self, "metadata", replace(self.metadata, description=derived)
                )


@dataclass(frozen=True)
class PromptItem:
    uri: URI
    content: str
    metadata: PromptMetadata = field(default_factory=PromptMetadata)

    def __post_init__(self) -> None:
        if not self.metadata.description:
            derived = extract_h1_heading(self.content)
            if derived:
                object.__setattr__(
                    self, "metadata", replace(self.metadata, description=derived)
                )


@dataclass(frozen=True)
class AgentPreset:
    name: str
    rules: tuple[RuleItem, ...] = ()
    prompts: tuple[PromptItem, ...] = ()

    def is_empty(self) -> bool:
        return not self.rules and not self.prompts


@dataclass(frozen=True)
class AgentPresetPackage:
    package_name: str
    presets: tuple[AgentPreset, ...] = ()

    def is_empty(self) -> bool:
        return all(preset.is_empty() for preset in self.presets)
