"""GitHub Copilot bridge: ``.instructions.md`` and ``.prompt.md`` files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

import yaml

from ajisai.agent_id import AgentId
from ajisai.bridges.base import (
    IAgentBridge,
    detached_uri,
    enum_value,
    join_globs,
    normalize_body,
    split_globs,
)
from ajisai.domain.models import (
    AttachType,
    PromptItem,
    PromptMetadata,
    RuleItem,
    RuleMetadata,
)
from ajisai.domain.uri import PresetType
from ajisai.markdown import requote_frontmatter_value, split_frontmatter

logger = logging.getLogger(__name__)

APPLY_TO_ALL_PRIMARY: Final[str] = "**"
APPLY_TO_ALL_SECONDARY: Final[str] = "**/*"
APPLY_TO_ALL: Final[tuple[str, ...]] = (APPLY_TO_ALL_PRIMARY, APPLY_TO_ALL_SECONDARY)


class GitHubCopilotChatMode(str, Enum):
    AGENT = "agent"
    ASK = "ask"
    EDIT = "edit"


@dataclass(frozen=True)
class GitHubCopilotInstructionMetadata:
    apply_to: str = ""

    def to_frontmatter(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.apply_to:
            payload["applyTo"] = self.apply_to
        return payload


@dataclass(frozen=True)
class GitHubCopilotInstruction:
    slug: str
    content: str
    metadata: GitHubCopilotInstructionMetadata = field(
        default_factory=GitHubCopilotInstructionMetadata
    )


@dataclass(frozen=True)
class GitHubCopilotPromptMetadata:
    description: str = ""
    mode: GitHubCopilotChatMode | str = ""
    tools: tuple[str, ...] = ()

    def to_frontmatter(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.description:
            payload["description"] = self.description
        if self.mode:
            payload["mode"] = enum_value(self.mode)
        if self.tools:
            payload["tools"] = list(self.tools)
        return payload


@dataclass(frozen=True)
class GitHubCopilotPrompt:
    slug: str
    content: str
    metadata: GitHubCopilotPromptMetadata = field(
        default_factory=GitHubCopilotPromptMetadata
    )


class GitHubCopilotBridge(IAgentBridge):
    AGENT_ID = AgentId.GITHUB_COPILOT

    def to_agent_rule(self, rule: RuleItem) -> GitHubCopilotInstruction:
        attach = rule.metadata.attach
        if attach == AttachType.ALWAYS:
            metadata = GitHubCopilotInstructionMetadata(apply_to=APPLY_TO_ALL_PRIMARY)
        elif attach == AttachType.GLOB:
            metadata = GitHubCopilotInstructionMetadata(
                apply_to=",".join(rule.metadata.globs)
            )
        else:
            # Unknown attach types fall back to manual instead of failing.
            if attach not in (AttachType.AGENT_REQUESTED, AttachType.MANUAL):
                logger.debug("treating attach type %r of %s as manual", attach, rule.uri)
            metadata = GitHubCopilotInstructionMetadata()
        return GitHubCopilotInstruction(
            slug=rule.uri.path, content=rule.content, metadata=metadata
        )

    def from_agent_rule(self, rule: GitHubCopilotInstruction) -> RuleItem:
        uri = detached_uri(PresetType.RULES, rule.slug)
        globs = split_globs(rule.metadata.apply_to)

        if any(glob in APPLY_TO_ALL for glob in globs):
            metadata = RuleMetadata(attach=AttachType.ALWAYS)
        elif globs:
            metadata = RuleMetadata(attach=AttachType.GLOB, globs=globs)
        else:
            metadata = RuleMetadata(attach=AttachType.MANUAL)
        return RuleItem(uri=uri, content=rule.content, metadata=metadata)

    def serialize_agent_rule(self, rule: GitHubCopilotInstruction) -> str:
        return _render(rule.metadata.to_frontmatter(), rule.content)

    def deserialize_agent_rule(self, slug: str, text: str) -> GitHubCopilotInstruction:
        raw, body = split_frontmatter(requote_frontmatter_value(text, "applyTo"))
        raw = raw or {}
        return GitHubCopilotInstruction(
            slug=slug,
            content=body,
            metadata=GitHubCopilotInstructionMetadata(
                apply_to=join_globs(raw.get("applyTo"))
            ),
        )

    def to_agent_prompt(self, prompt: PromptItem) -> GitHubCopilotPrompt:
        return GitHubCopilotPrompt(
            slug=prompt.uri.path,
            content=prompt.content,
            metadata=GitHubCopilotPromptMetadata(
                description=prompt.metadata.description,
                mode=GitHubCopilotChatMode.AGENT,
            ),
        )

    def from_agent_prompt(self, prompt: GitHubCopilotPrompt) -> PromptItem:
        return PromptItem(
            uri=detached_uri(PresetType.PROMPTS, prompt.slug),
            content=prompt.content,
            metadata=PromptMetadata(description=prompt.metadata.description),
        )

    def serialize_agent_prompt(self, prompt: GitHubCopilotPrompt) -> str:
        return _render(prompt.metadata.to_frontmatter(), prompt.content)

    def deserialize_agent_prompt(self, slug: str, text: str) -> GitHubCopilotPrompt:
        raw, body = split_frontmatter(text)
        raw = raw or {}
        tools = raw.get("tools") or []
        if not isinstance(tools, list):
            tools = [tools]
        return GitHubCopilotPrompt(
            slug=slug,
            content=body,
            metadata=GitHubCopilotPromptMetadata(
                description=str(raw.get("description") or ""),
                mode=str(raw.get("mode") or ""),
                tools=tuple(str(tool) for tool in tools),
            ),
        )


def _render(front_matter: dict[str, Any], content: str) -> str:
    if not front_matter:
        return normalize_body(content)
    meta = yaml.safe_dump(
        front_matter,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
    return f"---\n{meta}---\n{normalize_body(content)}"
