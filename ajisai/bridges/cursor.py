"""Cursor bridge: ``.mdc`` rules with a restricted frontmatter, plain prompts."""

from __future__ import annotations

from dataclasses import dataclass, field

from ajisai.agent_id import AgentId
from ajisai.bridges.base import (
    IAgentBridge,
    detached_uri,
    join_globs,
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
from ajisai.errors import UnsupportedAttachError
from ajisai.markdown import parse_frontmatter, requote_frontmatter_value


@dataclass(frozen=True)
class CursorRuleMetadata:
    always_apply: bool = False
    description: str = ""
    globs: str = ""


@dataclass(frozen=True)
class CursorRule:
    slug: str
    content: str
    metadata: CursorRuleMetadata = field(default_factory=CursorRuleMetadata)


@dataclass(frozen=True)
class CursorPrompt:
    slug: str
    content: str


class CursorBridge(IAgentBridge):
    AGENT_ID = AgentId.CURSOR

    def to_agent_rule(self, rule: RuleItem) -> CursorRule:
        attach = rule.metadata.attach
        if attach == AttachType.ALWAYS:
            metadata = CursorRuleMetadata(always_apply=True)
        elif attach == AttachType.GLOB:
            metadata = CursorRuleMetadata(globs=",".join(rule.metadata.globs))
        elif attach == AttachType.AGENT_REQUESTED:
            metadata = CursorRuleMetadata(description=rule.metadata.description)
        elif attach == AttachType.MANUAL:
            metadata = CursorRuleMetadata()
        else:
            raise UnsupportedAttachError(attach, self.agent_label)
        return CursorRule(slug=rule.uri.path, content=rule.content, metadata=metadata)

    def from_agent_rule(self, rule: CursorRule) -> RuleItem:
        uri = detached_uri(PresetType.RULES, rule.slug)
        globs = split_globs(rule.metadata.globs)

        if rule.metadata.always_apply:
            metadata = RuleMetadata(attach=AttachType.ALWAYS)
        elif globs:
            metadata = RuleMetadata(attach=AttachType.GLOB, globs=globs)
        elif rule.metadata.description:
            metadata = RuleMetadata(
                attach=AttachType.AGENT_REQUESTED,
                description=rule.metadata.description,
            )
        else:
            metadata = RuleMetadata(attach=AttachType.MANUAL)
        return RuleItem(uri=uri, content=rule.content, metadata=metadata)

    def serialize_agent_rule(self, rule: CursorRule) -> str:
        # Cursor rejects quoted or multi-line values, so the block is written by hand.
        lines = [f"alwaysApply: {'true' if rule.metadata.always_apply else 'false'}"]

        description = " ".join(rule.metadata.description.splitlines()).rstrip(" ")
        if description:
            escaped = description.replace("'", "''")
            lines.append(f"description: '{escaped} '")
        else:
            lines.append("description:")

        globs = rule.metadata.globs.rstrip(" ")
        lines.append(f"globs: {globs}" if globs else "globs:")

        front_matter = "---\n" + "\n".join(lines) + "\n---"
        body = rule.content.rstrip("\n")
        if not body:
            return front_matter + "\n"
        return f"{front_matter}\n{body}\n"

    def deserialize_agent_rule(self, slug: str, text: str) -> CursorRule:
        text = requote_frontmatter_value(text, "globs")
        text = requote_frontmatter_value(text, "description")
        raw, body = parse_frontmatter(text)

        description = raw.get("description") or ""
        return CursorRule(
            slug=slug,
            content=body,
            metadata=CursorRuleMetadata(
                always_apply=raw.get("alwaysApply") is True,
                description=str(description).rstrip(" "),
                globs=join_globs(raw.get("globs")),
            ),
        )

    def to_agent_prompt(self, prompt: PromptItem) -> CursorPrompt:
        return CursorPrompt(slug=prompt.uri.path, content=prompt.content)

    def from_agent_prompt(self, prompt: CursorPrompt) -> PromptItem:
        return PromptItem(
            uri=detached_uri(PresetType.PROMPTS, prompt.slug),
            content=prompt.content,
            metadata=PromptMetadata(),
        )

    def serialize_agent_prompt(self, prompt: CursorPrompt) -> str:
        return prompt.content

    def deserialize_agent_prompt(self, slug: str, text: str) -> CursorPrompt:
        return CursorPrompt(slug=slug, content=text)
