"""Windsurf bridge: trigger-based rules, plain prompts."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum

from ajisai.agent_id import AgentId
from ajisai.bridges.base import (
    IAgentBridge,
    detached_uri,
    enum_value,
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


class WindsurfTriggerType(str, Enum):
    ALWAYS_ON = "always_on"
    GLOB = "glob"
    MODEL_DECISION = "model_decision"
    MANUAL = "manual"


_TRIGGER_BY_ATTACH: dict[AttachType, WindsurfTriggerType] = {
    AttachType.ALWAYS: WindsurfTriggerType.ALWAYS_ON,
    AttachType.GLOB: WindsurfTriggerType.GLOB,
    AttachType.AGENT_REQUESTED: WindsurfTriggerType.MODEL_DECISION,
    AttachType.MANUAL: WindsurfTriggerType.MANUAL,
}


@dataclass(frozen=True)
class WindsurfRuleMetadata:
    trigger: WindsurfTriggerType | str = WindsurfTriggerType.MANUAL
    globs: str = ""
    description: str = ""


@dataclass(frozen=True)
class WindsurfRule:
    slug: str
    content: str
    metadata: WindsurfRuleMetadata = field(default_factory=WindsurfRuleMetadata)


@dataclass(frozen=True)
class WindsurfPrompt:
    slug: str
    content: str


class WindsurfBridge(IAgentBridge):
    AGENT_ID = AgentId.WINDSURF

    def to_agent_rule(self, rule: RuleItem) -> WindsurfRule:
        attach = rule.metadata.attach
        if not isinstance(attach, AttachType):
            raise UnsupportedAttachError(attach, self.agent_label)

        trigger = _TRIGGER_BY_ATTACH[attach]
        globs = ""
        description = ""
        if trigger == WindsurfTriggerType.GLOB:
            globs = ",".join(rule.metadata.globs)
        elif trigger == WindsurfTriggerType.MODEL_DECISION:
            description = rule.metadata.description

        return WindsurfRule(
            slug=rule.uri.path,
            content=rule.content,
            metadata=WindsurfRuleMetadata(
                trigger=trigger, globs=globs, description=description
            ),
        )

    def from_agent_rule(self, rule: WindsurfRule) -> RuleItem:
        uri = detached_uri(PresetType.RULES, rule.slug)
        trigger = rule.metadata.trigger

        if trigger == WindsurfTriggerType.ALWAYS_ON:
            metadata = RuleMetadata(attach=AttachType.ALWAYS)
        elif trigger == WindsurfTriggerType.GLOB:
            metadata = RuleMetadata(
                attach=AttachType.GLOB, globs=split_globs(rule.metadata.globs)
            )
        elif trigger == WindsurfTriggerType.MODEL_DECISION:
            metadata = RuleMetadata(
                attach=AttachType.AGENT_REQUESTED,
                description=rule.metadata.description,
            )
        elif trigger == WindsurfTriggerType.MANUAL:
            metadata = RuleMetadata(attach=AttachType.MANUAL)
        else:
            raise UnsupportedAttachError(trigger, self.agent_label)
        return RuleItem(uri=uri, content=rule.content, metadata=metadata)

    def serialize_agent_rule(self, rule: WindsurfRule) -> str:
        lines = [f"trigger: {enum_value(rule.metadata.trigger)}"]

        description = " ".join(rule.metadata.description.splitlines()).strip()
        if description:
            if description[0] in ("'", '"'):
                description = json.dumps(description, ensure_ascii=False)
            lines.append(f"description: {description}")

        globs = rule.metadata.globs.strip()
        if globs:
            lines.append(f"globs: {globs}")

        text = "---\n" + "\n".join(lines) + "\n---\n" + rule.content
        return text.rstrip("\n") + "\n"

    def deserialize_agent_rule(self, slug: str, text: str) -> WindsurfRule:
        text = requote_frontmatter_value(text, "globs")
        text = requote_frontmatter_value(text, "description")
        raw, body = parse_frontmatter(text)

        trigger = str(raw.get("trigger") or "")
        try:
            parsed_trigger: WindsurfTriggerType | str = WindsurfTriggerType(trigger)
        except ValueError:
            parsed_trigger = trigger

        return WindsurfRule(
            slug=slug,
            content=body,
            metadata=WindsurfRuleMetadata(
                trigger=parsed_trigger,
                globs=join_globs(raw.get("globs")),
                description=str(raw.get("description") or ""),
            ),
        )

    def to_agent_prompt(self, prompt: PromptItem) -> WindsurfPrompt:
        return WindsurfPrompt(slug=prompt.uri.path, content=prompt.content)

    def from_agent_prompt(self, prompt: WindsurfPrompt) -> PromptItem:
        return PromptItem(
            uri=detached_uri(PresetType.PROMPTS, prompt.slug),
            content=prompt.content,
            metadata=PromptMetadata(),
        )

    def serialize_agent_prompt(self, prompt: WindsurfPrompt) -> str:
        return prompt.content

    def deserialize_agent_prompt(self, slug: str, text: str) -> WindsurfPrompt:
        return WindsurfPrompt(slug=slug, content=text)
