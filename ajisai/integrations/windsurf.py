from __future__ import annotations

from ajisai.agent_id import AgentId
from ajisai.integrations.base import IAgentAdapter


class WindsurfAdapter(IAgentAdapter):
    AGENT_ID = AgentId.WINDSURF
    RULES_DIR = ".windsurf/rules"
    PROMPTS_DIR = ".windsurf/prompts"
    RULE_EXTENSION = ".md"
    PROMPT_EXTENSION = ".md"
