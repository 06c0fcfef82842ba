from __future__ import annotations

from ajisai.agent_id import AgentId
from ajisai.integrations.base import IAgentAdapter


class CursorAdapter(IAgentAdapter):
    AGENT_ID = AgentId.CURSOR
    RULES_DIR = ".cursor/rules"
    PROMPTS_DIR = ".cursor/prompts"
    RULE_EXTENSION = ".mdc"
    PROMPT_EXTENSION = ".md"
