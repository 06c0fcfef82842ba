from __future__ import annotations

from ajisai.agent_id import AgentId
from ajisai.integrations.base import IAgentAdapter


class GitHubCopilotAdapter(IAgentAdapter):
    AGENT_ID = AgentId.GITHUB_COPILOT
    RULES_DIR = ".github/instructions"
    PROMPTS_DIR = ".github/prompts"
    RULE_EXTENSION = ".instructions.md"
    PROMPT_EXTENSION = ".prompt.md"
