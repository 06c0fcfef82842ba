from pathlib import Path
from typing import Optional

from ajisai.agent_id import AgentId
from ajisai.integrations.base import AgentIntegration, IAgentAdapter
from ajisai.integrations.cursor import CursorAdapter
from ajisai.integrations.github_copilot import GitHubCopilotAdapter
from ajisai.integrations.windsurf import WindsurfAdapter

ADAPTERS: dict[AgentId, type[IAgentAdapter]] = {
    AgentId.CURSOR: CursorAdapter,
    AgentId.GITHUB_COPILOT: GitHubCopilotAdapter,
    AgentId.WINDSURF: WindsurfAdapter,
}


def create_integration(
    agent_id: AgentId, root: Optional[Path] = None, max_workers: Optional[int] = None
) -> AgentIntegration:
    adapter_cls = ADAPTERS.get(agent_id)
    if adapter_cls is None:
        raise ValueError(f"No integration registered for agent: {agent_id}")
    return AgentIntegration(adapter_cls(), root=root, max_workers=max_workers)


__all__ = [
    "ADAPTERS",
    "AgentIntegration",
    "CursorAdapter",
    "GitHubCopilotAdapter",
    "IAgentAdapter",
    "WindsurfAdapter",
    "create_integration",
]
