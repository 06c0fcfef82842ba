from dataclasses import dataclass
from enum import Enum


class AgentId(str, Enum):
    CURSOR = "cursor"
    GITHUB_COPILOT = "github-copilot"
    WINDSURF = "windsurf"


@dataclass(frozen=True)
class AgentMetadata:
    agent_id: AgentId
    label: str
    project_dir_name: str


AGENT_CATALOG: dict[AgentId, AgentMetadata] = {
    AgentId.CURSOR: AgentMetadata(
        agent_id=AgentId.CURSOR,
        label="Cursor",
        project_dir_name=".cursor",
    ),
    AgentId.GITHUB_COPILOT: AgentMetadata(
        agent_id=AgentId.GITHUB_COPILOT,
        label="GitHub Copilot",
        project_dir_name=".github",
    ),
    AgentId.WINDSURF: AgentMetadata(
        agent_id=AgentId.WINDSURF,
        label="Windsurf",
        project_dir_name=".windsurf",
    ),
}


def agent_metadata(agent: AgentId | str) -> AgentMetadata:
    agent_id = agent if isinstance(agent, AgentId) else AgentId(agent)
    return AGENT_CATALOG[agent_id]


def agent_label(agent: AgentId | str) -> str:
    return agent_metadata(agent).label
