from ajisai.bridges.base import IAgentBridge, create_bridge, list_registered_bridges
from ajisai.bridges.cursor import CursorBridge
from ajisai.bridges.github_copilot import GitHubCopilotBridge
from ajisai.bridges.windsurf import WindsurfBridge

__all__ = [
    "CursorBridge",
    "GitHubCopilotBridge",
    "IAgentBridge",
    "WindsurfBridge",
    "create_bridge",
    "list_registered_bridges",
]
