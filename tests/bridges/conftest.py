from typing import Union

import pytest

from ajisai.domain.models import AttachType, PromptItem, PromptMetadata, RuleItem, RuleMetadata
from ajisai.domain.uri import URI, PresetType


@pytest.fixture
def make_rule():
    def _make(
        attach: Union[AttachType, str] = AttachType.MANUAL,
        globs: tuple[str, ...] = (),
        description: str = "",
        content: str = "Body text.\n",
        path: str = "go-style/project",
    ) -> RuleItem:
        return RuleItem(
            uri=URI(package="p1", preset="default", type=PresetType.RULES, path=path),
            content=content,
            metadata=RuleMetadata(description=description, attach=attach, globs=globs),
        )

    return _make


@pytest.fixture
def make_prompt():
    def _make(description: str = "", content: str = "Review the diff.\n") -> PromptItem:
        return PromptItem(
            uri=URI(package="p1", preset="default", type=PresetType.PROMPTS, path="review"),
            content=content,
            metadata=PromptMetadata(description=description),
        )

    return _make
