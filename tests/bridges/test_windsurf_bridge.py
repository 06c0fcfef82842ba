import pytest

from ajisai.bridges.windsurf import (
    WindsurfBridge,
    WindsurfRule,
    WindsurfRuleMetadata,
    WindsurfTriggerType,
)
from ajisai.domain.models import AttachType
from ajisai.errors import UnsupportedAttachError


@pytest.fixture
def bridge() -> WindsurfBridge:
    return WindsurfBridge()


@pytest.mark.parametrize(
    ("attach", "globs", "description", "expected"),
    [
        (AttachType.ALWAYS, (), "", "---\ntrigger: always_on\n---\nBody text.\n"),
        (
            AttachType.GLOB,
            ("*.go", "*.ts"),
            "",
            "---\ntrigger: glob\nglobs: *.go,*.ts\n---\nBody text.\n",
        ),
        (
            AttachType.AGENT_REQUESTED,
            (),
            "Use when writing Go",
            "---\ntrigger: model_decision\ndescription: Use when writing Go\n---\nBody text.\n",
        ),
        (AttachType.MANUAL, (), "", "---\ntrigger: manual\n---\nBody text.\n"),
    ],
)
def test_rule_text(bridge: WindsurfBridge, make_rule, attach, globs, description, expected) -> None:
    rule = make_rule(attach=attach, globs=globs, description=description)

    assert bridge.serialize_agent_rule(bridge.to_agent_rule(rule)) == expected


def test_unrelated_metadata_is_not_written(bridge: WindsurfBridge, make_rule) -> None:
    rule = make_rule(attach=AttachType.ALWAYS, description="Ignored")

    agent_rule = bridge.to_agent_rule(rule)

    assert agent_rule.metadata == WindsurfRuleMetadata(trigger=WindsurfTriggerType.ALWAYS_ON)


@pytest.mark.parametrize("content", ["", "\n", "\n\n\n"])
def test_empty_body(bridge: WindsurfBridge, make_rule, content: str) -> None:
    text = bridge.serialize_agent_rule(bridge.to_agent_rule(make_rule(content=content)))

    assert text == "---\ntrigger: manual\n---\n"


@pytest.mark.parametrize("content", ["Body", "Body\n", "Body\n\n\n"])
def test_content_is_normalized(bridge: WindsurfBridge, make_rule, content: str) -> None:
    text = bridge.serialize_agent_rule(bridge.to_agent_rule(make_rule(content=content)))

    assert text == "---\ntrigger: manual\n---\nBody\n"


def test_unsupported_attach_raises(bridge: WindsurfBridge, make_rule) -> None:
    with pytest.raises(UnsupportedAttachError) as excinfo:
        bridge.to_agent_rule(make_rule(attach="sometimes"))

    assert excinfo.value.value == "sometimes"


def test_unknown_trigger_is_rejected_on_read_back(bridge: WindsurfBridge) -> None:
    parsed = bridge.deserialize_agent_rule("x", "---\ntrigger: sometimes\n---\nBody\n")

    assert parsed.metadata.trigger == "sometimes"
    with pytest.raises(UnsupportedAttachError):
        bridge.from_agent_rule(parsed)


@pytest.mark.parametrize(
    ("attach", "globs", "description"),
    [
        (AttachType.ALWAYS, (), ""),
        (AttachType.GLOB, ("*.go", "*.ts"), ""),
        (AttachType.GLOB, ("*.ts", "src/**/*.{ts,tsx}"), ""),
        (AttachType.AGENT_REQUESTED, (), "Use: when writing Go"),
        (AttachType.MANUAL, (), ""),
    ],
)
def test_round_trip_through_text(bridge: WindsurfBridge, make_rule, attach, globs, description) -> None:
    rule = make_rule(attach=attach, globs=globs, description=description)
    agent_rule = bridge.to_agent_rule(rule)

    text = bridge.serialize_agent_rule(agent_rule)
    parsed = bridge.deserialize_agent_rule(agent_rule.slug, text)
    restored = bridge.from_agent_rule(parsed)

    assert parsed == agent_rule
    assert bridge.serialize_agent_rule(parsed) == text
    assert restored.metadata == rule.metadata
    assert restored.content == rule.content


def test_multiline_description_is_flattened(bridge: WindsurfBridge) -> None:
    rule = WindsurfRule(
        slug="x",
        content="Body\n",
        metadata=WindsurfRuleMetadata(
            trigger=WindsurfTriggerType.MODEL_DECISION, description=" first\nsecond "
        ),
    )

    assert "description: first second\n" in bridge.serialize_agent_rule(rule)


def test_prompts_are_plain_content(bridge: WindsurfBridge, make_prompt) -> None:
    prompt = make_prompt(content="Review.\n")

    assert bridge.serialize_agent_prompt(bridge.to_agent_prompt(prompt)) == "Review.\n"
    assert bridge.from_agent_prompt(bridge.deserialize_agent_prompt("review", "Review.\n")).content == "Review.\n"


@pytest.mark.parametrize(
    "description",
    ['"Strict" mode for Go', "'Strict' mode for Go", '"Quoted"', "Use: when 'writing' Go"],
)
def test_description_with_quotes_reads_back(bridge: WindsurfBridge, description: str) -> None:
    rule = WindsurfRule(
        slug="x",
        content="Body\n",
        metadata=WindsurfRuleMetadata(
            trigger=WindsurfTriggerType.MODEL_DECISION, description=description
        ),
    )

    text = bridge.serialize_agent_rule(rule)
    parsed = bridge.deserialize_agent_rule("x", text)

    assert parsed.metadata.description == description
    assert bridge.serialize_agent_rule(parsed) == text


def test_hand_written_description_starting_with_quote(bridge: WindsurfBridge) -> None:
    text = '---\ntrigger: model_decision\ndescription: "Strict" mode for Go\n---\nBody\n'

    rule = bridge.from_agent_rule(bridge.deserialize_agent_rule("go", text))

    assert rule.metadata.attach is AttachType.AGENT_REQUESTED
    assert rule.metadata.description == '"Strict" mode for Go'
