from pathlib import Path

import pytest

from ajisai.domain.uri import URI, PresetType, path_from_base_dir
from ajisai.errors import InvalidBaseError, InvalidTargetError, OutsideBaseError


def test_uri_string_form() -> None:
    uri = URI(package="p1", preset="default", type=PresetType.RULES, path="go-style/project")

    assert str(uri) == "ajisai://p1/default/rules/go-style/project"


def test_uri_internal_path_appends_extension() -> None:
    uri = URI(package="p1", preset="default", type=PresetType.PROMPTS, path="review")

    assert uri.internal_path(".prompt.md") == "p1/default/review.prompt.md"


def test_path_from_base_dir_strips_extension(tmp_path: Path) -> None:
    target = tmp_path / "rules" / "go-style" / "project.md"

    assert path_from_base_dir(tmp_path / "rules", target) == "go-style/project"


def test_path_from_base_dir_keeps_inner_dots(tmp_path: Path) -> None:
    target = tmp_path / "rules" / "v1.2" / "notes.draft.md"

    assert path_from_base_dir(tmp_path / "rules", target) == "v1.2/notes.draft"


def test_path_from_base_dir_normalizes_inputs(tmp_path: Path) -> None:
    base = f"{tmp_path}/rules/../rules/"
    target = f"{tmp_path}/rules/./a.md"

    assert path_from_base_dir(base, target) == "a"


def test_path_from_base_dir_rejects_relative_base(tmp_path: Path) -> None:
    with pytest.raises(InvalidBaseError):
        path_from_base_dir("rules", tmp_path / "rules" / "a.md")


def test_path_from_base_dir_rejects_base_with_extension(tmp_path: Path) -> None:
    with pytest.raises(InvalidBaseError):
        path_from_base_dir(tmp_path / "rules.md", tmp_path / "rules.md" / "a.md")


def test_path_from_base_dir_rejects_target_without_extension(tmp_path: Path) -> None:
    with pytest.raises(InvalidTargetError):
        path_from_base_dir(tmp_path, tmp_path / "README")


def test_path_from_base_dir_rejects_relative_target(tmp_path: Path) -> None:
    with pytest.raises(InvalidTargetError):
        path_from_base_dir(tmp_path, "rules/a.md")


def test_path_from_base_dir_rejects_target_outside_base(tmp_path: Path) -> None:
    with pytest.raises(OutsideBaseError):
        path_from_base_dir(tmp_path / "rules", tmp_path / "prompts" / "a.md")
