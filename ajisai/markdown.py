"""Markdown helpers: YAML frontmatter parsing and H1 extraction."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from ajisai.errors import FrontmatterError

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<meta>.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
_H1_RE = re.compile(r"^#[ \t]+(?P<title>.*?)(?:[ \t]+#+)?[ \t]*$")
_FENCE_RE = re.compile(r"^[ \t]*(```|~~~)")
_QUOTED_SCALAR_RE = re.compile(r"'(?:[^']|'')*'" r'|"(?:[^"\\]|\\.)*"')
_EMPHASIS_RES = (
    re.compile(r"(\*\*)(.+?)\1"),
    re.compile(r"(?<!\w)(__)(.+?)\1(?!\w)"),
    re.compile(r"(\*)(.+?)\1"),
    re.compile(r"(?<!\w)(_)(.+?)\1(?!\w)"),
    re.compile(r"(`)(.+?)\1"),
)


def split_frontmatter(text: str, path: Optional[Path] = None) -> tuple[dict[str, Any] | None, str]:
    """Return ``(metadata, body)``; ``metadata`` is None when there is no block."""
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return None, text

    try:
        raw = yaml.safe_load(match.group("meta"))
    except yaml.YAMLError as exc:
        raise FrontmatterError(str(exc).replace("\n", " "), path) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise FrontmatterError("frontmatter must be a mapping", path)
    return raw, text[match.end() :]


def parse_frontmatter(text: str, path: Optional[Path] = None) -> tuple[dict[str, Any], str]:
    """Like :func:`split_frontmatter` but the block is mandatory."""
    raw, body = split_frontmatter(text, path)
    if raw is None:
        raise FrontmatterError("missing frontmatter block", path)
    return raw, body


def requote_frontmatter_value(text: str, key: str) -> str:
    """Double-quote a raw ``key: value`` line inside the frontmatter block.

    Agent formats write globs unquoted (``globs: *.ts``), which YAML would
    read as an alias. Empty values and values that already form one complete
    quoted scalar are kept.
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return text

    prefix = f"{key}:"
    lines = match.group("meta").split("\n")
    for index, line in enumerate(lines):
        if not line.startswith(prefix):
            continue
        value = line[len(prefix) :].strip()
        if not value or _is_quoted_scalar(value):
            continue
        lines[index] = f"{prefix} {json.dumps(value, ensure_ascii=False)}"

    start, end = match.span("meta")
    return text[:start] + "\n".join(lines) + text[end:]


def extract_h1_heading(content: str) -> str:
    in_fence = False
    for line in content.splitlines():
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        match = _H1_RE.match(line)
        if match is not None:
            return strip_emphasis(match.group("title")).strip()
    return ""


def strip_emphasis(text: str) -> str:
    for pattern in _EMPHASIS_RES:
        text = pattern.sub(r"\2", text)
    return text


def _is_quoted_scalar(value: str) -> bool:
    if _QUOTED_SCALAR_RE.fullmatch(value) is None:
        return False
    try:
        return isinstance(yaml.safe_load(value), str)
    except yaml.YAMLError:
        return False
