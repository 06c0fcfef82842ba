"""Double-star glob patterns over slash-separated relative paths.

Supported syntax: ``*`` (inside one segment), ``**`` (any number of
segments, as a whole segment), ``?``, ``[...]``/``[!...]`` classes,
``{a,b}`` alternatives and ``\\`` escapes.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from ajisai.errors import InvalidGlobError

_META_CHARS = frozenset("*?[{\\")


def split_pattern(pattern: str) -> tuple[str, str]:
    """Split ``pattern`` into a static base directory and the remaining glob.

    ``rules/**/*.md`` gives ``("rules", "**/*.md")``; a pattern whose first
    segment is already dynamic gives ``(".", pattern)``.
    """
    if os.sep != "/":
        pattern = pattern.replace(os.sep, "/")
    first_meta = next(
        (index for index, char in enumerate(pattern) if char in _META_CHARS),
        len(pattern),
    )
    split_at = pattern.rfind("/", 0, first_meta)
    if split_at == -1:
        return ".", pattern
    base = pattern[:split_at] or "/"
    return base, pattern[split_at + 1 :]


def compile_pattern(pattern: str) -> re.Pattern[str]:
    if not pattern:
        raise InvalidGlobError(pattern, "empty pattern")

    segments = pattern.split("/")
    parts: list[str] = []
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        if segment == "**":
            parts.append(".*" if is_last else "(?:[^/]*/)*")
            continue
        parts.append(_translate_segment(pattern, segment))
        if not is_last:
            parts.append("/")
    return re.compile("".join(parts))


def match_pattern(pattern: str, relative_path: str) -> bool:
    return compile_pattern(pattern).fullmatch(relative_path) is not None


def glob_files(base_dir: Path, pattern: str) -> list[Path]:
    """Return regular files under ``base_dir`` matching ``pattern``, sorted."""
    matcher = compile_pattern(pattern)
    if not base_dir.is_dir():
        return []

    matches: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(base_dir):
        dirnames.sort()
        current = Path(dirpath)
        for filename in filenames:
            candidate = current / filename
            if not candidate.is_file():
                continue
            relative = candidate.relative_to(base_dir).as_posix()
            if matcher.fullmatch(relative):
                matches.append(candidate)
    return sorted(matches)


def _translate_segment(pattern: str, segment: str) -> str:
    out: list[str] = []
    index = 0
    length = len(segment)
    while index < length:
        char = segment[index]
        if char == "\\":
            if index + 1 >= length:
                raise InvalidGlobError(pattern, "dangling escape")
            out.append(re.escape(segment[index + 1]))
            index += 2
        elif char == "*":
            while index < length and segment[index] == "*":
                index += 1
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
            index += 1
        elif char == "[":
            end = _find_class_end(segment, index)
            if end == -1:
                raise InvalidGlobError(pattern, "unterminated character class")
            body = segment[index + 1 : end]
            negate = body[:1] in ("!", "^")
            if negate:
                body = body[1:]
            body = body.replace("\\", "\\\\")
            out.append(f"[{'^' if negate else ''}{body}]")
            index = end + 1
        elif char == "{":
            end = _find_brace_end(segment, index)
            if end == -1:
                raise InvalidGlobError(pattern, "unterminated alternative group")
            options = split_alternatives(segment[index + 1 : end])
            translated = [_translate_segment(pattern, option) for option in options]
            out.append(f"(?:{'|'.join(translated)})")
            index = end + 1
        else:
            out.append(re.escape(char))
            index += 1
    return "".join(out)


def _find_class_end(segment: str, start: int) -> int:
    index = start + 1
    if index < len(segment) and segment[index] in ("!", "^"):
        index += 1
    if index < len(segment) and segment[index] == "]":
        index += 1
    return segment.find("]", index)


def _find_brace_end(segment: str, start: int) -> int:
    depth = 0
    index = start
    while index < len(segment):
        char = segment[index]
        if char == "\\":
            index += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return -1


def split_alternatives(body: str) -> list[str]:
    """Split ``body`` on commas that sit outside any ``{...}`` group."""
    options: list[str] = []
    depth = 0
    current: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\" and index + 1 < len(body):
            current.append(body[index : index + 2])
            index += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        if char == "," and depth == 0:
            options.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    options.append("".join(current))
    return options
