from typing import Any, Final

_GLOB_LIST: Final[dict[str, Any]] = {
    "type": "array",
    "items": {"type": "string", "minLength": 1},
}

_INTEGRATION: Final[dict[str, Any]] = {
    "type": "object",
    "properties": {"enabled": {"type": "boolean"}},
    "additionalProperties": False,
}

CONFIG_SCHEMA: Final[dict[str, Any]] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "ajisai config",
    "type": "object",
    "properties": {
        "settings": {
            "type": "object",
            "properties": {
                "cacheDir": {"type": "string", "minLength": 1},
                "namespace": {"type": "string", "minLength": 1, "pattern": "^[^/\\\\]+$"},
                "experimental": {"type": "boolean"},
            },
            "additionalProperties": False,
        },
        "package": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "exports": {
                    "type": "object",
                    "additionalProperties": {
                        "type": "object",
                        "properties": {
                            "rules": _GLOB_LIST,
                            "prompts": _GLOB_LIST,
                        },
                        "additionalProperties": False,
                    },
                },
            },
            "additionalProperties": False,
        },
        "workspace": {
            "type": "object",
            "properties": {
                "imports": {
                    "type": "object",
                    "additionalProperties": {
                        "type": "object",
                        "required": ["type"],
                        "properties": {
                            "type": {"enum": ["local", "git"]},
                            "include": {
                                "type": "array",
                                "items": {"type": "string", "minLength": 1},
                            },
                            "path": {"type": "string", "minLength": 1},
                            "repository": {"type": "string", "minLength": 1},
                            "revision": {"type": "string"},
                            "directory": {"type": "string"},
                        },
                        "allOf": [
                            {
                                "if": {"properties": {"type": {"const": "local"}}},
                                "then": {"required": ["path"]},
                            },
                            {
                                "if": {"properties": {"type": {"const": "git"}}},
                                "then": {"required": ["repository"]},
                            },
                        ],
                        "additionalProperties": False,
                    },
                },
                "integrations": {
                    "type": "object",
                    "properties": {
                        "cursor": _INTEGRATION,
                        "github-copilot": _INTEGRATION,
                        "windsurf": _INTEGRATION,
                    },
                    "additionalProperties": False,
                },
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}
