from __future__ import annotations

from dataclasses import dataclass, field

from ajisai.constants import (
    DEFAULT_PRESET_NAME,
    DEFAULT_PROMPT_EXPORTS,
    DEFAULT_RULE_EXPORTS,
)


@dataclass(frozen=True)
class ExportedPresetDefinition:
    rules: tuple[str, ...] = ()
    prompts: tuple[str, ...] = ()


@dataclass(frozen=True)
class PackageManifest:
    name: str
    exports: dict[str, ExportedPresetDefinition] = field(default_factory=dict)

    @classmethod
    def implicit(cls, name: str) -> "PackageManifest":
        """Manifest used when a package ships no config file."""
        return cls(
            name=name,
            exports={
                DEFAULT_PRESET_NAME: ExportedPresetDefinition(
                    rules=DEFAULT_RULE_EXPORTS,
                    prompts=DEFAULT_PROMPT_EXPORTS,
                )
            },
        )
