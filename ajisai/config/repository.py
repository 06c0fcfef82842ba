from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from jsonschema import Draft7Validator

from ajisai.agent_id import AgentId
from ajisai.config.models import (
    Config,
    GitImport,
    ImportedPackage,
    ImportSource,
    ImportType,
    LocalImport,
    Settings,
    Workspace,
)
from ajisai.config.schema import CONFIG_SCHEMA
from ajisai.constants import (
    CONFIG_FILENAMES,
    DEFAULT_CACHE_DIR,
    DEFAULT_NAMESPACE,
    DEFAULT_PRESET_NAME,
)
from ajisai.domain.manifest import ExportedPresetDefinition, PackageManifest
from ajisai.errors import ConfigError
from ajisai.utils import read_json


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


class ConfigRepository:
    def __init__(self, root: Optional[Path] = None, config_path: Optional[Path] = None) -> None:
        self._root = root or Path.cwd()
        self._config_path = config_path
        self._validator = Draft7Validator(CONFIG_SCHEMA)

    @property
    def root(self) -> Path:
        return self._root

    def find_config_path(self) -> Optional[Path]:
        if self._config_path is not None:
            return self._config_path if self._config_path.is_file() else None
        for name in CONFIG_FILENAMES:
            candidate = self._root / name
            if candidate.is_file():
                return candidate
        return None

    def load_config(self) -> Config:
        path = self.find_config_path()
        if path is None:
            return Config(base_dir=self._root.resolve())
        payload = self.load_payload(path)
        return self.parse_config(payload, path)

    def load_payload(self, path: Path) -> dict[str, Any]:
        try:
            if path.suffix == ".json":
                payload = read_json(path)
            else:
                payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ConfigError(path, str(exc).replace("\n", " ")) from exc
        except OSError as exc:
            raise ConfigError(path, exc.strerror or str(exc)) from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ConfigError(path, "must be a mapping")
        self.validate_payload(payload, path)
        return payload

    def validate_payload(self, payload: Any, path: Path) -> None:
        error = next(iter(self._validator.iter_errors(payload)), None)
        if error is not None:
            raise ConfigError(path, format_schema_error(error))

    def parse_config(self, payload: dict[str, Any], path: Path) -> Config:
        settings_raw = payload.get("settings") or {}
        settings = Settings(
            cache_dir=settings_raw.get("cacheDir") or DEFAULT_CACHE_DIR,
            namespace=settings_raw.get("namespace") or DEFAULT_NAMESPACE,
            experimental=bool(settings_raw.get("experimental", False)),
        )

        workspace_raw = payload.get("workspace") or {}
        imports = {
            name: self._parse_import(item)
            for name, item in (workspace_raw.get("imports") or {}).items()
        }
        integrations_raw = workspace_raw.get("integrations") or {}
        integrations = {
            agent_id: bool((integrations_raw.get(agent_id.value) or {}).get("enabled", False))
            for agent_id in AgentId
        }

        package = None
        if "package" in payload:
            package = parse_manifest(payload.get("package") or {}, default_name=path.parent.name)

        return Config(
            settings=settings,
            workspace=Workspace(imports=imports, integrations=integrations),
            package=package,
            base_dir=path.parent.resolve(),
            path=path,
        )

    @staticmethod
    def _parse_import(item: dict[str, Any]) -> ImportedPackage:
        source: ImportSource
        if item["type"] == ImportType.GIT.value:
            source = GitImport(
                repository=item["repository"],
                revision=item.get("revision") or "",
                directory=item.get("directory") or "",
            )
        else:
            source = LocalImport(path=item["path"])

        include = item.get("include")
        if include is None:
            include = [DEFAULT_PRESET_NAME]
        return ImportedPackage(source=source, include=tuple(include))


def parse_manifest(raw: dict[str, Any], default_name: str) -> PackageManifest:
    exports = {
        preset_name: ExportedPresetDefinition(
            rules=tuple((definition or {}).get("rules") or ()),
            prompts=tuple((definition or {}).get("prompts") or ()),
        )
        for preset_name, definition in (raw.get("exports") or {}).items()
    }
    return PackageManifest(name=raw.get("name") or default_name, exports=exports)
