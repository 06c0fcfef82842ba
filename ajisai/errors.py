from pathlib import Path
from typing import Optional


class AjisaiError(Exception):
    """Base user-facing application error."""


class AjisaiFileError(AjisaiError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class ConfigError(AjisaiFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config ({detail})")


class ManifestError(AjisaiFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid package manifest ({detail})")


class FrontmatterError(AjisaiError):
    def __init__(self, detail: str, path: Optional[Path] = None) -> None:
        self.detail = detail
        self.path = path
        if path is None:
            super().__init__(f"Invalid frontmatter ({detail})")
        else:
            super().__init__(f"Invalid frontmatter ({detail}): {path}")


class NotImportedError(AjisaiError):
    def __init__(self, package_name: str) -> None:
        self.package_name = package_name
        super().__init__(f"Package is not imported in this workspace: {package_name}")


class NotExportedError(AjisaiError):
    def __init__(self, package_name: str, preset_name: str) -> None:
        self.package_name = package_name
        self.preset_name = preset_name
        super().__init__(
            f"Preset {preset_name!r} is not exported by package {package_name!r}"
        )


class UnsupportedAttachError(AjisaiError):
    def __init__(self, value: object, agent: str) -> None:
        self.value = value
        self.agent = agent
        super().__init__(f"Unsupported rule attach type for {agent}: {value}")


class InvalidGlobError(AjisaiError):
    def __init__(self, pattern: str, detail: str) -> None:
        self.pattern = pattern
        self.detail = detail
        super().__init__(f"Invalid glob pattern {pattern!r} ({detail})")


class InvalidBaseError(AjisaiError):
    def __init__(self, base: str) -> None:
        self.base = base
        super().__init__(f"Base path is not an absolute directory: {base}")


class InvalidTargetError(AjisaiError):
    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"Target path is not an absolute file: {target}")


class OutsideBaseError(AjisaiError):
    def __init__(self, base: str, target: str) -> None:
        self.base = base
        self.target = target
        super().__init__(f"Target path {target} is not under base path {base}")


class PresetBuildError(AjisaiError):
    def __init__(
        self, package_name: str, preset_name: str, pattern: str, cause: Exception
    ) -> None:
        self.package_name = package_name
        self.preset_name = preset_name
        self.pattern = pattern
        self.cause = cause
        super().__init__(
            f"Failed to build preset {preset_name!r} of package {package_name!r} "
            f"(pattern {pattern!r}): {cause}"
        )


class IntegrationWriteError(AjisaiError):
    def __init__(
        self, agent: str, namespace: str, cause: Exception, written: list[Path]
    ) -> None:
        self.agent = agent
        self.namespace = namespace
        self.cause = cause
        self.written = written
        super().__init__(
            f"Failed to write {agent} presets in namespace {namespace!r}: {cause}"
        )


class FetchError(AjisaiError):
    def __init__(self, package_name: str, detail: str) -> None:
        self.package_name = package_name
        self.detail = detail
        super().__init__(f"Failed to fetch package {package_name!r}: {detail}")
