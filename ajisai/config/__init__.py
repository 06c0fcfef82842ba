from ajisai.config.manifest_repository import ManifestRepository
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
from ajisai.config.repository import ConfigRepository

__all__ = [
    "Config",
    "ConfigRepository",
    "GitImport",
    "ImportSource",
    "ImportType",
    "ImportedPackage",
    "LocalImport",
    "ManifestRepository",
    "Settings",
    "Workspace",
]
