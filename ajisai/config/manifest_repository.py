from __future__ import annotations

import logging
from pathlib import Path

from ajisai.config.repository import ConfigRepository, parse_manifest
from ajisai.domain.manifest import PackageManifest
from ajisai.errors import ConfigError, ManifestError

logger = logging.getLogger(__name__)


class ManifestRepository:
    """Reads the ``package`` section of a fetched package's own config file."""

    def load_manifest(self, package_name: str, package_root: Path) -> PackageManifest:
        repository = ConfigRepository(root=package_root)
        path = repository.find_config_path()
        if path is None:
            logger.debug("no manifest in %s, using implicit default preset", package_root)
            return PackageManifest.implicit(package_name)

        try:
            payload = repository.load_payload(path)
        except ConfigError as exc:
            raise ManifestError(path, exc.detail) from exc

        manifest = parse_manifest(payload.get("package") or {}, default_name=package_name)
        return PackageManifest(name=package_name, exports=manifest.exports)
