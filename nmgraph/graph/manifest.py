"""Package manifest reader."""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from nmgraph.graph.errors import ManifestError
from nmgraph.graph.models import Manifest

logger = logging.getLogger("nmgraph.graph.manifest")

DEFAULT_MANIFEST_NAME = "package.json"


class ManifestReader:
    """Load and validate the manifest stored in a package directory."""

    def __init__(self, manifest_name: str = DEFAULT_MANIFEST_NAME) -> None:
        self.manifest_name = manifest_name

    def read(self, path: Union[str, Path]) -> Manifest:
        """Parse ``<path>/<manifest_name>``.

        A missing ``name`` falls back to the directory name and a missing
        ``version`` to ``0.0.0``.

        Raises:
            ManifestError: If the file is unreadable or structurally invalid.
        """
        package_dir = Path(path)
        manifest_path = package_dir / self.manifest_name
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ManifestError(package_dir, f"{self.manifest_name} not found") from e
        except json.JSONDecodeError as e:
            raise ManifestError(package_dir, f"invalid JSON: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(package_dir, f"cannot read: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(package_dir, "top-level value must be an object")

        default_name = package_dir.name
        if package_dir.parent.name.startswith("@"):
            default_name = f"{package_dir.parent.name}/{package_dir.name}"
        data.setdefault("name", default_name)
        data.setdefault("version", "0.0.0")
        try:
            manifest = Manifest.model_validate(data)
        except ValidationError as e:
            raise ManifestError(package_dir, str(e)) from e

        logger.debug("read manifest %s@%s from %s", manifest.name, manifest.version, package_dir)
        return manifest


__all__ = ["DEFAULT_MANIFEST_NAME", "ManifestReader"]
