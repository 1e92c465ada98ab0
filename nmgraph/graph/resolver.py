"""Upward module directory lookup.

Mirrors node's hierarchical resolution: a package named ``name`` required
from ``from_path`` is the closest ``<ancestor>/node_modules/<name>``
directory, searching ``from_path`` itself first and then each parent up
to the project root.
"""

import logging
from pathlib import Path
from typing import Union

from nmgraph.graph.errors import ResolutionError

logger = logging.getLogger("nmgraph.graph.resolver")

DEFAULT_MODULES_DIR = "node_modules"


class PathResolver:
    """Resolve dependency names to installed module directories.

    Args:
        root_path: Project root; the search never goes above it.
        modules_dir: Name of the per-directory module folder.
    """

    def __init__(
        self, root_path: Union[str, Path], modules_dir: str = DEFAULT_MODULES_DIR
    ) -> None:
        self.root_path = Path(root_path).resolve()
        self.modules_dir = modules_dir

    def resolve(self, name: str, from_path: Union[str, Path]) -> Path:
        """Return the directory of the closest installed ``name``.

        Args:
            name: Package name, scoped names (``@scope/pkg``) included.
            from_path: Directory of the requesting package.

        Returns:
            Path: Canonical directory of the installed package.

        Raises:
            ResolutionError: If no ancestor up to the root holds the package,
                or ``from_path`` lies outside the project root.
        """
        current = Path(from_path).resolve()
        while True:
            # symlinked installs can resolve outside the project
            if current != self.root_path and self.root_path not in current.parents:
                raise ResolutionError(name, from_path)
            candidate = current / self.modules_dir / name
            if candidate.is_dir():
                resolved = candidate.resolve()
                logger.debug("found: %s", resolved)
                return resolved
            if current == self.root_path or current.parent == current:
                raise ResolutionError(name, from_path)
            current = current.parent


__all__ = ["DEFAULT_MODULES_DIR", "PathResolver"]
