"""Recursive dependency graph builder.

Starting at the root project, every declared dependency is resolved to an
installed directory, its manifest is read once, and the module is linked
into a shared ModuleGraph. The traversal runs one depth level at a time:
every manifest of a level is read and resolved concurrently on a thread
pool, then the results are linked in the order their parents were
discovered. Each module is therefore created at its shortest depth and the
graph does not depend on thread scheduling.

Dependency maps are consumed in a fixed order:

1. ``optionalDependencies``: unresolvable entries are skipped silently.
2. ``dependencies``: names also listed as optional are skipped.
3. ``devDependencies``: root project only, children are marked dev.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from nmgraph.graph.errors import ResolutionError
from nmgraph.graph.manager import ModuleGraph
from nmgraph.graph.manifest import DEFAULT_MANIFEST_NAME, ManifestReader
from nmgraph.graph.models import Manifest
from nmgraph.graph.resolver import DEFAULT_MODULES_DIR, PathResolver

logger = logging.getLogger("nmgraph.graph.builder")

# (module path, depth) pairs still to be expanded
_Visit = Tuple[str, int]


@dataclass
class BuildResult:
    """Outcome of one analysis run.

    Attributes:
        graph: Frozen module graph.
        root: Canonical path of the root project.
        depth_limit_reached: True if any branch was cut by ``max_depth``.
        truncated: Paths whose dependencies were not followed.
        max_depth: Limit the graph was built with, None for unlimited.
        elapsed: Wall-clock build time in seconds.
    """

    graph: ModuleGraph
    root: str
    depth_limit_reached: bool = False
    truncated: List[str] = field(default_factory=list)
    max_depth: Optional[int] = None
    elapsed: float = 0.0


class GraphBuilder:
    """Build the installed dependency graph of a project.

    Args:
        root_path: Directory holding the root manifest.
        max_depth: Maximum recursion depth, root being depth 1. None means
            unlimited.
        workers: Thread pool size used for sibling visits.
        include_optional: Follow ``optionalDependencies``.
        include_dev: Follow the root's ``devDependencies``.
        resolver: Custom path resolver.
        reader: Custom manifest reader.
    """

    def __init__(
        self,
        root_path: Union[str, Path],
        max_depth: Optional[int] = None,
        workers: int = 4,
        include_optional: bool = True,
        include_dev: bool = True,
        modules_dir: str = DEFAULT_MODULES_DIR,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
        resolver: Optional[PathResolver] = None,
        reader: Optional[ManifestReader] = None,
    ) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")

        self.root = str(Path(root_path).resolve())
        self.max_depth = max_depth
        self.workers = workers
        self.include_optional = include_optional
        self.include_dev = include_dev
        self.resolver = resolver or PathResolver(self.root, modules_dir)
        self.reader = reader or ManifestReader(manifest_name)

        self._graph: Optional[ModuleGraph] = None
        self._truncated: List[str] = []

    def build(self) -> BuildResult:
        """Traverse the project and return the finished graph.

        Raises:
            ResolutionError: If a required dependency is not installed.
            ManifestError: If any reached manifest is missing or invalid.
        """
        logger.info("Building dependency graph for %s (max_depth=%s, workers=%d)",
                    self.root, self.max_depth, self.workers)
        start = time.time()

        graph = ModuleGraph(self.root)
        self._graph = graph
        self._truncated = []
        graph.ensure_module(self.root)

        with ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="nmgraph"
        ) as executor:
            level: List[_Visit] = [(self.root, 1)]
            while level:
                # depth d is fully linked before depth d + 1 is submitted
                futures = [
                    executor.submit(self._visit, path, depth) for path, depth in level
                ]
                next_level: List[_Visit] = []
                for index, ((path, depth), future) in enumerate(zip(level, futures)):
                    try:
                        links = future.result()
                    except Exception:
                        for other in futures[index + 1:]:
                            other.cancel()
                        raise
                    if links is None:
                        self._truncated.append(path)
                        continue
                    for child_path, dev_edge in links:
                        if graph.ensure_module(
                            child_path, required_from=path, dev_edge=dev_edge
                        ):
                            next_level.append((child_path, depth + 1))
                level = next_level

        graph.freeze()
        result = BuildResult(
            graph=graph,
            root=self.root,
            depth_limit_reached=bool(self._truncated),
            truncated=list(self._truncated),
            max_depth=self.max_depth,
            elapsed=time.time() - start,
        )
        if result.depth_limit_reached:
            logger.warning(
                "max recursive depth (%d) reached, %d module(s) not expanded",
                self.max_depth,
                len(result.truncated),
            )
        logger.info("Dependency graph built: %d modules, %d edges in %.2fs",
                    graph.node_count(), graph.edge_count(), result.elapsed)
        return result

    def _visit(self, path: str, depth: int) -> Optional[List[Tuple[str, bool]]]:
        """Load one module and resolve its direct dependencies.

        Returns:
            ``(child path, is dev edge)`` pairs in precedence order, or None
            when the module sits past ``max_depth`` with dependencies left
            unexpanded.
        """
        graph = self._graph
        assert graph is not None

        manifest = self.reader.read(path)
        graph.set_manifest_info(path, manifest.name, manifest.version)

        if self.max_depth is not None and depth > self.max_depth:
            # leaf modules past the limit are not counted as cut branches
            if manifest.dependencies or (
                self.include_optional and manifest.optional_dependencies
            ):
                logger.debug("depth %d exceeds limit, not expanding %s", depth, path)
                return None
            return []

        return [
            (str(child), dev_edge)
            for child, dev_edge in self._iter_dependencies(path, manifest)
        ]

    def _iter_dependencies(
        self, path: str, manifest: Manifest
    ) -> Iterator[Tuple[Path, bool]]:
        """Yield ``(resolved directory, is dev edge)`` in precedence order."""
        optional = manifest.optional_dependencies
        if self.include_optional:
            for name in optional:
                try:
                    yield self.resolver.resolve(name, path), False
                except ResolutionError:
                    logger.debug("optional dependency %s of %s not installed", name, path)

        for name in manifest.dependencies:
            if name in optional:
                continue
            yield self.resolver.resolve(name, path), False

        # only the root project's devDependencies are ever installed
        if self.include_dev and path == self.root:
            for name in manifest.dev_dependencies:
                yield self.resolver.resolve(name, path), True


def build_graph(
    root_path: Union[str, Path], max_depth: Optional[int] = None, **kwargs
) -> BuildResult:
    """Build the dependency graph rooted at ``root_path``."""
    return GraphBuilder(root_path, max_depth=max_depth, **kwargs).build()


__all__ = ["BuildResult", "GraphBuilder", "build_graph"]
