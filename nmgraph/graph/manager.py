"""Module graph store for a single analysis run.

ModuleGraph is the only mutable state shared by the builder's workers.
Records are nodes of a networkx ``DiGraph`` keyed by module path;
``dependencies`` are successors in insertion order and ``required_by``
are predecessors, so the two views cannot drift apart.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import networkx as nx

from nmgraph.graph.models import ModuleRecord

logger = logging.getLogger("nmgraph.graph.manager")


class ModuleGraph:
    """Thread-safe store of module records and require edges.

    Args:
        root_path: Canonical path of the root project.
    """

    def __init__(self, root_path: Union[str, Path]) -> None:
        self.root = str(root_path)
        self._graph = nx.DiGraph()
        self._lock = threading.RLock()

    @property
    def native_graph(self) -> nx.DiGraph:
        """Underlying networkx graph, for read-only analysis."""
        return self._graph

    @property
    def frozen(self) -> bool:
        return nx.is_frozen(self._graph)

    def freeze(self) -> None:
        """Make the graph immutable once traversal is over."""
        with self._lock:
            nx.freeze(self._graph)

    def __contains__(self, path: object) -> bool:
        return path in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def ensure_module(
        self,
        path: str,
        required_from: Optional[str] = None,
        dev_edge: bool = False,
    ) -> bool:
        """Create the record for ``path`` or merge into the existing one.

        This is the single check-and-create point of the traversal: exactly
        one caller ever gets True for a given path. The dev flag observed
        through this edge is the requirer's current flag, or True for a
        devDependencies edge; it is ANDed into an existing record.

        Args:
            path: Canonical module path.
            required_from: Path of the requiring module, None for the root.
            dev_edge: Whether the edge comes from a devDependencies map.

        Returns:
            bool: True if the record was created by this call.
        """
        with self._lock:
            if dev_edge:
                dev = True
            elif required_from is not None:
                dev = bool(self._graph.nodes[required_from]["dev"])
            else:
                dev = False

            created = path not in self._graph
            if created:
                self._graph.add_node(path, name="", version="", dev=dev)
                logger.debug("new module: %s (dev=%s)", path, dev)
            elif not dev:
                self._mark_production(path)

            if required_from is not None and not self._graph.has_edge(
                required_from, path
            ):
                self._graph.add_edge(required_from, path, dev=dev_edge)
            return created

    def set_manifest_info(self, path: str, name: str, version: str) -> None:
        with self._lock:
            attrs = self._graph.nodes[path]
            attrs["name"] = name
            attrs["version"] = version

    def _mark_production(self, path: str) -> None:
        """Clear ``dev`` on ``path`` and everything it pulls in non-dev.

        Must be called with the lock held.
        """
        stack = [path]
        while stack:
            current = stack.pop()
            attrs = self._graph.nodes[current]
            if not attrs["dev"]:
                continue
            attrs["dev"] = False
            logger.debug("module reachable through production edge: %s", current)
            for child in self._graph.successors(current):
                if not self._graph.edges[current, child]["dev"]:
                    stack.append(child)

    def record(self, path: str) -> ModuleRecord:
        """Return a detached snapshot of one module."""
        with self._lock:
            attrs = self._graph.nodes[path]
            return ModuleRecord(
                path=path,
                name=attrs["name"],
                version=attrs["version"],
                dev=attrs["dev"],
                required_by=set(self._graph.predecessors(path)),
                dependencies=list(self._graph.successors(path)),
            )

    def paths(self) -> List[str]:
        """Module paths in discovery order."""
        with self._lock:
            return list(self._graph.nodes)

    def records(self) -> Iterator[ModuleRecord]:
        for path in self.paths():
            yield self.record(path)

    def edges(self) -> List[Tuple[str, str]]:
        """Require edges as ``(requirer, required)`` path pairs."""
        with self._lock:
            return list(self._graph.edges())

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def dev_count(self) -> int:
        with self._lock:
            return sum(1 for _, dev in self._graph.nodes(data="dev") if dev)

    def stats(self) -> Dict[str, Any]:
        return {
            "modules": self.node_count(),
            "dependencies": max(self.node_count() - 1, 0),
            "dev_modules": self.dev_count(),
            "edges": self.edge_count(),
        }


__all__ = ["ModuleGraph"]
