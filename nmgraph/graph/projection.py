"""Output projections of a finished module graph.

Each projection is a pure function of the graph and returns plain,
JSON-serializable data. None of them touches the filesystem or mutates
the graph.

- ``project_by_path``: one entry per installed directory.
- ``project_by_identity``: entries grouped by ``name@version``.
- ``project_edges``: dense integer node ids plus an edge list, the input
  of the DOT renderer and the viewer.
"""

import logging
from typing import Any, Dict, List, Set, Tuple

import networkx as nx

from nmgraph.graph.manager import ModuleGraph
from nmgraph.graph.models import ModuleIdentity

logger = logging.getLogger("nmgraph.graph.projection")

PathProjection = Dict[str, Dict[str, Any]]
IdentityProjection = Dict[str, Dict[str, Any]]
EdgeProjection = Dict[str, List[Dict[str, Any]]]

PROJECTIONS = ("path", "identity", "graph")


def project_by_path(graph: ModuleGraph) -> PathProjection:
    """Key every module by its directory.

    Returns:
        Mapping of path to ``name``, ``version``, ``dev``, ``requiredBy``
        and ``dependencies``.
    """
    result: PathProjection = {}
    for record in graph.records():
        result[record.path] = {
            "name": record.name,
            "version": record.version,
            "dev": record.dev,
            "requiredBy": sorted(record.required_by),
            "dependencies": list(record.dependencies),
        }
    return result


def project_by_identity(graph: ModuleGraph) -> IdentityProjection:
    """Group modules by ``name@version`` regardless of install location.

    An identity is dev-only when all of its installs are. Requirers are
    listed per concrete path so duplicated installs stay visible.
    """
    records = {record.path: record for record in graph.records()}
    result: IdentityProjection = {}

    for record in records.values():
        key = record.identity.key
        entry = result.get(key)
        if entry is None:
            entry = {
                "name": record.name,
                "version": record.version,
                "dev": record.dev,
                "dependencies": [],
                "requiredBy": {},
            }
            result[key] = entry
        else:
            entry["dev"] = entry["dev"] and record.dev

        for dep_path in record.dependencies:
            dep = records[dep_path]
            item = {"name": dep.name, "version": dep.version, "path": dep.path}
            if item not in entry["dependencies"]:
                entry["dependencies"].append(item)

        requirers: List[str] = []
        for requirer in sorted(record.required_by):
            requirer_key = records[requirer].identity.key
            if requirer_key not in requirers:
                requirers.append(requirer_key)
        entry["requiredBy"][record.path] = requirers

    return result


def project_edges(graph: ModuleGraph) -> EdgeProjection:
    """Number modules densely in discovery order and list require edges.

    The root is always node 0.
    """
    numbered = nx.convert_node_labels_to_integers(
        graph.native_graph, first_label=0, ordering="default", label_attribute="path"
    )
    nodes = [
        {
            "id": node_id,
            "name": attrs["name"],
            "version": attrs["version"],
            "dev": attrs["dev"],
            "path": attrs["path"],
        }
        for node_id, attrs in numbered.nodes(data=True)
    ]
    edges = [{"source": source, "target": target} for source, target in numbered.edges()]
    logger.debug("edge projection: %d nodes, %d edges", len(nodes), len(edges))
    return {"nodes": nodes, "edges": edges}


def project(graph: ModuleGraph, kind: str = "path") -> Dict[str, Any]:
    """Dispatch to a projection by name (``path``, ``identity`` or ``graph``)."""
    if kind == "path":
        return project_by_path(graph)
    if kind == "identity":
        return project_by_identity(graph)
    if kind == "graph":
        return project_edges(graph)
    raise ValueError(f"Unknown projection {kind!r}, expected one of {PROJECTIONS}")


def path_edge_set(projection: PathProjection) -> Set[Tuple[str, str]]:
    """Require edges implied by inverting ``requiredBy`` fields."""
    return {
        (requirer, path)
        for path, entry in projection.items()
        for requirer in entry["requiredBy"]
    }


def graph_edge_set(projection: EdgeProjection) -> Set[Tuple[str, str]]:
    """Require edges of an edge projection, as path pairs."""
    paths = {node["id"]: node["path"] for node in projection["nodes"]}
    return {(paths[edge["source"]], paths[edge["target"]]) for edge in projection["edges"]}


def identity_edge_set(projection: IdentityProjection) -> Set[Tuple[str, str]]:
    """Require edges collapsed to ``name@version`` pairs."""
    return {
        (key, ModuleIdentity(dep["name"], dep["version"]).key)
        for key, entry in projection.items()
        for dep in entry["dependencies"]
    }


__all__ = [
    "EdgeProjection",
    "IdentityProjection",
    "PROJECTIONS",
    "PathProjection",
    "graph_edge_set",
    "identity_edge_set",
    "path_edge_set",
    "project",
    "project_by_identity",
    "project_by_path",
    "project_edges",
]
