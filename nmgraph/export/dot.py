"""DOT rendering of the edge projection."""

import logging
from pathlib import Path
from typing import Any, Dict, List

import networkx as nx

logger = logging.getLogger("nmgraph.export.dot")


def render_dot(projection: Dict[str, List[Dict[str, Any]]], name: str = "dependencies") -> str:
    """Render an edge projection as a DOT ``digraph``.

    Nodes are boxes labeled ``name\\nversion``; dev-only modules are dashed.

    Args:
        projection: Output of ``project_edges``.
        name: Graph name.

    Returns:
        str: DOT source text.
    """
    graph = nx.DiGraph(name=name)
    graph.graph["node"] = {"shape": "box"}
    for node in projection["nodes"]:
        attrs = {"label": f"{node['name']}\\n{node['version']}"}
        if node.get("dev"):
            attrs["style"] = "dashed"
        graph.add_node(node["id"], **attrs)
    graph.add_edges_from((edge["source"], edge["target"]) for edge in projection["edges"])

    return nx.nx_pydot.to_pydot(graph).to_string()


def export_dot(projection: Dict[str, List[Dict[str, Any]]], output_path: Path) -> None:
    """Write ``render_dot(projection)`` to ``output_path``."""
    logger.info("Exporting graph to DOT: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_dot(projection), encoding="utf-8")

    logger.info("DOT export completed: %d nodes, %d edges",
                len(projection["nodes"]), len(projection["edges"]))
