"""Public graph API surface."""

from nmgraph.graph.builder import BuildResult, GraphBuilder, build_graph
from nmgraph.graph.errors import (
    AnalysisError,
    ConfigError,
    ManifestError,
    ResolutionError,
)
from nmgraph.graph.manager import ModuleGraph
from nmgraph.graph.manifest import ManifestReader
from nmgraph.graph.models import Manifest, ModuleIdentity, ModuleRecord
from nmgraph.graph.projection import (
    PROJECTIONS,
    graph_edge_set,
    identity_edge_set,
    path_edge_set,
    project,
    project_by_identity,
    project_by_path,
    project_edges,
)
from nmgraph.graph.resolver import PathResolver

__all__ = [
    "AnalysisError",
    "BuildResult",
    "ConfigError",
    "GraphBuilder",
    "Manifest",
    "ManifestError",
    "ManifestReader",
    "ModuleGraph",
    "ModuleIdentity",
    "ModuleRecord",
    "PROJECTIONS",
    "PathResolver",
    "ResolutionError",
    "build_graph",
    "graph_edge_set",
    "identity_edge_set",
    "path_edge_set",
    "project",
    "project_by_identity",
    "project_by_path",
    "project_edges",
]
