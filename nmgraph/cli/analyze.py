"""Analyze command implementation."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console

from nmgraph.cli.report import print_summary
from nmgraph.config import AnalyzeConfig, load_analyze_config
from nmgraph.export import export_dot, export_json
from nmgraph.graph import (
    AnalysisError,
    ConfigError,
    GraphBuilder,
    project,
    project_by_path,
    project_edges,
)

logger = logging.getLogger("nmgraph.cli.analyze")


def _apply_overrides(config: AnalyzeConfig, args) -> AnalyzeConfig:
    """Return a copy of ``config`` with command-line values applied."""
    data = config.to_dict()
    if getattr(args, "depth", None) is not None:
        data["max_depth"] = args.depth
    if getattr(args, "workers", None) is not None:
        data["workers"] = args.workers
    if getattr(args, "no_optional", False):
        data["include_optional"] = False
    if getattr(args, "no_dev", False):
        data["include_dev"] = False
    if getattr(args, "host", None):
        data["serve"]["host"] = args.host
    if getattr(args, "port", None) is not None:
        data["serve"]["port"] = args.port
    if getattr(args, "no_open", False):
        data["serve"]["open_browser"] = False
    try:
        return AnalyzeConfig.from_dict(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid options: {e}") from e


def analyze_command(args, console: Optional[Console] = None) -> int:
    """Execute analyze command.

    Args:
        args: Parsed command-line arguments containing:
            - path: Project directory (holds the root manifest)
            - depth: Maximum recursion depth (optional)
            - json: Directory to save the result in (optional)
            - format: Projection to save (path, identity, graph)
            - dot: DOT output file (optional)
            - config: Configuration source (optional)

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()
    root = Path(args.path).expanduser().resolve()
    logger.debug("path: %s", root)

    try:
        config = _apply_overrides(load_analyze_config(getattr(args, "config", None)), args)
        logger.debug("options: %s", config.to_dict())

        if not root.is_dir():
            logger.error("error: %s is not a directory.", root)
            return 1

        result = GraphBuilder(root, **config.builder_options()).build()
    except AnalysisError as e:
        logger.error("error: %s", e)
        return 1

    print_summary(result, console)

    json_dir = getattr(args, "json", None)
    dot_file = getattr(args, "dot", None)
    try:
        if json_dir is not None:
            file_name = Path(json_dir) / config.output_name
            payload = project(result.graph, getattr(args, "format", None) or "path")
            export_json(payload, file_name)
            console.print(f"saved in {file_name} successfully.")
            console.print(f"{result.graph.stats()['dependencies']} dependencies in total.")
        if dot_file is not None:
            export_dot(project_edges(result.graph), Path(dot_file))
            console.print(f"saved DOT graph in {dot_file} successfully.")
    except OSError as e:
        logger.error("error: cannot write output: %s", e)
        return 1

    if json_dir is None and dot_file is None:
        from nmgraph.web import serve

        serve(
            project_edges(result.graph),
            project_by_path(result.graph),
            host=config.serve.host,
            port=config.serve.port,
            open_browser=config.serve.open_browser,
        )
    return 0
