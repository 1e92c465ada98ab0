"""JSON export for graph projections."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger("nmgraph.export.json")


def export_json(payload: Any, output_path: Path, indent: int = 2) -> None:
    """Serialize a projection to ``output_path``.

    Args:
        payload: Any projection returned by ``nmgraph.graph.project``.
        output_path: Output file path.
        indent: JSON indentation, None for compact output.
    """
    logger.info("Exporting graph to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=indent, ensure_ascii=False)

    logger.info("JSON export completed: %d entries", len(payload))
