"""FastAPI application serving the dependency viewer."""

from __future__ import annotations

import logging
import threading
import webbrowser
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, Response
from fastapi.staticfiles import StaticFiles

from nmgraph import __version__

logger = logging.getLogger("nmgraph.web.app")

STATIC_DIR = Path(__file__).parent / "static"


def create_app(graph: Dict[str, Any], modules: Optional[Dict[str, Any]] = None) -> FastAPI:
    """Build a read-only app exposing one analysis result.

    Args:
        graph: Edge projection shown by the viewer.
        modules: Path projection, served under ``/api/modules``.
    """
    app = FastAPI(title="nmgraph", version=__version__)

    @app.middleware("http")
    async def no_cache(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["Cache-Control"] = "no-cache"
        return response

    @app.get("/api/graph")
    def get_graph() -> Dict[str, Any]:
        return graph

    @app.get("/api/modules")
    def get_modules() -> Dict[str, Any]:
        return modules or {}

    # Static files (must be last: catches all unmatched routes)
    app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="static")
    return app


def serve(
    graph: Dict[str, Any],
    modules: Optional[Dict[str, Any]] = None,
    host: str = "127.0.0.1",
    port: int = 8420,
    open_browser: bool = True,
) -> None:
    """Run the viewer until interrupted."""
    import uvicorn

    url = f"http://{host}:{port}"
    logger.info("Serving dependency viewer at %s", url)

    if open_browser:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()

    uvicorn.run(create_app(graph, modules), host=host, port=port, log_level="warning")
