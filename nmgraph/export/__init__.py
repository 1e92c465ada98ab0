"""Writers and renderers for analysis results."""

from .dot import export_dot, render_dot
from .json import export_json

__all__ = ["export_dot", "export_json", "render_dot"]
