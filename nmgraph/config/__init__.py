"""Configuration schema and loading for nmgraph."""

from .loader import load_analyze_config
from .schema import AnalyzeConfig, ServeConfig

__all__ = [
    "AnalyzeConfig",
    "ServeConfig",
    "load_analyze_config",
]
