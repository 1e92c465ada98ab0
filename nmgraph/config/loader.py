"""Helpers for loading analysis configuration from TOML/JSON sources.

`load_analyze_config` accepts:

* None -> default AnalyzeConfig
* dict -> AnalyzeConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from nmgraph.config.schema import AnalyzeConfig
from nmgraph.graph.errors import ConfigError

logger = logging.getLogger("nmgraph.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _parse_toml(text: str) -> Dict[str, Any]:
    """Parse TOML text into a dict.

    Uses stdlib tomllib on Python 3.11+ and `tomli` on older interpreters.
    """
    try:
        import tomllib  # type: ignore[attr-defined]
    except ImportError:  # pragma: no cover - Python <3.11 path
        import tomli as tomllib  # type: ignore[import-not-found,no-redef]
    return tomllib.loads(text)


def _detect_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith(("{", "[")) else "toml"


def load_analyze_config(source: ConfigSource) -> AnalyzeConfig:
    """Load AnalyzeConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns the default AnalyzeConfig
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        AnalyzeConfig instance.

    Raises:
        ConfigError: If the source cannot be read, parsed or validated.
    """
    if source is None:
        logger.debug("No config source provided; using default AnalyzeConfig")
        return AnalyzeConfig()

    data: Optional[Any]
    if isinstance(source, dict):
        logger.debug("Loading AnalyzeConfig from provided dict")
        data = source
    elif isinstance(source, (str, Path)):
        path = Path(source)
        try:
            is_file = path.is_file()
        except OSError:
            # inline text too long to be a path
            is_file = False

        if is_file:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigError(f"Cannot read config file {path}: {e}") from e
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _detect_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _detect_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        try:
            data = json.loads(text) if fmt == "json" else _parse_toml(text)
        except ValueError as e:
            # JSONDecodeError and TOMLDecodeError both derive from ValueError
            raise ConfigError(f"Invalid {fmt.upper()} configuration: {e}") from e
    else:
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    if not isinstance(data, dict):
        raise ConfigError("Top-level configuration must be a mapping/dict")

    try:
        return AnalyzeConfig.from_dict(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


__all__ = ["ConfigSource", "load_analyze_config"]
