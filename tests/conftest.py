"""Shared fixtures for building node_modules trees on disk."""

from __future__ import annotations

import json
import threading
from collections import Counter
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from nmgraph.graph.manifest import ManifestReader


def _write_package(
    directory: Path,
    name: str,
    version: str = "1.0.0",
    dependencies: Optional[Dict[str, str]] = None,
    dev: Optional[Dict[str, str]] = None,
    optional: Optional[Dict[str, str]] = None,
) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    manifest: Dict[str, object] = {"name": name, "version": version}
    if dependencies is not None:
        manifest["dependencies"] = dependencies
    if dev is not None:
        manifest["devDependencies"] = dev
    if optional is not None:
        manifest["optionalDependencies"] = optional
    (directory / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
    return directory.resolve()


@pytest.fixture
def make_package() -> Callable[..., Path]:
    """Write ``<directory>/package.json`` and return the resolved directory."""
    return _write_package


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Empty project directory, one level below tmp_path."""
    path = tmp_path / "app"
    path.mkdir()
    return path.resolve()


class CountingReader(ManifestReader):
    """ManifestReader that records how often each directory is read."""

    def __init__(self) -> None:
        super().__init__()
        self.reads: Counter = Counter()
        self._lock = threading.Lock()

    def read(self, path):
        with self._lock:
            self.reads[str(path)] += 1
        return super().read(path)


@pytest.fixture
def counting_reader() -> CountingReader:
    return CountingReader()
