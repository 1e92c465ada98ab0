"""Tests for the package.json reader."""

import json
from pathlib import Path

import pytest

from nmgraph.graph.errors import ManifestError
from nmgraph.graph.manifest import ManifestReader


def _write(directory: Path, content: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "package.json").write_text(content, encoding="utf-8")
    return directory


def test_reads_all_dependency_maps(root: Path) -> None:
    _write(
        root,
        json.dumps(
            {
                "name": "app",
                "version": "1.2.3",
                "dependencies": {"a": "^1.0.0"},
                "devDependencies": {"b": "2.x"},
                "optionalDependencies": {"c": "*"},
                "scripts": {"test": "jest"},
            }
        ),
    )

    manifest = ManifestReader().read(root)

    assert manifest.name == "app"
    assert manifest.version == "1.2.3"
    assert manifest.dependencies == {"a": "^1.0.0"}
    assert manifest.dev_dependencies == {"b": "2.x"}
    assert manifest.optional_dependencies == {"c": "*"}


def test_missing_fields_fall_back_to_defaults(tmp_path: Path) -> None:
    """Name defaults to the directory name and version to 0.0.0."""
    directory = _write(tmp_path / "unnamed", "{}")

    manifest = ManifestReader().read(directory)

    assert manifest.name == "unnamed"
    assert manifest.version == "0.0.0"
    assert manifest.dependencies == {}


def test_missing_name_keeps_package_scope(tmp_path: Path) -> None:
    directory = _write(tmp_path / "node_modules" / "@scope" / "pkg", '{"version": "2.0.0"}')

    manifest = ManifestReader().read(directory)

    assert manifest.name == "@scope/pkg"
    assert manifest.version == "2.0.0"


def test_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestError) as excinfo:
        ManifestReader().read(tmp_path)
    assert excinfo.value.path == str(tmp_path)
    assert "not found" in excinfo.value.reason


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        '{"name": "x", "version": "1.0.0", "dependencies": ["a", "b"]}',
        '{"name": 5, "version": "1.0.0"}',
    ],
)
def test_malformed_manifest(tmp_path: Path, content: str) -> None:
    directory = _write(tmp_path / "bad", content)

    with pytest.raises(ManifestError):
        ManifestReader().read(directory)
