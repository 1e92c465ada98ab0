"""Tests for nmgraph CLI entrypoints."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

import nmgraph.main as main
import nmgraph.web
from nmgraph.cli.analyze import analyze_command


def _args(path: Path, **overrides) -> SimpleNamespace:
    values = {
        "path": str(path),
        "depth": None,
        "json": None,
        "format": "path",
        "dot": None,
        "config": None,
        "workers": None,
        "no_optional": False,
        "no_dev": False,
        "host": None,
        "port": None,
        "no_open": False,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def _console() -> Console:
    return Console(file=io.StringIO(), width=400)


@pytest.fixture
def project(root: Path, make_package) -> Path:
    make_package(root, "app", dependencies={"a": "1"}, dev={"t": "1"})
    make_package(root / "node_modules" / "a", "a", dependencies={"b": "1"})
    make_package(root / "node_modules" / "b", "b")
    make_package(root / "node_modules" / "t", "t")
    return root


def test_main_dispatches_analyze_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Verify that `main` parses args and dispatches analyze_command."""

    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    captured: dict[str, object] = {}

    def fake_analyze_command(args) -> int:
        captured["args"] = args
        return 0

    monkeypatch.setattr(main, "analyze_command", fake_analyze_command)
    monkeypatch.setattr(
        sys, "argv", ["nmgraph", "analyze", str(tmp_path), "-d", "3", "-j", str(tmp_path)]
    )

    assert main.main() == 0
    parsed = captured["args"]
    assert parsed.path == str(tmp_path)
    assert parsed.depth == 3
    assert parsed.json == str(tmp_path)
    assert parsed.format == "path"


def test_main_requires_command(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Missing subcommands make the CLI print help and fail."""

    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(sys, "argv", ["nmgraph"])

    assert main.main() == 1
    assert "Nmgraph" in capsys.readouterr().out


@pytest.mark.parametrize("depth", ["abc", "0"])
def test_depth_must_be_positive_integer(monkeypatch: pytest.MonkeyPatch, depth: str) -> None:
    monkeypatch.setattr(sys, "argv", ["nmgraph", "analyze", ".", "-d", depth])

    with pytest.raises(SystemExit):
        main.build_parser().parse_args()


def test_analyze_saves_json(project: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    console = _console()

    exit_code = analyze_command(_args(project, json=str(out_dir)), console=console)

    assert exit_code == 0
    data = json.loads((out_dir / "dep-analyze.json").read_text(encoding="utf-8"))
    assert set(data) == {
        str(project),
        str(project / "node_modules" / "a"),
        str(project / "node_modules" / "b"),
        str(project / "node_modules" / "t"),
    }
    assert data[str(project / "node_modules" / "t")]["dev"] is True
    output = console.file.getvalue()
    assert f"saved in {out_dir / 'dep-analyze.json'} successfully." in output
    assert "3 dependencies in total." in output


def test_analyze_saves_other_projections(project: Path, tmp_path: Path) -> None:
    exit_code = analyze_command(
        _args(project, json=str(tmp_path), format="graph", dot=str(tmp_path / "deps.dot")),
        console=_console(),
    )

    assert exit_code == 0
    data = json.loads((tmp_path / "dep-analyze.json").read_text(encoding="utf-8"))
    assert len(data["nodes"]) == 4
    assert len(data["edges"]) == 3
    assert "digraph" in (tmp_path / "deps.dot").read_text(encoding="utf-8")


def test_analyze_reports_truncation(project: Path, tmp_path: Path) -> None:
    console = _console()

    exit_code = analyze_command(_args(project, json=str(tmp_path), depth=1), console=console)

    assert exit_code == 0
    assert "max recursive depth (1) reached" in console.file.getvalue()


def test_analyze_missing_dependency_fails(
    root: Path, make_package, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    make_package(root, "app", dependencies={"ghost": "1"})
    out_dir = tmp_path / "out"

    exit_code = analyze_command(_args(root, json=str(out_dir)), console=_console())

    assert exit_code == 1
    assert not (out_dir / "dep-analyze.json").exists()
    assert "cannot find package 'ghost'" in caplog.text


def test_analyze_rejects_missing_directory(tmp_path: Path) -> None:
    assert analyze_command(_args(tmp_path / "nope", json=str(tmp_path)), console=_console()) == 1


def test_analyze_rejects_invalid_config(project: Path, tmp_path: Path) -> None:
    exit_code = analyze_command(
        _args(project, json=str(tmp_path), config='{"workers": 0}'), console=_console()
    )

    assert exit_code == 1


def test_analyze_serves_viewer_without_outputs(
    project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    captured: dict[str, object] = {}

    def fake_serve(graph, modules, **kwargs) -> None:
        captured.update(graph=graph, modules=modules, **kwargs)

    monkeypatch.setattr(nmgraph.web, "serve", fake_serve)

    exit_code = analyze_command(_args(project, port=9999, no_open=True), console=_console())

    assert exit_code == 0
    assert captured["port"] == 9999
    assert captured["open_browser"] is False
    assert len(captured["graph"]["nodes"]) == 4
    assert str(project) in captured["modules"]
