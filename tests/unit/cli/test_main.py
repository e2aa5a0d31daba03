"""Tests for CLI main module."""

from __future__ import annotations

import importlib
import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from reasoning_structures import __version__
from reasoning_structures.cli.main import (
    CLIContext,
    app,
    get_cli_context,
    get_settings_from_config,
    setup_logging_from_verbosity,
    version_callback,
)
from reasoning_structures.config import Settings

main_module = importlib.import_module("reasoning_structures.cli.main")

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_cli_context(monkeypatch: pytest.MonkeyPatch):
    """Start every test without a CLI context."""
    monkeypatch.setattr(main_module, "_cli_context", None)


class TestCLIContext:
    """Tests for CLIContext class."""

    def test_initialization(self) -> None:
        settings = MagicMock(spec=Settings)
        logger = MagicMock(spec=logging.Logger)

        ctx = CLIContext(settings=settings, logger=logger, verbose=2)

        assert ctx.settings is settings
        assert ctx.logger is logger
        assert ctx.verbose == 2

    def test_get_cli_context_raises_when_not_initialized(self) -> None:
        """Test get_cli_context raises Exit when context not set."""
        with pytest.raises(typer.Exit) as exc_info:
            get_cli_context()
        assert exc_info.value.exit_code == 1


class TestHelpers:
    """Tests for configuration and logging helpers."""

    def test_settings_without_config(self) -> None:
        assert isinstance(get_settings_from_config(None), Settings)

    def test_settings_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit):
            get_settings_from_config(str(tmp_path / "missing.env"))

    def test_settings_from_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "app.env"
        config_file.write_text("REASONING_STRUCTURES_MAX_SESSIONS=9\n")

        assert get_settings_from_config(str(config_file)).max_sessions == 9

    def test_invalid_config_value(self, tmp_path: Path) -> None:
        config_file = tmp_path / "app.env"
        config_file.write_text("REASONING_STRUCTURES_MAX_SESSIONS=0\n")

        with pytest.raises(typer.Exit):
            get_settings_from_config(str(config_file))

    def test_verbosity_switches_to_debug(self, settings: Settings) -> None:
        assert setup_logging_from_verbosity(1, settings).level == logging.DEBUG
        assert setup_logging_from_verbosity(0, settings).level == logging.INFO

    def test_version_callback_noop(self) -> None:
        version_callback(False)


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"reasoning-structures version {__version__}" in result.output


class TestInspectCommand:
    """Tests for the inspect command."""

    def test_table(self, diamond_snapshot_file: Path) -> None:
        result = runner.invoke(app, ["inspect", str(diamond_snapshot_file)])

        assert result.exit_code == 0, result.output
        assert "Graph: diamond.json" in result.output
        assert "Topological Order" in result.output

    def test_json(self, diamond_snapshot_file: Path) -> None:
        result = runner.invoke(app, ["inspect", str(diamond_snapshot_file), "--json"])

        assert result.exit_code == 0, result.output
        facts = json.loads(result.stdout)
        assert facts["total_nodes"] == 4
        assert facts["total_edges"] == 4
        assert facts["has_cycle"] is False
        assert facts["topological_order"][0] == "a"
        assert facts["clusters"] == [["a", "b", "c", "d"]]

    def test_json_top_k(self, diamond_snapshot_file: Path) -> None:
        result = runner.invoke(app, ["inspect", str(diamond_snapshot_file), "--json", "-k", "2"])
        assert len(json.loads(result.stdout)["critical_nodes"]) == 2

    def test_cyclic(self, cyclic_snapshot_file: Path) -> None:
        result = runner.invoke(app, ["inspect", str(cyclic_snapshot_file), "--json"])

        facts = json.loads(result.stdout)
        assert facts["has_cycle"] is True
        assert facts["topological_order"] is None

    def test_cyclic_table(self, cyclic_snapshot_file: Path) -> None:
        result = runner.invoke(app, ["inspect", str(cyclic_snapshot_file)])

        assert result.exit_code == 0, result.output
        assert "cyclic" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["inspect", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        result = runner.invoke(app, ["inspect", str(path)])

        assert result.exit_code == 1

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"nodes": {"\xff": 1}}')

        result = runner.invoke(app, ["inspect", str(path)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_corrupt_snapshot(self, tmp_path: Path, diamond_snapshot_file: Path) -> None:
        """An edge to an unknown node is rejected like a live add_edge."""
        data = json.loads(diamond_snapshot_file.read_text())
        data["edges"].append({"source": "a", "target": "ghost"})
        path = tmp_path / "corrupt.json"
        path.write_text(json.dumps(data))

        result = runner.invoke(app, ["inspect", str(path)])

        assert result.exit_code == 1

    def test_malformed_snapshot(self, tmp_path: Path) -> None:
        path = tmp_path / "malformed.json"
        path.write_text(json.dumps({"nodes": [1, 2], "edges": []}))

        result = runner.invoke(app, ["inspect", str(path)])

        assert result.exit_code == 1


class TestReflectCommand:
    """Tests for the reflect command."""

    def test_reflect_with_note(self, diamond_snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["reflect", str(diamond_snapshot_file), "--note", "check merge weights"]
        )

        assert result.exit_code == 0, result.output
        assert result.output.startswith("Graph of Thoughts Reflection")
        assert "Total connections: 4" in result.output
        assert "User Reflection:\ncheck merge weights" in result.output

    def test_reflect_cyclic(self, cyclic_snapshot_file: Path) -> None:
        result = runner.invoke(app, ["reflect", str(cyclic_snapshot_file)])
        assert "Contains cycles: yes" in result.output
