"""
Command-line entry point tests for scripts/build_graph.py.
"""

import importlib.util
import json
from pathlib import Path

import pytest

from learngraph.config import ENV_KEYS

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "build_graph.py"


@pytest.fixture
def build_graph_script(monkeypatch):
    for env_name in ENV_KEYS.values():
        monkeypatch.setenv(env_name, "")
        monkeypatch.delenv(env_name)
    spec = importlib.util.spec_from_file_location("build_graph_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestBuildGraphScript:
    """Test the CLI wrapper."""

    def test_compiles_catalog(self, build_graph_script, tmp_path, csv_text, capsys):
        catalog = tmp_path / "resources.csv"
        catalog.write_text(csv_text, encoding="utf-8")
        output = tmp_path / "graph.json"
        report = tmp_path / "report.md"

        code = build_graph_script.main([
            "--input", str(catalog),
            "--output", str(output),
            "--report", str(report),
        ])

        assert code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["moduleOrder"] == [
            "math-algebra",
            "math-calculus",
        ]
        assert report.exists()
        assert "Modules: 2" in capsys.readouterr().out

    def test_missing_input(self, build_graph_script, tmp_path, capsys):
        code = build_graph_script.main([
            "--input", str(tmp_path / "missing.csv"),
            "--output", str(tmp_path / "graph.json"),
        ])
        assert code == 1
        assert "ERROR: Input file not found" in capsys.readouterr().out
        assert not (tmp_path / "graph.json").exists()

    def test_cycle(self, build_graph_script, tmp_path, capsys):
        catalog = tmp_path / "resources.csv"
        catalog.write_text(
            "Resource Name,Area,Module,Difficulty,Prerequisite module(s)\n"
            "x,Math,A,Beginner,B\n"
            "y,Math,B,Beginner,A\n",
            encoding="utf-8",
        )
        code = build_graph_script.main([
            "--input", str(catalog),
            "--output", str(tmp_path / "graph.json"),
        ])
        assert code == 1
        assert "cycle in module prerequisites" in capsys.readouterr().out
        assert not (tmp_path / "graph.json").exists()

    def test_missing_config_file(self, build_graph_script, tmp_path, capsys):
        code = build_graph_script.main([
            "--config", str(tmp_path / "nope.yaml"),
            "--output", str(tmp_path / "graph.json"),
        ])
        assert code == 1
        assert "ERROR: Invalid settings" in capsys.readouterr().out
        assert not (tmp_path / "graph.json").exists()

    def test_malformed_config_file(self, build_graph_script, tmp_path, capsys):
        config = tmp_path / "build.yaml"
        config.write_text("output_path: [unclosed\n", encoding="utf-8")
        code = build_graph_script.main(["--config", str(config)])
        assert code == 1
        assert "ERROR: Invalid settings" in capsys.readouterr().out

    def test_invalid_delimiter(self, build_graph_script, tmp_path, csv_text, capsys):
        catalog = tmp_path / "resources.csv"
        catalog.write_text(csv_text, encoding="utf-8")
        code = build_graph_script.main([
            "--input", str(catalog),
            "--output", str(tmp_path / "graph.json"),
            "--delimiter", ";;",
        ])
        assert code == 1
        assert "ERROR: Invalid settings" in capsys.readouterr().out
        assert not (tmp_path / "graph.json").exists()
