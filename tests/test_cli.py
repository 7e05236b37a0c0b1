"""Tests for the digraph command-line interface."""

import json
import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from digraph import Graph, save_graph
from digraph._cli.main import app

runner = CliRunner()


# --- Fixtures ---


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    """A small weighted DAG saved as JSON."""
    graph = (
        Graph()
        .add_edge("alpha", "beta", 1)
        .add_edge("beta", "gamma", 1)
        .add_edge("alpha", "gamma", 5)
        .add_node("omega")
    )
    path = tmp_path / "graph.json"
    save_graph(graph, path)
    return path


# --- info ---


class TestInfo:
    def test_lists_nodes_and_counts(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["info", str(graph_file)])
        assert result.exit_code == 0, result.output
        for name in ("alpha", "beta", "gamma", "omega"):
            assert name in result.output
        assert "4 nodes, 3 links" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["info", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Graph file not found" in result.output

    def test_invalid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        result = runner.invoke(app, ["info", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


# --- dfs / topo ---


class TestTraversalCommands:
    def test_topo(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["topo", str(graph_file)])
        assert result.exit_code == 0, result.output
        assert "omega\nalpha\nbeta\ngamma\n" in result.output

    def test_dfs_with_source(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["dfs", str(graph_file), "--source", "beta"])
        assert result.exit_code == 0, result.output
        assert "gamma\nbeta\n" in result.output
        assert "alpha" not in result.output.splitlines()

    def test_exclude_sources(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["topo", str(graph_file), "-s", "alpha", "--exclude-sources"])
        assert result.exit_code == 0, result.output
        assert "beta\ngamma\n" in result.output

    def test_verbose(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["--verbose", "topo", str(graph_file)])
        assert result.exit_code == 0, result.output

    def test_graph_from_config(self, graph_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        root = graph_file.parent
        (root / "pyproject.toml").write_text(f"[tool.digraph]\ngraph = '{graph_file.name}'\n")
        monkeypatch.chdir(root)

        result = runner.invoke(app, ["topo"])

        assert result.exit_code == 0, result.output
        assert "alpha\nbeta\ngamma\n" in result.output

    def test_no_graph_configured(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["dfs"])
        assert result.exit_code == 1
        assert "No graph file given" in result.output


# --- path ---


class TestPathCommand:
    def test_shortest_path(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["path", "alpha", "gamma", "--file", str(graph_file)])
        assert result.exit_code == 0, result.output
        assert "alpha -> beta -> gamma" in result.output
        assert "Weight: 2" in result.output

    def test_no_path(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["path", "gamma", "alpha", "-f", str(graph_file)])
        assert result.exit_code == 1
        assert "No path found" in result.output

    def test_unknown_node(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["path", "nowhere", "alpha", "-f", str(graph_file)])
        assert result.exit_code == 1
        assert "Source node 'nowhere' is not in the graph" in result.output

    def test_integer_ids(self, tmp_path: Path) -> None:
        path = tmp_path / "numbers.json"
        save_graph(Graph().add_edge(1, 2, 3).add_edge(2, 3, 4), path)

        result = runner.invoke(app, ["path", "1", "3", "-f", str(path)])

        assert result.exit_code == 0, result.output
        assert "1 -> 2 -> 3" in result.output
        assert "Weight: 7" in result.output


# --- convert ---


class TestConvert:
    def test_json_to_toml(self, graph_file: Path) -> None:
        output = graph_file.with_suffix(".toml")
        result = runner.invoke(app, ["convert", str(graph_file), str(output)])
        assert result.exit_code == 0, result.output

        with output.open("rb") as f:
            converted = tomllib.load(f)
        assert converted == json.loads(graph_file.read_text(encoding="utf-8"))

    def test_output_from_config(self, graph_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        root = graph_file.parent
        (root / "pyproject.toml").write_text("[tool.digraph]\noutput = 'converted.toml'\n")
        monkeypatch.chdir(root)

        result = runner.invoke(app, ["convert", str(graph_file)])

        assert result.exit_code == 0, result.output
        assert (root / "converted.toml").exists()

    def test_unsupported_output(self, graph_file: Path) -> None:
        result = runner.invoke(app, ["convert", str(graph_file), str(graph_file.with_suffix(".csv"))])
        assert result.exit_code == 1
        assert "Unsupported graph file type" in result.output
