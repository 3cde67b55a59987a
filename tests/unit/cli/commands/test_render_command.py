"""Tests for the render and sequence commands."""

import json
import subprocess
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from ditakit import __version__
from ditakit.cli.main import app

GRAPH_YAML = """\
container: {id: 1000, type: dita.topicmap, value: User Guide}
topics:
  - {id: 1, type: dita.processor, children: {dita.output_format: html5}}
  - {id: 2, type: dita.processor}
  - {id: 10, type: dita.topic, value: Introduction}
  - {id: 11, type: dita.topic, value: Installation}
relations:
  - kind: dita.processor_start
    players: {dita.processor: 1, dita.start: 10}
  - kind: dita.sequence
    players: {dita.predecessor: 10, dita.successor: 11}
"""


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "guide.yaml"
    path.write_text(GRAPH_YAML, encoding="utf-8")
    return path


@pytest.fixture
def mock_run():
    with patch("ditakit.toolchain.processor.subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        yield run


class TestVersion:
    """Tests for the version flag."""

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestSequenceCommand:
    """Tests for the sequence command."""

    def test_shows_order(self, runner, graph_file):
        result = runner.invoke(app, ["sequence", str(graph_file), "-p", "1"])

        assert result.exit_code == 0
        assert result.stdout.index("Introduction") < result.stdout.index("Installation")

    def test_no_start_topic(self, runner, graph_file):
        """Processor 2 has no start relation."""
        result = runner.invoke(app, ["sequence", str(graph_file), "-p", "2"])

        assert result.exit_code == 1
        assert "No start topic" in result.stdout

    def test_missing_graph_file(self, runner, tmp_path):
        result = runner.invoke(app, ["sequence", str(tmp_path / "nope.yaml"), "-p", "1"])

        assert result.exit_code == 2

    def test_writes_task_log(self, runner, graph_file, tmp_path):
        runner.invoke(app, ["sequence", str(graph_file), "-p", "1"])

        assert list((tmp_path / ".logs").glob("sequence_*.log"))


class TestRenderCommand:
    """Tests for the render command."""

    def test_render(self, runner, graph_file, installed_toolchain, tmp_path, mock_run):
        result = runner.invoke(
            app,
            [
                "render",
                str(graph_file),
                "-p",
                "1",
                "-o",
                str(tmp_path / "site"),
                "--install-dir",
                str(installed_toolchain),
                "--temp-dir",
                str(tmp_path / "work"),
            ],
        )

        assert result.exit_code == 0, result.stdout
        assert "Rendered to" in result.stdout
        assert (tmp_path / "work" / "1000.xml").is_file()
        cmd = mock_run.call_args.args[0]
        assert "--format=html5" in cmd
        assert f"--output={tmp_path / 'site'}" in cmd

    def test_render_failure(self, runner, graph_file, installed_toolchain, tmp_path, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["dita"], stderr="bad map")

        result = runner.invoke(
            app,
            [
                "render",
                str(graph_file),
                "-p",
                "1",
                "--install-dir",
                str(installed_toolchain),
                "--temp-dir",
                str(tmp_path / "work"),
                "-o",
                str(tmp_path / "site"),
            ],
        )

        assert result.exit_code == 1
        assert "Error:" in result.stdout

    def test_missing_output_format(
        self, runner, graph_file, installed_toolchain, tmp_path, mock_run
    ):
        (tmp_path / "guide.yaml").write_text(
            GRAPH_YAML.replace("dita.processor: 1, dita.start", "dita.processor: 2, dita.start"),
            encoding="utf-8",
        )

        result = runner.invoke(
            app,
            [
                "render",
                str(graph_file),
                "-p",
                "2",
                "--install-dir",
                str(installed_toolchain),
                "--temp-dir",
                str(tmp_path / "work"),
                "-o",
                str(tmp_path / "site"),
            ],
        )

        assert result.exit_code == 1
        assert "Output format" in result.stdout
        mock_run.assert_not_called()

    def test_json_task_log(self, runner, graph_file, tmp_path, monkeypatch):
        """DITAKIT_LOG_FORMAT=json switches the task log to JSON lines."""
        monkeypatch.setenv("DITAKIT_LOG_FORMAT", "json")

        runner.invoke(app, ["sequence", str(graph_file), "-p", "1"])

        (log_file,) = (tmp_path / ".logs").glob("sequence_*.log")
        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert any(r["event"].startswith("Task Configuration") for r in records)
