"""
Tests for CLI commands — generate, audit, and global options.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from gentx.core.use_cases.generate import GenerateResult
from gentx.main import cli


@pytest.fixture
def config(project: Path) -> Path:
    """A gentx.yml that never consults git."""
    path = project / "gentx.yml"
    path.write_text("require_clean: false\n")
    return path


def _invoke(config: Path, *args: str):
    return CliRunner().invoke(cli, ["--config", str(config), *args])


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "gentx" in result.output
        assert "generate" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestGenerateList:
    def test_list(self):
        result = CliRunner().invoke(cli, ["generate", "list"])
        assert result.exit_code == 0
        assert "dockerignore" in result.output
        assert "gitignore-gentx" in result.output

    def test_list_json(self):
        result = CliRunner().invoke(cli, ["generate", "list", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert {g["name"] for g in data} == {"dockerignore", "editorconfig", "gitignore-gentx"}
        assert data[0]["probes"] == ["exists: .dockerignore"]


class TestGenerateCheck:
    def test_not_installed(self, config: Path):
        result = _invoke(config, "generate", "check", "editorconfig")
        assert result.exit_code == 0
        assert "not installed" in result.output

    def test_installed_json(self, project: Path, config: Path):
        (project / ".editorconfig").write_text("root = true\n")
        result = _invoke(config, "generate", "check", "editorconfig", "--json")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["installed"] is True

    def test_unknown(self, config: Path):
        result = _invoke(config, "generate", "check", "nope")
        assert result.exit_code == 1
        assert "Unknown generator" in result.output


class TestGenerateRun:
    def test_apply(self, project: Path, config: Path):
        result = _invoke(config, "generate", "run", "editorconfig")
        assert result.exit_code == 0
        assert "Applied" in result.output
        assert "+ .editorconfig" in result.output
        assert (project / ".editorconfig").is_file()

    def test_dry_run_shows_diff_and_writes_nothing(self, project: Path, config: Path):
        result = _invoke(config, "generate", "run", "editorconfig", "--dry-run")
        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert "+root = true" in result.output
        assert not (project / ".editorconfig").exists()

    def test_second_run_skipped_then_forced(self, project: Path, config: Path):
        _invoke(config, "generate", "run", "editorconfig")

        skipped = _invoke(config, "generate", "run", "editorconfig")
        assert skipped.exit_code == 0
        assert "Skipped" in skipped.output

        forced = _invoke(config, "generate", "run", "editorconfig", "--force")
        assert forced.exit_code == 0
        assert "~ .editorconfig" in forced.output

    def test_json(self, config: Path):
        result = _invoke(config, "generate", "run", "gitignore-gentx", "--json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["result"]["outcome"] == "applied"
        assert data["result"]["changes"][0]["path"] == ".gitignore"

    def test_unknown_generator(self, config: Path):
        result = _invoke(config, "generate", "run", "nope")
        assert result.exit_code == 1
        assert "Unknown generator" in result.output

    def test_missing_result_exits_cleanly(self, config: Path, monkeypatch):
        monkeypatch.setattr(
            "gentx.core.use_cases.generate.run_generator",
            lambda name, **kwargs: GenerateResult(),
        )
        result = _invoke(config, "generate", "run", "editorconfig")
        assert result.exit_code == 1
        assert "did not run" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_dirty_working_copy_aborts(self, project: Path, monkeypatch):
        config = project / "gentx.yml"
        config.write_text("require_clean: true\n")
        # Not a git repository, so the working copy cannot be shown clean
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(project.parent))
        result = _invoke(config, "generate", "run", "editorconfig")
        assert result.exit_code == 1
        assert "Aborted" in result.output
        assert not (project / ".editorconfig").exists()


class TestAuditLog:
    def test_empty(self, config: Path):
        result = _invoke(config, "audit", "log")
        assert result.exit_code == 0
        assert "No generator runs recorded" in result.output

    def test_lists_runs(self, config: Path):
        _invoke(config, "generate", "run", "editorconfig")
        _invoke(config, "generate", "run", "editorconfig")

        result = _invoke(config, "audit", "log")
        assert result.exit_code == 0
        assert "applied" in result.output
        assert "skipped" in result.output
        assert "Already installed" in result.output

    def test_json_limit(self, config: Path):
        _invoke(config, "generate", "run", "editorconfig")
        _invoke(config, "generate", "run", "dockerignore")

        result = _invoke(config, "audit", "log", "-n", "1", "--json")
        [entry] = json.loads(result.stdout)
        assert entry["generator"] == "dockerignore"
