"""Tests for the version command."""

import json
import logging

import pytest
from click.testing import CliRunner

from gitsemver.cli.main import cli


def parse_record(output: str) -> dict:
    return dict(line.split("=", 1) for line in output.strip().splitlines())


@pytest.fixture
def runner():
    return CliRunner()


@pytest.mark.git
class TestVersionCommand:
    def test_text_output(self, runner, git_repo):
        git_repo.commit()
        git_repo.tag("1.0.5")
        git_repo.branch("feature/foo")
        git_repo.commit()

        result = runner.invoke(cli, ["version", "--repo", str(git_repo.path)])

        assert result.exit_code == 0, result.output
        assert parse_record(result.output) == {
            "version": "1.0.6-foo.0",
            "major": "1",
            "minor": "0",
            "patch": "6",
            "prerelease": "foo.0",
            "is-prerelease": "true",
        }

    def test_json_output_with_version_prefix(self, runner, git_repo, tmp_path):
        git_repo.commits(2)
        config = tmp_path / "semver.yml"
        config.write_text("versionPrefix: v\n")

        result = runner.invoke(
            cli,
            [
                "version",
                "-r",
                str(git_repo.path),
                "-c",
                str(config),
                "--format",
                "json",
            ],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["version"] == "v1.0.1"
        assert data["is-prerelease"] == "false"

    def test_branch_from_environment(self, runner, git_repo):
        git_repo.commit()
        git_repo.tag("2.1.0")
        git_repo.commit()
        git_repo.detach()

        result = runner.invoke(
            cli,
            ["version", "--repo", str(git_repo.path)],
            env={"GITSEMVER_BRANCH": "feature/env"},
        )

        assert result.exit_code == 0, result.output
        assert parse_record(result.output)["version"] == "2.1.1-env.0"

    def test_out_file(self, runner, git_repo, tmp_path):
        git_repo.commit()
        out = tmp_path / "version.env"

        result = runner.invoke(
            cli, ["version", "--repo", str(git_repo.path), "--out", str(out)]
        )

        assert result.exit_code == 0
        assert parse_record(out.read_text())["version"] == "1.0.0"

    def test_empty_repository_fails(self, runner, git_repo, caplog):
        with caplog.at_level(logging.ERROR, logger="gitsemver"):
            result = runner.invoke(cli, ["version", "--repo", str(git_repo.path)])

        assert result.exit_code == 1
        assert "version=" not in result.output
        assert "error [history]" in caplog.text
        assert "no commits" in caplog.text

    def test_invalid_branch_fails(self, runner, git_repo, caplog):
        git_repo.commit()
        with caplog.at_level(logging.ERROR, logger="gitsemver"):
            result = runner.invoke(
                cli, ["version", "--repo", str(git_repo.path), "--branch", "???"]
            )

        assert result.exit_code == 1
        assert "version=" not in result.output
        assert "error [branch]" in caplog.text
        assert "Branch: '???'" in caplog.text

    def test_invalid_config_fails(self, runner, git_repo, caplog):
        git_repo.commit()
        (git_repo.path / ".gitsemver.yml").write_text("initialVersion: 1.0\n")
        with caplog.at_level(logging.ERROR, logger="gitsemver"):
            result = runner.invoke(cli, ["version", "--repo", str(git_repo.path)])

        assert result.exit_code == 1
        assert "error [config]" in caplog.text
        assert "initialVersion" in caplog.text

    def test_no_fail_on_error_emits_sentinel(self, runner, git_repo, caplog):
        with caplog.at_level(logging.WARNING, logger="gitsemver"):
            result = runner.invoke(
                cli,
                ["version", "--repo", str(git_repo.path), "--no-fail-on-error"],
            )

        assert result.exit_code == 0
        record = parse_record(result.output)
        assert record["version"] == "0.0.0"
        assert record["is-prerelease"] == "false"
        assert "error [history]" in caplog.text


@pytest.mark.short
def test_not_a_repository(tmp_path, caplog):
    runner = CliRunner()
    with caplog.at_level(logging.ERROR, logger="gitsemver"):
        result = runner.invoke(cli, ["version", "--repo", str(tmp_path)])

    assert result.exit_code == 1
    assert "error [history]" in caplog.text
    assert "not a git repository" in caplog.text


@pytest.mark.short
def test_help_lists_commands():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    for command in ("version", "tags", "config"):
        assert command in result.output
