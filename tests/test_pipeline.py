"""End-to-end version calculation on real repositories."""

import pytest

from gitsemver.config import Config
from gitsemver.constants import MainBranchBehavior
from gitsemver.pipeline import calculate
from gitsemver.versioning.exceptions import (
    BranchNameError,
    ConfigError,
    EmptyHistoryError,
)
from gitsemver.versioning.version import parse_version

PRE = Config(main_branch_behavior=MainBranchBehavior.Pre)


def version_of(git_repo, **kwargs) -> str:
    return str(calculate(git_repo.path, **kwargs).version)


@pytest.mark.git
class TestMainRelease:
    def test_untagged(self, git_repo):
        git_repo.commit()
        assert version_of(git_repo) == "1.0.0"
        git_repo.commit()
        assert version_of(git_repo) == "1.0.1"

    def test_retag_and_continue(self, git_repo):
        git_repo.commits(2)
        assert version_of(git_repo) == "1.0.1"
        git_repo.tag("2.0.0")
        assert version_of(git_repo) == "2.0.0"
        git_repo.commit()
        assert version_of(git_repo) == "2.0.1"

    def test_master_is_main(self, git_repo_factory):
        repo = git_repo_factory("legacy", branch="master")
        repo.commits(2)
        assert str(calculate(repo.path).version) == "1.0.1"


@pytest.mark.git
class TestMainPre:
    def test_prerelease_then_tag(self, git_repo):
        git_repo.commit()
        assert version_of(git_repo, config=PRE) == "1.0.0-pre.0"
        git_repo.commit()
        assert version_of(git_repo, config=PRE) == "1.0.0-pre.1"
        git_repo.tag("1.0.0")
        assert version_of(git_repo, config=PRE) == "1.0.0"
        git_repo.commit()
        assert version_of(git_repo, config=PRE) == "1.0.1-pre.0"
        git_repo.tag("1.0.1-pre.0")
        git_repo.commit()
        assert version_of(git_repo, config=PRE) == "1.0.1-pre.1"


@pytest.mark.git
class TestFeatureBranch:
    def test_diverged_from_tag(self, git_repo):
        git_repo.commits(2)
        git_repo.tag("1.0.5")
        git_repo.branch("feature/foo")
        assert version_of(git_repo) == "1.0.5"
        git_repo.commit()
        assert version_of(git_repo) == "1.0.6-foo.0"
        git_repo.commit()
        assert version_of(git_repo) == "1.0.6-foo.1"

    def test_main_unaffected_by_feature_commits(self, git_repo):
        git_repo.commit()
        git_repo.tag("1.0.5")
        git_repo.branch("feature/foo")
        git_repo.commits(3)
        git_repo.checkout("main")
        assert version_of(git_repo) == "1.0.5"

    def test_merged_feature_on_main(self, git_repo):
        git_repo.commit()
        git_repo.tag("1.0.5")
        git_repo.branch("feature/foo")
        git_repo.commits(3)
        git_repo.checkout("main")
        git_repo.merge("feature/foo")
        # the merge commit is one step from the tag through its first parent
        assert version_of(git_repo) == "1.0.6"

    def test_invalid_branch_name(self, git_repo):
        git_repo.commit()
        with pytest.raises(BranchNameError):
            calculate(git_repo.path, branch="???")

    def test_branch_override(self, git_repo):
        git_repo.commit()
        git_repo.tag("0.3.0")
        git_repo.commit()
        assert version_of(git_repo, branch="feature/ci-run") == "0.3.1-ci-run.0"


@pytest.mark.git
class TestBaseSelection:
    def test_equal_versions_nearest_wins(self, git_repo):
        git_repo.commit()
        git_repo.tag("1.2.0", annotated=True)
        git_repo.commits(3)
        git_repo.tag("1.2.0+retag")
        git_repo.commit()

        result = calculate(git_repo.path)
        assert result.resolved.tag.name == "1.2.0+retag"
        assert result.resolved.commits_since_tag == 1
        assert str(result.version) == "1.2.1"

    def test_highest_version_wins(self, git_repo):
        git_repo.commit()
        git_repo.tag("3.0.0")
        git_repo.commit()
        git_repo.tag("2.5.0")
        git_repo.commit()
        assert version_of(git_repo) == "3.0.1"

    def test_tag_prefix_from_config_file(self, git_repo):
        (git_repo.path / ".gitsemver.yml").write_text("tagPrefix: v\n")
        git_repo.commit()
        git_repo.tag("v4.1.0")
        git_repo.tag("9.9.9")
        git_repo.commit()
        assert version_of(git_repo) == "4.1.1"


@pytest.mark.git
class TestFailures:
    def test_empty_repository(self, git_repo):
        with pytest.raises(EmptyHistoryError):
            calculate(git_repo.path)

    def test_empty_repository_with_pre_config(self, git_repo):
        with pytest.raises(EmptyHistoryError):
            calculate(git_repo.path, config=PRE)

    def test_invalid_config_file(self, git_repo):
        git_repo.commit()
        (git_repo.path / ".gitsemver.yml").write_text("mainBranchBehavior: maybe\n")
        with pytest.raises(ConfigError) as excinfo:
            calculate(git_repo.path)
        assert excinfo.value.field == "mainBranchBehavior"


@pytest.mark.git
def test_outputs_parse_back(git_repo):
    """The rendered version parses back to the calculated version."""
    git_repo.commit()
    git_repo.tag("1.0.0")
    git_repo.branch("feature/Round-Trip")
    git_repo.commits(2)
    config = Config(version_prefix="v")

    result = calculate(git_repo.path, config=config)
    outputs = result.outputs
    assert outputs.version == "v1.0.1-round-trip.1"
    assert parse_version(outputs.version, prefix="v") == result.version
