import io
import shutil

import pytest
import logging

from .git_repo import GitRepoBuilder


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("gitsemver")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream  # Yield the stream to the test function

    # Cleanup after the test
    logger.removeHandler(handler)
    log_stream.close()


# git fixtures


@pytest.fixture
def git_repo(tmp_path):
    """Fixture providing an empty repository on branch 'main'."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    return GitRepoBuilder(tmp_path / "repo")


@pytest.fixture
def git_repo_factory(tmp_path):
    """Fixture providing a function that creates repositories on any branch."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    def _create(name: str, branch: str = "main") -> GitRepoBuilder:
        return GitRepoBuilder(tmp_path / name, branch=branch)

    return _create
