import logging
import shutil
import subprocess
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the CLI's logging configuration after each test.

    ``main`` attaches a root handler bound to the runner's stderr, which
    is closed once the invocation ends.
    """
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("vc_changelog"):
            logging.getLogger(name).propagate = False


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        [
            "git",
            "-c", "user.name=Test",
            "-c", "user.email=test@example.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path):
    """Create a throwaway Git repository with a small conventional history.

    Yields ``(path, commit, git)`` where ``commit(message)`` records an
    empty commit and returns its full hash, and ``git(*args)`` runs any
    other git command in the repository.
    """
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")

    def commit(message: str) -> str:
        _git(repo, "commit", "-q", "--allow-empty", "-m", message)
        return _git(repo, "rev-parse", "HEAD")

    yield repo, commit, lambda *args: _git(repo, *args)
