"""
Git client implementation for vc_changelog.

This module wraps the single Git operation the changelog needs: reading
the commit log between two revisions. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from vc_changelog.changelog.commit_model import RawCommit


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ASCII unit and record separators keep multi-line bodies intact.
FIELD_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"
LOG_FORMAT = "%H%x1f%s%x1f%b%x1e"


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for reading history from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If git cannot be started, or the command exits with a
            non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            logger.error("Git executable not found: %s", e)
            raise GitError(f"Git executable not found: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    def has_commits(self) -> bool:
        """Return True if ``HEAD`` points at a commit."""
        result = self._run(["rev-parse", "--verify", "--quiet", "HEAD"], check=False)
        return result.returncode == 0

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_log(self, from_ref: Optional[str] = None, to_ref: Optional[str] = None) -> List[RawCommit]:
        """Return the commits between two revisions, most recent first.

        Parameters
        ----------
        from_ref : str, optional
            Exclusive lower bound (tag, branch or hash).
        to_ref : str, optional
            Inclusive upper bound. Defaults to ``HEAD`` when ``from_ref``
            is given.

        Returns
        -------
        List[RawCommit]
            The commits in git log order. Empty when the range is empty.

        Raises
        ------
        GitError
            If a revision cannot be resolved or git fails otherwise.
        """
        if from_ref and not to_ref:
            to_ref = "HEAD"

        if from_ref:
            revision = f"{from_ref}..{to_ref}"
        elif to_ref:
            revision = to_ref
        else:
            if not self.has_commits():
                logger.debug("Repository has no commits yet")
                return []
            revision = "HEAD"

        result = self._run(["log", f"--format={LOG_FORMAT}", "--end-of-options", revision, "--"], check=True)
        commits = self.parse_log(result.stdout)
        logger.debug("Read %d commit(s) for revision %s", len(commits), revision)
        return commits

    @staticmethod
    def parse_log(output: str) -> List[RawCommit]:
        """Parse ``git log`` output produced with :data:`LOG_FORMAT`."""
        commits: List[RawCommit] = []
        for record in output.split(RECORD_SEPARATOR):
            # git puts a newline between records
            record = record.strip("\n")
            if not record:
                continue
            parts = record.split(FIELD_SEPARATOR, 2)
            if len(parts) < 3:
                logger.warning("Ignoring malformed log record: %r", record)
                continue
            commit_hash, header, body = parts
            commits.append(RawCommit(header=header, body=body.strip(), hash=commit_hash.strip()))
        return commits
