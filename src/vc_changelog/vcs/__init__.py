"""
Version control system (VCS) integration.

This package contains the Git client used to read the commit history a
changelog is generated from.
"""

from .git_client import GitClient, GitError  # noqa: F401
