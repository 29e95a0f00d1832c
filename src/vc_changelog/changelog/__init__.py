"""
Changelog generation logic.

This package classifies Conventional Commit messages and renders them as
grouped markdown. See :mod:`vc_changelog.changelog.classifier` and
:mod:`vc_changelog.changelog.renderer` for details.
"""

from .classifier import classify_commits  # noqa: F401
from .commit_model import ClassifiedCommit, RawCommit  # noqa: F401
from .renderer import generate_changelog, render_changelog  # noqa: F401
from .type_labels import build_type_labels  # noqa: F401
