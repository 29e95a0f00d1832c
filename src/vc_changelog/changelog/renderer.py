"""
Markdown rendering of classified commits.

Commits are sorted once, grouped by type label in the order the labels
first appear, and each group is written as a level-3 heading followed by
a bullet list.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, List, Mapping, Tuple

from vc_changelog.changelog.classifier import classify_commits
from vc_changelog.changelog.commit_model import ClassifiedCommit, RawCommit
from vc_changelog.changelog.type_labels import is_unformatted


def sort_key(commit: ClassifiedCommit) -> Tuple[bool, str, bool, str]:
    """Key ordering recognised types first, then by label, scoped first, then by scope."""
    return (
        is_unformatted(commit.type),
        commit.type,
        commit.scope is None,
        commit.scope or "",
    )


def sort_commits(commits: Iterable[ClassifiedCommit]) -> List[ClassifiedCommit]:
    # sorted() is stable: unscoped commits of one type keep arrival order
    return sorted(commits, key=sort_key)


def group_commits(commits: Iterable[ClassifiedCommit]) -> Dict[str, List[ClassifiedCommit]]:
    grouped: Dict[str, List[ClassifiedCommit]] = {}
    for commit in commits:
        grouped.setdefault(commit.type, []).append(commit)
    return grouped


def format_entry(commit: ClassifiedCommit) -> str:
    """Format one commit as a markdown list item.

    Example: ``- **ui**: add dark mode [1a2b3c, #3, #7]``
    """
    entry = "- "
    if commit.scope:
        entry += f"**{commit.scope}**: "
    entry += f"{commit.message} [{commit.hash}"
    if commit.closed_issues:
        entry += ", " + ", ".join(commit.closed_issues)
    entry += "]"
    return entry


def render_changelog(commits: Iterable[ClassifiedCommit]) -> List[str]:
    """Render classified commits into markdown lines.

    Each group contributes a blank line, a ``### <label>`` heading, a
    blank line and one entry per commit. No commits means no lines.
    """
    lines: List[str] = []
    for label, group in group_commits(sort_commits(commits)).items():
        lines.extend(["", f"### {label}", ""])
        lines.extend(format_entry(commit) for commit in group)
    return lines


def format_changelog(lines: List[str], line_separator: str = os.linesep) -> str:
    return line_separator.join(lines)


def generate_changelog(
    raws: Iterable[RawCommit],
    type_labels: Mapping[str, str],
    line_separator: str = os.linesep,
) -> str:
    """Classify raw commits and render the full changelog text.

    Returns an empty string when no commit survives classification.
    """
    return format_changelog(render_changelog(classify_commits(raws, type_labels)), line_separator)
