"""
Parsing and classification of Conventional Commit headers.

Headers are matched against a single-line ``type(scope): message``
pattern. Commits that do not match are skipped rather than rejected, so
merge commits and free-form messages simply do not show up in the
changelog.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Mapping, Optional, Tuple

from vc_changelog.changelog.commit_model import ClassifiedCommit, RawCommit
from vc_changelog.changelog.type_labels import resolve_type


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


HEADER_PATTERN = re.compile(r"^([a-z]+)(\(([a-zA-Z0-9_\s-]+)\))?:\s*(.+)")
ISSUE_PATTERN = re.compile(r"#([0-9]+)", re.IGNORECASE)


def parse_header(header: str) -> Optional[Tuple[str, Optional[str], str]]:
    """Split a commit header into ``(type_code, scope, message)``.

    Returns ``None`` when the header does not follow the expected shape.
    """
    matched = HEADER_PATTERN.match(header)
    if not matched:
        return None
    return matched.group(1), matched.group(3), matched.group(4)


def _find_issues(text: str) -> List[str]:
    return [f"#{number}" for number in ISSUE_PATTERN.findall(text or "")]


def extract_closed_issues(header: str, body: str) -> Tuple[str, ...]:
    """Collect ``#<n>`` references from the body, then the header.

    Duplicates are dropped, keeping the first occurrence.
    """
    found = _find_issues(body) + _find_issues(header)
    return tuple(dict.fromkeys(found))


def classify_commit(
    raw: RawCommit, type_labels: Mapping[str, str]
) -> Optional[ClassifiedCommit]:
    """Classify a single commit, or return ``None`` if its header is malformed."""
    parsed = parse_header(raw.header)
    if parsed is None:
        return None
    code, scope, message = parsed
    return ClassifiedCommit(
        type=resolve_type(code, type_labels),
        scope=scope,
        message=message,
        hash=raw.hash,
        closed_issues=extract_closed_issues(raw.header, raw.body),
    )


def classify_commits(
    raws: Iterable[RawCommit], type_labels: Mapping[str, str]
) -> List[ClassifiedCommit]:
    """Classify commits in order, dropping those with malformed headers."""
    classified: List[ClassifiedCommit] = []
    for raw in raws:
        commit = classify_commit(raw, type_labels)
        if commit is None:
            logger.debug("Skipping commit %s with unrecognised header: %r", raw.hash, raw.header)
            continue
        classified.append(commit)
    logger.debug("Classified %d commit(s)", len(classified))
    return classified
