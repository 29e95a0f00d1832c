"""
Data models for changelog generation.

A :class:`RawCommit` is what the log retrieval hands over; a
:class:`ClassifiedCommit` is the parsed form that the renderer sorts,
groups and prints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class RawCommit:
    """A commit as read from the version control log.

    Attributes
    ----------
    header : str
        First line of the commit message.
    body : str
        Remainder of the commit message (may be empty).
    hash : str
        Commit identifier.
    """

    header: str
    body: str
    hash: str


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit whose header matched the ``type(scope): message`` shape.

    Attributes
    ----------
    type : str
        Resolved type label, e.g. ``"Bug fixes"``, or an unformatted
        marker such as ``"[UNFORMATTED TYPE] wip"``.
    scope : Optional[str]
        Parenthetical scope from the header, ``None`` when absent.
    message : str
        Free text after the colon.
    hash : str
        Commit identifier.
    closed_issues : Tuple[str, ...]
        Issue references (``#<n>``) in first-seen order, without duplicates.
    """

    type: str
    scope: Optional[str]
    message: str
    hash: str
    closed_issues: Tuple[str, ...] = field(default_factory=tuple)
