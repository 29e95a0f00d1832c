"""
Mapping of Conventional Commit type codes to changelog headings.

The table is built once at startup by :func:`build_type_labels` and
handed to the classifier as a read-only mapping. Aliases point at a
canonical code rather than at a label, so an alias whose target has no
label simply does not resolve.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional


UNFORMATTED_PREFIX = "[UNFORMATTED TYPE]"

DEFAULT_TYPE_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "fix": "Bug fixes",
        "revert": "Reverted commits",
        "refactor": "Refactorings",
        "config": "Configuration",
        "chore": "Maintenance",
        "feat": "Features",
        "docs": "Documentation",
        "perf": "Performance improvements",
        "test": "Testing",
        "ux": "UX",
        "build": "Build",
    }
)

# "rm" has no default label, so the deprecation aliases fall through to
# the unformatted path unless a configuration defines it.
DEFAULT_TYPE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "deprecate": "rm",
        "deprecation": "rm",
        "ci": "build",
        "feature": "feat",
        "tests": "test",
    }
)


def build_type_labels(
    labels: Optional[Mapping[str, str]] = None,
    aliases: Optional[Mapping[str, str]] = None,
) -> Mapping[str, str]:
    """Build the immutable code -> label table.

    Parameters
    ----------
    labels : Mapping[str, str], optional
        Extra or overriding labels keyed by type code.
    aliases : Mapping[str, str], optional
        Extra or overriding aliases, alias code -> canonical code.

    Returns
    -------
    Mapping[str, str]
        Read-only mapping containing canonical codes and every alias
        whose target has a label.
    """
    table: Dict[str, str] = dict(DEFAULT_TYPE_LABELS)
    if labels:
        table.update(labels)

    all_aliases: Dict[str, str] = dict(DEFAULT_TYPE_ALIASES)
    if aliases:
        all_aliases.update(aliases)

    for alias, target in all_aliases.items():
        # an explicit label for the alias code wins over the alias
        if labels and alias in labels:
            continue
        if target in table:
            table[alias] = table[target]

    return MappingProxyType(table)


def resolve_type(code: str, type_labels: Mapping[str, str]) -> str:
    """Return the label for ``code`` or an unformatted marker carrying it."""
    label = type_labels.get(code)
    if label:
        return label
    return f"{UNFORMATTED_PREFIX} {code}"


def is_unformatted(label: str) -> bool:
    return label.startswith(UNFORMATTED_PREFIX)
