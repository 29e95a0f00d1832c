"""
Top-level package for vc_changelog.

This package turns a Git commit history written in the Conventional
Commit style into a grouped markdown changelog. The command line entry
point lives in :mod:`vc_changelog.cli`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
