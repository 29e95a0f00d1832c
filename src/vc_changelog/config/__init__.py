"""
Configuration loading for vc_changelog.

Provides a loader for the optional changelog configuration file located
in the repository root. See :mod:`vc_changelog.config.loader` for
implementation details.
"""

from .loader import ConfigError, load_config  # noqa: F401
