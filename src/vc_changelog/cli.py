"""
Command line interface for the vc_changelog tool.

This module defines the ``main`` function used as the entry point of the
``gen-changelog`` command. It locates the repository, loads the optional
configuration, reads the commit log for the requested range and prints
the rendered markdown to standard output.

Usage (FROM and TO are tags, branches or commit hashes)::

    gen-changelog                  # full history
    gen-changelog v1.0             # from v1.0 (excluded) to HEAD
    gen-changelog v1.0 v1.1        # from v1.0 (excluded) to v1.1 (included)
    gen-changelog v1.0 > CHANGES.md
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from vc_changelog import __version__
from vc_changelog.changelog.renderer import generate_changelog
from vc_changelog.changelog.type_labels import build_type_labels
from vc_changelog.config.loader import ConfigError, load_config
from vc_changelog.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation until the CLI configures logging.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6


def print_error(message: str) -> None:
    """Print an error message to the error stream."""
    click.echo(f"Error: {message}", err=True)


def _enable_package_logging() -> None:
    """Let the package's module loggers reach the root handlers."""
    for name in list(logging.root.manager.loggerDict):
        if name == "vc_changelog" or name.startswith("vc_changelog."):
            logging.getLogger(name).propagate = True


def build_changelog(
    repo_root: Path,
    from_ref: Optional[str] = None,
    to_ref: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> str:
    """Read the log of ``repo_root`` and return the rendered changelog.

    Raises
    ------
    ConfigError
        If the configuration file is invalid.
    GitError
        If the log cannot be read, e.g. for an unknown revision.
    """
    config = load_config(repo_root, config_path)
    type_labels = build_type_labels(config.get("type_labels"), config.get("type_aliases"))

    client = GitClient(repo_root)
    commits = client.get_log(from_ref, to_ref)
    if not commits:
        logger.info("No commits in the given range")
        return ""
    # stdout is a text stream and translates "\n" to the native terminator
    return generate_changelog(commits, type_labels, line_separator="\n")


@click.command()
@click.argument("from_ref", metavar="FROM", required=False)
@click.argument("to_ref", metavar="TO", required=False)
@click.option(
    "--repo",
    "repo_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory inside the repository (defaults to the current directory).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a changelog configuration file.",
)
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="gen-changelog")
def main(
    from_ref: Optional[str],
    to_ref: Optional[str],
    repo_dir: Optional[Path],
    config_path: Optional[Path],
    verbose: bool,
) -> None:
    """Generate a markdown changelog from Conventional Commit messages.

    FROM is excluded from the range, TO is included. Redirect the output
    to a file to save it.
    """
    # Logging goes to stderr so that stdout carries only the changelog.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    _enable_package_logging()

    ctx = click.get_current_context(silent=True)

    try:
        start = repo_dir if repo_dir is not None else Path.cwd()
        repo_root = GitClient.find_repo_root(start)
        if repo_root is None:
            print_error("No Git repository found in current directory or parent directories.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository root: %s", repo_root)

        try:
            text = build_changelog(repo_root, from_ref, to_ref, config_path)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
        except GitError as exc:
            print_error(f"Git error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        if text:
            click.echo(text)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
