r"""Command line entry point of github-settings.

Usage:
    github-settings apply [--config settings.yml] [--token TOKEN] [--log-level LEVEL]
    github-settings version

Environment variables:
    GITHUB_SETTINGS_TOKEN - GitHub token (falls back to GITHUB_TOKEN)
    GITHUB_SETTINGS_CONFIG_PATH - Default settings file (default: settings.yml)
    GITHUB_SETTINGS_API_BASE_URL - REST API base URL, for GitHub Enterprise Server
    GITHUB_SETTINGS_GIT_HOST - Host of the clone URL used to create branches
    GITHUB_SETTINGS_GIT_TEMP_DIR - Parent directory of the transient clones (default: system temp)
    GITHUB_SETTINGS_TIMEOUT - GitHub API request timeout in seconds (default: 15)
    GITHUB_SETTINGS_LOG_LEVEL - Log level (default: INFO)

Examples:
    # Apply the settings in ./settings.yml
    GITHUB_TOKEN=... github-settings apply

    # Apply another file with verbose output
    github-settings apply -c repos/api.yml --log-level DEBUG
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import get_args

from loguru import logger

from github_settings import __version__
from github_settings.client import PyGithubClient
from github_settings.config import GithubSettingsAppSettings, app_settings
from github_settings.errors import ConfigurationLoadError, GithubSettingsError
from github_settings.git_branch import GitBranchMaterializer
from github_settings.loader import load_settings_from_file
from github_settings.logging_config import LogLevel, configure_logger
from github_settings.reconcile import SettingsReconciler


def build_parser(settings: GithubSettingsAppSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-settings",
        description="github-settings is a settings configuration tool for github.",
    )
    subparsers = parser.add_subparsers(dest="command")

    apply_parser = subparsers.add_parser(
        "apply",
        help="Apply the config settings to the github repository.",
        description="Apply the config settings to the github repository.",
    )
    apply_parser.add_argument(
        "-c",
        "--config",
        default=settings.config_path,
        help=f"Configuration file path (default: {settings.config_path})",
    )
    apply_parser.add_argument(
        "-t",
        "--token",
        default=None,
        help="Github personal token (default: GITHUB_SETTINGS_TOKEN or GITHUB_TOKEN)",
    )
    apply_parser.add_argument(
        "--log-level",
        choices=get_args(LogLevel),
        default=settings.log_level,
        help=f"Minimum log level (default: {settings.log_level})",
    )

    subparsers.add_parser("version", help="Print the version of github-settings.")
    return parser


def run_apply(args: argparse.Namespace, settings: GithubSettingsAppSettings) -> None:
    """Load the desired settings and apply them.

    Raises:
        GithubSettingsError: If loading, reading or reconciling fails.
    """
    token = args.token or settings.token
    if not token:
        raise ConfigurationLoadError(
            "No GitHub token configured. Pass --token or set GITHUB_SETTINGS_TOKEN or GITHUB_TOKEN."
        )

    desired = load_settings_from_file(args.config)

    client = PyGithubClient(token, base_url=settings.api_base_url, timeout=settings.timeout)
    materializer = GitBranchMaterializer(token, host=settings.git_host, temp_dir=settings.git_temp_dir)

    SettingsReconciler(client, materializer).apply(desired)


def main(argv: Sequence[str] | None = None, *, settings: GithubSettingsAppSettings | None = None) -> int:
    """Run the command line and return the process exit status."""
    settings = settings or app_settings
    args = build_parser(settings).parse_args(argv)

    if args.command in (None, "version"):
        print(f"github-settings version {__version__}")
        return 0

    configure_logger(args.log_level)

    try:
        run_apply(args, settings)
    except GithubSettingsError as e:
        logger.error(str(e))
        return 1

    return 0
