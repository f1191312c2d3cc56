"""Environment driven settings for running github-settings."""

from __future__ import annotations

import os

from loguru import logger
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from github_settings.consts import DEFAULT_API_BASE_URL, DEFAULT_CONFIG_PATH, DEFAULT_GIT_HOST
from github_settings.logging_config import LogLevel


class GithubSettingsAppSettings(BaseSettings):
    """Settings for applying repository settings to GitHub."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_SETTINGS_",
        use_attribute_docstrings=True,
    )

    token: str | None = None
    """GitHub personal access token with admin rights on the repository. \
Set via GITHUB_SETTINGS_TOKEN or the GITHUB_TOKEN environment variable."""

    config_path: str = DEFAULT_CONFIG_PATH
    """Path of the YAML file describing the desired repository settings."""

    api_base_url: str = DEFAULT_API_BASE_URL
    """Base URL of the GitHub REST API. Override for GitHub Enterprise Server."""

    git_host: str = DEFAULT_GIT_HOST
    """Host used to build the authenticated clone URL when a branch must be created."""

    timeout: int = 15
    """Timeout in seconds for GitHub API requests."""

    git_temp_dir: str | None = None
    """Parent directory for the transient clones used to create branches. If None, uses the system temp directory."""

    log_level: LogLevel = "INFO"
    """Minimum level of the messages logged by the command line."""

    @model_validator(mode="after")
    def load_token_fallback(self) -> GithubSettingsAppSettings:
        """Fall back to GITHUB_TOKEN when no token was given explicitly."""
        if self.token is None:
            logger.debug("Loading GitHub token from GITHUB_TOKEN environment variable for authentication")
            self.token = os.getenv("GITHUB_TOKEN")
        elif "GITHUB_TOKEN" in os.environ:
            logger.debug("Both GITHUB_SETTINGS_TOKEN and GITHUB_TOKEN are set. Using GITHUB_SETTINGS_TOKEN.")

        if self.timeout < 1:
            logger.warning(f"timeout is {self.timeout}, but must be >= 1. Setting to 1.")
            self.timeout = 1

        return self


app_settings = GithubSettingsAppSettings()
"""Global instance of the application settings."""
