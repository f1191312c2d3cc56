import os
import sys
from collections.abc import Generator
from typing import Any

# Clear settings variables BEFORE importing any package modules
# so the settings singleton is initialized without the developer's environment
_ENV_VARS_TO_CLEAR = [name for name in os.environ if name.startswith("GITHUB_SETTINGS_")] + ["GITHUB_TOKEN"]
for _name in _ENV_VARS_TO_CLEAR:
    os.environ.pop(_name, None)

import pytest  # noqa: E402
from loguru import logger  # noqa: E402
from pytest import LogCaptureFixture  # noqa: E402

from github_settings import Settings, load_settings_from_mapping  # noqa: E402
from tests.fakes import FakeBranchMaterializer, FakeRemoteClient  # noqa: E402


@pytest.fixture
def caplog(caplog: LogCaptureFixture) -> Generator[LogCaptureFixture, None, None]:
    """Fixture to capture log messages during tests.

    See https://loguru.readthedocs.io/en/stable/resources/migration.html#migration-caplog for more information.
    """
    handler_id = logger.add(caplog.handler, format="{message}")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Set up logging for tests."""
    logger.remove()
    logger.add(sys.stderr, format="{time:YYYY-MM-DD HH:mm:ss} | {name}:{function}:{line} | {level} | {message}")


@pytest.fixture
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every variable that feeds the application settings."""
    for name in list(os.environ):
        if name.startswith("GITHUB_SETTINGS_") or name == "GITHUB_TOKEN":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def desired_settings_data() -> dict[str, Any]:
    """A settings document as it would be read from YAML."""
    return {
        "repository": {
            "owner": "owner",
            "name": "repo",
            "description": "A repository",
            "default_branch": "main",
            "has_issues": True,
            "allow_squash_merge": True,
        },
        "labels": [
            {"name": "bug", "description": "Something is not working", "color": "d73a4a"},
            {"name": "enhancement", "description": "New feature or request", "color": "a2eeef"},
        ],
        "branches": [
            {
                "name": "main",
                "protection": {
                    "enforce_admins": True,
                    "required_approving_review_count": {
                        "required_approving_review_count": 1,
                        "dismiss_stale_reviews": True,
                    },
                    "required_status_checks": {"strict": True, "contexts": ["ci/build"]},
                },
            },
            {"name": "feature-x"},
        ],
        "webhooks": [
            {
                "url": "https://ci.example.com/hook",
                "content_type": "json",
                "secret": "s3cr3t",
                "events": ["push", "pull_request"],
            },
        ],
        "topics": ["b", "a"],
    }


@pytest.fixture
def desired_settings(desired_settings_data: dict[str, Any]) -> Settings:
    return load_settings_from_mapping(desired_settings_data)


@pytest.fixture
def fake_client() -> FakeRemoteClient:
    """A repository with only an unprotected main branch, no labels, hooks or topics."""
    return FakeRemoteClient(
        repository={
            "name": "repo",
            "owner": {"login": "owner"},
            "description": None,
            "homepage": None,
            "default_branch": "main",
            "has_issues": True,
            "has_wiki": True,
            "topics": [],
        },
    )


@pytest.fixture
def fake_materializer(fake_client: FakeRemoteClient) -> FakeBranchMaterializer:
    return FakeBranchMaterializer(fake_client)
