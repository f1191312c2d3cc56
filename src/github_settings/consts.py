from __future__ import annotations

from enum import auto

from strenum import StrEnum

DEFAULT_CONFIG_PATH = "settings.yml"
DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_GIT_HOST = "github.com"

WEBHOOK_NAME = "web"
"""GitHub only accepts `web` as the name of a repository webhook."""


class RESOURCE_KIND(StrEnum):
    """The kinds of repository resources reconciled, in the order they are applied."""

    repository = auto()
    labels = auto()
    branches = auto()
    webhooks = auto()
    topics = auto()


RECONCILE_ORDER: tuple[RESOURCE_KIND, ...] = (
    RESOURCE_KIND.repository,
    RESOURCE_KIND.labels,
    RESOURCE_KIND.branches,
    RESOURCE_KIND.webhooks,
    RESOURCE_KIND.topics,
)
