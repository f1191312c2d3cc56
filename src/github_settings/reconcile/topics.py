"""Reconciliation of repository topics."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from github_settings.consts import RESOURCE_KIND
from github_settings.models import Settings
from github_settings.reconcile.base import ResourceReconciler
from github_settings.reconcile.diff import ResourceDiff


def diff_topics(actual: Iterable[str], desired: Iterable[str]) -> ResourceDiff[list[str]]:
    """Topics are a set: any difference replaces the whole remote set with the desired one."""
    diff = ResourceDiff(resource_kind=RESOURCE_KIND.topics, identity=", ".join)

    desired_topics = sorted(desired)
    if sorted(actual) != desired_topics:
        diff.to_update.append(desired_topics)
    return diff


class TopicReconciler(ResourceReconciler):
    resource_kind = RESOURCE_KIND.topics

    def plan(self, actual: Settings, desired: Settings) -> ResourceDiff[list[str]]:
        return diff_topics(actual.topics, desired.topics)

    def apply(self, owner: str, name: str, diff: ResourceDiff[list[str]]) -> None:
        for topics in diff.to_update:
            logger.info("Updating repository topics")
            with self._writing("updating repository topics"):
                self.client.replace_topics(owner, name, topics)
