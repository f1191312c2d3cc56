"""Reconciliation of the repository metadata."""

from __future__ import annotations

from loguru import logger

from github_settings.consts import RESOURCE_KIND
from github_settings.models import RepositoryAttributes, Settings
from github_settings.reconcile.base import ResourceReconciler
from github_settings.reconcile.diff import ResourceDiff


def diff_repository(actual: RepositoryAttributes, desired: RepositoryAttributes) -> ResourceDiff[RepositoryAttributes]:
    """The repository always exists, so the only possible operation is a whole-record update.

    Owner and name identify the repository that was read and are matched case-insensitively by
    GitHub, so they are not compared.
    """
    diff = ResourceDiff(resource_kind=RESOURCE_KIND.repository, identity=lambda attributes: attributes.full_name)
    if actual.model_copy(update={"owner": desired.owner, "name": desired.name}) != desired:
        diff.to_update.append(desired)
    return diff


class RepositoryReconciler(ResourceReconciler):
    resource_kind = RESOURCE_KIND.repository

    def plan(self, actual: Settings, desired: Settings) -> ResourceDiff[RepositoryAttributes]:
        return diff_repository(actual.repository, desired.repository)

    def apply(self, owner: str, name: str, diff: ResourceDiff[RepositoryAttributes]) -> None:
        for attributes in diff.to_update:
            logger.info("Updating repository settings")
            with self._writing("updating repository settings"):
                self.client.edit_repository(owner, name, attributes)
