"""Reconciliation of issue labels."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from github_settings.consts import RESOURCE_KIND
from github_settings.models import Label, Settings
from github_settings.reconcile.base import ResourceReconciler
from github_settings.reconcile.diff import ResourceDiff, compute_diff


def diff_labels(actual: Sequence[Label], desired: Sequence[Label]) -> ResourceDiff[Label]:
    return compute_diff(RESOURCE_KIND.labels, actual, desired, identity=lambda label: label.name)


class LabelReconciler(ResourceReconciler):
    resource_kind = RESOURCE_KIND.labels

    def plan(self, actual: Settings, desired: Settings) -> ResourceDiff[Label]:
        return diff_labels(actual.labels, desired.labels)

    def apply(self, owner: str, name: str, diff: ResourceDiff[Label]) -> None:
        for label in diff.to_create:
            logger.info(f"Creating label {label.name}")
            with self._writing(f"creating label {label.name}"):
                self.client.create_label(owner, name, label)

        for label in diff.to_delete:
            logger.info(f"Deleting label {label.name}")
            with self._writing(f"deleting label {label.name}"):
                self.client.delete_label(owner, name, label.name)

        for label in diff.to_update:
            logger.info(f"Updating label {label.name}")
            with self._writing(f"updating label {label.name}"):
                self.client.edit_label(owner, name, label)
