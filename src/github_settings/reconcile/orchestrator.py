"""Sequencing of the resource reconcilers for one repository."""

from __future__ import annotations

from typing import Any

from loguru import logger

from github_settings.client import RemoteClient
from github_settings.consts import RECONCILE_ORDER, RESOURCE_KIND
from github_settings.errors import RemoteOperationError, ReconciliationError
from github_settings.git_branch import BranchMaterializer
from github_settings.models import Settings
from github_settings.reconcile.base import ResourceReconciler
from github_settings.reconcile.branches import BranchReconciler
from github_settings.reconcile.diff import ResourceDiff
from github_settings.reconcile.labels import LabelReconciler
from github_settings.reconcile.repository import RepositoryReconciler
from github_settings.reconcile.topics import TopicReconciler
from github_settings.reconcile.webhooks import WebhookReconciler
from github_settings.remote_state import RemoteStateReader


class SettingsReconciler:
    """Converges a repository to its desired settings in one pass.

    The remote state is read once, then repository metadata, labels, branches, webhooks and
    topics are reconciled in that order. The first failure aborts the run: remaining
    operations and resource kinds are skipped and nothing already applied is rolled back.
    """

    def __init__(
        self,
        client: RemoteClient,
        materializer: BranchMaterializer,
        *,
        reader: RemoteStateReader | None = None,
    ) -> None:
        self.reader = reader or RemoteStateReader(client)
        by_kind: dict[RESOURCE_KIND, ResourceReconciler] = {
            reconciler.resource_kind: reconciler
            for reconciler in (
                RepositoryReconciler(client),
                LabelReconciler(client),
                BranchReconciler(client, materializer),
                WebhookReconciler(client),
                TopicReconciler(client),
            )
        }
        self.reconcilers = [by_kind[kind] for kind in RECONCILE_ORDER]

    def apply(self, desired: Settings) -> list[ResourceDiff[Any]]:
        """Apply `desired` to the repository it names.

        Args:
            desired: The normalized desired settings.

        Returns:
            The diff applied for each resource kind, in reconciliation order.

        Raises:
            RemoteReadError: If the current remote state cannot be read. Nothing is written.
            ReconciliationError: If a resource kind fails to reconcile. Its cause is the
                underlying `RemoteWriteError`.
        """
        repo_name = desired.repository.full_name
        actual = self.reader.read(desired.owner, desired.name)

        diffs: list[ResourceDiff[Any]] = []
        for reconciler in self.reconcilers:
            try:
                diffs.append(reconciler.reconcile(actual, desired))
            except RemoteOperationError as e:
                logger.error(f"Failed to reconcile {reconciler.resource_kind} of {repo_name}: {e}")
                raise ReconciliationError(
                    f"Error updating repository {reconciler.resource_kind}: {e}",
                    resource_kind=reconciler.resource_kind,
                ) from e

        total_changes = sum(diff.total_changes() for diff in diffs)
        if total_changes:
            logger.success(f"Applied {total_changes} changes to {repo_name}")
        else:
            logger.success(f"{repo_name} already matches the desired settings")
        return diffs
