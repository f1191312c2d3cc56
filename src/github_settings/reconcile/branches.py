"""Reconciliation of branch protection, including the creation of missing branches."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from github_settings.client import RemoteClient
from github_settings.consts import RESOURCE_KIND
from github_settings.git_branch import BranchMaterializer
from github_settings.models import Branch, Settings
from github_settings.reconcile.base import ResourceReconciler
from github_settings.reconcile.diff import ResourceDiff, compute_diff


def diff_branches(actual: Sequence[Branch], desired: Sequence[Branch]) -> ResourceDiff[Branch]:
    """Diff branches by name, comparing the whole record including its protection.

    Branches to delete are only ever unprotected, never removed from the remote, so an extra
    branch that is already unprotected needs nothing.
    """
    return compute_diff(
        RESOURCE_KIND.branches,
        actual,
        desired,
        identity=lambda branch: branch.name,
        deletable=lambda branch: branch.protection.enabled,
    )


class BranchReconciler(ResourceReconciler):
    """Applies branch protection.

    A desired branch missing from the remote is first created at the head of the default
    branch, then protected in the same run. A remote branch missing from the desired
    settings loses its protection but is kept.
    """

    resource_kind = RESOURCE_KIND.branches

    def __init__(self, client: RemoteClient, materializer: BranchMaterializer) -> None:
        super().__init__(client)
        self.materializer = materializer

    def plan(self, actual: Settings, desired: Settings) -> ResourceDiff[Branch]:
        return diff_branches(actual.branches, desired.branches)

    def apply(self, owner: str, name: str, diff: ResourceDiff[Branch]) -> None:
        for branch in diff.to_create:
            self.materializer.create_branch(owner, name, branch.name)

        for branch in diff.to_delete:
            logger.info(f"Removing branch protection for {branch.name}")
            with self._writing(f"removing branch protection for {branch.name}"):
                self.client.remove_branch_protection(owner, name, branch.name)

        for branch in [*diff.to_create, *diff.to_update]:
            logger.info(f"Updating branch protection for {branch.name}")
            with self._writing(f"updating branch protection for {branch.name}"):
                self.client.update_branch_protection(owner, name, branch)
