"""Reconciliation of repository webhooks."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from github_settings.consts import RESOURCE_KIND
from github_settings.models import Settings, Webhook
from github_settings.reconcile.base import ResourceReconciler
from github_settings.reconcile.diff import ResourceDiff, compute_diff


def _match_remote_hook(actual: Webhook, desired: Webhook) -> tuple[Webhook, Webhook]:
    # The remote never returns the secret, so compare as if it always matched,
    # and only the remote knows the id needed to edit the hook.
    return (
        actual.model_copy(update={"secret": desired.secret}),
        desired.model_copy(update={"id": actual.id}),
    )


def diff_webhooks(actual: Sequence[Webhook], desired: Sequence[Webhook]) -> ResourceDiff[Webhook]:
    """Diff webhooks by URL. Hooks scheduled for update carry the remote id."""
    return compute_diff(
        RESOURCE_KIND.webhooks,
        actual,
        desired,
        identity=lambda webhook: webhook.url,
        prepare=_match_remote_hook,
    )


class WebhookReconciler(ResourceReconciler):
    resource_kind = RESOURCE_KIND.webhooks

    def plan(self, actual: Settings, desired: Settings) -> ResourceDiff[Webhook]:
        return diff_webhooks(actual.webhooks, desired.webhooks)

    def apply(self, owner: str, name: str, diff: ResourceDiff[Webhook]) -> None:
        for webhook in diff.to_create:
            logger.info(f"Creating new webhook {webhook.url}")
            with self._writing(f"creating webhook {webhook.url}"):
                self.client.create_hook(owner, name, webhook)

        for webhook in diff.to_delete:
            logger.info(f"Removing webhook {webhook.url}")
            with self._writing(f"removing webhook {webhook.url}"):
                self.client.delete_hook(owner, name, webhook.id)

        for webhook in diff.to_update:
            logger.info(f"Updating webhook {webhook.url}")
            with self._writing(f"updating webhook {webhook.url}"):
                self.client.edit_hook(owner, name, webhook)
