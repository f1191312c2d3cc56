"""Reads the current settings of a repository from the remote."""

from __future__ import annotations

from typing import Any

from loguru import logger

from github_settings.client import RemoteClient
from github_settings.consts import RESOURCE_KIND
from github_settings.errors import MalformedRemoteDataError, RemoteReadError, remote_operation
from github_settings.models import (
    Branch,
    Label,
    Protection,
    RepositoryAttributes,
    RequiredApprovingReviewCount,
    RequiredStatusChecks,
    Settings,
    Webhook,
)


class RemoteStateReader:
    """Builds a `Settings` snapshot of what the remote repository currently looks like."""

    def __init__(self, client: RemoteClient) -> None:
        self.client = client

    def read(self, owner: str, name: str) -> Settings:
        """Fetch every reconciled resource kind of `owner/name`.

        Raises:
            RemoteReadError: If any read fails or returns malformed data. No partial
                snapshot is ever returned.
        """
        logger.info(f"Reading current settings of {owner}/{name}")

        with remote_operation(RemoteReadError, resource_kind=RESOURCE_KIND.repository, operation="getting repository"):
            repository_data = self.client.get_repository(owner, name)

        settings = Settings(
            repository=self._to_repository_attributes(owner, name, repository_data),
            labels=self.read_labels(owner, name),
            branches=self.read_branches(owner, name),
            webhooks=self.read_webhooks(owner, name),
            topics=self._to_topics(repository_data),
        )

        logger.debug(
            f"Remote settings of {owner}/{name}: {len(settings.labels)} labels, {len(settings.branches)} branches, "
            f"{len(settings.webhooks)} webhooks, {len(settings.topics)} topics"
        )
        return settings

    def read_labels(self, owner: str, name: str) -> list[Label]:
        with remote_operation(RemoteReadError, resource_kind=RESOURCE_KIND.labels, operation="listing labels"):
            return [
                Label(
                    name=label_data["name"],
                    description=label_data.get("description") or "",
                    color=label_data.get("color") or "",
                )
                for label_data in self.client.list_labels(owner, name)
            ]

    def read_branches(self, owner: str, name: str) -> list[Branch]:
        """Read every branch, with its protection when the remote reports it as protected."""
        with remote_operation(RemoteReadError, resource_kind=RESOURCE_KIND.branches, operation="listing branches"):
            branches_data = self.client.list_branches(owner, name)

        branches: list[Branch] = []
        for branch_data in branches_data:
            branch_name = branch_data["name"]

            if not branch_data.get("protected"):
                branches.append(Branch(name=branch_name))
                continue

            with remote_operation(
                RemoteReadError,
                resource_kind=RESOURCE_KIND.branches,
                operation=f"getting branch protection of {branch_name}",
            ):
                protection_data = self.client.get_branch_protection(owner, name, branch_name)
                branches.append(Branch(name=branch_name, protection=_to_protection(protection_data)))

        return branches

    def read_webhooks(self, owner: str, name: str) -> list[Webhook]:
        with remote_operation(RemoteReadError, resource_kind=RESOURCE_KIND.webhooks, operation="listing webhooks"):
            hooks_data = self.client.list_hooks(owner, name)

        webhooks: list[Webhook] = []
        for hook_data in hooks_data:
            hook_id = hook_data.get("id")
            config = hook_data.get("config")
            if not isinstance(hook_id, int):
                raise _malformed_hook(hook_id, f"id is {type(hook_id).__name__}, expected an integer")
            if not isinstance(config, dict):
                raise _malformed_hook(hook_id, f"config is {type(config).__name__}, expected a mapping")

            with remote_operation(
                MalformedRemoteDataError,
                resource_kind=RESOURCE_KIND.webhooks,
                operation=f"reading webhook {hook_id}",
            ):
                webhooks.append(
                    Webhook(
                        id=hook_id,
                        url=_config_str(hook_id, config, "url", required=True),
                        content_type=_config_str(hook_id, config, "content_type"),
                        secret=_config_str(hook_id, config, "secret"),
                        events=hook_data.get("events") or [],
                    ),
                )

        return webhooks

    def _to_repository_attributes(self, owner: str, name: str, data: dict[str, Any]) -> RepositoryAttributes:
        owner_data = data.get("owner") or {}
        return RepositoryAttributes(
            owner=owner_data.get("login") or owner,
            name=data.get("name") or name,
            description=data.get("description") or "",
            homepage=data.get("homepage") or "",
            default_branch=data.get("default_branch") or "",
            private=bool(data.get("private")),
            has_issues=bool(data.get("has_issues")),
            has_projects=bool(data.get("has_projects")),
            has_pages=bool(data.get("has_pages")),
            has_wiki=bool(data.get("has_wiki")),
            has_downloads=bool(data.get("has_downloads")),
            is_template=bool(data.get("is_template")),
            archived=bool(data.get("archived")),
            allow_squash_merge=bool(data.get("allow_squash_merge")),
            allow_merge_commit=bool(data.get("allow_merge_commit")),
            allow_rebase_merge=bool(data.get("allow_rebase_merge")),
        )

    def _to_topics(self, data: dict[str, Any]) -> list[str]:
        topics = data.get("topics") or []
        if not isinstance(topics, list) or not all(isinstance(topic, str) for topic in topics):
            raise MalformedRemoteDataError(
                f"Repository topics are malformed: {topics!r}",
                resource_kind=RESOURCE_KIND.topics,
                operation="reading topics",
            )
        return topics


def _to_protection(data: dict[str, Any]) -> Protection:
    # A protection without a review block means no approving review is required
    reviews_data = data.get("required_pull_request_reviews")
    reviews = RequiredApprovingReviewCount()
    if reviews_data:
        reviews = RequiredApprovingReviewCount(
            required_approving_review_count=reviews_data.get("required_approving_review_count") or 0,
            dismiss_stale_reviews=bool(reviews_data.get("dismiss_stale_reviews")),
            require_code_owner_reviews=bool(reviews_data.get("require_code_owner_reviews")),
        )

    checks_data = data.get("required_status_checks") or {}
    enforce_admins_data = data.get("enforce_admins") or {}

    return Protection(
        enabled=True,
        enforce_admins=bool(enforce_admins_data.get("enabled")),
        required_approving_review_count=reviews,
        required_status_checks=RequiredStatusChecks(
            strict=bool(checks_data.get("strict")),
            contexts=checks_data.get("contexts") or [],
        ),
    )


def _config_str(hook_id: Any, config: dict[str, Any], key: str, *, required: bool = False) -> str:
    value = config.get(key)
    if value is None and not required:
        return ""
    if not isinstance(value, str):
        raise _malformed_hook(hook_id, f"config key {key!r} is {type(value).__name__}, expected a string")
    return value


def _malformed_hook(hook_id: Any, reason: str) -> MalformedRemoteDataError:
    return MalformedRemoteDataError(
        f"Webhook {hook_id} is malformed: {reason}",
        resource_kind=RESOURCE_KIND.webhooks,
        operation="reading webhooks",
    )
