"""Remote API clients used to read and write repository settings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from github import Auth, Github
from github.Repository import Repository
from loguru import logger

from github_settings.consts import DEFAULT_API_BASE_URL, WEBHOOK_NAME
from github_settings.models import Branch, Label, RepositoryAttributes, Webhook


class RemoteClient(ABC):
    """Abstract interface to the hosted repository API.

    Read calls return the provider's JSON documents as plain mappings, exactly as the REST
    API describes them. Turning them into settings records is the job of the
    `RemoteStateReader`. Write calls take settings records and always send the complete
    record.

    Every call is synchronous. Implementations must let failures propagate; callers wrap
    them with the resource kind and never retry.
    """

    @abstractmethod
    def get_repository(self, owner: str, name: str) -> dict[str, Any]:
        """Return the repository document, including its `topics`."""

    @abstractmethod
    def edit_repository(self, owner: str, name: str, attributes: RepositoryAttributes) -> None:
        """Replace the repository metadata with `attributes`."""

    @abstractmethod
    def list_labels(self, owner: str, name: str) -> list[dict[str, Any]]:
        """Return every label of the repository."""

    @abstractmethod
    def create_label(self, owner: str, name: str, label: Label) -> None: ...

    @abstractmethod
    def edit_label(self, owner: str, name: str, label: Label) -> None:
        """Replace the label named `label.name`."""

    @abstractmethod
    def delete_label(self, owner: str, name: str, label_name: str) -> None: ...

    @abstractmethod
    def list_branches(self, owner: str, name: str) -> list[dict[str, Any]]:
        """Return every branch of the repository, each with its `name` and `protected` flag."""

    @abstractmethod
    def get_branch_protection(self, owner: str, name: str, branch_name: str) -> dict[str, Any]:
        """Return the protection document of a protected branch."""

    @abstractmethod
    def update_branch_protection(self, owner: str, name: str, branch: Branch) -> None:
        """Replace the protection of `branch.name` with `branch.protection`."""

    @abstractmethod
    def remove_branch_protection(self, owner: str, name: str, branch_name: str) -> None: ...

    @abstractmethod
    def list_hooks(self, owner: str, name: str) -> list[dict[str, Any]]:
        """Return every webhook of the repository, each with its `id`, `config` and `events`."""

    @abstractmethod
    def create_hook(self, owner: str, name: str, webhook: Webhook) -> None: ...

    @abstractmethod
    def edit_hook(self, owner: str, name: str, webhook: Webhook) -> None:
        """Replace the hook identified by `webhook.id`."""

    @abstractmethod
    def delete_hook(self, owner: str, name: str, hook_id: int) -> None: ...

    @abstractmethod
    def replace_topics(self, owner: str, name: str, topics: list[str]) -> None:
        """Replace every topic of the repository with `topics`."""


class PyGithubClient(RemoteClient):
    """`RemoteClient` backed by the GitHub REST API through PyGithub."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: int = 15,
    ) -> None:
        """Initialize the client with token authentication.

        Args:
            token: A personal access token with admin rights on the target repositories.
            base_url: The REST API base URL, for GitHub Enterprise Server.
            timeout: Request timeout in seconds.
        """
        self._github = Github(auth=Auth.Token(token), base_url=base_url, timeout=timeout)
        self._repositories: dict[str, Repository] = {}

    def _repo(self, owner: str, name: str) -> Repository:
        full_name = f"{owner}/{name}"
        if full_name not in self._repositories:
            logger.debug(f"Fetching repository {full_name}")
            self._repositories[full_name] = self._github.get_repo(full_name)
        return self._repositories[full_name]

    def get_repository(self, owner: str, name: str) -> dict[str, Any]:
        return self._repo(owner, name).raw_data

    def edit_repository(self, owner: str, name: str, attributes: RepositoryAttributes) -> None:
        # has_pages and has_downloads are not editable through the repository endpoint
        parameters: dict[str, Any] = {
            "description": attributes.description,
            "homepage": attributes.homepage,
            "private": attributes.private,
            "has_issues": attributes.has_issues,
            "has_projects": attributes.has_projects,
            "has_wiki": attributes.has_wiki,
            "is_template": attributes.is_template,
            "allow_squash_merge": attributes.allow_squash_merge,
            "allow_merge_commit": attributes.allow_merge_commit,
            "allow_rebase_merge": attributes.allow_rebase_merge,
            "archived": attributes.archived,
        }
        if attributes.default_branch:
            parameters["default_branch"] = attributes.default_branch

        self._repo(owner, name).edit(**parameters)

    def list_labels(self, owner: str, name: str) -> list[dict[str, Any]]:
        return [label.raw_data for label in self._repo(owner, name).get_labels()]

    def create_label(self, owner: str, name: str, label: Label) -> None:
        self._repo(owner, name).create_label(name=label.name, color=label.color, description=label.description)

    def edit_label(self, owner: str, name: str, label: Label) -> None:
        remote_label = self._repo(owner, name).get_label(label.name)
        remote_label.edit(name=label.name, color=label.color, description=label.description)

    def delete_label(self, owner: str, name: str, label_name: str) -> None:
        self._repo(owner, name).get_label(label_name).delete()

    def list_branches(self, owner: str, name: str) -> list[dict[str, Any]]:
        return [branch.raw_data for branch in self._repo(owner, name).get_branches()]

    def get_branch_protection(self, owner: str, name: str, branch_name: str) -> dict[str, Any]:
        return self._repo(owner, name).get_branch(branch_name).get_protection().raw_data

    def update_branch_protection(self, owner: str, name: str, branch: Branch) -> None:
        protection = branch.protection
        parameters: dict[str, Any] = {
            "strict": protection.required_status_checks.strict,
            "contexts": list(protection.required_status_checks.contexts),
            "enforce_admins": protection.enforce_admins,
        }

        # Leaving every review parameter unset sends no review requirement at all
        reviews = protection.required_approving_review_count
        if reviews.required_approving_review_count != 0:
            parameters["dismiss_stale_reviews"] = reviews.dismiss_stale_reviews
            parameters["require_code_owner_reviews"] = reviews.require_code_owner_reviews
            parameters["required_approving_review_count"] = reviews.required_approving_review_count

        self._repo(owner, name).get_branch(branch.name).edit_protection(**parameters)

    def remove_branch_protection(self, owner: str, name: str, branch_name: str) -> None:
        self._repo(owner, name).get_branch(branch_name).remove_protection()

    def list_hooks(self, owner: str, name: str) -> list[dict[str, Any]]:
        return [hook.raw_data for hook in self._repo(owner, name).get_hooks()]

    def create_hook(self, owner: str, name: str, webhook: Webhook) -> None:
        self._repo(owner, name).create_hook(
            name=WEBHOOK_NAME,
            config=_hook_config(webhook),
            events=list(webhook.events),
            active=True,
        )

    def edit_hook(self, owner: str, name: str, webhook: Webhook) -> None:
        hook = self._repo(owner, name).get_hook(webhook.id)
        hook.edit(name=WEBHOOK_NAME, config=_hook_config(webhook), events=list(webhook.events), active=True)

    def delete_hook(self, owner: str, name: str, hook_id: int) -> None:
        self._repo(owner, name).get_hook(hook_id).delete()

    def replace_topics(self, owner: str, name: str, topics: list[str]) -> None:
        self._repo(owner, name).replace_topics(list(topics))


def _hook_config(webhook: Webhook) -> dict[str, str]:
    return {
        "url": webhook.url,
        "content_type": webhook.content_type,
        "secret": webhook.secret,
    }
