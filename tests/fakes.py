"""In-memory stand-ins for the remote API and the git capability."""

from __future__ import annotations

import copy
from typing import Any

from github_settings.client import RemoteClient
from github_settings.git_branch import BranchMaterializer
from github_settings.models import Branch, Label, RepositoryAttributes, Webhook

WRITE_METHODS = frozenset(
    {
        "edit_repository",
        "create_label",
        "edit_label",
        "delete_label",
        "update_branch_protection",
        "remove_branch_protection",
        "create_hook",
        "edit_hook",
        "delete_hook",
        "replace_topics",
        "create_branch",
    }
)

MASKED_SECRET = "********"


class FakeRemoteClient(RemoteClient):
    """A repository held in memory that answers like the GitHub REST API.

    Every call is recorded in `calls` as (method, args). Writes mutate the state so a second
    read observes them. `fail_on` maps a method name to the exception it should raise.
    """

    def __init__(
        self,
        *,
        repository: dict[str, Any] | None = None,
        labels: list[dict[str, Any]] | None = None,
        branches: dict[str, dict[str, Any] | None] | None = None,
        hooks: list[dict[str, Any]] | None = None,
        topics: list[str] | None = None,
    ) -> None:
        self.repository: dict[str, Any] = repository or {"name": "repo", "owner": {"login": "owner"}}
        self.repository.setdefault("topics", list(topics or []))
        self.labels = labels or []
        self.branches: dict[str, dict[str, Any] | None] = branches if branches is not None else {"main": None}
        """Branch name to protection document, None when unprotected."""
        self.hooks = hooks or []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_on: dict[str, Exception] = {}
        self._next_hook_id = 1 + max((hook["id"] for hook in self.hooks), default=0)

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if method in self.fail_on:
            raise self.fail_on[method]

    @property
    def writes(self) -> list[tuple[str, tuple[Any, ...]]]:
        return [call for call in self.calls if call[0] in WRITE_METHODS]

    def get_repository(self, owner: str, name: str) -> dict[str, Any]:
        self._record("get_repository", owner, name)
        return copy.deepcopy(self.repository)

    def edit_repository(self, owner: str, name: str, attributes: RepositoryAttributes) -> None:
        self._record("edit_repository", owner, name, attributes)
        self.repository.update(attributes.model_dump(exclude={"owner", "name"}))

    def list_labels(self, owner: str, name: str) -> list[dict[str, Any]]:
        self._record("list_labels", owner, name)
        return copy.deepcopy(self.labels)

    def create_label(self, owner: str, name: str, label: Label) -> None:
        self._record("create_label", owner, name, label)
        self.labels.append(label.model_dump())

    def edit_label(self, owner: str, name: str, label: Label) -> None:
        self._record("edit_label", owner, name, label)
        self.labels = [label.model_dump() if data["name"] == label.name else data for data in self.labels]

    def delete_label(self, owner: str, name: str, label_name: str) -> None:
        self._record("delete_label", owner, name, label_name)
        self.labels = [data for data in self.labels if data["name"] != label_name]

    def list_branches(self, owner: str, name: str) -> list[dict[str, Any]]:
        self._record("list_branches", owner, name)
        return [
            {"name": branch_name, "protected": protection is not None}
            for branch_name, protection in self.branches.items()
        ]

    def get_branch_protection(self, owner: str, name: str, branch_name: str) -> dict[str, Any]:
        self._record("get_branch_protection", owner, name, branch_name)
        protection = self.branches[branch_name]
        if protection is None:
            raise LookupError(f"Branch not protected: {branch_name}")
        return copy.deepcopy(protection)

    def update_branch_protection(self, owner: str, name: str, branch: Branch) -> None:
        self._record("update_branch_protection", owner, name, branch)
        if branch.name not in self.branches:
            raise LookupError(f"Branch not found: {branch.name}")
        self.branches[branch.name] = protection_document(branch)

    def remove_branch_protection(self, owner: str, name: str, branch_name: str) -> None:
        self._record("remove_branch_protection", owner, name, branch_name)
        if self.branches.get(branch_name) is None:
            raise LookupError(f"Branch not protected: {branch_name}")
        self.branches[branch_name] = None

    def list_hooks(self, owner: str, name: str) -> list[dict[str, Any]]:
        self._record("list_hooks", owner, name)
        return copy.deepcopy(self.hooks)

    def create_hook(self, owner: str, name: str, webhook: Webhook) -> None:
        self._record("create_hook", owner, name, webhook)
        self.hooks.append(hook_document(self._next_hook_id, webhook))
        self._next_hook_id += 1

    def edit_hook(self, owner: str, name: str, webhook: Webhook) -> None:
        self._record("edit_hook", owner, name, webhook)
        self.hooks = [hook_document(webhook.id, webhook) if hook["id"] == webhook.id else hook for hook in self.hooks]

    def delete_hook(self, owner: str, name: str, hook_id: int) -> None:
        self._record("delete_hook", owner, name, hook_id)
        self.hooks = [hook for hook in self.hooks if hook["id"] != hook_id]

    def replace_topics(self, owner: str, name: str, topics: list[str]) -> None:
        self._record("replace_topics", owner, name, topics)
        self.repository["topics"] = list(topics)


class FakeBranchMaterializer(BranchMaterializer):
    """Creates branches directly in a `FakeRemoteClient`."""

    def __init__(self, client: FakeRemoteClient) -> None:
        self.client = client

    def create_branch(self, owner: str, name: str, branch_name: str) -> None:
        self.client._record("create_branch", owner, name, branch_name)
        self.client.branches[branch_name] = None


def protection_document(branch: Branch) -> dict[str, Any]:
    """Build the protection document GitHub returns for a protected branch."""
    protection = branch.protection
    document: dict[str, Any] = {
        "required_status_checks": {
            "strict": protection.required_status_checks.strict,
            "contexts": list(protection.required_status_checks.contexts),
        },
        "enforce_admins": {"enabled": protection.enforce_admins},
    }
    reviews = protection.required_approving_review_count
    if reviews.required_approving_review_count:
        document["required_pull_request_reviews"] = reviews.model_dump()
    return document


def hook_document(hook_id: int, webhook: Webhook) -> dict[str, Any]:
    """Build the hook document GitHub returns, with the secret masked."""
    config = {"url": webhook.url, "content_type": webhook.content_type, "insecure_ssl": "0"}
    if webhook.secret:
        config["secret"] = MASKED_SECRET
    return {"id": hook_id, "name": "web", "active": True, "events": list(webhook.events), "config": config}
