"""The settings schema shared by the desired configuration and the remote snapshot."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RepositoryAttributes(BaseModel):
    """Scalar repository metadata. Compared wholesale against the remote."""

    model_config = ConfigDict(extra="forbid", use_attribute_docstrings=True)

    owner: str
    """The user or organization owning the repository."""

    name: str
    """The repository name."""

    description: str = ""
    homepage: str = ""
    default_branch: str = ""

    private: bool = False
    has_issues: bool = False
    has_projects: bool = False
    has_pages: bool = False
    has_wiki: bool = False
    has_downloads: bool = False
    is_template: bool = False
    archived: bool = False
    allow_squash_merge: bool = False
    allow_merge_commit: bool = False
    allow_rebase_merge: bool = False

    @property
    def full_name(self) -> str:
        """Return the repository in 'owner/name' format."""
        return f"{self.owner}/{self.name}"


class Label(BaseModel):
    """An issue label, identified by its name."""

    model_config = ConfigDict(extra="forbid", use_attribute_docstrings=True)

    name: str
    description: str = ""
    color: str = ""
    """The label color, usually a hex code without the leading `#`. Not validated."""


class RequiredApprovingReviewCount(BaseModel):
    """Pull request review requirements of a protected branch."""

    model_config = ConfigDict(extra="forbid", use_attribute_docstrings=True)

    required_approving_review_count: int = 0
    """Number of approvals required. Zero means reviews are not required."""

    dismiss_stale_reviews: bool = False
    require_code_owner_reviews: bool = False


class RequiredStatusChecks(BaseModel):
    """Status checks that must pass before merging into a protected branch."""

    model_config = ConfigDict(extra="forbid", use_attribute_docstrings=True)

    strict: bool = False
    """Require branches to be up to date before merging."""

    contexts: list[str] = Field(default_factory=list)


class Protection(BaseModel):
    """Branch protection. A disabled protection means the branch is unprotected."""

    model_config = ConfigDict(extra="forbid", use_attribute_docstrings=True)

    enabled: bool = False
    enforce_admins: bool = False
    required_approving_review_count: RequiredApprovingReviewCount = Field(
        default_factory=RequiredApprovingReviewCount,
    )
    required_status_checks: RequiredStatusChecks = Field(default_factory=RequiredStatusChecks)


class Branch(BaseModel):
    """A branch, identified by its name, and its protection."""

    model_config = ConfigDict(extra="forbid", use_attribute_docstrings=True)

    name: str
    protection: Protection = Field(default_factory=Protection)


class Webhook(BaseModel):
    """A repository webhook, matched against the remote by its URL."""

    model_config = ConfigDict(extra="forbid", use_attribute_docstrings=True)

    id: int = 0
    """Assigned by the remote once the hook exists. Meaningless in desired settings."""

    url: str
    content_type: str = ""
    secret: str = Field(default="", repr=False)
    """Write-only: the remote never returns the real value."""

    events: list[str] = Field(default_factory=list)

    @field_validator("events")
    @classmethod
    def sort_events(cls, events: list[str]) -> list[str]:
        """Events are a set; keep them sorted and unique so equality ignores order."""
        return sorted(set(events))


class Settings(BaseModel):
    """The full settings snapshot of one repository."""

    model_config = ConfigDict(extra="forbid", use_attribute_docstrings=True)

    repository: RepositoryAttributes
    labels: list[Label] = Field(default_factory=list)
    branches: list[Branch] = Field(default_factory=list)
    webhooks: list[Webhook] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    """Repository topics. Order is irrelevant."""

    @property
    def owner(self) -> str:
        return self.repository.owner

    @property
    def name(self) -> str:
        return self.repository.name

    def normalized_as_desired(self) -> Settings:
        """Return a copy with the load-time rules for desired settings applied.

        Every declared branch is meant to be protected, so its protection is enabled even if
        all of its fields are left at their defaults. When no approving review is required,
        the stale-review and code-owner flags are meaningless and are forced off.
        """
        branches: list[Branch] = []
        for branch in self.branches:
            reviews = branch.protection.required_approving_review_count
            if reviews.required_approving_review_count == 0:
                reviews = reviews.model_copy(
                    update={"dismiss_stale_reviews": False, "require_code_owner_reviews": False},
                )
            protection = branch.protection.model_copy(
                update={"enabled": True, "required_approving_review_count": reviews},
            )
            branches.append(branch.model_copy(update={"protection": protection}))

        return self.model_copy(update={"branches": branches})
