"""Tests for the identity keyed diff and the per kind diff functions."""

from __future__ import annotations

from github_settings import (
    RESOURCE_KIND,
    Branch,
    Label,
    Protection,
    RepositoryAttributes,
    RequiredStatusChecks,
    Webhook,
)
from github_settings.reconcile import (
    compute_diff,
    diff_branches,
    diff_labels,
    diff_repository,
    diff_topics,
    diff_webhooks,
)


class TestComputeDiff:
    """Test suite for the shared diff routine."""

    def test_create_delete_update_by_identity(self) -> None:
        actual = [Label(name="bug", color="red"), Label(name="stale"), Label(name="docs", color="blue")]
        desired = [Label(name="bug", color="d73a4a"), Label(name="docs", color="blue"), Label(name="new")]

        diff = compute_diff(RESOURCE_KIND.labels, actual, desired, identity=lambda label: label.name)

        assert diff.to_create == [Label(name="new")]
        assert diff.to_delete == [Label(name="stale")]
        assert diff.to_update == [Label(name="bug", color="d73a4a")]
        assert diff.total_changes() == 3

    def test_no_changes(self) -> None:
        labels = [Label(name="bug"), Label(name="docs")]

        diff = compute_diff(RESOURCE_KIND.labels, labels, list(labels), identity=lambda label: label.name)

        assert not diff.has_changes()
        assert diff.summary() == "No differences detected for labels"

    def test_order_follows_inputs(self) -> None:
        actual = [Label(name=name) for name in ("z", "y", "x")]
        desired = [Label(name=name) for name in ("c", "b", "a")]

        diff = compute_diff(RESOURCE_KIND.labels, actual, desired, identity=lambda label: label.name)

        assert [label.name for label in diff.to_create] == ["c", "b", "a"]
        assert [label.name for label in diff.to_delete] == ["z", "y", "x"]

    def test_prepare_is_applied_before_comparing(self) -> None:
        actual = [Label(name="bug", color="red")]
        desired = [Label(name="bug", color="blue")]

        diff = compute_diff(
            RESOURCE_KIND.labels,
            actual,
            desired,
            identity=lambda label: label.name,
            prepare=lambda actual_label, desired_label: (actual_label, actual_label),
        )

        assert not diff.has_changes()

    def test_summary(self) -> None:
        actual = [Label(name="stale")]
        desired = [Label(name=f"label-{index}") for index in range(7)]

        diff = compute_diff(RESOURCE_KIND.labels, actual, desired, identity=lambda label: label.name)
        summary = diff.summary()

        assert summary.startswith("Differences for labels:")
        assert "  Create: 7" in summary
        assert "    + label-0" in summary
        assert "    + label-5" not in summary
        assert "    ... and 2 more" in summary
        assert "    - stale" in summary


class TestRepositoryDiff:
    def test_any_difference_is_one_update(self) -> None:
        actual = RepositoryAttributes(owner="owner", name="repo", has_wiki=True)
        desired = RepositoryAttributes(owner="owner", name="repo", has_wiki=False)

        diff = diff_repository(actual, desired)

        assert diff.to_update == [desired]
        assert not diff.to_create
        assert not diff.to_delete

    def test_equal_attributes(self) -> None:
        attributes = RepositoryAttributes(owner="owner", name="repo", description="same")

        assert not diff_repository(attributes, attributes.model_copy()).has_changes()

    def test_owner_and_name_case_is_ignored(self) -> None:
        actual = RepositoryAttributes(owner="myorg", name="my-service", private=True)
        desired = RepositoryAttributes(owner="MyOrg", name="My-Service", private=True)

        assert not diff_repository(actual, desired).has_changes()


class TestLabelDiff:
    def test_exact_field_equality(self) -> None:
        diff = diff_labels(
            [Label(name="bug", description="Broken", color="d73a4a")],
            [Label(name="bug", description="Broken ", color="d73a4a")],
        )

        assert [label.description for label in diff.to_update] == ["Broken "]


class TestBranchDiff:
    def test_nested_protection_difference(self) -> None:
        actual = [
            Branch(
                name="main",
                protection=Protection(enabled=True, required_status_checks=RequiredStatusChecks(contexts=["ci"])),
            ),
        ]
        desired = [
            Branch(
                name="main",
                protection=Protection(
                    enabled=True,
                    required_status_checks=RequiredStatusChecks(contexts=["ci", "lint"]),
                ),
            ),
        ]

        diff = diff_branches(actual, desired)

        assert diff.to_update == desired

    def test_unprotected_remote_branch_needs_protection(self) -> None:
        diff = diff_branches([Branch(name="main")], [Branch(name="main", protection=Protection(enabled=True))])

        assert [branch.name for branch in diff.to_update] == ["main"]

    def test_missing_and_extra_branches(self) -> None:
        diff = diff_branches(
            [Branch(name="main"), Branch(name="old", protection=Protection(enabled=True))],
            [Branch(name="main"), Branch(name="feature-x")],
        )

        assert [branch.name for branch in diff.to_create] == ["feature-x"]
        assert [branch.name for branch in diff.to_delete] == ["old"]
        assert not diff.to_update

    def test_unprotected_extra_branch_is_not_a_change(self) -> None:
        diff = diff_branches([Branch(name="main"), Branch(name="dependabot/pip")], [Branch(name="main")])

        assert not diff.to_delete
        assert not diff.has_changes()
        assert diff.total_changes() == 0


class TestWebhookDiff:
    def test_secret_difference_is_ignored(self) -> None:
        remote = Webhook(id=42, url="https://ci.example.com", content_type="json", secret="********", events=["push"])
        desired = Webhook(url="https://ci.example.com", content_type="json", secret="s3cr3t", events=["push"])

        diff = diff_webhooks([remote], [desired])

        assert not diff.has_changes()

    def test_update_carries_remote_id_and_desired_secret(self) -> None:
        remote = Webhook(id=42, url="https://ci.example.com", content_type="form", events=["push"])
        desired = Webhook(url="https://ci.example.com", content_type="json", secret="s3cr3t", events=["push"])

        diff = diff_webhooks([remote], [desired])

        assert len(diff.to_update) == 1
        updated = diff.to_update[0]
        assert updated.id == 42
        assert updated.secret == "s3cr3t"
        assert updated.content_type == "json"

    def test_deletion_keeps_remote_id(self) -> None:
        remote = Webhook(id=7, url="https://old.example.com")

        diff = diff_webhooks([remote], [])

        assert [webhook.id for webhook in diff.to_delete] == [7]


class TestTopicDiff:
    def test_replacement_with_sorted_desired_set(self) -> None:
        diff = diff_topics(["b", "a", "c"], ["a", "b"])

        assert diff.to_update == [["a", "b"]]

    def test_order_is_irrelevant(self) -> None:
        assert not diff_topics(["b", "a"], ["a", "b"]).has_changes()

    def test_clearing_topics(self) -> None:
        assert diff_topics(["a"], []).to_update == [[]]
