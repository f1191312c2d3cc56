"""Per resource kind reconciliation of repository settings."""

from github_settings.reconcile.base import ResourceReconciler
from github_settings.reconcile.branches import BranchReconciler, diff_branches
from github_settings.reconcile.diff import ResourceDiff, compute_diff
from github_settings.reconcile.labels import LabelReconciler, diff_labels
from github_settings.reconcile.orchestrator import SettingsReconciler
from github_settings.reconcile.repository import RepositoryReconciler, diff_repository
from github_settings.reconcile.topics import TopicReconciler, diff_topics
from github_settings.reconcile.webhooks import WebhookReconciler, diff_webhooks

__all__ = [
    "BranchReconciler",
    "LabelReconciler",
    "RepositoryReconciler",
    "ResourceDiff",
    "ResourceReconciler",
    "SettingsReconciler",
    "TopicReconciler",
    "WebhookReconciler",
    "compute_diff",
    "diff_branches",
    "diff_labels",
    "diff_repository",
    "diff_topics",
    "diff_webhooks",
]
