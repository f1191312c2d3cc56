"""Declarative management of GitHub repository settings.

Reads the desired metadata, labels, branch protection, webhooks and topics of a repository
and converges the repository to them in one pass.
"""

from github_settings.client import PyGithubClient, RemoteClient
from github_settings.consts import RESOURCE_KIND
from github_settings.errors import (
    BranchMaterializationError,
    ConfigurationLoadError,
    GithubSettingsError,
    MalformedRemoteDataError,
    ReconciliationError,
    RemoteReadError,
    RemoteWriteError,
)
from github_settings.git_branch import BranchMaterializer, GitBranchMaterializer
from github_settings.loader import load_settings_from_file, load_settings_from_mapping
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
from github_settings.reconcile import SettingsReconciler
from github_settings.remote_state import RemoteStateReader

__version__ = "0.3.0"

__all__ = [
    "RESOURCE_KIND",
    "Branch",
    "BranchMaterializationError",
    "BranchMaterializer",
    "ConfigurationLoadError",
    "GitBranchMaterializer",
    "GithubSettingsError",
    "Label",
    "MalformedRemoteDataError",
    "Protection",
    "PyGithubClient",
    "ReconciliationError",
    "RemoteClient",
    "RemoteReadError",
    "RemoteStateReader",
    "RemoteWriteError",
    "RepositoryAttributes",
    "RequiredApprovingReviewCount",
    "RequiredStatusChecks",
    "Settings",
    "SettingsReconciler",
    "Webhook",
    "__version__",
    "load_settings_from_file",
    "load_settings_from_mapping",
]
