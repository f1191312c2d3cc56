"""Exceptions raised while loading, reading or reconciling repository settings."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from github_settings.consts import RESOURCE_KIND


class GithubSettingsError(Exception):
    """Base exception for every failure surfaced by github-settings."""


class ConfigurationLoadError(GithubSettingsError):
    """Raised when the desired settings cannot be read, parsed or validated."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class RemoteOperationError(GithubSettingsError):
    """Raised when a call against the remote repository fails.

    Carries the resource kind and the operation that was being attempted so the caller
    can report exactly where the run stopped.
    """

    def __init__(
        self,
        message: str,
        *,
        resource_kind: RESOURCE_KIND | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.resource_kind = resource_kind
        self.operation = operation


class RemoteReadError(RemoteOperationError):
    """Raised when fetching the current remote state fails."""


class MalformedRemoteDataError(RemoteReadError):
    """Raised when the remote returns data of an unexpected shape or type."""


class RemoteWriteError(RemoteOperationError):
    """Raised when a create, update or delete call against the remote fails."""


class BranchMaterializationError(RemoteWriteError):
    """Raised when a missing branch cannot be cloned, referenced or pushed."""


class ReconciliationError(GithubSettingsError):
    """Raised by the orchestrator when a resource kind fails to reconcile."""

    def __init__(self, message: str, *, resource_kind: RESOURCE_KIND):
        super().__init__(message)
        self.resource_kind = resource_kind


@contextmanager
def remote_operation(
    error_type: type[RemoteOperationError],
    *,
    resource_kind: RESOURCE_KIND,
    operation: str,
) -> Generator[None, None, None]:
    """Wrap any failure of the enclosed remote call into `error_type` with its context.

    Errors that are already `GithubSettingsError` instances carry their own context and are
    re-raised untouched.

    Usage:
        with remote_operation(RemoteWriteError, resource_kind=RESOURCE_KIND.labels, operation="deleting label bug"):
            client.delete_label(owner, name, "bug")
    """
    try:
        yield
    except GithubSettingsError:
        raise
    except Exception as e:
        raise error_type(
            f"Error {operation}: {e}",
            resource_kind=resource_kind,
            operation=operation,
        ) from e
