"""Base class of the per resource kind reconcilers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, ClassVar

from loguru import logger

from github_settings.client import RemoteClient
from github_settings.consts import RESOURCE_KIND
from github_settings.errors import RemoteWriteError, remote_operation
from github_settings.models import Settings
from github_settings.reconcile.diff import ResourceDiff


class ResourceReconciler(ABC):
    """Diffs one resource kind of the actual settings against the desired ones and applies the result.

    Subclasses implement `plan`, a pure comparison, and `apply`, which issues the remote calls
    in the order create, delete, update. The first failing call raises and stops the run.
    """

    resource_kind: ClassVar[RESOURCE_KIND]

    def __init__(self, client: RemoteClient) -> None:
        self.client = client

    def reconcile(self, actual: Settings, desired: Settings) -> ResourceDiff[Any]:
        """Plan and apply the changes for this resource kind.

        Returns:
            The diff that was applied.

        Raises:
            RemoteWriteError: If a remote call fails.
        """
        diff = self.plan(actual, desired)
        logger.debug(diff.summary())

        if diff.has_changes():
            self.apply(desired.owner, desired.name, diff)
        return diff

    @abstractmethod
    def plan(self, actual: Settings, desired: Settings) -> ResourceDiff[Any]:
        """Compute the operations needed without touching the remote."""

    @abstractmethod
    def apply(self, owner: str, name: str, diff: ResourceDiff[Any]) -> None:
        """Issue the remote calls described by `diff`."""

    @contextmanager
    def _writing(self, operation: str) -> Generator[None, None, None]:
        with remote_operation(RemoteWriteError, resource_kind=self.resource_kind, operation=operation):
            yield
