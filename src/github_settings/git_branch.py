"""Creation of missing remote branches through git."""

from __future__ import annotations

import tempfile
from abc import ABC, abstractmethod
from collections.abc import Generator
from contextlib import contextmanager

from git import PushInfo, Repo
from loguru import logger

from github_settings.consts import DEFAULT_GIT_HOST, RESOURCE_KIND
from github_settings.errors import BranchMaterializationError

_PUSH_FAILURE_FLAGS = PushInfo.ERROR | PushInfo.REJECTED | PushInfo.REMOTE_REJECTED


class BranchMaterializer(ABC):
    """Creates a branch on the remote so that it can be protected."""

    @abstractmethod
    def create_branch(self, owner: str, name: str, branch_name: str) -> None:
        """Create `branch_name` on `owner/name` at the head of the default branch.

        Raises:
            BranchMaterializationError: If any step fails. Nothing is rolled back.
        """


class GitBranchMaterializer(BranchMaterializer):
    """Creates branches by cloning the repository and pushing a new head reference.

    The clone lives in a temporary directory that is removed once the branch is pushed.
    Authentication is carried by the clone URL.
    """

    def __init__(
        self,
        token: str,
        *,
        host: str = DEFAULT_GIT_HOST,
        temp_dir: str | None = None,
    ) -> None:
        self._token = token
        self.host = host
        self.temp_dir = temp_dir

    def clone_url(self, owner: str, name: str) -> str:
        """Return the token-authenticated HTTPS clone URL of `owner/name`."""
        return f"https://{self._token}@{self.host}/{owner}/{name}.git"

    def create_branch(self, owner: str, name: str, branch_name: str) -> None:
        logger.info(f"Creating new branch {branch_name} on {owner}/{name}")
        self.push_new_branch(self.clone_url(owner, name), branch_name)

    def push_new_branch(self, clone_url: str, branch_name: str) -> str:
        """Clone `clone_url`, point `refs/heads/<branch_name>` at HEAD and push it.

        Args:
            clone_url: Any URL or path git can clone and push to.
            branch_name: The name of the branch to create.

        Returns:
            The hex SHA of the commit the new branch points at.
        """
        with tempfile.TemporaryDirectory(prefix="github-settings-", dir=self.temp_dir) as work_dir:
            with self._step("cloning repository"):
                repo = Repo.clone_from(url=clone_url, to_path=work_dir, depth=1)

            try:
                with self._step("getting repository head"):
                    head_sha = repo.head.commit.hexsha
                logger.debug(f"Default branch head is {head_sha}")

                with self._step(f"setting reference for branch {branch_name}"):
                    repo.create_head(branch_name, head_sha)

                refspec = f"refs/heads/{branch_name}:refs/heads/{branch_name}"
                with self._step(f"pushing reference for branch {branch_name}"):
                    push_infos = repo.remote("origin").push(refspec=refspec)
                    push_infos.raise_if_error()
                    failures = [info.summary.strip() for info in push_infos if info.flags & _PUSH_FAILURE_FLAGS]
                    if failures:
                        raise RuntimeError(f"push rejected: {'; '.join(failures)}")
            finally:
                repo.close()

        logger.debug(f"Pushed refs/heads/{branch_name} at {head_sha}")
        return head_sha

    @contextmanager
    def _step(self, operation: str) -> Generator[None, None, None]:
        try:
            yield
        except Exception as e:
            raise BranchMaterializationError(
                f"Error {operation}: {self._redact(str(e))}",
                resource_kind=RESOURCE_KIND.branches,
                operation=operation,
            ) from e

    def _redact(self, message: str) -> str:
        if not self._token:
            return message
        return message.replace(self._token, "***")
