"""Identity keyed comparison of actual and desired resources."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from loguru import logger

from github_settings.consts import RESOURCE_KIND

T = TypeVar("T")


@dataclass
class ResourceDiff(Generic[T]):
    """The operations needed to turn the actual resources of one kind into the desired ones."""

    resource_kind: RESOURCE_KIND
    identity: Callable[[T], str]
    """Returns the identity of a resource, used for matching and for reporting."""

    to_create: list[T] = field(default_factory=list)
    """Desired resources absent from the remote."""

    to_delete: list[T] = field(default_factory=list)
    """Remote resources absent from the desired settings. Contains the remote version."""

    to_update: list[T] = field(default_factory=list)
    """Resources present on both sides but different. Contains the desired version."""

    def has_changes(self) -> bool:
        return bool(self.to_create or self.to_delete or self.to_update)

    def total_changes(self) -> int:
        return len(self.to_create) + len(self.to_delete) + len(self.to_update)

    def summary(self) -> str:
        """Return a human-readable summary of the diff."""
        if not self.has_changes():
            return f"No differences detected for {self.resource_kind}"

        lines = [f"Differences for {self.resource_kind}:"]
        for title, marker, items in (
            ("Create", "+", self.to_create),
            ("Delete", "-", self.to_delete),
            ("Update", "~", self.to_update),
        ):
            if not items:
                continue
            lines.append(f"  {title}: {len(items)}")
            for item in items[:5]:
                lines.append(f"    {marker} {self.identity(item)}")
            if len(items) > 5:
                lines.append(f"    ... and {len(items) - 5} more")

        return "\n".join(lines)


def compute_diff(
    resource_kind: RESOURCE_KIND,
    actual: Sequence[T],
    desired: Sequence[T],
    *,
    identity: Callable[[T], str],
    prepare: Callable[[T, T], tuple[T, T]] | None = None,
    deletable: Callable[[T], bool] | None = None,
) -> ResourceDiff[T]:
    """Diff two sequences of resources matched by identity.

    Args:
        resource_kind: The kind of the resources being compared.
        actual: The resources currently on the remote.
        desired: The resources wanted.
        identity: Returns the identity of a resource.
        prepare: Called with (actual, desired) for every matched pair before comparing. Returns
            the pair to compare; the returned desired resource is the one scheduled for update.
        deletable: Selects which unmatched remote resources need a delete. Defaults to all of them.

    Returns:
        The diff. Creations and updates follow the desired order, deletions the actual order.
    """
    remaining = {identity(item): item for item in actual}
    diff = ResourceDiff(resource_kind=resource_kind, identity=identity)

    for desired_item in desired:
        key = identity(desired_item)
        actual_item = remaining.pop(key, None)

        if actual_item is None:
            diff.to_create.append(desired_item)
            continue

        if prepare is not None:
            actual_item, desired_item = prepare(actual_item, desired_item)

        if actual_item != desired_item:
            logger.debug(f"{resource_kind} {key} modified")
            logger.debug(f"Remote version: {actual_item!r}")
            logger.debug(f"Desired version: {desired_item!r}")
            diff.to_update.append(desired_item)

    diff.to_delete = [item for item in remaining.values() if deletable is None or deletable(item)]

    logger.debug(
        f"{resource_kind}: {len(diff.to_create)} to create, {len(diff.to_delete)} to delete, "
        f"{len(diff.to_update)} to update"
    )
    return diff
