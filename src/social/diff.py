"""List deltas between the before/after snapshots of a document."""

from __future__ import annotations

from collections.abc import Sequence


def added_ids(
    previous: Sequence[str] | None, current: Sequence[str] | None
) -> list[str]:
    """Elements of ``current`` missing from ``previous``, in ``current`` order."""
    before = set(previous or ())
    added: list[str] = []
    seen: set[str] = set()
    for item in current or ():
        if item not in before and item not in seen:
            seen.add(item)
            added.append(item)
    return added


def last_added(
    previous: Sequence[str] | None, current: Sequence[str] | None
) -> str | None:
    """The new element at the highest position of ``current``, or None.

    Only one new relation is taken per event in this mode; earlier
    additions of the same update are dropped.
    """
    before = set(previous or ())
    for item in reversed(current or ()):
        if item not in before:
            return item
    return None
