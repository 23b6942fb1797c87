"""Stable de-duplication of extracted action items."""

from collections.abc import Iterable

from ..models.action_item import ActionItem


def dedupe_key(item: ActionItem) -> str:
    """Case-insensitive identity of an action item: "owner|task"."""
    return f'{item.owner}|{item.task}'.lower()


def dedupe_actions(items: Iterable[ActionItem]) -> list[ActionItem]:
    """
    Drop items whose key was already seen, keeping the first occurrence.

    Whitespace differences are not folded; only casing is.
    """
    seen: set[str] = set()
    unique: list[ActionItem] = []
    for item in items:
        key = dedupe_key(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique
