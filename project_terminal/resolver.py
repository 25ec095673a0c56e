"""Uniform identifier resolution for every entity kind."""

from collections.abc import Callable, Sequence
from typing import TypeVar

from project_terminal.exceptions import ResolutionError

T = TypeVar("T")


def _default_label(item: object) -> str:
    return getattr(item, "label", "") or ""


def resolve_entity(
    items: Sequence[T],
    identifier: str,
    label: Callable[[T], str] | None = None,
) -> T | None:
    """Resolve a user-typed identifier against an ordered collection.

    Tiers are tried in order and the first tier with a candidate wins:

    1. exact id match (case-sensitive), even when the identifier looks numeric
    2. 1-based position in ``items`` as given by the caller
    3. first item whose label contains the identifier, case-insensitively

    Args:
        items: Entities in the order positions refer to
        identifier: Text typed by the user
        label: Label accessor; defaults to the item's ``label`` property

    Returns:
        The matching item, or None
    """
    identifier = identifier.strip()
    if not identifier:
        return None
    get_label = label or _default_label

    for item in items:
        if getattr(item, "id", None) == identifier:
            return item

    if identifier.isascii() and identifier.isdigit():
        index = int(identifier)
        if 1 <= index <= len(items):
            return items[index - 1]

    needle = identifier.casefold()
    for item in items:
        if needle in get_label(item).casefold():
            return item

    return None


def require_entity(
    items: Sequence[T],
    identifier: str,
    kind: str,
    label: Callable[[T], str] | None = None,
    suggestions: list[str] | None = None,
) -> T:
    """Resolve or raise ResolutionError naming the identifier that missed."""
    found = resolve_entity(items, identifier, label)
    if found is None:
        raise ResolutionError(f'{kind} not found: "{identifier}"', suggestions)
    return found
