"""SQL-like grouping and joining of in-memory lists."""

from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, Iterable, List, Optional, TypeVar

from assertify.exceptions import JoinError

L = TypeVar("L")  # Left item type
R = TypeVar("R")  # Right item type
K = TypeVar("K", bound=Hashable)  # Join key type


@dataclass(frozen=True)
class JoinRow(Generic[L, R, K]):
    """One joined pair; ``right`` is None for unmatched rows of a left join."""

    left: L
    right: Optional[R]
    key: K


def group_by(items: Iterable[L], key: Callable[[L], K]) -> Dict[K, List[L]]:
    """Group items by the key derived from each of them.

    Keys keep the order in which they were first seen, items keep their
    original order within each group.

    Raises:
        JoinError: If ``key`` raises for an item
    """
    groups: Dict[K, List[L]] = {}
    for item in items:
        try:
            item_key = key(item)
        except Exception as e:
            raise JoinError(f"Key extraction failed for {item!r}: {e}") from e
        groups.setdefault(item_key, []).append(item)
    return groups


def _join(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], K],
    right_key: Callable[[R], K],
    keep_unmatched: bool,
) -> List[JoinRow]:
    right_groups = group_by(right, right_key)
    rows: List[JoinRow] = []
    for key, left_items in group_by(left, left_key).items():
        matches = right_groups.get(key)
        for left_item in left_items:
            if matches:
                rows.extend(JoinRow(left_item, right_item, key) for right_item in matches)
            elif keep_unmatched:
                rows.append(JoinRow(left_item, None, key))
    return rows


def inner_join(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], K],
    right_key: Callable[[R], K],
) -> List[JoinRow]:
    """Every (left, right) pair whose keys are equal.

    Rows are ordered by left key group (first-seen order), then by left
    item, then by right item.
    """
    return _join(left, right, left_key, right_key, keep_unmatched=False)


def left_join(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], K],
    right_key: Callable[[R], K],
) -> List[JoinRow]:
    """Like ``inner_join`` but left items without a match are kept with ``right=None``."""
    return _join(left, right, left_key, right_key, keep_unmatched=True)
