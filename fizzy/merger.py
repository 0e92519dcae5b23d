"""Deep merge of variable structures and detection of parent collisions."""
from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Set, Tuple

KeyPath = Tuple[str, ...]

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Collision:
    key: str
    value_a: Any
    value_b: Any


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``overlay`` over ``base``; non-mapping values in ``overlay`` replace."""
    merged: Dict[str, Any] = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def merge_all(structures: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Left-fold ``structures`` so that later entries override earlier ones."""
    merged: Dict[str, Any] = {}
    for structure in structures:
        merged = deep_merge(merged, structure)
    return merged


def iter_key_paths(structure: Mapping[str, Any], prefix: KeyPath = ()) -> Iterator[Tuple[KeyPath, bool]]:
    """Yield every key path of ``structure`` with a flag telling whether it is a leaf.

    Mappings, empty ones included, are never leaves: they merge key-wise.
    """
    for key, value in structure.items():
        path = prefix + (str(key),)
        if isinstance(value, Mapping):
            yield path, False
            yield from iter_key_paths(value, path)
        else:
            yield path, True


def lookup_path(structure: Mapping[str, Any], path: KeyPath) -> Any:
    current: Any = structure
    for part in path:
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _same_value(value_a: Any, value_b: Any) -> bool:
    # ``True == 1`` in Python, but a boolean and a number are different settings.
    if isinstance(value_a, bool) != isinstance(value_b, bool):
        return False
    return value_a == value_b


def is_overridden(structure: Mapping[str, Any], path: KeyPath) -> bool:
    """Tell whether ``structure`` sets ``path`` itself or replaces one of its ancestors."""
    current: Any = structure
    for part in path:
        if not isinstance(current, Mapping) or part not in current:
            return False
        current = current[part]
        if not isinstance(current, Mapping):
            return True
    return True


def _pair_collisions(
    first: Mapping[str, Any],
    second: Mapping[str, Any],
    overrides: Mapping[str, Any],
) -> Iterator[Collision]:
    first_paths = dict(iter_key_paths(first))
    second_paths = dict(iter_key_paths(second))
    shared: Set[KeyPath] = {
        path
        for path, is_leaf in first_paths.items()
        if path in second_paths and (is_leaf or second_paths[path])
    }
    for path in sorted(shared):
        if is_overridden(overrides, path):
            continue
        value_a = lookup_path(first, path)
        value_b = lookup_path(second, path)
        if not _same_value(value_a, value_b):
            yield Collision(".".join(path), value_a, value_b)


def find_collisions(
    structures: Sequence[Mapping[str, Any]],
    *,
    overrides: Mapping[str, Any] | None = None,
) -> List[Collision]:
    """Return the deduplicated collisions between every pair of ``structures``.

    Only keys that hold a non-mapping value in at least one of the two
    structures are compared, so siblings extending the same nested mapping
    with different keys do not collide. Keys whose value ``overrides``
    replaces are ignored.
    """
    collisions: List[Collision] = []
    seen: Set[Tuple[str, Tuple[str, ...]]] = set()
    for first, second in combinations(structures, 2):
        for collision in _pair_collisions(first, second, overrides or {}):
            marker = (collision.key, tuple(sorted((repr(collision.value_a), repr(collision.value_b)))))
            if marker in seen:
                continue
            seen.add(marker)
            collisions.append(collision)
    return collisions


__all__ = [
    "Collision",
    "deep_merge",
    "find_collisions",
    "is_overridden",
    "iter_key_paths",
    "lookup_path",
    "merge_all",
]
