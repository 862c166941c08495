"""Ordered path-to-owner mapping for presentation."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Sequence, Tuple

from ..models import ROOT_PATTERN, UNOWNED_MARKER, OwnerValue


def path_depth(key: str) -> int:
    """Count the non-empty ``/``-separated segments of ``key``."""
    return sum(1 for segment in key.split("/") if segment)


def mapping_sort_key(key: str) -> Tuple[int, int, str]:
    # root first, then shallower paths, then lexicographic
    if key == ROOT_PATTERN:
        return (0, 0, "")
    return (1, path_depth(key), key)


def sort_keys(keys: Iterable[str]) -> list[str]:
    return sorted(set(keys), key=mapping_sort_key)


def owner_value(owners: Sequence[str]) -> OwnerValue:
    if not owners:
        return UNOWNED_MARKER
    if len(owners) == 1:
        return owners[0]
    return list(owners)


def build_mapping(
    entries: Mapping[str, Sequence[str]],
    unowned: Iterable[str],
) -> Dict[str, OwnerValue]:
    """Merge owned patterns and unowned buckets into one ordered mapping."""
    mapping: Dict[str, OwnerValue] = {}
    for key in sort_keys([*entries, *unowned]):
        if key in entries:
            mapping[key] = owner_value(entries[key])
        else:
            mapping[key] = UNOWNED_MARKER
    return mapping


__all__ = ["build_mapping", "mapping_sort_key", "owner_value", "path_depth", "sort_keys"]
