"""
Field merger for multipart samples.

Collects, for every key seen in a list of sibling objects, how often it
was present, whether it was ever null, and its non-null values.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..json_ast.nodes import JsonNull, JsonObject
from .ir_nodes import MergeStats


def merge_objects(samples: Sequence[JsonObject]) -> dict[str, MergeStats]:
    """
    Merge sibling object samples into per-key statistics.

    Args:
        samples: Object samples, in input order

    Returns:
        Mapping from key to MergeStats, in first-seen key order
    """
    total = len(samples)
    merged: dict[str, MergeStats] = {}

    for sample in samples:
        for key, value in sample.members.items():
            stats = merged.get(key)
            if stats is None:
                stats = merged[key] = MergeStats(total_samples=total)

            stats.present_count += 1
            if isinstance(value, JsonNull):
                stats.nullable_seen = True
            else:
                stats.values.append(value)

    return merged


def has_consistent_structure(objects: Sequence[JsonObject]) -> bool:
    """True when all objects share exactly one key set (values are ignored)."""
    return len({frozenset(obj.members) for obj in objects}) == 1
