"""
Structural deep merge of mapping and sequence trees.

deep_merge() mutates its left-hand operand in place and never copies:
values taken from the right-hand side are inserted by reference, so the
merged tree shares subtrees with rhs. Callers that need to keep their
originals intact should copy.deepcopy() them first.

Example:
    >>> lhs = {"a": {"x": 1}, "tags": ["one"]}
    >>> deep_merge(lhs, {"a": {"y": 2}, "tags": ["two"]})
    >>> lhs
    {'a': {'x': 1, 'y': 2}, 'tags': ['one', 'two']}
"""

from __future__ import annotations

import typing as _typing

import hash_joiner.errors as errors
import hash_joiner.walker as walker


def deep_merge(lhs: _typing.Any, rhs: _typing.Any) -> None:
    """
    Merge rhs into lhs in place.

    - Two mappings: for each rhs entry, if lhs already has the key and the
      rhs value is a mapping or sequence, the two values are deep-merged.
      Otherwise the rhs value is assigned, so scalars from rhs always win,
      even over a composite lhs value.
    - Two sequences: rhs elements are appended to lhs in order. No
      deduplication or matching is done; see join_array_data() for that.

    Args:
        lhs: Merged data sink (left-hand side).
        rhs: Merged data source (right-hand side).

    Raises:
        MergeError: If lhs and rhs are of different kinds, or if they are
            not mappings or sequences. Nested mismatches propagate from the
            point where they are found and abort the whole merge.
    """
    lhs_kind = walker.kind_of(lhs)
    rhs_kind = walker.kind_of(rhs)

    if lhs_kind is not rhs_kind:
        raise errors.MergeError(
            f"LHS ({lhs_kind.value}): {lhs!r}\nRHS ({rhs_kind.value}): {rhs!r}",
            lhs,
            rhs,
            lhs_kind.value,
            rhs_kind.value,
        )
    if lhs_kind is walker.Kind.SCALAR:
        raise errors.MergeError(
            f"Kind not mergeable: {type(lhs).__name__}",
            lhs,
            rhs,
            lhs_kind.value,
            rhs_kind.value,
        )

    if rhs_kind is walker.Kind.MAPPING:
        for key, value in rhs.items():
            if key in lhs and walker.is_mergeable(value):
                deep_merge(lhs[key], value)
            else:
                lhs[key] = value
    else:
        lhs.extend(rhs)
