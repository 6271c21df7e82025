"""
Joining of named categories across two root mappings.

A category is a top-level field, such as "team" or "projects", that two
data sources both provide. Mapping categories are deep-merged; sequence
categories are treated as tables of records and joined on a primary key
field, so records are matched by identity rather than by position.

Example:
    >>> public = {"team": [{"name": "mbland", "full_name": "Mike Bland"}]}
    >>> private = {"team": [{"name": "mbland", "email": "mbland@example.com"}]}
    >>> join_data("team", "name", public, private)
    >>> public["team"]
    [{'name': 'mbland', 'full_name': 'Mike Bland', 'email': 'mbland@example.com'}]
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import hash_joiner.errors as errors
import hash_joiner.merge as merge
import hash_joiner.walker as walker

_logger = _logging.getLogger(__name__)


def join_data(
    category: _typing.Any,
    key_field: _typing.Any,
    lhs: _typing.MutableMapping[_typing.Any, _typing.Any],
    rhs: _typing.Mapping[_typing.Any, _typing.Any],
) -> None:
    """
    Join lhs[category] with the data from rhs[category], in place.

    - rhs has no usable category (missing, None or False): nothing happens.
    - lhs category missing or a scalar: rhs's value is assigned by reference.
    - lhs category is a mapping: deep_merge() with rhs's value.
    - lhs category is a sequence: join_array_data() on key_field.

    Args:
        category: Member of lhs to join with rhs.
        key_field: Primary key for sequences of records; ignored otherwise.
        lhs: Joined data sink (left-hand side).
        rhs: Joined data source (right-hand side).

    Raises:
        JoinError: If a sequence join finds malformed records.
        MergeError: If a mapping category cannot be merged with rhs's value.
    """
    rhs_data = rhs.get(category)
    if rhs_data is None or rhs_data is False:
        return

    lhs_data = lhs.get(category)
    kind = walker.kind_of(lhs_data)

    if kind is walker.Kind.SCALAR:
        lhs[category] = rhs_data
    elif kind is walker.Kind.MAPPING:
        merge.deep_merge(lhs_data, rhs_data)
    else:
        join_array_data(key_field, lhs_data, rhs_data)


def assert_is_mapping_with_key(
    value: _typing.Any,
    key: _typing.Any,
    label: str,
) -> None:
    """
    Raise JoinError unless value is a mapping containing key.

    Args:
        value: The record to check.
        key: The primary key field the record must contain.
        label: Description used in the error, e.g. "LHS element".
    """
    if not walker.is_mapping(value):
        raise errors.JoinError(f"{label} is not a Mapping: {value!r}", value, label)
    if key not in value:
        raise errors.JoinError(f'{label} missing "{key}": {value!r}', value, label)


def join_array_data(
    key_field: _typing.Any,
    lhs: _typing.Any,
    rhs: _typing.Any,
) -> None:
    """
    Join the records of the rhs sequence into the lhs sequence on key_field.

    Records from rhs whose key_field value matches an lhs record are
    deep-merged into that lhs record; the rest are appended to lhs. The
    index holds references, so matched lhs records are mutated in place.

    Duplicate key values within lhs are not validated: the last lhs record
    with a given key is the one rhs data is merged into.

    Args:
        key_field: Primary key for joined records.
        lhs: Joined data sink, a sequence of mappings.
        rhs: Joined data source, a sequence of mappings.

    Raises:
        JoinError: If lhs or rhs is not a sequence, or if any element is
            not a mapping containing key_field.
        MergeError: If a matched pair of records cannot be merged.
    """
    if not (walker.is_sequence(lhs) and walker.is_sequence(rhs)):
        lhs_kind = walker.kind_of(lhs).value
        rhs_kind = walker.kind_of(rhs).value
        raise errors.JoinError(
            f"Both lhs ({lhs_kind}) and rhs ({rhs_kind}) must be a Sequence of Mapping",
            rhs if walker.is_sequence(lhs) else lhs,
            "RHS" if walker.is_sequence(lhs) else "LHS",
        )

    lhs_index = _RecordIndex()
    for record in lhs:
        assert_is_mapping_with_key(record, key_field, "LHS element")
        lhs_index.add(record[key_field], record)

    merged = 0
    appended = 0
    for record in list(rhs):
        assert_is_mapping_with_key(record, key_field, "RHS element")
        match = lhs_index.find(record[key_field])
        if match is not None:
            merge.deep_merge(match, record)
            merged += 1
        else:
            lhs.append(record)
            appended += 1

    _logger.debug(
        "Joined on %r: %d merged, %d appended", key_field, merged, appended
    )


class _RecordIndex:
    """
    Records by key value, compared by equality.

    Hashable keys live in a dict. Unhashable keys (lists, mappings) are
    kept as (key, record) pairs and found by a linear scan. Adding an equal
    key again replaces the earlier record.
    """

    def __init__(self) -> None:
        self._hashed: dict[_typing.Any, _typing.Any] = {}
        self._unhashed: list[tuple[_typing.Any, _typing.Any]] = []

    def add(self, key: _typing.Any, record: _typing.Any) -> None:
        if _is_hashable(key):
            self._hashed[key] = record
            return
        for position, (existing, _) in enumerate(self._unhashed):
            if existing == key:
                self._unhashed[position] = (key, record)
                return
        self._unhashed.append((key, record))

    def find(self, key: _typing.Any) -> _typing.Any | None:
        if _is_hashable(key):
            return self._hashed.get(key)
        for existing, record in self._unhashed:
            if existing == key:
                return record
        return None


def _is_hashable(key: _typing.Any) -> bool:
    try:
        hash(key)
    except TypeError:
        return False
    return True
