"""Recursive removal of keyed fields from a tree."""

from __future__ import annotations

import typing as _typing

import hash_joiner.walker as walker


def remove_data(collection: _typing.Any, key: _typing.Any) -> None:
    """
    Recursively strip every mapping entry named key from collection.

    The matching entry is discarded wholesale, without descending into it.
    Sequences are cleaned of any mapping or sequence elements left empty
    by the removal. Scalars are ignored, so any input is accepted.

    To strip private data before publishing:

        >>> team = {"name": "mbland", "private": {"email": "mbland@example.com"}}
        >>> remove_data(team, "private")
        >>> team
        {'name': 'mbland'}

    Args:
        collection: Mapping or sequence to strip, mutated in place.
        key: Key identifying the data to remove.
    """
    kind = walker.kind_of(collection)

    if kind is walker.Kind.MAPPING:
        collection.pop(key, None)
        for value in collection.values():
            remove_data(value, key)
    elif kind is walker.Kind.SEQUENCE:
        for item in collection:
            remove_data(item, key)
        walker.drop_empty_entries(collection)
