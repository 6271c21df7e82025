"""
Recursive promotion of keyed fields into their parents.

Two promotion shapes exist:

- Mapping flattening: ``{"name": "x", "private": {"email": "e"}}`` becomes
  ``{"name": "x", "email": "e"}``. The field's value is deep-merged into
  the mapping that held it.
- Sequence splicing: a sequence element that is a mapping whose only key is
  the promoted key, e.g. ``{"private": [{"name": "y"}]}``, is emptied and
  its sequence value appended to the parent sequence.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import hash_joiner.merge as merge
import hash_joiner.walker as walker

_logger = _logging.getLogger(__name__)


def promote_data(collection: _typing.Any, key: _typing.Any) -> None:
    """
    Recursively promote data stored under key to the level of key itself.

    After promotion every occurrence of key is gone. Sequences are cleaned
    of any mapping or sequence elements left empty by the promotion.

    Args:
        collection: Mapping or sequence to transform, mutated in place.
        key: Key identifying the data to promote.

    Raises:
        MergeError: If a promoted value does not have the same kind as the
            container it is merged into.
    """
    kind = walker.kind_of(collection)

    if kind is walker.Kind.MAPPING:
        if key in collection:
            data_to_promote = collection.pop(key)
            _logger.debug("Promoting %r into mapping", key)
            merge.deep_merge(collection, data_to_promote)
        for value in collection.values():
            promote_data(value, key)

    elif kind is walker.Kind.SEQUENCE:
        # Elements spliced onto the end are visited by this same loop
        index = 0
        while index < len(collection):
            item = collection[index]
            if walker.is_mapping(item) and list(item.keys()) == [key]:
                data_to_promote = item.pop(key)
                _logger.debug("Splicing %r into sequence", key)
                merge.deep_merge(collection, data_to_promote)
            else:
                promote_data(item, key)
            index += 1

        walker.drop_empty_entries(collection)
