"""
Kind dispatch shared by the recursive tree operations.

Trees are built from three kinds of value:

- Mapping: any MutableMapping (normally a dict loaded from YAML or JSON)
- Sequence: any MutableSequence (normally a list)
- Scalar: everything else, including str, bytes and tuple

Prune, promote and merge all dispatch on kind_of() at each recursion site
so that the three cases are handled exhaustively.
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing


class Kind(_enum.Enum):
    """The kind of a tree node."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def kind_of(value: _typing.Any) -> Kind:
    """
    Classify a value as a mapping, sequence or scalar.

    Only mutable containers count as mappings or sequences, since every
    operation in this package mutates its containers in place. Strings,
    bytes and tuples are therefore scalars.

    Example:
        >>> kind_of({"a": 1})
        <Kind.MAPPING: 'mapping'>
        >>> kind_of("abc")
        <Kind.SCALAR: 'scalar'>
    """
    if isinstance(value, _abc.MutableMapping):
        return Kind.MAPPING
    if isinstance(value, _abc.MutableSequence):
        return Kind.SEQUENCE
    return Kind.SCALAR


def is_mapping(value: _typing.Any) -> bool:
    """Check if a value is a mapping node."""
    return kind_of(value) is Kind.MAPPING


def is_sequence(value: _typing.Any) -> bool:
    """Check if a value is a sequence node."""
    return kind_of(value) is Kind.SEQUENCE


def is_mergeable(value: _typing.Any) -> bool:
    """Check if a value is a mapping or a sequence."""
    return kind_of(value) is not Kind.SCALAR


def drop_empty_entries(sequence: _typing.MutableSequence[_typing.Any]) -> None:
    """
    Remove empty mappings and empty sequences from a sequence, in place.

    Empty scalars ("", 0, None) are kept; only containers of length zero
    are dropped. Order of the remaining elements is preserved.

    Args:
        sequence: The sequence to clean up.
    """
    # Walk backwards so deletions do not shift unvisited indices
    for index in reversed(range(len(sequence))):
        item = sequence[index]
        if is_mergeable(item) and len(item) == 0:
            del sequence[index]
