"""
Exception types raised by hash_joiner.

Every error the package raises derives from HashJoinerError, so host
programs can catch the whole family at one seam. None of these are caught
inside the library; they always surface to the immediate caller.
"""

import typing as _typing


class HashJoinerError(Exception):
    """Base class for all hash_joiner errors."""

    pass


class MergeError(HashJoinerError):
    """Raised by deep_merge() when two operands cannot be merged.

    Attributes:
        lhs: The merge destination operand.
        rhs: The merge source operand.
        lhs_kind: Kind name of lhs ("mapping", "sequence" or "scalar").
        rhs_kind: Kind name of rhs.
    """

    def __init__(
        self,
        message: str,
        lhs: _typing.Any,
        rhs: _typing.Any,
        lhs_kind: str,
        rhs_kind: str,
    ) -> None:
        self.lhs = lhs
        self.rhs = rhs
        self.lhs_kind = lhs_kind
        self.rhs_kind = rhs_kind
        super().__init__(message)


class JoinError(HashJoinerError):
    """Raised by join_array_data() on malformed join input.

    Attributes:
        value: The offending value.
        label: Where the value came from, e.g. "LHS element".
    """

    def __init__(self, message: str, value: _typing.Any, label: str) -> None:
        self.value = value
        self.label = label
        super().__init__(message)


class DocumentError(HashJoinerError):
    """Error reading or parsing a data document."""

    def __init__(self, path: _typing.Any, message: str) -> None:
        self.path = path
        super().__init__(f"Error in document {path}: {message}")
