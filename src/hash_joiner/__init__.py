"""
hash_joiner - prune, promote and join tree-shaped data.

Operates in place on nested mappings and sequences, typically loaded from
YAML or JSON:

- remove_data: strip every field with a given key
- promote_data: lift a field's contents into its parent
- deep_merge: merge two trees of matching shape
- join_data / join_array_data: merge a named category across two roots,
  matching records on a primary key field

None of the operations copy their inputs.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("hash-joiner")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from hash_joiner.errors import (  # noqa: E402
    DocumentError,
    HashJoinerError,
    JoinError,
    MergeError,
)
from hash_joiner.join import (  # noqa: E402
    assert_is_mapping_with_key,
    join_array_data,
    join_data,
)
from hash_joiner.merge import deep_merge  # noqa: E402
from hash_joiner.promote import promote_data  # noqa: E402
from hash_joiner.prune import remove_data  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "DocumentError",
    "HashJoinerError",
    "JoinError",
    "MergeError",
    "assert_is_mapping_with_key",
    "deep_merge",
    "join_array_data",
    "join_data",
    "promote_data",
    "remove_data",
]
