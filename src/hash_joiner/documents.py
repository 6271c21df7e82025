"""
Loading and dumping of YAML and JSON data documents.

The tree operations work on plain dicts and lists; this module turns files
into such trees and back. The typical input is a YAML file mixing public
data with private data nested under "private" fields.
"""

from __future__ import annotations

import datetime as _datetime
import json as _json
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import hash_joiner.errors as errors

Format = _typing.Literal["yaml", "json"]


def load(text: str, *, fmt: Format = "yaml") -> _typing.Any:
    """
    Parse a document from text.

    Args:
        text: Document content.
        fmt: "yaml" (safe loader) or "json".

    Returns:
        The parsed tree. An empty YAML document yields an empty dict.

    Raises:
        yaml.YAMLError: If YAML is malformed.
        json.JSONDecodeError: If JSON is malformed.
    """
    if fmt == "json":
        return _json.loads(text)
    data = _yaml.safe_load(text)
    return {} if data is None else data


def load_file(path: _pathlib.Path | str) -> _typing.Any:
    """
    Load a document from a file, choosing the format from its suffix.

    Files ending in ".json" are parsed as JSON, everything else as YAML.

    Raises:
        DocumentError: If the file cannot be read or parsed.
    """
    path = _pathlib.Path(path)
    fmt: Format = "json" if path.suffix.lower() == ".json" else "yaml"

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise errors.DocumentError(path, f"cannot read file: {e}") from e

    try:
        return load(content, fmt=fmt)
    except _yaml.YAMLError as e:
        raise errors.DocumentError(path, f"invalid YAML: {e}") from e
    except _json.JSONDecodeError as e:
        raise errors.DocumentError(path, f"invalid JSON: {e}") from e


def dump(data: _typing.Any, *, fmt: Format = "yaml") -> str:
    """
    Serialize a tree as YAML (block style, insertion order) or JSON.

    YAML timestamps load as date/datetime objects; JSON writes them as
    ISO 8601 strings, and YAML sets as lists.

    Raises:
        TypeError: If JSON output meets a value it cannot represent.
    """
    if fmt == "json":
        return _json.dumps(data, indent=2, default=_json_default)
    return _yaml.dump(data, default_flow_style=False, sort_keys=False)


def _json_default(value: _typing.Any) -> _typing.Any:
    if isinstance(value, (_datetime.date, _datetime.time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
