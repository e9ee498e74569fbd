"""Apply a function to the values found at a path inside a JSON-like tree.

Only the mappings along the path are copied; siblings are shared with the
input. Lists met anywhere along the path are descended transparently, and a
``None`` (or missing key) anywhere along the path ends the walk without
calling the function.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, cast

from scalar_codec.codec.types import MapFunction


def map_at_path(data: Any, path: Sequence[str], fn: MapFunction) -> Any:
    """Return a copy of *data* with *fn* applied to every value at *path*.

    >>> map_at_path({"a": [{"b": 1}, {"b": 2}]}, ["a", "b"], lambda v: v * 10)
    {'a': [{'b': 10}, {'b': 20}]}
    """
    if data is None:
        return data
    if not path:
        return _apply(data, fn)
    if isinstance(data, list):
        return [map_at_path(item, path, fn) for item in cast(list[Any], data)]
    if not isinstance(data, Mapping):
        return data

    new_data = dict(cast(Mapping[str, Any], data))
    segment, rest = path[0], path[1:]
    value = new_data.get(segment)
    if value is None:
        return new_data

    if rest:
        new_data[segment] = map_at_path(value, rest, fn)
    else:
        new_data[segment] = _apply(value, fn)
    return new_data


def _apply(value: Any, fn: MapFunction) -> Any:
    """Apply *fn* to a leaf value, element-wise through (nested) lists."""
    if value is None:
        return None
    if isinstance(value, list):
        return [_apply(item, fn) for item in cast(list[Any], value)]
    return fn(value)
