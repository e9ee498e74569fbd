"""Scalar table configuration: normalization and ``module:attr`` loading."""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import Any, cast

from scalar_codec.codec.errors import ScalarConfigError
from scalar_codec.codec.types import ScalarMapping


def normalize_scalars(scalars: Mapping[str, Any]) -> dict[str, ScalarMapping]:
    """Turn user configuration into a ``{scalar name: ScalarMapping}`` table.

    Each value may be a ScalarMapping, a dict with ``encode``/``decode`` keys,
    or a single callable used in both directions.
    """
    if not isinstance(scalars, Mapping):
        raise ScalarConfigError(
            f"Scalars must be a mapping of type name to transforms, got {type(scalars).__name__}"
        )
    table: dict[str, ScalarMapping] = {}
    for name, value in scalars.items():
        if not isinstance(name, str) or not name:
            raise ScalarConfigError(f"Invalid scalar type name: {name!r}")
        try:
            table[name] = ScalarMapping.coerce(value)
        except ScalarConfigError as e:
            raise ScalarConfigError(f"Scalar '{name}': {e}") from e
    return table


def load_scalars(reference: str) -> dict[str, ScalarMapping]:
    """Import a scalar table from a ``package.module:attribute`` reference.

    The attribute may be the table itself or a zero-argument callable
    returning it.
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ScalarConfigError(
            f"Invalid scalars reference '{reference}', expected 'module:attribute'"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ScalarConfigError(f"Cannot import module '{module_name}': {e}") from e

    value: Any = module
    for part in attr.split("."):
        try:
            value = getattr(value, part)
        except AttributeError as e:
            raise ScalarConfigError(f"'{module_name}' has no attribute '{attr}'") from e

    if callable(value) and not isinstance(value, Mapping):
        value = value()
    return normalize_scalars(cast(Mapping[str, Any], value))
