"""Build a GraphQLSchema from the forms a host usually has at hand."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from graphql import GraphQLError, GraphQLSchema, build_client_schema, build_schema

from scalar_codec.codec.errors import SchemaLoadError

logger = logging.getLogger(__name__)

SchemaSource = GraphQLSchema | Mapping[str, Any] | str | Path


def load_schema(source: SchemaSource) -> GraphQLSchema:
    """Return a GraphQLSchema for *source*.

    Accepts a ready schema (returned as is), an introspection result (with or
    without the ``{"data": ...}`` envelope), SDL text, or a path to a
    ``.json`` introspection file or an SDL file.
    """
    if isinstance(source, GraphQLSchema):
        return source
    if isinstance(source, Path):
        return _load_schema_file(source)
    if isinstance(source, Mapping):
        return _from_introspection(cast(Mapping[str, Any], source))
    if isinstance(source, str):
        return _from_sdl(source)
    raise SchemaLoadError(f"Unsupported schema source: {type(source).__name__}")


def _load_schema_file(path: Path) -> GraphQLSchema:
    try:
        text = path.read_text()
    except OSError as e:
        raise SchemaLoadError(f"Cannot read schema file {path}: {e}") from e

    logger.debug(f"Loading schema from {path}")
    if path.suffix == ".json":
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaLoadError(f"Invalid JSON in schema file {path}: {e}") from e
        if not isinstance(data, dict):
            raise SchemaLoadError(f"Schema file {path} does not hold an introspection object")
        return _from_introspection(cast(dict[str, Any], data))
    return _from_sdl(text)


def _from_introspection(data: Mapping[str, Any]) -> GraphQLSchema:
    if "__schema" not in data and isinstance(data.get("data"), Mapping):
        data = cast(Mapping[str, Any], data["data"])
    if "__schema" not in data:
        raise SchemaLoadError("Introspection result has no '__schema' key")
    try:
        return build_client_schema(cast(Any, data))
    except (GraphQLError, TypeError, KeyError) as e:
        raise SchemaLoadError(f"Invalid introspection result: {e}") from e


def _from_sdl(sdl: str) -> GraphQLSchema:
    try:
        return build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        raise SchemaLoadError(f"Invalid schema SDL: {e}") from e
