"""Types shared by the path resolvers, the mapper and the codec pipeline.

Three layers of types:
1. Scalar configuration: one ScalarMapping per custom scalar name
2. Resolution output: ScalarPath lists, plus the resolver-internal occurrences
3. Transport: the Operation / OperationResult pair an exchange passes around
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from graphql.language.ast import DocumentNode

from scalar_codec.codec.errors import ScalarConfigError

MapFunction = Callable[[Any], Any]

# -- Scalar configuration ------------------------------------------------------


@dataclass(frozen=True)
class ScalarMapping:
    """Encode/decode pair for one scalar type.

    ``encode`` turns an application value into its wire form (applied to
    request variables), ``decode`` turns a wire value back (applied to
    response data). A missing direction is a no-op.
    """

    encode: MapFunction | None = None
    decode: MapFunction | None = None

    @classmethod
    def coerce(cls, value: Any) -> ScalarMapping:
        """Build a ScalarMapping from the shapes accepted in user configuration.

        Accepts an existing ScalarMapping, a mapping with ``encode``/``decode``
        keys (``serialize``/``deserialize`` are accepted as aliases), or a bare
        callable used for both directions.
        """
        if isinstance(value, ScalarMapping):
            return value
        if isinstance(value, Mapping):
            options: Mapping[str, Any] = value
            unknown = set(options) - {"encode", "decode", "serialize", "deserialize"}
            if unknown:
                raise ScalarConfigError(
                    f"Unknown scalar mapping keys: {', '.join(sorted(unknown))}"
                )
            encode = options.get("encode", options.get("serialize"))
            decode = options.get("decode", options.get("deserialize"))
            for direction, fn in (("encode", encode), ("decode", decode)):
                if fn is not None and not callable(fn):
                    raise ScalarConfigError(f"Scalar {direction} function is not callable: {fn!r}")
            return cls(encode=encode, decode=decode)
        if callable(value):
            return cls(encode=value, decode=value)
        raise ScalarConfigError(f"Cannot build a scalar mapping from {type(value).__name__}")


# -- Resolution output ---------------------------------------------------------


@dataclass(frozen=True)
class ScalarPath:
    """Where values of scalar ``name`` live inside variables or response data.

    Paths hold response keys (alias if present, else field name) or
    variable/input-field names. List indices are never part of a path.
    """

    name: str
    path: tuple[str, ...]


@dataclass(frozen=True)
class ScalarOccurrence:
    """A scalar field found directly inside an operation or fragment."""

    name: str
    path: tuple[str, ...]


@dataclass(frozen=True)
class FragmentOccurrence:
    """A named fragment spread, with the local path at which it was spread."""

    fragment_name: str
    path: tuple[str, ...]


Occurrence = ScalarOccurrence | FragmentOccurrence


# -- Transport -----------------------------------------------------------------


@dataclass
class Operation:
    """An outgoing GraphQL operation as seen by an exchange."""

    document: DocumentNode
    variables: dict[str, Any] | None = None
    operation_name: str | None = None
    key: int = 0
    context: dict[str, Any] = field(default_factory=lambda: dict[str, Any]())


@dataclass
class OperationResult:
    """A result received for an operation."""

    operation: Operation
    data: Any = None
    errors: list[Any] | None = None
    extensions: dict[str, Any] | None = None
