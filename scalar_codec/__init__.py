"""Schema-directed encoding and decoding of custom GraphQL scalars."""

from __future__ import annotations

from scalar_codec.codec.errors import (
    ScalarCodecError as ScalarCodecError,
    ScalarConfigError as ScalarConfigError,
    SchemaLoadError as SchemaLoadError,
)
from scalar_codec.codec.exchange import (
    ScalarsExchange as ScalarsExchange,
    scalars_exchange as scalars_exchange,
)
from scalar_codec.codec.inputs import resolve_input_paths as resolve_input_paths
from scalar_codec.codec.mapper import map_at_path as map_at_path
from scalar_codec.codec.outputs import resolve_output_paths as resolve_output_paths
from scalar_codec.codec.pipeline import ScalarCodec as ScalarCodec
from scalar_codec.codec.schema import load_schema as load_schema
from scalar_codec.codec.types import (
    Operation as Operation,
    OperationResult as OperationResult,
    ScalarMapping as ScalarMapping,
    ScalarPath as ScalarPath,
)

__all__ = [
    "Operation",
    "OperationResult",
    "ScalarCodec",
    "ScalarCodecError",
    "ScalarConfigError",
    "ScalarMapping",
    "ScalarPath",
    "ScalarsExchange",
    "SchemaLoadError",
    "load_schema",
    "map_at_path",
    "resolve_input_paths",
    "resolve_output_paths",
    "scalars_exchange",
]
