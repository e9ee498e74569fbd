"""The codec pipeline: resolve scalar paths for a document, then rewrite values.

Outgoing operations get their variables encoded, incoming results get their
data decoded. Path lists depend only on the document, the schema and the
scalar table, so they are cached per document.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections import OrderedDict
from collections.abc import Callable, Mapping
from typing import Any

from graphql import GraphQLSchema
from graphql.language.ast import DocumentNode

from scalar_codec.codec.inputs import resolve_input_paths
from scalar_codec.codec.mapper import map_at_path
from scalar_codec.codec.outputs import resolve_output_paths
from scalar_codec.codec.schema import SchemaSource, load_schema
from scalar_codec.codec.types import (
    MapFunction,
    Operation,
    OperationResult,
    ScalarMapping,
    ScalarPath,
)
from scalar_codec.helpers.loading import normalize_scalars

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 128


class _PathCache:
    """Bounded cache of path lists keyed by document identity.

    Entries keep a reference to their document so an id cannot be reused by
    another object while the entry lives.
    """

    def __init__(self, max_size: int):
        self._max_size = max_size
        self._entries: OrderedDict[int, tuple[DocumentNode, list[ScalarPath]]] = OrderedDict()
        self._lock = threading.Lock()

    def get_or_compute(
        self, document: DocumentNode, compute: Callable[[], list[ScalarPath]]
    ) -> list[ScalarPath]:
        if self._max_size <= 0:
            return compute()

        key = id(document)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] is document:
                self._entries.move_to_end(key)
                return entry[1]

        # Computed outside the lock; a concurrent duplicate is harmless
        paths = compute()
        with self._lock:
            self._entries[key] = (document, paths)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)
        return paths

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class ScalarCodec:
    """Encodes operation variables and decodes result data for custom scalars.

    *schema* is anything ``load_schema`` accepts; *scalars* maps scalar type
    names to a ScalarMapping, an ``{"encode": ..., "decode": ...}`` dict, or
    a single callable.
    """

    def __init__(
        self,
        schema: SchemaSource,
        scalars: Mapping[str, Any],
        *,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self._schema = load_schema(schema)
        self._scalars = normalize_scalars(scalars)
        self._input_cache = _PathCache(cache_size)
        self._output_cache = _PathCache(cache_size)

    @property
    def schema(self) -> GraphQLSchema:
        return self._schema

    @property
    def scalars(self) -> Mapping[str, ScalarMapping]:
        return self._scalars

    def input_paths(self, document: DocumentNode) -> list[ScalarPath]:
        """Scalar paths inside the variables of *document*."""
        return self._input_cache.get_or_compute(
            document, lambda: resolve_input_paths(document, self._schema, self._scalars)
        )

    def output_paths(self, document: DocumentNode) -> list[ScalarPath]:
        """Scalar paths inside the response data of *document*."""
        return self._output_cache.get_or_compute(
            document, lambda: resolve_output_paths(document, self._schema, self._scalars)
        )

    def encode_variables(self, operation: Operation) -> Operation:
        """Return *operation* with its variables encoded.

        The same object is returned when the document has no encodable scalars.
        """
        paths = self.input_paths(operation.document)
        if not paths:
            return operation

        variables = self._apply(operation.variables, paths, lambda m: m.encode)
        logger.debug(f"Encoded {len(paths)} variable path(s) for operation {operation.key}")
        return dataclasses.replace(operation, variables=variables)

    def decode_data(self, operation: Operation, data: Any) -> Any:
        """Return *data* with every decodable scalar of *operation* decoded."""
        if data is None:
            return data
        paths = self.output_paths(operation.document)
        if not paths:
            return data

        logger.debug(f"Decoding {len(paths)} data path(s) for operation {operation.key}")
        return self._apply(data, paths, lambda m: m.decode)

    def decode_result(self, result: OperationResult) -> OperationResult:
        """Return *result* with its data decoded; unchanged results are returned as is."""
        data = self.decode_data(result.operation, result.data)
        if data is result.data:
            return result
        return dataclasses.replace(result, data=data)

    def clear_cache(self) -> None:
        self._input_cache.clear()
        self._output_cache.clear()

    def _apply(
        self,
        tree: Any,
        paths: list[ScalarPath],
        pick: Callable[[ScalarMapping], MapFunction | None],
    ) -> Any:
        # Each application sees the previous one's output
        for scalar_path in paths:
            fn = pick(self._scalars[scalar_path.name])
            if fn is None:
                continue
            tree = map_at_path(tree, scalar_path.path, fn)
        return tree
