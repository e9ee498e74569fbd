"""Exchange wrapper: plugs the codec into a client's operation stream.

An exchange receives the stream of outgoing operations and a ``forward``
function leading to the next stage. ``ScalarsExchange`` encodes variables on
the way out and decodes result data on the way back, for both synchronous
iterables and async iterables.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator, Mapping
from typing import Any

from scalar_codec.codec.pipeline import DEFAULT_CACHE_SIZE, ScalarCodec
from scalar_codec.codec.schema import SchemaSource
from scalar_codec.codec.types import Operation, OperationResult

ExchangeIO = Callable[[Iterable[Operation]], Iterable[OperationResult]]
AsyncExchangeIO = Callable[[AsyncIterable[Operation]], AsyncIterable[OperationResult]]


class ScalarsExchange:
    """Applies scalar encoding/decoding around a forward stage.

    Usage::

        exchange = scalars_exchange(schema=introspection, scalars={"Date": date_mapping})
        io = exchange(forward)
        for result in io(operations):
            ...
    """

    def __init__(self, codec: ScalarCodec):
        self._codec = codec

    @property
    def codec(self) -> ScalarCodec:
        return self._codec

    def __call__(self, forward: ExchangeIO) -> ExchangeIO:
        codec = self._codec

        def io(operations: Iterable[Operation]) -> Iterator[OperationResult]:
            encoded = (codec.encode_variables(op) for op in operations)
            for result in forward(encoded):
                yield codec.decode_result(result)

        return io

    def wrap_async(self, forward: AsyncExchangeIO) -> AsyncExchangeIO:
        codec = self._codec

        async def encode(operations: AsyncIterable[Operation]) -> AsyncIterator[Operation]:
            async for op in operations:
                yield codec.encode_variables(op)

        async def io(operations: AsyncIterable[Operation]) -> AsyncIterator[OperationResult]:
            async for result in forward(encode(operations)):
                yield codec.decode_result(result)

        return io

    def execute(
        self,
        operation: Operation,
        send: Callable[[Operation], OperationResult],
    ) -> OperationResult:
        """Encode, send and decode a single operation."""
        result = send(self._codec.encode_variables(operation))
        return self._codec.decode_result(result)


def scalars_exchange(
    *,
    schema: SchemaSource,
    scalars: Mapping[str, Any],
    cache_size: int = DEFAULT_CACHE_SIZE,
) -> ScalarsExchange:
    """Build a ScalarsExchange from a schema source and a scalar table."""
    return ScalarsExchange(ScalarCodec(schema, scalars, cache_size=cache_size))
