"""CLI commands for the codec: list scalar paths, encode variables, decode data."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from graphql import parse as gql_parse
from graphql.error import GraphQLSyntaxError
from graphql.language.ast import DocumentNode
from pydantic import ValidationError

from scalar_codec.codec.errors import ScalarCodecError
from scalar_codec.codec.pipeline import ScalarCodec
from scalar_codec.codec.types import Operation, ScalarMapping
from scalar_codec.formats.request import GraphQLRequest, GraphQLResponse
from scalar_codec.helpers.console import console

_schema_option = click.option(
    "-s",
    "--schema",
    "schema_path",
    required=True,
    envvar="SCALAR_CODEC_SCHEMA",
    type=click.Path(exists=True, dir_okay=False),
    help="Schema file: introspection result (.json) or SDL",
)


@click.group()
def codec() -> None:
    """Scalar codec tools: inspect scalar paths, encode variables, decode data."""


@codec.command()
@click.argument("query_path", type=click.Path(exists=True, dir_okay=False))
@_schema_option
@click.option(
    "--scalars",
    "scalars_ref",
    default=None,
    envvar="SCALAR_CODEC_SCALARS",
    help="Scalar table as 'module:attribute'",
)
@click.option(
    "--scalar",
    "scalar_names",
    multiple=True,
    help="Treat this scalar as custom in both directions. Can be repeated.",
)
@click.option(
    "--direction",
    type=click.Choice(["input", "output", "all"]),
    default="all",
    help="Which paths to list",
)
def paths(
    query_path: str,
    schema_path: str,
    scalars_ref: str | None,
    scalar_names: tuple[str, ...],
    direction: str,
) -> None:
    """List the variable and response paths holding custom scalars."""
    from scalar_codec.commands.codec.render import render_paths

    scalars: dict[str, Any] = {}
    if scalars_ref:
        scalars.update(_load_scalars(scalars_ref))
    for name in scalar_names:
        scalars.setdefault(name, ScalarMapping(encode=_identity, decode=_identity))
    if not scalars:
        raise click.UsageError("Provide --scalars or at least one --scalar")

    scalar_codec = _build_codec(schema_path, scalars)
    document = _parse(Path(query_path).read_text())

    rows: list[tuple[str, str, tuple[str, ...]]] = []
    if direction in ("input", "all"):
        rows.extend(("input", p.name, p.path) for p in scalar_codec.input_paths(document))
    if direction in ("output", "all"):
        rows.extend(("output", p.name, p.path) for p in scalar_codec.output_paths(document))
    render_paths(rows, title=Path(query_path).name)


@codec.command()
@click.argument("request_path", type=click.Path(exists=True, dir_okay=False))
@_schema_option
@click.option(
    "--scalars",
    "scalars_ref",
    required=True,
    envvar="SCALAR_CODEC_SCALARS",
    help="Scalar table as 'module:attribute'",
)
@click.option("-o", "--output", default=None, help="Write the result here instead of stdout")
def encode(request_path: str, schema_path: str, scalars_ref: str, output: str | None) -> None:
    """Encode the variables of a GraphQL request file."""
    request = _load_request(request_path)
    scalar_codec = _build_codec(schema_path, _load_scalars(scalars_ref))
    operation = Operation(
        document=_parse(request.query),
        variables=request.variables,
        operation_name=request.operation_name,
    )

    encoded = scalar_codec.encode_variables(operation)
    body: dict[str, Any] = {"query": request.query, "variables": encoded.variables}
    if request.operation_name is not None:
        body["operationName"] = request.operation_name
    _emit(body, output)


@codec.command()
@click.argument("request_path", type=click.Path(exists=True, dir_okay=False))
@_schema_option
@click.option(
    "--scalars",
    "scalars_ref",
    required=True,
    envvar="SCALAR_CODEC_SCALARS",
    help="Scalar table as 'module:attribute'",
)
@click.option(
    "--response",
    "response_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Response JSON whose data to decode (defaults to the request file's 'data')",
)
@click.option("-o", "--output", default=None, help="Write the result here instead of stdout")
def decode(
    request_path: str,
    schema_path: str,
    scalars_ref: str,
    response_path: str | None,
    output: str | None,
) -> None:
    """Decode response data for the query of a GraphQL request file."""
    request = _load_request(request_path)
    data = request.data
    if response_path is not None:
        try:
            data = GraphQLResponse.model_validate_json(Path(response_path).read_text()).data
        except ValidationError as e:
            raise click.ClickException(f"Invalid response file {response_path}: {e}") from e

    scalar_codec = _build_codec(schema_path, _load_scalars(scalars_ref))
    operation = Operation(
        document=_parse(request.query),
        variables=request.variables,
        operation_name=request.operation_name,
    )
    _emit({"data": scalar_codec.decode_data(operation, data)}, output)


def _identity(value: Any) -> Any:
    return value


def _load_scalars(reference: str) -> dict[str, ScalarMapping]:
    from scalar_codec.helpers.loading import load_scalars

    try:
        return load_scalars(reference)
    except ScalarCodecError as e:
        raise click.ClickException(str(e)) from e


def _build_codec(schema_path: str, scalars: dict[str, Any]) -> ScalarCodec:
    try:
        return ScalarCodec(Path(schema_path), scalars)
    except ScalarCodecError as e:
        raise click.ClickException(str(e)) from e


def _parse(query: str) -> DocumentNode:
    try:
        return gql_parse(query)
    except GraphQLSyntaxError as e:
        raise click.ClickException(f"Invalid GraphQL query: {e.message}") from e


def _load_request(path: str) -> GraphQLRequest:
    try:
        return GraphQLRequest.model_validate_json(Path(path).read_text())
    except ValidationError as e:
        raise click.ClickException(f"Invalid request file {path}: {e}") from e


def _emit(payload: dict[str, Any], output: str | None) -> None:
    """Write JSON to *output*, or pretty-print it on the console."""
    text = json.dumps(payload, indent=2, default=str)
    if output is None:
        console.print_json(text)
        return
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text + "\n")
    console.print(f"[green]Written to {output}[/green]")
