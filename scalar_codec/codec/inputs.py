"""Find where custom scalars live inside an operation's variables.

Walks every variable definition of a document, resolves its declared type
against the schema and descends input-object fields, producing one
ScalarPath per position holding a scalar that has an ``encode`` function.
List wrappers add no path segment: the mapper descends lists on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from graphql import (
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLInputType,
    GraphQLScalarType,
    GraphQLSchema,
    get_named_type,
    is_input_type,
)
from graphql.language.ast import (
    DocumentNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    OperationDefinitionNode,
    TypeNode,
)

from scalar_codec.codec.types import ScalarMapping, ScalarPath

logger = logging.getLogger(__name__)


def resolve_input_paths(
    document: DocumentNode,
    schema: GraphQLSchema,
    scalars: Mapping[str, ScalarMapping],
) -> list[ScalarPath]:
    """Return the variable paths of every scalar with a registered encoder.

    Variables whose declared type is missing from the schema are skipped.
    """
    paths: list[ScalarPath] = []
    for defn in document.definitions:
        if not isinstance(defn, OperationDefinitionNode):
            continue
        for var_def in defn.variable_definitions or []:
            var_name = var_def.variable.name.value
            type_name = _named_type_node(var_def.type).name.value
            var_type = schema.get_type(type_name)
            if var_type is None or not is_input_type(var_type):
                logger.debug(f"Skipping variable ${var_name}: no input type '{type_name}' in schema")
                continue

            for scalar_path in _resolve_input_type(var_type, scalars, ()):
                paths.append(
                    ScalarPath(name=scalar_path.name, path=(var_name, *scalar_path.path))
                )
    return paths


def _named_type_node(type_node: TypeNode) -> NamedTypeNode:
    """Strip list and non-null wrappers from a variable's type annotation."""
    node = type_node
    while isinstance(node, (ListTypeNode, NonNullTypeNode)):
        node = node.type
    assert isinstance(node, NamedTypeNode)
    return node


def _resolve_input_type(
    input_type: GraphQLInputType,
    scalars: Mapping[str, ScalarMapping],
    visited: tuple[str, ...],
) -> list[ScalarPath]:
    """Resolve scalar paths inside an input type, relative to the type itself.

    *visited* holds the input-object names on the current descent; meeting one
    again means the input types are recursive, which is legal and simply
    contributes nothing further.
    """
    named_type = get_named_type(input_type)
    if named_type.name in visited:
        return []

    if isinstance(named_type, GraphQLScalarType):
        mapping = scalars.get(named_type.name)
        if mapping is not None and mapping.encode is not None:
            return [ScalarPath(name=named_type.name, path=())]
        return []
    if isinstance(named_type, GraphQLEnumType):
        return []
    if isinstance(named_type, GraphQLInputObjectType):
        paths: list[ScalarPath] = []
        for field_name, input_field in named_type.fields.items():
            for scalar_path in _resolve_input_type(
                input_field.type, scalars, (*visited, named_type.name)
            ):
                paths.append(
                    ScalarPath(name=scalar_path.name, path=(field_name, *scalar_path.path))
                )
        return paths

    raise TypeError(f"Unexpected input type: {named_type!r}")
