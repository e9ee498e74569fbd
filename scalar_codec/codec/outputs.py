"""Find where custom scalars live inside an operation's response data.

Two phases:
1. Walk each definition of the document, carrying the current parent type,
   and record every scalar field with a registered ``decode`` function and
   every named fragment spread. Records are grouped by the enclosing
   fragment definition, or kept top-level for operations.
2. Expand fragment spreads from the top level, prefixing each fragment's
   paths with the path at which it was spread. Fragments that (transitively)
   spread themselves stop expanding at the repeat.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from graphql import (
    GraphQLCompositeType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLOutputType,
    GraphQLScalarType,
    GraphQLSchema,
    SchemaMetaFieldDef,
    TypeMetaFieldDef,
    TypeNameMetaFieldDef,
    get_named_type,
    is_composite_type,
)
from graphql.language.ast import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
)

from scalar_codec.codec.types import (
    FragmentOccurrence,
    Occurrence,
    ScalarMapping,
    ScalarOccurrence,
    ScalarPath,
)

logger = logging.getLogger(__name__)


def resolve_output_paths(
    document: DocumentNode,
    schema: GraphQLSchema,
    scalars: Mapping[str, ScalarMapping],
) -> list[ScalarPath]:
    """Return the response paths of every scalar field with a registered decoder.

    Paths are in document order, depth-first, and cover every operation of
    the document.
    """
    collector = _OccurrenceCollector(schema, scalars)
    top_level: list[Occurrence] = []
    fragments: dict[str, list[Occurrence]] = {}

    for defn in document.definitions:
        if isinstance(defn, OperationDefinitionNode):
            root_type = _root_type(schema, defn.operation)
            collector.collect(defn.selection_set, root_type, (), top_level)
        elif isinstance(defn, FragmentDefinitionNode):
            condition = _composite_type(schema, defn.type_condition.name.value)
            collector.collect(
                defn.selection_set, condition, (), fragments.setdefault(defn.name.value, [])
            )

    return _FragmentExpander(fragments).expand(top_level, ())


def _root_type(schema: GraphQLSchema, operation: OperationType) -> GraphQLObjectType | None:
    """Map an operation type to the schema's root type."""
    if operation == OperationType.MUTATION:
        return schema.mutation_type
    if operation == OperationType.SUBSCRIPTION:
        return schema.subscription_type
    return schema.query_type


def _composite_type(schema: GraphQLSchema, type_name: str) -> GraphQLCompositeType | None:
    """Look up a type condition, keeping it only if it can carry a selection set."""
    named_type = schema.get_type(type_name)
    if named_type is None or not is_composite_type(named_type):
        return None
    return named_type  # type: ignore[return-value]


class _OccurrenceCollector:
    """Walks selection sets with the parent type passed down explicitly."""

    def __init__(self, schema: GraphQLSchema, scalars: Mapping[str, ScalarMapping]):
        self._schema = schema
        self._scalars = scalars

    def collect(
        self,
        selection_set: SelectionSetNode,
        parent_type: GraphQLCompositeType | None,
        path: tuple[str, ...],
        out: list[Occurrence],
    ) -> None:
        for selection in selection_set.selections:
            if isinstance(selection, FieldNode):
                self._collect_field(selection, parent_type, path, out)
            elif isinstance(selection, InlineFragmentNode):
                # No type condition keeps the enclosing type
                if selection.type_condition is not None:
                    inline_type = _composite_type(
                        self._schema, selection.type_condition.name.value
                    )
                else:
                    inline_type = parent_type
                self.collect(selection.selection_set, inline_type, path, out)
            elif isinstance(selection, FragmentSpreadNode):
                out.append(FragmentOccurrence(fragment_name=selection.name.value, path=path))

    def _collect_field(
        self,
        node: FieldNode,
        parent_type: GraphQLCompositeType | None,
        path: tuple[str, ...],
        out: list[Occurrence],
    ) -> None:
        response_key = node.alias.value if node.alias else node.name.value
        field_path = (*path, response_key)

        field_type = self._field_type(parent_type, node.name.value)
        named_type = get_named_type(field_type) if field_type is not None else None

        if isinstance(named_type, GraphQLScalarType):
            mapping = self._scalars.get(named_type.name)
            if mapping is not None and mapping.decode is not None:
                out.append(ScalarOccurrence(name=named_type.name, path=field_path))

        if node.selection_set is not None:
            child_type = named_type if is_composite_type(named_type) else None
            # Keep walking below unknown fields so fragment spreads are still seen
            self.collect(node.selection_set, child_type, field_path, out)  # type: ignore[arg-type]

    def _field_type(
        self,
        parent_type: GraphQLCompositeType | None,
        field_name: str,
    ) -> GraphQLOutputType | None:
        """Resolve a field's declared type, including introspection meta-fields."""
        if parent_type is None:
            return None
        if field_name == "__schema" and parent_type is self._schema.query_type:
            return SchemaMetaFieldDef.type
        if field_name == "__type" and parent_type is self._schema.query_type:
            return TypeMetaFieldDef.type
        if field_name == "__typename":
            return TypeNameMetaFieldDef.type
        if isinstance(parent_type, (GraphQLObjectType, GraphQLInterfaceType)):
            field_def = parent_type.fields.get(field_name)
            if field_def is None:
                logger.debug(f"No field '{field_name}' on type '{parent_type.name}'")
                return None
            return field_def.type
        return None


class _FragmentExpander:
    """Expands fragment occurrences into scalar paths, memoized per fragment name."""

    def __init__(self, fragments: Mapping[str, list[Occurrence]]):
        self._fragments = fragments
        self._resolved: dict[str, list[ScalarPath]] = {}

    def expand(self, occurrences: list[Occurrence], stack: tuple[str, ...]) -> list[ScalarPath]:
        paths: list[ScalarPath] = []
        for occurrence in occurrences:
            match occurrence:
                case ScalarOccurrence(name=name, path=path):
                    paths.append(ScalarPath(name=name, path=path))
                case FragmentOccurrence(fragment_name=fragment_name, path=prefix):
                    for scalar_path in self._resolve(fragment_name, stack):
                        paths.append(
                            ScalarPath(name=scalar_path.name, path=(*prefix, *scalar_path.path))
                        )
        return paths

    def _resolve(self, fragment_name: str, stack: tuple[str, ...]) -> list[ScalarPath]:
        if fragment_name in self._resolved:
            return self._resolved[fragment_name]
        if fragment_name in stack:
            # Fragment cycle: legal, contributes nothing past the repeat
            return []

        occurrences = self._fragments.get(fragment_name)
        if occurrences is None:
            logger.debug(f"Fragment '{fragment_name}' is spread but never defined")
            occurrences = []

        paths = self.expand(occurrences, (*stack, fragment_name))
        self._resolved[fragment_name] = paths
        return paths
