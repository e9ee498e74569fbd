"""Shared test fixtures for scalar codec tests."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest
from graphql import GraphQLSchema, build_schema, introspection_from_schema, parse

from scalar_codec.codec.types import Operation, ScalarMapping

SCHEMA_SDL = """
scalar Date

type Query {
  simple: String!
  nested: Nested!
  nestedNullable: Nested
  list(input: String): [String!]!
  listNested(input: ListInput): [Nested!]!
  listNestedNullable: [Nested!]
  matrix: [[String]]
  events(after: Date, filter: EventFilter): [Event!]!
  node(id: ID!): Node
  search(text: String!): [SearchResult!]!
}

type Mutation {
  createEvent(input: EventInput!): Event!
}

interface Node {
  id: ID!
}

type Nested {
  name: String!
  deeplyNested: Nested
}

type Event implements Node {
  id: ID!
  at: Date!
  kind: Kind
  tags: [String!]
  parent: Event
}

union SearchResult = Event | Nested

enum Kind {
  MEETING
  HOLIDAY
}

input ListInput {
  topInput: String
  nested: ListNestedInput
}

input ListNestedInput {
  nestedInput: String
}

input EventInput {
  at: Date!
  kind: Kind
  tags: [String!]
  parent: EventInput
  windows: [DateRange!]
}

input DateRange {
  start: Date
  end: Date
}

input EventFilter {
  before: Date
  and: [EventFilter!]
}
"""


class CountingTransform:
    """A transform that records its calls; upper-cases strings by default."""

    def __init__(self, fn: Any = None):
        self.fn = fn or (lambda value: value.upper())
        self.calls: list[Any] = []

    def __call__(self, value: Any) -> Any:
        self.calls.append(value)
        return self.fn(value)

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def schema() -> GraphQLSchema:
    return build_schema(SCHEMA_SDL)


@pytest.fixture
def introspection(schema: GraphQLSchema) -> dict[str, Any]:
    return dict(introspection_from_schema(schema))


@pytest.fixture
def date_mapping() -> ScalarMapping:
    return ScalarMapping(encode=date.isoformat, decode=date.fromisoformat)


def string_scalars(transform: CountingTransform, *, encode: bool = True, decode: bool = True) -> dict[str, ScalarMapping]:
    """Scalar table registering *transform* for ``String``."""
    return {
        "String": ScalarMapping(
            encode=transform if encode else None,
            decode=transform if decode else None,
        )
    }


def make_operation(query: str, variables: dict[str, Any] | None = None, key: int = 1) -> Operation:
    """Helper to create an Operation from query text."""
    return Operation(document=parse(query), variables=variables, key=key)
