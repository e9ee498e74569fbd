"""Pydantic models for GraphQL-over-HTTP request/response JSON files."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GraphQLRequest(BaseModel):
    """A request body: ``{"query", "variables", "operationName"}``.

    ``data`` is optional and carries a response payload to decode alongside
    the request that produced it.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")
    data: Any = None


class GraphQLResponse(BaseModel):
    data: Any = None
    errors: list[dict[str, Any]] | None = None
    extensions: dict[str, Any] | None = None
