"""Exceptions raised by the scalar codec."""

from __future__ import annotations


class ScalarCodecError(Exception):
    """Base class for codec configuration errors."""


class ScalarConfigError(ScalarCodecError):
    """Raised when the scalar table cannot be built from user configuration."""


class SchemaLoadError(ScalarCodecError):
    """Raised when a schema source cannot be turned into a GraphQLSchema."""
