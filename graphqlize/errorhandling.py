"""
Errors raised while converting JSON schema documents to GraphQL types, and
the checks applied to a document before conversion starts.
"""

import re
from typing import Any, Dict, Optional

from graphqlize.common import type_name as make_type_name

GRAPHQL_NAME = re.compile(r'^[_a-zA-Z][_a-zA-Z0-9]*$')


class JsonSchemaToGraphQLError(Exception):
    """
    Base class for all conversion errors.

    Attributes:
        message: Human-readable error description
        context: Optional qualified path where the error occurred
    """

    def __init__(self, message: str, context: Optional[str] = None) -> None:
        self.message = message
        self.context = context
        full_message = message
        if context:
            full_message = f"{message} (context: {context})"
        super().__init__(full_message)


class UnsupportedScalarType(JsonSchemaToGraphQLError):
    """A `type` keyword outside of string, integer, number and boolean."""


class UnsupportedEnumBaseType(JsonSchemaToGraphQLError):
    """An `enum` attached to a node that is not string typed."""


class UnknownTypeReference(JsonSchemaToGraphQLError):
    """A reference that is not registered for the mode being built."""


class MissingTopLevelIdentifier(JsonSchemaToGraphQLError):
    """The document has no usable `id` or `$id`."""


class InvalidDefinitions(JsonSchemaToGraphQLError):
    """The `definitions` block is not a mapping of schema objects."""


class EnumValueCollision(JsonSchemaToGraphQLError):
    """Two enum literals derive the same GraphQL enum value name."""


class UnknownEnumPath(JsonSchemaToGraphQLError):
    """No enum has been registered under the requested qualified path."""


def validate_top_level_id(type_name: Any, json_schema: Dict[str, Any]) -> None:
    """
    Check that the document identifier can name a GraphQL type.

    Args:
        type_name: The value of the document's `id` or `$id` keyword.
        json_schema: The document, used in the error message.

    Raises:
        MissingTopLevelIdentifier: If the identifier is absent or unusable.
    """
    if not isinstance(type_name, str) or not type_name:
        keys = ', '.join(sorted(str(k) for k in json_schema)) if isinstance(json_schema, dict) else type(json_schema).__name__
        raise MissingTopLevelIdentifier(
            f"The top level schema must have a non-empty 'id' or '$id' (found keys: {keys})")
    if not GRAPHQL_NAME.match(make_type_name(type_name)):
        raise MissingTopLevelIdentifier(
            f"The top level schema id '{type_name}' cannot be turned into a GraphQL type name")


def validate_definitions(definitions: Any) -> None:
    """
    Check that a `definitions` block maps names to schema objects.

    Raises:
        InvalidDefinitions: If the block or one of its entries is malformed.
    """
    if not isinstance(definitions, dict):
        raise InvalidDefinitions(
            f"The definitions block must be an object, not {type(definitions).__name__}")
    for name, definition in definitions.items():
        if not isinstance(definition, dict):
            raise InvalidDefinitions(
                f"The definition must be a schema object, not {type(definition).__name__}",
                context=f"#/definitions/{name}")
