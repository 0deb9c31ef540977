"""
Identity maps shared by all conversions of one session.
"""

from typing import Dict, List

from graphql import (GraphQLEnumType, GraphQLInputType, GraphQLNamedType,
                     GraphQLOutputType, get_named_type)


class TypeRegistry:
    """
    Holds every GraphQL type produced while converting JSON schema documents.

    All four maps are keyed by qualified path. Output and input types are
    kept apart so that a definition used in both positions yields two
    independent types. Entries are only ever added.

    Attributes:
        types: Named output types (definitions and converted documents).
        inputs: Named input types (definitions and converted documents).
        enum_types: Enum types, shared by output and input positions.
        enum_maps: GraphQL enum value name -> original JSON schema literal.
    """

    def __init__(self) -> None:
        self.types: Dict[str, GraphQLOutputType] = {}
        self.inputs: Dict[str, GraphQLInputType] = {}
        self.enum_types: Dict[str, GraphQLEnumType] = {}
        self.enum_maps: Dict[str, Dict[str, str]] = {}

    def type_map(self, building_input_type: bool) -> dict:
        """Return the named type map for the given mode."""
        return self.inputs if building_input_type else self.types

    def schema_types(self) -> List[GraphQLNamedType]:
        """
        Return the distinct named types held by the registry, output types
        first, in registration order.
        """
        named_types: List[GraphQLNamedType] = []
        seen = set()
        for graphql_type in [*self.types.values(), *self.inputs.values(), *self.enum_types.values()]:
            named_type = get_named_type(graphql_type)
            if id(named_type) not in seen:
                seen.add(id(named_type))
                named_types.append(named_type)
        return named_types


def new_registry() -> TypeRegistry:
    """Create an empty registry for a new conversion session."""
    return TypeRegistry()
