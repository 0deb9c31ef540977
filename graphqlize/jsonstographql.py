""" JSON schema to GraphQL type converter. """

# pylint: disable=line-too-long, too-many-arguments

import json
import logging
import re
from typing import Any, Dict, List, NamedTuple, Optional, Union
from urllib.parse import unquote

import jsonpointer
from graphql import (GraphQLBoolean, GraphQLEnumType, GraphQLEnumValue,
                     GraphQLField, GraphQLFloat, GraphQLInputField,
                     GraphQLInputObjectType, GraphQLInt, GraphQLList,
                     GraphQLNonNull, GraphQLObjectType, GraphQLSchema,
                     GraphQLString, GraphQLType, GraphQLUnionType,
                     get_named_type, print_schema)

from graphqlize.common import type_name as make_type_name
from graphqlize.errorhandling import (EnumValueCollision,
                                      JsonSchemaToGraphQLError,
                                      UnknownTypeReference,
                                      UnsupportedEnumBaseType,
                                      UnsupportedScalarType,
                                      validate_definitions,
                                      validate_top_level_id)
from graphqlize.typeregistry import TypeRegistry, new_registry

logger = logging.getLogger(__name__)

INPUT_SUFFIX = 'In'
DEFINITION_PREFIX = 'Definition'
REFERENCE_PREFIX = '#/definitions/'
EMPTY_TYPE_FIELD_NAME = '_typesWithoutFieldsAreNotAllowed_'

basic_types = {
    'string': GraphQLString,
    'integer': GraphQLInt,
    'number': GraphQLFloat,
    'boolean': GraphQLBoolean,
}

comparison_operators = {
    '<': 'LT',
    '<=': 'LTE',
    '>=': 'GTE',
    '>': 'GT',
}


class DropAttribute:
    """Result for attributes that have no form in the input type graph."""

    def __repr__(self) -> str:
        return 'DROP_ATTRIBUTE_MARKER'


DROP_ATTRIBUTE_MARKER = DropAttribute()

MappedType = Union[GraphQLType, DropAttribute]


class ConversionResult(NamedTuple):
    """The output and input types produced for one document."""
    output: GraphQLType
    input: Optional[GraphQLType]


def get_item_type_name(type_name: str, building_input_type: bool = False) -> str:
    """Derive the GraphQL type name for a qualified path in the given mode."""
    return make_type_name(f"{type_name}{INPUT_SUFFIX if building_input_type else ''}")


def get_reference_name(reference_name: str, building_input_type: bool = False) -> str:
    """
    Translate a `$ref` into the registry key of the referenced type.

    Local definition pointers map to the canonical definition type name.
    Any other reference is returned unchanged and names a document
    converted into the same registry.
    """
    if not reference_name.startswith(REFERENCE_PREFIX):
        return reference_name
    pointer = jsonpointer.JsonPointer(unquote(reference_name[1:]))
    definition_name = '.'.join(pointer.parts[1:])
    return get_item_type_name(f"{DEFINITION_PREFIX}.{definition_name}", building_input_type)


def to_safe_enum_key(value: str) -> str:
    """Derive a GraphQL enum value name from a JSON schema enum literal."""
    if re.match(r"^[0-9]", value):
        value = 'VALUE_' + value
    if value in comparison_operators:
        return comparison_operators[value]
    return re.sub(r"[^_a-zA-Z0-9]", "_", value)


def map_basic_attribute_type(json_type: Any, attribute_name: str) -> GraphQLType:
    """Map a JSON schema primitive type keyword to a GraphQL scalar."""
    if isinstance(json_type, str) and json_type in basic_types:
        return basic_types[json_type]
    raise UnsupportedScalarType(
        f"A JSON schema attribute type {json_type} does not have a known GraphQL mapping", context=attribute_name)


def get_schema_kind(json_type: Dict[str, Any]) -> str:
    """
    Classify a schema node as one of 'array', 'object', 'enum', 'reference'
    or 'scalar'. Anything unrecognized is a scalar and fails in the scalar
    mapping.
    """
    declared_type = json_type.get('type')
    if declared_type == 'array':
        return 'array'
    if declared_type == 'object':
        return 'object'
    if json_type.get('enum'):
        return 'enum'
    if json_type.get('$ref'):
        return 'reference'
    return 'scalar'


def build_enum_type(registry: TypeRegistry, attribute_name: str, enum_values: List[Any], description: Optional[str] = None) -> GraphQLEnumType:
    """
    Create the enum type for an attribute and register it, together with the
    map from GraphQL value names back to the JSON schema literals.
    """
    graphql_to_json_map: Dict[str, Any] = {}
    for enum_value in enum_values:
        key = to_safe_enum_key(str(enum_value))
        if key in graphql_to_json_map and graphql_to_json_map[key] != enum_value:
            raise EnumValueCollision(
                f"The enum values {graphql_to_json_map[key]!r} and {enum_value!r} both map to {key}", context=attribute_name)
        graphql_to_json_map[key] = enum_value

    enum_type = GraphQLEnumType(
        name=make_type_name(attribute_name),
        values={key: GraphQLEnumValue(value) for key, value in graphql_to_json_map.items()},
        description=description)
    logger.debug("Built enum %s with %d values", enum_type.name, len(graphql_to_json_map))

    registry.enum_maps[attribute_name] = graphql_to_json_map
    registry.enum_types[attribute_name] = enum_type
    return enum_type


def get_object_fields(registry: TypeRegistry, json_type: Dict[str, Any], type_name: str, building_input_type: bool) -> dict:
    """
    Map the properties of an object schema to GraphQL fields. Required
    properties become non-null and properties without an input form are
    left out of input types.
    """
    field_class = GraphQLInputField if building_input_type else GraphQLField
    properties = json_type.get('properties')
    if not properties:
        return {EMPTY_TYPE_FIELD_NAME: field_class(GraphQLString)}

    required = json_type.get('required') or []
    fields = {}
    for attribute_name, attribute_definition in properties.items():
        qualified_attribute_name = f"{type_name}.{attribute_name}"
        attribute_type = map_type(registry, attribute_definition, qualified_attribute_name, building_input_type)
        if attribute_type is DROP_ATTRIBUTE_MARKER:
            logger.debug("Dropping %s from the input type, it has no input form", qualified_attribute_name)
            continue
        if attribute_name in required:
            attribute_type = GraphQLNonNull(attribute_type)
        fields[attribute_name] = field_class(attribute_type, description=attribute_definition.get('description'))
    return fields


def map_type(registry: TypeRegistry, json_type: Dict[str, Any], attribute_name: str, building_input_type: bool = False) -> MappedType:
    """
    Map a JSON schema node to its GraphQL type, recursing into arrays,
    objects, enums and references.

    Object fields are resolved lazily, on first access, because a field may
    refer to a definition that is registered later or to the object itself.

    Args:
        registry: The registry of the current conversion session.
        json_type: The schema node.
        attribute_name: The qualified path of the node.
        building_input_type: True to build the input variant.

    Returns:
        The GraphQL type, or DROP_ATTRIBUTE_MARKER when the node has no input form.
    """
    kind = get_schema_kind(json_type)

    if kind == 'array':
        items = json_type['items']
        item_name = attribute_name if items.get('$ref') else f"{attribute_name}Item"
        element_type = map_type(registry, items, item_name, building_input_type)
        if element_type is DROP_ATTRIBUTE_MARKER:
            return DROP_ATTRIBUTE_MARKER
        return GraphQLList(GraphQLNonNull(element_type))

    if kind == 'object':
        name = get_item_type_name(attribute_name, building_input_type)
        description = json_type.get('description')
        if building_input_type:
            return GraphQLInputObjectType(
                name,
                fields=lambda: get_object_fields(registry, json_type, attribute_name, True),
                description=description)
        return GraphQLObjectType(
            name,
            fields=lambda: get_object_fields(registry, json_type, attribute_name, False),
            description=description)

    if kind == 'enum':
        existing_enum = registry.enum_types.get(attribute_name)
        if existing_enum:
            if set(registry.enum_maps[attribute_name].values()) != set(json_type['enum']):
                logger.warning("Enum %s is already registered with other values, keeping the first registration", attribute_name)
            return existing_enum
        if json_type.get('type') != 'string':
            raise UnsupportedEnumBaseType(
                "Only string based enumerations can be converted", context=attribute_name)
        return build_enum_type(registry, attribute_name, json_type['enum'], json_type.get('description'))

    if kind == 'reference':
        type_reference_name = get_reference_name(json_type['$ref'], building_input_type)
        referenced_type = registry.type_map(building_input_type).get(type_reference_name)
        if referenced_type is None:
            output_type = registry.types.get(get_reference_name(json_type['$ref']))
            if building_input_type and isinstance(get_named_type(output_type), GraphQLUnionType):
                return DROP_ATTRIBUTE_MARKER
            mode = 'input' if building_input_type else 'output'
            raise UnknownTypeReference(
                f"The referenced {mode} type {type_reference_name} is unknown", context=attribute_name)
        return referenced_type

    return map_basic_attribute_type(json_type.get('type'), attribute_name)


def build_union_type(registry: TypeRegistry, type_name: str, json_schema: Dict[str, Any]) -> ConversionResult:
    """
    Build the union type of a schema with `switch` branches. The members are
    the branch bodies mapped as output types, resolved on first access.
    GraphQL has no input unions, so there is no input variant.
    """
    def union_members():
        return [
            map_type(registry, switch_case['then'], f"{type_name}.switch[{case_index}]")
            for case_index, switch_case in enumerate(json_schema['switch'])
        ]

    output = GraphQLUnionType(
        get_item_type_name(type_name),
        types=union_members,
        description=json_schema.get('description'))
    return ConversionResult(output, None)


def build_root_type(registry: TypeRegistry, type_name: str, json_schema: Dict[str, Any]) -> ConversionResult:
    """Build the output and the input type of a plain schema."""
    output = map_type(registry, json_schema, type_name)
    input_type = map_type(registry, json_schema, type_name, True)
    return ConversionResult(output, input_type)


def register_definition_types(registry: TypeRegistry, json_schema: Dict[str, Any], building_input_type: bool = False) -> None:
    """
    Map every entry of the schema's `definitions` block in the given mode and
    register it under its canonical definition name. Definitions with
    `switch` branches become unions and only exist in the output mode.
    """
    definitions = json_schema.get('definitions')
    if not definitions:
        return
    validate_definitions(definitions)
    type_map = registry.type_map(building_input_type)
    registered = set()

    def register(definition_name):
        if definition_name in registered:
            return
        registered.add(definition_name)
        definition = definitions[definition_name]
        item_name = get_item_type_name(f"{DEFINITION_PREFIX}.{definition_name}")
        if definition.get('switch'):
            if not building_input_type:
                registry.types[item_name] = build_union_type(registry, item_name, definition).output
            return
        # references outside of object fields are looked up right away
        referenced_name = get_eager_definition_reference(definition)
        if referenced_name in definitions:
            register(referenced_name)
        registered_name = get_item_type_name(item_name, building_input_type)
        definition_type = map_type(registry, definition, item_name, building_input_type)
        if definition_type is DROP_ATTRIBUTE_MARKER:
            logger.debug("Definition %s has no input form", definition_name)
            return
        type_map[registered_name] = definition_type
        logger.debug("Registered definition %s as %s", definition_name, registered_name)

    for definition_name in definitions:
        register(definition_name)


def get_eager_definition_reference(json_type: Dict[str, Any]) -> Optional[str]:
    """
    Return the local definition name a node refers to directly or through
    array items, or None when the node is not such a reference.
    """
    while get_schema_kind(json_type) == 'array' and isinstance(json_type.get('items'), dict):
        json_type = json_type['items']
    if get_schema_kind(json_type) != 'reference' or not json_type['$ref'].startswith(REFERENCE_PREFIX):
        return None
    parts = jsonpointer.JsonPointer(unquote(json_type['$ref'][1:])).parts
    return parts[1] if len(parts) == 2 else None


def convert(registry: TypeRegistry, json_schema: Dict[str, Any]) -> ConversionResult:
    """
    Convert one JSON schema document into GraphQL types.

    The document's definitions are registered in both modes first. A schema
    with `switch` branches becomes an output-only union, anything else
    yields an output and an input type. Both are registered under the
    document's identifier.

    Args:
        registry: The registry of the conversion session.
        json_schema: The JSON schema document.

    Returns:
        ConversionResult: The output and input types (input is None for unions).

    Raises:
        JsonSchemaToGraphQLError: If the document cannot be converted.
    """
    type_name = (json_schema.get('id') or json_schema.get('$id')) if isinstance(json_schema, dict) else None
    validate_top_level_id(type_name, json_schema)

    register_definition_types(registry, json_schema)
    register_definition_types(registry, json_schema, True)

    type_builder = build_union_type if json_schema.get('switch') else build_root_type
    result = type_builder(registry, type_name, json_schema)
    if result.input is DROP_ATTRIBUTE_MARKER:
        result = ConversionResult(result.output, None)

    registry.types[type_name] = result.output
    if result.input is not None:
        registry.inputs[type_name] = result.input
    logger.debug("Converted %s", type_name)
    return result


def convert_documents(registry: TypeRegistry, json_schemas: List[Dict[str, Any]]) -> List[ConversionResult]:
    """
    Convert several documents in order into one registry, so that later
    documents can reference earlier ones by their identifier.
    """
    return [convert(registry, json_schema) for json_schema in json_schemas]


def build_graphql_schema(registry: TypeRegistry) -> GraphQLSchema:
    """
    Collect every registered type into a GraphQL schema. This resolves all
    lazily built fields and union members.

    Raises:
        JsonSchemaToGraphQLError: If a field or union member cannot be converted.
    """
    try:
        return GraphQLSchema(types=registry.schema_types())
    except TypeError as error:
        # graphql-core wraps errors raised while resolving fields
        cause = error.__cause__
        while isinstance(cause, TypeError) and cause.__cause__ is not None:
            cause = cause.__cause__
        if isinstance(cause, JsonSchemaToGraphQLError):
            raise cause from None
        raise


def print_registry_sdl(registry: TypeRegistry) -> str:
    """Render all registered types in GraphQL schema definition language."""
    return print_schema(build_graphql_schema(registry))


def load_json_schemas(jsons_schema_path: str) -> List[Dict[str, Any]]:
    """Load a file holding one JSON schema document or a list of them."""
    with open(jsons_schema_path, 'r', encoding='utf-8') as file:
        json_schemas = json.load(file)
    if isinstance(json_schemas, dict):
        return [json_schemas]
    if not isinstance(json_schemas, list):
        raise ValueError("Expected a single JSON schema as a JSON object, or a list of schemas")
    return json_schemas


def convert_jsons_to_graphql(jsons_schema_path: str, graphql_schema_path: str) -> None:
    """
    Convert a JSON schema file to a GraphQL schema file.

    :param jsons_schema_path: Path to the JSON schema file.
    :param graphql_schema_path: Path to save the GraphQL schema file.
    """
    registry = new_registry()
    convert_documents(registry, load_json_schemas(jsons_schema_path))
    graphql_content = print_registry_sdl(registry)
    with open(graphql_schema_path, 'w', encoding='utf-8') as file:
        file.write(graphql_content)
        if not graphql_content.endswith('\n'):
            file.write('\n')
