"""
Emits Python functions that turn accepted GraphQL enum values back into the
literals declared in the JSON schema.
"""

import os
import re

from graphqlize.common import process_template, snake, type_name
from graphqlize.errorhandling import UnknownEnumPath
from graphqlize.jsonstographql import build_graphql_schema, convert_documents, load_json_schemas
from graphqlize.typeregistry import TypeRegistry, new_registry


def get_convert_function_name(attribute_path: str) -> str:
    """Name of the converter function for the enum at the qualified path."""
    parts = [snake(part) for part in re.split(r'[^a-zA-Z0-9_]+', attribute_path) if part]
    return f"convert_{'_'.join(parts)}_from_graphql"


def get_convert_enum_from_graphql_code(registry: TypeRegistry, attribute_path: str) -> str:
    """
    Render the source of one function taking a GraphQL enum value name and
    returning the original JSON schema literal. Every declared value has its
    own `case`; there is no wildcard, so unknown values return None.

    Args:
        registry: The registry holding the enum.
        attribute_path: The qualified path the enum was registered under.

    Returns:
        str: The Python source of the function.

    Raises:
        UnknownEnumPath: If no enum is registered under the path.
    """
    value_map = registry.enum_maps.get(attribute_path)
    if value_map is None:
        raise UnknownEnumPath("No enum is registered under this path", context=attribute_path)
    return process_template(
        "enumcode/convert_from_graphql.py.jinja",
        function_name=get_convert_function_name(attribute_path),
        enum_name=type_name(attribute_path),
        value_map=value_map)


def convert_jsons_enums_to_python(jsons_schema_path: str, python_file_path: str) -> None:
    """
    Convert a JSON schema file and write the enum converter functions for
    every enum it declares into a Python module.

    :param jsons_schema_path: Path to the JSON schema file.
    :param python_file_path: Path to save the Python module.
    """
    registry = new_registry()
    convert_documents(registry, load_json_schemas(jsons_schema_path))
    # enums nested in objects only exist once the fields are resolved
    build_graphql_schema(registry)
    functions = [get_convert_enum_from_graphql_code(registry, path) for path in registry.enum_maps]
    module_code = process_template(
        "enumcode/module.py.jinja",
        source_name=os.path.basename(jsons_schema_path),
        functions=functions)
    with open(python_file_path, 'w', encoding='utf-8') as file:
        file.write(module_code)
        if not module_code.endswith('\n'):
            file.write('\n')
