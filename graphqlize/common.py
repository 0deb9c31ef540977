"""
Common utility functions for graphqlize.
"""

# pylint: disable=line-too-long

import os
import re
import jinja2


def type_name(name: str) -> str:
    """
    Convert a qualified schema path into a GraphQL type name.

    Path separators and any characters that are not valid in a GraphQL name
    are dropped and every path segment is PascalCased, so that
    ``Person.homeAddress`` becomes ``PersonHomeAddress`` and
    ``Animal.switch[0]`` becomes ``AnimalSwitch0``.

    Args:
        name (str): The qualified path.

    Returns:
        str: The PascalCase type name.
    """
    dotted = re.sub(r'[^a-zA-Z0-9_\.]', '.', name)
    return pascal(dotted).replace('.', '')


def pascal(string):
    """ 
    Convert a string to PascalCase from snake_case, camelCase, or PascalCase. 
    The string can contain dots, which are preserved in the output.
    Underscores at the beginning of the string are preserved in the output, but
    underscores in the middle of the string are removed.

    Args:
        string (str): The string to convert.

    Returns:
        str: The string in PascalCase.
    """
    if '.' in string:
        strings = string.split('.')
        return '.'.join(pascal(s) for s in strings)
    if not string or len(string) == 0:
        return string
    words = []
    startswith_under = string[0] == '_'
    if '_' in string:
        # snake_case
        words = re.split(r'_', string)
    elif string[0].isupper():
        # PascalCase
        words = re.findall(r'[A-Z][a-z0-9_]*\.?', string)
    else:
        # camelCase
        words = re.findall(r'[a-z0-9]+\.?|[A-Z][a-z0-9_]*\.?', string)
    result = ''.join(word.capitalize() for word in words)
    if startswith_under:
        result = '_' + result
    return result


def snake(string):
    """ 
    Convert a string to snake_case from snake_case, camelCase, or PascalCase.
    The string can contain dots, which are preserved in the output.
    Underscores at the beginning of the string are preserved in the output.
    
    Args:
        string (str): The string to convert.
        
    Returns:
        str: The string in snake_case.    
    """
    if '.' in string:
        strings = string.split('.')
        return '.'.join(snake(s) for s in strings)
    if not string or len(string) == 0:
        return string
    words = []
    if '_' in string:
        # snake_case
        words = re.split(r'_', string)
    elif string[0].isupper():
        # PascalCase
        words = re.findall(r'[A-Z][a-z0-9_]*\.?', string)
    else:
        # camelCase
        words = re.findall(r'[a-z0-9]+\.?|[A-Z][a-z0-9_]*\.?', string)
    result = '_'.join(word.lower() for word in words)
    return result


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given object as input.

    Args:
        file_path (str): The path to the template, relative to the package.
        **kvargs: The keyword arguments to pass to the template.

    Returns:
        str: The processed template as a string.
    """
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader)
    template_env.filters['pystr'] = repr

    template = template_env.get_template(file_path)
    return template.render(**kvargs)
