"""
URL parameter encoding.

Flattens nested parameters into ``key[sub]=value`` / ``key[]=value`` pairs so
that dictionaries and lists survive form and query-string encoding.
"""

from typing import Any, List, Mapping, Tuple


def query_components(key: str, value: Any) -> List[Tuple[str, str]]:
    """
    Flatten one parameter into encodable ``(key, value)`` pairs.

    Examples:
        >>> query_components("user", {"name": "ada", "tags": ["a", "b"]})
        [('user[name]', 'ada'), ('user[tags][]', 'a'), ('user[tags][]', 'b')]
        >>> query_components("active", True)
        [('active', '1')]
    """
    components: List[Tuple[str, str]] = []

    if isinstance(value, Mapping):
        for nested_key in sorted(value):
            components.extend(query_components(f"{key}[{nested_key}]", value[nested_key]))
    elif isinstance(value, (list, tuple)):
        for item in value:
            components.extend(query_components(f"{key}[]", item))
    elif isinstance(value, bool):
        components.append((key, "1" if value else "0"))
    elif value is None:
        components.append((key, ""))
    else:
        components.append((key, str(value)))

    return components


def encode_parameters(parameters: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """
    Flatten a parameter mapping, keys in sorted order.

    The result can be passed as ``params=`` or ``data=`` to requests.
    """
    components: List[Tuple[str, str]] = []
    for key in sorted(parameters):
        components.extend(query_components(key, parameters[key]))
    return components
