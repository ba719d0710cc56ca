"""
Query parameter access for the loaders.

Accepts whatever the caller has at hand: a raw query string (with or without the
leading "?"), a full page URL, or an already-parsed mapping. Empty values count
as absent, matching how the viewer treats "?config=".
"""

from typing import Dict, Mapping, Union
from urllib.parse import parse_qs

# Document parameters
CONFIG_PARAM = "config"
CONFIG_DATA_PARAM = "configData"

# Tech registry parameters
TECH_REGISTRY_PARAM = "tech-registry"
TECH_DATA_PARAM = "techData"

QueryInput = Union[str, Mapping[str, object], None]


def parse_query(query: QueryInput) -> Dict[str, str]:
    """
    Normalise query input to a dict of first non-empty values.

    Args:
        query: Query string, page URL, mapping, or None

    Returns:
        Dict mapping parameter name to its first non-empty value

    Examples:
        >>> parse_query("?config=abc&techData=")
        {'config': 'abc'}
        >>> parse_query("https://example.com/cv/view?configData=xyz#top")
        {'configData': 'xyz'}
    """
    if query is None:
        return {}

    if isinstance(query, str):
        query_string = query.split("#", 1)[0]
        if "?" in query_string:
            query_string = query_string.split("?", 1)[1]
        parsed = parse_qs(query_string, keep_blank_values=False)
        return {key: values[0] for key, values in parsed.items() if values and values[0]}

    params = {}
    for key, value in query.items():
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if isinstance(value, str) and value:
            params[key] = value
    return params
