"""
JSON utilities using orjson for Grammar Police
==============================================

Thin wrapper exposing a json-module-like interface (dumps/loads) on top of
orjson. Used to parse the model's JSON output and by the test suite.
"""

import orjson
from typing import Any, Callable, Optional


def dumps(obj: Any, indent: Optional[int] = None, default: Optional[Callable[[Any], Any]] = None) -> str:
    """
    Serialize obj to a JSON string.

    Args:
        obj: Object to serialize
        indent: Any non-None value pretty prints with two-space indentation
        default: Callable for objects that cannot be serialized (e.g., default=str)

    Returns:
        JSON string (orjson returns bytes; this decodes them)
    """
    option = orjson.OPT_NON_STR_KEYS
    if indent is not None:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, default=default, option=option).decode("utf-8")


def loads(s: Any) -> Any:
    """
    Deserialize a JSON document (str or bytes).

    Raises:
        JSONDecodeError: If the input is not valid JSON
    """
    return orjson.loads(s)


# Provide compatibility constants
JSONDecodeError = orjson.JSONDecodeError
