"""
Conversion of untyped GraphQL arguments into Developer values.

Scalar arguments are lenient: a missing or wrong-typed value becomes the
type's zero value. List elements are strict: the first element that is not
a string fails with a CoercionError naming its position.
"""

from collections.abc import Mapping
from typing import Any

from ..errors import CoercionError
from .models import Developer


def coerce_int(value: Any) -> int:
    """Return ``value`` if it is an integer, otherwise 0."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


def coerce_str(value: Any) -> str:
    """Return ``value`` if it is a string, otherwise an empty string."""
    return value if isinstance(value, str) else ""


def coerce_str_list(value: Any, argument: str = "stack") -> list[str]:
    """Convert a list of untyped values into a list of strings.

    Anything that is not list-shaped becomes an empty list.

    Raises:
        CoercionError: on the first element that is not a string
    """
    if not isinstance(value, list | tuple):
        return []

    converted: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise CoercionError(f"{argument}[{index}]", "string", item)
        converted.append(item)
    return converted


def coerce_developer(raw_args: Mapping[str, Any]) -> Developer:
    """Build a Developer from a resolver's raw argument map."""
    return Developer(
        id=coerce_int(raw_args.get("id")),
        first_name=coerce_str(raw_args.get("first_name")),
        last_name=coerce_str(raw_args.get("last_name")),
        github_url=coerce_str(raw_args.get("github_url")),
        stack=coerce_str_list(raw_args.get("stack")),
    )
