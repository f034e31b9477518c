"""Helpers for turning API JSON into typed values."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional, TypeVar

E = TypeVar("E", bound=Enum)


def parse_enum_or_default(enum_cls: type[E], value: Optional[str], default: E) -> E:
    """
    Return the enum member matching value, ignoring case.

    Matches member names first, then member values.

    Args:
        enum_cls: Enum type to look up in
        value: Raw string from the response
        default: Returned when value is None or unknown

    Returns:
        The matching member or default
    """
    if value is None:
        return default

    wanted = value.strip().lower()
    for member in enum_cls:
        if member.name.lower() == wanted:
            return member
    for member in enum_cls:
        if str(member.value).lower() == wanted:
            return member
    return default


def parse_json_object(text: str) -> dict[str, Any]:
    """
    Parse response text that must contain a JSON object.

    Date-like strings are left as strings, so times keep the offset the
    API sent them with.

    Raises:
        ValueError: If text is not a JSON object
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data
