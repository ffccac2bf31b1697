"""Argument checks shared by the tool handlers.

Every helper raises ToolInputError naming the offending field, before any
remote call is made.
"""

import re
from typing import Any

from tandoor_mcp.errors import ToolInputError

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_text(args: dict[str, Any], field: str) -> str:
    value = args.get(field)
    if value is None or value == "":
        raise ToolInputError(f"Missing required argument: {field}.")
    if not isinstance(value, str):
        raise ToolInputError(f"Invalid argument: {field} must be a string.")
    return value


def optional_text(args: dict[str, Any], field: str) -> str | None:
    value = args.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ToolInputError(f"Invalid argument: {field} must be a string.")
    return value


def require_int(args: dict[str, Any], field: str) -> int:
    value = args.get(field)
    if not _is_int(value):
        raise ToolInputError(f"Missing or invalid required argument: {field} (number).")
    return value


def optional_int(
    args: dict[str, Any],
    field: str,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int | None:
    value = args.get(field)
    if value is None:
        return None
    if not _is_int(value):
        raise ToolInputError(f"Invalid argument: {field} must be an integer.")
    if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
        raise ToolInputError(
            f"Invalid argument: {field} must be between {minimum} and {maximum}."
        )
    return value


def optional_number(args: dict[str, Any], field: str, default: int | float) -> int | float:
    value = args.get(field)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ToolInputError(f"Invalid argument: {field} must be a number.")
    return value


def optional_bool(args: dict[str, Any], field: str) -> bool | None:
    value = args.get(field)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ToolInputError(f"Invalid argument: {field} must be a boolean.")
    return value


def optional_int_list(args: dict[str, Any], field: str) -> list[int] | None:
    value = args.get(field)
    if value is None:
        return None
    if not isinstance(value, list) or not all(_is_int(v) for v in value):
        raise ToolInputError(f"Invalid argument: {field} must be an array of integers.")
    return value


def check_date(value: str, field: str) -> str:
    """Accept only a zero-padded YYYY-MM-DD date."""
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise ToolInputError(f"Invalid {field} format. Use YYYY-MM-DD.")
    return value


def optional_date(args: dict[str, Any], field: str) -> str | None:
    value = args.get(field)
    if value is None or value == "":
        return None
    return check_date(value, field)


def require_name_or_id(args: dict[str, Any], field: str) -> str | int:
    value = args.get(field)
    if value is None or value == "":
        raise ToolInputError(f"Missing required argument: {field}.")
    if not (_is_int(value) or isinstance(value, str)):
        raise ToolInputError(f"Invalid argument: {field} must be a name or an integer ID.")
    return value


def require_amount(args: dict[str, Any], field: str) -> str:
    """Amounts are sent to Tandoor as text; plain numbers are converted."""
    value = args.get(field)
    if value is None or value == "":
        raise ToolInputError(f"Missing required argument: {field}.")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ToolInputError(f"Invalid argument: {field} must be a string.")
    return str(value)
