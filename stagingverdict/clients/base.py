"""Payload helpers shared by the resource clients."""

from typing import Any

from stagingverdict.exceptions import MalformedResponseError


def require(data: dict[str, Any], key: str, context: str) -> Any:
    """
    Get a required field from a response payload.

    Args:
        data: Parsed JSON object
        key: Field name
        context: What is being parsed, for the error message

    Returns:
        The field value

    Raises:
        MalformedResponseError: If the field is missing or null
    """
    value = as_dict(data, context).get(key)
    if value is None:
        raise MalformedResponseError(f"{context}: missing required field '{key}'")
    return value


def as_list(value: Any) -> list[Any]:
    """Normalize a field that may hold one object, a list, or nothing."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def as_bool(value: Any) -> bool:
    """Interpret boolean fields sent either as JSON booleans or as strings."""
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


def payload(response: dict[str, Any], context: str) -> Any:
    """
    Unwrap the "data" envelope of a response.

    Raises:
        MalformedResponseError: If the envelope is missing or null
    """
    return require(response, "data", context)


def as_dict(value: Any, context: str) -> dict[str, Any]:
    """Check that a payload is a JSON object."""
    if not isinstance(value, dict):
        raise MalformedResponseError(f"{context}: expected an object, got {type(value).__name__}")
    return value


def as_int(value: Any, context: str) -> int:
    """Interpret integer fields sent either as JSON numbers or as strings."""
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"{context}: expected an integer, got {value!r}") from e
