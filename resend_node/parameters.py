"""Normalizers that turn node parameters into Resend request fields."""
import math
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Union

from .base import ValidationError

FallbackKey = Literal["fallbackValue", "fallback_value"]


def normalize_email_list(value: Union[str, Sequence[Any], None]) -> List[str]:
    """Split a comma separated string (or clean a list) into trimmed addresses."""
    if isinstance(value, str):
        parts: Sequence[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = value
    else:
        return []
    emails = [str(email).strip() for email in parts]
    return [email for email in emails if email]


def _parse_number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        # Digit separators are not valid in JSON numbers
        if "_" in value:
            return None
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def parse_template_variables(
    variables: Optional[Sequence[Mapping[str, Any]]],
    fallback_key: FallbackKey = "fallbackValue",
    item_index: int = 0,
) -> Optional[List[Dict[str, Any]]]:
    """
    Convert UI variable definitions into Resend's template variable shape.

    Args:
        variables: Entries with ``key``, ``type`` and optional ``fallbackValue``
        fallback_key: Output field name for the fallback value
        item_index: Input item the parameters belong to

    Returns:
        Converted entries in input order, or None when there are none so the
        caller can leave the field out of the payload

    Raises:
        ValidationError: If a ``number`` variable has a non-numeric fallback
    """
    if not variables:
        return None

    result: List[Dict[str, Any]] = []
    for variable in variables:
        entry: Dict[str, Any] = {
            "key": variable.get("key"),
            "type": variable.get("type"),
        }

        fallback = variable.get("fallbackValue")
        if fallback is not None and fallback != "":
            if variable.get("type") == "number":
                number = _parse_number(fallback)
                if number is None:
                    raise ValidationError(
                        f'Variable "{variable.get("key")}" fallback value must be a number',
                        item_index=item_index,
                    )
                fallback = number
            entry[fallback_key] = fallback

        result.append(entry)

    return result


def build_template_send_variables(
    variables: Optional[Sequence[Mapping[str, Any]]],
) -> Optional[Dict[str, Any]]:
    """Build the ``{key: value}`` map sent with a templated email, or None if empty."""
    if not variables:
        return None

    values: Dict[str, Any] = {}
    for variable in variables:
        key = variable.get("key")
        if not key:
            continue
        value = variable.get("value")
        values[key] = "" if value is None else value

    return values or None
