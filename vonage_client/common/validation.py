"""Small argument checks shared by DTO validators and client façades.

All of them raise ``ValueError`` so that, inside a pydantic validator,
the failure is reported as a normal ``ValidationError``.
"""

from __future__ import annotations

import re
import uuid
from typing import Optional, Sized, Union

Number = Union[int, float]

E164_MIN_DIGITS = 7
E164_MAX_DIGITS = 15
_COSMETIC_CHARS_RE = re.compile(r"[\s\-().]")


def sanitize_e164(number: Optional[str], field: str = "number") -> str:
    """
    Strip cosmetic characters (whitespace, dashes, parentheses, dots, a leading '+')
    and require what remains to be 7..15 digits.

    >>> sanitize_e164("+1 900-900-0000")
    '19009000000'
    """
    if number is None or not str(number).strip():
        raise ValueError(f"{field} is required")
    cleaned = _COSMETIC_CHARS_RE.sub("", str(number))
    if cleaned.startswith("+"):
        cleaned = cleaned[1:]
    if not cleaned.isdigit():
        raise ValueError(f"Invalid {field} '{number}': must contain only digits after sanitisation")
    if not E164_MIN_DIGITS <= len(cleaned) <= E164_MAX_DIGITS:
        raise ValueError(
            f"Invalid {field} '{number}': must be between {E164_MIN_DIGITS} and {E164_MAX_DIGITS} digits"
        )
    return cleaned


def check_length(value: Optional[Sized], field: str, min_len: int = 0, max_len: Optional[int] = None):
    if value is None:
        return value
    size = len(value)
    if size < min_len or (max_len is not None and size > max_len):
        bound = f"between {min_len} and {max_len}" if max_len is not None else f"at least {min_len}"
        raise ValueError(f"{field} must be {bound} in length (got {size})")
    return value


def check_range(value: Optional[Number], field: str, low: Optional[Number] = None, high: Optional[Number] = None):
    if value is None:
        return value
    if (low is not None and value < low) or (high is not None and value > high):
        raise ValueError(f"{field} must be between {low} and {high} (got {value})")
    return value


def require(value, field: str):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{field} is required")
    return value


def validate_prefixed_id(value: Optional[str], prefix: str, field: str = "id") -> str:
    """IDs such as 'CON-<uuid>', 'MEM-<uuid>', 'USR-<uuid>'."""
    require(value, field)
    if not value.startswith(prefix) or len(value) != len(prefix) + 36:
        raise ValueError(f"Invalid {field} '{value}': expected '{prefix}' followed by a UUID")
    try:
        uuid.UUID(value[len(prefix):])
    except ValueError as exc:
        raise ValueError(f"Invalid {field} '{value}': expected '{prefix}' followed by a UUID") from exc
    return value


def validate_account_key(value: Optional[str], field: str = "api_key") -> str:
    require(value, field)
    if len(value) != 8:
        raise ValueError(f"{field} '{value}' must be exactly 8 characters")
    return value


def validate_uuid(value, field: str = "id") -> str:
    require(value, field)
    try:
        return str(uuid.UUID(str(value)))
    except ValueError as exc:
        raise ValueError(f"Invalid {field} '{value}': expected a UUID") from exc
