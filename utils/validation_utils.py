"""
utils/validation_utils.py

Purpose: Input validation and coercion

- Absolute URL check for the store address
- Lenient numeric coercion for values the store may return as text
"""

import math
from typing import Any, Union
from urllib.parse import urlparse

Number = Union[int, float]


def is_valid_url(url: str) -> bool:
    """
    Checks that a string is an absolute URL (scheme and host present).

    Args:
        url: Candidate URL

    Returns:
        True if valid, False otherwise
    """
    if not url or not isinstance(url, str):
        return False

    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False

    return bool(parsed.scheme) and bool(parsed.netloc)


def to_number(value: Any, default: Number = 0) -> Number:
    """
    Coerces a stored value to a JSON-safe number.

    Numeric strings become int or float, booleans become 0/1, and
    anything that cannot be read as a finite number yields `default`.

    Examples:
        to_number("1700000000000") -> 1700000000000
        to_number("2.5") -> 2.5
        to_number(None) -> 0
    """
    if value is None:
        return default

    if isinstance(value, bool):
        return int(value)

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return value if math.isfinite(value) else default

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return default
        if not math.isfinite(number):
            return default
        return int(number) if number.is_integer() else number

    return default
