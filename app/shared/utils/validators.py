# 📄 File: app/shared/utils/validators.py

# 🧭 Purpose (Layman Explanation):
# Small yes/no checkers used everywhere data comes in: is this text empty, does this look like an
# email or phone number, is this a real web address or date, is this number inside its range.

# 🧪 Purpose (Technical Summary):
# Total, non-raising predicate helpers over raw input values. They accept anything (None,
# wrong types) and answer False instead of raising, so rule functions built on top stay total.

# 🔗 Dependencies:
# - re: Regular expression patterns
# - math: Finite number checks
# - pydantic: WHATWG URL parsing (AnyUrl)
# - datetime: Calendar date validation

# 🔄 Connected Modules / Calls From:
# Used by: cv_management rules (user_rules, cv_rules), validation_service

import math
import re
from datetime import date, datetime
from typing import Any, Optional, Pattern, Union

from pydantic import AnyUrl, TypeAdapter, ValidationError

URL_ADAPTER = TypeAdapter(AnyUrl)
ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
UNSAFE_MARKUP_PATTERN = re.compile(r'[<>]')


# ==============================================================================
# TEXT HELPERS
# ==============================================================================

def is_blank(value: Any) -> bool:
    """True for None, non-strings and strings that are empty after trimming."""
    if not isinstance(value, str):
        return True
    return len(value.strip()) == 0


def trimmed_length(value: Any) -> int:
    """Length of a string after trimming; 0 for anything else."""
    if not isinstance(value, str):
        return 0
    return len(value.strip())


def is_length_between(value: Any, min_length: int, max_length: int) -> bool:
    return min_length <= trimmed_length(value) <= max_length


def matches(pattern: Pattern, value: Any) -> bool:
    """Full match of a compiled pattern; False for non-strings."""
    if not isinstance(value, str):
        return False
    return pattern.fullmatch(value) is not None


def sanitize_string(value: Any) -> str:
    """
    Trim input and drop angle brackets.

    Args:
        value: Raw user input

    Returns:
        Sanitized string ('' for non-strings)
    """
    if not isinstance(value, str):
        return ""
    return UNSAFE_MARKUP_PATTERN.sub('', value.strip())


# ==============================================================================
# FORMAT VALIDATION
# ==============================================================================

def is_valid_url(value: Any) -> bool:
    """
    Absolute-URL check backed by pydantic's WHATWG URL parser.

    A scheme is required; http(s), ftp and ws(s) URLs also need a valid host
    and an in-range port.
    """
    if not isinstance(value, str):
        return False
    try:
        URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def is_valid_date(value: Union[str, date, datetime, None]) -> bool:
    """Accept date objects or ISO ``YYYY-MM-DD`` strings naming a real calendar day."""
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, '%Y-%m-%d')
    except ValueError:
        return False
    return True


# ==============================================================================
# NUMERIC VALIDATION
# ==============================================================================

def to_number(value: Any) -> Optional[float]:
    """Coerce ints, floats and numeric strings; None when not a finite number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_in_range(value: Any, minimum: float, maximum: float) -> bool:
    """Inclusive numeric range check; non-numeric values are out of range."""
    number = to_number(value)
    if number is None:
        return False
    return minimum <= number <= maximum


def is_at_least(value: Any, minimum: float) -> bool:
    number = to_number(value)
    return number is not None and number >= minimum
