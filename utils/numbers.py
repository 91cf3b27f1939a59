"""
Numeric Input Helpers

Lenient number parsing for form fields and stored documents.
"""

import math


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    try:
        result = float(value) if value not in (None, '') else default
    except (ValueError, TypeError, OverflowError):
        return default
    if result is None:
        return None
    if math.isnan(result) or math.isinf(result):
        return default
    if min_val is not None:
        result = max(min_val, result)
    if max_val is not None:
        result = min(max_val, result)
    return result


def safe_int(value, default=1, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    try:
        result = int(float(value)) if value not in (None, '') else default
    except (ValueError, TypeError, OverflowError):
        return default
    if result is None:
        return None
    if min_val is not None:
        result = max(min_val, result)
    if max_val is not None:
        result = min(max_val, result)
    return result


def is_positive(value):
    """True for a finite number greater than zero."""
    if isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (ValueError, TypeError):
        return False
    return math.isfinite(number) and number > 0
