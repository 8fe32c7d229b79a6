"""Pagination input parsing shared by the order and catalog queries."""

import math

from protean.exceptions import ValidationError

MAX_PAGE_SIZE = 100


def positive_int(value, field: str, default: int, maximum: int | None = None) -> int:
    """Coerce a page-like input to an int >= 1.

    ``None`` and empty strings fall back to ``default``. Booleans, non-numeric
    strings, and values below 1 are rejected.
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError({field: [f"{field} must be a positive integer"]})

    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError({field: [f"{field} must be a positive integer"]}) from None

    if isinstance(value, float) and number != value:
        raise ValidationError({field: [f"{field} must be a positive integer"]})
    if number < 1:
        raise ValidationError({field: [f"{field} must be at least 1"]})
    if maximum is not None and number > maximum:
        raise ValidationError({field: [f"{field} must be at most {maximum}"]})
    return number


def non_negative_int(value, field: str, default: int = 0) -> int:
    """Coerce an offset-like input to an int >= 0."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError({field: [f"{field} must be a non-negative integer"]})

    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError({field: [f"{field} must be a non-negative integer"]}) from None

    if number < 0:
        raise ValidationError({field: [f"{field} cannot be negative"]})
    return number


def total_pages(total: int, per_page: int) -> int:
    return math.ceil(total / per_page) if per_page else 0
