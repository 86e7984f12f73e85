"""Numeric coercion of raw observations.

Observations reach the library loosely typed: numbers, numeric strings,
``None`` or the literal string ``"null"`` for missing entries, and whatever
else a data-exploration front end happens to pass along. This module
classifies those values and normalises them before any arithmetic happens.

Example:
    >>> make_numeric("3.5")
    3.5
    >>> count_null([1, None, 3, "null"])
    2
    >>> to_numeric_array([1, None, "2", "n/a"])
    array([1., 2.])
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from numbers import Complex, Number, Real
from typing import Any

import numpy as np

NULL_TOKEN = "null"


def _parse_float(text: str) -> float | None:
    """Parse a numeric string, returning None for blank, invalid or NaN text."""
    stripped = text.strip()
    if not stripped:
        return None
    try:
        value = float(stripped)
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


def _number_to_float(value: Number) -> float | None:
    """Convert a non-complex number such as ``Decimal`` to float, None for NaN."""
    try:
        converted = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(converted):
        return None
    return converted


def is_number(value: Any) -> bool:
    """Check whether a raw value counts as numeric.

    ``None`` is accepted here: it marks a missing observation rather than a
    malformed one, and :func:`make_numeric` keeps it as ``None``.

    Args:
        value: Raw observation

    Returns:
        True for None, booleans, non-NaN real numbers (``Decimal`` included)
        and numeric strings
    """
    if value is None:
        return True
    if isinstance(value, (bool, np.bool_)):
        return True
    if isinstance(value, Real):
        return not math.isnan(value)
    if isinstance(value, Number) and not isinstance(value, Complex):
        return _number_to_float(value) is not None
    if isinstance(value, str):
        return _parse_float(value) is not None
    return False


def make_numeric(value: Any) -> float | None:
    """Convert a raw value to float, or None when it is missing or non-numeric."""
    if value is None:
        return None
    if isinstance(value, str):
        return _parse_float(value)
    if isinstance(value, Number) and not isinstance(value, Complex):
        return _number_to_float(value)
    if is_number(value):
        return float(value)
    return None


def count_null(values: Iterable[Any]) -> int:
    """Count entries that are None or the string ``"null"``."""
    count = 0
    for value in values:
        if value is None or (isinstance(value, str) and value == NULL_TOKEN):
            count += 1
    return count


def to_numeric_array(values: Iterable[Any]) -> np.ndarray:
    """Return the valid numeric values of a sample as a new float array.

    Missing and non-numeric entries are dropped. The input is never modified.

    Args:
        values: Sequence of raw observations, or a numpy array

    Returns:
        1-D float64 array of the valid values, in input order
    """
    if isinstance(values, np.ndarray) and values.dtype.kind in "biuf":
        data = values.astype(np.float64).ravel()
        return data[~np.isnan(data)]

    cleaned = [make_numeric(value) for value in values]
    return np.array([v for v in cleaned if v is not None], dtype=np.float64)
