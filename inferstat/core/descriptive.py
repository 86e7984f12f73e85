"""Descriptive statistics over samples of raw observations.

Missing and non-numeric entries are excluded before every computation, so
``n`` always counts valid values only. Empty samples give NaN for the mean and
variance and ``0.0`` for quantiles.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import numpy as np

from inferstat.core.coercion import count_null, to_numeric_array


@dataclass
class SummaryRecord:
    """Summary of a single sample.

    Attributes:
        minimum: Smallest valid value (NaN if none)
        maximum: Largest valid value (NaN if none)
        mean: Arithmetic mean
        median: 50th percentile
        null: Number of explicit missing markers
        quantile_25: 25th percentile, when requested
        quantile_75: 75th percentile, when requested
    """

    minimum: float
    maximum: float
    mean: float
    median: float
    null: int
    quantile_25: float | None = None
    quantile_75: float | None = None

    @property
    def has_quantiles(self) -> bool:
        """Check if the quartiles were computed."""
        return self.quantile_25 is not None and self.quantile_75 is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the fixed-shape summary mapping."""
        result: dict[str, Any] = {
            "minimum": self.minimum,
            "maximum": self.maximum,
            "mean": self.mean,
            "median": self.median,
            "null": self.null,
        }
        if self.has_quantiles:
            result["quantile 25%"] = self.quantile_25
            result["quantile 75%"] = self.quantile_75
        return result

    def format_for_display(self) -> str:
        """Format as human-readable string."""
        lines = [
            f"  Range: [{self.minimum:.4g}, {self.maximum:.4g}]",
            f"  Mean: {self.mean:.4g}",
            f"  Median: {self.median:.4g}",
            f"  Missing: {self.null}",
        ]
        if self.has_quantiles:
            lines.append(f"  IQR: [{self.quantile_25:.4g}, {self.quantile_75:.4g}]")
        return "\n".join(lines)


def mean(values: Iterable[Any]) -> float:
    """Calculate the arithmetic mean of the valid values in a sample."""
    data = to_numeric_array(values)
    if data.size == 0:
        return math.nan
    return float(data.sum() / data.size)


def variance(values: Iterable[Any]) -> float:
    """Calculate the population variance (divisor n) of a sample."""
    data = to_numeric_array(values)
    if data.size == 0:
        return math.nan
    deviations = data - data.sum() / data.size
    return float(np.sum(deviations**2) / data.size)


def quantile(values: Iterable[Any], q: float) -> float:
    """Calculate the q-th quantile by linear interpolation (R type 7).

    The sample is sorted as a copy; the caller's sequence is left untouched.

    Args:
        values: Sample of raw observations
        q: Quantile fraction in [0, 1]

    Returns:
        Interpolated quantile, or 0.0 for an empty sample

    Raises:
        ValueError: If q is outside [0, 1]

    Example:
        >>> quantile([1, 2, 3, 4], 0.5)
        2.5
    """
    if not 0.0 <= q <= 1.0:
        raise ValueError(f"Quantile fraction must be in [0, 1], got {q}")

    data = np.sort(to_numeric_array(values))
    if data.size == 0:
        return 0.0

    position = (data.size - 1) * q
    base = math.floor(position)
    rest = position - base
    if base + 1 < data.size:
        return float(data[base] + rest * (data[base + 1] - data[base]))
    return float(data[base])


def median(values: Iterable[Any]) -> float:
    """Calculate the median of a sample."""
    return quantile(values, 0.5)


def summary(values: Iterable[Any], add_quantile: bool = False) -> SummaryRecord:
    """Summarise a sample.

    Args:
        values: Sample of raw observations
        add_quantile: If True, also compute the 25% and 75% quantiles

    Returns:
        SummaryRecord with range, mean, median and missing count
    """
    values = list(values)
    data = to_numeric_array(values)

    record = SummaryRecord(
        minimum=float(data.min()) if data.size else math.nan,
        maximum=float(data.max()) if data.size else math.nan,
        mean=mean(data),
        median=median(data),
        null=count_null(values),
    )
    if add_quantile:
        record.quantile_25 = quantile(data, 0.25)
        record.quantile_75 = quantile(data, 0.75)
    return record
