"""Hypothesis tests built from the descriptive and distribution layers.

- Welch's t-test for two samples with unequal variances
- Pearson correlation with a t-based significance
- One-way ANOVA across two or more groups

Statistical failures never raise. An undersized t-test returns NaN, invalid
pairing or grouping returns an :class:`AnalysisFailure`, and degenerate
arithmetic (zero variance, empty groups) propagates as NaN or infinity.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
import pandas as pd

from inferstat.core.coercion import make_numeric, to_numeric_array
from inferstat.core.descriptive import mean, variance
from inferstat.core.distributions import f_distribution, t_distribution
from inferstat.core.results import AnalysisFailure, CorrelationResult, FailureReason

logger = logging.getLogger(__name__)

MIN_T_TEST_SAMPLE = 3
MIN_CORRELATION_PAIRS = 11


def _is_sequence(value: Any) -> bool:
    """Check for a list-like container or column; strings and bytes do not count."""
    if isinstance(value, (str, bytes)):
        return False
    return isinstance(value, (Sequence, np.ndarray, pd.Series))


def degrees_of_freedom(x: Iterable[Any], y: Iterable[Any]) -> float:
    """Calculate Welch-Satterthwaite degrees of freedom for two samples.

    Population variances (divisor n) are used for both samples.
    """
    sample_x = to_numeric_array(x)
    sample_y = to_numeric_array(y)
    nx = np.float64(sample_x.size)
    ny = np.float64(sample_y.size)

    with np.errstate(divide="ignore", invalid="ignore"):
        share_x = np.float64(variance(sample_x)) / nx
        share_y = np.float64(variance(sample_y)) / ny
        numerator = (share_x + share_y) ** 2
        denominator = share_x**2 / (nx - 1) + share_y**2 / (ny - 1)
        return float(numerator / denominator)


def t_test(x: Iterable[Any], y: Iterable[Any]) -> float:
    """Perform Welch's t-test.

    Args:
        x: First sample (missing values are dropped)
        y: Second sample (missing values are dropped)

    Returns:
        Two-tailed p-value, or NaN if either sample has fewer than
        three valid values

    Example:
        >>> t_test([1, 2, 3, 4], [1, 2, 3, 4])
        1.0
    """
    sample_x = to_numeric_array(x)
    sample_y = to_numeric_array(y)
    nx = sample_x.size
    ny = sample_y.size

    if nx < MIN_T_TEST_SAMPLE or ny < MIN_T_TEST_SAMPLE:
        logger.debug(f"Insufficient data for t-test (nx={nx}, ny={ny})")
        return math.nan

    with np.errstate(divide="ignore", invalid="ignore"):
        difference = np.float64(mean(sample_x) - mean(sample_y))
        standard_error = np.sqrt(
            np.float64(variance(sample_x)) / nx + np.float64(variance(sample_y)) / ny
        )
        t = abs(float(difference / standard_error))

    df = degrees_of_freedom(sample_x, sample_y)
    return t_distribution(df, t)


def pearson_correlation(
    x: Sequence[Any], y: Sequence[Any]
) -> CorrelationResult | AnalysisFailure:
    """Calculate the Pearson correlation coefficient and its significance.

    Pairs where either value is missing are dropped together, so the
    remaining values stay aligned.

    Args:
        x: First sample
        y: Second sample, same length as x

    Returns:
        CorrelationResult, or AnalysisFailure when the lengths differ or
        fewer than 11 complete pairs remain
    """
    if len(x) != len(y):
        logger.debug(f"Correlation length mismatch ({len(x)} vs {len(y)})")
        return AnalysisFailure(
            reason=FailureReason.LENGTH_MISMATCH,
            message=f"Samples differ in length ({len(x)} vs {len(y)})",
        )

    pairs = [(make_numeric(a), make_numeric(b)) for a, b in zip(x, y)]
    pairs = [(a, b) for a, b in pairs if a is not None and b is not None]
    if len(pairs) < MIN_CORRELATION_PAIRS:
        logger.debug(f"Insufficient pairs for correlation ({len(pairs)})")
        return AnalysisFailure(
            reason=FailureReason.INSUFFICIENT_DATA,
            message=(
                f"Need at least {MIN_CORRELATION_PAIRS} complete pairs, "
                f"got {len(pairs)}"
            ),
        )

    xs = np.array([a for a, _ in pairs], dtype=np.float64)
    ys = np.array([b for _, b in pairs], dtype=np.float64)
    n = np.float64(len(pairs))

    with np.errstate(divide="ignore", invalid="ignore"):
        x_sum = xs.sum()
        y_sum = ys.sum()
        numerator = np.sum(xs * ys) - x_sum * y_sum / n
        denominator = np.sqrt(np.sum(xs**2) - x_sum**2 / n) * np.sqrt(
            np.sum(ys**2) - y_sum**2 / n
        )
        # rounding can push a perfect correlation just past +/-1
        r = np.clip(numerator / denominator, -1.0, 1.0)

        df = n - 2
        t = np.abs(r / np.sqrt((1 - r**2) / df))

    p = t_distribution(float(df), float(t))
    return CorrelationResult(r=float(r), p=p, n=len(pairs))


def sum_squared_errors(groups: Iterable[Iterable[Any]]) -> float:
    """Calculate the within-group sum of squared deviations from group means."""
    total = np.float64(0.0)
    for group in groups:
        data = to_numeric_array(group)
        if data.size == 0:
            continue
        total += np.sum((data - mean(data)) ** 2)
    return float(total)


def sum_squared_treatment(
    overall_mean: float,
    means: Sequence[float],
    sizes: Sequence[int] | None = None,
) -> float:
    """Calculate the between-group sum of squares.

    Args:
        overall_mean: Grand mean of all observations
        means: Mean of each group
        sizes: Number of observations in each group (each weighs 1 if omitted)

    Returns:
        Sum over groups of size * (group mean - overall mean)^2
    """
    group_means = np.asarray(means, dtype=np.float64)
    weights = (
        np.ones_like(group_means)
        if sizes is None
        else np.asarray(sizes, dtype=np.float64)
    )
    return float(np.sum(weights * (group_means - overall_mean) ** 2))


def f_statistic(groups: Sequence[Iterable[Any]], m: int, n: int) -> float:
    """Calculate the one-way ANOVA F statistic for m groups and n observations."""
    samples = [to_numeric_array(group) for group in groups]
    means = [mean(sample) for sample in samples]
    sizes = [sample.size for sample in samples]
    overall_mean = mean(np.concatenate(samples)) if samples else math.nan

    sse = sum_squared_errors(samples)
    sst = sum_squared_treatment(overall_mean, means, sizes)

    with np.errstate(divide="ignore", invalid="ignore"):
        mse = np.float64(sse) / np.float64(n - m)
        mst = np.float64(sst) / np.float64(m - 1)
        return float(mst / mse)


def anova(groups: Any) -> float | AnalysisFailure:
    """Perform a one-way ANOVA.

    Args:
        groups: Sequence of samples, one per group

    Returns:
        p-value, or AnalysisFailure if groups is not a sequence of sequences

    Example:
        >>> bool(anova([1, 2, 3]))
        False
    """
    if not _is_sequence(groups) or not all(_is_sequence(g) for g in groups):
        logger.debug("ANOVA input is not a sequence of sequences")
        return AnalysisFailure(
            reason=FailureReason.INVALID_SHAPE,
            message="ANOVA expects a sequence of groups, each a sequence of values",
        )

    samples = [to_numeric_array(group) for group in groups]
    m = len(samples)
    n = sum(sample.size for sample in samples)

    f = f_statistic(samples, m, n)
    return f_distribution(f, m - 1, n - 1)
