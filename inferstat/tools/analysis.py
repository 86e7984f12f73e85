"""Column-oriented statistical analysis over pandas DataFrames.

This module adapts the core statistics to tabular data:
- Per-column summary statistics
- Correlation analysis between columns
- Group comparisons (Welch's t-test or one-way ANOVA)
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd
from scipy import stats

from inferstat.core import (
    AnalysisFailure,
    SummaryRecord,
    anova,
    mean,
    median,
    pearson_correlation,
    summary,
    t_test,
    to_numeric_array,
    variance,
)

logger = logging.getLogger(__name__)

SIGNIFICANCE_LEVEL = 0.05


def _column_values(column: pd.Series) -> list[Any]:
    """Return a column as a list with pandas missing values mapped to None."""
    return [None if pd.isna(value) else value for value in column.tolist()]


def _group_labels(names: list[Any]) -> dict[Any, str]:
    """Map group keys to output labels, qualifying labels that print alike.

    Keys such as ``1`` and ``"1"`` both print as "1"; those are labelled
    "1 (int)" and "1 (str)".
    """
    printed = Counter(str(name) for name in names)
    return {
        name: str(name) if printed[str(name)] == 1 else f"{name} ({type(name).__name__})"
        for name in names
    }


@dataclass
class ColumnSummary:
    """Summary statistics for a column.

    Attributes:
        parameter: Column name
        count: Number of valid numeric values
        record: Range, mean, median, quartiles and missing count
        skewness: Distribution skewness (needs 3+ values)
        kurtosis: Excess kurtosis (needs 4+ values)
    """

    parameter: str
    count: int
    record: SummaryRecord
    skewness: float | None = None
    kurtosis: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "parameter": self.parameter,
            "count": self.count,
            **self.record.to_dict(),
            "skewness": self.skewness,
            "kurtosis": self.kurtosis,
        }

    def format_for_display(self) -> str:
        """Format as human-readable string."""
        return f"**{self.parameter}** (n={self.count})\n{self.record.format_for_display()}"


@dataclass
class ColumnCorrelation:
    """Pearson correlation between two columns.

    Attributes:
        param_x: First column name
        param_y: Second column name
        n_points: Number of complete pairs used
        r: Pearson correlation coefficient
        p: Two-tailed p-value
        interpretation: Human-readable interpretation
    """

    param_x: str
    param_y: str
    n_points: int
    r: float
    p: float
    interpretation: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "param_x": self.param_x,
            "param_y": self.param_y,
            "n_points": self.n_points,
            "pearson": {"r": self.r, "p_value": self.p},
            "interpretation": self.interpretation,
        }

    def format_for_display(self) -> str:
        """Format as human-readable string."""
        lines = [
            f"**Correlation: {self.param_x} vs {self.param_y}** (n={self.n_points})",
            f"  Pearson r = {self.r:.3f} (p = {self.p:.2e})",
        ]
        if self.interpretation:
            lines.append(f"  {self.interpretation}")
        return "\n".join(lines)


@dataclass
class AnalysisResult:
    """Complete result from a DataFrame analysis.

    Attributes:
        success: Whether analysis completed successfully
        summaries: Column summaries
        correlations: Column correlations
        error: Error message if failed
    """

    success: bool
    summaries: list[ColumnSummary] = field(default_factory=list)
    correlations: list[ColumnCorrelation] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "summaries": [s.to_dict() for s in self.summaries],
            "correlations": [c.to_dict() for c in self.correlations],
            "error": self.error,
        }

    def format_for_display(self) -> str:
        """Format as human-readable string."""
        if not self.success:
            return f"**Analysis Failed:** {self.error}"

        parts = [s.format_for_display() for s in self.summaries]
        parts.extend(c.format_for_display() for c in self.correlations)
        return "\n\n".join(parts) if parts else "No analysis results."


def statistical_analysis(
    df: pd.DataFrame,
    parameters: list[str] | None = None,
) -> AnalysisResult:
    """Compute summary statistics for columns.

    Args:
        df: DataFrame of observations
        parameters: Column names (None = all numeric columns)

    Returns:
        AnalysisResult with one summary per usable column

    Example:
        >>> result = statistical_analysis(df, ["height", "weight"])
        >>> for s in result.summaries:
        ...     print(s.format_for_display())
    """
    if parameters is None:
        parameters = df.select_dtypes(include=[np.number]).columns.tolist()

    summaries = []
    for param in parameters:
        if param not in df.columns:
            logger.debug(f"Skipping unknown column {param!r}")
            continue

        values = _column_values(df[param])
        data = to_numeric_array(values)
        if data.size < 2:
            continue

        summaries.append(
            ColumnSummary(
                parameter=str(param),
                count=int(data.size),
                record=summary(values, add_quantile=True),
                skewness=float(stats.skew(data)) if data.size >= 3 else None,
                kurtosis=float(stats.kurtosis(data)) if data.size >= 4 else None,
            )
        )

    return AnalysisResult(success=True, summaries=summaries)


def correlation_analysis(
    df: pd.DataFrame,
    param_x: str,
    param_y: str,
) -> AnalysisResult:
    """Compute the Pearson correlation between two columns.

    Args:
        df: DataFrame of observations
        param_x: First column name
        param_y: Second column name

    Returns:
        AnalysisResult with the correlation, or the failure message
    """
    for param in (param_x, param_y):
        if param not in df.columns:
            return AnalysisResult(success=False, error=f"Column {param} not found in data")

    result = pearson_correlation(_column_values(df[param_x]), _column_values(df[param_y]))
    if isinstance(result, AnalysisFailure):
        return AnalysisResult(success=False, error=result.message)

    correlation = ColumnCorrelation(
        param_x=param_x,
        param_y=param_y,
        n_points=result.n,
        r=result.r,
        p=result.p,
        interpretation=_interpret_correlation(result.r, result.p),
    )
    return AnalysisResult(success=True, correlations=[correlation])


def _interpret_correlation(r: float, p: float) -> str:
    """Generate human-readable interpretation of a correlation."""
    if math.isnan(r):
        return "Correlation undefined (a column has no variation)."

    abs_r = abs(r)
    if abs_r < 0.1:
        strength = "negligible"
    elif abs_r < 0.3:
        strength = "weak"
    elif abs_r < 0.5:
        strength = "moderate"
    elif abs_r < 0.7:
        strength = "strong"
    else:
        strength = "very strong"

    direction = "positive" if r > 0 else "negative"

    if p < 0.001:
        significance = "highly significant (p < 0.001)"
    elif p < 0.01:
        significance = "significant (p < 0.01)"
    elif p < SIGNIFICANCE_LEVEL:
        significance = "marginally significant (p < 0.05)"
    else:
        significance = "not statistically significant"

    return f"{strength.capitalize()} {direction} correlation, {significance}."


def multi_correlation_analysis(
    df: pd.DataFrame,
    parameters: list[str],
) -> AnalysisResult:
    """Compute correlations between every pair of columns.

    Pairs that cannot be correlated are left out.
    """
    correlations = []

    for i, param_x in enumerate(parameters):
        for param_y in parameters[i + 1 :]:
            result = correlation_analysis(df, param_x, param_y)
            if result.success:
                correlations.extend(result.correlations)

    return AnalysisResult(success=True, correlations=correlations)


def compare_groups(
    df: pd.DataFrame,
    parameter: str,
    group_column: str,
) -> dict[str, Any]:
    """Compare a column between groups.

    Two groups are compared with Welch's t-test, three or more with a
    one-way ANOVA.

    Args:
        df: DataFrame of observations
        parameter: Column to compare
        group_column: Column defining groups

    Returns:
        Dictionary with per-group statistics and the test result
    """
    if parameter not in df.columns or group_column not in df.columns:
        return {"success": False, "error": "Required columns not found"}

    group_stats = {}
    samples = {}
    for name, group in df.groupby(group_column)[parameter]:
        values = _column_values(group)
        data = to_numeric_array(values)
        if data.size == 0:
            continue
        samples[name] = values
        group_stats[name] = {
            "count": int(data.size),
            "mean": mean(data),
            "median": median(data),
            "variance": variance(data),
        }

    test_result = None
    if len(samples) == 2:
        first, second = samples.values()
        p_value = t_test(first, second)
        if not math.isnan(p_value):
            test_result = {"test": "Welch t-test", "p_value": p_value}
    elif len(samples) > 2:
        p_value = anova(list(samples.values()))
        if not math.isnan(p_value):
            test_result = {"test": "One-way ANOVA", "p_value": p_value}

    if test_result is not None:
        test_result["significant"] = test_result["p_value"] < SIGNIFICANCE_LEVEL

    labels = _group_labels(list(group_stats))

    return {
        "success": True,
        "parameter": parameter,
        "group_column": group_column,
        "group_stats": {labels[name]: record for name, record in group_stats.items()},
        "test_result": test_result,
    }
