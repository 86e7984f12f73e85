"""Core statistics for inferstat.

This module contains:
- Numeric coercion of raw, possibly missing observations
- Descriptive statistics (mean, variance, quantiles, summaries)
- Abramowitz & Stegun approximations of the t and F distributions
- Inferential tests (Welch's t-test, Pearson correlation, one-way ANOVA)
"""

from inferstat.core.coercion import (
    count_null,
    is_number,
    make_numeric,
    to_numeric_array,
)
from inferstat.core.descriptive import (
    SummaryRecord,
    mean,
    median,
    quantile,
    summary,
    variance,
)
from inferstat.core.distributions import f_distribution, t_distribution
from inferstat.core.inferential import (
    anova,
    degrees_of_freedom,
    f_statistic,
    pearson_correlation,
    sum_squared_errors,
    sum_squared_treatment,
    t_test,
)
from inferstat.core.results import AnalysisFailure, CorrelationResult, FailureReason

__all__ = [
    # Coercion
    "is_number",
    "make_numeric",
    "count_null",
    "to_numeric_array",
    # Descriptive
    "mean",
    "variance",
    "quantile",
    "median",
    "summary",
    "SummaryRecord",
    # Distributions
    "t_distribution",
    "f_distribution",
    # Inferential
    "t_test",
    "degrees_of_freedom",
    "pearson_correlation",
    "anova",
    "f_statistic",
    "sum_squared_errors",
    "sum_squared_treatment",
    # Results
    "AnalysisFailure",
    "CorrelationResult",
    "FailureReason",
]
