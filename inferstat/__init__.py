"""inferstat: classical inferential statistics for data-exploration back ends.

This package provides descriptive summaries, Welch's t-test, one-way ANOVA
and Pearson correlation over samples that may contain missing values, with
p-values from closed-form approximations of the t and F distributions.
"""

__version__ = "0.1.0"

from inferstat.core import (
    AnalysisFailure,
    CorrelationResult,
    FailureReason,
    SummaryRecord,
    anova,
    mean,
    median,
    pearson_correlation,
    quantile,
    summary,
    t_test,
    variance,
)


def __getattr__(name: str):
    """Lazy imports for the pandas and HTTP layers."""
    if name in ("statistical_analysis", "correlation_analysis", "compare_groups"):
        from inferstat import tools

        return getattr(tools, name)
    if name == "app":
        from inferstat.api.app import app

        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AnalysisFailure",
    "CorrelationResult",
    "FailureReason",
    "SummaryRecord",
    "anova",
    "mean",
    "median",
    "pearson_correlation",
    "quantile",
    "summary",
    "t_test",
    "variance",
    "__version__",
]
