"""DataFrame analysis tools for inferstat.

This module adapts the core statistics to pandas DataFrames:
- statistical_analysis: Per-column summary statistics
- correlation_analysis: Pearson correlation between two columns
- multi_correlation_analysis: All pairwise correlations
- compare_groups: Welch's t-test or ANOVA across groups
"""

from inferstat.tools.analysis import (
    AnalysisResult,
    ColumnCorrelation,
    ColumnSummary,
    compare_groups,
    correlation_analysis,
    multi_correlation_analysis,
    statistical_analysis,
)

__all__ = [
    "statistical_analysis",
    "correlation_analysis",
    "multi_correlation_analysis",
    "compare_groups",
    "ColumnSummary",
    "ColumnCorrelation",
    "AnalysisResult",
]
