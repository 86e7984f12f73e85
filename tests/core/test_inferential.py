"""Tests for the inferential tests."""

import math

import numpy as np
import pandas as pd
import pytest
from scipy import stats

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


class TestWelchTTest:
    """Tests for t_test."""

    def test_identical_samples(self) -> None:
        """Test that identical samples give p = 1."""
        sample = [1.0, 2.5, 3.0, 4.5, 5.0]
        assert t_test(sample, list(sample)) == pytest.approx(1.0)

    def test_separated_samples(self, separated_samples: tuple) -> None:
        """Test that clearly different means give a small p-value."""
        x, y = separated_samples
        p = t_test(x, y)
        assert 0.0 < p < 0.001

    def test_symmetric(self, separated_samples: tuple) -> None:
        """Test that swapping samples does not change p."""
        x, y = separated_samples
        assert t_test(x, y) == pytest.approx(t_test(y, x))

    @pytest.mark.parametrize(
        "x,y",
        [
            ([1, 2], [1, 2, 3]),
            ([1, 2, 3], [4, 5]),
            ([1, 2, None, None], [1, 2, 3]),
            ([1, 2, "null"], [4, 5, 6]),
            ([], []),
        ],
    )
    def test_insufficient_data_is_nan(self, x: list, y: list) -> None:
        """Test that fewer than three valid values gives NaN."""
        assert math.isnan(t_test(x, y))

    def test_missing_values_filtered(self) -> None:
        """Test that missing entries are dropped before testing."""
        assert t_test([1, 2, 3, None], [4, 5, 6, "null"]) == pytest.approx(
            t_test([1, 2, 3], [4, 5, 6])
        )

    def test_p_value_in_range(self, paired_samples: tuple) -> None:
        """Test that p is a probability."""
        x, y = paired_samples
        assert 0.0 <= t_test(x, y) <= 1.0

    def test_inputs_not_mutated(self) -> None:
        """Test that the caller's samples are left unchanged."""
        x = [3, None, 1, 2]
        y = [6, 4, 5]
        t_test(x, y)
        assert x == [3, None, 1, 2]
        assert y == [6, 4, 5]


class TestDegreesOfFreedom:
    """Tests for degrees_of_freedom."""

    def test_welch_satterthwaite(self) -> None:
        """Test the formula with population variances."""
        x = [1, 2, 3, 4]
        y = [2, 4, 6, 8, 10]
        share_x = np.var(x) / 4
        share_y = np.var(y) / 5
        expected = (share_x + share_y) ** 2 / (share_x**2 / 3 + share_y**2 / 4)
        assert degrees_of_freedom(x, y) == pytest.approx(expected)

    def test_equal_spread_and_size(self, separated_samples: tuple) -> None:
        """Test that equal variances and sizes give 2(n - 1)."""
        x, y = separated_samples
        assert degrees_of_freedom(x, y) == pytest.approx(10.0)

    def test_zero_variance_is_nan(self) -> None:
        """Test that two constant samples give undefined df."""
        assert math.isnan(degrees_of_freedom([1, 1, 1], [2, 2, 2]))


class TestPearsonCorrelation:
    """Tests for pearson_correlation."""

    def test_length_mismatch(self) -> None:
        """Test that unequal lengths fail."""
        result = pearson_correlation(list(range(12)), list(range(13)))
        assert isinstance(result, AnalysisFailure)
        assert result.reason == FailureReason.LENGTH_MISMATCH
        assert not result

    def test_ten_pairs_fail(self) -> None:
        """Test that ten pairs are not enough."""
        result = pearson_correlation(list(range(10)), list(range(10)))
        assert isinstance(result, AnalysisFailure)
        assert result.reason == FailureReason.INSUFFICIENT_DATA

    def test_eleven_pairs_succeed(self) -> None:
        """Test that eleven pairs are enough."""
        x = [1, 3, 2, 5, 4, 7, 6, 9, 8, 11, 10]
        result = pearson_correlation(x, list(range(11)))
        assert isinstance(result, CorrelationResult)
        assert result.n == 11

    def test_missing_pairs_dropped(self) -> None:
        """Test that a missing value removes the whole pair."""
        x = [1, 2, None, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13]
        y = [2, 1, 3, 5, "null", 6, 8, 7, 10, 9, 12, 11, 14]
        result = pearson_correlation(x, y)
        expected = pearson_correlation(
            [1, 2, 4, 6, 7, 8, 9, 10, 11, 12, 13],
            [2, 1, 5, 6, 8, 7, 10, 9, 12, 11, 14],
        )
        assert isinstance(result, CorrelationResult)
        assert result.n == 11
        assert result.r == pytest.approx(expected.r)
        assert result.p == pytest.approx(expected.p)

    def test_missing_pairs_can_cause_failure(self) -> None:
        """Test that filtering can leave too few pairs."""
        x = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, None]
        y = list(range(11))
        result = pearson_correlation(x, y)
        assert isinstance(result, AnalysisFailure)
        assert result.reason == FailureReason.INSUFFICIENT_DATA

    def test_matches_scipy(self, paired_samples: tuple) -> None:
        """Test r exactly and p approximately against scipy."""
        x, y = paired_samples
        result = pearson_correlation(x, y)
        exact_r, exact_p = stats.pearsonr(x, y)
        assert result.r == pytest.approx(exact_r)
        assert result.p == pytest.approx(exact_p, abs=0.01)

    def test_perfect_correlation(self) -> None:
        """Test an exact linear relationship."""
        x = list(range(12))
        y = [2 * v + 1 for v in x]
        result = pearson_correlation(x, y)
        assert result.r == pytest.approx(1.0)
        assert result.p < 0.001

    def test_negative_correlation(self) -> None:
        """Test that r keeps its sign while p stays two-tailed."""
        x = list(range(12))
        result = pearson_correlation(x, [-v for v in x])
        assert result.r == pytest.approx(-1.0)
        assert result.p < 0.001

    def test_to_dict(self, paired_samples: tuple) -> None:
        """Test converting the result to a dictionary."""
        x, y = paired_samples
        d = pearson_correlation(x, y).to_dict()
        assert set(d) == {"r", "p", "n"}
        assert d["n"] == 20


class TestSumsOfSquares:
    """Tests for the ANOVA building blocks."""

    def test_sum_squared_errors(self) -> None:
        """Test the within-group sum of squares."""
        assert sum_squared_errors([[1, 2, 3], [4, 6]]) == pytest.approx(4.0)

    def test_sum_squared_errors_ignores_missing(self) -> None:
        """Test that missing values are dropped within groups."""
        assert sum_squared_errors([[1, None, 2, 3], [4, "null", 6]]) == pytest.approx(4.0)

    def test_sum_squared_treatment_unweighted(self) -> None:
        """Test the between-group sum of squares with unit weights."""
        assert sum_squared_treatment(5.0, [3.0, 7.0]) == pytest.approx(8.0)

    def test_sum_squared_treatment_weighted(self) -> None:
        """Test the between-group sum of squares weighted by group size."""
        assert sum_squared_treatment(5.0, [3.0, 7.0], [2, 3]) == pytest.approx(20.0)

    def test_f_statistic_matches_scipy(self, unbalanced_groups: list) -> None:
        """Test the F statistic against scipy's one-way ANOVA."""
        n = sum(len(g) for g in unbalanced_groups)
        expected = stats.f_oneway(*unbalanced_groups).statistic
        assert f_statistic(unbalanced_groups, 3, n) == pytest.approx(expected)


class TestAnova:
    """Tests for anova."""

    @pytest.mark.parametrize("groups", [[1, 2, 3], "abc", [[1, 2, 3], "abc"], 42, None])
    def test_invalid_shape(self, groups: object) -> None:
        """Test that non-nested input fails validation."""
        result = anova(groups)
        assert isinstance(result, AnalysisFailure)
        assert result.reason == FailureReason.INVALID_SHAPE
        assert not result

    def test_p_value_in_range(self, unbalanced_groups: list) -> None:
        """Test that well-formed input gives a probability."""
        p = anova(unbalanced_groups)
        assert isinstance(p, float)
        assert 0.0 <= p <= 1.0

    def test_identical_groups(self) -> None:
        """Test that identical groups give p = 1."""
        assert anova([[1, 2, 3, 4], [1, 2, 3, 4], [1, 2, 3, 4]]) == 1.0

    def test_separated_groups(self) -> None:
        """Test that clearly separated groups give a small p-value."""
        groups = [[1, 2, 3, 4, 5], [6, 7, 8, 9, 10], [11, 12, 13, 14, 15]]
        assert anova(groups) < 0.01

    def test_accepts_tuples_and_arrays(self) -> None:
        """Test other sequence containers."""
        groups = [(1.0, 2.0, 3.0, 4.0), np.array([2.0, 3.0, 4.0, 5.0])]
        p = anova(groups)
        assert 0.0 <= p <= 1.0
        assert anova(np.array([[1.0, 2.0, 3.0, 4.0], [2.0, 3.0, 4.0, 5.0]])) == p

    def test_accepts_dataframe_columns(self, unbalanced_groups: list) -> None:
        """Test groups passed as pandas Series, including NaN entries."""
        columns = [pd.Series(group + [np.nan]) for group in unbalanced_groups]
        p = anova(columns)
        assert isinstance(p, float)
        assert p == pytest.approx(anova(unbalanced_groups))

    def test_missing_values_ignored(self, unbalanced_groups: list) -> None:
        """Test that missing entries do not change the result."""
        with_missing = [group + [None, "null"] for group in unbalanced_groups]
        assert anova(with_missing) == pytest.approx(anova(unbalanced_groups))

    def test_too_few_observations_is_nan(self) -> None:
        """Test that df2 = n - 1 must exceed 4."""
        assert math.isnan(anova([[1, 2], [3, 4]]))

    def test_single_group_is_nan(self) -> None:
        """Test that one group has no between-group variation to test."""
        assert math.isnan(anova([[1, 2, 3, 4, 5, 6]]))
