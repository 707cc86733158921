"""Tests for the paired rating-source comparison."""

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from movie_tlbx.analysis.rating_comparison import RatingComparisonAnalyzer
from movie_tlbx.data.views import DatasetView


@pytest.fixture
def small_view() -> DatasetView:
    data = pd.DataFrame(
        {
            "imdb_rating": [7.0, 8.0, 6.5, 9.0, np.nan],
            "audience_score": [65.0, 82.0, 60.0, 88.0, 70.0],
        },
    )
    return DatasetView(
        df=data,
        pretty_by_col={"imdb_rating": "IMDb Rating", "audience_score": "Audience Score"},
        numeric_cols=["imdb_rating", "audience_score"],
    )


class TestRatingComparisonAnalyzer:
    def test_differences_and_test_statistic(self, small_view: DatasetView) -> None:
        result = (
            RatingComparisonAnalyzer(small_view, left="imdb_rating", right="audience_score", scale=10.0)
            .fit()
            .result()
        )
        assert result.differences.tolist() == [5.0, -2.0, 5.0, 2.0]
        assert result.n_obs == 4
        assert result.df == 3
        assert result.mean_difference == pytest.approx(2.5)

        expected = stats.ttest_1samp(result.differences, 0.0)
        assert result.statistic == pytest.approx(expected.statistic)
        assert result.p_value == pytest.approx(expected.pvalue)
        assert result.ci_lower < result.mean_difference < result.ci_upper
        assert result.left_label == "IMDb Rating"

    def test_result_before_fit(self, small_view: DatasetView) -> None:
        analyzer = RatingComparisonAnalyzer(small_view, left="imdb_rating", right="audience_score")
        with pytest.raises(ValueError, match="fit"):
            analyzer.result()

    def test_unknown_column(self, small_view: DatasetView) -> None:
        with pytest.raises(KeyError):
            RatingComparisonAnalyzer(small_view, left="imdb_rating", right="critics_score")

    def test_invalid_alpha(self, small_view: DatasetView) -> None:
        with pytest.raises(ValueError):
            RatingComparisonAnalyzer(small_view, left="imdb_rating", right="audience_score", alpha=0.0)

    def test_too_few_pairs(self) -> None:
        view = DatasetView(df=pd.DataFrame({"l": [1.0], "r": [2.0]}), pretty_by_col={}, numeric_cols=["l", "r"])
        with pytest.raises(ValueError, match="at least two"):
            RatingComparisonAnalyzer(view, left="l", right="r").fit()


def test_dataset_comparison_rejects_null(movies_dataset) -> None:
    result = movies_dataset.make_rating_comparison().fit().result()
    assert result.n_obs == len(movies_dataset)
    assert result.mean_difference > 0
    assert result.reject_null
    assert result.decision.startswith("reject H0")
    assert "t=" in repr(result)
