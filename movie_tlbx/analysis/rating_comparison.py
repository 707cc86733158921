"""Paired comparison of two rating sources on a common scale."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy import stats

from movie_tlbx.data.views import DatasetView

from .base_analyser import BaseAnalyser


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingComparisonResult:
    r"""Paired t-test of two rating sources.

    With differences :math:`d_i = s \cdot \text{left}_i - \text{right}_i`
    (``s`` rescales the left source onto the right source's scale), the null
    hypothesis is :math:`H_0: \mu_d = 0` against a two-sided alternative:

    :math:`t = \frac{\bar{d}}{s_d / \sqrt{n}} \sim t_{n-1}` under :math:`H_0`.
    """

    differences: pd.Series
    """Per-movie rating differences (left rescaled minus right)."""
    left_label: str
    right_label: str
    statistic: float
    p_value: float
    df: int
    mean_difference: float
    ci_lower: float
    ci_upper: float
    """Confidence interval for the mean difference at level ``1 - alpha``."""
    alpha: float

    @property
    def n_obs(self) -> int:
        return int(self.differences.shape[0])

    @property
    def reject_null(self) -> bool:
        """Whether the mean difference is significant at ``alpha``."""
        return self.p_value < self.alpha

    @property
    def decision(self) -> str:
        if self.reject_null:
            return f"reject H0 at alpha={self.alpha:g}: mean difference {self.mean_difference:.2f} differs from 0"
        return f"fail to reject H0 at alpha={self.alpha:g}: no evidence the mean difference differs from 0"

    def __repr__(self) -> str:
        return (
            f"RatingComparisonResult({self.left_label} vs {self.right_label}: "
            f"t={self.statistic:.3f}, df={self.df}, p={self.p_value:.4g}, "
            f"mean_diff={self.mean_difference:.3f} [{self.ci_lower:.3f}, {self.ci_upper:.3f}], n={self.n_obs})"
        )


class RatingComparisonAnalyzer(BaseAnalyser):
    """Compare two rating columns of the same movies with a paired t-test."""

    def __init__(
        self,
        view: DatasetView,
        *,
        left: str,
        right: str,
        scale: float = 1.0,
        alpha: float = 0.05,
    ) -> None:
        super().__init__(view)
        missing = [col for col in (left, right) if col not in view.df.columns]
        if missing:
            raise KeyError(f"Rating columns not in view: {missing}")
        if not 0 < alpha < 1:
            raise ValueError("alpha must be in (0, 1)")
        self.left = left
        self.right = right
        self.scale = scale
        self.alpha = alpha
        self._result: RatingComparisonResult | None = None

    def fit(self) -> RatingComparisonAnalyzer:
        """Run the paired t-test on rows where both ratings are present."""
        pairs = self.view.df.loc[:, [self.left, self.right]].dropna().astype(float)
        if len(pairs) < 2:
            raise ValueError("Need at least two movies with both ratings for a paired test.")

        left = pairs[self.left] * self.scale
        right = pairs[self.right]
        differences = (left - right).rename("difference")
        test = stats.ttest_rel(left, right)

        n_obs = len(differences)
        mean_diff = float(differences.mean())
        sem = float(differences.std(ddof=1) / np.sqrt(n_obs))
        half_width = float(stats.t.ppf(1 - self.alpha / 2, n_obs - 1)) * sem

        self._result = RatingComparisonResult(
            differences=differences,
            left_label=self.view.pretty(self.left),
            right_label=self.view.pretty(self.right),
            statistic=float(test.statistic),
            p_value=float(test.pvalue),
            df=n_obs - 1,
            mean_difference=mean_diff,
            ci_lower=mean_diff - half_width,
            ci_upper=mean_diff + half_width,
            alpha=self.alpha,
        )
        logger.info("Paired t-test %s vs %s: t=%.3f p=%.4g", self.left, self.right, test.statistic, test.pvalue)
        self._fitted = True
        return self

    def result(self) -> RatingComparisonResult:
        """Return packaged results."""
        self._check_fitted()
        assert self._result is not None
        return self._result
