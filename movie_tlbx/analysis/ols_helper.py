"""OLS fitting, information criteria, and regression diagnostics.

The helpers in this module focus on classical linear regression with ordinary
least squares (OLS) on an explicit design matrix. :func:`fit_linear_model`
refuses designs it cannot estimate (fewer observations than parameters, or a
rank-deficient matrix) instead of returning ``NaN`` coefficients, and names
the offending column. :func:`diagnose_ols` then bundles standard fit metrics
(:math:`R^2`, RMSE, AIC/BIC) with assumption checks for independence,
homoscedasticity, normality, and collinearity. Tests are *diagnostic* rather
than definitive: small p-values indicate evidence against the null (e.g.,
heteroscedasticity or non-normal residuals), but results are sensitive to
sample size and should be interpreted alongside residual plots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

import numpy as np
import pandas as pd
import statsmodels.api as sm
from scipy import stats
from sklearn.linear_model import LinearRegression
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score
from sklearn.model_selection import KFold, cross_val_score
from statsmodels.stats import diagnostic as sm_diagnostic
from statsmodels.stats.outliers_influence import variance_inflation_factor
from statsmodels.stats.stattools import durbin_watson, jarque_bera

from movie_tlbx.errors import MissingValueError, RankDeficiencyError, UnderDeterminedError


if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure


INTERCEPT = "const"
_SHAPIRO_MAX_N = 5000


def information_criterion(
    rss: float,
    n_obs: int,
    n_params: int,
    kind: Literal["aic", "bic"] = "aic",
) -> float:
    r"""Information criterion of a Gaussian linear model, up to an additive constant.

    - AIC: :math:`n \log(RSS/n) + 2k`
    - BIC: :math:`n \log(RSS/n) + k \log n`

    where :math:`k` counts every fitted coefficient including the intercept.
    The constant dropped from the full likelihood is identical for all models
    fitted to the same response, so differences match statsmodels' ``aic``.
    A perfect fit (``rss == 0``) scores ``-inf``.
    """
    if kind == "aic":
        penalty = 2.0 * n_params
    elif kind == "bic":
        penalty = n_params * float(np.log(n_obs))
    else:
        raise ValueError("kind must be one of: aic, bic")
    if rss <= 0:
        return float("-inf")
    return float(n_obs * np.log(rss / n_obs) + penalty)


def constant_columns(X: pd.DataFrame) -> list[str]:
    """Columns whose values do not vary (they duplicate the intercept)."""
    if X.empty:
        return []
    spread = X.max(axis=0) - X.min(axis=0)
    return [str(col) for col in X.columns[(spread == 0).to_numpy()]]


def first_dependent_column(design: pd.DataFrame) -> str | None:
    """Return the first column that is a linear combination of the columns before it."""
    values = design.to_numpy(dtype=float)
    for idx, col in enumerate(design.columns):
        if np.linalg.matrix_rank(values[:, : idx + 1]) < idx + 1:
            return str(col)
    return None


def check_design(design: pd.DataFrame, y: pd.Series | None = None) -> None:
    """Validate that OLS can be solved uniquely on ``design``.

    Raises:
        UnderDeterminedError: If there are no more rows than columns.
        MissingValueError: If the design or response holds missing/non-finite values.
        RankDeficiencyError: If the design is not of full column rank.
    """
    n_obs, n_params = design.shape
    if n_obs <= n_params:
        raise UnderDeterminedError(
            f"Under-determined system: {n_obs} observations for {n_params} parameters (need n > k).",
        )
    values = design.to_numpy(dtype=float)
    if not np.isfinite(values).all():
        bad = [str(col) for col in design.columns if not np.isfinite(design[col].to_numpy(dtype=float)).all()]
        raise MissingValueError(f"Design matrix has missing values in {bad}.", column=bad[0])
    if y is not None and not np.isfinite(y.to_numpy(dtype=float)).all():
        raise MissingValueError("Response contains missing values.", column=str(y.name))

    rank = int(np.linalg.matrix_rank(values))
    if rank < n_params:
        column = first_dependent_column(design)
        raise RankDeficiencyError(
            f"Singular design: rank {rank} < {n_params} columns; "
            f"'{column}' is a linear combination of the preceding columns.",
            column=column,
        )


@dataclass(frozen=True)
class LinearModel:
    """Immutable OLS fit over one column subset of a design matrix.

    Each model is a pure function of ``(X, y, columns)``. Model selection never
    mutates a model; every step produces a new instance.
    """

    results: sm.regression.linear_model.RegressionResultsWrapper
    """Underlying statsmodels results object."""
    columns: tuple[str, ...]
    """Design-matrix columns in order, intercept first."""
    criterion: float
    r"""AIC as :math:`n \log(RSS/n) + 2k` (lower is better)."""
    bic: float
    r"""BIC as :math:`n \log(RSS/n) + k \log n`."""

    @property
    def features(self) -> list[str]:
        """Non-intercept columns."""
        return [col for col in self.columns if col != INTERCEPT]

    @property
    def params(self) -> pd.Series:
        return self.results.params

    @property
    def bse(self) -> pd.Series:
        return self.results.bse

    @property
    def pvalues(self) -> pd.Series:
        return self.results.pvalues

    @property
    def sigma2(self) -> float:
        """Residual variance estimate :math:`RSS / (n - k)`."""
        return float(self.results.scale)

    @property
    def residuals(self) -> pd.Series:
        return self.results.resid

    @property
    def fitted(self) -> pd.Series:
        return self.results.fittedvalues

    @property
    def rss(self) -> float:
        return float(self.results.ssr)

    @property
    def n_obs(self) -> int:
        return int(self.results.nobs)

    @property
    def n_params(self) -> int:
        return len(self.columns)

    @property
    def design_matrix(self) -> pd.DataFrame:
        """Design matrix used for the fit (intercept included)."""
        row_labels = getattr(self.results.model.data, "row_labels", None)
        return pd.DataFrame(self.results.model.exog, columns=list(self.columns), index=row_labels)

    @property
    def y(self) -> pd.Series:
        return pd.Series(
            self.results.model.endog,
            index=self.design_matrix.index,
            name=getattr(self.results.model, "endog_names", None),
        )

    def score(self, kind: Literal["aic", "bic"] = "aic") -> float:
        return self.criterion if kind == "aic" else self.bic

    def coefficient_table(self, *, alpha: float = 0.05) -> pd.DataFrame:
        """Coefficient estimates with standard errors, t statistics, p-values and CIs."""
        ci = self.results.conf_int(alpha=alpha)
        return pd.DataFrame(
            {
                "estimate": self.params,
                "std_error": self.bse,
                "t_value": self.results.tvalues,
                "p_value": self.pvalues,
                "ci_lower": ci.iloc[:, 0],
                "ci_upper": ci.iloc[:, 1],
            },
        ).rename_axis("term")

    def summary(self) -> object:
        """Return the statsmodels summary object."""
        return self.results.summary()

    def diagnose(self, **kwargs: object) -> RegressionResult:
        """Compute metrics and assumption checks (see :func:`diagnose_ols`)."""
        return diagnose_ols(self, **kwargs)

    def __repr__(self) -> str:
        return f"LinearModel(n={self.n_obs}, k={self.n_params}, aic={self.criterion:.3f}, columns={list(self.columns)})"


def fit_linear_model(
    X: pd.DataFrame,
    y: pd.Series,
    *,
    add_intercept: bool = True,
) -> LinearModel:
    """Fit OLS of ``y`` on ``X`` and return an immutable :class:`LinearModel`.

    Args:
        X: Predictor columns. An intercept column named ``const`` is prepended
            unless ``add_intercept`` is False (then ``X`` must already contain it).
        y: Response aligned with ``X``.
        add_intercept: Whether to add the intercept column.

    Raises:
        UnderDeterminedError: If ``n <= k``.
        RankDeficiencyError: If the design is singular (offending column named).
        MissingValueError: If ``X`` or ``y`` contains missing values.
    """
    design = X.astype(float).copy()
    if add_intercept:
        if INTERCEPT in design.columns:
            raise ValueError(f"Column '{INTERCEPT}' is reserved for the intercept.")
        design.insert(0, INTERCEPT, 1.0)
    check_design(design, y)

    results = sm.OLS(y.astype(float), design).fit()
    n_obs, n_params = design.shape
    return LinearModel(
        results=results,
        columns=tuple(str(col) for col in design.columns),
        criterion=information_criterion(results.ssr, n_obs, n_params, "aic"),
        bic=information_criterion(results.ssr, n_obs, n_params, "bic"),
    )


@dataclass(frozen=True)
class MetricsResult:
    r"""Fit and generalization metrics for OLS models.

    Key equations (with :math:`n` observations and :math:`p` predictors):

    - :math:`R^2 = 1 - \frac{SS_{res}}{SS_{tot}}`
    - :math:`\bar{R}^2 = 1 - (1 - R^2)\frac{n-1}{n-p-1}`
    - :math:`\text{RMSE} = \sqrt{\frac{1}{n}\sum_i (y_i - \hat{y}_i)^2}`
    - :math:`\text{MAE} = \frac{1}{n}\sum_i |y_i - \hat{y}_i|`

    Information criteria are most meaningful for *relative* comparisons across
    models fit on the same response and dataset (lower is better).
    """

    r2: float
    adj_r2: float
    rmse: float
    """Root mean squared error (in score points)."""
    mae: float
    criterion: float
    r"""Selection criterion :math:`n \log(RSS/n) + 2k`."""
    aic: float
    """statsmodels AIC :math:`2k - 2\\log L` (differs from ``criterion`` by a constant)."""
    bic: float
    n_obs: int
    sigma: float
    """Residual standard error :math:`\\sqrt{RSS/(n-k)}`."""
    cv_scores: list[float] | None = None
    """Raw cross-validation RMSE scores (if enabled)."""
    cv_rmse: float | None = None

    def __repr__(self) -> str:
        fit_block = (
            "Fit["
            f"r2={self.r2:.3f}, "
            f"adj_r2={self.adj_r2:.3f}, "
            f"rmse={self.rmse:.3f}, "
            f"mae={self.mae:.3f}, "
            f"criterion={self.criterion:.3f}, "
            f"bic={self.bic:.3f}"
            "]"
        )
        cv_block = ""
        if self.cv_rmse is not None and self.cv_scores is not None:
            cv_block = f" CV[rmse={self.cv_rmse:.3f}, folds={len(self.cv_scores)}]"
        return f"MetricsResult({fit_block}{cv_block} n={self.n_obs})"


@dataclass(frozen=True)
class AssumptionCheckResult:
    """Regression assumption diagnostics.

    - Independence (autocorrelation): Durbin-Watson.
    - Normality of residuals: Jarque-Bera, Shapiro-Wilk (or Anderson-Darling).
    - Homoscedasticity: Breusch-Pagan.
    - Collinearity: condition number and variance inflation factors (VIF).
    - Influence: leverage and Cook's distance.
    """

    durbin_watson: float
    """Values near 2 indicate no autocorrelation."""
    jarque_bera_statistic: float
    jarque_bera_pvalue: float
    shapiro_statistic: float
    """Shapiro-Wilk W (Anderson-Darling above 5000 observations)."""
    shapiro_pvalue: float
    breusch_pagan_statistic: float
    breusch_pagan_pvalue: float
    condition_number: float
    vif: pd.Series
    """Variance inflation factor per predictor (intercept excluded)."""
    leverage: np.ndarray
    """Diagonal of the hat matrix :math:`H = X(X'X)^{-1}X'`."""
    cooks_distance: np.ndarray

    def __repr__(self) -> str:
        alpha = 0.05

        def decision(p_value: float) -> str:
            return "FAIL" if p_value < alpha else "OK"

        max_vif = float(self.vif.max()) if not self.vif.empty else float("nan")
        n_obs = len(self.cooks_distance)
        cooks_exceed = int(np.sum(self.cooks_distance > 4 / n_obs)) if n_obs else 0
        return (
            "AssumptionCheckResult(\n"
            f"  Normality: JB(p={self.jarque_bera_pvalue:.3f}, {decision(self.jarque_bera_pvalue)}); "
            f"Shapiro/AD(p={self.shapiro_pvalue:.3f}, {decision(self.shapiro_pvalue)})\n"
            f"  Homoscedasticity: BP(p={self.breusch_pagan_pvalue:.3f}, {decision(self.breusch_pagan_pvalue)})\n"
            f"  Autocorrelation: Durbin-Watson={self.durbin_watson:.2f}\n"
            f"  Collinearity: cond#={self.condition_number:.2f}, max_vif={max_vif:.2f}\n"
            f"  Influence: max_leverage={float(np.max(self.leverage)):.3f}, cooks>4/n={cooks_exceed}\n"
            ")"
        )


@dataclass(frozen=True)
class RegressionResult:
    """Packaged OLS fit, metrics, and diagnostics for reporting."""

    model: LinearModel
    design_matrix: pd.DataFrame
    y: pd.Series
    metrics: MetricsResult
    assumptions: AssumptionCheckResult
    residuals: pd.Series
    fitted: pd.Series

    def print_summary(self) -> None:
        """Print the statsmodels summary to stdout."""
        print(self.model.summary())  # noqa: T201

    def coefficient_table(self, *, alpha: float = 0.05) -> pd.DataFrame:
        return self.model.coefficient_table(alpha=alpha)

    @property
    def r2(self) -> float:
        return self.metrics.r2

    @property
    def rmse(self) -> float:
        return self.metrics.rmse

    @property
    def vif(self) -> pd.DataFrame:
        """Variance-inflation factors as a tidy DataFrame."""
        return self.assumptions.vif.rename_axis("feature").reset_index(name="vif")

    @property
    def max_leverage(self) -> float:
        return float(np.max(self.assumptions.leverage))

    @property
    def max_cooks(self) -> float:
        return float(np.max(self.assumptions.cooks_distance))

    # ------------------------------------------------------------------ plotting shortcuts
    def plot_residuals_vs_fitted(self, **kwargs: object) -> Axes:
        """Residuals against fitted values (linearity and constant variance)."""
        from movie_tlbx.plotting.regression_plots import plot_residuals_vs_fitted  # noqa: PLC0415

        return plot_residuals_vs_fitted(self, **kwargs)

    def plot_residuals_vs_predictor(self, predictor: str, **kwargs: object) -> Axes:
        """Residuals against one numeric predictor (nonlinearity in that predictor)."""
        from movie_tlbx.plotting.regression_plots import plot_residuals_vs_predictor  # noqa: PLC0415

        return plot_residuals_vs_predictor(self, predictor, **kwargs)

    def plot_residual_histogram(self, **kwargs: object) -> Axes:
        from movie_tlbx.plotting.regression_plots import plot_residual_histogram  # noqa: PLC0415

        return plot_residual_histogram(self, **kwargs)

    def plot_qq(self, **kwargs: object) -> Axes:
        """Normal Q-Q plot of the residuals.

        Points close to the 45-degree line indicate approximately normal
        residuals; systematic curvature points to skewness or heavy tails.
        """
        from movie_tlbx.plotting.regression_plots import plot_qq  # noqa: PLC0415

        return plot_qq(self, **kwargs)

    def plot_residual_diags(self, predictor: str | None = None, **kwargs: object) -> Figure:
        """Plot the four standard residual diagnostics on one 2x2 figure."""
        from movie_tlbx.plotting.regression_plots import plot_residual_diagnostics  # noqa: PLC0415

        return plot_residual_diagnostics(self, predictor=predictor, **kwargs)


def diagnose_ols(
    model: LinearModel,
    *,
    cv_folds: int | None = None,
    shuffle_cv: bool = False,
    random_state: int | None = None,
) -> RegressionResult:
    """Compute full diagnostics for an already-fitted model.

    The returned object includes fitted values, residuals, summary metrics, and
    assumption checks.
    """
    design_matrix = model.design_matrix
    y = model.y
    fitted = pd.Series(np.asarray(model.fitted), index=design_matrix.index)
    residuals = pd.Series(np.asarray(model.residuals), index=design_matrix.index)

    metrics = compute_metrics(
        model,
        y_true=y,
        y_pred=fitted,
        design_matrix=design_matrix,
        cv_folds=cv_folds,
        shuffle_cv=shuffle_cv,
        random_state=random_state,
    )
    assumptions = compute_assumptions(model, design_matrix=design_matrix)

    return RegressionResult(
        model=model,
        design_matrix=design_matrix,
        y=y,
        metrics=metrics,
        assumptions=assumptions,
        residuals=residuals,
        fitted=fitted,
    )


def compute_vif(design_matrix: pd.DataFrame) -> pd.Series:
    r"""Compute VIF per regressor (intercept excluded).

    :math:`VIF_j = \frac{1}{1 - R_j^2}`, where :math:`R_j^2` comes from regressing
    predictor :math:`j` on all other columns of the design (intercept included).
    """
    values = design_matrix.to_numpy(dtype=float)
    return pd.Series(
        {
            col: float(variance_inflation_factor(values, idx))
            for idx, col in enumerate(design_matrix.columns)
            if col != INTERCEPT
        },
        dtype=float,
    )


def compute_cv_scores(
    design_matrix: pd.DataFrame,
    y: pd.Series,
    *,
    cv_folds: int,
    shuffle: bool = False,
    random_state: int | None = None,
) -> list[float]:
    """Compute K-fold cross-validation RMSE scores for the same design."""
    lr = LinearRegression(fit_intercept=INTERCEPT not in design_matrix.columns)
    splitter = KFold(
        n_splits=cv_folds,
        shuffle=shuffle,
        random_state=(random_state if shuffle else None),
    )
    scores = cross_val_score(
        lr,
        design_matrix,
        y,
        cv=splitter,
        scoring="neg_root_mean_squared_error",
        error_score="raise",
    )
    return [float(-score) for score in scores]


def compute_metrics(
    model: LinearModel,
    y_true: pd.Series,
    y_pred: pd.Series,
    design_matrix: pd.DataFrame,
    *,
    cv_folds: int | None = None,
    shuffle_cv: bool = False,
    random_state: int | None = None,
) -> MetricsResult:
    """Compute fit metrics, information criteria, and optional CV scores."""
    cv_scores: list[float] | None = None
    cv_rmse: float | None = None
    if cv_folds and cv_folds > 1:
        cv_scores = compute_cv_scores(
            design_matrix,
            y_true,
            cv_folds=cv_folds,
            shuffle=shuffle_cv,
            random_state=random_state,
        )
        cv_rmse = float(np.mean(cv_scores))

    results = model.results
    return MetricsResult(
        r2=float(r2_score(y_true, y_pred)),
        adj_r2=float(results.rsquared_adj),
        rmse=float(np.sqrt(mean_squared_error(y_true, y_pred))),
        mae=float(mean_absolute_error(y_true, y_pred)),
        criterion=model.criterion,
        aic=float(results.aic),
        bic=model.bic,
        n_obs=model.n_obs,
        sigma=float(np.sqrt(model.sigma2)),
        cv_scores=cv_scores,
        cv_rmse=cv_rmse,
    )


def compute_assumptions(
    model: LinearModel,
    design_matrix: pd.DataFrame,
) -> AssumptionCheckResult:
    """Run key regression assumption checks and return structured results."""
    resid = pd.Series(np.asarray(model.residuals), index=design_matrix.index)

    jb_stat, jb_pvalue, _, _ = jarque_bera(resid)

    if resid.shape[0] > _SHAPIRO_MAX_N:
        # Shapiro-Wilk warns above 5k; fall back to Anderson-Darling.
        shapiro_stat, shapiro_pvalue = sm_diagnostic.normal_ad(resid)
    else:
        shapiro_stat, shapiro_pvalue = stats.shapiro(resid)

    bp_stat, bp_pvalue, _, _ = sm_diagnostic.het_breuschpagan(resid, design_matrix.values)

    influence = model.results.get_influence()

    return AssumptionCheckResult(
        durbin_watson=float(durbin_watson(resid)),
        jarque_bera_statistic=float(jb_stat),
        jarque_bera_pvalue=float(jb_pvalue),
        shapiro_statistic=float(shapiro_stat),
        shapiro_pvalue=float(shapiro_pvalue),
        breusch_pagan_statistic=float(bp_stat),
        breusch_pagan_pvalue=float(bp_pvalue),
        condition_number=float(np.linalg.cond(design_matrix.values)),
        vif=compute_vif(design_matrix),
        leverage=np.asarray(influence.hat_matrix_diag),
        cooks_distance=np.asarray(influence.cooks_distance[0]),
    )


__all__ = [
    "INTERCEPT",
    "AssumptionCheckResult",
    "LinearModel",
    "MetricsResult",
    "RegressionResult",
    "check_design",
    "compute_assumptions",
    "compute_metrics",
    "compute_vif",
    "constant_columns",
    "diagnose_ols",
    "first_dependent_column",
    "fit_linear_model",
    "information_criterion",
]
