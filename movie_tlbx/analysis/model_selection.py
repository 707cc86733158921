"""Model selection helpers for OLS regression workflows.

Greedy search over column subsets of a design matrix, scored with an
information criterion (``n log(RSS/n) + 2k`` for AIC). Backward elimination
starts from every column and drops the column whose removal lowers the
criterion most, until no removal helps.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from movie_tlbx.errors import UnderDeterminedError

from .ols_helper import INTERCEPT, LinearModel, check_design, constant_columns, first_dependent_column, fit_linear_model


logger = logging.getLogger(__name__)

# Relative tolerance under which two criterion values count as equal.
TIE_RTOL = 1e-9


def _tie_tolerance(value: float) -> float:
    if not np.isfinite(value):
        return 0.0
    return TIE_RTOL * max(1.0, abs(value))

Direction = Literal["backward", "forward", "both"]
Criterion = Literal["aic", "bic"]


@dataclass(frozen=True)
class SelectionStep:
    """Single step in a model selection path.

    Stores the fitted model for the column set reached after ``action`` was
    applied to ``changed``. The first step has ``action == "start"``.
    """

    step: int
    columns: tuple[str, ...]
    """Non-intercept columns included after this step."""
    action: Literal["start", "remove", "add"]
    changed: str | None
    criterion: float
    model: LinearModel


@dataclass(frozen=True)
class SelectionPathResult:
    """Results from a greedy model-selection path.

    Each accepted step strictly lowers the criterion, so the last step holds
    the selected model. Because selection is data-adaptive, in-sample fit
    metrics of the final model are optimistic and do not account for selection
    uncertainty.
    """

    steps: list[SelectionStep]
    criterion: str
    direction: str
    excluded_columns: dict[str, str] = field(default_factory=dict)
    """Columns removed before the search, mapped to the reason (``constant`` or ``collinear``)."""

    @property
    def final_step(self) -> SelectionStep:
        return self.steps[-1]

    @property
    def final_model(self) -> LinearModel:
        """Model reached at the end of the path."""
        return self.final_step.model

    @property
    def initial_model(self) -> LinearModel:
        return self.steps[0].model

    @property
    def selected_columns(self) -> list[str]:
        return list(self.final_step.columns)

    @property
    def removed_columns(self) -> list[str]:
        """Columns of the starting model that are absent from the final model."""
        return [col for col in self.steps[0].columns if col not in self.final_step.columns]

    @property
    def trajectory(self) -> list[tuple[str, float]]:
        """``(changed column, resulting criterion)`` for every accepted step."""
        return [(str(step.changed), step.criterion) for step in self.steps[1:]]

    def summary_table(self) -> pd.DataFrame:
        """Return a tidy summary table for plotting and reporting."""
        rows = [
            {
                "step": step.step,
                "action": step.action,
                "changed": step.changed,
                "n_columns": len(step.columns),
                "criterion": step.criterion,
                "bic": step.model.bic,
                "adj_r2": float(step.model.results.rsquared_adj),
                "rmse": float(np.sqrt(step.model.rss / step.model.n_obs)),
            }
            for step in self.steps
        ]
        return pd.DataFrame(rows).set_index("step")


def compare_models(models: dict[str, LinearModel]) -> pd.DataFrame:
    """Tabulate criterion, BIC, adj R², and residual standard error for fitted models.

    Information criteria are most meaningful for comparing models fit to the
    same response on the same data; lower values indicate a better trade-off of
    fit and complexity.
    """
    rows = [
        {
            "model": name,
            "n_params": model.n_params,
            "criterion": model.criterion,
            "bic": model.bic,
            "adj_r2": float(model.results.rsquared_adj),
            "sigma": float(np.sqrt(model.sigma2)),
        }
        for name, model in models.items()
    ]
    return pd.DataFrame(rows).sort_values("criterion").reset_index(drop=True)


def prune_design(
    X: pd.DataFrame,
    *,
    on_collinear: Literal["raise", "drop"] = "raise",
) -> tuple[pd.DataFrame, dict[str, str]]:
    """Remove columns that would make the design rank-deficient.

    Constant columns are always removed (they duplicate the intercept). A
    column that is a linear combination of earlier columns either raises
    :class:`RankDeficiencyError` (``on_collinear="raise"``) or is dropped
    (``on_collinear="drop"``); the scan repeats until the design has full rank.

    Returns:
        Pruned design and a mapping from removed column to reason.
    """
    if on_collinear not in {"raise", "drop"}:
        raise ValueError("on_collinear must be one of: raise, drop")

    excluded: dict[str, str] = {}
    for col in constant_columns(X):
        logger.warning("Excluding constant column '%s' before fitting.", col)
        excluded[col] = "constant"
    X = X.drop(columns=list(excluded))

    if on_collinear == "drop":
        while True:
            design = X.copy()
            design.insert(0, INTERCEPT, 1.0)
            column = first_dependent_column(design)
            if column is None:
                break
            logger.warning("Excluding collinear column '%s' before fitting.", column)
            excluded[column] = "collinear"
            X = X.drop(columns=[column])
    return X, excluded


def selection_path(  # noqa: C901, PLR0913
    X: pd.DataFrame,
    y: pd.Series,
    *,
    direction: Direction = "backward",
    criterion: Criterion = "aic",
    base_columns: Iterable[str] | None = None,
    threshold: float = 0.0,
    on_collinear: Literal["raise", "drop"] = "raise",
    n_jobs: int | None = None,
) -> SelectionPathResult:
    """Run a greedy selection procedure and return the full path.

    Args:
        X: Encoded predictor columns (no intercept column).
        y: Response aligned with ``X``.
        direction: ``"backward"`` removes columns starting from the full model,
            ``"forward"`` adds columns starting from the intercept-only model,
            ``"both"`` starts from the full model and may also restore a
            previously removed column.
        criterion: ``"aic"`` or ``"bic"`` (lower is better).
        base_columns: Columns that are never removed (nor added, in forward mode
            they are part of the starting model).
        threshold: Minimum criterion improvement required to accept a step.
        on_collinear: Policy for linearly dependent columns, see :func:`prune_design`.
        n_jobs: Parallel workers for evaluating the candidates of one step
            (joblib semantics; ``None`` evaluates sequentially).

    Returns:
        SelectionPathResult containing all accepted steps.

    Raises:
        UnderDeterminedError: If the full design has ``n <= k``.
        RankDeficiencyError: If the full design is singular and
            ``on_collinear="raise"``.

    Notes:
        Criterion values within ``TIE_RTOL`` times ``max(1, |best|)`` of the
        best candidate count as tied, and ties are broken by
        the column order of ``X`` (the earliest column wins). A step must beat
        the current criterion by more than ``threshold`` plus that tolerance.
        Repeated runs therefore return identical paths regardless of
        ``n_jobs`` or rounding noise. The model never shrinks to the intercept
        alone, and backward elimination finishes within ``p - 1`` steps.
    """
    direction = direction.lower()  # type: ignore[assignment]
    criterion = criterion.lower()  # type: ignore[assignment]
    if direction not in {"forward", "backward", "both"}:
        raise ValueError("direction must be one of: forward, backward, both")
    if criterion not in {"aic", "bic"}:
        raise ValueError("criterion must be one of: aic, bic")
    if threshold < 0:
        raise ValueError("threshold must be >= 0")

    X = X.astype(float)
    y = y.astype(float)
    n_obs, n_params = X.shape[0], X.shape[1] + 1
    if n_obs <= n_params:
        raise UnderDeterminedError(
            f"Under-determined system: {n_obs} observations for {n_params} parameters (need n > k).",
        )
    X, excluded = prune_design(X, on_collinear=on_collinear)

    full_design = X.copy()
    full_design.insert(0, INTERCEPT, 1.0)
    check_design(full_design, y)

    order = {col: idx for idx, col in enumerate(X.columns)}
    base = list(dict.fromkeys(base_columns or []))
    unknown = [col for col in base if col not in order]
    if unknown:
        raise KeyError(f"Base columns not in design matrix: {unknown}")

    def ordered(columns: Iterable[str]) -> list[str]:
        return sorted(columns, key=order.__getitem__)

    def fit_subset(columns: list[str]) -> LinearModel:
        return fit_linear_model(X.loc[:, columns], y)

    current = list(X.columns) if direction in {"backward", "both"} else ordered(base)
    current_model = fit_subset(current)
    steps = [
        SelectionStep(
            step=0,
            columns=tuple(current),
            action="start",
            changed=None,
            criterion=current_model.score(criterion),
            model=current_model,
        ),
    ]

    while True:
        moves: list[tuple[Literal["remove", "add"], str, list[str]]] = []
        if direction in {"backward", "both"} and len(current) > 1:
            moves.extend(
                ("remove", col, [c for c in current if c != col]) for col in current if col not in base
            )
        if direction in {"forward", "both"}:
            moves.extend(("add", col, ordered([*current, col])) for col in X.columns if col not in current)
        if not moves:
            break

        models = Parallel(n_jobs=n_jobs, prefer="threads")(delayed(fit_subset)(cols) for _, _, cols in moves)
        scores = np.array([model.score(criterion) for model in models])
        best = scores.min()
        tied = np.isclose(scores, best, rtol=0, atol=_tie_tolerance(best)) if np.isfinite(best) else scores == best
        pick = min(np.flatnonzero(tied), key=lambda idx: order[moves[idx][1]])
        (action, column, columns), model = moves[pick], models[pick]
        score = model.score(criterion)

        current_criterion = steps[-1].criterion
        if not score < current_criterion - threshold - _tie_tolerance(current_criterion):
            break

        logger.info(
            "Step %d: %s '%s' (%s %.3f -> %.3f)",
            len(steps),
            action,
            column,
            criterion,
            steps[-1].criterion,
            score,
        )
        current = columns
        steps.append(
            SelectionStep(
                step=len(steps),
                columns=tuple(columns),
                action=action,
                changed=column,
                criterion=score,
                model=model,
            ),
        )

    return SelectionPathResult(
        steps=steps,
        criterion=criterion,
        direction=direction,
        excluded_columns=excluded,
    )


def backward_elimination(X: pd.DataFrame, y: pd.Series, **kwargs: object) -> SelectionPathResult:
    """Convenience wrapper for backward elimination."""
    return selection_path(X, y, direction="backward", **kwargs)  # type: ignore[arg-type]


def forward_selection(X: pd.DataFrame, y: pd.Series, **kwargs: object) -> SelectionPathResult:
    """Convenience wrapper for forward selection."""
    return selection_path(X, y, direction="forward", **kwargs)  # type: ignore[arg-type]


def stepwise_selection(X: pd.DataFrame, y: pd.Series, **kwargs: object) -> SelectionPathResult:
    """Convenience wrapper for backward elimination with restores (both directions)."""
    return selection_path(X, y, direction="both", **kwargs)  # type: ignore[arg-type]


def eliminate(X: pd.DataFrame, y: pd.Series, **kwargs: object) -> LinearModel:
    """Backward-eliminate columns of ``X`` by AIC and return the final model."""
    return backward_elimination(X, y, **kwargs).final_model


__all__ = [
    "SelectionPathResult",
    "SelectionStep",
    "backward_elimination",
    "compare_models",
    "eliminate",
    "forward_selection",
    "prune_design",
    "selection_path",
    "stepwise_selection",
]
