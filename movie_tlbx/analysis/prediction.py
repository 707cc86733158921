"""Point predictions and interval estimates from a fitted :class:`LinearModel`."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

import pandas as pd

from movie_tlbx.errors import MissingValueError

from .ols_helper import INTERCEPT, LinearModel


if TYPE_CHECKING:
    from movie_tlbx.data.encoding import FeatureEncoding


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PredictionResult:
    """Point prediction with an interval estimate.

    ``exceeds_bounds`` reports when the interval leaves the known range of the
    response (e.g. a 0-100 score). The interval itself is never clipped.
    """

    point: float
    lower: float
    upper: float
    level: float
    interval: str
    se_fit: float
    """Standard error of the estimated mean response at this point."""
    bounds: tuple[float, float] | None = None

    @property
    def exceeds_bounds(self) -> bool:
        if self.bounds is None:
            return False
        low, high = self.bounds
        return self.lower < low or self.upper > high

    def as_tuple(self) -> tuple[float, float, float]:
        """``(point, lower, upper)``."""
        return self.point, self.lower, self.upper

    def __repr__(self) -> str:
        flag = " [exceeds bounds]" if self.exceeds_bounds else ""
        return (
            f"PredictionResult(point={self.point:.3f}, "
            f"{self.interval} {self.level:.0%}=[{self.lower:.3f}, {self.upper:.3f}]{flag})"
        )


def _exog_row(model: LinearModel, row: Mapping[str, object] | pd.Series) -> pd.DataFrame:
    values: dict[str, float] = {}
    for col in model.columns:
        if col == INTERCEPT:
            values[col] = 1.0
            continue
        if col not in row or pd.isna(row[col]):
            raise MissingValueError(f"Prediction row is missing model column '{col}'.", column=col)
        values[col] = float(row[col])  # type: ignore[arg-type]
    return pd.DataFrame([values], columns=list(model.columns))


def predict(
    model: LinearModel,
    row: Mapping[str, object] | pd.Series,
    *,
    level: float = 0.95,
    bounds: tuple[float, float] | None = (0.0, 100.0),
    interval: Literal["prediction", "confidence"] = "prediction",
) -> PredictionResult:
    r"""Predict the response for one encoded row.

    The point estimate is :math:`\hat{y} = x^\top \hat{\beta}`. The
    prediction interval uses the residual variance and the leverage of ``x``:
    :math:`\hat{y} \pm t_{n-k} \hat{\sigma}\sqrt{1 + x^\top (X^\top X)^{-1} x}`;
    ``interval="confidence"`` drops the ``1 +`` term (interval for the mean).

    Args:
        model: Fitted model.
        row: Encoded values for every non-intercept model column; other keys are ignored.
        level: Confidence level of the interval.
        bounds: Known physical range of the response, used only for flagging.
        interval: ``"prediction"`` (new observation) or ``"confidence"`` (mean response).

    Raises:
        MissingValueError: If ``row`` lacks a model column (no imputation).
    """
    if not 0 < level < 1:
        raise ValueError("level must be in (0, 1)")
    if interval not in {"prediction", "confidence"}:
        raise ValueError("interval must be one of: prediction, confidence")

    exog = _exog_row(model, row)
    frame = model.results.get_prediction(exog).summary_frame(alpha=1.0 - level)
    prefix = "obs_ci" if interval == "prediction" else "mean_ci"
    result = PredictionResult(
        point=float(frame["mean"].iloc[0]),
        lower=float(frame[f"{prefix}_lower"].iloc[0]),
        upper=float(frame[f"{prefix}_upper"].iloc[0]),
        level=level,
        interval=interval,
        se_fit=float(frame["mean_se"].iloc[0]),
        bounds=bounds,
    )
    if result.exceeds_bounds:
        logger.warning("%s interval [%.2f, %.2f] exceeds response bounds %s", interval, result.lower, result.upper, bounds)
    return result


def predict_record(
    model: LinearModel,
    encoding: FeatureEncoding,
    record: Mapping[str, object],
    **kwargs: object,
) -> PredictionResult:
    """Encode a raw record with the training encoding, then :func:`predict`.

    Raises:
        MissingValueError: If the record lacks a feature value.
        InvalidEncodingError: If a categorical level was not seen in training.
    """
    return predict(model, encoding.encode(record), **kwargs)  # type: ignore[arg-type]


__all__ = ["PredictionResult", "predict", "predict_record"]
