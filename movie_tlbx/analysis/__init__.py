"""Analysis modules: OLS fitting, model selection, prediction, and rating comparison."""

from .model_selection import (
    SelectionPathResult,
    SelectionStep,
    backward_elimination,
    compare_models,
    eliminate,
    forward_selection,
    selection_path,
    stepwise_selection,
)
from .ols_helper import (
    LinearModel,
    RegressionResult,
    diagnose_ols,
    fit_linear_model,
    information_criterion,
)
from .prediction import PredictionResult, predict, predict_record
from .rating_comparison import RatingComparisonAnalyzer, RatingComparisonResult


fit = fit_linear_model


__all__ = [
    "LinearModel",
    "PredictionResult",
    "RatingComparisonAnalyzer",
    "RatingComparisonResult",
    "RegressionResult",
    "SelectionPathResult",
    "SelectionStep",
    "backward_elimination",
    "compare_models",
    "diagnose_ols",
    "eliminate",
    "fit",
    "fit_linear_model",
    "forward_selection",
    "information_criterion",
    "predict",
    "predict_record",
    "selection_path",
    "stepwise_selection",
]
