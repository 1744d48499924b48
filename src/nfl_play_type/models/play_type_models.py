"""
Tree-based play-type models: decision tree, gradient boosting and XGBoost.
Each model can be optionally tuned using Bayesian optimization with Optuna.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

import numpy as np
import optuna
import pandas as pd
from numpy.typing import NDArray
from sklearn.model_selection import TimeSeriesSplit

from src.nfl_play_type.config import config
from src.nfl_play_type.models.adapters import MODEL_REGISTRY, EstimatorAdapter, build_model
from src.nfl_play_type.utils.metrics import ModelEvaluator, ModelResult, evaluate_model

logger = logging.getLogger(__name__)

SearchSpace = Callable[[optuna.Trial], Dict[str, Any]]


def _decision_tree_space(trial: optuna.Trial) -> Dict[str, Any]:
    return {
        "max_depth": trial.suggest_int("max_depth", 2, 15),
        "min_samples_leaf": trial.suggest_int("min_samples_leaf", 1, 100, log=True),
        "criterion": trial.suggest_categorical("criterion", ["gini", "entropy"]),
    }


def _gradient_boosting_space(trial: optuna.Trial) -> Dict[str, Any]:
    return {
        "n_estimators": trial.suggest_int("n_estimators", 50, 300),
        "learning_rate": trial.suggest_float("learning_rate", 1e-2, 0.3, log=True),
        "max_depth": trial.suggest_int("max_depth", 2, 6),
        "subsample": trial.suggest_float("subsample", 0.6, 1.0),
    }


def _xgboost_space(trial: optuna.Trial) -> Dict[str, Any]:
    return {
        "max_depth": trial.suggest_int("max_depth", 3, 10),
        "learning_rate": trial.suggest_float("learning_rate", 1e-3, 0.3, log=True),
        "n_estimators": trial.suggest_int("n_estimators", 50, 400),
        "min_child_weight": trial.suggest_int("min_child_weight", 1, 7),
        "subsample": trial.suggest_float("subsample", 0.6, 1.0),
        "colsample_bytree": trial.suggest_float("colsample_bytree", 0.6, 1.0),
        "gamma": trial.suggest_float("gamma", 0.0, 5.0),
        "reg_alpha": trial.suggest_float("reg_alpha", 1e-8, 1.0, log=True),
        "reg_lambda": trial.suggest_float("reg_lambda", 1e-3, 10.0, log=True),
    }


SEARCH_SPACES: Dict[str, SearchSpace] = {
    "decision_tree": _decision_tree_space,
    "gradient_boosting": _gradient_boosting_space,
    "xgboost": _xgboost_space,
}


class PlayTypeModelSuite:
    def __init__(self, *, model_params: Optional[Dict[str, Dict[str, Any]]] = None,
                 label_column: str = config.TARGET_COLUMN):
        """
        Args:
            model_params: per-model hyperparameter overrides, merged over
                config.MODEL_PARAMS and passed straight to the estimator
            label_column: name of the play-type column in train/test frames
        """
        self.model_params: Dict[str, Dict[str, Any]] = {
            name: dict(params) for name, params in (model_params or {}).items()
        }
        unknown = set(self.model_params) - set(MODEL_REGISTRY)
        if unknown:
            raise ValueError(f"Unknown model(s) in model_params: {sorted(unknown)}")

        self.label_column = label_column
        self.evaluator = ModelEvaluator()
        self._tss = TimeSeriesSplit(n_splits=config.CV_SPLITS)

        self.fitted_models: Dict[str, EstimatorAdapter] = {}
        self.results: Dict[str, ModelResult] = {}
        self.failures: Dict[str, BaseException] = {}
        self.best_params: Dict[str, Dict[str, Any]] = {}

    # ------------------------------------------------------------------
    # Tuning
    # ------------------------------------------------------------------
    def _cv_accuracy(self, name: str, params: Dict[str, Any], train: pd.DataFrame) -> float:
        """Mean hold-out accuracy over time-ordered folds of the training frame."""
        scores = []
        for tr_idx, va_idx in self._tss.split(train):
            fold_train, fold_valid = train.iloc[tr_idx], train.iloc[va_idx]
            model = build_model(name, **params).fit(fold_train, self.label_column)
            y_pred = model.predict(fold_valid)
            scores.append(self.evaluator.calculate_accuracy(fold_valid[self.label_column], y_pred))
        return float(np.nanmean(scores))

    def tune_model(self, name: str, train: pd.DataFrame,
                   n_trials: Optional[int] = None) -> Dict[str, Any]:
        """Bayesian-optimize one model's hyperparameters; returns the best set."""
        if name not in SEARCH_SPACES:
            raise ValueError(f"No search space for model '{name}'")
        n_trials = n_trials or config.OPTUNA_TRIALS[name]
        space = SEARCH_SPACES[name]
        fixed = self.model_params.get(name, {})

        def objective(trial: optuna.Trial) -> float:
            params = {**fixed, **space(trial)}
            return self._cv_accuracy(name, params, train)

        optuna.logging.set_verbosity(optuna.logging.WARNING)
        study = optuna.create_study(
            direction="maximize",
            sampler=optuna.samplers.TPESampler(seed=config.RANDOM_STATE),
        )
        study.optimize(objective, n_trials=n_trials, show_progress_bar=False)

        best = {**fixed, **study.best_params}
        logger.info("Tuned %s over %d trials: cv accuracy %.4f, params %s",
                    name, n_trials, study.best_value, best)
        self.best_params[name] = best
        return best

    # ------------------------------------------------------------------
    # Fit / evaluate
    # ------------------------------------------------------------------
    def build(self, name: str) -> EstimatorAdapter:
        params = self.best_params.get(name, self.model_params.get(name, {}))
        return build_model(name, **params)

    def fit_all_models(self, train: pd.DataFrame, test: pd.DataFrame, *,
                       models: Optional[Iterable[str]] = None,
                       tune: bool = False) -> Dict[str, ModelResult]:
        """
        Fit and evaluate each model in turn on the same train/test frames.

        A model whose tuning, fit or predict raises is logged and recorded in
        ``self.failures``; the remaining models still run.
        """
        names = list(models) if models is not None else list(MODEL_REGISTRY)
        for name in names:
            try:
                if tune:
                    self.tune_model(name, train)
                model = self.build(name)
                result = evaluate_model(model, train, test,
                                        label_column=self.label_column,
                                        evaluator=self.evaluator)
            except Exception as exc:
                logger.exception("Model %s failed; continuing with the rest", name)
                self.failures[name] = exc
                continue
            self.fitted_models[name] = model
            self.results[name] = result
        return self.results

    def predict(self, model_name: str, data: pd.DataFrame) -> NDArray[np.object_]:
        """Predicted play types from any fitted model in the suite."""
        if model_name not in self.fitted_models:
            raise ValueError(f"Model {model_name} not fitted")
        return self.fitted_models[model_name].predict(data)

    def get_feature_importance(self, model_name: str) -> Optional[pd.Series]:
        """Feature importances of a fitted model, largest first."""
        if model_name not in self.fitted_models:
            return None
        return self.fitted_models[model_name].feature_importances()

    def compare_models(self) -> pd.DataFrame:
        return self.evaluator.compare_models(self.results)

    def confusion_matrices(self) -> Dict[str, pd.DataFrame]:
        return {name: r.confusion for name, r in self.results.items()}

    def summary(self) -> Tuple[pd.DataFrame, Dict[str, str]]:
        """Comparison table plus a name -> error message map of failed models."""
        return self.compare_models(), {n: repr(e) for n, e in self.failures.items()}
