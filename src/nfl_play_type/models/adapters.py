"""
Model adapters for play-type classification.

Each adapter wraps one external estimator behind the same contract:

    model.fit(train_df, label_column) -> model
    model.predict(test_df)            -> array of play-type names
    model.predict_proba(test_df)      -> (n, 4) matrix in codec order

so the evaluation harness never needs to know which algorithm it is scoring.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Type, runtime_checkable

import numpy as np
import pandas as pd
import xgboost as xgb
from numpy.typing import NDArray
from sklearn.ensemble import GradientBoostingClassifier
from sklearn.tree import DecisionTreeClassifier

from src.nfl_play_type.config import config
from src.nfl_play_type.data.feature_schema import require_columns
from src.nfl_play_type.exceptions import ModelNotFittedError
from src.nfl_play_type.utils.label_codec import PLAY_TYPE_CODEC, LabelCodec

logger = logging.getLogger(__name__)


@runtime_checkable
class PlayTypeModel(Protocol):
    """Anything the evaluator can score."""
    name: str

    def fit(self, train: pd.DataFrame, label_column: str = ...) -> "PlayTypeModel": ...

    def predict(self, test: pd.DataFrame) -> NDArray[np.object_]: ...


class EstimatorAdapter:
    """
    Shared fit/predict plumbing around a scikit-learn compatible classifier.

    Labels are integer-coded through the shared LabelCodec. Classes absent from
    the training frame are remapped to a contiguous range for the estimator and
    restored as zero-probability columns on the way out.
    """

    name: str = "estimator"

    def __init__(self, codec: LabelCodec = PLAY_TYPE_CODEC,
                 random_state: Optional[int] = None, **params: Any):
        self.codec = codec
        self.random_state = config.RANDOM_STATE if random_state is None else random_state
        self.params: Dict[str, Any] = {**config.MODEL_PARAMS.get(self.name, {}), **params}
        self.estimator_: Any = None
        self.feature_names_: List[str] = []
        self.seen_codes_: NDArray[np.int64] = np.array([], dtype=np.int64)
        self.constant_code_: Optional[int] = None

    def _make_estimator(self) -> Any:
        raise NotImplementedError

    def get_params(self) -> Dict[str, Any]:
        """Hyperparameters this adapter passes to its estimator."""
        return {**self.params, "random_state": self.random_state}

    # ---------- contract ----------
    def fit(self, train: pd.DataFrame, label_column: str = config.TARGET_COLUMN) -> "EstimatorAdapter":
        require_columns(train, [label_column], where=f"{self.name} training data")
        X = train.drop(columns=[label_column])
        y = self.codec.encode(train[label_column])

        self.seen_codes_ = np.unique(y)
        y_local = np.searchsorted(self.seen_codes_, y)

        self.feature_names_ = list(X.columns)
        self.estimator_ = None
        self.constant_code_ = None
        if len(self.seen_codes_) == 1:
            # one class: nothing to learn, every prediction is that class
            self.constant_code_ = int(self.seen_codes_[0])
            logger.warning("%s saw only '%s' in training; predicting it for every row",
                           self.name, self.codec.classes[self.constant_code_])
            return self

        self.estimator_ = self._make_estimator()
        self.estimator_.fit(X.to_numpy(dtype=float), y_local)
        return self

    def _check_fitted(self) -> None:
        if self.estimator_ is None and self.constant_code_ is None:
            raise ModelNotFittedError(f"Model '{self.name}' must be fitted before prediction")

    def predict_proba(self, test: pd.DataFrame) -> NDArray[np.float64]:
        self._check_fitted()
        require_columns(test, self.feature_names_, where=f"{self.name} prediction data")

        proba = np.zeros((len(test), self.codec.n_classes), dtype=float)
        if self.constant_code_ is not None:
            proba[:, self.constant_code_] = 1.0
            return proba

        X = test[self.feature_names_].to_numpy(dtype=float)
        local = np.asarray(self.estimator_.predict_proba(X), dtype=float)
        if local.shape[1] != len(self.seen_codes_):
            raise ValueError(
                f"{self.name} returned {local.shape[1]} probability columns for "
                f"{len(self.seen_codes_)} training classes"
            )
        proba[:, self.seen_codes_] = local
        return proba

    def predict(self, test: pd.DataFrame) -> NDArray[np.object_]:
        return self.codec.decode_proba(self.predict_proba(test))

    def feature_importances(self) -> pd.Series:
        """Impurity/gain importances, largest first (all zero for a one-class fit)."""
        self._check_fitted()
        if self.estimator_ is None:
            importances = np.zeros(len(self.feature_names_))
        else:
            importances = np.asarray(self.estimator_.feature_importances_, dtype=float)
        return (pd.Series(importances, index=self.feature_names_, name=self.name)
                .sort_values(ascending=False))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_params()})"


class DecisionTreeModel(EstimatorAdapter):
    """Single CART tree."""
    name = "decision_tree"

    def _make_estimator(self) -> DecisionTreeClassifier:
        return DecisionTreeClassifier(**self.params, random_state=self.random_state)


class GradientBoostingModel(EstimatorAdapter):
    """Standard gradient boosting (scikit-learn)."""
    name = "gradient_boosting"

    def _make_estimator(self) -> GradientBoostingClassifier:
        return GradientBoostingClassifier(**self.params, random_state=self.random_state)


class XGBoostModel(EstimatorAdapter):
    """Extreme gradient boosting (XGBoost)."""
    name = "xgboost"

    def _make_estimator(self) -> xgb.XGBClassifier:
        return xgb.XGBClassifier(**self.params, random_state=self.random_state)


MODEL_REGISTRY: Dict[str, Type[EstimatorAdapter]] = {
    DecisionTreeModel.name: DecisionTreeModel,
    GradientBoostingModel.name: GradientBoostingModel,
    XGBoostModel.name: XGBoostModel,
}


def build_model(name: str, **params: Any) -> EstimatorAdapter:
    """Instantiate a registered adapter; params override config.MODEL_PARAMS."""
    if name not in MODEL_REGISTRY:
        raise ValueError(f"Unknown model '{name}'. Available: {sorted(MODEL_REGISTRY)}")
    return MODEL_REGISTRY[name](**params)
