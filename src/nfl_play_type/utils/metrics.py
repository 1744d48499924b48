"""
Metrics utilities for NFL play-type analysis.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray
from sklearn.metrics import accuracy_score, confusion_matrix

from src.nfl_play_type.config import config
from src.nfl_play_type.utils.label_codec import PLAY_TYPE_CODEC, LabelCodec

if TYPE_CHECKING:
    from src.nfl_play_type.models.adapters import PlayTypeModel

logger = logging.getLogger(__name__)


@dataclass
class ModelResult:
    """Everything one model produced on the hold-out set."""
    name: str
    fit_seconds: float
    predictions: NDArray[np.object_]
    confusion: pd.DataFrame
    accuracy: float
    per_class_accuracy: pd.Series
    probabilities: Optional[NDArray[np.float64]] = None
    params: Dict[str, object] = field(default_factory=dict)

    def summary(self) -> Dict[str, float]:
        """Flat metric dict (accuracy, fit_seconds, acc_<class>)."""
        out: Dict[str, float] = {
            "accuracy": float(self.accuracy),
            "fit_seconds": float(self.fit_seconds),
        }
        for klass, acc in self.per_class_accuracy.items():
            out[f"acc_{klass}"] = float(acc)
        return out


class ModelEvaluator:
    """Confusion matrix and accuracy breakdowns over already-made predictions."""

    def __init__(self, codec: LabelCodec = PLAY_TYPE_CODEC):
        self.codec = codec

    def _codes(self, y_true: Sequence[str], y_pred: Sequence[str]):
        y_true = list(y_true)
        y_pred = list(y_pred)
        if len(y_true) != len(y_pred):
            raise ValueError(
                f"y_true and y_pred must have equal length, got {len(y_true)} and {len(y_pred)}"
            )
        return self.codec.encode(y_true), self.codec.encode(y_pred)

    # ---------- single-metric helpers ----------
    def confusion_matrix(self, y_true: Sequence[str], y_pred: Sequence[str]) -> pd.DataFrame:
        """
        Counts for every (predicted, actual) pair, zero-filled.

        Rows are predicted play types, columns are actual play types, both in
        codec order.
        """
        true_codes, pred_codes = self._codes(y_true, y_pred)
        labels = list(range(self.codec.n_classes))
        if len(true_codes) == 0:
            cm = np.zeros((len(labels), len(labels)), dtype=np.int64)
        else:
            # sklearn puts actual on rows; transpose to predicted x actual
            cm = confusion_matrix(true_codes, pred_codes, labels=labels).T
        names = list(self.codec.classes)
        return pd.DataFrame(
            cm,
            index=pd.Index(names, name="predicted"),
            columns=pd.Index(names, name="actual"),
        )

    @staticmethod
    def accuracy_from_confusion(confusion: pd.DataFrame) -> float:
        """trace / total; NaN for an empty matrix."""
        total = confusion.to_numpy().sum()
        if total == 0:
            return float("nan")
        return float(np.trace(confusion.to_numpy()) / total)

    def calculate_accuracy(self, y_true: Sequence[str], y_pred: Sequence[str]) -> float:
        true_codes, pred_codes = self._codes(y_true, y_pred)
        if len(true_codes) == 0:
            return float("nan")
        return float(accuracy_score(true_codes, pred_codes))

    def per_class_accuracy(self, y_true: Sequence[str], y_pred: Sequence[str]) -> pd.Series:
        """
        Accuracy within the rows whose actual label is each class.
        NaN for classes absent from y_true.
        """
        true_codes, pred_codes = self._codes(y_true, y_pred)
        values = []
        for code in range(self.codec.n_classes):
            mask = true_codes == code
            values.append(float((pred_codes[mask] == code).mean()) if mask.any() else float("nan"))
        return pd.Series(values, index=pd.Index(self.codec.classes, name="actual"),
                         name="accuracy")

    # ---------- public aggregator ----------
    def evaluate(self, name: str, y_true: Sequence[str], y_pred: Sequence[str], *,
                 fit_seconds: float = float("nan"),
                 probabilities: Optional[NDArray[np.float64]] = None,
                 params: Optional[Dict[str, object]] = None) -> ModelResult:
        confusion = self.confusion_matrix(y_true, y_pred)
        return ModelResult(
            name=name,
            fit_seconds=fit_seconds,
            predictions=np.asarray(list(y_pred), dtype=object),
            confusion=confusion,
            accuracy=self.accuracy_from_confusion(confusion),
            per_class_accuracy=self.per_class_accuracy(y_true, y_pred),
            probabilities=probabilities,
            params=dict(params or {}),
        )

    # ---------- comparison helper ----------
    def compare_models(self, results: Dict[str, ModelResult]) -> pd.DataFrame:
        """
        Turn {model: ModelResult} into a tidy table ordered by accuracy.
        """
        desired_cols: List[str] = ["accuracy", "fit_seconds"] + [
            f"acc_{klass}" for klass in self.codec.classes
        ]
        if not results:
            return pd.DataFrame(columns=desired_cols)
        df = pd.DataFrame({name: r.summary() for name, r in results.items()}).T
        for c in desired_cols:
            if c not in df.columns:
                df[c] = np.nan
        return df[desired_cols].sort_values("accuracy", ascending=False)


def timed_fit(model: PlayTypeModel, train: pd.DataFrame,
              label_column: str = config.TARGET_COLUMN) -> float:
    """Fit *model* and return the wall-clock seconds the call took."""
    start = time.perf_counter()
    model.fit(train, label_column)
    return time.perf_counter() - start


def evaluate_model(model: PlayTypeModel, train: pd.DataFrame, test: pd.DataFrame, *,
                   label_column: str = config.TARGET_COLUMN,
                   evaluator: Optional[ModelEvaluator] = None) -> ModelResult:
    """
    fit -> predict -> evaluate for one adapter.

    Errors raised by the adapter's fit or predict propagate unchanged.
    """
    evaluator = evaluator or ModelEvaluator()
    fit_seconds = timed_fit(model, train, label_column)

    probabilities = None
    if hasattr(model, "predict_proba"):
        probabilities = model.predict_proba(test)
        y_pred = evaluator.codec.decode_proba(probabilities)
    else:
        y_pred = model.predict(test)

    params = model.get_params() if hasattr(model, "get_params") else {}
    result = evaluator.evaluate(
        model.name, test[label_column], y_pred,
        fit_seconds=fit_seconds, probabilities=probabilities, params=params,
    )
    logger.info("%s: accuracy %.4f, fit %.2fs", model.name, result.accuracy, fit_seconds)
    return result
