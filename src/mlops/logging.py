"""
MLflow logging helpers for play-type model runs.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Dict, Optional

import mlflow
import pandas as pd

if TYPE_CHECKING:
    from src.nfl_play_type.utils.metrics import ModelResult


def log_parameters(params: Dict[str, Any], prefix: str = "") -> None:
    """
    Log parameters to MLflow.

    Args:
        params: Dictionary of parameter names and values
        prefix: Optional prefix for parameter names
    """
    if prefix:
        params = {f"{prefix}_{k}": v for k, v in params.items()}
    mlflow.log_params(params)


def log_dataset_info(train: pd.DataFrame, test: pd.DataFrame, label_column: str) -> None:
    """Log split sizes and the feature count as parameters."""
    dataset_params = {
        "train_size": len(train),
        "test_size": len(test),
        "n_features": train.shape[1] - 1,
        "n_classes_train": int(train[label_column].nunique()),
    }
    log_parameters(dataset_params)


def log_evaluation(result: "ModelResult", *, prefix: str = "",
                   artifact_name: Optional[str] = None) -> Dict[str, float]:
    """
    Log one model's hold-out metrics and its confusion matrix.

    Accuracy, fit time and per-class accuracies go to ``mlflow.log_metrics``
    (classes absent from the test set are skipped); the confusion matrix is
    stored as a JSON artifact ``{"predicted": {... "actual": count}}``.

    Returns the dict of metrics actually logged.
    """
    metrics = {k: v for k, v in result.summary().items() if not math.isnan(v)}
    if prefix:
        metrics = {f"{prefix}_{k}": v for k, v in metrics.items()}
    mlflow.log_metrics(metrics)

    confusion = {
        predicted: {actual: int(n) for actual, n in row.items()}
        for predicted, row in result.confusion.iterrows()
    }
    mlflow.log_dict(confusion, artifact_name or f"confusion_matrix_{result.name}.json")
    return metrics
