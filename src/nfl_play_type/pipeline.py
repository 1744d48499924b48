"""
End-to-end play-type pipeline: load → clean → engineer → split → fit/evaluate.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import mlflow
import pandas as pd

from src.mlops.config import PIPELINE_RUN_NAME
from src.mlops.experiment_utils import setup_mlflow_experiment
from src.mlops.logging import log_dataset_info, log_evaluation, log_parameters
from src.nfl_play_type.config import config
from src.nfl_play_type.data.feature_engineering import FeatureEngineer
from src.nfl_play_type.data.loader import PlayDataLoader
from src.nfl_play_type.data.preprocessor import DataPreprocessor
from src.nfl_play_type.data.splits import train_test_split_by_game_id
from src.nfl_play_type.models.play_type_models import PlayTypeModelSuite
from src.nfl_play_type.utils.metrics import ModelResult

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """What one pipeline run produced."""
    train_size: int
    test_size: int
    results: Dict[str, ModelResult]
    failures: Dict[str, BaseException]
    comparison: pd.DataFrame
    feature_columns: list = field(default_factory=list)

    def confusion(self, model_name: str) -> pd.DataFrame:
        return self.results[model_name].confusion


def prepare_frames(raw: pd.DataFrame, *, preprocessor: Optional[DataPreprocessor] = None,
                   engineer: Optional[FeatureEngineer] = None):
    """Clean + engineer + split a raw play frame; returns (train, test)."""
    preprocessor = preprocessor or DataPreprocessor()
    engineer = engineer or FeatureEngineer()

    clean = preprocessor.preprocess_slice(raw)
    summary = preprocessor.get_preprocessing_summary(raw, clean)
    logger.info("Preprocessing kept %d of %d rows", summary["final_size"], summary["original_size"])

    features = engineer.create_all_features(clean)
    return train_test_split_by_game_id(features)


def _log_to_mlflow(result: PipelineResult, train: pd.DataFrame, test: pd.DataFrame,
                   tracking_uri: Optional[str]) -> None:
    setup_mlflow_experiment(config.MLFLOW_EXPERIMENT_NAME, tracking_uri=tracking_uri)
    with mlflow.start_run(run_name=PIPELINE_RUN_NAME):
        log_dataset_info(train, test, config.TARGET_COLUMN)
        for name, model_result in result.results.items():
            with mlflow.start_run(run_name=name, nested=True):
                log_parameters(model_result.params)
                log_evaluation(model_result)
        if result.failures:
            mlflow.set_tag("failed_models", ",".join(sorted(result.failures)))


def run_pipeline(
    path: Optional[Union[str, Path]] = None,
    *,
    model_params: Optional[Dict[str, Dict[str, Any]]] = None,
    models: Optional[Iterable[str]] = None,
    tune: bool = False,
    track: Optional[bool] = None,
    tracking_uri: Optional[str] = None,
) -> PipelineResult:
    """
    Run the whole pipeline on the plays CSV at *path* (default: config.PLAYS_FILE).

    Schema and bucketing errors abort the run before any model is fit. A model
    that fails during fit or predict is listed in ``failures`` and has no entry
    in ``results``; the others are still evaluated.
    """
    track = config.TRACK_WITH_MLFLOW if track is None else track

    raw = PlayDataLoader().load_plays(path)
    train, test = prepare_frames(raw)

    suite = PlayTypeModelSuite(model_params=model_params)
    suite.fit_all_models(train, test, models=models, tune=tune)

    result = PipelineResult(
        train_size=len(train),
        test_size=len(test),
        results=dict(suite.results),
        failures=dict(suite.failures),
        comparison=suite.compare_models(),
        feature_columns=[c for c in train.columns if c != config.TARGET_COLUMN],
    )
    if result.failures:
        logger.warning("%d model(s) failed: %s", len(result.failures), sorted(result.failures))

    if track:
        _log_to_mlflow(result, train, test, tracking_uri)
    return result


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s │ %(levelname)s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    config.ensure_directories()

    outcome = run_pipeline()
    print(f"\nTrain plays: {outcome.train_size:,} | Test plays: {outcome.test_size:,}")
    print("\n📊 Model comparison:")
    print(outcome.comparison.round(4).to_string())
    for name, res in outcome.results.items():
        print(f"\nConfusion matrix – {name} (rows predicted, columns actual):")
        print(res.confusion.to_string())

    out_path = config.OUTPUT_DIR / "model_comparison.csv"
    outcome.comparison.to_csv(out_path)
    print(f"\n✅ Saved comparison to {out_path}")
