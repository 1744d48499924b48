"""End-to-end tests for run_pipeline."""
import pandas as pd
import pytest

from src.nfl_play_type.exceptions import SchemaError
from src.nfl_play_type.pipeline import run_pipeline
from tests.play_factory import make_plays, write_plays_csv

SMALL_PARAMS = {
    "decision_tree": {"max_depth": 4},
    "gradient_boosting": {"n_estimators": 20, "max_depth": 2},
    "xgboost": {"n_estimators": 20, "max_depth": 3},
}


def test_run_pipeline(plays_csv):
    result = run_pipeline(plays_csv, model_params=SMALL_PARAMS)

    # 2013-2015 train, 2017-2018 test, 2016 left out
    assert result.train_size == 360
    assert result.test_size == 240
    assert set(result.results) == {"decision_tree", "gradient_boosting", "xgboost"}
    assert result.failures == {}

    for name, model_result in result.results.items():
        cm = result.confusion(name)
        assert cm.to_numpy().sum() == result.test_size
        assert model_result.accuracy == pytest.approx(
            cm.to_numpy().trace() / result.test_size)

    assert list(result.comparison.index)[0] in result.results
    assert "game_id" not in result.feature_columns
    assert "play_type" not in result.feature_columns


def test_run_pipeline_subset_of_models(plays_csv):
    result = run_pipeline(plays_csv, model_params=SMALL_PARAMS, models=["decision_tree"])
    assert list(result.results) == ["decision_tree"]
    assert len(result.comparison) == 1


def test_schema_error_before_any_fit(tmp_path):
    path = tmp_path / "plays.csv"
    make_plays(plays_per_season=5).drop(columns=["score_differential"]).to_csv(path, index=False)
    with pytest.raises(SchemaError):
        run_pipeline(path)


def test_dirty_rows_are_filtered(tmp_path):
    plays = make_plays()
    plays.loc[0, "play_type"] = "qb_kneel"
    plays.loc[1, "ydstogo"] = None
    plays.loc[2, "game_id"] = 2012091500
    result = run_pipeline(write_plays_csv(plays, tmp_path / "plays.csv"),
                          model_params=SMALL_PARAMS, models=["decision_tree"])
    # rows 0-2 belong to the 2013 training season
    assert result.train_size == 357


def test_tracking_logs_to_mlflow(plays_csv, tmp_path):
    import mlflow

    uri = f"file:{tmp_path / 'mlruns'}"
    result = run_pipeline(plays_csv, model_params=SMALL_PARAMS,
                          models=["decision_tree"], track=True, tracking_uri=uri)

    runs = mlflow.search_runs(experiment_names=["nfl_play_type"])
    assert len(runs) == 2   # pipeline parent + one model
    child = runs[runs["tags.mlflow.runName"] == "decision_tree"].iloc[0]
    assert child["metrics.accuracy"] == pytest.approx(result.results["decision_tree"].accuracy)
