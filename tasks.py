# tasks.py  ── invoke ≥2.2
from invoke import task, Context  # type: ignore
from typing import Optional

import json
import logging
import pathlib


BASE_ENV = pathlib.Path(__file__).parent
LOG_FORMAT = "%(asctime)s │ %(levelname)s │ %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _parse_params(params: Optional[str]) -> Optional[dict]:
    """
    Parse a JSON object of per-model overrides, e.g.
    '{"decision_tree": {"max_depth": 5}, "xgboost": {"n_estimators": 100}}'.
    """
    if not params:
        return None
    parsed = json.loads(params)
    if not isinstance(parsed, dict) or not all(isinstance(v, dict) for v in parsed.values()):
        raise ValueError("--params must be a JSON object of {model_name: {param: value}}")
    return parsed


@task(
    help={
        "path": "Plays CSV (default: config.PLAYS_FILE)",
        "params": "JSON per-model hyperparameter overrides",
        "models": "Comma-separated subset of decision_tree,gradient_boosting,xgboost",
        "tune": "Tune each model with Optuna before the final fit",
        "track": "Log parameters, metrics and confusion matrices to MLflow",
        "verbose": "DEBUG-level logging",
    }
)
def run(
    c: Context,
    path: Optional[str] = None,
    params: Optional[str] = None,
    models: Optional[str] = None,
    tune: bool = False,
    track: bool = False,
    verbose: bool = False,
) -> None:
    """Load, clean, engineer, split, fit and evaluate every play-type model."""
    _configure_logging(verbose)
    from src.nfl_play_type.config import config
    from src.nfl_play_type.pipeline import run_pipeline

    config.ensure_directories()
    outcome = run_pipeline(
        path,
        model_params=_parse_params(params),
        models=models.split(",") if models else None,
        tune=tune,
        track=track,
    )

    print(f"\nTrain plays: {outcome.train_size:,} | Test plays: {outcome.test_size:,}")
    print("\n📊 Model comparison:")
    print(outcome.comparison.round(4).to_string())
    for name, res in outcome.results.items():
        print(f"\nConfusion matrix – {name} (rows predicted, columns actual):")
        print(res.confusion.to_string())
    for name, exc in outcome.failures.items():
        print(f"❌ {name} failed: {exc!r}")


@task(help={"path": "Plays CSV (default: config.PLAYS_FILE)"})
def eda(c: Context, path: Optional[str] = None) -> None:
    """Print play-type distribution tables for the cleaned data."""
    _configure_logging(False)
    from src.nfl_play_type.data.loader import PlayDataLoader
    from src.nfl_play_type.data.preprocessor import DataPreprocessor
    from src.nfl_play_type.eda import run_full_eda

    raw = PlayDataLoader().load_plays(path)
    run_full_eda(DataPreprocessor().preprocess_slice(raw))


@task(help={"k": "Only run tests matching this expression", "verbose": "pytest -v"})
def test(c: Context, k: Optional[str] = None, verbose: bool = False) -> None:
    """Run the test-suite with pytest."""
    cmd = "pytest tests"
    if verbose:
        cmd += " -v"
    if k:
        cmd += f" -k {k!r}"
    with c.cd(str(BASE_ENV)):
        c.run(cmd, pty=False)
