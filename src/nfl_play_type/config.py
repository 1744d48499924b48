"""
Configuration module for the NFL play-type package.
Contains all constants, paths, and configuration parameters.
"""
from pathlib import Path
from typing import Any, Dict, List, Tuple


class Config:
    """Main configuration class for the NFL play-type package."""
    MLFLOW_EXPERIMENT_NAME = "nfl_play_type"
    TRACK_WITH_MLFLOW = False

    # Base paths - resolved relative to the repo root so notebooks and tasks agree
    _CONFIG_DIR = Path(__file__).parent.parent.parent
    PROJECT_ROOT = _CONFIG_DIR.resolve()

    DATA_DIR = PROJECT_ROOT / "data"
    RAW_DATA_DIR = DATA_DIR / "raw"
    OUTPUT_DIR = PROJECT_ROOT / "output"

    # Raw data files
    PLAYS_FILE = RAW_DATA_DIR / "nfl_plays_truncated.csv"
    CSV_ENCODING = "utf-8-sig"  # tolerates a leading byte-order marker

    # ─── Columns ─────────────────────────────────────────────────
    GAME_ID_COLUMN = "game_id"
    TARGET_COLUMN = "play_type"
    REQUIRED_COLUMNS: Tuple[str, ...] = (
        "game_id",
        "play_type",
        "half_seconds_remaining",
        "down",
        "ydstogo",
        "yardline_100",
        "score_differential",
        "posteam_timeouts_remaining",
    )

    # Fixed label order shared by every model and the evaluator
    PLAY_TYPES: Tuple[str, ...] = ("run", "pass", "field_goal", "punt")

    # ─── Season boundaries (game_id = YYYYMMDDNN) ────────────────
    MIN_GAME_ID = 2013000000          # rows must have game_id strictly above this
    TRAIN_BEFORE_GAME_ID = 2016000000  # train: game_id < this
    TEST_AFTER_GAME_ID = 2017000000    # test:  game_id > this (2016 is left out)
    GAME_ID_SEASON_DIVISOR = 1_000_000

    # ─── Bucket thresholds ───────────────────────────────────────
    # ydstogo: short <= 4 < med < 8 <= long
    YDSTOGO_SHORT_MAX = 4
    YDSTOGO_LONG_MIN = 8
    # score_differential: down_big < -7 <= down_score < 0 == tied < up_score <= 7 < up_big
    SCORE_BIG_MARGIN = 7

    YDSTOGO_BUCKETS: Tuple[str, ...] = ("short", "med", "long")
    SCORE_BUCKETS: Tuple[str, ...] = ("down_big", "down_score", "tied", "up_score", "up_big")
    DOWN_LEVELS: Tuple[int, ...] = (1, 2, 3, 4)

    # ─── Model parameters ────────────────────────────────────────
    RANDOM_STATE = 42

    MODEL_PARAMS: Dict[str, Dict[str, Any]] = {
        "decision_tree": {
            "max_depth": 8,
            "min_samples_leaf": 20,
        },
        "gradient_boosting": {
            "n_estimators": 150,
            "learning_rate": 0.1,
            "max_depth": 3,
            "subsample": 0.8,
        },
        "xgboost": {
            "n_estimators": 300,
            "learning_rate": 0.1,
            "max_depth": 6,
            "min_child_weight": 1,
            "gamma": 0.0,
            "reg_alpha": 0.0,
            "reg_lambda": 1.0,
            "subsample": 0.8,
            "colsample_bytree": 0.8,
        },
    }

    # How many Optuna trials for each model when tuning is requested
    OPTUNA_TRIALS: Dict[str, int] = {
        "decision_tree": 30,
        "gradient_boosting": 20,
        "xgboost": 20,
    }
    CV_SPLITS = 3

    @classmethod
    def ensure_directories(cls):
        """Create all required directories if they don't exist."""
        for dir_path in [cls.RAW_DATA_DIR, cls.OUTPUT_DIR]:
            dir_path.mkdir(parents=True, exist_ok=True)


# Create global config instance
config = Config()

# ───────────────────────── Feature catalogue ─────────────────────────
# Column roles after feature engineering; dummy columns are listed by the
# FeatureEngineer itself since they depend on the level catalogue above.
FEATURE_LISTS: Dict[str, List[str]] = {
    "numerical": [
        "half_seconds_remaining",
        "yardline_100",
        "posteam_timeouts_remaining",
    ],
    "nominal": ["down", "ydstogo_bucket", "score_bucket"],
    "y_variable": ["play_type"],
}

config.FEATURE_LISTS = FEATURE_LISTS

if __name__ == "__main__":
    print("NFL Play-Type Configuration")
    print("=" * 40)
    print(f"Data directory: {config.DATA_DIR}")
    print(f"Plays file: {config.PLAYS_FILE}")
    print(f"Play types: {config.PLAY_TYPES}")
    print(f"Train before game_id: {config.TRAIN_BEFORE_GAME_ID}")
    print(f"Test after game_id: {config.TEST_AFTER_GAME_ID}")
