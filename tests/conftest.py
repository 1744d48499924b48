import os
import sys
from pathlib import Path

import pandas as pd
import pytest

# Make the repo root importable so ``src.nfl_play_type`` resolves
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from tests.play_factory import make_plays, write_plays_csv


@pytest.fixture
def plays_df() -> pd.DataFrame:
    return make_plays()


@pytest.fixture
def plays_csv(tmp_path, plays_df) -> Path:
    return write_plays_csv(plays_df, tmp_path / "plays.csv")


@pytest.fixture
def clean_plays(plays_df) -> pd.DataFrame:
    from src.nfl_play_type.data.preprocessor import DataPreprocessor
    return DataPreprocessor().preprocess_slice(plays_df)


@pytest.fixture
def split_frames(clean_plays):
    """(train, test) engineered frames from the default synthetic seasons."""
    from src.nfl_play_type.data.feature_engineering import FeatureEngineer
    from src.nfl_play_type.data.splits import train_test_split_by_game_id
    return train_test_split_by_game_id(FeatureEngineer().create_all_features(clean_plays))
