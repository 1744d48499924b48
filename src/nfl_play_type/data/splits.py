from __future__ import annotations

import logging
from typing import Optional, Tuple, cast

import pandas as pd

from src.nfl_play_type.config import config
from src.nfl_play_type.data.feature_schema import require_columns

logger = logging.getLogger(__name__)


def season_from_game_id(game_id: pd.Series) -> pd.Series:
    """First four digits of a YYYYMMDDNN game_id."""
    return (game_id // config.GAME_ID_SEASON_DIVISOR).astype("int64")


def train_test_split_by_game_id(
    df: pd.DataFrame,
    *,
    train_before: Optional[int] = None,
    test_after: Optional[int] = None,
    id_column: str = config.GAME_ID_COLUMN,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Leakage-free season split on the season-encoding game identifier.

    Parameters
    ----------
    df : engineered DataFrame with a game_id column
    train_before : rows with game_id strictly below this go to train
    test_after   : rows with game_id strictly above this go to test

    Rows with ``train_before <= game_id <= test_after`` land in neither set.
    Both frames keep the input row order and have the id column removed.

    Raises
    ------
    SchemaError if the id column is missing, ValueError if test_after < train_before.
    """
    require_columns(df, [id_column], where="train_test_split_by_game_id")

    train_before = config.TRAIN_BEFORE_GAME_ID if train_before is None else int(train_before)
    test_after = config.TEST_AFTER_GAME_ID if test_after is None else int(test_after)
    if test_after < train_before:
        raise ValueError(
            f"test_after ({test_after}) must not be below train_before ({train_before}); "
            "the train and test ranges would overlap."
        )

    ids = df[id_column]
    train = cast(pd.DataFrame, df[ids < train_before].drop(columns=[id_column]))
    test = cast(pd.DataFrame, df[ids > test_after].drop(columns=[id_column]))

    skipped = len(df) - len(train) - len(test)
    logger.info("Train: %d plays (game_id < %d) | Test: %d plays (game_id > %d) | skipped %d",
                len(train), train_before, len(test), test_after, skipped)
    return train, test
