"""Tests for the season split on game_id."""
import pandas as pd
import pytest

from src.nfl_play_type.config import config
from src.nfl_play_type.data.splits import season_from_game_id, train_test_split_by_game_id
from src.nfl_play_type.exceptions import SchemaError


@pytest.fixture
def frame():
    return pd.DataFrame({
        "game_id": [2015091300, 2016091100, 2017091000, 2014090700, 2018090900,
                    config.TRAIN_BEFORE_GAME_ID, config.TEST_AFTER_GAME_ID],
        "x": [1, 2, 3, 4, 5, 6, 7],
        "play_type": ["run", "pass", "punt", "field_goal", "run", "pass", "pass"],
    })


def test_partition_with_gap_excluded(frame):
    train, test = train_test_split_by_game_id(frame)

    assert train["x"].tolist() == [1, 4]
    assert test["x"].tolist() == [3, 5]
    # 2016 season and both cut-off ids land in neither set
    assert set(train["x"]).isdisjoint(test["x"])
    assert len(train) + len(test) == len(frame) - 3


def test_id_column_removed_and_order_kept(frame):
    train, test = train_test_split_by_game_id(frame)
    assert "game_id" not in train.columns and "game_id" not in test.columns
    assert list(train.index) == sorted(train.index)


def test_custom_cutoffs(frame):
    train, test = train_test_split_by_game_id(frame, train_before=2017000000,
                                              test_after=2017000000)
    assert train["x"].tolist() == [1, 2, 4, 6]
    assert test["x"].tolist() == [3, 5]


def test_overlapping_cutoffs_rejected(frame):
    with pytest.raises(ValueError):
        train_test_split_by_game_id(frame, train_before=2018000000, test_after=2015000000)


def test_missing_id_column(frame):
    with pytest.raises(SchemaError):
        train_test_split_by_game_id(frame.drop(columns=["game_id"]))


def test_input_not_mutated(frame):
    before = frame.copy()
    train_test_split_by_game_id(frame)
    pd.testing.assert_frame_equal(frame, before)


def test_season_from_game_id(frame):
    assert season_from_game_id(frame["game_id"]).tolist()[:5] == [2015, 2016, 2017, 2014, 2018]
