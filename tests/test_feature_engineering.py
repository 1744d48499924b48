"""Tests for bucketing and dummy encoding."""
import numpy as np
import pandas as pd
import pytest

from src.nfl_play_type.data.feature_engineering import (
    FeatureEngineer,
    bucket_score_differential,
    bucket_ydstogo,
    encode_dummies,
)
from src.nfl_play_type.exceptions import DomainError, SchemaError


@pytest.mark.parametrize("ydstogo, bucket", [
    (1, "short"), (4, "short"), (5, "med"), (7, "med"), (8, "long"), (25, "long"),
])
def test_ydstogo_bucket_boundaries(ydstogo, bucket):
    assert bucket_ydstogo(pd.Series([ydstogo])).iloc[0] == bucket


@pytest.mark.parametrize("diff, bucket", [
    (-8, "down_big"), (-7, "down_score"), (-1, "down_score"), (0, "tied"),
    (1, "up_score"), (7, "up_score"), (8, "up_big"),
])
def test_score_bucket_boundaries(diff, bucket):
    assert bucket_score_differential(pd.Series([diff])).iloc[0] == bucket


def test_fractional_values_are_covered():
    assert bucket_ydstogo(pd.Series([4.5, 7.5])).tolist() == ["med", "med"]
    assert bucket_score_differential(pd.Series([-0.5, 7.5])).tolist() == ["down_score", "up_big"]


def test_bucket_keeps_index_and_name():
    s = pd.Series([3, 10], index=[17, 42])
    out = bucket_ydstogo(s)
    assert list(out.index) == [17, 42]
    assert out.name == "ydstogo_bucket"
    assert bucket_score_differential(s).name == "score_bucket"


@pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
def test_uncovered_value_raises_domain_error(bad):
    with pytest.raises(DomainError) as excinfo:
        bucket_ydstogo(pd.Series([3.0, bad]))
    assert excinfo.value.field == "ydstogo"
    assert len(excinfo.value.values) == 1


def test_encode_dummies_drops_reference_level():
    dummies = encode_dummies(pd.Series([1, 2, 3, 4, 2]), (1, 2, 3, 4), "down")

    assert list(dummies.columns) == ["down_2", "down_3", "down_4"]
    assert dummies.iloc[0].sum() == 0          # reference level: all zeros
    assert dummies.sum(axis=1).max() == 1


def test_encode_dummies_fixed_width_for_unseen_levels():
    dummies = encode_dummies(pd.Series(["short", "short"]), ("short", "med", "long"), "ydstogo_bucket")
    assert list(dummies.columns) == ["ydstogo_bucket_med", "ydstogo_bucket_long"]
    assert dummies.to_numpy().sum() == 0


def test_encode_dummies_rejects_unknown_level():
    with pytest.raises(DomainError):
        encode_dummies(pd.Series([1, 5]), (1, 2, 3, 4), "down")


class TestFeatureEngineer:
    def test_indicator_columns(self):
        cols = FeatureEngineer.indicator_columns()
        # (4-1) + (3-1) + (5-1)
        assert len(cols) == 9
        assert "down_1" not in cols
        assert "ydstogo_bucket_short" not in cols
        assert "score_bucket_down_big" not in cols

    def test_create_all_features(self, clean_plays):
        engineer = FeatureEngineer()
        out = engineer.create_all_features(clean_plays)

        assert out.columns[0] == "game_id"
        assert out.columns[-1] == "play_type"
        assert "ydstogo" not in out.columns
        assert "score_differential" not in out.columns
        assert "down" not in out.columns
        assert len(out) == len(clean_plays)

        for field, levels in FeatureEngineer.ENCODED_FIELDS.items():
            block = out[[c for c in out.columns if c.startswith(f"{field}_")]]
            assert block.shape[1] == len(levels) - 1
            assert block.isin([0, 1]).all().all()
            assert block.sum(axis=1).max() <= 1

    def test_keep_raw_continuous(self, clean_plays):
        out = FeatureEngineer(keep_raw_continuous=True).create_all_features(clean_plays)
        assert {"ydstogo", "score_differential"} <= set(out.columns)

    def test_input_not_mutated(self, clean_plays):
        before = clean_plays.copy()
        FeatureEngineer().create_all_features(clean_plays)
        pd.testing.assert_frame_equal(clean_plays, before)

    def test_missing_field(self, clean_plays):
        with pytest.raises(SchemaError):
            FeatureEngineer().create_all_features(clean_plays.drop(columns=["ydstogo"]))

    def test_schema_matches_output(self, clean_plays):
        engineer = FeatureEngineer()
        out = engineer.create_all_features(clean_plays)
        schema = engineer.build_schema(out)
        schema.assert_in_dataframe(out)
        assert list(out.columns[1:-1]) == schema.model_features
