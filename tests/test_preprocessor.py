"""
Unit tests for DataPreprocessor module.
"""
import unittest
import numpy as np
import pandas as pd
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.nfl_play_type.config import config
from src.nfl_play_type.data.preprocessor import DataPreprocessor
from src.nfl_play_type.data.feature_engineering import FeatureEngineer
from src.nfl_play_type.exceptions import DomainError, SchemaError
from tests.play_factory import make_plays


class TestDataPreprocessor(unittest.TestCase):
    """Test cases for DataPreprocessor class."""

    def setUp(self):
        self.preprocessor = DataPreprocessor()
        self.raw = make_plays(seasons=(2012, 2014, 2018), plays_per_season=20)
        # boundary game_id, unknown play types, a null in a required field
        self.raw.loc[0, "game_id"] = config.MIN_GAME_ID
        self.raw.loc[20, "play_type"] = "kickoff"
        self.raw.loc[21, "play_type"] = "no_play"
        self.raw.loc[22, "yardline_100"] = np.nan
        self.raw["down"] = self.raw["down"].astype(float)

    def test_retained_rows_satisfy_filters(self):
        clean = self.preprocessor.preprocess_slice(self.raw)

        self.assertTrue((clean["game_id"] > config.MIN_GAME_ID).all())
        self.assertTrue(clean["play_type"].isin(config.PLAY_TYPES).all())
        self.assertFalse(clean[list(config.REQUIRED_COLUMNS)].isna().any().any())

    def test_row_counts(self):
        clean = self.preprocessor.preprocess_slice(self.raw)
        # 2012 season (20 rows) is below the bound; three bad 2014 rows dropped
        self.assertEqual(len(clean), 20 + 20 - 3)

    def test_game_id_equal_to_bound_is_excluded(self):
        df = self.raw.iloc[:1].copy()
        self.assertEqual(len(self.preprocessor.filter_game_id(df)), 0)

    def test_integer_dtypes_restored(self):
        clean = self.preprocessor.preprocess_slice(self.raw)
        self.assertEqual(clean["down"].dtype, np.int64)
        self.assertEqual(clean["game_id"].dtype, np.int64)

    def test_input_not_mutated(self):
        before = self.raw.copy()
        self.preprocessor.preprocess_slice(self.raw)
        pd.testing.assert_frame_equal(self.raw, before)

    def test_fractional_down_is_not_truncated(self):
        """A down of 2.5 survives cleansing as-is and is rejected by the encoder."""
        raw = make_plays(seasons=(2014,), plays_per_season=12)
        raw["down"] = raw["down"].astype(float)
        raw.loc[0, "down"] = 2.5

        clean = self.preprocessor.preprocess_slice(raw)
        self.assertEqual(clean.loc[0, "down"], 2.5)
        self.assertEqual(clean["posteam_timeouts_remaining"].dtype, np.int64)

        with self.assertRaises(DomainError) as ctx:
            FeatureEngineer().create_all_features(clean)
        self.assertEqual(ctx.exception.field, "down")
        self.assertEqual(ctx.exception.values, [2.5])

    def test_missing_required_column(self):
        with self.assertRaises(SchemaError) as ctx:
            self.preprocessor.preprocess_slice(self.raw.drop(columns=["play_type"]))
        self.assertIn("play_type", ctx.exception.missing)

    def test_update_config(self):
        self.preprocessor.update_config(min_game_id=2015000000, play_types=["run", "pass"])
        clean = self.preprocessor.preprocess_slice(self.raw)

        self.assertTrue((clean["game_id"] > 2015000000).all())
        self.assertTrue(set(clean["play_type"]) <= {"run", "pass"})

    def test_preprocessing_summary(self):
        clean = self.preprocessor.preprocess_slice(self.raw)
        summary = self.preprocessor.get_preprocessing_summary(self.raw, clean)

        self.assertEqual(summary["original_size"], len(self.raw))
        self.assertEqual(summary["final_size"], len(clean))
        self.assertAlmostEqual(sum(summary["play_type_share"].values()), 1.0)


if __name__ == '__main__':
    unittest.main()
