"""
Data preprocessing module for NFL play-type analysis.
Handles the row filters that turn the raw export into the modelling subset.

Every step returns a new DataFrame; the frame passed in is never modified.
Rows failing a filter are dropped, not reported, since the contract is
"return the valid subset" rather than "validate the file".
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, cast

import pandas as pd

from src.nfl_play_type.config import config
from src.nfl_play_type.data.feature_schema import require_columns

logger = logging.getLogger(__name__)


class DataPreprocessor:
    """Filters plays by season and play type and drops incomplete rows."""

    def __init__(self):
        """Create a preprocessor with defaults from central config."""
        self.MIN_GAME_ID: int | None = None
        self.PLAY_TYPES: list[str] | None = None
        self.REQUIRED_COLUMNS: list[str] = list(config.REQUIRED_COLUMNS)

        self.update_config(
            min_game_id=config.MIN_GAME_ID,
            play_types=list(config.PLAY_TYPES),
        )

    def update_config(self,
                      min_game_id: Optional[int] = None,
                      play_types: Optional[Sequence[str]] = None,
                      required_columns: Optional[Sequence[str]] = None):
        """
        Update preprocessing configuration.

        Args:
            min_game_id: Rows must have game_id strictly above this value
            play_types: Accepted play-type categories
            required_columns: Columns that must exist and be non-null
        """
        if min_game_id is not None:
            self.MIN_GAME_ID = int(min_game_id)
        if play_types is not None:
            self.PLAY_TYPES = list(play_types)
        if required_columns is not None:
            self.REQUIRED_COLUMNS = list(required_columns)

    def _validate_config(self):
        """Validate that required configuration is set."""
        missing = []
        if self.MIN_GAME_ID is None:
            missing.append("MIN_GAME_ID")
        if not self.PLAY_TYPES:
            missing.append("PLAY_TYPES")
        if missing:
            raise ValueError(f"Configuration not set. Please call update_config() first. Missing: {missing}")

    def filter_game_id(self, df: pd.DataFrame) -> pd.DataFrame:
        """Keep rows whose season-encoding game_id exceeds MIN_GAME_ID."""
        self._validate_config()
        filtered_df = cast(pd.DataFrame, df[df[config.GAME_ID_COLUMN] > self.MIN_GAME_ID].copy())
        logger.info("Filtered game_id > %s: removed %d, kept %d",
                    self.MIN_GAME_ID, len(df) - len(filtered_df), len(filtered_df))
        return filtered_df

    def filter_play_types(self, df: pd.DataFrame) -> pd.DataFrame:
        """Keep the accepted play-type categories only."""
        self._validate_config()
        filtered_df = cast(pd.DataFrame, df[df[config.TARGET_COLUMN].isin(self.PLAY_TYPES)].copy())
        logger.info("Filtered play types %s: removed %d, kept %d",
                    self.PLAY_TYPES, len(df) - len(filtered_df), len(filtered_df))
        return filtered_df

    def drop_missing(self, df: pd.DataFrame) -> pd.DataFrame:
        """Drop rows with a null in any required column and restore integer dtypes."""
        filtered_df = df.dropna(subset=self.REQUIRED_COLUMNS).copy()
        logger.info("Dropped %d rows with missing values, kept %d",
                    len(df) - len(filtered_df), len(filtered_df))

        for col in (config.GAME_ID_COLUMN, "down", "posteam_timeouts_remaining"):
            if col not in filtered_df.columns:
                continue
            # fractional values stay float so the encoder rejects them
            if (filtered_df[col] % 1 == 0).all():
                filtered_df[col] = filtered_df[col].astype("int64")
            else:
                logger.warning("Non-integer values in %s; leaving column as float", col)
        filtered_df[config.TARGET_COLUMN] = filtered_df[config.TARGET_COLUMN].astype(str)
        return filtered_df

    def preprocess_slice(self, raw_df: pd.DataFrame) -> pd.DataFrame:
        """
        Run every filter on an arbitrary slice without mutating it.

        Raises:
            SchemaError: if game_id, play_type or another required column is absent
        """
        self._validate_config()
        require_columns(raw_df, self.REQUIRED_COLUMNS, where="plays passed to DataPreprocessor")

        df = raw_df.loc[:, self.REQUIRED_COLUMNS]
        initial = len(df)
        df = self.filter_game_id(df)
        df = self.filter_play_types(df)
        df = self.drop_missing(df)

        logger.info("Preprocessing complete: %d of %d plays retained", len(df), initial)
        return df

    def get_preprocessing_summary(self, raw_df: pd.DataFrame, processed_df: pd.DataFrame) -> Dict:
        """Get summary of preprocessing steps and results."""
        return {
            "original_size": len(raw_df),
            "final_size": len(processed_df),
            "play_type_share": processed_df[config.TARGET_COLUMN].value_counts(normalize=True).to_dict(),
            "config": {
                "min_game_id": self.MIN_GAME_ID,
                "play_types": self.PLAY_TYPES,
            },
        }
