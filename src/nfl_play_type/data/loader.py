"""
Data loading module for NFL play-type analysis.
Reads the truncated play-by-play export into a typed DataFrame.
"""
import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from src.nfl_play_type.config import config
from src.nfl_play_type.data.feature_schema import require_columns

logger = logging.getLogger(__name__)

NUMERIC_COLUMNS = [
    "game_id",
    "half_seconds_remaining",
    "down",
    "ydstogo",
    "yardline_100",
    "score_differential",
    "posteam_timeouts_remaining",
]


class PlayDataLoader:
    """Handles loading of the play-by-play file."""

    def __init__(self):
        """Initialize the data loader."""
        self.plays_df: Optional[pd.DataFrame] = None

    def load_plays(self, filepath: Optional[Union[str, Path]] = None) -> pd.DataFrame:
        """
        Load play-by-play rows.

        Only the required columns are kept. Numeric fields are coerced, so a
        malformed cell becomes NaN and is dropped later by the preprocessor.

        Args:
            filepath: Optional path to the plays CSV file

        Returns:
            DataFrame with one row per play

        Raises:
            FileNotFoundError: if the file does not exist
            SchemaError: if a required column is absent from the header
        """
        if filepath is None:
            filepath = config.PLAYS_FILE
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Plays data file not found: {filepath}")

        raw = pd.read_csv(
            filepath,
            encoding=config.CSV_ENCODING,
            na_values=["NA"],
            low_memory=False,
        )
        raw.columns = raw.columns.str.strip()
        require_columns(raw, config.REQUIRED_COLUMNS, where=str(filepath))

        df = raw.loc[:, list(config.REQUIRED_COLUMNS)].copy()
        for col in NUMERIC_COLUMNS:
            df[col] = pd.to_numeric(df[col], errors="coerce")
        df[config.TARGET_COLUMN] = df[config.TARGET_COLUMN].astype("string").str.strip()

        logger.info("Loaded %d plays (%d columns kept of %d) from %s",
                    len(df), df.shape[1], raw.shape[1], filepath)
        self.plays_df = df
        return df

    def get_data_summary(self) -> dict:
        """
        Get summary statistics of loaded data.

        Returns:
            Dictionary with data summary information
        """
        if self.plays_df is None:
            raise ValueError("No data loaded. Call load_plays() first.")

        df = self.plays_df
        game_ids = df[config.GAME_ID_COLUMN].dropna()
        seasons = (game_ids // config.GAME_ID_SEASON_DIVISOR).astype(int)
        summary = {
            "total_plays": len(df),
            "unique_games": int(game_ids.nunique()),
            "unique_seasons": sorted(seasons.unique().tolist()),
            "play_type_counts": df[config.TARGET_COLUMN].value_counts(dropna=False).to_dict(),
            "missing_by_column": df.isna().sum().to_dict(),
            "game_id_range": (game_ids.min(), game_ids.max()) if len(game_ids) else (None, None),
        }
        return summary


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    loader = PlayDataLoader()
    try:
        plays = loader.load_plays()
        print(plays.head())
        print(loader.get_data_summary())
    except FileNotFoundError as e:
        print(f"Error loading plays: {e}")
