"""
NFL Play-Type EDA Utilities

Tabular summaries of the cleaned play frame: how often each play type is
called, and how that mix shifts with down, distance, score and season.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

import pandas as pd

from src.nfl_play_type.config import config
from src.nfl_play_type.data.feature_engineering import (
    bucket_score_differential,
    bucket_ydstogo,
)
from src.nfl_play_type.data.feature_schema import require_columns
from src.nfl_play_type.data.splits import season_from_game_id

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = [
    "half_seconds_remaining",
    "ydstogo",
    "yardline_100",
    "score_differential",
    "posteam_timeouts_remaining",
]

# Low-to-high row order for the bucket columns
_BUCKET_LEVELS = {
    "ydstogo_bucket": config.YDSTOGO_BUCKETS,
    "score_bucket": config.SCORE_BUCKETS,
}

# ──────────────────────── core helpers ──────────────────────────

def with_eda_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of *df* with season, ydstogo_bucket and score_bucket added."""
    require_columns(df, [config.GAME_ID_COLUMN, "ydstogo", "score_differential"],
                    where="EDA input")
    out = df.copy()
    out["season"] = season_from_game_id(out[config.GAME_ID_COLUMN])
    out["ydstogo_bucket"] = bucket_ydstogo(out["ydstogo"])
    out["score_bucket"] = bucket_score_differential(out["score_differential"])
    return out


def play_type_distribution(df: pd.DataFrame) -> pd.DataFrame:
    """Counts and shares of each play type, in label order."""
    require_columns(df, [config.TARGET_COLUMN], where="play_type_distribution")
    counts = (df[config.TARGET_COLUMN].value_counts()
              .reindex(list(config.PLAY_TYPES), fill_value=0))
    total = int(counts.sum())
    share = counts / total if total else counts.astype(float)
    return pd.DataFrame({"count": counts.astype(int), "share": share.astype(float)})


def play_type_by(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """
    Row-normalised crosstab: for each value of *column*, the share of plays
    of each type. Columns follow label order; each row sums to 1. Bucket
    columns keep their low-to-high level order.
    """
    require_columns(df, [config.TARGET_COLUMN, column], where="play_type_by")
    table = pd.crosstab(df[column], df[config.TARGET_COLUMN], normalize="index")
    if column in _BUCKET_LEVELS:
        table = table.reindex([lvl for lvl in _BUCKET_LEVELS[column] if lvl in table.index])
    return table.reindex(columns=list(config.PLAY_TYPES), fill_value=0.0)


def season_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Plays per season (from game_id) split by play type, with a total column."""
    require_columns(df, [config.GAME_ID_COLUMN, config.TARGET_COLUMN], where="season_summary")
    season = season_from_game_id(df[config.GAME_ID_COLUMN]).rename("season")
    table = (pd.crosstab(season, df[config.TARGET_COLUMN])
             .reindex(columns=list(config.PLAY_TYPES), fill_value=0))
    table["total"] = table.sum(axis=1)
    return table


def numeric_summary(df: pd.DataFrame) -> pd.DataFrame:
    """describe() of the numeric situation fields for each play type."""
    fields = [c for c in _NUMERIC_FIELDS if c in df.columns]
    require_columns(df, [config.TARGET_COLUMN], where="numeric_summary")
    return df.groupby(config.TARGET_COLUMN)[fields].describe()


def quick_sanity_checks(df: pd.DataFrame) -> Dict[str, int]:
    """Duplicate rows and per-column nulls; logs warnings, never raises."""
    dupes = int(df.duplicated().sum())
    if dupes:
        logger.warning("%d duplicate rows detected", dupes)
    nulls = {c: int(n) for c, n in df.isna().sum().items() if n}
    for col, n in nulls.items():
        logger.warning("%d missing values in %s", n, col)
    return {"duplicates": dupes, **{f"null_{c}": n for c, n in nulls.items()}}


# ───────────────────── orchestrator API ─────────────────────
def run_full_eda(df: pd.DataFrame, *, verbose: bool = True) -> Dict[str, pd.DataFrame]:
    """
    All EDA tables for a cleaned play frame.

    Returns
    -------
    dict with keys ``distribution``, ``by_down``, ``by_ydstogo_bucket``,
    ``by_score_bucket``, ``by_season``, ``seasons`` and ``numeric``.
    """
    quick_sanity_checks(df)
    enriched = with_eda_columns(df)

    tables = {
        "distribution": play_type_distribution(enriched),
        "by_down": play_type_by(enriched, "down"),
        "by_ydstogo_bucket": play_type_by(enriched, "ydstogo_bucket"),
        "by_score_bucket": play_type_by(enriched, "score_bucket"),
        "by_season": play_type_by(enriched, "season"),
        "seasons": season_summary(enriched),
        "numeric": numeric_summary(enriched),
    }

    if verbose:
        for name, table in tables.items():
            print(f"\n── {name} ──")
            print(table.round(3).to_string())

    logger.info("EDA complete on %d plays", len(df))
    return tables


# ─────────────────────────── CLI demo ───────────────────────────

if __name__ == "__main__":
    from src.nfl_play_type.data.loader import PlayDataLoader
    from src.nfl_play_type.data.preprocessor import DataPreprocessor

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s │ %(levelname)s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    raw = PlayDataLoader().load_plays()
    clean = DataPreprocessor().preprocess_slice(raw)
    tables = run_full_eda(clean)

    config.ensure_directories()
    out = Path(config.OUTPUT_DIR) / "play_type_by_season.csv"
    tables["seasons"].to_csv(out)
    print(f"\nSeason table saved → {out}")
