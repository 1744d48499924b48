"""
Feature engineering module for NFL play-type analysis.
Buckets the continuous game-state fields and dummy-encodes the categoricals.
"""
import logging
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from src.nfl_play_type.config import config
from src.nfl_play_type.data.feature_schema import FeatureSchema, require_columns
from src.nfl_play_type.exceptions import DomainError

logger = logging.getLogger(__name__)


def _assign_buckets(values: pd.Series, conditions: List[pd.Series],
                    labels: Sequence[str], field: str) -> pd.Series:
    """Map each value to the label of the one condition it meets."""
    x = values.to_numpy(dtype=float, na_value=np.nan)
    finite = np.isfinite(x)
    conditions = [np.asarray(c, dtype=bool) & finite for c in conditions]

    hits = np.sum(conditions, axis=0)
    uncovered = hits != 1
    if uncovered.any():
        raise DomainError(field, values[uncovered].tolist())

    bucket = np.select(conditions, list(labels), default="")
    return pd.Series(bucket, index=values.index, name=f"{field}_bucket")


def bucket_ydstogo(ydstogo: pd.Series) -> pd.Series:
    """
    short: ydstogo <= 4
    med:   4 < ydstogo < 8
    long:  ydstogo >= 8
    """
    x = ydstogo.astype(float)
    short_max, long_min = config.YDSTOGO_SHORT_MAX, config.YDSTOGO_LONG_MIN
    conditions = [
        x <= short_max,
        (x > short_max) & (x < long_min),
        x >= long_min,
    ]
    return _assign_buckets(ydstogo, conditions, config.YDSTOGO_BUCKETS, "ydstogo")


def bucket_score_differential(score_differential: pd.Series) -> pd.Series:
    """
    down_big:   diff < -7
    down_score: -7 <= diff < 0
    tied:       diff == 0
    up_score:   0 < diff <= 7
    up_big:     diff > 7
    """
    x = score_differential.astype(float)
    margin = config.SCORE_BIG_MARGIN
    conditions = [
        x < -margin,
        (x >= -margin) & (x < 0),
        x == 0,
        (x > 0) & (x <= margin),
        x > margin,
    ]
    return _assign_buckets(score_differential, conditions, config.SCORE_BUCKETS,
                           "score_differential").rename("score_bucket")


def encode_dummies(values: pd.Series, levels: Sequence, prefix: str) -> pd.DataFrame:
    """
    One 0/1 column per level except the first, which is the reference level.

    The level list is fixed, so the output always has len(levels) - 1 columns
    even when some levels never occur in *values*. A value outside *levels*
    raises DomainError.
    """
    cat = pd.Series(
        pd.Categorical(values, categories=list(levels), ordered=True),
        index=values.index,
    )
    uncovered = cat.isna().to_numpy()
    if uncovered.any():
        raise DomainError(prefix, values[uncovered].tolist())

    return pd.get_dummies(cat, prefix=prefix, prefix_sep="_", drop_first=True, dtype=int)


class FeatureEngineer:
    """Handles all feature engineering operations."""

    ENCODED_FIELDS: Dict[str, Sequence] = {
        "down": config.DOWN_LEVELS,
        "ydstogo_bucket": config.YDSTOGO_BUCKETS,
        "score_bucket": config.SCORE_BUCKETS,
    }

    def __init__(self, keep_raw_continuous: bool = False):
        """
        Args:
            keep_raw_continuous: keep ydstogo / score_differential next to
                their buckets instead of replacing them
        """
        self.keep_raw_continuous = keep_raw_continuous

    # ------------------------------------------------------------------
    # Buckets
    # ------------------------------------------------------------------
    def create_bucket_features(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add ydstogo_bucket and score_bucket columns."""
        require_columns(df, ["ydstogo", "score_differential"], where="FeatureEngineer")
        df = df.copy()
        df["ydstogo_bucket"] = bucket_ydstogo(df["ydstogo"])
        df["score_bucket"] = bucket_score_differential(df["score_differential"])
        logger.info("Created bucket features (ydstogo_bucket, score_bucket)")
        return df

    # ------------------------------------------------------------------
    # Dummy encoding
    # ------------------------------------------------------------------
    def encode_categoricals(self, df: pd.DataFrame) -> pd.DataFrame:
        """Replace down and both bucket columns with reference-dropped dummies."""
        require_columns(df, list(self.ENCODED_FIELDS), where="FeatureEngineer")
        blocks = [df.drop(columns=list(self.ENCODED_FIELDS))]
        for field, levels in self.ENCODED_FIELDS.items():
            blocks.append(encode_dummies(df[field], levels, prefix=field))
        encoded = pd.concat(blocks, axis=1)
        logger.info("Encoded %d categorical fields into %d indicator columns",
                    len(self.ENCODED_FIELDS), len(self.indicator_columns()))
        return encoded

    @classmethod
    def indicator_columns(cls) -> List[str]:
        """Names of every dummy column encode_categoricals produces, in order."""
        return [f"{field}_{level}"
                for field, levels in cls.ENCODED_FIELDS.items()
                for level in list(levels)[1:]]

    # ------------------------------------------------------------------
    # Orchestrator
    # ------------------------------------------------------------------
    def create_all_features(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Build the modelling frame: game_id, play_type, the numeric game-state
        fields and every indicator column. Returns a new DataFrame.
        """
        df = self.create_bucket_features(df)
        if not self.keep_raw_continuous:
            df = df.drop(columns=["ydstogo", "score_differential"])
        df = self.encode_categoricals(df)

        schema = self.build_schema(df)
        keep = [config.GAME_ID_COLUMN] + schema.model_features + [schema.target]
        require_columns(df, keep, where="engineered features")
        logger.info("Feature engineering complete: %d rows × %d features",
                    len(df), len(schema.model_features))
        return df[keep]

    def build_schema(self, df: pd.DataFrame) -> FeatureSchema:
        """Schema describing the columns create_all_features keeps."""
        numerical = list(config.FEATURE_LISTS["numerical"])
        if self.keep_raw_continuous:
            numerical += [c for c in ("ydstogo", "score_differential") if c in df.columns]
        return FeatureSchema(
            numerical=numerical,
            indicator=self.indicator_columns(),
            target=config.TARGET_COLUMN,
            id_column=config.GAME_ID_COLUMN,
        )
