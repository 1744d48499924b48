"""
FeatureSchema – canonical column lists for preprocessing & modelling.
"""
from dataclasses import dataclass, field
from typing import Iterable, List

import pandas as pd

from src.nfl_play_type.exceptions import SchemaError


def require_columns(df: pd.DataFrame, columns: Iterable[str], where: str = "input data") -> None:
    """Raise SchemaError naming every column of *columns* absent from df."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise SchemaError(missing, where=where)


@dataclass
class FeatureSchema:
    """Container class listing every column by semantic type."""
    numerical: List[str] = field(default_factory=list)
    indicator: List[str] = field(default_factory=list)   # 0/1 dummy columns
    target:    str        = "play_type"
    id_column: str        = "game_id"

    # ───── convenience helpers ────────────────────────────────────
    @property
    def model_features(self) -> List[str]:
        """All predictors in modelling order."""
        return self.numerical + self.indicator

    def assert_in_dataframe(self, df: pd.DataFrame) -> None:
        """Raise if any declared column is missing from df.columns."""
        require_columns(df, self.model_features + [self.target], where="FeatureSchema")
