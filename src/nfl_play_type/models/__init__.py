"""Models module for NFL play-type analysis."""

from .adapters import (
    DecisionTreeModel,
    GradientBoostingModel,
    XGBoostModel,
    PlayTypeModel,
    build_model,
)
from .play_type_models import PlayTypeModelSuite

__all__ = ['DecisionTreeModel', 'GradientBoostingModel', 'XGBoostModel',
           'PlayTypeModel', 'build_model', 'PlayTypeModelSuite']
