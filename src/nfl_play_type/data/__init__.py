"""
Data module for NFL play-type analysis.
"""

from .loader import PlayDataLoader
from .preprocessor import DataPreprocessor
from .feature_engineering import FeatureEngineer
from .splits import train_test_split_by_game_id

__all__ = ['PlayDataLoader', 'DataPreprocessor', 'FeatureEngineer', 'train_test_split_by_game_id']
