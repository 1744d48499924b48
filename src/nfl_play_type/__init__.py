"""
NFL Play-Type Analysis Package
Classifies the offensive play call (run, pass, field goal, punt) from game situation.
"""

__version__ = "1.0.0"
__author__ = "NFL Analytics Team"

# Import main classes for easy access
from .config import config
from .data.loader import PlayDataLoader
from .data.preprocessor import DataPreprocessor
from .data.feature_engineering import FeatureEngineer

__all__ = [
    'config',
    'PlayDataLoader',
    'DataPreprocessor',
    'FeatureEngineer',
]
