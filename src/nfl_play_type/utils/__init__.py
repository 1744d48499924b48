"""Utils module for NFL play-type analysis."""

from .label_codec import PLAY_TYPE_CODEC, LabelCodec
from .metrics import ModelEvaluator, ModelResult, evaluate_model

__all__ = ['PLAY_TYPE_CODEC', 'LabelCodec', 'ModelEvaluator', 'ModelResult', 'evaluate_model']
