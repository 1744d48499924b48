"""
Shared play-type <-> integer mapping.

Every adapter trains on integer codes and every evaluation decodes through the
same instance, so class index i means the same play type everywhere.
"""
from __future__ import annotations

from typing import Dict, Iterable, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from src.nfl_play_type.config import config


class LabelCodec:
    """Fixed, ordered mapping between play-type names and class codes."""

    def __init__(self, classes: Sequence[str] = config.PLAY_TYPES):
        if len(set(classes)) != len(classes):
            raise ValueError(f"Duplicate class names in {list(classes)}")
        self._classes: Tuple[str, ...] = tuple(classes)
        self._index: Dict[str, int] = {name: i for i, name in enumerate(self._classes)}

    @property
    def classes(self) -> Tuple[str, ...]:
        return self._classes

    @property
    def n_classes(self) -> int:
        return len(self._classes)

    def encode(self, labels: Iterable[str]) -> NDArray[np.int64]:
        labels = list(labels)
        unknown = sorted({str(l) for l in labels if l not in self._index})
        if unknown:
            raise ValueError(f"Unknown play type(s) {unknown}; expected one of {list(self._classes)}")
        return np.array([self._index[l] for l in labels], dtype=np.int64)

    def decode(self, codes: Iterable[int]) -> NDArray[np.object_]:
        codes = np.asarray(list(codes), dtype=np.int64)
        bad = codes[(codes < 0) | (codes >= self.n_classes)]
        if bad.size:
            raise ValueError(f"Class code(s) {sorted(set(bad.tolist()))} outside 0..{self.n_classes - 1}")
        return np.array(self._classes, dtype=object)[codes]

    def decode_proba(self, proba: NDArray[np.float64]) -> NDArray[np.object_]:
        """Most probable play type per row of an (n, n_classes) matrix."""
        proba = np.asarray(proba)
        if proba.ndim != 2 or proba.shape[1] != self.n_classes:
            raise ValueError(f"Expected an (n, {self.n_classes}) probability matrix, got {proba.shape}")
        return self.decode(proba.argmax(axis=1))

    def __repr__(self) -> str:
        return f"LabelCodec(classes={list(self._classes)})"


# One codec shared by adapters and evaluator
PLAY_TYPE_CODEC = LabelCodec()
