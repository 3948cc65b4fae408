"""
Deterministic hashing embedder.

Produces a stable pseudo-embedding from the SHA256 digest of the text.
Vectors carry no semantics: identical texts map to identical vectors
and that is all. Used for local runs, demos and tests, and as the
fallback when no embedding model is configured.
"""

import hashlib
from typing import List

import numpy as np

from .base import BaseEmbedder

MIN_DIMENSIONS = 4


class HashEmbedder(BaseEmbedder):
    """
    SHA256-derived unit vectors.

    Each vector element is one digest byte (cycled when dimensions > 32)
    mapped from [0, 255] to [-1, 1]; the vector is then L2-normalized.
    """

    def __init__(self, dimensions: int = 64):
        self._dimensions = max(MIN_DIMENSIONS, dimensions)

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def embed(self, text: str) -> List[float]:
        if text is None:
            return []

        digest = np.frombuffer(hashlib.sha256(text.encode("utf-8")).digest(), dtype=np.uint8)
        raw = np.resize(digest, self._dimensions).astype(np.float64)
        vector = (raw / 255.0) * 2.0 - 1.0

        norm = np.linalg.norm(vector)
        if norm > 0:
            vector = vector / norm

        return vector.tolist()

    def get_model_info(self) -> dict:
        return {
            "name": "sha256",
            "type": "hash",
            "dimensions": self._dimensions,
        }
