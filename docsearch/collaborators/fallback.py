"""
Embedder wrapper that degrades to deterministic hash vectors.

When the primary embedder fails (model can't be downloaded or loaded,
encode raises), the query still gets a vector: the SHA256 pseudo-embedding
of the text. Search keeps working with degraded relevance instead of
surfacing an EmbeddingError.
"""

from typing import List
import logging

from .base import BaseEmbedder
from .hashing import HashEmbedder

logger = logging.getLogger(__name__)


class FallbackEmbedder(BaseEmbedder):
    """
    Delegates to a primary embedder, falling back to a HashEmbedder on error.

    The fallback should produce vectors of the primary's width, otherwise the
    vector index rejects them.
    """

    def __init__(self, primary: BaseEmbedder, fallback: HashEmbedder):
        self.primary = primary
        self.fallback = fallback
        self.fallback_count = 0

    @property
    def dimensions(self) -> int:
        return self.fallback.dimensions

    def embed(self, text: str) -> List[float]:
        try:
            return self.primary.embed(text)
        except Exception as e:
            self.fallback_count += 1
            preview = (text or "")[:50]
            logger.warning(f"Embedding provider unavailable ({e}); using deterministic stub vector for text: {preview!r}")
            return self.fallback.embed(text)

    def get_model_info(self) -> dict:
        info = self.primary.get_model_info()
        info["fallback"] = self.fallback.get_model_info()
        info["fallback_count"] = self.fallback_count
        return info

    def close(self):
        self.primary.close()
