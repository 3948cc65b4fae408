"""
Local embedder using sentence-transformers.

Supports any HuggingFace sentence-transformers model.
Model loads once and stays in memory for fast inference.
"""

from typing import List, Optional
import logging

from .base import BaseEmbedder

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder(BaseEmbedder):
    """
    Local embedding model using sentence-transformers.

    Model loads lazily on first use (avoids startup overhead).
    """

    def __init__(self, model_name: str = "sentence-transformers/all-MiniLM-L6-v2", dimensions: Optional[int] = None):
        """
        Initialize local embedder.

        Args:
            model_name: HuggingFace model identifier
                - 'sentence-transformers/all-MiniLM-L6-v2' (384 dims, fast)
                - 'sentence-transformers/all-mpnet-base-v2' (768 dims, better quality)
            dimensions: Expected vector length, if known before loading
        """
        self.model_name = model_name
        self.model = None  # Lazy loading
        self._dimensions = dimensions
        logger.info(f"SentenceTransformerEmbedder initialized (model will load on first use): {model_name}")

    def _ensure_loaded(self):
        """Lazy load model on first use"""
        if self.model is None:
            logger.info(f"Loading embedding model: {self.model_name}")
            try:
                from sentence_transformers import SentenceTransformer
                self.model = SentenceTransformer(self.model_name)
                self._dimensions = self.model.get_sentence_embedding_dimension()
                logger.info(f"Model loaded successfully: {self.model_name} ({self._dimensions} dims)")
            except Exception as e:
                logger.error(f"Failed to load model {self.model_name}: {e}")
                raise

    @property
    def dimensions(self) -> int:
        if self._dimensions is None:
            self._ensure_loaded()
        return self._dimensions

    def embed(self, text: str) -> List[float]:
        """Embed text; blank text yields an empty vector."""
        if not text or not text.strip():
            return []

        self._ensure_loaded()

        vector = self.model.encode(text, normalize_embeddings=True, show_progress_bar=False)
        return [float(v) for v in vector]

    def get_model_info(self) -> dict:
        """Get model metadata."""
        return {
            "name": self.model_name,
            "type": "local",
            "provider": "sentence-transformers",
            "dimensions": self._dimensions,
            "loaded": self.model is not None
        }

    def close(self):
        """Free model memory."""
        if self.model is not None:
            logger.info(f"Closing model: {self.model_name}")
            del self.model
            self.model = None
