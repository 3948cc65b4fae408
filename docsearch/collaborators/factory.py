"""
Factory to create embedder instances based on configuration.
"""

from typing import Optional
import os
import logging

from ..config import _env_bool
from .base import BaseEmbedder
from .fallback import FallbackEmbedder
from .hashing import HashEmbedder
from .local import SentenceTransformerEmbedder

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_LOCAL_DIMENSIONS = 384  # all-MiniLM-L6-v2
DEFAULT_HASH_DIMENSIONS = 64


def _dimensions_from_env() -> Optional[int]:
    value = os.getenv("EMBEDDER_DIMENSIONS")
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"EMBEDDER_DIMENSIONS must be an integer, got: {value!r}") from None


class EmbedderFactory:
    """Factory to create embedder instances based on configuration."""

    _instance: Optional[BaseEmbedder] = None  # Singleton cache

    @classmethod
    def create(cls, force_reload: bool = False) -> BaseEmbedder:
        """
        Create embedder based on environment configuration.

        Config (env vars):
            EMBEDDER_TYPE: "hash" | "local" (default: hash)
            EMBEDDER_MODEL: Model identifier (local only)
            EMBEDDER_DIMENSIONS: Vector length (hash: default 64; local: expected
                model width, also used by the fallback stub, default 384)
            EMBEDDER_FALLBACK: Wrap the local embedder so failures fall back to
                hash vectors (default: false)

        Supported types:
            - hash: Deterministic SHA256 vectors (no model, no semantics)
            - local: sentence-transformers model from HuggingFace

        Args:
            force_reload: If True, recreate instance even if cached

        Returns:
            Embedder instance

        Raises:
            ValueError: Unknown EMBEDDER_TYPE or malformed EMBEDDER_DIMENSIONS/EMBEDDER_FALLBACK
        """
        if cls._instance is not None and not force_reload:
            logger.debug(f"Returning cached embedder instance: {cls._instance}")
            return cls._instance

        embedder_type = (os.getenv("EMBEDDER_TYPE") or "hash").strip().lower()
        logger.info(f"Embedder config: EMBEDDER_TYPE={embedder_type}")

        dimensions = _dimensions_from_env()

        if embedder_type == "hash":
            dimensions = dimensions or DEFAULT_HASH_DIMENSIONS
            logger.info(f"Creating hashing embedder ({dimensions} dims)")
            instance = HashEmbedder(dimensions=dimensions)

        elif embedder_type == "local":
            model = os.getenv("EMBEDDER_MODEL") or DEFAULT_LOCAL_MODEL
            logger.info(f"Creating local sentence-transformers embedder: {model}")
            instance = SentenceTransformerEmbedder(model_name=model, dimensions=dimensions)

            if _env_bool("EMBEDDER_FALLBACK", False):
                stub_dimensions = dimensions or DEFAULT_LOCAL_DIMENSIONS
                logger.info(f"Embedding failures fall back to hash vectors ({stub_dimensions} dims)")
                instance = FallbackEmbedder(instance, HashEmbedder(dimensions=stub_dimensions))

        else:
            raise ValueError(
                f"Unknown embedder type: {embedder_type}. "
                f"Valid options: hash, local"
            )

        cls._instance = instance
        return cls._instance

    @classmethod
    def cleanup(cls):
        """Cleanup cached embedder instance."""
        if cls._instance is not None:
            logger.info("Cleaning up embedder instance")
            cls._instance.close()
            cls._instance = None
