"""
Collaborators consumed by the ranking core.

Usage:
    # Get embedder (auto-configured from env):
    from docsearch.collaborators import get_embedder

    embedder = get_embedder()
    vector = embedder.embed("vector search embeddings")

    # Or create specific implementations:
    from docsearch.collaborators import InMemoryVectorIndex, InMemoryDocumentStore

    index = InMemoryVectorIndex()
    store = InMemoryDocumentStore()
"""

from .base import BaseDocumentStore, BaseEmbedder, BaseVectorSource
from .hashing import HashEmbedder
from .fallback import FallbackEmbedder
from .local import SentenceTransformerEmbedder
from .memory import InMemoryDocumentStore, InMemoryVectorIndex
from .factory import EmbedderFactory


def get_embedder(force_reload: bool = False) -> BaseEmbedder:
    """
    Get configured embedder instance (factory convenience function).
    """
    return EmbedderFactory.create(force_reload=force_reload)


__all__ = [
    'BaseEmbedder',
    'BaseVectorSource',
    'BaseDocumentStore',
    'HashEmbedder',
    'FallbackEmbedder',
    'SentenceTransformerEmbedder',
    'InMemoryVectorIndex',
    'InMemoryDocumentStore',
    'EmbedderFactory',
    'get_embedder',
]
