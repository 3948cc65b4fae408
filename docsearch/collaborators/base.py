"""
Abstract contracts for the collaborators the ranking core consumes.

Implementations must be swappable: the search service only talks to these
interfaces. Retries, fallbacks and caching of embeddings are the
implementation's business, not the ranking core's.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models import Candidate, Document


class BaseEmbedder(ABC):
    """Turns text into a fixed-length vector."""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """
        Embed text.

        Returns:
            Vector of `dimensions` floats, or an empty list when no vector
            could be produced (the search then returns no results)
        """
        pass

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Length of the vectors this embedder produces."""
        pass

    def get_model_info(self) -> dict:
        """Get information about the embedding model."""
        return {"name": type(self).__name__, "dimensions": self.dimensions}

    def close(self):
        """Optional cleanup (close API clients, free model memory, etc.)"""
        pass


class BaseVectorSource(ABC):
    """Approximate nearest-neighbor candidate source."""

    @abstractmethod
    def find_similar(self, query_vector: Sequence[float], limit: int, min_score: float) -> List[Candidate]:
        """
        Find documents similar to the query vector.

        Args:
            query_vector: Query embedding
            limit: Maximum number of candidates
            min_score: Similarity threshold (candidates below are dropped)

        Returns:
            Candidates in ranking order; scores are not guaranteed to be in [0, 1]
        """
        pass


class BaseDocumentStore(ABC):
    """Read access to full document records."""

    @abstractmethod
    def find_by_ids(self, ids: Sequence[str]) -> List[Document]:
        """
        Load documents by id.

        Unknown ids are silently skipped, so the result may be partial.
        """
        pass
