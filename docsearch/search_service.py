"""
Search service: coordinates embedding, vector lookup, document loading and
hybrid ranking.

Retrieval process:
1. Check the query cache (if one is configured)
2. Embed the query text (empty vector → no results)
3. Ask the vector source for candidates (limit + min_score applied there)
4. Load candidate documents from the store (missing ones are tolerated)
5. Rank with the hybrid pipeline
6. Cache non-empty results

Collaborator failures are re-raised as CollaboratorError subclasses; the
service does not retry or substitute data.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, TypeVar

from .cache import QueryCache
from .collaborators.base import BaseDocumentStore, BaseEmbedder, BaseVectorSource
from .config import ScoringConfig
from .exceptions import CollaboratorError, DocumentStoreError, EmbeddingError, VectorSourceError
from .models import Candidate, Document, RankedResult, SearchQuery
from .ranking import RankingPipeline, documents_by_id

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _call(error_cls, description: str, fn: Callable[[], T]) -> T:
    """Run a collaborator call, wrapping unexpected failures in error_cls."""
    try:
        return fn()
    except CollaboratorError:
        raise
    except Exception as e:
        logger.error(f"{description} failed: {e}")
        raise error_cls(f"{description} failed: {e}") from e


def _preview(text: str, length: int = 50) -> str:
    return text[:length]


class SearchService:
    """
    Semantic + lexical document search over pluggable collaborators.
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        vector_source: BaseVectorSource,
        document_store: BaseDocumentStore,
        config: Optional[ScoringConfig] = None,
        cache: Optional[QueryCache] = None,
    ):
        self.embedder = embedder
        self.vector_source = vector_source
        self.document_store = document_store
        self.config = config or ScoringConfig()
        self.pipeline = RankingPipeline(self.config)
        self.cache = cache

    def search(self, query: SearchQuery, now: Optional[datetime] = None) -> List[RankedResult]:
        """
        Perform hybrid search for a query.

        Args:
            query: Search query
            now: Reference time for recency decay (default: current UTC time)

        Returns:
            Ranked results (empty when the query can't be embedded or nothing matches)

        Raises:
            EmbeddingError, VectorSourceError, DocumentStoreError: Collaborator failure
        """
        logger.debug(f"Performing search for query: {_preview(query.query)!r}")

        if self.cache is not None:
            cached = self.cache.get(query)
            if cached is not None:
                logger.debug(f"Cache hit for query: {_preview(query.query)!r}")
                return cached

        if not query.query or not query.query.strip():
            logger.debug("Blank query, returning no results")
            return []

        query_vector = _call(EmbeddingError, "Embedding query", lambda: self.embedder.embed(query.query))
        if not query_vector:
            logger.warning(f"Failed to generate embedding for query: {_preview(query.query)!r}")
            return []

        candidates = _call(
            VectorSourceError,
            "Vector search",
            lambda: self.vector_source.find_similar(query_vector, query.limit, query.min_score),
        )
        if not candidates:
            logger.debug(f"No similar documents found for query: {_preview(query.query)!r}")
            return []

        results = self._rank(query, candidates, now)

        if self.cache is not None and results:
            self.cache.put(query, results)

        logger.debug(f"Found {len(results)} results for query: {_preview(query.query)!r}")
        return results

    def find_similar_documents(
        self,
        document_id: str,
        limit: int = 10,
        min_score: float = 0.7,
        now: Optional[datetime] = None
    ) -> List[RankedResult]:
        """
        Find documents similar to a stored document ("more like this").

        The source document's content is used as the query; the document
        itself is excluded from the results.

        Returns:
            Ranked results with content, without highlights (empty if the
            document doesn't exist or can't be embedded)
        """
        documents = _call(
            DocumentStoreError,
            "Loading source document",
            lambda: self.document_store.find_by_ids([document_id]),
        )
        if not documents:
            logger.warning(f"Document not found: {document_id}")
            return []

        document: Document = documents[0]
        document_vector = _call(
            EmbeddingError, "Embedding document", lambda: self.embedder.embed(document.content)
        )
        if not document_vector:
            logger.warning(f"Failed to generate embedding for document: {document_id}")
            return []

        candidates = _call(
            VectorSourceError,
            "Vector search",
            lambda: self.vector_source.find_similar(document_vector, limit + 1, min_score),
        )
        candidates = [c for c in candidates if c.document_id != document_id][:limit]
        if not candidates:
            return []

        query = SearchQuery(
            query=document.content,
            limit=limit,
            min_score=min_score,
            include_content=True,
            include_highlights=False,
        )
        return self._rank(query, candidates, now)

    def _rank(self, query: SearchQuery, candidates: List[Candidate], now: Optional[datetime]) -> List[RankedResult]:
        ids = [c.document_id for c in candidates]
        documents = _call(
            DocumentStoreError,
            "Loading documents",
            lambda: self.document_store.find_by_ids(ids),
        )
        return self.pipeline.rank(query, candidates, documents_by_id(documents), now=now)
