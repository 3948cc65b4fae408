"""
In-memory collaborators: brute-force vector index and document store.

Both are reference implementations of the collaborator contracts, used by
the demo corpus, the curated evaluation and the tests. They hold plain
dicts and are not meant for large corpora.
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..models import Candidate, Document
from .base import BaseDocumentStore, BaseVectorSource

logger = logging.getLogger(__name__)


class InMemoryVectorIndex(BaseVectorSource):
    """
    Exact cosine-similarity search over stored vectors.

    Scores are raw cosine similarity in [-1, 1]; the ranking pipeline clamps
    them to [0, 1].
    """

    def __init__(self):
        self._vectors: Dict[str, np.ndarray] = {}

    def __len__(self) -> int:
        return len(self._vectors)

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._vectors

    def add(self, document_id: str, vector: Sequence[float]) -> str:
        """
        Store (or replace) the vector of a document.

        Returns:
            Vector reference (the document id)

        Raises:
            ValueError: If the vector is empty or its dimension differs from stored vectors
        """
        array = np.asarray(vector, dtype=np.float64)
        if array.ndim != 1 or array.size == 0:
            raise ValueError(f"Vector for {document_id} must be a non-empty 1-D sequence")

        if self._vectors:
            expected = next(iter(self._vectors.values())).size
            if array.size != expected:
                raise ValueError(
                    f"Vector dimension mismatch for {document_id}: got {array.size}, index uses {expected}"
                )

        self._vectors[document_id] = array
        logger.debug(f"Indexed vector for document {document_id} ({array.size} dims)")
        return document_id

    def remove(self, document_id: str) -> bool:
        """Delete a document vector; False if it was not indexed."""
        removed = self._vectors.pop(document_id, None) is not None
        if removed:
            logger.debug(f"Removed vector for document {document_id}")
        return removed

    def find_similar(self, query_vector: Sequence[float], limit: int, min_score: float) -> List[Candidate]:
        if not self._vectors or limit <= 0:
            return []

        query = np.asarray(query_vector, dtype=np.float64)
        query_norm = np.linalg.norm(query)
        if query.size == 0 or query_norm == 0:
            return []

        ids = list(self._vectors.keys())
        matrix = np.vstack([self._vectors[i] for i in ids])
        if matrix.shape[1] != query.size:
            raise ValueError(
                f"Query vector has {query.size} dims, index uses {matrix.shape[1]}"
            )

        norms = np.linalg.norm(matrix, axis=1)
        norms[norms == 0] = 1.0
        scores = (matrix @ query) / (norms * query_norm)

        # Stable sort keeps insertion order for equal scores
        order = np.argsort(-scores, kind="stable")

        candidates = []
        for idx in order:
            score = float(scores[idx])
            if score < min_score:
                break
            candidates.append(Candidate(document_id=ids[idx], score=score))
            if len(candidates) >= limit:
                break

        logger.debug(f"Vector search: {len(candidates)} candidates (limit={limit}, min_score={min_score})")
        return candidates


class InMemoryDocumentStore(BaseDocumentStore):
    """Dict-backed document store keyed by document id."""

    def __init__(self, documents: Optional[Sequence[Document]] = None):
        self._documents: Dict[str, Document] = {}
        for document in documents or []:
            self.save(document)

    def __len__(self) -> int:
        return len(self._documents)

    def save(self, document: Document) -> Document:
        self._documents[document.id] = document
        return document

    def delete(self, document_id: str) -> bool:
        return self._documents.pop(document_id, None) is not None

    def find_by_id(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    def find_by_ids(self, ids: Sequence[str]) -> List[Document]:
        return [self._documents[i] for i in ids if i in self._documents]

    def find_by_title(self, title: str) -> Optional[Document]:
        for document in self._documents.values():
            if document.title == title:
                return document
        return None

    def find_by_content_hash(self, content_hash: str) -> Optional[Document]:
        for document in self._documents.values():
            if document.content_hash == content_hash:
                return document
        return None

    def all(self) -> List[Document]:
        return list(self._documents.values())
