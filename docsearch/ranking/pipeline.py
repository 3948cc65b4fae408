"""
Hybrid ranking pipeline.

Turns vector-source candidates into ranked results:

1. Drop candidates whose document no longer exists (deleted after indexing)
2. Drop candidates failing the query's metadata filter
3. Hybrid mode: BM25 over the surviving batch (statistics computed per call)
4. Per candidate: clamp vector score → blend → metadata boosts → recency decay
5. Build results (content, projected metadata, highlights as requested)
6. Keep the vector source order (or re-sort when resort_by_score is set),
   then truncate to the query limit

The min_score threshold belongs to the vector source; blended scores are
not re-filtered here. Every call is self-contained: no state is kept on the
pipeline between calls.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence

from ..bm25 import BM25Scorer, CorpusStats, term_frequency, tokenize
from ..bm25.stats import tokenized_batch
from ..config import ScoringConfig
from ..models import Candidate, Document, RankedResult, SearchQuery
from ..utils import clamp
from .blender import blend_scores
from .boosts import apply_metadata_boosts
from .filters import matches_filters, project_metadata
from .highlights import generate_highlights
from .recency import apply_recency

logger = logging.getLogger(__name__)


class RankingPipeline:
    """
    Scores and orders one query's candidate batch.

    Example:
        >>> pipeline = RankingPipeline(ScoringConfig(recency_enabled=False))
        >>> docs = {"d1": Document(id="d1", title="Vector Search Basics",
        ...                        content="Vector search compares embeddings.")}
        >>> results = pipeline.rank(
        ...     SearchQuery(query="vector search", min_score=0.0),
        ...     [Candidate("d1", 0.9)],
        ...     docs,
        ... )
        >>> results[0].id
        'd1'
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()
        self.scorer = BM25Scorer(k1=self.config.bm25_k1, b=self.config.bm25_b)

    def rank(
        self,
        query: SearchQuery,
        candidates: Sequence[Candidate],
        documents_by_id: Mapping[str, Document],
        now: Optional[datetime] = None
    ) -> List[RankedResult]:
        """
        Rank candidates for a query.

        Args:
            query: Search query (filters, projection, limit, output flags)
            candidates: Vector source hits; their order is the default output order
            documents_by_id: Documents loaded for the candidates (may be partial)
            now: Reference time for recency decay (default: current UTC time)

        Returns:
            Ranked results, at most query.limit
        """
        if not candidates:
            return []

        now = now or datetime.now(timezone.utc)

        survivors = self._select(query, candidates, documents_by_id)
        if not survivors:
            logger.debug(f"No candidates left after filtering for query: {query.query!r}")
            return []

        lexical_scores = self._lexical_scores(query.query, survivors)

        results: List[RankedResult] = []
        for index, (candidate, document) in enumerate(survivors):
            vector_score = clamp(candidate.score)
            lexical_score = lexical_scores[index] if lexical_scores is not None else vector_score
            final_score = self._final_score(document, vector_score, lexical_score, now)
            results.append(self._build_result(query, document, final_score))

        if self.config.resort_by_score:
            # sorted() is stable: ties keep vector source order
            results = sorted(results, key=lambda r: r.score, reverse=True)

        results = results[:query.limit]

        logger.debug(
            f"Ranked {len(results)} of {len(candidates)} candidates for query: {query.query!r} "
            f"(hybrid={self.config.hybrid_enabled}, profile={self.config.scoring_profile})"
        )
        return results

    def _select(self, query, candidates, documents_by_id):
        survivors = []
        missing = 0
        filtered = 0

        for candidate in candidates:
            document = documents_by_id.get(candidate.document_id)
            if document is None:
                missing += 1
                continue
            if not matches_filters(document, query.filters):
                filtered += 1
                continue
            survivors.append((candidate, document))

        if missing:
            logger.debug(f"Skipped {missing} candidates with missing documents")
        if filtered:
            logger.debug(f"Skipped {filtered} candidates failing metadata filters {query.filters}")

        return survivors

    def _lexical_scores(self, query_text: str, survivors) -> Optional[List[float]]:
        """BM25 per surviving document, or None when hybrid mode is off."""
        if not self.config.hybrid_enabled:
            return None

        stem_terms = self.config.bm25_stemming
        query_terms = tokenize(query_text, stem_terms=stem_terms)
        if not query_terms:
            return [0.0] * len(survivors)

        corpus = tokenized_batch((document.content for _, document in survivors), stem_terms=stem_terms)
        stats = CorpusStats.from_corpus(corpus)

        return [
            self.scorer.score(query_terms, doc_terms, stats, term_frequency(doc_terms))
            for doc_terms in corpus
        ]

    def _final_score(self, document: Document, vector_score: float, lexical_score: float, now: datetime) -> float:
        score = blend_scores(vector_score, lexical_score, self.config)
        score = apply_metadata_boosts(document, score, self.config.metadata_boosts)
        return apply_recency(
            document,
            score,
            self.config.recency_enabled,
            self.config.recency_half_life_seconds,
            now=now,
        )

    def _build_result(self, query: SearchQuery, document: Document, score: float) -> RankedResult:
        return RankedResult(
            id=document.id,
            title=document.title,
            content=document.content if query.include_content else None,
            metadata=project_metadata(document.metadata, query.fields),
            score=score,
            highlights=generate_highlights(document.content, query.query) if query.include_highlights else None,
        )


def documents_by_id(documents: Sequence[Document]) -> Dict[str, Document]:
    """Index store results by id (last one wins on duplicates)."""
    return {document.id: document for document in documents}
