"""
Evaluation harness for search quality.

Runs gold queries through the search and computes:
- MRR: reciprocal rank of the first relevant hit
- NDCG@k: binary relevance, log2 discount, ideal DCG from min(|gold|, k)
- Recall@k: |hits[:k] ∩ gold| / |gold| (0 when gold is empty)

Aggregates are plain means over queries.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

import numpy as np

from .collaborators.memory import InMemoryDocumentStore
from .models import RankedResult, SearchQuery

logger = logging.getLogger(__name__)

CURATED_QUERIES = [
    ("vector search embeddings", "Vector Search Basics"),
    ("ranking signals metadata boosts", "Ranking Signals"),
    ("latency budget p95", "Latency Budgets"),
    ("recency decay freshness", "Latency Budgets"),
]


@dataclass
class EvalQuery:
    query: str
    relevant_document_ids: List[str] = field(default_factory=list)


@dataclass
class QueryEval:
    query: str
    rr: float
    ndcg: float
    recall: float


@dataclass
class EvalResult:
    total_queries: int
    mrr: float
    ndcg: float
    recall_at_k: float
    details: List[QueryEval] = field(default_factory=list)


def reciprocal_rank(hits: Sequence[str], gold: Sequence[str]) -> float:
    """
    1 / position of the first relevant hit (0 if none).

    Example:
        >>> reciprocal_rank(["a", "b", "c"], ["b"])
        0.5
    """
    gold_set = set(gold)
    for position, doc_id in enumerate(hits, start=1):
        if doc_id in gold_set:
            return 1.0 / position
    return 0.0


def ndcg_at_k(hits: Sequence[str], gold: Sequence[str], k: int) -> float:
    """
    Normalized discounted cumulative gain over the top k hits.

    Example:
        >>> ndcg_at_k(["a", "b"], ["a"], 5)
        1.0
    """
    gold_set = set(gold)

    dcg = 0.0
    for i, doc_id in enumerate(hits[:k]):
        if doc_id in gold_set:
            dcg += 1.0 / math.log2(i + 2)

    idcg = sum(1.0 / math.log2(i + 2) for i in range(min(len(gold), k)))
    if idcg == 0:
        return 0.0
    return dcg / idcg


def recall_at_k(hits: Sequence[str], gold: Sequence[str], k: int) -> float:
    """
    Fraction of gold documents found in the top k hits.

    Example:
        >>> recall_at_k(["a", "b", "c"], ["c", "d"], 2)
        0.0
    """
    if not gold:
        return 0.0
    gold_set = set(gold)
    found = sum(1 for doc_id in hits[:k] if doc_id in gold_set)
    return found / len(gold)


SearchFn = Callable[[SearchQuery], List[RankedResult]]


class Evaluator:
    """
    Runs gold queries through a search function and aggregates metrics.

    Args:
        search: Callable taking a SearchQuery (e.g. SearchService.search)
    """

    def __init__(self, search: SearchFn):
        self.search = search

    def run_eval(self, queries: Sequence[EvalQuery], k: int) -> EvalResult:
        if not queries:
            return EvalResult(total_queries=0, mrr=0.0, ndcg=0.0, recall_at_k=0.0, details=[])

        details = []
        for q in queries:
            request = SearchQuery(
                query=q.query,
                limit=k,
                min_score=0.0,
                include_content=False,
                include_highlights=False,
            )
            hits = [result.id for result in self.search(request)]

            details.append(QueryEval(
                query=q.query,
                rr=reciprocal_rank(hits, q.relevant_document_ids),
                ndcg=ndcg_at_k(hits, q.relevant_document_ids, k),
                recall=recall_at_k(hits, q.relevant_document_ids, k),
            ))

        result = EvalResult(
            total_queries=len(queries),
            mrr=float(np.mean([d.rr for d in details])),
            ndcg=float(np.mean([d.ndcg for d in details])),
            recall_at_k=float(np.mean([d.recall for d in details])),
            details=details,
        )
        logger.info(
            f"Eval completed: {result.total_queries} queries, MRR={result.mrr:.4f} "
            f"NDCG@{k}={result.ndcg:.4f} Recall@{k}={result.recall_at_k:.4f}"
        )
        return result

    def run_curated_eval(self, store: InMemoryDocumentStore, k: int = 5) -> EvalResult:
        """Evaluate the curated queries against the seeded demo corpus."""
        queries = [
            EvalQuery(query=text, relevant_document_ids=_lookup(store, title))
            for text, title in CURATED_QUERIES
        ]
        return self.run_eval(queries, k)


def _lookup(store: InMemoryDocumentStore, title: str) -> List[str]:
    document = store.find_by_title(title)
    if document is None:
        logger.warning(f"Gold document not found: {title}")
        return []
    return [document.id]
