"""
BM25 scorer with batch-local IDF.

BM25 (Best Match 25) is a probabilistic ranking function used for information retrieval.
IDF is computed over the current candidate batch (see stats.CorpusStats), so
no global statistics have to be maintained alongside the vector index.

Formula:
    idf(term) = ln((N - df + 0.5) / (df + 0.5) + 1)
    score(term, doc) = idf × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × dl/avgdl))

Where:
    N = number of documents in the batch
    df = number of batch documents containing the term
    tf = term frequency in document
    k1 = term frequency saturation parameter (default: 1.2)
    b = length normalization parameter (default: 0.75)
    dl = document length (number of tokens)
    avgdl = average document length over the batch

Normalization:
    The summed score is squashed with bm25 / (bm25 + 1) so it can be
    blended with a [0, 1] vector similarity. The squash is monotonic, so
    ranking order is preserved, and a raw 0 stays exactly 0.
"""

import math
from typing import Dict, Iterable, Optional, Sequence

from .stats import CorpusStats, term_frequency


def idf(document_count: int, df: int) -> float:
    """
    Smoothed inverse document frequency (never negative).

    Example:
        >>> round(idf(3, 1), 4)
        0.9808
    """
    return math.log((document_count - df + 0.5) / (df + 0.5) + 1)


class BM25Scorer:
    """
    BM25 scoring against batch-level corpus statistics.
    """

    def __init__(self, k1: float = 1.2, b: float = 0.75):
        """
        Initialize BM25 scorer.

        Args:
            k1: Term frequency saturation parameter
                Higher = more weight to term frequency
                Range: 1.2 - 2.0
                Default: 1.2 (standard)

            b: Length normalization parameter
                Higher = more penalty for long documents
                Range: 0.0 - 1.0
                Default: 0.75 (standard)
        """
        self.k1 = k1
        self.b = b

    def raw_score(
        self,
        query_terms: Iterable[str],
        doc_terms: Sequence[str],
        stats: CorpusStats,
        doc_term_frequencies: Optional[Dict[str, int]] = None
    ) -> float:
        """
        Compute the unbounded BM25 score for one document.

        Args:
            query_terms: Tokenized query (duplicates are counted once)
            doc_terms: Tokenized document
            stats: Statistics of the batch the document belongs to
            doc_term_frequencies: Precomputed term frequencies of doc_terms

        Returns:
            BM25 score (>= 0, higher = more relevant)
        """
        if stats.document_count == 0 or not doc_terms:
            return 0.0

        tf_map = doc_term_frequencies if doc_term_frequencies is not None else term_frequency(doc_terms)
        doc_len = len(doc_terms)
        avgdl = stats.average_length if stats.average_length > 0 else 1.0

        score = 0.0
        for term in set(query_terms):
            df = stats.df(term)
            if df == 0:
                continue  # Not in the batch: contributes nothing

            tf = tf_map.get(term, 0)
            if tf == 0:
                continue

            numerator = tf * (self.k1 + 1)
            denominator = tf + self.k1 * (
                1 - self.b + self.b * (doc_len / avgdl)
            )

            score += idf(stats.document_count, df) * numerator / denominator

        return score

    def score(
        self,
        query_terms: Iterable[str],
        doc_terms: Sequence[str],
        stats: CorpusStats,
        doc_term_frequencies: Optional[Dict[str, int]] = None
    ) -> float:
        """
        Compute BM25 squashed into [0, 1).

        Example:
            >>> from docsearch.bm25.stats import CorpusStats
            >>> corpus = [["vector", "search"], ["ranking", "signals"]]
            >>> stats = CorpusStats.from_corpus(corpus)
            >>> BM25Scorer().score(["vector"], corpus[0], stats) > 0
            True
            >>> BM25Scorer().score(["latency"], corpus[0], stats)
            0.0
        """
        raw = self.raw_score(query_terms, doc_terms, stats, doc_term_frequencies)
        if raw <= 0 or math.isnan(raw) or math.isinf(raw):
            return 0.0
        return raw / (raw + 1)
