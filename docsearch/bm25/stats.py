"""
Corpus statistics for BM25 over an in-memory document batch.

The batch is the candidate set of a single query, not the whole corpus:
statistics are rebuilt for every query and never shared between calls.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def term_frequency(terms: Iterable[str]) -> Dict[str, int]:
    """
    Count occurrences of each term.

    Example:
        >>> term_frequency(["vector", "search", "vector"])
        {'vector': 2, 'search': 1}
    """
    return dict(Counter(terms))


def document_frequency(corpus: Sequence[Sequence[str]]) -> Dict[str, int]:
    """
    Count, for each term, the number of distinct documents containing it.

    Args:
        corpus: One term list per document

    Example:
        >>> document_frequency([["vector", "vector"], ["vector", "ranking"]])
        {'vector': 2, 'ranking': 1}
    """
    df: Counter = Counter()
    for terms in corpus:
        df.update(set(terms))
    return dict(df)


def average_length(corpus: Sequence[Sequence[str]]) -> float:
    """
    Mean number of terms per document; 1.0 for an empty corpus.

    Example:
        >>> average_length([["a", "b"], ["c", "d", "e", "f"]])
        3.0
        >>> average_length([])
        1.0
    """
    if not corpus:
        return 1.0
    return sum(len(terms) for terms in corpus) / len(corpus)


@dataclass(frozen=True)
class CorpusStats:
    """Batch-level statistics consumed by BM25Scorer."""
    document_count: int = 0
    document_frequencies: Dict[str, int] = field(default_factory=dict)
    average_length: float = 1.0

    @classmethod
    def from_corpus(cls, corpus: Sequence[Sequence[str]]) -> "CorpusStats":
        """
        Build statistics from tokenized documents.

        A batch whose documents are all empty has mean length 0; 1.0 is used
        instead so length normalization never divides by zero.
        """
        avg_len = average_length(corpus)
        if avg_len <= 0:
            avg_len = 1.0

        stats = cls(
            document_count=len(corpus),
            document_frequencies=document_frequency(corpus),
            average_length=avg_len,
        )
        logger.debug(
            f"Built corpus stats: {stats.document_count} docs, "
            f"{len(stats.document_frequencies)} unique terms, avgdl={stats.average_length:.2f}"
        )
        return stats

    def df(self, term: str) -> int:
        return self.document_frequencies.get(term, 0)


def tokenized_batch(texts: Iterable[str], stem_terms: bool = False) -> List[List[str]]:
    """Tokenize every text of a batch (helper for building CorpusStats)."""
    return [tokenize(text, stem_terms=stem_terms) for text in texts]
