"""
BM25 (Best Match 25) lexical scoring for hybrid ranking.

Components:
- tokenizer: Text tokenization for term extraction
- stemmer: Optional Snowball stemming (NLTK)
- stats: Term/document frequency and average length over a document batch
- scorer: BM25 with batch-local IDF, squashed into [0, 1]

Statistics are recomputed for every query from the candidate batch the
vector source returned; there is no global index to keep in sync.
"""

from .tokenizer import tokenize
from .stemmer import stem
from .stats import CorpusStats, average_length, document_frequency, term_frequency
from .scorer import BM25Scorer, idf

__all__ = [
    "tokenize",
    "stem",
    "CorpusStats",
    "term_frequency",
    "document_frequency",
    "average_length",
    "BM25Scorer",
    "idf",
]
