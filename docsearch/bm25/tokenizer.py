"""
Tokenizer for BM25 text processing.

Tokenization pipeline:
1. Lowercase conversion
2. Split on every run of non-alphanumeric characters (underscore included)
3. Drop empty strings
4. Optional Snowball stemming

Unlike many search tokenizers no stopwords are removed: corpus statistics
are computed per query over the candidate batch, and IDF already pushes
ubiquitous terms towards zero.
"""

import re
from typing import List, Optional

from .stemmer import stem

# Unicode letters and digits; underscore is a separator
_TERM_PATTERN = re.compile(r'[^\W_]+')


def tokenize(text: Optional[str], stem_terms: bool = False) -> List[str]:
    """
    Tokenize text into lowercase alphanumeric terms.

    Args:
        text: Input text (None and blank strings are allowed)
        stem_terms: Apply Snowball stemming to every term

    Returns:
        List of lowercase terms in original order (duplicates kept)

    Examples:
        >>> tokenize("Vector Search Basics")
        ['vector', 'search', 'basics']

        >>> tokenize("p95 latency-budget, under_target!")
        ['p95', 'latency', 'budget', 'under', 'target']

        >>> tokenize("Ranking signals", stem_terms=True)
        ['rank', 'signal']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []

    tokens = _TERM_PATTERN.findall(text.lower())

    if stem_terms:
        tokens = [stem(t) for t in tokens]

    return tokens
