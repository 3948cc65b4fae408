"""
Optional stemming for lexical scoring (NLTK Snowball, English).

Enabled with ScoringConfig.bm25_stemming so that "embeddings" in a query
overlaps "embedding" in content. Query and content go through the same
function, so only consistency matters, not linguistic accuracy.
"""

from functools import lru_cache

from nltk.stem.snowball import SnowballStemmer

_snowball = SnowballStemmer("english")


@lru_cache(maxsize=8192)
def stem(term: str) -> str:
    """Reduce a lower-cased term to its Snowball stem ("ranking" -> "rank")."""
    return _snowball.stem(term)
