"""Query-matching sentence snippets for search results."""

import re
from typing import List, Optional

MAX_HIGHLIGHTS = 3

_SENTENCE_SPLIT = re.compile(r'[.!?]')


def generate_highlights(content: Optional[str], query: Optional[str], max_highlights: int = MAX_HIGHLIGHTS) -> List[str]:
    """
    Extract up to `max_highlights` sentence fragments mentioning a query term.

    Content is split on '.', '!' and '?'. A fragment is relevant when its
    lowercase form contains any lowercase whitespace-delimited query term as
    a substring. Fragments keep their original order and are trimmed.

    Example:
        >>> generate_highlights(
        ...     "Vector search finds similar documents. Ranking uses embeddings.",
        ...     "embeddings",
        ... )
        ['Ranking uses embeddings']
    """
    if not content or not query:
        return []

    query_terms = query.lower().split()
    if not query_terms:
        return []

    highlights: List[str] = []
    for sentence in _SENTENCE_SPLIT.split(content):
        sentence_lower = sentence.lower()
        if not any(term in sentence_lower for term in query_terms):
            continue

        highlight = sentence.strip()
        if highlight:
            highlights.append(highlight)

        if len(highlights) >= max_highlights:
            break

    return highlights
