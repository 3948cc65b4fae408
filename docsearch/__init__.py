"""
docsearch - hybrid document ranking.

Blends dense-vector similarity with a locally computed BM25 score,
metadata boosts and recency decay. Vector index, embedder and document
store are collaborators (see docsearch.collaborators).
"""

__version__ = "0.3.0"
