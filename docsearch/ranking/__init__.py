"""
Hybrid ranking: score blending, boosts, recency decay and the pipeline
that applies them to a candidate batch.

Usage:
    from docsearch.ranking import RankingPipeline

    pipeline = RankingPipeline(ScoringConfig.from_env())
    results = pipeline.rank(query, candidates, documents_by_id)
"""

from .blender import blend_scores
from .boosts import apply_metadata_boosts
from .filters import matches_filters, project_metadata
from .highlights import generate_highlights
from .pipeline import RankingPipeline, documents_by_id
from .recency import apply_recency, document_age_seconds

__all__ = [
    "blend_scores",
    "apply_metadata_boosts",
    "apply_recency",
    "document_age_seconds",
    "matches_filters",
    "project_metadata",
    "generate_highlights",
    "RankingPipeline",
    "documents_by_id",
]
