"""
Weighted blend of vector similarity and lexical relevance.

    blended = w × vector + (1 - w) × lexical

w comes from the active scoring profile: "B" (case-insensitive) uses
hybrid_vector_weight_profile_b, every other label uses
hybrid_vector_weight. The weight is clamped to [0, 1] first, so the
lexical weight is always 1 - w.
"""

from ..config import ScoringConfig
from ..utils import clamp


def blend_scores(vector_score: float, lexical_score: float, config: ScoringConfig) -> float:
    """
    Combine vector and lexical scores into one value in [0, 1].

    With hybrid mode disabled the lexical score is ignored.

    Example:
        >>> blend_scores(1.0, 0.0, ScoringConfig(hybrid_vector_weight=0.8))
        0.8
    """
    if not config.hybrid_enabled:
        return clamp(vector_score)

    w = clamp(config.active_vector_weight)
    return clamp(w * vector_score + (1 - w) * lexical_score)
