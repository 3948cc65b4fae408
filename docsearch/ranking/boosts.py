"""Additive metadata boosts."""

from typing import Mapping, Optional

from ..models import Document
from ..utils import clamp


def apply_metadata_boosts(
    document: Document,
    score: float,
    metadata_boosts: Optional[Mapping[str, float]]
) -> float:
    """
    Add the boost of every configured key present in the document metadata.

    Only key presence matters, the metadata value is ignored. The result is
    clamped even when no boost applies.

    Example:
        >>> doc = Document(id="1", title="t", metadata={"topic": "search"})
        >>> round(apply_metadata_boosts(doc, 0.5, {"topic": 0.2, "other": 0.1}), 6)
        0.7
    """
    if not metadata_boosts:
        return clamp(score)

    metadata = document.metadata or {}
    boosted = score
    for key, boost in metadata_boosts.items():
        if key in metadata:
            boosted += boost

    return clamp(boosted)
