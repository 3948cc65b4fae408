"""
Exponential recency decay.

    decay = 0.5 ^ (age_seconds / half_life_seconds)

A document exactly one half-life old keeps half its score. Age is the
absolute distance to "now", so timestamps in the future (clock skew)
decay the same way as past ones.
"""

from datetime import datetime, timezone
from typing import Optional

from ..models import Document
from ..utils import clamp


def _as_utc(moment: datetime) -> datetime:
    # Naive timestamps are treated as UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def document_age_seconds(document: Document, now: Optional[datetime] = None) -> float:
    """
    Absolute age of the document's freshness timestamp in seconds.

    Documents without updated_at and created_at are treated as brand new (0).
    """
    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    reference = document.freshness_timestamp
    if reference is None:
        return 0.0
    return abs((now - _as_utc(reference)).total_seconds())


def apply_recency(
    document: Document,
    score: float,
    enabled: bool,
    half_life_seconds: float,
    now: Optional[datetime] = None
) -> float:
    """
    Multiply the score by the document's freshness decay.

    Args:
        document: Document whose updated_at/created_at drives the decay
        score: Score before decay
        enabled: Decay switch; disabled returns clamp(score)
        half_life_seconds: Half-life; <= 0 disables decay
        now: Reference time (default: current UTC time)

    Returns:
        Decayed score in [0, 1]
    """
    if not enabled or half_life_seconds <= 0:
        return clamp(score)

    age = document_age_seconds(document, now)
    decay = 0.5 ** (age / half_life_seconds)
    return clamp(score * decay)
