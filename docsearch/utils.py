"""Utility functions for docsearch"""

import hashlib
import math
from typing import Union


def clamp(value: float) -> float:
    """
    Clamp a score into [0, 1].

    NaN and +/-Infinity are treated as 0.0 so they never leak past a
    component boundary.

    Examples:
        >>> clamp(1.7)
        1.0
        >>> clamp(-0.2)
        0.0
        >>> clamp(float("nan"))
        0.0
    """
    if value is None:
        return 0.0
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return max(0.0, min(1.0, value))


def calculate_content_hash(content: Union[str, bytes]) -> str:
    """
    Calculate SHA256 hash of document content

    Args:
        content: Document text (str, encoded as UTF-8) or raw bytes

    Returns:
        Hexadecimal hash string (64 characters)

    Examples:
        >>> len(calculate_content_hash("Vector search finds similar documents."))
        64
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    return hashlib.sha256(content).hexdigest()
