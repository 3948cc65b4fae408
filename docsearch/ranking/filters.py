"""Metadata filtering and field projection for ranked results."""

from typing import Dict, Mapping, Optional, Sequence

from ..models import Document


def matches_filters(document: Document, filters: Optional[Mapping[str, str]]) -> bool:
    """
    True if every filter entry matches the document metadata.

    Keys must be present exactly; values are compared after lower(), character
    by character, so "ß" does not match "SS" the way it would under casefold().
    An empty filter matches everything.

    Examples:
        >>> doc = Document(id="1", title="t", metadata={"topic": "Search"})
        >>> matches_filters(doc, {"topic": "search"})
        True
        >>> matches_filters(doc, {"lang": "en"})
        False
    """
    if not filters:
        return True

    metadata = document.metadata or {}
    for key, expected in filters.items():
        actual = metadata.get(key)
        if actual is None:
            return False
        if str(actual).lower() != str(expected).lower():
            return False
    return True


def project_metadata(metadata: Optional[Mapping[str, str]], fields: Optional[Sequence[str]]) -> Dict[str, str]:
    """
    Keep only the requested metadata keys (all metadata if none requested).

    Requested keys missing from the document are skipped.
    """
    metadata = metadata or {}
    if not fields:
        return dict(metadata)
    return {key: metadata[key] for key in fields if key in metadata}
