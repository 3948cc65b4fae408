"""
Data model shared by the ranking pipeline, the collaborators and the
search service.

Documents are immutable snapshots owned by the document store; the
ranking pipeline reads them and never mutates them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Stored document snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque unique document key")
    title: str
    content: str = ""
    metadata: Dict[str, str] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    vector_id: Optional[str] = Field(None, description="Reference to the vector in the external index")
    content_hash: Optional[str] = Field(None, description="SHA256 of content (64 hex chars)")

    @property
    def freshness_timestamp(self) -> Optional[datetime]:
        """Last-updated time, falling back to created time."""
        return self.updated_at if self.updated_at is not None else self.created_at


class SearchQuery(BaseModel):
    query: str = Field(..., description="Free-text query")
    limit: int = Field(default=10, gt=0, description="Maximum number of results")
    min_score: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Similarity threshold applied by the vector source (0.0-1.0)"
    )
    filters: Dict[str, str] = Field(
        default_factory=dict,
        description="Metadata filters; every entry must match (case-insensitive value comparison)"
    )
    fields: List[str] = Field(
        default_factory=list,
        description="Metadata keys to return; empty returns all metadata"
    )
    include_content: bool = True
    include_highlights: bool = True


class RankedResult(BaseModel):
    id: str
    title: str
    content: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)
    score: float = Field(..., ge=0.0, le=1.0)
    highlights: Optional[List[str]] = None


@dataclass(frozen=True)
class Candidate:
    """Approximate nearest-neighbor hit from the vector source."""
    document_id: str
    score: float    # Not guaranteed to be in [0, 1]
