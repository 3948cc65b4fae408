"""Seeds a small set of demo documents for evaluation and smoke tests."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .collaborators.base import BaseEmbedder
from .collaborators.memory import InMemoryDocumentStore, InMemoryVectorIndex
from .models import Document
from .utils import calculate_content_hash

logger = logging.getLogger(__name__)

DEMO_DOCUMENTS = [
    (
        "Vector Search Basics",
        "Vector search finds similar documents by comparing embeddings.",
        {"topic": "search"},
    ),
    (
        "Ranking Signals",
        "Ranking blends relevance signals like semantic similarity and metadata boosts.",
        {"topic": "ranking"},
    ),
    (
        "Latency Budgets",
        "Latency budgets keep search responses under target p95 milliseconds.",
        {"topic": "performance"},
    ),
]


def make_document(
    title: str,
    content: str,
    metadata: Optional[Dict[str, str]] = None,
    created_at: Optional[datetime] = None,
    document_id: Optional[str] = None,
) -> Document:
    """Build a new document with a fresh id and its content hash."""
    created_at = created_at or datetime.now(timezone.utc)
    return Document(
        id=document_id or str(uuid.uuid4()),
        title=title,
        content=content,
        metadata=dict(metadata or {}),
        created_at=created_at,
        updated_at=created_at,
        content_hash=calculate_content_hash(content),
    )


def seed_demo_documents(
    store: InMemoryDocumentStore,
    index: InMemoryVectorIndex,
    embedder: BaseEmbedder,
    now: Optional[datetime] = None,
) -> List[Document]:
    """
    Store and index the demo corpus.

    Documents whose content hash is already stored are left untouched, so
    seeding twice is a no-op.

    Returns:
        The demo documents as stored (existing or newly created)
    """
    seeded = []
    for title, content, metadata in DEMO_DOCUMENTS:
        document = make_document(title, content, metadata, created_at=now)

        existing = store.find_by_content_hash(document.content_hash)
        if existing is not None:
            logger.info(f"Seed document already present: {existing.title}")
            seeded.append(existing)
            continue

        vector = embedder.embed(document.content)
        if not vector:
            logger.warning(f"Skipping seed document without embedding: {title}")
            continue

        vector_id = index.add(document.id, vector)
        document = document.model_copy(update={"vector_id": vector_id})
        store.save(document)
        logger.info(f"Seeded {document.title}")
        seeded.append(document)

    return seeded
