"""Shared fixtures for integration tests

Integration tests wire the REAL stack end to end:
- Embedder from EMBEDDER_TYPE (hash by default, sentence-transformers with "local")
- In-memory vector index and document store seeded with the demo corpus
- SearchService with ScoringConfig.from_env()

NO MOCKS - these tests verify the collaborators work together.

To run integration tests:
    pytest tests/integration/
    EMBEDDER_TYPE=local pytest tests/integration/   # real embedding model

To skip integration tests explicitly:
    pytest tests/unit/
    pytest -m 'not integration'
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from docsearch.collaborators import InMemoryDocumentStore, InMemoryVectorIndex, get_embedder
from docsearch.collaborators.factory import EmbedderFactory
from docsearch.config import ScoringConfig, load_environment
from docsearch.search_service import SearchService
from docsearch.seed import seed_demo_documents

# Load .env.local for integration tests (same as scripts/run_eval.py does)
load_environment(Path(__file__).parent.parent.parent)

SEED_TIME = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def embedder():
    """
    Configured embedder, shared across the session.

    A local model is loaded once; FAILS LOUDLY if EMBEDDER_TYPE is invalid.
    """
    instance = get_embedder()
    yield instance
    EmbedderFactory.cleanup()


@pytest.fixture
def seeded_corpus(embedder):
    """Fresh store and index with the demo documents"""
    store = InMemoryDocumentStore()
    index = InMemoryVectorIndex()
    documents = seed_demo_documents(store, index, embedder, now=SEED_TIME)
    return store, index, documents


@pytest.fixture
def search_service(embedder, seeded_corpus):
    store, index, _ = seeded_corpus
    return SearchService(embedder, index, store, config=ScoringConfig.from_env())


@pytest.fixture
def seed_time():
    """Creation time of the seeded documents (no recency decay at this instant)"""
    return SEED_TIME
