"""Unit test configuration - isolated environment and shared documents"""

from datetime import datetime, timedelta, timezone

import pytest

from docsearch.collaborators.factory import EmbedderFactory
from docsearch.config import ScoringConfig
from docsearch.models import Candidate, Document

CONFIG_ENV_VARS = [
    "SEARCH_HYBRID_ENABLED",
    "SEARCH_HYBRID_VECTOR_WEIGHT",
    "SEARCH_HYBRID_VECTOR_WEIGHT_PROFILE_B",
    "SEARCH_SCORING_PROFILE",
    "SEARCH_RECENCY_ENABLED",
    "SEARCH_RECENCY_HALF_LIFE_SECONDS",
    "SEARCH_BM25_K1",
    "SEARCH_BM25_B",
    "SEARCH_BM25_STEMMING",
    "SEARCH_RESORT_BY_SCORE",
    "SEARCH_METADATA_BOOSTS",
    "EMBEDDER_TYPE",
    "EMBEDDER_MODEL",
    "EMBEDDER_DIMENSIONS",
    "EMBEDDER_FALLBACK",
]

FIXED_NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """
    Unit tests never see the developer's SEARCH_*/EMBEDDER_* settings,
    and never share a cached embedder.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    EmbedderFactory.cleanup()
    yield
    EmbedderFactory.cleanup()


@pytest.fixture
def fixed_now():
    """Reference time for recency decay"""
    return FIXED_NOW


@pytest.fixture
def demo_documents():
    """The three demo documents, all fresh at FIXED_NOW"""
    return {
        "doc-vector": Document(
            id="doc-vector",
            title="Vector Search Basics",
            content="Vector search finds similar documents by comparing embeddings.",
            metadata={"topic": "search"},
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
        ),
        "doc-ranking": Document(
            id="doc-ranking",
            title="Ranking Signals",
            content="Ranking blends relevance signals like semantic similarity and metadata boosts.",
            metadata={"topic": "ranking"},
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
        ),
        "doc-latency": Document(
            id="doc-latency",
            title="Latency Budgets",
            content="Latency budgets keep search responses under target p95 milliseconds.",
            metadata={"topic": "performance"},
            created_at=FIXED_NOW - timedelta(days=1),
            updated_at=FIXED_NOW - timedelta(days=1),
        ),
    }


@pytest.fixture
def demo_candidates():
    """Vector source hits in source order"""
    return [
        Candidate("doc-vector", 0.82),
        Candidate("doc-ranking", 0.75),
        Candidate("doc-latency", 0.60),
    ]


@pytest.fixture
def profile_a_config():
    """Hybrid scoring, profile A (vector weight 0.7), no recency decay"""
    return ScoringConfig(
        hybrid_enabled=True,
        hybrid_vector_weight=0.7,
        scoring_profile="A",
        recency_enabled=False,
    )
