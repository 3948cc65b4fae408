"""
Integration tests for search over the seeded demo corpus and the curated
evaluation.
"""

import pytest

from docsearch.cache import QueryCache
from docsearch.config import ScoringConfig
from docsearch.evaluation import CURATED_QUERIES, Evaluator
from docsearch.models import SearchQuery
from docsearch.search_service import SearchService

pytestmark = pytest.mark.integration


class TestSeededSearch:

    def test_seeded_corpus(self, seeded_corpus):
        store, index, documents = seeded_corpus

        assert len(documents) == 3
        assert len(store) == 3
        assert len(index) == 3

    def test_exact_content_query_ranks_document_first(self, search_service, seeded_corpus, seed_time):
        _, _, documents = seeded_corpus
        target = documents[0]

        results = search_service.search(SearchQuery(query=target.content, min_score=0.0), now=seed_time)

        assert results[0].id == target.id
        assert results[0].title == "Vector Search Basics"
        assert all(0.0 <= r.score <= 1.0 for r in results)

    def test_metadata_filter_and_projection(self, search_service, seeded_corpus, seed_time):
        _, _, documents = seeded_corpus
        target = documents[2]

        results = search_service.search(
            SearchQuery(
                query=target.content,
                min_score=0.0,
                filters={"topic": "PERFORMANCE"},
                fields=["topic"],
                include_content=False,
            ),
            now=seed_time,
        )

        assert [r.id for r in results] == [target.id]
        assert results[0].metadata == {"topic": "performance"}
        assert results[0].content is None

    def test_more_like_this_excludes_source(self, search_service, seeded_corpus, seed_time):
        _, _, documents = seeded_corpus

        results = search_service.find_similar_documents(documents[1].id, min_score=0.0, now=seed_time)

        assert documents[1].id not in [r.id for r in results]

    def test_cached_search_returns_same_results(self, embedder, seeded_corpus, seed_time):
        store, index, documents = seeded_corpus
        service = SearchService(embedder, index, store, config=ScoringConfig.from_env(), cache=QueryCache())
        query = SearchQuery(query=documents[0].content, min_score=0.0)

        first = service.search(query, now=seed_time)
        second = service.search(query, now=seed_time)

        assert first == second
        assert service.cache.hits == 1


class TestCuratedEval:

    def test_metrics_in_range(self, search_service, seeded_corpus):
        store, _, _ = seeded_corpus

        result = Evaluator(search_service.search).run_curated_eval(store, k=5)

        assert result.total_queries == len(CURATED_QUERIES)
        assert len(result.details) == len(CURATED_QUERIES)
        for value in (result.mrr, result.ndcg, result.recall_at_k):
            assert 0.0 <= value <= 1.0

    def test_deterministic(self, search_service, seeded_corpus):
        store, _, _ = seeded_corpus
        evaluator = Evaluator(search_service.search)

        first = evaluator.run_curated_eval(store, k=3)
        second = evaluator.run_curated_eval(store, k=3)

        assert (first.mrr, first.ndcg, first.recall_at_k) == (second.mrr, second.ndcg, second.recall_at_k)
