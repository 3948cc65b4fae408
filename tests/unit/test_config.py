"""
Unit tests for scoring configuration and environment loading.
"""

import pytest

pytestmark = pytest.mark.unit

from pydantic import ValidationError

from docsearch.config import ScoringConfig, load_environment


class TestDefaults:

    def test_default_values(self):
        config = ScoringConfig()

        assert config.hybrid_enabled is True
        assert config.hybrid_vector_weight == 0.7
        assert config.hybrid_vector_weight_profile_b == 0.5
        assert config.scoring_profile == "A"
        assert config.recency_enabled is True
        assert config.recency_half_life_seconds == 604800
        assert config.bm25_k1 == 1.2
        assert config.bm25_b == 0.75
        assert config.bm25_stemming is False
        assert config.metadata_boosts == {}
        assert config.resort_by_score is False

    def test_immutable(self):
        config = ScoringConfig()
        with pytest.raises(ValidationError):
            config.hybrid_enabled = False

    @pytest.mark.parametrize("profile,expected", [
        ("A", 0.7),
        ("B", 0.5),
        ("b", 0.5),
        (" B ", 0.5),
        ("C", 0.7),
        ("", 0.7),
    ])
    def test_active_vector_weight(self, profile, expected):
        config = ScoringConfig(scoring_profile=profile)
        assert config.active_vector_weight == expected

    def test_bm25_b_bounds(self):
        with pytest.raises(ValidationError):
            ScoringConfig(bm25_b=1.5)
        with pytest.raises(ValidationError):
            ScoringConfig(bm25_k1=-0.1)


class TestFromEnv:

    def test_no_env_gives_defaults(self):
        assert ScoringConfig.from_env() == ScoringConfig()

    def test_reads_all_variables(self, monkeypatch):
        monkeypatch.setenv("SEARCH_HYBRID_ENABLED", "false")
        monkeypatch.setenv("SEARCH_HYBRID_VECTOR_WEIGHT", "0.6")
        monkeypatch.setenv("SEARCH_HYBRID_VECTOR_WEIGHT_PROFILE_B", "0.4")
        monkeypatch.setenv("SEARCH_SCORING_PROFILE", "B")
        monkeypatch.setenv("SEARCH_RECENCY_ENABLED", "0")
        monkeypatch.setenv("SEARCH_RECENCY_HALF_LIFE_SECONDS", "3600")
        monkeypatch.setenv("SEARCH_BM25_K1", "1.5")
        monkeypatch.setenv("SEARCH_BM25_B", "0.5")
        monkeypatch.setenv("SEARCH_BM25_STEMMING", "yes")
        monkeypatch.setenv("SEARCH_RESORT_BY_SCORE", "TRUE")
        monkeypatch.setenv("SEARCH_METADATA_BOOSTS", '{"topic": 0.1, "tier": -0.05}')

        config = ScoringConfig.from_env()

        assert config.hybrid_enabled is False
        assert config.hybrid_vector_weight == 0.6
        assert config.active_vector_weight == 0.4
        assert config.recency_enabled is False
        assert config.recency_half_life_seconds == 3600
        assert config.bm25_k1 == 1.5
        assert config.bm25_b == 0.5
        assert config.bm25_stemming is True
        assert config.resort_by_score is True
        assert config.metadata_boosts == {"topic": 0.1, "tier": -0.05}

    def test_blank_values_use_defaults(self, monkeypatch):
        monkeypatch.setenv("SEARCH_HYBRID_VECTOR_WEIGHT", "")
        monkeypatch.setenv("SEARCH_RECENCY_ENABLED", "  ")

        config = ScoringConfig.from_env()

        assert config.hybrid_vector_weight == 0.7
        assert config.recency_enabled is True

    @pytest.mark.parametrize("name,value", [
        ("SEARCH_HYBRID_ENABLED", "maybe"),
        ("SEARCH_HYBRID_VECTOR_WEIGHT", "heavy"),
        ("SEARCH_RECENCY_HALF_LIFE_SECONDS", "1.5"),
        ("SEARCH_METADATA_BOOSTS", "not json"),
        ("SEARCH_METADATA_BOOSTS", "[0.1]"),
        ("SEARCH_METADATA_BOOSTS", '{"topic": "high"}'),
        ("SEARCH_BM25_B", "2"),
    ])
    def test_malformed_values_raise(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValueError):
            ScoringConfig.from_env()


class TestLoadEnvironment:

    def test_env_local_takes_priority(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SEARCH_SCORING_PROFILE", "marker")
        (tmp_path / ".env").write_text("SEARCH_SCORING_PROFILE=A\n")
        (tmp_path / ".env.local").write_text("SEARCH_SCORING_PROFILE=B\n")

        loaded = load_environment(tmp_path)

        assert loaded == tmp_path / ".env.local"
        assert ScoringConfig.from_env().scoring_profile == "B"

    def test_falls_back_to_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SEARCH_BM25_K1", "marker")
        (tmp_path / ".env").write_text("SEARCH_BM25_K1=2.0\n")

        assert load_environment(tmp_path) == tmp_path / ".env"
        assert ScoringConfig.from_env().bm25_k1 == 2.0

    def test_no_files(self, tmp_path):
        assert load_environment(tmp_path) is None
