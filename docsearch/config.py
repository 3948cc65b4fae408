"""
Scoring configuration for the hybrid ranking pipeline.

The configuration is an explicit value passed into every scoring call;
nothing reads global state while ranking. `ScoringConfig.from_env()` is the
single place environment variables are consulted.

Environment (all optional, defaults in brackets):
    SEARCH_HYBRID_ENABLED                 [true]
    SEARCH_HYBRID_VECTOR_WEIGHT           [0.7]   profile A
    SEARCH_HYBRID_VECTOR_WEIGHT_PROFILE_B [0.5]
    SEARCH_SCORING_PROFILE                [A]
    SEARCH_RECENCY_ENABLED                [true]
    SEARCH_RECENCY_HALF_LIFE_SECONDS      [604800]  7 days, <= 0 disables
    SEARCH_BM25_K1                        [1.2]
    SEARCH_BM25_B                         [0.75]
    SEARCH_BM25_STEMMING                  [false]
    SEARCH_RESORT_BY_SCORE                [false]
    SEARCH_METADATA_BOOSTS                [{}]    JSON object, key -> boost
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def load_environment(project_root: Optional[Path] = None) -> Optional[Path]:
    """
    Load .env.local (highest priority) or .env into os.environ.

    Returns:
        Path of the file that was loaded, or None if neither exists
    """
    root = project_root or PROJECT_ROOT
    env_local = root / ".env.local"
    env_file = root / ".env"

    if env_local.exists():
        load_dotenv(env_local, override=True)
        logger.info(f"Loaded environment from: {env_local}")
        return env_local
    if env_file.exists():
        load_dotenv(env_file, override=True)
        logger.info(f"Loaded environment from: {env_file}")
        return env_file

    logger.debug("No .env.local or .env file found - using system environment variables only")
    return None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got: {value!r}")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got: {value!r}") from None


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {value!r}") from None


def _env_boosts(name: str) -> Dict[str, float]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return {}
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise ValueError(f"{name} must be a JSON object of key -> boost: {e}") from e
    if not isinstance(parsed, dict):
        raise ValueError(f"{name} must be a JSON object of key -> boost, got: {type(parsed).__name__}")
    try:
        return {str(k): float(v) for k, v in parsed.items()}
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} boost values must be numbers: {e}") from e


class ScoringConfig(BaseModel):
    """Weights and switches for hybrid scoring (immutable)."""

    model_config = ConfigDict(frozen=True)

    hybrid_enabled: bool = Field(default=True, description="Blend lexical and vector signals")
    hybrid_vector_weight: float = Field(default=0.7, description="Vector weight for scoring profile A")
    hybrid_vector_weight_profile_b: float = Field(default=0.5, description="Vector weight for scoring profile B")
    scoring_profile: str = Field(default="A", description="Active A/B scoring profile label")

    recency_enabled: bool = Field(default=True, description="Apply exponential freshness decay")
    recency_half_life_seconds: int = Field(
        default=604800,
        description="Half-life of the decay in seconds; 0 or negative disables decay"
    )

    bm25_k1: float = Field(default=1.2, ge=0.0, description="BM25 term frequency saturation")
    bm25_b: float = Field(default=0.75, ge=0.0, le=1.0, description="BM25 length normalization")
    bm25_stemming: bool = Field(default=False, description="Apply Snowball stemming before BM25")

    metadata_boosts: Dict[str, float] = Field(
        default_factory=dict,
        description="Metadata key -> additive boost applied when the key is present"
    )

    resort_by_score: bool = Field(
        default=False,
        description="Re-sort results by final blended score instead of keeping vector source order"
    )

    @property
    def active_vector_weight(self) -> float:
        """Vector weight of the active profile ("B" selects profile B, anything else A)."""
        if (self.scoring_profile or "").strip().upper() == "B":
            return self.hybrid_vector_weight_profile_b
        return self.hybrid_vector_weight

    @classmethod
    def from_env(cls) -> "ScoringConfig":
        """
        Build configuration from SEARCH_* environment variables.

        Raises:
            ValueError: If a variable is present but malformed
        """
        defaults = cls()
        config = cls(
            hybrid_enabled=_env_bool("SEARCH_HYBRID_ENABLED", defaults.hybrid_enabled),
            hybrid_vector_weight=_env_float("SEARCH_HYBRID_VECTOR_WEIGHT", defaults.hybrid_vector_weight),
            hybrid_vector_weight_profile_b=_env_float(
                "SEARCH_HYBRID_VECTOR_WEIGHT_PROFILE_B", defaults.hybrid_vector_weight_profile_b
            ),
            scoring_profile=os.getenv("SEARCH_SCORING_PROFILE") or defaults.scoring_profile,
            recency_enabled=_env_bool("SEARCH_RECENCY_ENABLED", defaults.recency_enabled),
            recency_half_life_seconds=_env_int(
                "SEARCH_RECENCY_HALF_LIFE_SECONDS", defaults.recency_half_life_seconds
            ),
            bm25_k1=_env_float("SEARCH_BM25_K1", defaults.bm25_k1),
            bm25_b=_env_float("SEARCH_BM25_B", defaults.bm25_b),
            bm25_stemming=_env_bool("SEARCH_BM25_STEMMING", defaults.bm25_stemming),
            metadata_boosts=_env_boosts("SEARCH_METADATA_BOOSTS"),
            resort_by_score=_env_bool("SEARCH_RESORT_BY_SCORE", defaults.resort_by_score),
        )
        logger.info(
            f"Scoring config: hybrid={config.hybrid_enabled}, profile={config.scoring_profile}, "
            f"vector_weight={config.active_vector_weight}, recency={config.recency_enabled} "
            f"(half_life={config.recency_half_life_seconds}s), boosts={len(config.metadata_boosts)}"
        )
        return config
