#!/usr/bin/env python3
"""
Run the curated search evaluation against the in-memory demo corpus.

Seeds the three demo documents, runs the four curated gold queries through
the hybrid search and prints MRR, NDCG@k and Recall@k.
Scoring settings come from SEARCH_* variables (.env.local / .env).

Usage: python scripts/run_eval.py [k]
"""

import logging
import os
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from docsearch.collaborators import InMemoryDocumentStore, InMemoryVectorIndex, get_embedder
from docsearch.config import ScoringConfig, load_environment
from docsearch.evaluation import Evaluator
from docsearch.logging_config import setup_logging
from docsearch.search_service import SearchService
from docsearch.seed import seed_demo_documents


def main():
    """Main entry point."""
    if len(sys.argv) > 2 or (len(sys.argv) == 2 and not sys.argv[1].isdigit()):
        print("Usage:")
        print("  python scripts/run_eval.py [k]")
        print("\nExamples:")
        print("  python scripts/run_eval.py")
        print("  SEARCH_SCORING_PROFILE=B python scripts/run_eval.py 3")
        sys.exit(1)

    k = int(sys.argv[1]) if len(sys.argv) == 2 else 5
    if k <= 0:
        print("k must be positive", file=sys.stderr)
        sys.exit(1)

    load_environment(project_root)
    log_level = os.getenv("LOG_LEVEL", "WARNING").upper()
    setup_logging(
        log_file=str(project_root / "logs" / "eval.log"),
        console_level=getattr(logging, log_level, logging.WARNING),
    )

    try:
        config = ScoringConfig.from_env()
        embedder = get_embedder()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    store = InMemoryDocumentStore()
    index = InMemoryVectorIndex()
    seed_demo_documents(store, index, embedder)

    service = SearchService(embedder, index, store, config)
    result = Evaluator(service.search).run_curated_eval(store, k=k)

    print(f"\n{'='*60}")
    print(f" Evaluation: {result.total_queries} queries, k={k}, profile={config.scoring_profile}")
    print(f"{'='*60}\n")

    for detail in result.details:
        print(f"  {detail.query:40} RR={detail.rr:.3f} NDCG={detail.ndcg:.3f} Recall={detail.recall:.3f}")

    print(f"\n  MRR:        {result.mrr:.4f}")
    print(f"  NDCG@{k}:     {result.ndcg:.4f}")
    print(f"  Recall@{k}:   {result.recall_at_k:.4f}\n")


if __name__ == "__main__":
    main()
