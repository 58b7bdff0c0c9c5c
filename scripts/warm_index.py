#!/usr/bin/env python3
"""
Index Warm-up Utility
Builds the place corpus and vector index once, reports which search mode is
active and runs a verification query. Useful before deploying or to check
whether the embedding model can load in an environment.
"""

import argparse
import sys
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from placesearch.core.config import validate_search_config
from placesearch.core.dataset import JsonGeoDataset, get_default_dataset
from placesearch.core.search_service import SearchService


def main(argv=None):
    """Warm the search service and print its status."""
    parser = argparse.ArgumentParser(description="Build and verify the place search index")
    parser.add_argument("--data", help="Path to the geographic dataset JSON (default: PLACES_DATA_PATH)")
    parser.add_argument("--query", default="beach", help="Verification query")
    parser.add_argument("--destination", default=None, help="Optional destination filter for the verification query")
    parser.add_argument("--top-k", type=int, default=5)
    args = parser.parse_args(argv)

    issues = validate_search_config()
    if issues:
        for issue in issues:
            print(f"ERROR: {issue}")
        return 1

    dataset = JsonGeoDataset(args.data) if args.data else get_default_dataset()
    service = SearchService(dataset=dataset)

    print("Starting search service initialization...")
    service.initialize()

    stats = service.get_stats()
    print(f"✓ Loaded {stats.total_places} places")
    if stats.search_mode == "vector":
        print(f"✓ Vector index built with {stats.index_size} vectors ({stats.model}, dim={stats.embedding_dimension})")
    else:
        print("WARNING: Vector search unavailable, using text search")

    if stats.total_places == 0:
        print("No places to verify (empty dataset).")
        return 0

    results = service.search(args.query, args.top_k, args.destination)
    print(f"✓ Verification search '{args.query}' returned {len(results)} results")
    for result in results:
        print(f"  {result.score:.3f}  {result.name} ({result.type}) [{result.state}]")

    return 0


if __name__ == "__main__":
    sys.exit(main())
