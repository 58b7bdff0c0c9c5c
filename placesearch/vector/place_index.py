"""
Vector index over the place corpus.
One embedding per place, inserted in corpus order so store position == place id.
"""

import time
from typing import List, Sequence, Tuple
import numpy as np

from .embeddings import IEmbeddingProvider
from .index import IVectorStore
from .types import VectorRecord
from util.logging import logger

# Progress is logged every this many embeddings
PROGRESS_EVERY = 50


class IndexUnavailable(RuntimeError):
    """Raised when the vector index cannot be built."""


class PlaceVectorIndex:
    """Immutable nearest-neighbour index over place embeddings."""

    def __init__(self, store: IVectorStore, embedder: IEmbeddingProvider):
        self.store = store
        self.embedder = embedder

    @classmethod
    def build(cls, places: Sequence, embedder: IEmbeddingProvider, store: IVectorStore) -> "PlaceVectorIndex":
        """
        Embed every place and load the store.

        All embeddings are computed before anything is inserted, so a failure
        part-way leaves the store untouched. Any failure raises.
        """
        start_time = time.time()

        if store is None or embedder is None:
            raise IndexUnavailable("vector store or embedding provider not configured")
        if not embedder.is_available():
            raise IndexUnavailable("embedding provider unavailable")
        if store.size():
            raise IndexUnavailable("vector store is not empty")

        records: List[VectorRecord] = []
        for position, place in enumerate(places):
            if place.id != position:
                raise IndexUnavailable(f"place id {place.id} does not match corpus position {position}")

            vector = embedder.embed_text(place.search_text)
            if vector is None:
                raise IndexUnavailable(f"embedding failed for place {place.id}")

            records.append(VectorRecord(id=place.id, vector=np.asarray(vector, dtype=np.float32)))

            if (position + 1) % PROGRESS_EVERY == 0:
                logger.debug(f"Generated embeddings: {position + 1}/{len(places)}")

        store.batch_add(records)

        logger.log_index_build(start_time, time.time(), store.size(), details={"embedder": embedder.name})
        return cls(store, embedder)

    def size(self) -> int:
        return self.store.size()

    def query(self, vector: np.ndarray, k: int) -> List[Tuple[int, float]]:
        """(place_id, distance) pairs for the k nearest places, nearest first."""
        return [(hit.id, hit.distance) for hit in self.store.search(vector, k)]
