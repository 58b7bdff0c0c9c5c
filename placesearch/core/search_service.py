"""
Place search orchestration.
Owns the corpus, the optional vector index and the capability flags, builds
them once, and routes each query to vector or keyword retrieval.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .config import (
    DEFAULT_TOP_K,
    are_vector_features_enabled,
    get_embedding_provider,
    get_full_scan_threshold,
    get_overfetch_multiplier,
    get_vector_store,
)
from .corpus import CorpusBuilder, PlaceRecord, state_matches
from .dataset import IGeoDataset, get_default_dataset
from .lexical import LexicalScorer, normalize_filter
from .results import SearchResult, SearchStats
from util.logging import logger


class BootstrapState(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    READY = "ready"


@dataclass(frozen=True)
class CapabilitySet:
    """Optional capabilities, determined once at bootstrap."""

    embedding_available: bool = False
    index_available: bool = False


class SearchService:
    """
    Process-wide place search context.

    Construct once at application startup and share it. The first call to
    initialize() (directly or through search()) loads the corpus and tries to
    build the vector index; concurrent callers wait for that one build. After
    that the corpus and index are read-only.

    Args:
        dataset: Geographic dataset; defaults to PLACES_DATA_PATH
        embedding_provider: Overrides the configured provider
        vector_store: Overrides the configured store; must be empty
        vector_enabled: Overrides VECTOR_ENABLED
    """

    def __init__(self, dataset: IGeoDataset = None, embedding_provider=None, vector_store=None,
                 vector_enabled: Optional[bool] = None):
        self.dataset = dataset if dataset is not None else get_default_dataset()
        self._corpus = CorpusBuilder(self.dataset)
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._vector_enabled = vector_enabled

        self._lock = threading.Lock()
        self._state = BootstrapState.NOT_STARTED
        self._capabilities = CapabilitySet()
        self._embedder = None
        self._index = None
        self._places: List[PlaceRecord] = []
        self._lexical = LexicalScorer(self._places)

    # Capability bootstrap

    @property
    def state(self) -> BootstrapState:
        return self._state

    @property
    def capabilities(self) -> CapabilitySet:
        return self._capabilities

    def is_ready(self) -> bool:
        return self._state is BootstrapState.READY

    def initialize(self) -> CapabilitySet:
        """Load the corpus and try to build the vector index, exactly once."""
        if self._state is BootstrapState.READY:
            return self._capabilities

        with self._lock:
            if self._state is BootstrapState.READY:
                return self._capabilities

            self._state = BootstrapState.IN_PROGRESS
            logger.log_bootstrap("start", "in_progress")
            try:
                self._places = self._corpus.load()
                self._lexical = LexicalScorer(self._places)
                self._capabilities = self._acquire_capabilities()
            except Exception as e:
                logger.log_bootstrap("capabilities", "failed", {"error": f"{type(e).__name__}: {e}"})
                self._embedder = None
                self._index = None
                self._capabilities = CapabilitySet()
            finally:
                self._state = BootstrapState.READY

            logger.log_bootstrap("complete", "ready", {
                "total_places": len(self._places),
                "search_mode": self._search_mode(),
            })

        return self._capabilities

    def _vector_features_enabled(self) -> bool:
        if self._vector_enabled is not None:
            return self._vector_enabled
        return are_vector_features_enabled()

    def _acquire_capabilities(self) -> CapabilitySet:
        if not self._vector_features_enabled():
            logger.log_capability("vector_search", False, "VECTOR_ENABLED is false")
            return CapabilitySet()

        # Imported here so a broken vector stack cannot break keyword search
        from ..vector.place_index import PlaceVectorIndex

        embedding_ok = False
        try:
            embedder = self._embedding_provider or get_embedding_provider(enabled=True)
            if embedder is None or not embedder.is_available():
                logger.log_capability("vector_search", False, "embedding provider unavailable")
                return CapabilitySet()
            embedding_ok = True

            store = self._vector_store if self._vector_store is not None else get_vector_store(embedder.get_dimension(), enabled=True)
            index = PlaceVectorIndex.build(self._places, embedder, store)
        except Exception as e:
            # No partial index: the whole vector path stays off
            logger.log_bootstrap("vector_index", "failed", {"error": f"{type(e).__name__}: {e}"})
            return CapabilitySet(embedding_available=embedding_ok)

        self._embedder = embedder
        self._index = index
        logger.log_capability("vector_search", True)
        return CapabilitySet(embedding_available=True, index_available=True)

    # Queries

    def _search_mode(self) -> str:
        return "vector" if self._index is not None else "text"

    def _candidate_count(self, top_k: int, filtered: bool) -> int:
        """How many neighbours to fetch so that filtering still leaves top_k."""
        total = len(self._places)
        if not filtered:
            return top_k
        if total <= get_full_scan_threshold():
            return total
        return min(top_k * get_overfetch_multiplier(), total)

    def search(self, query: str, top_k: int = DEFAULT_TOP_K, destination_filter: Optional[str] = None) -> List[SearchResult]:
        """
        Ranked places for a free-text query, optionally limited to one state.

        Uses the vector index when it was built, otherwise keyword scoring.
        A query whose embedding fails falls back to keyword scoring on its own.
        Never raises; no match is an empty list.
        """
        self.initialize()

        if not isinstance(query, str) or not query.strip():
            return []
        if not isinstance(top_k, int) or isinstance(top_k, bool) or top_k < 1:
            return []

        destination_filter = normalize_filter(destination_filter)

        results = None
        mode = "text"
        if self._index is not None:
            results = self._vector_search(query, top_k, destination_filter)
            mode = "vector"

        if results is None:
            results = self._lexical.search(query, top_k, destination_filter)
            mode = "text"

        logger.log_search(query, mode, len(results), destination_filter)
        return results

    def _vector_search(self, query: str, top_k: int, destination_filter: Optional[str]) -> Optional[List[SearchResult]]:
        """Vector results, or None when this query must fall back to keywords."""
        try:
            vector = self._embedder.embed_text(query.lower())
            if vector is None:
                return None
            hits = self._index.query(vector, self._candidate_count(top_k, destination_filter is not None))
        except Exception as e:
            logger.log_operation("search.vector", "failed", {"error": f"{type(e).__name__}: {e}"})
            return None

        results = []
        for place_id, distance in hits:
            if not 0 <= place_id < len(self._places):
                continue
            place = self._places[place_id]
            if destination_filter and not state_matches(place.state, destination_filter):
                continue
            results.append(SearchResult.from_place(place, score=1.0 / (1.0 + distance), distance=distance))

        return results[:top_k]

    def get_places_by_state(self, state_name: str) -> List[PlaceRecord]:
        """All places whose state matches state_name either way round, unranked."""
        state_name = normalize_filter(state_name)
        if state_name is None:
            return []

        places = self._corpus.load()
        return [place for place in places if state_matches(place.state, state_name)]

    def get_stats(self) -> SearchStats:
        """Observability snapshot; not meant for control flow."""
        places = self._corpus.load() if self._corpus.is_loaded else []
        embedder = self._embedder

        return SearchStats(
            is_initialized=self.is_ready(),
            total_places=len(places),
            index_size=self._index.size() if self._index is not None else 0,
            search_mode=self._search_mode(),
            embedding_available=self._capabilities.embedding_available,
            index_available=self._capabilities.index_available,
            model=embedder.name if embedder is not None else "text-based",
            embedding_dimension=embedder.get_dimension() if embedder is not None else 0,
        )
