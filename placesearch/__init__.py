"""
placesearch - tourist place retrieval for itinerary planning.

Builds a searchable corpus of Indian attractions and ranks them against a
free-text query, using sentence embeddings and a FAISS index when available
and keyword scoring otherwise.

Example usage:
    >>> from placesearch import SearchService
    >>> service = SearchService()
    >>> service.search("quiet beach", top_k=5, destination_filter="Goa")
"""

from .core.search_service import SearchService, CapabilitySet, BootstrapState
from .core.corpus import PlaceRecord, CorpusBuilder
from .core.results import SearchResult, SearchStats
from .core.dataset import IGeoDataset, JsonGeoDataset, StaticGeoDataset

__all__ = [
    "SearchService",
    "CapabilitySet",
    "BootstrapState",
    "PlaceRecord",
    "CorpusBuilder",
    "SearchResult",
    "SearchStats",
    "IGeoDataset",
    "JsonGeoDataset",
    "StaticGeoDataset",
]
