"""
Search result types shared by the lexical and vector retrieval paths.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .corpus import PlaceRecord


@dataclass
class SearchResult:
    """A place plus its relevance for one query. Higher score is more relevant."""

    id: int
    name: str
    type: Optional[str]
    location: str
    state: str
    state_code: str
    region: str
    search_text: str
    score: float
    distance: Optional[float] = None
    """L2 distance to the query vector; only set on the vector path"""

    @classmethod
    def from_place(cls, place: PlaceRecord, score: float, distance: Optional[float] = None) -> "SearchResult":
        return cls(
            id=place.id,
            name=place.name,
            type=place.type,
            location=place.location,
            state=place.state,
            state_code=place.state_code,
            region=place.region,
            search_text=place.search_text,
            score=float(score),
            distance=None if distance is None else float(distance),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SearchStats:
    """Observability snapshot of the search service."""

    is_initialized: bool
    total_places: int
    index_size: int
    search_mode: str  # vector|text
    embedding_available: bool = False
    index_available: bool = False
    model: str = "text-based"
    embedding_dimension: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
