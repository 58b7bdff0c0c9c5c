"""
Request and response models for the place search API.
"""

from pydantic import BaseModel, field_validator
from typing import Optional, List, Union


class SearchRequest(BaseModel):
    query: str
    destination: Optional[str] = None
    limit: int = 10

    @field_validator('query')
    @classmethod
    def query_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('query cannot be empty')
        return v.strip()

    @field_validator('destination')
    @classmethod
    def blank_destination_is_none(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator('limit')
    @classmethod
    def limit_defaults_when_not_positive(cls, v):
        return v if v > 0 else 10


class PlaceResult(BaseModel):
    name: str
    type: Optional[str] = None
    location: str
    state: str
    region: str
    relevance_score: float


class SearchResponse(BaseModel):
    success: bool = True
    query: str
    destination: str
    count: int
    results: List[PlaceResult]


class VectorSearchStatus(BaseModel):
    """Retrieval status of the search service."""
    is_ready: bool                    # Bootstrap finished
    total_places_indexed: int         # Places in the corpus
    index_size: int                   # Vectors in the index, 0 in text mode
    model: str                        # Embedding model or "text-based"
    embedding_dimension: int
    search_mode: str                  # "vector" or "text"
    embedding_available: bool
    index_available: bool


class StatusResponse(BaseModel):
    success: bool = True
    vector_search: VectorSearchStatus


class HealthResponse(BaseModel):
    status: str
    version: str
    search: VectorSearchStatus


class Destination(BaseModel):
    name: str
    code: str
    type: str                         # "state" or "ut"
    capital: Optional[str] = None
    region: Optional[str] = None
    attraction_count: int
    available_types: List[str]


class DestinationsResponse(BaseModel):
    success: bool = True
    count: int
    vector_search: VectorSearchStatus
    destinations: List[Destination]


class TripPlacesRequest(BaseModel):
    """Inputs of an itinerary request that drive place selection."""
    destination: str
    days: int
    budget: str
    travel_type: str
    interests: Optional[Union[List[str], str]] = None

    @field_validator('destination', 'budget', 'travel_type')
    @classmethod
    def must_not_be_empty(cls, v, info):
        if not v.strip():
            raise ValueError(f'{info.field_name} cannot be empty')
        return v.strip()

    @field_validator('days')
    @classmethod
    def days_must_be_in_range(cls, v):
        if v < 1 or v > 30:
            raise ValueError('days must be a number between 1 and 30')
        return v


class TripPlace(BaseModel):
    name: str
    type: Optional[str] = None
    location: str
    state: str
    score: Optional[float] = None


class TripPlacesResponse(BaseModel):
    success: bool = True
    destination: str
    destination_type: str
    query: str
    top_k: int
    count: int
    used_fallback: bool
    places: List[TripPlace]
    verified_places: Optional[str] = None
