"""
Place search HTTP API.
A thin FastAPI layer; all ranking and filtering lives in placesearch.core.
"""

import threading
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.responses import JSONResponse

from .schemas import (
    SearchRequest,
    SearchResponse,
    PlaceResult,
    VectorSearchStatus,
    StatusResponse,
    HealthResponse,
    Destination,
    DestinationsResponse,
    TripPlacesRequest,
    TripPlace,
    TripPlacesResponse,
)
from ..core.config import VERSION, debug_enabled, get_max_search_limit, warm_on_startup
from ..core.dataset import IGeoDataset
from ..core.planner import (
    DestinationNotFound,
    build_verified_places_block,
    list_destinations,
    select_trip_places,
)
from ..core.search_service import SearchService
from util.logging import logger


def _vector_status(service: SearchService) -> VectorSearchStatus:
    stats = service.get_stats()
    return VectorSearchStatus(
        is_ready=stats.is_initialized,
        total_places_indexed=stats.total_places,
        index_size=stats.index_size,
        model=stats.model,
        embedding_dimension=stats.embedding_dimension,
        search_mode=stats.search_mode,
        embedding_available=stats.embedding_available,
        index_available=stats.index_available,
    )


def get_service(request: Request) -> SearchService:
    return request.app.state.search_service


def create_app(service: Optional[SearchService] = None, dataset: Optional[IGeoDataset] = None,
               warm: Optional[bool] = None) -> FastAPI:
    """
    Build the API around one shared SearchService.

    Args:
        service: Search context to serve; built from configuration if omitted
        dataset: Dataset for a newly built service
        warm: Start the search bootstrap in a background thread at startup
              (defaults to WARM_ON_STARTUP)
    """
    if service is None:
        service = SearchService(dataset=dataset)
    if warm is None:
        warm = warm_on_startup()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if warm:
            # Non-blocking: the first search waits for the build if it is still running
            logger.info("Starting search service initialization...")
            threading.Thread(target=service.initialize, name="search-bootstrap", daemon=True).start()
        yield

    app = FastAPI(
        title="Place Search API",
        version=VERSION,
        description="Tourist place retrieval for itinerary planning",
        docs_url="/docs" if debug_enabled() else None,
        redoc_url="/redoc" if debug_enabled() else None,
        lifespan=lifespan,
    )
    app.state.search_service = service

    @app.get("/health", response_model=HealthResponse)
    def health_check_endpoint(service: SearchService = Depends(get_service)):
        """Check system health. Text-only search still counts as healthy."""
        status = _vector_status(service)
        return HealthResponse(
            status="healthy" if status.is_ready else "starting",
            version=VERSION,
            search=status,
        )

    @app.post("/itinerary/search", response_model=SearchResponse)
    def search_places_endpoint(request: SearchRequest, service: SearchService = Depends(get_service)):
        """Search places by free text, optionally within one destination."""
        limit = min(request.limit, get_max_search_limit())
        results = service.search(request.query, limit, request.destination)

        return SearchResponse(
            query=request.query,
            destination=request.destination or "All India",
            count=len(results),
            results=[
                PlaceResult(
                    name=r.name,
                    type=r.type,
                    location=r.location,
                    state=r.state,
                    region=r.region,
                    relevance_score=round(r.score, 2),
                )
                for r in results
            ],
        )

    @app.get("/itinerary/status", response_model=StatusResponse)
    def search_status_endpoint(service: SearchService = Depends(get_service)):
        """Vector search status."""
        return StatusResponse(vector_search=_vector_status(service))

    @app.get("/itinerary/destinations", response_model=DestinationsResponse)
    def destinations_endpoint(service: SearchService = Depends(get_service)):
        """Available states and territories with their attraction types."""
        destinations = [Destination(**d) for d in list_destinations(service.dataset)]
        return DestinationsResponse(
            count=len(destinations),
            vector_search=_vector_status(service),
            destinations=destinations,
        )

    @app.post("/itinerary/places", response_model=TripPlacesResponse)
    def trip_places_endpoint(request: TripPlacesRequest, service: SearchService = Depends(get_service)):
        """Verified places an itinerary for this trip may use."""
        try:
            trip = select_trip_places(
                service,
                service.dataset,
                request.destination,
                request.days,
                interests=request.interests,
                travel_type=request.travel_type,
                budget=request.budget,
            )
        except DestinationNotFound:
            raise HTTPException(
                status_code=404,
                detail=f'No verified data available for "{request.destination}". '
                       'Please provide a valid Indian state or union territory name.',
            )

        if not trip.places:
            raise HTTPException(status_code=404, detail=f"No verified places found for {trip.destination.name}.")

        return TripPlacesResponse(
            destination=trip.destination.name,
            destination_type=trip.destination.kind,
            query=trip.query,
            top_k=trip.top_k,
            count=len(trip.places),
            used_fallback=trip.used_fallback,
            places=[
                TripPlace(
                    name=p.name,
                    type=p.type,
                    location=p.location,
                    state=p.state,
                    score=getattr(p, "score", None),
                )
                for p in trip.places
            ],
            verified_places=build_verified_places_block(trip.places),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Handle all unhandled exceptions."""
        logger.error(f"Unhandled exception: {exc}")
        content = {"detail": "Internal server error"}
        if debug_enabled():
            content["debug"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    return app


app = create_app()
