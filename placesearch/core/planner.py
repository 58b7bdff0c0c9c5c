"""
Trip place selection.
Turns itinerary inputs (destination, days, interests, travel type, budget)
into a search query, runs it against the search service and formats the
verified place list handed to the itinerary generator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from .dataset import IGeoDataset
from util.logging import logger

# Places per day, and bounds on how many places a trip asks for
PLACES_PER_DAY = 4
MIN_TRIP_PLACES = 10
MAX_TRIP_PLACES = 20
STATE_FALLBACK_PLACES = 10

# (substrings of the travel type, context keywords)
TRAVEL_TYPE_KEYWORDS = [
    (("family",), ["family-friendly", "kids", "safe", "comfortable"]),
    (("couple", "honeymoon"), ["romantic", "peaceful", "scenic", "beautiful"]),
    (("solo",), ["adventure", "exploration", "backpacking"]),
    (("group", "friends"), ["fun", "adventure", "group activities"]),
]

BUDGET_KEYWORDS = [
    (("low", "budget"), ["affordable", "budget-friendly"]),
    (("high", "luxury"), ["luxury", "premium", "exclusive"]),
]


class DestinationNotFound(LookupError):
    """The destination does not name a known state or territory."""


@dataclass
class DestinationMatch:
    code: str
    kind: str  # state|ut
    data: Dict[str, Any]

    @property
    def name(self) -> str:
        return self.data.get("name") or self.code


@dataclass
class TripPlaces:
    destination: DestinationMatch
    query: str
    top_k: int
    places: List[Any] = field(default_factory=list)
    used_fallback: bool = False


def find_destination(dataset: IGeoDataset, destination: str) -> Optional[DestinationMatch]:
    """
    Resolve free text to a state or territory.

    A region matches on exact name, on name containment either way round, or
    when the text mentions its capital. States are checked before territories.
    """
    if not isinstance(destination, str) or not destination.strip():
        return None

    normalized = destination.strip().lower()

    for kind, regions in (("state", dataset.states()), ("ut", dataset.territories())):
        for code, data in regions.items():
            name = data.get("name")
            capital = data.get("capital")
            if isinstance(name, str) and name:
                name_lower = name.lower()
                if name_lower == normalized or name_lower in normalized or normalized in name_lower:
                    return DestinationMatch(code=code, kind=kind, data=data)
            if isinstance(capital, str) and capital and capital.lower() in normalized:
                return DestinationMatch(code=code, kind=kind, data=data)

    return None


def _keywords_for(value: str, table) -> List[str]:
    value_lower = value.lower()
    for needles, keywords in table:
        if any(needle in value_lower for needle in needles):
            return list(keywords)
    return []


def build_search_query(destination: str, interests: Union[str, Sequence[str], None] = None,
                       travel_type: Optional[str] = None, budget: Optional[str] = None) -> str:
    """Search query from itinerary inputs, with travel type and budget context words."""
    parts = [destination]

    if interests:
        if isinstance(interests, str):
            parts.append(interests)
        else:
            parts.extend(interests)

    if travel_type:
        parts.append(travel_type)
        parts.extend(_keywords_for(travel_type, TRAVEL_TYPE_KEYWORDS))

    if budget:
        parts.extend(_keywords_for(budget, BUDGET_KEYWORDS))

    return " ".join(p.strip() for p in parts if isinstance(p, str) and p.strip())


def trip_top_k(days: int) -> int:
    """Four places per day, at least 10 and at most 20."""
    return min(max(days * PLACES_PER_DAY, MIN_TRIP_PLACES), MAX_TRIP_PLACES)


def select_trip_places(service, dataset: IGeoDataset, destination: str, days: int,
                       interests=None, travel_type: Optional[str] = None,
                       budget: Optional[str] = None) -> TripPlaces:
    """
    Pick the places an itinerary for this trip may use.

    Searches within the resolved state; if nothing matches, falls back to the
    first places listed for that state.

    Raises:
        DestinationNotFound: if destination is not a known state or territory
    """
    match = find_destination(dataset, destination)
    if match is None:
        raise DestinationNotFound(destination)

    query = build_search_query(match.name, interests, travel_type, budget)
    top_k = trip_top_k(days)

    places = service.search(query, top_k, match.name)
    used_fallback = False
    if not places:
        places = service.get_places_by_state(match.name)[:STATE_FALLBACK_PLACES]
        used_fallback = True

    logger.log_operation("planner.select", "success", {
        "destination": match.name,
        "top_k": top_k,
        "places": len(places),
        "fallback": used_fallback
    })

    return TripPlaces(destination=match, query=query, top_k=top_k, places=places, used_fallback=used_fallback)


def build_verified_places_block(places: Sequence) -> Optional[str]:
    """Numbered list of allowed places for the itinerary prompt, or None if empty."""
    if not places:
        return None

    lines = ["VERIFIED PLACES (You must ONLY use these places):"]
    for index, place in enumerate(places, start=1):
        location = f" - {place.location}" if place.location else ""
        lines.append(f"{index}. {place.name} ({place.type}){location} [{place.state}]")

    return "\n".join(lines) + "\n"


def list_destinations(dataset: IGeoDataset) -> List[Dict[str, Any]]:
    """Every state and territory with attraction counts and types, sorted by name."""
    destinations = []

    for kind, regions in (("state", dataset.states()), ("ut", dataset.territories())):
        for code, data in regions.items():
            attractions = []
            for field_name in ("touristAttractions", "tourismHighlights"):
                items = data.get(field_name)
                if isinstance(items, list):
                    attractions.extend(a for a in items if isinstance(a, dict))

            types = []
            for attraction in attractions:
                place_type = attraction.get("type")
                if isinstance(place_type, str) and place_type and place_type not in types:
                    types.append(place_type)

            destinations.append({
                "name": data.get("name") or code,
                "code": code,
                "type": kind,
                "capital": data.get("capital"),
                "region": data.get("region"),
                "attraction_count": len(attractions),
                "available_types": types,
            })

    return sorted(destinations, key=lambda d: str(d["name"]).lower())
