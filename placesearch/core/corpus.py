"""
Place corpus construction.
Flattens the geographic dataset into an ordered list of searchable place records.
"""

import threading
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from .dataset import IGeoDataset, as_region_map
from util.logging import logger


DEFAULT_REGION = "India"

# Attraction lists read from every region, in this order
ATTRACTION_FIELDS = ("touristAttractions", "tourismHighlights")

# (substrings of the place type, extra search terms)
TYPE_KEYWORDS = [
    (("beach",),
     ["beach", "sea", "ocean", "coastal", "sand", "water", "swim", "relaxation"]),
    (("temple", "religious"),
     ["temple", "spiritual", "worship", "religion", "pilgrimage", "sacred", "prayer"]),
    (("fort", "palace", "historical"),
     ["heritage", "history", "ancient", "architecture", "monument", "royal", "culture"]),
    (("hill", "mountain"),
     ["hill", "mountain", "scenic", "view", "cool", "nature", "trekking", "peaceful"]),
    (("wildlife", "sanctuary", "national park"),
     ["wildlife", "animals", "safari", "nature", "birds", "forest", "adventure"]),
    (("waterfall",),
     ["waterfall", "nature", "scenic", "photography", "trekking", "adventure"]),
    (("lake", "backwater"),
     ["lake", "water", "boating", "peaceful", "scenic", "nature", "relaxation"]),
]


@dataclass(frozen=True)
class PlaceRecord:
    """One tourist attraction in the search corpus."""

    id: int
    """Position in the corpus, assigned at build time"""

    name: str
    type: Optional[str]
    location: str
    state: str
    state_code: str
    region: str

    search_text: str
    """Lower-cased blob used by both lexical and embedding search"""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _text(value: Any) -> str:
    """Coerce an optional dataset field to a stripped string."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _text_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [t for t in (_text(v) for v in value) if t]


def type_keywords(place_type: Optional[str]) -> List[str]:
    """Descriptive terms implied by a place type, e.g. 'Beach' -> sea, sand, swim..."""
    type_lower = (place_type or "").lower()
    keywords = []
    for needles, terms in TYPE_KEYWORDS:
        if any(needle in type_lower for needle in needles):
            keywords.extend(terms)
    return keywords


def build_search_text(place: Dict[str, Any], state_name: str, region: Dict[str, Any]) -> str:
    """Lower-cased join of the place's own fields, its region's tags and type keywords."""
    place_type = _text(place.get("type"))
    parts = [
        _text(place.get("name")),
        place_type,
        _text(place.get("city")) or _text(place.get("district")),
        state_name,
        _text(region.get("region")),
    ]
    parts.extend(_text_list(region.get("famousFor")))
    parts.extend(type_keywords(place_type))

    return " ".join(p for p in parts if p).lower()


def state_matches(state: str, destination_filter: str) -> bool:
    """Bidirectional, case-insensitive containment between a state name and a filter."""
    state_lower = state.lower()
    filter_lower = destination_filter.lower()
    return filter_lower in state_lower or state_lower in filter_lower


class CorpusBuilder:
    """
    Builds the place corpus from a geographic dataset, once.

    States are processed before territories; within a region the attraction
    lists are read in ATTRACTION_FIELDS order. Attractions without a name are
    skipped.
    """

    def __init__(self, dataset: IGeoDataset):
        self.dataset = dataset
        self._places: Optional[List[PlaceRecord]] = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._places is not None

    def load(self) -> List[PlaceRecord]:
        """Build the corpus, or return the existing one if already built."""
        if self._places is not None:
            return self._places

        with self._lock:
            if self._places is None:
                self._places = self._build()
        return self._places

    def _build(self) -> List[PlaceRecord]:
        places: List[PlaceRecord] = []
        regions = 0

        try:
            groups = [
                (as_region_map(self.dataset.states()), ""),
                (as_region_map(self.dataset.territories()), DEFAULT_REGION),
            ]
        except Exception as e:
            logger.log_operation("corpus.load", "failed", {"error": str(e)[:200]})
            groups = []

        for regions_by_code, default_region in groups:
            for code, region in regions_by_code.items():
                regions += 1
                self._add_region(places, code, region, default_region)

        logger.log_corpus_load(len(places), regions)
        return places

    def _add_region(self, places: List[PlaceRecord], code: str, region: Dict[str, Any], default_region: str) -> None:
        state_name = _text(region.get("name")) or code
        region_name = _text(region.get("region")) or default_region

        for field in ATTRACTION_FIELDS:
            attractions = region.get(field)
            if not isinstance(attractions, list):
                continue

            for place in attractions:
                if not isinstance(place, dict) or not _text(place.get("name")):
                    continue

                places.append(PlaceRecord(
                    id=len(places),
                    name=_text(place.get("name")),
                    type=_text(place.get("type")) or None,
                    location=_text(place.get("city")) or _text(place.get("district")),
                    state=state_name,
                    state_code=code,
                    region=region_name,
                    search_text=build_search_text(place, state_name, region),
                ))
