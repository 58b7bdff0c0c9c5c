"""
Keyword scoring over the place corpus.
Always available; the fallback whenever vector search is not.
"""

from typing import List, Optional, Sequence

from .corpus import PlaceRecord, state_matches
from .results import SearchResult

# Per-term weights
SEARCH_TEXT_WEIGHT = 1.0
NAME_WEIGHT = 2.0
TYPE_WEIGHT = 1.5


def normalize_filter(destination_filter) -> Optional[str]:
    """Blank or non-string filters mean no filter."""
    if not isinstance(destination_filter, str) or not destination_filter.strip():
        return None
    return destination_filter.strip()


def score_place(place: PlaceRecord, query_terms: Sequence[str]) -> float:
    """Sum of per-term substring evidence in search text, name and type."""
    name = place.name.lower()
    place_type = (place.type or "").lower()

    score = 0.0
    for term in query_terms:
        if term in place.search_text:
            score += SEARCH_TEXT_WEIGHT
        if term in name:
            score += NAME_WEIGHT
        if term in place_type:
            score += TYPE_WEIGHT
    return score


class LexicalScorer:
    """Scores every place against the query terms. Pure function of the corpus."""

    def __init__(self, places: Sequence[PlaceRecord]):
        self.places = places

    def search(self, query: str, top_k: int = 10, destination_filter: Optional[str] = None) -> List[SearchResult]:
        """
        Rank places by keyword evidence.

        Places scoring zero are dropped; ties keep corpus order.
        """
        if not isinstance(query, str) or not isinstance(top_k, int) or isinstance(top_k, bool) or top_k < 1:
            return []

        query_terms = query.lower().split()
        if not query_terms:
            return []

        destination_filter = normalize_filter(destination_filter)

        scored = []
        for place in self.places:
            if destination_filter and not state_matches(place.state, destination_filter):
                continue
            scored.append((score_place(place, query_terms), place))

        # sorted() is stable, so equal scores stay in corpus order
        scored = sorted(scored, key=lambda item: item[0], reverse=True)

        return [
            SearchResult.from_place(place, score=score)
            for score, place in scored
            if score > 0
        ][:top_k]
