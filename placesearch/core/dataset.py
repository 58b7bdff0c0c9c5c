"""
Geographic dataset providers.
Supplies Indian states and union territories with their tourist attractions.
The corpus builder treats these as read-only black boxes.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from util.logging import logger


class IGeoDataset(ABC):
    """Abstract interface for a geographic dataset."""

    @abstractmethod
    def states(self) -> Dict[str, Dict[str, Any]]:
        """Top-level regions keyed by short code."""
        pass

    @abstractmethod
    def territories(self) -> Dict[str, Dict[str, Any]]:
        """Subordinate territories keyed by short code."""
        pass


def as_region_map(value: Any) -> Dict[str, Dict[str, Any]]:
    """Keep only well-formed {code: region dict} entries."""
    if not isinstance(value, dict):
        return {}
    return {str(code): region for code, region in value.items() if isinstance(region, dict)}


class StaticGeoDataset(IGeoDataset):
    """In-memory dataset, mostly useful for tests and embedding callers."""

    def __init__(self, states: Optional[Dict[str, Dict[str, Any]]] = None,
                 territories: Optional[Dict[str, Dict[str, Any]]] = None):
        self._states = as_region_map(states or {})
        self._territories = as_region_map(territories or {})

    def states(self) -> Dict[str, Dict[str, Any]]:
        return self._states

    def territories(self) -> Dict[str, Dict[str, Any]]:
        return self._territories


class JsonGeoDataset(IGeoDataset):
    """
    Dataset backed by a JSON document of the form
    {"states": {code: region}, "uts": {code: region}}.

    The file is read once on first access. A missing, unreadable or malformed
    file yields an empty dataset rather than an error.
    """

    def __init__(self, path: str):
        self.path = Path(path).expanduser()
        self._data = None

    def _load(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data

        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (OSError, ValueError) as e:
            logger.log_operation("dataset.load", "failed", {"path": str(self.path), "error": str(e)[:200]})
            raw = {}

        if not isinstance(raw, dict):
            logger.warning(f"Dataset {self.path} is not a JSON object, treating as empty")
            raw = {}

        self._data = {
            "states": as_region_map(raw.get("states")),
            "uts": as_region_map(raw.get("uts", raw.get("territories"))),
        }
        return self._data

    def states(self) -> Dict[str, Dict[str, Any]]:
        return self._load()["states"]

    def territories(self) -> Dict[str, Dict[str, Any]]:
        return self._load()["uts"]


def get_default_dataset() -> IGeoDataset:
    """Dataset configured through PLACES_DATA_PATH."""
    from .config import get_data_path
    return JsonGeoDataset(get_data_path())
