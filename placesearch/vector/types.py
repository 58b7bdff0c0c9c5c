"""
Vector index record types.
Positions in a store are assigned in insertion order and double as place ids.
"""

from typing import Optional
import numpy as np
from dataclasses import dataclass


@dataclass
class VectorRecord:
    """An embedding keyed by place id."""

    id: int
    """Place id; must equal the record's insertion position"""

    vector: Optional[np.ndarray]
    """The embedding of the place's search text"""


@dataclass
class QueryResult:
    """Represents a nearest-neighbour hit from a vector store."""

    id: int
    """Insertion position of the matching record"""

    distance: float
    """Euclidean (L2) distance to the query vector, smaller is closer"""

    @property
    def score(self) -> float:
        """Similarity in (0, 1], decreasing with distance."""
        return 1.0 / (1.0 + self.distance)
