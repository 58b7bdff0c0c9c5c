"""
Vector store interface and a numpy brute-force implementation.
Both stores rank by Euclidean distance, nearest first, ties by insertion order.
"""

from abc import ABC, abstractmethod
from typing import List
import numpy as np

from .types import VectorRecord, QueryResult


class IVectorStore(ABC):
    """Abstract interface for flat, append-only vector storage."""

    @abstractmethod
    def add(self, record: VectorRecord) -> None:
        """Add a single vector record to the store."""
        pass

    @abstractmethod
    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the store."""
        pass

    @abstractmethod
    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Return the top_k nearest records by L2 distance, ascending."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Number of stored vectors."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all records from the store."""
        pass


def as_vector(values, dimension: int) -> np.ndarray:
    """Convert to a float32 row vector, checking its dimension."""
    vector = np.asarray(values, dtype=np.float32).reshape(-1)
    if vector.shape[0] != dimension:
        raise ValueError(f"Vector dimension {vector.shape[0]} does not match expected dimension {dimension}")
    return vector


class SimpleInMemoryVectorStore(IVectorStore):
    """In-memory store using exact L2 distance over a numpy matrix."""

    def __init__(self, dimension: int = 384):
        self.dimension = dimension
        self._matrix = np.zeros((0, dimension), dtype=np.float32)
        self._ids: List[int] = []

    def add(self, record: VectorRecord) -> None:
        """Add a single vector record to the store."""
        self.batch_add([record])

    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the store."""
        if not records:
            return

        # Validate everything before touching the matrix
        rows = [as_vector(record.vector, self.dimension) for record in records]
        self._matrix = np.vstack([self._matrix] + [row.reshape(1, -1) for row in rows])
        self._ids.extend(record.id for record in records)

    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Return the top_k nearest records by L2 distance, ascending."""
        if not self._ids or top_k < 1:
            return []

        query = as_vector(query_vector, self.dimension)
        distances = np.linalg.norm(self._matrix - query, axis=1)

        # Stable sort keeps insertion order among equal distances
        order = np.argsort(distances, kind="stable")[:top_k]

        return [QueryResult(id=self._ids[i], distance=float(distances[i])) for i in order]

    def size(self) -> int:
        return len(self._ids)

    def clear(self) -> None:
        """Clear all records from the store."""
        self._matrix = np.zeros((0, self.dimension), dtype=np.float32)
        self._ids.clear()
