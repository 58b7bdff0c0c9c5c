"""
FAISS-backed flat L2 vector store.
"""

from typing import List
import numpy as np

from .types import VectorRecord, QueryResult
from .index import IVectorStore, as_vector


class FaissVectorStore(IVectorStore):
    """FAISS-backed implementation of IVectorStore using an exact IndexFlatL2."""

    def __init__(self, dimension: int = 384):
        """
        Initialize FAISS vector store.

        Args:
            dimension: Dimension of the vectors (default: 384 for all-MiniLM-L6-v2)
        """
        try:
            import faiss
        except ImportError:
            raise ImportError("FAISS not installed. Please install faiss-cpu package.")

        self.faiss = faiss
        self.dimension = dimension
        self.index = faiss.IndexFlatL2(dimension)

        # FAISS labels are insertion positions; map them back to record ids
        self.vector_id_map: List[int] = []

    def add(self, record: VectorRecord) -> None:
        """Add a single vector record to the FAISS store."""
        self.batch_add([record])

    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the FAISS store."""
        if not records:
            return

        batch_vectors = np.vstack([
            as_vector(record.vector, self.dimension).reshape(1, -1) for record in records
        ]).astype(np.float32)

        self.index.add(batch_vectors)
        self.vector_id_map.extend(record.id for record in records)

    def search(self, query_vector: np.ndarray, top_k: int = 5) -> List[QueryResult]:
        """Search for the nearest vectors and return them ascending by distance.

        The flat index is exhaustive, so every vector is ranked and ties at the
        cut-off are settled by insertion order rather than by FAISS.
        """
        if not self.index.ntotal or top_k < 1:
            return []

        query_array = as_vector(query_vector, self.dimension).reshape(1, -1)
        squared, indices = self.index.search(query_array, self.index.ntotal)

        hits = []
        for position, sq_distance in zip(indices[0], squared[0]):
            if position < 0:
                continue
            # IndexFlatL2 reports squared distances
            hits.append((float(np.sqrt(max(float(sq_distance), 0.0))), int(position)))

        # Deterministic tie-break on insertion order
        hits.sort()

        return [QueryResult(id=self.vector_id_map[position], distance=distance) for distance, position in hits[:top_k]]

    def size(self) -> int:
        return int(self.index.ntotal)

    def clear(self) -> None:
        """Clear all records from the FAISS store."""
        self.index = self.faiss.IndexFlatL2(self.dimension)
        self.vector_id_map = []
