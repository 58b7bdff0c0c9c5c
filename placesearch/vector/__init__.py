"""
Optional vector retrieval layer: embeddings, flat L2 stores and the place index.
Everything here may be unavailable at runtime; callers fall back to keyword search.
"""

# Package initialization for vector module
from .index import IVectorStore, SimpleInMemoryVectorStore
from .faiss_store import FaissVectorStore
from .types import VectorRecord, QueryResult
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, SentenceTransformerEmbedding
from .place_index import PlaceVectorIndex, IndexUnavailable

__all__ = [
    'IVectorStore',
    'SimpleInMemoryVectorStore',
    'FaissVectorStore',
    'VectorRecord',
    'QueryResult',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'SentenceTransformerEmbedding',
    'PlaceVectorIndex',
    'IndexUnavailable'
]
