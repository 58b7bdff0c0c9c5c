"""
Embedding providers for place search.
The sentence-transformers provider is optional: when the library or the model
cannot be loaded it reports itself unavailable for the rest of the process.
"""

from abc import ABC, abstractmethod
import hashlib
import threading
from typing import Optional
import numpy as np

from util.logging import logger

# Heavy optional dependency; absence just means no vector search
try:
    from sentence_transformers import SentenceTransformer
    SENTENCE_TRANSFORMERS_AVAILABLE = True
except ImportError:
    SentenceTransformer = None
    SENTENCE_TRANSFORMERS_AVAILABLE = False


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> Optional[np.ndarray]:
        """Generate a unit-length embedding, or None when the provider is unavailable."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Whether embed_text can produce vectors in this process."""
        pass

    @property
    def name(self) -> str:
        return type(self).__name__


def _normalize(vector: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vector)
    if norm == 0:
        return vector
    return vector / norm


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic feature-hashing embedding for tests and offline deployments.

    Each lower-cased token is hashed into a signed bucket, so texts sharing
    words land near each other without any model download.
    """

    def __init__(self, dimension: int = 384):
        self.dimension = dimension

    def embed_text(self, text: str) -> np.ndarray:
        vector = np.zeros(self.dimension, dtype=np.float32)
        for token in text.lower().split():
            digest = hashlib.md5(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:4], "little") % self.dimension
            sign = 1.0 if digest[4] % 2 == 0 else -1.0
            vector[bucket] += sign
        return _normalize(vector).astype(np.float32)

    def get_dimension(self) -> int:
        return self.dimension

    def is_available(self) -> bool:
        return True

    @property
    def name(self) -> str:
        return "hash"


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Sentence transformers embedding provider using a pre-trained model.

    Defaults to all-MiniLM-L6-v2 (384 dimensions, mean pooling). The model is
    loaded on first use; a failed load is permanent for this instance.
    """

    def __init__(self, model_name: str = "sentence-transformers/all-MiniLM-L6-v2", dimension: int = 384):
        self.model_name = model_name
        self._model = None
        self._dimension = dimension
        self._load_failed = False
        self._load_error = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self.model_name

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    def _load(self):
        """Load the model once. Returns None if it cannot be loaded."""
        if self._model is not None or self._load_failed:
            return self._model

        with self._lock:
            if self._model is not None or self._load_failed:
                return self._model

            try:
                if not SENTENCE_TRANSFORMERS_AVAILABLE:
                    raise ImportError("sentence-transformers is not installed")
                logger.info(f"Loading embedding model: {self.model_name}...")
                model = SentenceTransformer(self.model_name)
                self._dimension = model.get_sentence_embedding_dimension() or self._dimension
                self._model = model
                logger.log_capability("embedding", True, self.model_name)
            except Exception as e:
                self._load_failed = True
                self._load_error = str(e)
                logger.log_capability("embedding", False, f"{type(e).__name__}: {e}")

        return self._model

    def is_available(self) -> bool:
        return self._load() is not None

    def embed_text(self, text: str) -> Optional[np.ndarray]:
        """Mean-pooled, L2-normalized embedding. Inference errors propagate."""
        model = self._load()
        if model is None:
            return None

        embedding = model.encode(text, convert_to_numpy=True, normalize_embeddings=True, show_progress_bar=False)
        return np.asarray(embedding, dtype=np.float32)

    def get_dimension(self) -> int:
        return self._dimension
