"""
Place search configuration.
All settings come from environment variables (optionally via a .env file).
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

# Bundled sample dataset ships inside the package
DEFAULT_DATA_PATH = str(Path(__file__).resolve().parent.parent / "data" / "india_places.json")
PLACES_DATA_PATH = os.getenv("PLACES_DATA_PATH", DEFAULT_DATA_PATH)

# Debug flag
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# Vector search configuration (default enabled, degrades to text search)
VECTOR_ENABLED = os.getenv("VECTOR_ENABLED", "true").lower() == "true"
VECTOR_PROVIDER = os.getenv("VECTOR_PROVIDER", "faiss")  # faiss|memory
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "sentence_transformer")  # sentence_transformer|hash
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "sentence-transformers/all-MiniLM-L6-v2")
EMBED_DIM = int(os.getenv("EMBED_DIM", "384"))

# Search tuning
DEFAULT_TOP_K = int(os.getenv("DEFAULT_TOP_K", "10"))
MAX_SEARCH_LIMIT = int(os.getenv("MAX_SEARCH_LIMIT", "50"))
OVERFETCH_MULTIPLIER = int(os.getenv("OVERFETCH_MULTIPLIER", "5"))
FULL_SCAN_THRESHOLD = int(os.getenv("FULL_SCAN_THRESHOLD", "500"))  # filtered queries scan the whole index below this size

# API startup behaviour
WARM_ON_STARTUP = os.getenv("WARM_ON_STARTUP", "true").lower() == "true"

# Version string
VERSION = "1.0.0"


def get_vector_store(dimension: int = None, enabled: Optional[bool] = None):
    """Get configured vector store implementation. Returns None if vector features disabled.

    An explicit enabled flag overrides VECTOR_ENABLED.
    """
    if enabled is None:
        enabled = are_vector_features_enabled()
    if not enabled:
        return None

    dimension = dimension or get_embedding_dimension()
    provider = os.getenv("VECTOR_PROVIDER", VECTOR_PROVIDER)

    if provider == "memory":
        from placesearch.vector.index import SimpleInMemoryVectorStore
        return SimpleInMemoryVectorStore(dimension)
    elif provider == "faiss":
        try:
            from placesearch.vector.faiss_store import FaissVectorStore
            return FaissVectorStore(dimension)
        except ImportError:
            # Gracefully degrade to memory store if FAISS not available
            from util.logging import logger
            logger.log_capability("faiss", False, "faiss-cpu not installed, using in-memory store")
            from placesearch.vector.index import SimpleInMemoryVectorStore
            return SimpleInMemoryVectorStore(dimension)
    else:
        # Default to memory store for unknown providers
        from placesearch.vector.index import SimpleInMemoryVectorStore
        return SimpleInMemoryVectorStore(dimension)


def get_embedding_provider(enabled: Optional[bool] = None):
    """Get configured embedding provider implementation. Returns None if vector features disabled."""
    if enabled is None:
        enabled = are_vector_features_enabled()
    if not enabled:
        return None

    provider = os.getenv("EMBED_PROVIDER", EMBED_PROVIDER)

    if provider == "hash":
        from placesearch.vector.embeddings import DeterministicHashEmbedding
        return DeterministicHashEmbedding(get_embedding_dimension())
    else:
        from placesearch.vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(get_embedding_model_name())


def get_data_path() -> str:
    """Path of the geographic dataset JSON file."""
    return os.getenv("PLACES_DATA_PATH", PLACES_DATA_PATH)


def get_embedding_model_name() -> str:
    return os.getenv("EMBED_MODEL_NAME", EMBED_MODEL_NAME)


def get_embedding_dimension() -> int:
    return int(os.getenv("EMBED_DIM", str(EMBED_DIM)))


def get_overfetch_multiplier() -> int:
    return int(os.getenv("OVERFETCH_MULTIPLIER", str(OVERFETCH_MULTIPLIER)))


def get_full_scan_threshold() -> int:
    return int(os.getenv("FULL_SCAN_THRESHOLD", str(FULL_SCAN_THRESHOLD)))


def get_max_search_limit() -> int:
    return int(os.getenv("MAX_SEARCH_LIMIT", str(MAX_SEARCH_LIMIT)))


def are_vector_features_enabled():
    """Check if vector features are enabled."""
    return os.getenv("VECTOR_ENABLED", "true").lower() == "true"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def warm_on_startup():
    """Check if the API should start the search bootstrap at startup."""
    return os.getenv("WARM_ON_STARTUP", "true").lower() == "true"


def validate_search_config():
    """Validate search configuration and return any issues."""
    issues = []

    if os.getenv("VECTOR_PROVIDER", VECTOR_PROVIDER) not in ["faiss", "memory"]:
        issues.append(f"Invalid VECTOR_PROVIDER: {os.getenv('VECTOR_PROVIDER')}")

    if os.getenv("EMBED_PROVIDER", EMBED_PROVIDER) not in ["sentence_transformer", "hash"]:
        issues.append(f"Invalid EMBED_PROVIDER: {os.getenv('EMBED_PROVIDER')}")

    if get_embedding_dimension() < 1:
        issues.append("EMBED_DIM must be >= 1")

    if get_overfetch_multiplier() < 1:
        issues.append("OVERFETCH_MULTIPLIER must be >= 1")

    if get_max_search_limit() < 1:
        issues.append("MAX_SEARCH_LIMIT must be >= 1")

    return issues
