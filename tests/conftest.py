"""
Shared fixtures for place search tests.
Vector tests use the deterministic hash embedding so no model is downloaded.
"""

import os
import pytest

# Never let the API module warm a real model during tests
os.environ.setdefault("WARM_ON_STARTUP", "false")

from placesearch.core.dataset import StaticGeoDataset
from placesearch.core.search_service import SearchService
from placesearch.vector.embeddings import DeterministicHashEmbedding
from placesearch.vector.index import SimpleInMemoryVectorStore


SAMPLE_STATES = {
    "KL": {
        "name": "Kerala",
        "capital": "Thiruvananthapuram",
        "region": "South India",
        "famousFor": ["Backwaters", "Spices"],
        "touristAttractions": [
            {"name": "Kovalam Beach", "type": "Beach", "city": "Thiruvananthapuram"},
            {"name": "Periyar Wildlife Sanctuary", "type": "Wildlife Sanctuary", "district": "Idukki"},
            {"name": "Munnar", "type": "Hill Station", "district": "Idukki"},
        ],
        "tourismHighlights": [
            {"name": "Alleppey Backwaters", "type": "Backwater", "city": "Alappuzha"},
        ],
    },
    "TN": {
        "name": "Tamil Nadu",
        "capital": "Chennai",
        "region": "South India",
        "famousFor": ["Temples"],
        "touristAttractions": [
            {"name": "Meenakshi Amman Temple", "type": "Temple", "city": "Madurai"},
            {"name": "Marina Beach", "type": "Beach", "city": "Chennai"},
        ],
    },
    "GA": {
        "name": "Goa",
        "capital": "Panaji",
        "region": "West India",
        "famousFor": ["Beaches", "Nightlife"],
        "touristAttractions": [
            {"name": "Baga Beach", "type": "Beach", "district": "North Goa"},
            {"name": "Fort Aguada", "type": "Fort", "district": "North Goa"},
        ],
    },
}

SAMPLE_UTS = {
    "DL": {
        "name": "Delhi",
        "capital": "New Delhi",
        "famousFor": ["Monuments"],
        "touristAttractions": [
            {"name": "Red Fort", "type": "Fort", "city": "New Delhi"},
        ],
    },
}

# Corpus order of the sample dataset
SAMPLE_PLACE_NAMES = [
    "Kovalam Beach",
    "Periyar Wildlife Sanctuary",
    "Munnar",
    "Alleppey Backwaters",
    "Meenakshi Amman Temple",
    "Marina Beach",
    "Baga Beach",
    "Fort Aguada",
    "Red Fort",
]


@pytest.fixture
def sample_dataset():
    return StaticGeoDataset(SAMPLE_STATES, SAMPLE_UTS)


@pytest.fixture
def hash_embedder():
    return DeterministicHashEmbedding(dimension=384)


@pytest.fixture
def text_service(sample_dataset):
    """Search service with vector search switched off."""
    return SearchService(dataset=sample_dataset, vector_enabled=False)


@pytest.fixture
def vector_service(sample_dataset, hash_embedder):
    """Search service with a hash-embedding vector index over the sample data."""
    return SearchService(
        dataset=sample_dataset,
        embedding_provider=hash_embedder,
        vector_store=SimpleInMemoryVectorStore(hash_embedder.get_dimension()),
        vector_enabled=True,
    )
