"""
Tests for the in-memory L2 vector store.
"""

import pytest
import numpy as np
from placesearch.vector.index import IVectorStore, SimpleInMemoryVectorStore
from placesearch.vector.types import VectorRecord, QueryResult


def test_vector_store_interface():
    """Test that SimpleInMemoryVectorStore implements IVectorStore interface."""
    store = SimpleInMemoryVectorStore(dimension=3)
    assert isinstance(store, IVectorStore)


def test_add_and_size():
    store = SimpleInMemoryVectorStore(dimension=3)
    store.add(VectorRecord(id=0, vector=np.array([1.0, 0.0, 0.0])))
    store.batch_add([
        VectorRecord(id=1, vector=np.array([0.0, 1.0, 0.0])),
        VectorRecord(id=2, vector=np.array([0.0, 0.0, 1.0])),
    ])

    assert store.size() == 3


def test_search_orders_by_l2_distance():
    store = SimpleInMemoryVectorStore(dimension=2)
    store.batch_add([
        VectorRecord(id=0, vector=np.array([3.0, 4.0])),
        VectorRecord(id=1, vector=np.array([1.0, 0.0])),
        VectorRecord(id=2, vector=np.array([0.0, 2.0])),
    ])

    results = store.search(np.array([0.0, 0.0]), top_k=3)

    assert [r.id for r in results] == [1, 2, 0]
    assert [r.distance for r in results] == pytest.approx([1.0, 2.0, 5.0])


def test_search_ties_keep_insertion_order():
    store = SimpleInMemoryVectorStore(dimension=2)
    store.batch_add([
        VectorRecord(id=0, vector=np.array([0.0, 1.0])),
        VectorRecord(id=1, vector=np.array([1.0, 0.0])),
        VectorRecord(id=2, vector=np.array([0.0, -1.0])),
    ])

    results = store.search(np.array([0.0, 0.0]), top_k=2)

    assert [r.id for r in results] == [0, 1]


def test_search_top_k_larger_than_store():
    store = SimpleInMemoryVectorStore(dimension=2)
    store.add(VectorRecord(id=0, vector=np.array([1.0, 1.0])))

    assert len(store.search(np.array([1.0, 1.0]), top_k=10)) == 1


def test_search_empty_store():
    store = SimpleInMemoryVectorStore(dimension=2)
    assert store.search(np.array([1.0, 0.0]), top_k=5) == []


def test_dimension_mismatch_rejected_without_partial_insert():
    store = SimpleInMemoryVectorStore(dimension=3)

    with pytest.raises(ValueError):
        store.batch_add([
            VectorRecord(id=0, vector=np.array([1.0, 0.0, 0.0])),
            VectorRecord(id=1, vector=np.array([1.0, 0.0])),
        ])

    assert store.size() == 0


def test_clear():
    store = SimpleInMemoryVectorStore(dimension=2)
    store.add(VectorRecord(id=0, vector=np.array([1.0, 0.0])))

    store.clear()

    assert store.size() == 0
    assert store.search(np.array([1.0, 0.0])) == []


def test_vector_record_fields():
    import dataclasses
    assert [f.name for f in dataclasses.fields(VectorRecord)] == ["id", "vector"]


def test_query_result_score():
    assert QueryResult(id=0, distance=0.0).score == 1.0
    assert QueryResult(id=0, distance=1.0).score == pytest.approx(0.5)
    assert QueryResult(id=0, distance=3.0).score == pytest.approx(0.25)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
