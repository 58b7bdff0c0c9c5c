"""
Tests for the index warm-up script.
"""

import json
import pytest

from scripts.warm_index import main

from conftest import SAMPLE_STATES, SAMPLE_UTS


@pytest.fixture
def dataset_file(tmp_path):
    path = tmp_path / "places.json"
    path.write_text(json.dumps({"states": SAMPLE_STATES, "uts": SAMPLE_UTS}))
    return str(path)


def test_warm_index_vector_mode(monkeypatch, capsys, dataset_file):
    monkeypatch.setenv("VECTOR_ENABLED", "true")
    monkeypatch.setenv("VECTOR_PROVIDER", "memory")
    monkeypatch.setenv("EMBED_PROVIDER", "hash")

    assert main(["--data", dataset_file, "--query", "beach", "--top-k", "3"]) == 0

    out = capsys.readouterr().out
    assert "Loaded 9 places" in out
    assert "Vector index built with 9 vectors" in out
    assert "returned 3 results" in out


def test_warm_index_text_mode(monkeypatch, capsys, dataset_file):
    monkeypatch.setenv("VECTOR_ENABLED", "false")

    assert main(["--data", dataset_file, "--query", "temple", "--destination", "Tamil Nadu"]) == 0

    out = capsys.readouterr().out
    assert "using text search" in out
    assert "Meenakshi Amman Temple" in out


def test_warm_index_empty_dataset(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("VECTOR_ENABLED", "false")

    assert main(["--data", str(tmp_path / "missing.json")]) == 0
    assert "empty dataset" in capsys.readouterr().out


def test_warm_index_rejects_bad_config(monkeypatch, capsys, dataset_file):
    monkeypatch.setenv("VECTOR_PROVIDER", "annoy")

    assert main(["--data", dataset_file]) == 1
    assert "Invalid VECTOR_PROVIDER" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
