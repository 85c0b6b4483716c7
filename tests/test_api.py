"""
Tests for the HTTP surface.
"""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from conftest import format_rows
from kosemantic.api.main import app, get_engine
from kosemantic.core.engine import ScoringEngine
from kosemantic.core.validator import VocabularyValidator


@pytest.fixture
def engine(loaded_store):
    validator = VocabularyValidator(["자연", "나무", "숲", "바다", "음식", "커피"])
    return ScoringEngine(loaded_store, validator=validator)


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["db_health"] is True
    assert data["vectors_loaded"] == 6


def test_similarity(client):
    response = client.post("/similarity", json={"word1": "자연", "word2": "나무"})
    assert response.status_code == 200
    assert response.json() == {"similarity": 99, "method": "vector", "label": "상위 10위"}


def test_similarity_exact_match(client):
    response = client.post("/similarity", json={"word1": "바다", "word2": "바다"})
    assert response.json()["similarity"] == 100
    assert response.json()["label"] == "정답!"


def test_similarity_invalid_word(client):
    response = client.post("/similarity", json={"word1": "apple", "word2": "나무"})
    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "not_hangul"


def test_similarity_empty_word_rejected_by_schema(client):
    response = client.post("/similarity", json={"word1": " ", "word2": "나무"})
    assert response.status_code == 422


def test_rank(client):
    response = client.get("/rank/자연/바다")
    assert response.status_code == 200
    assert response.json()["rank"] == 3


def test_rank_of_target_itself(client):
    assert client.get("/rank/자연/자연").json()["rank"] is None


def test_statistics_uses_camel_case(client):
    response = client.get("/statistics/자연")
    assert response.status_code == 200
    data = response.json()
    assert data["totalWords"] == 5
    assert data["best"] == 99
    assert set(data) == {"best", "rank10", "rank100", "rank1000", "totalWords", "message"}


def test_statistics_unknown_target(client):
    assert client.get("/statistics/우주").status_code == 404


def test_neighbors(client):
    response = client.get("/neighbors/자연", params={"k": 2})
    assert response.status_code == 200
    assert [n["word"] for n in response.json()["neighbors"]] == ["나무", "숲"]


def test_malformed_words_rejected_on_ranking_routes(client):
    response = client.get("/rank/자연/hello")
    assert response.status_code == 400
    assert response.json()["detail"] == {"word": "hello", "reason": "not_hangul"}

    assert client.get("/statistics/hello").status_code == 400
    assert client.get("/neighbors/hello").status_code == 400
    assert client.get("/rank/" + "가" * 50 + "/자연").json()["detail"]["reason"] == "too_long"


def test_word_validation(client):
    assert client.get("/words/자연/valid").json() == {"word": "자연", "valid": True, "reason": None}
    assert client.get("/words/우주/valid").json()["reason"] == "not_in_dictionary"
    assert client.get("/words/hello/valid").json()["reason"] == "not_hangul"


def test_status(client):
    client.post("/similarity", json={"word1": "자연", "word2": "나무"})
    data = client.get("/status").json()
    assert data["vectorsLoaded"] == 6
    assert data["usingRealVectors"] is True
    assert data["vectorProvenance"] == "fasttext"
    assert data["vectorComparisons"] == 1


def test_admin_reload_requires_debug(client):
    with patch.dict(os.environ, {"DEBUG": "false"}):
        response = client.post("/admin/reload", json={})
    assert response.status_code == 403


def test_admin_reload(client, tmp_path):
    source = tmp_path / "more.vec"
    source.write_text("".join(format_rows([("하늘", [0.0, 0.5, 0.5])])), encoding="utf-8")

    with patch.dict(os.environ, {"DEBUG": "true"}):
        response = client.post("/admin/reload", json={"source": str(source)})
    assert response.status_code == 200
    assert response.json() == {"count": 1, "vectorsLoaded": 7}


def test_admin_reload_missing_source(client, tmp_path):
    with patch.dict(os.environ, {"DEBUG": "true"}):
        response = client.post("/admin/reload", json={"source": str(tmp_path / "missing.vec")})
    assert response.status_code == 400


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
