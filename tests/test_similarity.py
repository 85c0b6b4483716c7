"""
Tests for cosine scoring and the public similarity entry point.
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from kosemantic.vector.similarity import (
    SimilarityScorer,
    VectorCosineStrategy,
    cosine_similarity,
    describe_score,
    normalize_score,
)
from kosemantic.vector.types import ScoreResult


def test_cosine_basic():
    assert cosine_similarity(np.array([1.0, 0.0]), np.array([1.0, 0.0])) == pytest.approx(1.0)
    assert cosine_similarity(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == pytest.approx(0.0)
    assert cosine_similarity(np.array([1.0, 0.0]), np.array([-1.0, 0.0])) == pytest.approx(-1.0)


def test_cosine_zero_vector():
    assert cosine_similarity(np.zeros(3), np.array([1.0, 2.0, 3.0])) == 0.0


def test_cosine_dimension_mismatch():
    with pytest.raises(ValueError):
        cosine_similarity(np.zeros(2), np.zeros(3))


def test_normalize_score_bounds():
    assert normalize_score(-0.7) == 0
    assert normalize_score(0.0) == 0
    assert normalize_score(0.42) == 42
    # 100 is reserved for identical words
    assert normalize_score(1.0) == 99


def test_normalize_score_is_monotonic():
    raws = np.linspace(-1.0, 1.0, 201)
    scores = [normalize_score(float(r)) for r in raws]
    assert scores == sorted(scores)


def test_describe_score():
    assert describe_score(100) == "정답!"
    assert describe_score(96) == "상위 10위"
    assert describe_score(80) == "상위 100위"
    assert describe_score(10) == "1000위 이상"


def test_identity_scores_100(loaded_store):
    scorer = SimilarityScorer(loaded_store)
    result = scorer.score("자연", "자연")
    assert result.similarity == 100
    assert result.method == "vector"


def test_identity_without_vector_scores_100(loaded_store):
    result = SimilarityScorer(loaded_store).score("우주", "우주")
    assert result == ScoreResult(100, "fallback", None)


def test_related_pair_outscores_unrelated(loaded_store):
    scorer = SimilarityScorer(loaded_store)
    close = scorer.score("자연", "나무")
    far = scorer.score("자연", "음식")

    assert close.method == "vector"
    assert close.similarity == 99
    assert far.similarity == 0
    assert close.similarity > far.similarity


def test_scores_are_symmetric(loaded_store):
    scorer = SimilarityScorer(loaded_store)
    words = ["자연", "나무", "숲", "바다", "음식", "커피", "우주"]
    for w1 in words:
        for w2 in words:
            assert scorer.score(w1, w2).similarity == scorer.score(w2, w1).similarity


def test_scores_stay_in_range(loaded_store):
    scorer = SimilarityScorer(loaded_store)
    for result in scorer.score_many("자연", ["나무", "숲", "우주", "학교", "자연"]):
        assert 0 <= result.similarity <= 100


def test_missing_vector_uses_fallback(loaded_store):
    fallback = MagicMock()
    fallback.score.return_value = ScoreResult(33, "fallback")
    scorer = SimilarityScorer(loaded_store, fallback=fallback)

    result = scorer.score("자연", "우주")
    assert result.similarity == 33
    assert result.method == "fallback"
    fallback.score.assert_called_once_with("자연", "우주")


def test_score_many_matches_single_pair(loaded_store):
    scorer = SimilarityScorer(loaded_store)
    candidates = ["나무", "숲", "바다", "음식", "우주"]
    batch = scorer.score_many("자연", candidates)
    assert [r.similarity for r in batch] == [scorer.score("자연", w).similarity for w in candidates]


def test_zero_vector_scores_zero(empty_store):
    empty_store.load_bulk(["영 0 0 0\n", "자연 1 0 0\n"])
    result = VectorCosineStrategy(empty_store).score("자연", "영")
    assert result.similarity == 0
    assert result.raw == 0.0


def test_vector_strategy_declines_without_vectors(empty_store):
    assert VectorCosineStrategy(empty_store).score("자연", "나무") is None


def test_path_counts(loaded_store):
    scorer = SimilarityScorer(loaded_store)
    scorer.score("자연", "나무")
    scorer.score("자연", "우주")
    assert scorer.path_counts() == {"vector": 1, "fallback": 1}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
