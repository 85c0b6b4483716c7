"""
Tests for per-target statistics and the statistics cache.
"""

import threading
import time
from unittest.mock import MagicMock, patch

import pytest

from kosemantic.core.errors import TargetNotResolvableError
from kosemantic.core.stats import StatisticsService, extract_markers
from kosemantic.vector.ranker import NearestNeighborRanker
from kosemantic.vector.similarity import SimilarityScorer
from kosemantic.vector.types import RankedNeighbor, TargetStatistics


def _ranked(scores):
    return [RankedNeighbor(word=f"w{i}", score=s, rank=i + 1) for i, s in enumerate(scores)]


def _syllables(count):
    return [chr(0xAC00 + i) for i in range(count)]


def test_extract_markers_full_list():
    scores = list(range(2000, 0, -1))
    values, effective = extract_markers(scores)
    assert values == (2000, 1991, 1901, 1001)
    assert effective == (1, 10, 100, 1000)


def test_extract_markers_short_list():
    values, effective = extract_markers([90, 80, 70])
    assert values == (90, 70, 70, 70)
    assert effective == (1, 3, 3, 3)


def test_extract_markers_empty():
    assert extract_markers([]) == ((0, 0, 0, 0), (0, 0, 0, 0))


def test_statistics_from_real_ranking(loaded_store):
    ranker = NearestNeighborRanker(SimilarityScorer(loaded_store))
    service = StatisticsService(ranker, loaded_store.words)

    stats = service.get_statistics("자연")
    assert stats.best == 99
    assert stats.total_words == 5
    assert stats.best >= stats.rank10 >= stats.rank100 >= stats.rank1000
    assert stats.effective_ranks == (1, 5, 5, 5)


def test_sample_size_bounds_total_words(empty_store):
    ranker = NearestNeighborRanker(SimilarityScorer(empty_store), is_anchor=lambda w: True)
    service = StatisticsService(ranker, lambda: _syllables(60), sample_size=50)

    stats = service.get_statistics("가")
    assert stats.total_words <= 50
    assert stats.best >= stats.rank10 >= stats.rank100 >= stats.rank1000


def test_cache_hit_within_ttl():
    ranker = MagicMock()
    ranker.rank.return_value = _ranked([80, 70])
    service = StatisticsService(ranker, lambda: ["가", "나"])

    first = service.get_statistics("자연")
    second = service.get_statistics("자연")
    assert first is second
    assert ranker.rank.call_count == 1
    assert service.cached_targets() == ["자연"]


def test_cache_expires():
    ranker = MagicMock()
    ranker.rank.return_value = _ranked([80])
    service = StatisticsService(ranker, lambda: ["가"], ttl_sec=0)

    service.get_statistics("자연")
    service.get_statistics("자연")
    assert ranker.rank.call_count == 2


def test_expired_entries_are_evicted():
    ranker = MagicMock()
    ranker.rank.return_value = _ranked([80])
    service = StatisticsService(ranker, lambda: ["가"], ttl_sec=10)
    clock = [1000.0]

    with patch("kosemantic.core.stats.time") as mock_time:
        mock_time.monotonic.side_effect = lambda: clock[0]
        service.get_statistics("자연")
        clock[0] += 20
        service.get_statistics("바다")
        assert list(service._cache) == ["바다"]

        clock[0] += 20
        assert service.cached_targets() == []


def test_clear_cache_forces_recompute():
    ranker = MagicMock()
    ranker.rank.return_value = _ranked([80])
    service = StatisticsService(ranker, lambda: ["가"])

    service.get_statistics("자연")
    service.clear_cache()
    assert service.cached_targets() == []
    service.get_statistics("자연")
    assert ranker.rank.call_count == 2


def test_concurrent_misses_share_one_computation():
    started = threading.Event()
    release = threading.Event()

    def slow_rank(target, candidates):
        started.set()
        release.wait(timeout=5)
        return _ranked([90, 50])

    ranker = MagicMock()
    ranker.rank.side_effect = slow_rank
    service = StatisticsService(ranker, lambda: ["가", "나"])
    results = []

    def worker():
        results.append(service.get_statistics("자연"))

    first = threading.Thread(target=worker)
    first.start()
    started.wait(timeout=5)
    second = threading.Thread(target=worker)
    second.start()
    time.sleep(0.1)
    release.set()
    first.join(timeout=5)
    second.join(timeout=5)

    assert ranker.rank.call_count == 1
    assert len(results) == 2
    assert results[0] is results[1]


def test_errors_propagate_and_are_not_cached():
    ranker = MagicMock()
    ranker.rank.side_effect = TargetNotResolvableError("우주")
    service = StatisticsService(ranker, lambda: ["가"])

    with pytest.raises(TargetNotResolvableError):
        service.get_statistics("우주")
    assert service.cached_targets() == []


def test_precalculate_logs_instead_of_raising():
    ranker = MagicMock()
    ranker.rank.side_effect = TargetNotResolvableError("우주")
    service = StatisticsService(ranker, lambda: ["가"])
    service.precalculate("우주")

    ranker.rank.side_effect = None
    ranker.rank.return_value = _ranked([70])
    service.precalculate("자연")
    assert service.cached_targets() == ["자연"]


def test_get_word_rank(loaded_store):
    ranker = NearestNeighborRanker(SimilarityScorer(loaded_store))
    service = StatisticsService(ranker, loaded_store.words)

    assert service.get_word_rank("자연", "나무") == 1
    assert service.get_word_rank("자연", "자연") is None
    assert service.get_word_rank("우주", "나무") is None


def test_message_mentions_available_markers():
    full = TargetStatistics("자연", 90, 70, 50, 30, total_words=5000)
    assert "1,000번째" in full.message
    assert "90" in full.message

    small = TargetStatistics("자연", 90, 70, 70, 70, total_words=20, effective_ranks=(1, 10, 20, 20))
    assert "10번째" in small.message
    assert "100번째" not in small.message

    empty = TargetStatistics("자연", 0, 0, 0, 0, total_words=0, effective_ranks=(0, 0, 0, 0))
    assert "없습니다" in empty.message


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
