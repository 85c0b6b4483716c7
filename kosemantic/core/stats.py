"""
Similarity statistics per target word.

Tells players how good a score is without revealing the target: the scores
of the 1st, 10th, 100th and 1000th nearest words. Cached per target with a
time-to-live; concurrent misses for the same target share one computation.
"""

import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from ..util.logging import logger
from ..vector.ranker import NearestNeighborRanker
from ..vector.types import TargetStatistics
from .errors import ScoringError, TargetNotResolvableError

MARKER_RANKS = (1, 10, 100, 1000)


def extract_markers(scores: List[int]) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    """
    Pick marker scores from a descending score list.

    When the list is shorter than a marker rank, the lowest available rank
    stands in and is reported in the second tuple.

    Returns:
        (marker scores, rank actually used for each marker)
    """
    if not scores:
        return (0, 0, 0, 0), (0, 0, 0, 0)

    effective = tuple(min(rank, len(scores)) for rank in MARKER_RANKS)
    values = tuple(scores[rank - 1] for rank in effective)
    return values, effective


class _InFlight:
    """A computation other callers can wait on."""

    def __init__(self):
        self.done = threading.Event()
        self.result: Optional[TargetStatistics] = None
        self.error: Optional[BaseException] = None


class StatisticsService:
    """
    Computes and caches TargetStatistics.

    Args:
        ranker: Ranker shared with the engine
        sample_words: Callable returning the vocabulary sample to rank over
        ttl_sec: Cache lifetime per target
        sample_size: Upper bound on the sample, keeping latency inside a round
    """

    def __init__(self, ranker: NearestNeighborRanker, sample_words: Callable[[], List[str]],
                 ttl_sec: int = 86400, sample_size: int = 5000):
        self.ranker = ranker
        self._sample_words = sample_words
        self.ttl_sec = ttl_sec
        self.sample_size = sample_size

        self._cache: Dict[str, Tuple[float, TargetStatistics]] = {}
        self._in_flight: Dict[str, _InFlight] = {}
        self._lock = threading.Lock()

    def sample(self) -> List[str]:
        """Bounded vocabulary sample, in source order."""
        return list(dict.fromkeys(self._sample_words()))[:self.sample_size]

    def get_statistics(self, target: str) -> TargetStatistics:
        """
        Statistics for a target, computed on first request and cached.

        Raises:
            TargetNotResolvableError: target cannot anchor a ranking
        """
        with self._lock:
            now = time.monotonic()
            cached = self._cache.get(target)
            if cached is not None and now - cached[0] < self.ttl_sec:
                logger.log_stats(target, cached[1].total_words, 0.0, cached=True)
                return cached[1]
            self._evict_expired(now)

            flight = self._in_flight.get(target)
            owner = flight is None
            if owner:
                flight = _InFlight()
                self._in_flight[target] = flight

        if not owner:
            flight.done.wait()
            if flight.error is not None:
                raise flight.error
            return flight.result

        try:
            stats = self._compute(target)
            flight.result = stats
            with self._lock:
                self._cache[target] = (time.monotonic(), stats)
            return stats
        except BaseException as e:
            flight.error = e
            raise
        finally:
            with self._lock:
                self._in_flight.pop(target, None)
            flight.done.set()

    def _compute(self, target: str) -> TargetStatistics:
        start_time = time.monotonic()
        ranked = self.ranker.rank(target, self.sample())
        values, effective = extract_markers([entry.score for entry in ranked])

        stats = TargetStatistics(
            target_word=target,
            best=values[0],
            rank10=values[1],
            rank100=values[2],
            rank1000=values[3],
            total_words=len(ranked),
            effective_ranks=effective,
        )
        logger.log_stats(target, stats.total_words, (time.monotonic() - start_time) * 1000)
        return stats

    def get_word_rank(self, target: str, probe: str) -> Optional[int]:
        """
        Where the probe lands among the sampled words for this target.

        Returns:
            1-based rank, or None when the probe is the target itself or
            the target cannot anchor a ranking
        """
        try:
            return self.ranker.rank_of(target, probe, self.sample())
        except TargetNotResolvableError as e:
            logger.warning(f"Error calculating rank for '{probe}': {e}")
            return None

    def precalculate(self, target: str) -> None:
        """Warm the cache at round start. Failures are logged, not raised."""
        try:
            self.get_statistics(target)
        except ScoringError as e:
            logger.error(f"Error pre-calculating stats for '{target}': {e}")

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
        logger.info("Similarity stats cache cleared")

    def cached_targets(self) -> List[str]:
        with self._lock:
            self._evict_expired(time.monotonic())
            return list(self._cache.keys())

    def _evict_expired(self, now: float) -> None:
        # Caller holds self._lock
        expired = [target for target, (at, _) in self._cache.items() if now - at >= self.ttl_sec]
        for target in expired:
            del self._cache[target]
