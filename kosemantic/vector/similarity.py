"""
Similarity function: cosine over stored vectors, mapped onto the game scale.

Two strategies sit behind one `score()` entry point. The vector strategy is
tried first; the heuristic fallback takes over when either vector is missing.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import numpy as np

from ..util.logging import logger
from .types import MAX_SCORE, METHOD_FALLBACK, METHOD_VECTOR, MIN_SCORE, ScoreResult

# 100 is reserved for an exact word match
VECTOR_CEILING = MAX_SCORE - 1


def cosine_similarity(vec1: np.ndarray, vec2: np.ndarray) -> float:
    """
    Dot product over the product of L2 norms.

    Returns 0.0 for a zero-norm vector instead of dividing by zero.
    """
    if len(vec1) != len(vec2):
        raise ValueError(f"Vector dimensions must match: {len(vec1)} != {len(vec2)}")

    norm1 = np.linalg.norm(vec1)
    norm2 = np.linalg.norm(vec2)
    if norm1 == 0 or norm2 == 0:
        return 0.0
    return float(np.dot(vec1, vec2) / (norm1 * norm2))


def normalize_score(raw: float) -> int:
    """
    Map a raw cosine value onto the game scale.

    Non-positive cosines map to 0; the mapping is monotonic and capped below
    the exact-match sentinel.
    """
    score = int(round(max(0.0, raw) * 100))
    return max(MIN_SCORE, min(VECTOR_CEILING, score))


def describe_score(score: int) -> str:
    """Rank-band label shown next to a guess."""
    if score >= MAX_SCORE:
        return "정답!"
    if score >= 95:
        return "상위 10위"
    if score >= 85:
        return "상위 50위"
    if score >= 75:
        return "상위 100위"
    if score >= 60:
        return "상위 500위"
    if score >= 45:
        return "상위 1000위"
    return "1000위 이상"


class SimilarityStrategy(ABC):
    """Abstract interface for a similarity variant."""

    method: str = ""

    @abstractmethod
    def score(self, word1: str, word2: str) -> Optional[ScoreResult]:
        """Score a pair, or None when this strategy cannot."""
        pass

    @abstractmethod
    def score_many(self, target: str, candidates: List[str]) -> List[Optional[ScoreResult]]:
        """Score a target against many candidates, preserving order."""
        pass


class VectorCosineStrategy(SimilarityStrategy):
    """Cosine similarity over embedding store vectors."""

    method = METHOD_VECTOR

    def __init__(self, store):
        self.store = store

    def score(self, word1: str, word2: str) -> Optional[ScoreResult]:
        return self.score_many(word1, [word2])[0]

    def score_many(self, target: str, candidates: List[str]) -> List[Optional[ScoreResult]]:
        """
        Vectorized cosine of the target against every candidate.

        Candidates in the preloaded snapshot are scored with one matrix
        product; the rest are fetched from the store in one batch. Entries
        without a vector come back as None.
        """
        results: List[Optional[ScoreResult]] = [None] * len(candidates)
        if not candidates:
            return results

        snapshot = self.store.snapshot()
        target_row = snapshot.index.get(target)
        # Same norm values in both argument orders keeps scores symmetric
        if target_row is not None:
            target_vector = snapshot.matrix[target_row]
            target_norm = snapshot.norms[target_row]
        else:
            target_vector = self.store.get_vector(target)
            if target_vector is None:
                return results
            target_norm = np.linalg.norm(target_vector)

        positions, rows, outside = [], [], []
        for pos, word in enumerate(candidates):
            row = snapshot.index.get(word)
            if row is not None:
                positions.append(pos)
                rows.append(row)
            else:
                outside.append(pos)

        if outside:
            # One batched lookup, so a ranking pass scans the source at most once
            extra = self.store.get_vectors(candidates[pos] for pos in outside)
            for pos in outside:
                vector = extra.get(candidates[pos])
                if vector is not None:
                    raw = cosine_similarity(target_vector, vector)
                    results[pos] = ScoreResult(normalize_score(raw), self.method, raw)

        if rows:
            rows_arr = np.asarray(rows)
            dots = snapshot.matrix[rows_arr] @ target_vector
            denominators = snapshot.norms[rows_arr] * target_norm
            with np.errstate(divide="ignore", invalid="ignore"):
                raws = np.where(denominators > 0, dots / denominators, 0.0)
            for pos, raw in zip(positions, raws):
                raw = float(raw)
                results[pos] = ScoreResult(normalize_score(raw), self.method, raw)

        return results


class SimilarityScorer:
    """
    Public scoring entry point.

    Pure over the current store state: safe to call from many threads. The
    only shared mutation is the pair of path counters kept for status
    reporting.
    """

    def __init__(self, store, fallback: SimilarityStrategy = None):
        if fallback is None:
            from .fallback import HeuristicFallbackStrategy
            fallback = HeuristicFallbackStrategy()

        self.store = store
        self.vector_strategy = VectorCosineStrategy(store)
        self.fallback_strategy = fallback
        self._counts = {METHOD_VECTOR: 0, METHOD_FALLBACK: 0}
        self._counts_lock = threading.Lock()

    def score(self, word1: str, word2: str) -> ScoreResult:
        """Score two already-validated words."""
        return self.score_many(word1, [word2])[0]

    def score_many(self, target: str, candidates: List[str]) -> List[ScoreResult]:
        """
        Score the target against each candidate, in candidate order.

        Exact matches get the sentinel score. Pairs with both vectors use
        cosine; the rest go to the fallback strategy.
        """
        results = self.vector_strategy.score_many(target, candidates)

        target_has_vector = None
        for pos, word in enumerate(candidates):
            if word == target:
                if target_has_vector is None:
                    target_has_vector = self.store.has_vector(target)
                method = METHOD_VECTOR if target_has_vector else METHOD_FALLBACK
                results[pos] = ScoreResult(MAX_SCORE, method, 1.0 if target_has_vector else None)
            elif results[pos] is None:
                results[pos] = self.fallback_strategy.score(target, word)

        vector_hits = sum(1 for r in results if r.method == METHOD_VECTOR)
        with self._counts_lock:
            self._counts[METHOD_VECTOR] += vector_hits
            self._counts[METHOD_FALLBACK] += len(results) - vector_hits

        if len(candidates) == 1:
            result = results[0]
            logger.log_similarity(target, candidates[0], result.similarity, result.method, result.raw)

        return results

    def path_counts(self) -> Dict[str, int]:
        """Comparisons served by each path since startup."""
        with self._counts_lock:
            return dict(self._counts)
