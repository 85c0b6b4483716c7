"""
Nearest-neighbor ranking of a vocabulary against a target word.
"""

from typing import Callable, Iterable, List, Optional

from ..core.errors import TargetNotResolvableError
from .similarity import SimilarityScorer
from .types import RankedNeighbor


class NearestNeighborRanker:
    """
    Ranks candidates by similarity to a target.

    Cost is one similarity evaluation per candidate plus a sort, so callers
    should bound the candidate set (the filtered store vocabulary, or a
    sample of it).
    """

    def __init__(self, scorer: SimilarityScorer, is_anchor: Callable[[str], bool] = None):
        """
        Args:
            scorer: Similarity entry point shared with single-pair scoring
            is_anchor: Extra test for targets without a vector, e.g. a
                dictionary check; a target passing it is ranked via fallback
        """
        self.scorer = scorer
        self.is_anchor = is_anchor

    def is_resolvable(self, target: str) -> bool:
        """A target needs a vector or some fallback basis to anchor a ranking."""
        if not target:
            return False
        if self.scorer.store.has_vector(target):
            return True
        return bool(self.is_anchor and self.is_anchor(target))

    def rank(self, target: str, candidates: Optional[Iterable[str]] = None, k: Optional[int] = None) -> List[RankedNeighbor]:
        """
        Rank candidates by descending score, excluding the target itself.

        Args:
            target: Anchor word
            candidates: Words to rank; defaults to the preloaded vocabulary
            k: Keep only the top k entries

        Returns:
            Entries with 1-based ranks. Ties keep their input order.

        Raises:
            TargetNotResolvableError: target has no vector and no fallback basis
        """
        if not self.is_resolvable(target):
            raise TargetNotResolvableError(target)

        if candidates is None:
            candidates = self.scorer.store.words()

        # Duplicates would occupy two ranks
        words = [w for w in dict.fromkeys(candidates) if w != target]
        if not words:
            return []

        results = self.scorer.score_many(target, words)
        # sorted() is stable, so equal scores keep candidate order
        order = sorted(range(len(words)), key=lambda i: -results[i].similarity)

        if k is not None:
            order = order[:max(0, k)]

        return [
            RankedNeighbor(word=words[i], score=results[i].similarity, rank=rank)
            for rank, i in enumerate(order, start=1)
        ]

    def rank_of(self, target: str, probe: str, candidates: Iterable[str]) -> Optional[int]:
        """
        Rank the probe would hold in `rank(target, candidates)` without sorting.

        Counts candidates scoring strictly higher, plus equal-scoring ones
        ahead of the probe in input order when the probe is itself a
        candidate. Returns None when the probe is the target.

        Raises:
            TargetNotResolvableError: target has no vector and no fallback basis
        """
        if not self.is_resolvable(target):
            raise TargetNotResolvableError(target)
        if probe == target:
            return None

        words = [w for w in dict.fromkeys(candidates) if w != target]
        probe_in_candidates = probe in words
        if not probe_in_candidates:
            words.append(probe)

        results = self.scorer.score_many(target, words)
        probe_pos = words.index(probe)
        probe_score = results[probe_pos].similarity

        better = 0
        for pos, result in enumerate(results):
            if pos == probe_pos:
                continue
            if result.similarity > probe_score:
                better += 1
            elif result.similarity == probe_score and pos < probe_pos and probe_in_candidates:
                better += 1

        return better + 1
