"""
Scoring engine: the single service object the game layer talks to.

Constructed once at startup and passed to callers. Owns the embedding store,
validator, scorer, ranker and statistics service.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..util.logging import logger
from ..vector.loader import VectorSource
from ..vector.ranker import NearestNeighborRanker
from ..vector.similarity import SimilarityScorer, SimilarityStrategy
from ..vector.store import PROVENANCE_FASTTEXT, EmbeddingStore
from ..vector.types import METHOD_FALLBACK, METHOD_VECTOR, RankedNeighbor, ScoreResult, TargetStatistics
from .errors import InvalidWordError
from .stats import StatisticsService
from .validator import ValidationResult, VocabularyValidator


@dataclass(frozen=True)
class SystemStatus:
    vectors_loaded: int
    using_real_vectors: bool
    vector_provenance: str
    store_available: bool
    dictionary_loaded: bool
    dictionary_words: int
    vector_comparisons: int
    fallback_comparisons: int
    cached_statistics: int


class ScoringEngine:
    """
    Facade over the scoring core.

    Every operation is read-only against store state except `reload()`,
    which builds a new snapshot and swaps it in.
    """

    def __init__(self, store: EmbeddingStore, validator: VocabularyValidator = None,
                 fallback: SimilarityStrategy = None, sample_words: Optional[List[str]] = None,
                 stats_ttl_sec: int = 86400, stats_sample_size: int = 5000):
        self.store = store
        self.validator = validator or VocabularyValidator()
        self.scorer = SimilarityScorer(store, fallback)
        self.ranker = NearestNeighborRanker(self.scorer, is_anchor=self.validator.is_valid)
        self._sample_words = list(sample_words) if sample_words else None
        self.stats = StatisticsService(
            self.ranker,
            self._statistics_sample,
            ttl_sec=stats_ttl_sec,
            sample_size=stats_sample_size,
        )

    def _statistics_sample(self) -> List[str]:
        # Frequent-word list first, then the loaded vocabulary, then the dictionary
        return self._sample_words or self.store.words() or self.validator.all_words()

    def score(self, word1: str, word2: str) -> ScoreResult:
        """
        Similarity of two words on the 0-100 scale.

        Raises:
            InvalidWordError: a word fails the length or character-set check
        """
        first = self.validator.require(word1, dictionary=False)
        second = self.validator.require(word2, dictionary=False)
        return self.scorer.score(first, second)

    def rank(self, target: str, probe: str) -> Optional[int]:
        """
        Rank of the probe among sampled words for the target.

        Raises:
            InvalidWordError: either word fails the length or character-set check
        """
        return self.stats.get_word_rank(self._normalize(target), self._normalize(probe))

    def statistics(self, target: str) -> TargetStatistics:
        """
        Cached score markers for the target.

        Raises:
            InvalidWordError: target fails the length or character-set check
            TargetNotResolvableError: target cannot anchor a ranking
        """
        return self.stats.get_statistics(self._normalize(target))

    def neighbors(self, target: str, k: int = 10) -> List[RankedNeighbor]:
        """Top-k most similar words over the same sample the statistics use."""
        return self.ranker.rank(self._normalize(target), self.stats.sample(), k=k)

    def precalculate(self, target: str) -> None:
        """Compute statistics ahead of a round. Failures are logged, not raised."""
        try:
            word = self._normalize(target)
        except InvalidWordError as e:
            logger.error(f"Error pre-calculating stats for '{target}': {e}")
            return
        self.stats.precalculate(word)

    def is_valid_word(self, word: str) -> bool:
        return self.validator.is_valid(word)

    def check_word(self, word: str) -> ValidationResult:
        """Validation with the specific rejection reason."""
        return self.validator.check(word)

    def system_status(self) -> SystemStatus:
        counts = self.scorer.path_counts()
        return SystemStatus(
            vectors_loaded=self.store.vector_count(),
            using_real_vectors=self.store.provenance == PROVENANCE_FASTTEXT,
            vector_provenance=self.store.provenance,
            store_available=self.store.available,
            dictionary_loaded=self.validator.dictionary_loaded,
            dictionary_words=self.validator.dictionary_stats()["total_words"],
            vector_comparisons=counts[METHOD_VECTOR],
            fallback_comparisons=counts[METHOD_FALLBACK],
            cached_statistics=len(self.stats.cached_targets()),
        )

    def reload(self, source: Optional[VectorSource] = None, target_words: Optional[Iterable[str]] = None) -> int:
        """
        Administrative reload.

        With a source, streams it into the store first; otherwise re-reads
        the persisted table. Cached statistics are dropped either way since
        they were ranked against the previous snapshot.

        Returns:
            Vectors inserted from the source, or the reloaded vector count
        """
        if source is not None:
            count = self.store.load_bulk(source, target_words)
        else:
            count = self.store.reload()
        self.stats.clear_cache()
        logger.log_operation("engine.reload", "success", {"count": count})
        return count

    def _normalize(self, word: str) -> str:
        return self.validator.require(word, dictionary=False)
