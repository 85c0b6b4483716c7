"""
Heuristic fallback estimator.

Used when one or both words lack a real vector. Lower fidelity than the
vector path, but always returns an in-range, repeatable score so a round never
dead-ends on missing data.

Score bands (highest applicable wins, checked in this order):
    exact match          100
    curated pair table   20-95
    same category        75-95
    related categories   45-70
    structural overlap   30-60
    baseline             20-40
"""

import csv
import hashlib
from collections import Counter
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from ..util.hangul import decompose
from ..util.logging import logger
from .categories import SEMANTIC_CATEGORIES, related_categories, shared_category
from .similarity import SimilarityStrategy
from .types import MAX_SCORE, METHOD_FALLBACK, ScoreResult

FALLBACK_MAX = 95

SAME_CATEGORY_BAND = (75, 95)
SAME_CATEGORY_STEP = 2
RELATED_CATEGORY_BAND = (45, 70)
STRUCTURAL_CAP = 60
STRUCTURAL_THRESHOLD = 0.5
BASELINE_BAND = (20, 40)


def _pair_key(word1: str, word2: str) -> FrozenSet[str]:
    return frozenset((word1, word2))


def pair_jitter(word1: str, word2: str, span: int) -> int:
    """
    Deterministic offset in [0, span) for an unordered word pair.

    Replaces random variety: the same pair always gets the same offset, in
    either argument order.
    """
    if span <= 0:
        return 0
    first, second = sorted((word1, word2))
    digest = hashlib.md5(f"{first}\x00{second}".encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big") % span


def edit_distance(s1: Sequence[str], s2: Sequence[str]) -> int:
    """Levenshtein distance between two sequences of hashable items."""
    return Levenshtein.distance(s1, s2)


def character_overlap(word1: str, word2: str) -> float:
    """Shared syllables (with multiplicity) over the longer word's length."""
    if not word1 or not word2:
        return 0.0
    common = sum((Counter(word1) & Counter(word2)).values())
    return common / max(len(word1), len(word2))


def jamo_similarity(word1: str, word2: str) -> float:
    """1 - normalized edit distance over the jamo decomposition."""
    jamo1 = decompose(word1)
    jamo2 = decompose(word2)
    longest = max(len(jamo1), len(jamo2))
    if longest == 0:
        return 0.0
    return 1.0 - edit_distance(jamo1, jamo2) / longest


def length_similarity(word1: str, word2: str) -> float:
    longest = max(len(word1), len(word2))
    if longest == 0:
        return 0.0
    return 1.0 - abs(len(word1) - len(word2)) / longest


def load_pair_scores(path: str) -> Dict[FrozenSet[str], float]:
    """
    Load a curated `word1,word2,score` CSV (score in 0..1, '#' comments allowed).

    A missing file yields an empty table.
    """
    pairs = {}
    csv_path = Path(path)
    if not csv_path.exists():
        return pairs

    with open(csv_path, encoding="utf-8", newline="") as handle:
        for row in csv.reader(handle):
            if not row or row[0].strip().startswith("#") or len(row) < 3:
                continue
            word1, word2, score = (cell.strip() for cell in row[:3])
            try:
                value = float(score)
            except ValueError:
                continue
            if word1 and word2 and word1 != word2:
                pairs[_pair_key(word1, word2)] = min(1.0, max(0.0, value))

    logger.info(f"Loaded {len(pairs)} curated word pair scores from {csv_path}")
    return pairs


class HeuristicFallbackStrategy(SimilarityStrategy):
    """Category, structure and baseline heuristics composed into one score."""

    method = METHOD_FALLBACK

    def __init__(self, categories: Dict[str, Tuple[str, ...]] = None,
                 pair_scores: Optional[Dict[FrozenSet[str], float]] = None):
        self.categories = categories if categories is not None else SEMANTIC_CATEGORIES
        self.pair_scores = pair_scores or {}

    def estimate(self, word1: str, word2: str) -> int:
        """Heuristic similarity on the game scale."""
        if word1 == word2:
            return MAX_SCORE

        curated = self.pair_scores.get(_pair_key(word1, word2))
        if curated is not None:
            return max(BASELINE_BAND[0], min(FALLBACK_MAX, round(curated * 100)))

        shared = shared_category(word1, word2, self.categories)
        if shared is not None:
            _, distance = shared
            low, high = SAME_CATEGORY_BAND
            score = high - distance * SAME_CATEGORY_STEP - pair_jitter(word1, word2, 4)
            return max(low, min(high, score))

        candidates = [self._baseline(word1, word2)]

        if related_categories(word1, word2, self.categories):
            low, high = RELATED_CATEGORY_BAND
            candidates.append(low + pair_jitter(word1, word2, high - low + 1))

        lexical = max(character_overlap(word1, word2), jamo_similarity(word1, word2))
        if lexical >= STRUCTURAL_THRESHOLD:
            candidates.append(min(STRUCTURAL_CAP, round(lexical * STRUCTURAL_CAP)))

        return max(candidates)

    def _baseline(self, word1: str, word2: str) -> int:
        """Low non-zero score for unrelated pairs; real embeddings rarely give exact zero."""
        low, high = BASELINE_BAND
        # 6 points from length likeness, the rest from the pair hash
        score = low + round(length_similarity(word1, word2) * 6) + pair_jitter(word1, word2, high - low - 6 + 1)
        return min(high, score)

    def score(self, word1: str, word2: str) -> ScoreResult:
        return ScoreResult(similarity=self.estimate(word1, word2), method=self.method)

    def score_many(self, target: str, candidates: List[str]) -> List[ScoreResult]:
        return [self.score(target, candidate) for candidate in candidates]
