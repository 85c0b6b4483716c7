"""
Value types shared by the store, scorer, ranker and statistics service.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

import numpy as np

MIN_SCORE = 0
MAX_SCORE = 100

METHOD_VECTOR = "vector"
METHOD_FALLBACK = "fallback"


@dataclass(frozen=True)
class WordVector:
    """A stored word and its embedding."""

    word: str
    """Normalized Hangul word"""

    vector: np.ndarray
    """Fixed-length float64 components"""


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of one similarity computation."""

    similarity: int
    """Game score in [0, 100]; 100 only for an exact match"""

    method: str
    """'vector' or 'fallback'"""

    raw: Optional[float] = None
    """Cosine value when the vector path was used"""


@dataclass(frozen=True)
class RankedNeighbor:
    word: str
    score: int
    rank: int


@dataclass
class TargetStatistics:
    """Score markers for a target word over the sampled vocabulary."""

    target_word: str
    best: int
    rank10: int
    rank100: int
    rank1000: int
    total_words: int
    effective_ranks: Tuple[int, int, int, int] = (1, 10, 100, 1000)
    """Rank that actually backed each marker; lower when the sample is small"""
    calculated_at: datetime = field(default_factory=datetime.now)

    @property
    def message(self) -> str:
        """Player-facing summary in Korean."""
        if self.total_words == 0:
            return "유사도 통계를 계산할 단어가 없습니다."

        parts = [f"정답 단어와 가장 유사한 단어의 유사도는 {self.best} 입니다."]
        if self.effective_ranks[1] == 10:
            parts.append(f"10번째로 유사한 단어의 유사도는 {self.rank10}이고")
        if self.effective_ranks[2] == 100:
            parts.append(f"100번째로 유사한 단어의 유사도는 {self.rank100}이고")
        if self.effective_ranks[3] == 1000:
            parts.append(f"1,000번째로 유사한 단어의 유사도는 {self.rank1000} 입니다.")
        return " ".join(parts)
