"""
Vector-space scoring: embedding store, similarity strategies and ranking.
"""

from .types import WordVector, ScoreResult, RankedNeighbor, TargetStatistics
from .store import EmbeddingStore
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding
from .similarity import SimilarityScorer, VectorCosineStrategy, cosine_similarity, normalize_score
from .fallback import HeuristicFallbackStrategy
from .ranker import NearestNeighborRanker

__all__ = [
    'WordVector',
    'ScoreResult',
    'RankedNeighbor',
    'TargetStatistics',
    'EmbeddingStore',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'SimilarityScorer',
    'VectorCosineStrategy',
    'HeuristicFallbackStrategy',
    'NearestNeighborRanker',
    'cosine_similarity',
    'normalize_score',
]
