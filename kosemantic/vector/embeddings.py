"""
Embedding providers used to populate the store without a trained model.
Demo data only: vectors from these providers are never reported as real.
"""

from abc import ABC, abstractmethod
import hashlib

import numpy as np


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_word(self, word: str) -> np.ndarray:
        """Generate an embedding vector for a word."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for demos and tests.

    The MD5 digest of the word seeds a random generator, so the same word
    always maps to the same vector across processes. The vectors carry no
    meaning: similarity between two demo vectors is noise around zero.
    """

    def __init__(self, dimension: int = 300):
        self.dimension = dimension

    def embed_word(self, word: str) -> np.ndarray:
        """Generate deterministic embedding vector using hash function."""
        digest = hashlib.md5(word.encode("utf-8")).digest()
        seed = int.from_bytes(digest[:8], "little")
        rng = np.random.default_rng(seed)
        return rng.uniform(-1.0, 1.0, self.dimension)

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension
