"""
Scoring core configuration.
Environment-driven settings for the vector store, validator and statistics.
"""

import os
from pathlib import Path

# Vector store configuration
VECTOR_DB_PATH = os.getenv("VECTOR_DB_PATH", "./data/vectors.db")
VECTOR_SOURCE_PATH = os.getenv("VECTOR_SOURCE_PATH", "./data/fasttext/cc.ko.300.vec")
VECTOR_DIMENSION = int(os.getenv("VECTOR_DIMENSION", "300"))
ON_DEMAND_LOOKUP = os.getenv("ON_DEMAND_LOOKUP", "true").lower() == "true"
ON_DEMAND_MAX_LINES = int(os.getenv("ON_DEMAND_MAX_LINES", "500000"))
DEMO_VECTORS = os.getenv("DEMO_VECTORS", "false").lower() == "true"

# Vocabulary configuration
DICTIONARY_PATH = os.getenv("DICTIONARY_PATH", "./data/ko.dic")
FREQUENT_WORDS_PATH = os.getenv("FREQUENT_WORDS_PATH", "./data/korean_frequent_words.txt")
PAIR_SCORES_PATH = os.getenv("PAIR_SCORES_PATH", "./data/korean_word_similarities.csv")
WORD_MIN_LENGTH = int(os.getenv("WORD_MIN_LENGTH", "1"))
WORD_MAX_LENGTH = int(os.getenv("WORD_MAX_LENGTH", "10"))

# Statistics configuration
STATS_CACHE_TTL_SEC = int(os.getenv("STATS_CACHE_TTL_SEC", "86400"))  # 24 hours
STATS_SAMPLE_SIZE = int(os.getenv("STATS_SAMPLE_SIZE", "5000"))

# Version string
VERSION = "1.0.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def demo_vectors_enabled():
    """Check if synthetic demo vectors may stand in for a missing store."""
    return os.getenv("DEMO_VECTORS", str(DEMO_VECTORS)).lower() == "true"


def ensure_db_directory(db_path: str = None):
    """Ensure the vector database directory exists."""
    Path(db_path or VECTOR_DB_PATH).parent.mkdir(parents=True, exist_ok=True)


def validate_config():
    """Validate scoring configuration and return any issues."""
    issues = []

    if VECTOR_DIMENSION < 1:
        issues.append("VECTOR_DIMENSION must be >= 1")

    if WORD_MIN_LENGTH < 1:
        issues.append("WORD_MIN_LENGTH must be >= 1")

    if WORD_MAX_LENGTH < WORD_MIN_LENGTH:
        issues.append(f"WORD_MAX_LENGTH ({WORD_MAX_LENGTH}) must be >= WORD_MIN_LENGTH ({WORD_MIN_LENGTH})")

    if STATS_CACHE_TTL_SEC < 1:
        issues.append("STATS_CACHE_TTL_SEC must be >= 1")

    if STATS_SAMPLE_SIZE < 1:
        issues.append("STATS_SAMPLE_SIZE must be >= 1")

    if ON_DEMAND_MAX_LINES < 0:
        issues.append("ON_DEMAND_MAX_LINES must be >= 0")

    return issues


def build_engine():
    """Assemble the scoring engine from configuration. Never raises on missing data files."""
    from ..util.logging import logger
    from .engine import ScoringEngine
    from .validator import VocabularyValidator, load_word_list
    from ..vector.store import EmbeddingStore
    from ..vector.fallback import HeuristicFallbackStrategy, load_pair_scores

    issues = validate_config()
    if issues:
        raise ValueError(f"Scoring configuration invalid: {issues}")

    logger.set_debug(debug_enabled())

    store = EmbeddingStore(
        db_path=VECTOR_DB_PATH,
        dimension=VECTOR_DIMENSION,
        source_path=VECTOR_SOURCE_PATH if ON_DEMAND_LOOKUP else None,
        on_demand_max_lines=ON_DEMAND_MAX_LINES,
        max_word_length=WORD_MAX_LENGTH,
    )
    store.open()

    validator = VocabularyValidator.from_file(
        DICTIONARY_PATH,
        min_length=WORD_MIN_LENGTH,
        max_length=WORD_MAX_LENGTH,
    )

    sample_words = load_word_list(FREQUENT_WORDS_PATH) if Path(FREQUENT_WORDS_PATH).exists() else None

    if store.vector_count() == 0 and demo_vectors_enabled():
        from ..vector.embeddings import DeterministicHashEmbedding
        demo_words = sample_words or validator.all_words()
        embedder = DeterministicHashEmbedding(dimension=VECTOR_DIMENSION)
        store.load_demo(embedder, demo_words)

    fallback = HeuristicFallbackStrategy(pair_scores=load_pair_scores(PAIR_SCORES_PATH))

    return ScoringEngine(
        store=store,
        validator=validator,
        fallback=fallback,
        sample_words=sample_words,
        stats_ttl_sec=STATS_CACHE_TTL_SEC,
        stats_sample_size=STATS_SAMPLE_SIZE,
    )
