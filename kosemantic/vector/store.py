"""
Embedding store: SQLite-backed word vectors served from an in-memory snapshot.

Reads go through an immutable snapshot object. Loads and reloads build a new
snapshot and swap the reference, so readers never observe a partial load.
"""

import sqlite3
import threading
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import numpy as np

from ..core import db
from ..core.errors import VectorSourceError
from ..util.hangul import is_hangul_word
from ..util.logging import logger
from .embeddings import IEmbeddingProvider
from .loader import VectorSource, VectorSourceReader, find_in_source

PROVENANCE_NONE = "none"
PROVENANCE_DEMO = "demo"
PROVENANCE_FASTTEXT = "fasttext"
PROVENANCE_MIXED = "mixed"


class _Snapshot:
    """Immutable view of the stored vocabulary."""

    def __init__(self, words: List[str], vectors: List[np.ndarray], sources: Iterable[str], dimension: int):
        self.words = list(words)
        self.index = {word: i for i, word in enumerate(self.words)}
        if vectors:
            self.matrix = np.vstack(vectors).astype(np.float64)
        else:
            self.matrix = np.zeros((0, dimension), dtype=np.float64)
        self.norms = np.linalg.norm(self.matrix, axis=1) if len(self.words) else np.zeros(0)
        self.matrix.setflags(write=False)
        self.norms.setflags(write=False)

        source_set = set(sources)
        if not self.words:
            self.provenance = PROVENANCE_NONE
        elif source_set == {PROVENANCE_DEMO}:
            self.provenance = PROVENANCE_DEMO
        elif PROVENANCE_DEMO in source_set:
            # Demo rows still serve scores next to real ones
            self.provenance = PROVENANCE_MIXED
        else:
            self.provenance = PROVENANCE_FASTTEXT

    def __len__(self):
        return len(self.words)


class EmbeddingStore:
    """
    Word -> vector store.

    The preloaded vocabulary lives in SQLite and is mirrored into memory for
    O(1) lookup. Words outside it can be fetched on demand from the text
    source, trading a one-time scan for completeness.
    """

    def __init__(self, db_path: str, dimension: int = 300, source_path: Optional[str] = None,
                 on_demand_max_lines: int = 500000, max_word_length: int = 10):
        self.db_path = db_path
        self.dimension = dimension
        self.source_path = source_path
        self.on_demand_max_lines = on_demand_max_lines
        self.max_word_length = max_word_length

        self._snapshot = _Snapshot([], [], [], dimension)
        self._available = False

        # On-demand lookups: hits and misses remembered for the process lifetime
        self._extra: Dict[str, np.ndarray] = {}
        self._misses = set()
        self._extra_lock = threading.Lock()

    def open(self) -> "EmbeddingStore":
        """Initialize the table and load the snapshot. Degrades instead of raising."""
        try:
            db.init_db(self.db_path)
            self.reload()
            self._available = True
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Vector store unavailable at {self.db_path}: {e}. Running in fallback-only mode")
            self._snapshot = _Snapshot([], [], [], self.dimension)
            self._available = False
            return self

        if len(self._snapshot) == 0:
            logger.warning(f"No vectors loaded from {self.db_path}. Scores will use the fallback estimator")
        else:
            logger.info(f"Vector store ready: {len(self._snapshot)} vectors ({self._snapshot.provenance})")
        return self

    @property
    def available(self) -> bool:
        return self._available

    @property
    def provenance(self) -> str:
        """'fasttext', 'demo', 'mixed' or 'none'."""
        if self._extra:
            if self._snapshot.provenance == PROVENANCE_NONE:
                return PROVENANCE_FASTTEXT
            if self._snapshot.provenance == PROVENANCE_DEMO:
                return PROVENANCE_MIXED
        return self._snapshot.provenance

    def snapshot(self) -> _Snapshot:
        """Current snapshot. Hold the reference for a consistent multi-word read."""
        return self._snapshot

    def reload(self) -> int:
        """Rebuild the in-memory snapshot from SQLite and swap it in."""
        words, vectors, sources = [], [], []
        for word, blob, source in db.iter_vectors(self.db_path):
            vector = db.deserialize_vector(blob)
            if len(vector) != self.dimension:
                # Rows from a deployment with a different D are unusable here
                continue
            words.append(word)
            vectors.append(vector)
            sources.append(source or PROVENANCE_FASTTEXT)

        self._snapshot = _Snapshot(words, vectors, sources, self.dimension)
        logger.log_operation("vector.reload", "success", {"vectors": len(words)})
        return len(words)

    def get_vector(self, word: str) -> Optional[np.ndarray]:
        """
        Look up a word's vector.

        Returns:
            A read-only vector, or None when the word has no embedding
        """
        snapshot = self._snapshot
        i = snapshot.index.get(word)
        if i is not None:
            return snapshot.matrix[i]

        extra = self._extra.get(word)
        if extra is not None:
            return extra

        return self._lookup_on_demand([word]).get(word)

    def get_vectors(self, words: Iterable[str]) -> Dict[str, np.ndarray]:
        """
        Batch lookup. Words outside the snapshot share a single source scan.

        Returns:
            word -> read-only vector for every word that has one
        """
        snapshot = self._snapshot
        extra = self._extra
        found, pending = {}, []
        for word in dict.fromkeys(words):
            i = snapshot.index.get(word)
            if i is not None:
                found[word] = snapshot.matrix[i]
            elif word in extra:
                found[word] = extra[word]
            else:
                pending.append(word)

        if pending:
            found.update(self._lookup_on_demand(pending))
        return found

    def has_vector(self, word: str) -> bool:
        return self.get_vector(word) is not None

    def vector_count(self) -> int:
        """Number of vectors currently served, including on-demand hits."""
        return len(self._snapshot) + len(self._extra)

    def words(self) -> List[str]:
        """Preloaded vocabulary in insertion order."""
        return list(self._snapshot.words)

    def accepts_word(self, word: str) -> bool:
        """Words worth storing: Hangul syllables only, within the length bound."""
        return is_hangul_word(word) and len(word) <= self.max_word_length

    def load_bulk(self, source: VectorSource, target_words: Optional[Iterable[str]] = None) -> int:
        """
        Stream a vector source into the store.

        Args:
            source: Path to a .vec/.vec.gz file, or an iterable of lines
            target_words: Optional allowlist bounding what gets loaded

        Returns:
            Number of vectors inserted. Malformed lines are skipped.
        """
        allowlist = set(target_words) if target_words is not None else None

        def keep(word: str) -> bool:
            if not self.accepts_word(word):
                return False
            return allowlist is None or word in allowlist

        start_time = time.monotonic()
        reader = VectorSourceReader(source, self.dimension, word_filter=keep)

        db.init_db(self.db_path)
        inserted = db.insert_vectors(self.db_path, reader, source=PROVENANCE_FASTTEXT)

        if reader.header_dimension is not None and reader.header_dimension != self.dimension:
            logger.warning(f"Source dimension {reader.header_dimension} differs from store dimension {self.dimension}")

        self.reload()
        self._forget_on_demand()

        logger.log_vector_load(
            str(source) if isinstance(source, (str, Path)) else type(source).__name__,
            inserted,
            reader.malformed,
            details={
                "filtered": reader.filtered,
                "lines_read": reader.lines_read,
                "duration_ms": round((time.monotonic() - start_time) * 1000, 2),
            }
        )
        return inserted

    def load_demo(self, embedder: IEmbeddingProvider, words: Iterable[str]) -> int:
        """Populate the store with synthetic vectors. Reported as demo data, never as real."""
        if embedder.get_dimension() != self.dimension:
            raise ValueError(f"Embedder dimension {embedder.get_dimension()} does not match store dimension {self.dimension}")

        rows = ((w, embedder.embed_word(w)) for w in dict.fromkeys(words) if self.accepts_word(w))
        db.init_db(self.db_path)
        inserted = db.insert_vectors(self.db_path, rows, source=PROVENANCE_DEMO)
        self.reload()
        logger.warning(f"Loaded {inserted} synthetic demo vectors; similarity scores are not meaningful")
        return inserted

    def reset(self):
        """Remove every vector. Reads see an empty store afterwards."""
        db.clear_vectors(self.db_path)
        self._snapshot = _Snapshot([], [], [], self.dimension)
        self._forget_on_demand()
        logger.log_operation("vector.reset", "success")

    def _forget_on_demand(self):
        with self._extra_lock:
            self._extra = {}
            self._misses = set()

    def _lookup_on_demand(self, words: List[str]) -> Dict[str, np.ndarray]:
        if not self.source_path:
            return {}
        candidates = {w for w in words if w not in self._misses and self.accepts_word(w)}
        if not candidates or not Path(self.source_path).exists():
            return {}

        with self._extra_lock:
            # Another thread may have finished some of the same lookups
            hits = {w: self._extra[w] for w in candidates if w in self._extra}
            wanted = {w for w in candidates if w not in hits and w not in self._misses}
            found = {}
            if wanted:
                try:
                    found = find_in_source(self.source_path, wanted, self.dimension, max_lines=self.on_demand_max_lines)
                except VectorSourceError as e:
                    logger.warning(f"On-demand lookup failed for {len(wanted)} words: {e}")

                for vector in found.values():
                    vector.setflags(write=False)
                self._misses = self._misses | (wanted - set(found))
                if found:
                    extra = dict(self._extra)
                    extra.update(found)
                    self._extra = extra

        if found:
            try:
                db.insert_vectors(self.db_path, found.items(), source=PROVENANCE_FASTTEXT)
            except sqlite3.Error as e:
                logger.warning(f"Could not persist {len(found)} on-demand vectors: {e}")
            logger.log_operation("vector.on_demand", "loaded", {"words": len(found), "requested": len(wanted)})

        hits.update(found)
        return hits
