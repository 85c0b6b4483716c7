"""
SQLite persistence for word vectors.
One table: word -> fixed-length float64 blob.
"""

import sqlite3
from contextlib import contextmanager
from typing import Generator, Iterable, Iterator, Tuple

import numpy as np

from .config import VECTOR_DB_PATH, ensure_db_directory

INSERT_BATCH_SIZE = 1000


@contextmanager
def get_db(db_path: str = None) -> Generator[sqlite3.Connection, None, None]:
    """Get a SQLite database connection."""
    conn = sqlite3.connect(db_path or VECTOR_DB_PATH)
    try:
        yield conn
    finally:
        conn.close()


def init_db(db_path: str = None):
    """Initialize the database with the word_vectors table."""
    ensure_db_directory(db_path)
    with get_db(db_path) as conn:
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS word_vectors (
                word TEXT PRIMARY KEY,
                vector BLOB NOT NULL,
                source TEXT DEFAULT 'fasttext',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        conn.commit()


def serialize_vector(vector: np.ndarray) -> bytes:
    """Serialize a vector as little-endian float64 bytes."""
    return np.asarray(vector, dtype='<f8').tobytes()


def deserialize_vector(blob: bytes) -> np.ndarray:
    """Restore a float64 vector from its blob."""
    return np.frombuffer(blob, dtype='<f8').copy()


def insert_vectors(db_path: str, rows: Iterable[Tuple[str, np.ndarray]], source: str = "fasttext") -> int:
    """
    Insert (word, vector) rows in batches inside a single transaction.

    Args:
        db_path: SQLite file path
        rows: Iterable of (word, vector) pairs; consumed lazily
        source: Provenance label stored with each row

    Returns:
        Number of distinct words written. A word repeated in the input
        is stored once, with its last vector.
    """
    seen = set()
    batch = []
    with get_db(db_path) as conn:
        cursor = conn.cursor()
        for word, vector in rows:
            seen.add(word)
            batch.append((word, serialize_vector(vector), source))
            if len(batch) >= INSERT_BATCH_SIZE:
                cursor.executemany(
                    "INSERT OR REPLACE INTO word_vectors (word, vector, source) VALUES (?, ?, ?)",
                    batch
                )
                batch = []

        if batch:
            cursor.executemany(
                "INSERT OR REPLACE INTO word_vectors (word, vector, source) VALUES (?, ?, ?)",
                batch
            )

        conn.commit()

    return len(seen)


def iter_vectors(db_path: str) -> Iterator[Tuple[str, bytes, str]]:
    """Yield (word, blob, source) rows in insertion order."""
    with get_db(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT word, vector, source FROM word_vectors ORDER BY rowid")
        for row in cursor:
            yield row


def clear_vectors(db_path: str = None):
    """Delete every stored vector. The only way rows are ever removed."""
    with get_db(db_path) as conn:
        conn.execute("DELETE FROM word_vectors")
        conn.commit()


def health_check(db_path: str = None):
    """Check database health."""
    try:
        with get_db(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table';")
            table_names = [table[0] for table in cursor.fetchall()]
            return 'word_vectors' in table_names
    except sqlite3.Error:
        return False
