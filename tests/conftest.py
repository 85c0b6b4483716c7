"""
Shared fixtures: a small 3-dimensional vector source and stores built from it.
"""

import pytest

from kosemantic.vector.store import EmbeddingStore

DIMENSION = 3

# cosine against 자연: 나무 0.99, 숲 0.8, 바다 0.6, 음식 0, 커피 0
SAMPLE_ROWS = [
    ("자연", [1.0, 0.0, 0.0]),
    ("나무", [0.9, 0.1, 0.0]),
    ("숲", [0.8, 0.6, 0.0]),
    ("바다", [0.6, 0.8, 0.0]),
    ("음식", [0.0, 1.0, 0.0]),
    ("커피", [0.0, 0.0, 1.0]),
]


def format_rows(rows, header=True):
    lines = []
    if header:
        lines.append(f"{len(rows)} {DIMENSION}\n")
    for word, values in rows:
        lines.append(word + " " + " ".join(str(v) for v in values) + "\n")
    return lines


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "vectors.db")


@pytest.fixture
def vec_file(tmp_path):
    path = tmp_path / "sample.vec"
    path.write_text("".join(format_rows(SAMPLE_ROWS)), encoding="utf-8")
    return str(path)


@pytest.fixture
def empty_store(db_path):
    return EmbeddingStore(db_path, dimension=DIMENSION).open()


@pytest.fixture
def loaded_store(empty_store, vec_file):
    empty_store.load_bulk(vec_file)
    return empty_store
