"""
Streaming reader for text vector sources (fastText .vec format).
One line per word: the word, then its float components separated by spaces.
"""

import gzip
import io
import math
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Set, Tuple, Union

import numpy as np

from ..core.errors import VectorSourceError

VectorSource = Union[str, Path, Iterable[str]]


def _open_lines(source: VectorSource) -> Iterator[str]:
    """Yield lines from a path (plain or .gz) or an iterable of lines."""
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise VectorSourceError(f"Vector source not found: {path}")
        opener = gzip.open if path.suffix == ".gz" else open
        with opener(path, "rt", encoding="utf-8", errors="replace") as handle:
            for line in handle:
                yield line
    elif isinstance(source, io.IOBase) or hasattr(source, "__iter__"):
        for line in source:
            yield line
    else:
        raise VectorSourceError(f"Unsupported vector source: {type(source).__name__}")


def is_header_line(line: str) -> bool:
    """fastText files start with '<vocab size> <dimension>'."""
    parts = line.split()
    return len(parts) == 2 and parts[0].isdigit() and parts[1].isdigit()


def parse_vector_line(line: str, dimension: int) -> Optional[Tuple[str, np.ndarray]]:
    """
    Parse one source line.

    Returns:
        (word, vector) or None when the component count is wrong or a
        component is not a finite float
    """
    parts = line.rstrip().split(" ")
    if len(parts) != dimension + 1:
        return None

    word = parts[0]
    try:
        vector = np.array([float(x) for x in parts[1:]], dtype=np.float64)
    except ValueError:
        return None

    if not all(math.isfinite(v) for v in vector):
        return None

    return word, vector


class VectorSourceReader:
    """
    Iterates a vector source, keeping counts of what was kept and skipped.

    Lines are filtered by `word_filter` before their floats are parsed, so
    filtered loads of large sources stay cheap.
    """

    def __init__(self, source: VectorSource, dimension: int,
                 word_filter: Callable[[str], bool] = None, max_lines: int = None):
        self.source = source
        self.dimension = dimension
        self.word_filter = word_filter
        self.max_lines = max_lines
        self.lines_read = 0
        self.malformed = 0
        self.filtered = 0
        self.header_dimension = None

    def __iter__(self) -> Iterator[Tuple[str, np.ndarray]]:
        for line in _open_lines(self.source):
            if self.max_lines is not None and self.lines_read >= self.max_lines:
                break
            self.lines_read += 1

            if not line.strip():
                continue

            if self.lines_read == 1 and is_header_line(line):
                self.header_dimension = int(line.split()[1])
                continue

            word = line.split(" ", 1)[0]
            if self.word_filter is not None and not self.word_filter(word):
                self.filtered += 1
                continue

            parsed = parse_vector_line(line, self.dimension)
            if parsed is None:
                self.malformed += 1
                continue

            yield parsed


def find_in_source(source: VectorSource, words: Set[str], dimension: int, max_lines: int = None) -> dict:
    """Scan a source for specific words, stopping once all are found."""
    remaining = set(words)
    found = {}
    reader = VectorSourceReader(source, dimension, word_filter=lambda w: w in remaining, max_lines=max_lines)
    for word, vector in reader:
        found[word] = vector
        remaining.discard(word)
        if not remaining:
            break
    return found
