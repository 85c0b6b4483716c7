"""
Vocabulary validation: is a string an acceptable guess?

Independent of embedding coverage. A valid word without a vector is still
playable; it just gets a fallback score.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..util.hangul import is_hangul_word, normalize_word
from ..util.logging import logger
from .errors import InvalidWordError, RejectionReason


@dataclass(frozen=True)
class ValidationResult:
    word: str
    valid: bool
    reason: Optional[RejectionReason] = None


def load_word_list(path: str) -> List[str]:
    """
    Read a word list, preserving file order and dropping duplicates.

    Supports hunspell .dic files (first line is the entry count, entries are
    `word/FLAGS`) and flat lists with one word per line and '#' comments.
    """
    words = []
    with open(path, encoding="utf-8") as handle:
        for line_number, line in enumerate(handle):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line_number == 0 and line.isdigit():
                continue
            head = line.split("/", 1)[0].split()
            if head:
                words.append(normalize_word(head[0]))
    return list(dict.fromkeys(words))


class VocabularyValidator:
    """
    Checks length bounds, Hangul-only characters and dictionary membership.

    With no dictionary loaded, membership is not enforced and the validator
    runs in a degraded, format-only mode.
    """

    def __init__(self, words: Optional[Iterable[str]] = None, min_length: int = 1, max_length: int = 10):
        if min_length < 1 or max_length < min_length:
            raise ValueError(f"Invalid length bounds: {min_length}..{max_length}")

        self.min_length = min_length
        self.max_length = max_length
        self._ordered = list(dict.fromkeys(words)) if words is not None else []
        self._words = frozenset(self._ordered)
        self.dictionary_loaded = words is not None

    @classmethod
    def from_file(cls, path: str, min_length: int = 1, max_length: int = 10) -> "VocabularyValidator":
        """Load the dictionary file, degrading to format-only checks if it is missing."""
        if not Path(path).exists():
            logger.warning(f"Dictionary not found at {path}; accepting any well-formed Hangul word")
            return cls(None, min_length, max_length)

        try:
            words = load_word_list(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to load dictionary {path}: {e}; accepting any well-formed Hangul word")
            return cls(None, min_length, max_length)

        logger.info(f"Loaded {len(words)} Korean words from dictionary {path}")
        return cls(words, min_length, max_length)

    def check_format(self, word: str) -> ValidationResult:
        """Length and character-set checks only."""
        normalized = normalize_word(word)
        if not normalized:
            return ValidationResult(normalized, False, RejectionReason.EMPTY)
        # Character set first: "abc" is not Hangul regardless of length
        if not is_hangul_word(normalized):
            return ValidationResult(normalized, False, RejectionReason.NOT_HANGUL)
        if len(normalized) < self.min_length:
            return ValidationResult(normalized, False, RejectionReason.TOO_SHORT)
        if len(normalized) > self.max_length:
            return ValidationResult(normalized, False, RejectionReason.TOO_LONG)
        return ValidationResult(normalized, True)

    def check(self, word: str) -> ValidationResult:
        """Full check: format, then dictionary membership."""
        result = self.check_format(word)
        if result.valid and self.dictionary_loaded and result.word not in self._words:
            result = ValidationResult(result.word, False, RejectionReason.NOT_IN_DICTIONARY)

        if not result.valid:
            logger.log_validation_rejection(result.word, result.reason.value)
        return result

    def is_valid(self, word: str) -> bool:
        return self.check(word).valid

    def require(self, word: str, dictionary: bool = True) -> str:
        """Return the normalized word or raise InvalidWordError."""
        result = self.check(word) if dictionary else self.check_format(word)
        if not result.valid:
            raise InvalidWordError(result.word, result.reason)
        return result.word

    def validate_words(self, words: Iterable[str]) -> Dict[str, bool]:
        return {word: self.is_valid(word) for word in words}

    def suggestions(self, prefix: str, limit: int = 10) -> List[str]:
        """Dictionary words starting with the prefix, in dictionary order."""
        prefix = normalize_word(prefix)
        if not prefix:
            return []
        matches = []
        for word in self._ordered:
            if word.startswith(prefix):
                matches.append(word)
                if len(matches) >= limit:
                    break
        return matches

    def all_words(self) -> List[str]:
        return list(self._ordered)

    def __contains__(self, word: str) -> bool:
        return word in self._words

    def dictionary_stats(self) -> Dict[str, object]:
        return {"total_words": len(self._words), "is_loaded": self.dictionary_loaded}
