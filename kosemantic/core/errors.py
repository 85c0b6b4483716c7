"""
Error taxonomy for the scoring core.
Missing vector data is not an error; it routes to the fallback estimator.
"""

from enum import Enum


class RejectionReason(str, Enum):
    """Why a submitted word was rejected by the validator."""

    EMPTY = "empty"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    NOT_HANGUL = "not_hangul"
    NOT_IN_DICTIONARY = "not_in_dictionary"


class ScoringError(Exception):
    """Base exception for scoring core failures."""
    pass


class InvalidWordError(ScoringError):
    """Raised when a word fails a format or dictionary check."""

    def __init__(self, word: str, reason: RejectionReason):
        self.word = word
        self.reason = reason
        super().__init__(f"Invalid word '{word}': {reason.value}")


class TargetNotResolvableError(ScoringError):
    """Raised when a ranking anchor has neither a vector nor a fallback basis."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Target word not resolvable: '{target}'")


class VectorSourceError(ScoringError):
    """Raised when an explicit bulk load cannot read its source."""
    pass
