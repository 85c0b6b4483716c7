"""
Structured logging for the scoring core.
Vector loads, similarity paths, statistics and validation rejections.
"""

import logging
from typing import Any, Dict


class StructuredLogger:
    """Structured logger for scoring, loading and validation operations."""

    def __init__(self, name: str = "kosemantic"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def set_debug(self, enabled: bool) -> None:
        """Switch between DEBUG and INFO verbosity."""
        self.logger.setLevel(logging.DEBUG if enabled else logging.INFO)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.info(message)

    def log_vector_load(self, source: str, inserted: int, skipped: int, status: str = "success", details: Dict[str, Any] = None):
        """Log a bulk vector load."""
        log_details = {"source": source, "inserted": inserted, "skipped": skipped}
        if details:
            log_details.update(details)

        self.log_operation("vector.load", status, log_details)

    def log_similarity(self, word1: str, word2: str, score: int, method: str, raw: float = None):
        """Log a single similarity computation at debug level."""
        message = f"Similarity: '{word1}' vs '{word2}' = {score} ({method})"
        if raw is not None:
            message += f", cosine={raw:.6f}"
        self.logger.debug(message)

    def log_stats(self, target: str, total_words: int, duration_ms: float, cached: bool = False):
        """Log statistics computation or cache hit."""
        log_details = {
            "target": target,
            "total_words": total_words,
            "duration_ms": round(duration_ms, 2),
        }
        self.log_operation("stats.calculate", "cached" if cached else "computed", log_details)

    def log_validation_rejection(self, word: str, reason: str):
        """Log a rejected guess."""
        # Rejected input may be arbitrarily long
        shown = word[:20] + "..." if len(word) > 20 else word
        self.log_operation("validation", "rejected", {"word": shown, "reason": reason})

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
