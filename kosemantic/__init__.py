"""
Semantic similarity scoring core for the Korean word-guessing game.
"""

__version__ = "1.0.0"
