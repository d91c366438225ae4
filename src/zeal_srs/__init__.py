"""Zeal SRS backend: spaced-repetition scheduling for saved vocabulary items."""

__version__ = "0.1.0"
