"""Hadith Export: relational hadith store to per-book JSON archives."""

__version__ = "1.0.0"
