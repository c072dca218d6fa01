"""Rhythm complexity scoring for timing-based rhythm games."""

__version__ = "0.1.0"
