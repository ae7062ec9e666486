"""Reversi rule engine and search strategies."""

__version__ = "0.1.0"
