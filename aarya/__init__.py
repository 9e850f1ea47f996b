"""Aarya AI: local knowledge matching with a generative fallback."""

__version__ = "1.0.0"
