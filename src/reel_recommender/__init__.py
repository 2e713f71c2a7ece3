"""Reel Recommender - context-aware movie recommendations composed from third-party APIs."""

__version__ = "1.0.0"
