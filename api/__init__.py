"""Reel Recommender HTTP API (FastAPI)."""
