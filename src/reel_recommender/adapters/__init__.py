"""Thin synchronous adapters, one per upstream service."""
