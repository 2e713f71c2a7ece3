"""Cached, non-raising lookups against the upstream adapters."""
