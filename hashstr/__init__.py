"""Strings with a precomputed hash, caches that intern them, and byte serialization."""

__version__ = "0.2.0"