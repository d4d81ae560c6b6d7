"""Errata: curated API error catalog with a normalization pipeline and search service."""

__version__ = "0.1.0"
