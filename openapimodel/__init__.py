"""Typed data model for OpenAPI 3.0 documents: parsing, building, reference resolution, merging and serialization."""

__version__ = "0.1.0"