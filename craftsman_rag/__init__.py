"""Retrieval-augmented assistant for finding craftsmen."""

__version__ = "0.1.0"
