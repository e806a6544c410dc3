"""
Boundary layer.

Adapters for external systems: vector database, embedding providers,
craftsmen directory API and web pages.
"""
