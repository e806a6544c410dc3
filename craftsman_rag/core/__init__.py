"""
Core domain logic.

Context building, prompts, card extraction, record formatting and the
RAG agent. Modules are imported directly; this package exports nothing so
that ``core.exceptions`` can be imported from the boundary layer.
"""
