"""
Observability module.

Provides logging configuration, correlation ID tracking and request
logging middleware.
"""
