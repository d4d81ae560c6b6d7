"""HTTP middleware."""

from errata.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
