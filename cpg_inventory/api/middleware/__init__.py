"""API middleware."""

from cpg_inventory.api.middleware.error_handler import ErrorHandlerMiddleware
from cpg_inventory.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
