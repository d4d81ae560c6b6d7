"""
Utility modules for the Errata catalog.
"""

from errata.utils.logging import (
    get_logger,
    setup_logging,
    LogContext,
    log_pipeline_stage,
    log_store_call,
    log_error_with_context,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "LogContext",
    "log_pipeline_stage",
    "log_store_call",
    "log_error_with_context",
]
