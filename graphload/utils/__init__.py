"""
Utilities package for the graph load generator.

Exports shared helpers for cross-cutting concerns such as logging.
"""

from graphload.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
