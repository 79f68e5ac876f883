"""
Infrastructure package for the graph load generator.

Centralizes graph store connectivity (driver construction, sessions, error
classification), decoupled from the dispatch core.
"""

from graphload.infrastructure.graph_client import BoltQueryClient, build_driver, classify_error

__all__ = [
    "BoltQueryClient",
    "build_driver",
    "classify_error",
]
