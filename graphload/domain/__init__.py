"""
Domain package for the graph load generator.

Exports the data definitions shared by the dataset loader, the dispatch core
and the outcome recorder.
"""

from graphload.domain.models import Entity, FailureKind, QueryOutcome

__all__ = [
    "Entity",
    "FailureKind",
    "QueryOutcome",
]
