"""
Exception hierarchy for the graph load generator.

Startup errors are fatal and surface to the CLI, which logs them and exits
non-zero. Per-attempt failures (`QueryFailed`) are caught by the runner loop
and recorded; they never stop a runner.
"""

from __future__ import annotations

from graphload.domain.models import FailureKind


class GraphLoadError(Exception):
    """Base class for all load generator errors."""


class StartupError(GraphLoadError):
    """Unrecoverable error raised before any runner is started."""


class EntityLoadError(StartupError):
    """The entity dataset could not be read."""


class EmptyEntityListError(StartupError):
    """No entity survived filtering; there is nothing to query."""


class ClientStartupError(StartupError):
    """The query execution client could not be constructed."""


class CursorExhausted(GraphLoadError):
    """Raised by a single-pass cursor once every entity was handed out."""


class QueryFailed(GraphLoadError):
    """
    A classified failure of a single query attempt.

    Attributes
    ----------
    kind : FailureKind
        Failure classification.
    detail : str
        Human-readable reason reported by the graph store or driver.
    """

    def __init__(self, kind: FailureKind, detail: str) -> None:
        super().__init__(f"{kind.value}: {detail}")
        self.kind = kind
        self.detail = detail


__all__ = [
    "GraphLoadError",
    "StartupError",
    "EntityLoadError",
    "EmptyEntityListError",
    "ClientStartupError",
    "CursorExhausted",
    "QueryFailed",
]
