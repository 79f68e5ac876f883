"""
Query client package.

Holds the execution client contract consumed by the runner loop. The Bolt
implementation lives in `graphload.infrastructure`.
"""

from graphload.clients.abstract import QueryClient, QueryFailed

__all__ = ["QueryClient", "QueryFailed"]
