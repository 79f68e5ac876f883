"""
Query execution client contract.

The dispatch core only needs a call that runs the traversal for one entity
within a timeout and either returns the number of result rows or raises
`QueryFailed` with a classification. Implementations must be safe to call
from several runner threads at once; connection and session pooling is
their own concern. The core never retries a failed call.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from graphload.errors import QueryFailed


@runtime_checkable
class QueryClient(Protocol):
    """
    Common interface for query execution clients.
    """

    def execute(self, entity_id: str, timeout: float) -> int:
        """
        Run the traversal query for `entity_id`.

        Parameters
        ----------
        entity_id : str
            Identifier bound to the query's `$id` parameter.
        timeout : float
            Seconds the graph store may spend on the query.

        Returns
        -------
        int
            Number of result rows.

        Raises
        ------
        QueryFailed
            Classified failure (timeout, connection, resource limit, other).
        """
        ...

    def close(self) -> None:
        """Release driver resources."""
        ...


__all__ = ["QueryClient", "QueryFailed"]
