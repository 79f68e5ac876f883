"""
Dispatch core: the shared cursor, the runner loop and the runner pool.
"""

from graphload.dispatch.cursor import RoundRobinCursor
from graphload.dispatch.pool import RunnerPool
from graphload.dispatch.runner import QueryRunner

__all__ = [
    "QueryRunner",
    "RoundRobinCursor",
    "RunnerPool",
]
