"""
Graph Load Generator - sustained query pressure for Bolt graph databases.

Runs a fixed, expensive multi-hop supply chain traversal against a graph
store (Memgraph by default), cycling round-robin through the companies whose
supply chain exceeds a size threshold:

- A shared round-robin cursor over the filtered entity list
- A fixed pool of runner threads, one query in flight per runner
- Timeout-bounded query execution with classified failures
- One structured log line per query attempt
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from graphload.config import Settings, get_settings
from graphload.dataset import load_entities, parse_entities
from graphload.dispatch import QueryRunner, RoundRobinCursor, RunnerPool
from graphload.domain import Entity, FailureKind, QueryOutcome
from graphload.orchestrator import LoadConfig, run_load
from graphload.recorder import OutcomeRecorder, format_outcome
from graphload.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Data
    "Entity",
    "FailureKind",
    "QueryOutcome",
    "load_entities",
    "parse_entities",
    # Dispatch
    "QueryRunner",
    "RoundRobinCursor",
    "RunnerPool",
    "LoadConfig",
    "run_load",
    # Recording
    "OutcomeRecorder",
    "format_outcome",
    # Logging
    "configure_logging",
    "get_logger",
]
