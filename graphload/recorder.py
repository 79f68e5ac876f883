"""
Outcome recorder: one log line per completed query attempt.

The recorder does no aggregation; each `QueryOutcome` is formatted, emitted
and forgotten.
"""

from __future__ import annotations

import logging
from typing import Optional

from graphload.domain.models import QueryOutcome
from graphload.utils.logging import get_logger


def format_outcome(outcome: QueryOutcome) -> str:
    """Render an outcome as a single human-readable line."""
    status = "Success" if outcome.success else "Error"
    line = (
        f"Query {status}. Time {outcome.elapsed_ms}ms. Runner id {outcome.runner_id}. "
        f"Entity id {outcome.entity_id}. Entity supply chain count {outcome.supply_chain_size}."
    )
    if not outcome.success:
        kind = outcome.failure_kind.value if outcome.failure_kind else "other"
        line = f"{line} {kind}: {outcome.failure_detail or 'no detail'}"
    return line


class OutcomeRecorder:
    """
    Emit query outcomes to the log sink.

    Successes are logged at INFO and failures at WARNING, with the outcome
    fields attached as structured `extra` for the JSON formatter.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger("graphload.outcomes")

    def record(self, outcome: QueryOutcome) -> None:
        extra = {
            "runner_id": outcome.runner_id,
            "entity_id": outcome.entity_id,
            "supply_chain_size": outcome.supply_chain_size,
            "elapsed_ms": outcome.elapsed_ms,
            "success": outcome.success,
            "failure_kind": outcome.failure_kind.value if outcome.failure_kind else None,
        }
        level = logging.INFO if outcome.success else logging.WARNING
        self._log.log(level, format_outcome(outcome), extra=extra)


__all__ = ["OutcomeRecorder", "format_outcome"]
