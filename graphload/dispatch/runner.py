"""
Runner loop: one query in flight per runner, forever.

Each iteration pulls the next entity from the shared cursor, runs the query
through the execution client, and hands the outcome to the recorder. A failed
attempt is recorded and the runner moves straight on; there is no retry,
backoff or delay.
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from graphload.clients.abstract import QueryClient
from graphload.dispatch.cursor import RoundRobinCursor
from graphload.domain.models import FailureKind, QueryOutcome
from graphload.errors import CursorExhausted, QueryFailed
from graphload.recorder import OutcomeRecorder
from graphload.utils.logging import get_logger

log = get_logger(__name__)


def _elapsed_ms(start: float) -> int:
    return max(int((time.perf_counter() - start) * 1000), 0)


class QueryRunner:
    """
    A single runner driving query attempts against the graph store.

    Parameters
    ----------
    runner_id : int
        Stable identifier reported in every outcome.
    cursor : RoundRobinCursor
        Cursor shared with every other runner.
    client : QueryClient
        Execution client, shared and safe for concurrent use.
    recorder : OutcomeRecorder
        Sink for outcomes.
    timeout : float
        Seconds allowed per query attempt.
    """

    def __init__(
        self,
        runner_id: int,
        cursor: RoundRobinCursor,
        client: QueryClient,
        recorder: OutcomeRecorder,
        timeout: float,
    ) -> None:
        self.runner_id = runner_id
        self.cursor = cursor
        self.client = client
        self.recorder = recorder
        self.timeout = timeout
        self.iterations = 0

    def run_once(self) -> QueryOutcome:
        """
        Run one attempt and record it.

        Raises only `CursorExhausted`; client failures become failed outcomes.
        """
        entity = self.cursor.next()
        start = time.perf_counter()
        try:
            self.client.execute(entity.id, self.timeout)
            outcome = QueryOutcome.succeeded(self.runner_id, entity, _elapsed_ms(start))
        except QueryFailed as exc:
            outcome = QueryOutcome.failed(
                self.runner_id, entity, _elapsed_ms(start), exc.kind, exc.detail
            )
        except Exception as exc:  # noqa: BLE001 - a broken attempt must not stop the runner
            outcome = QueryOutcome.failed(
                self.runner_id,
                entity,
                _elapsed_ms(start),
                FailureKind.OTHER,
                f"{type(exc).__name__}: {exc}",
            )

        self.iterations += 1
        self.recorder.record(outcome)
        return outcome

    def run(
        self,
        stop_event: Optional[threading.Event] = None,
        max_iterations: Optional[int] = None,
    ) -> int:
        """
        Loop until stopped.

        Without `stop_event` and `max_iterations` this never returns unless a
        single-pass cursor runs dry. In-flight attempts always complete before
        the stop event is honoured.

        Returns
        -------
        int
            Iterations completed by this call.
        """
        completed = 0
        while True:
            if stop_event is not None and stop_event.is_set():
                break
            if max_iterations is not None and completed >= max_iterations:
                break
            try:
                self.run_once()
            except CursorExhausted:
                log.info(f"Runner {self.runner_id} found no entities left", extra={"runner_id": self.runner_id})
                break
            except Exception:  # noqa: BLE001 - a failing sink must not shrink the pool
                log.exception(
                    f"Runner {self.runner_id} iteration failed", extra={"runner_id": self.runner_id}
                )
            completed += 1
        return completed


__all__ = ["QueryRunner"]
