"""
Fixed-size pool of runner threads.

The pool is started once and never resized. Runners share nothing but the
cursor (and the thread-safe client). `stop()` lets every in-flight attempt
finish and then halts new ones.
"""

from __future__ import annotations

import threading
import time
from typing import Dict, List, Optional

from graphload.clients.abstract import QueryClient
from graphload.dispatch.cursor import RoundRobinCursor
from graphload.dispatch.runner import QueryRunner
from graphload.recorder import OutcomeRecorder
from graphload.utils.logging import get_logger

log = get_logger(__name__)


class RunnerPool:
    """
    Launch `concurrency` runners over one shared cursor.
    """

    def __init__(
        self,
        cursor: RoundRobinCursor,
        client: QueryClient,
        recorder: OutcomeRecorder,
        concurrency: int,
        timeout: float,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self.concurrency = concurrency
        self.stop_event = stop_event or threading.Event()
        self.runners: List[QueryRunner] = [
            QueryRunner(runner_id, cursor, client, recorder, timeout)
            for runner_id in range(concurrency)
        ]
        self._threads: List[threading.Thread] = []

    def start(self, max_iterations: Optional[int] = None) -> None:
        """
        Start every runner thread.

        Parameters
        ----------
        max_iterations : int | None
            Per-runner iteration cap. None runs until `stop()`.
        """
        if self._threads:
            raise RuntimeError("RunnerPool has already been started")
        for runner in self.runners:
            thread = threading.Thread(
                target=self._run_runner,
                args=(runner, max_iterations),
                name=f"runner-{runner.runner_id}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()
        log.info(f"Started {self.concurrency} runners", extra={"concurrency": self.concurrency})

    def _run_runner(self, runner: QueryRunner, max_iterations: Optional[int]) -> None:
        try:
            runner.run(stop_event=self.stop_event, max_iterations=max_iterations)
        except Exception:  # noqa: BLE001 - surface the crash, other runners keep going
            log.exception(f"Runner {runner.runner_id} crashed", extra={"runner_id": runner.runner_id})

    def stop(self) -> None:
        """Ask runners to finish their current attempt and stop."""
        self.stop_event.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for runner threads to exit.

        Returns
        -------
        bool
            True when every runner has exited.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        for thread in self._threads:
            remaining = None if deadline is None else max(deadline - time.monotonic(), 0.0)
            thread.join(remaining)
        return not self.running

    @property
    def running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    @property
    def iterations(self) -> Dict[int, int]:
        """Completed iterations keyed by runner id."""
        return {runner.runner_id: runner.iterations for runner in self.runners}


__all__ = ["RunnerPool"]
