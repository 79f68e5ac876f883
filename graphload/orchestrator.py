"""
Orchestrator for running the load generator.

Wires the entity list, the shared cursor, the runner pool and the outcome
recorder together and blocks until the pool stops.

Usage (example from CLI):
    from graphload.orchestrator import LoadConfig, run_load

    client = BoltQueryClient.from_settings()
    run_load(LoadConfig(concurrency=18, timeout=15.0), client)

Startup failures (unreadable dataset, empty entity list) raise `StartupError`
before any runner is started.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from graphload.clients.abstract import QueryClient
from graphload.config import Settings, get_settings
from graphload.dataset import load_entities, require_entities
from graphload.dispatch.cursor import RoundRobinCursor
from graphload.dispatch.pool import RunnerPool
from graphload.domain.models import Entity
from graphload.recorder import OutcomeRecorder
from graphload.utils.logging import get_logger

log = get_logger(__name__)

# How often the main thread wakes up while waiting on runners.
_POLL_INTERVAL_SECONDS = 0.5


@dataclass
class LoadConfig:
    """
    Effective parameters of one load generation run.
    """

    concurrency: int = 18
    timeout: float = 15.0
    min_supply_chain_size: int = 5000
    data_path: Path = field(default_factory=lambda: Path("data.csv"))
    max_iterations: Optional[int] = None
    single_pass: bool = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides: object) -> "LoadConfig":
        """Build a config from settings; non-None overrides win."""
        settings = settings or get_settings()
        values = {
            "concurrency": settings.concurrency,
            "timeout": settings.timeout,
            "min_supply_chain_size": settings.min_supply_chain_size,
            "data_path": settings.data_path,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]


def prepare_entities(config: LoadConfig) -> Sequence[Entity]:
    """Load, filter and guard the entity list."""
    entities = load_entities(config.data_path, config.min_supply_chain_size)
    return require_entities(entities, threshold=config.min_supply_chain_size)


def build_pool(
    config: LoadConfig,
    entities: Sequence[Entity],
    client: QueryClient,
    recorder: Optional[OutcomeRecorder] = None,
    stop_event: Optional[threading.Event] = None,
) -> RunnerPool:
    cursor = RoundRobinCursor(entities, single_pass=config.single_pass)
    return RunnerPool(
        cursor=cursor,
        client=client,
        recorder=recorder or OutcomeRecorder(),
        concurrency=config.concurrency,
        timeout=config.timeout,
        stop_event=stop_event,
    )


def run_load(
    config: LoadConfig,
    client: QueryClient,
    entities: Optional[Sequence[Entity]] = None,
    recorder: Optional[OutcomeRecorder] = None,
    stop_event: Optional[threading.Event] = None,
    target: str = "Memgraph",
) -> RunnerPool:
    """
    Run the load generator until every runner stops.

    Runners stop when `stop_event` is set, when `config.max_iterations` is
    reached, or when a single-pass cursor runs dry. With none of these the
    call blocks until the process is terminated.

    Parameters
    ----------
    config : LoadConfig
        Run parameters.
    client : QueryClient
        Execution client shared by all runners.
    entities : Sequence[Entity] | None
        Pre-loaded entities. Loaded from `config.data_path` when None.
    recorder : OutcomeRecorder | None
        Outcome sink; defaults to the logging recorder.
    stop_event : threading.Event | None
        External shutdown signal.
    target : str
        Label for the start banner.

    Returns
    -------
    RunnerPool
        The finished pool, for inspection of per-runner iteration counts.
    """
    if entities is None:
        entities = prepare_entities(config)
    else:
        require_entities(entities, threshold=config.min_supply_chain_size)

    pool = build_pool(config, entities, client, recorder=recorder, stop_event=stop_event)
    log.info(
        f"Querying {target} with concurrency {config.concurrency}, "
        f"timeout {config.timeout:g}s, min supply chain size {config.min_supply_chain_size}",
        extra={
            "concurrency": config.concurrency,
            "timeout": config.timeout,
            "min_supply_chain_size": config.min_supply_chain_size,
            "entities": len(entities),
        },
    )

    pool.start(max_iterations=config.max_iterations)
    while pool.running:
        if pool.stop_event.wait(_POLL_INTERVAL_SECONDS):
            log.info("Shutdown requested, waiting for in-flight queries")
            pool.join()
            break

    log.info(
        "All runners stopped",
        extra={"iterations": sum(pool.iterations.values())},
    )
    return pool


__all__ = [
    "LoadConfig",
    "build_pool",
    "prepare_entities",
    "run_load",
]
