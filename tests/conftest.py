"""
Pytest configuration for the graph load generator.

Provides fixtures for:
- Settings built from test-specific values
- Entity lists and dataset files
- Fake query clients (always succeed, always time out)
- Live graph store availability for integration tests
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from graphload.config import Settings, get_settings
from graphload.domain.models import Entity, FailureKind, QueryOutcome
from graphload.errors import QueryFailed


class SucceedingClient:
    """Query client that returns immediately with a fixed row count."""

    def __init__(self, rows: int = 3) -> None:
        self.rows = rows
        self.calls: List[Tuple[str, float]] = []
        self._lock = threading.Lock()
        self.closed = False

    def execute(self, entity_id: str, timeout: float) -> int:
        with self._lock:
            self.calls.append((entity_id, timeout))
        return self.rows

    def close(self) -> None:
        self.closed = True


class TimingOutClient(SucceedingClient):
    """Query client whose every attempt exceeds the timeout."""

    def execute(self, entity_id: str, timeout: float) -> int:
        super().execute(entity_id, timeout)
        raise QueryFailed(FailureKind.TIMEOUT, f"query exceeded {timeout}s")


class ListRecorder:
    """Outcome recorder that keeps outcomes in memory."""

    def __init__(self) -> None:
        self.outcomes: List[QueryOutcome] = []
        self._lock = threading.Lock()

    def record(self, outcome: QueryOutcome) -> None:
        with self._lock:
            self.outcomes.append(outcome)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _propagating_logs():
    """Keep caplog working after a test runs configure_logging()."""
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        host=os.getenv("HOST", "localhost"),
        port=int(os.getenv("PORT", "7687")),
        concurrency=4,
        timeout=2.0,
        min_supply_chain_size=5000,
        data_path=tmp_path / "data.csv",
        log_level="DEBUG",
    )


@pytest.fixture
def entities() -> Tuple[Entity, ...]:
    return tuple(Entity(id=f"E{i}", supply_chain_size=5001 + i) for i in range(5))


@pytest.fixture
def dataset_file(tmp_path: Path) -> Path:
    path = tmp_path / "data.csv"
    path.write_text(
        "A,4000\nB,5001\nC,abc\nD,5000,extra\nE,12000\n\nF,6000\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def succeeding_client() -> SucceedingClient:
    return SucceedingClient()


@pytest.fixture
def timing_out_client() -> TimingOutClient:
    return TimingOutClient()


@pytest.fixture
def list_recorder() -> ListRecorder:
    return ListRecorder()


@pytest.fixture(scope="session")
def graph_store_available() -> bool:
    """
    Check if the graph store is reachable.

    Used to conditionally skip integration tests when it is not available.
    """
    from graphload.errors import ClientStartupError
    from graphload.infrastructure.graph_client import build_driver

    driver: Optional[object] = None
    try:
        driver = build_driver(Settings())
        return True
    except ClientStartupError:
        return False
    finally:
        if driver is not None:
            driver.close()  # type: ignore[attr-defined]
