"""
Bolt query client for Memgraph (or any Bolt-speaking graph store).

Provides driver construction with connectivity retry at startup, error
classification for the outcome recorder, and the `BoltQueryClient` used by
runners. The driver is thread-safe and pools connections internally; each
query attempt opens a session, uses it, and closes it before returning.

Includes retry logic for transient connection failures at startup using
tenacity. Query attempts themselves are never retried.
"""

from __future__ import annotations

from typing import Optional

from neo4j import Driver, GraphDatabase, Query
from neo4j.exceptions import ServiceUnavailable, SessionExpired
from tenacity import RetryError, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from graphload.config import Settings, get_settings
from graphload.domain.models import FailureKind
from graphload.errors import ClientStartupError, QueryFailed
from graphload.queries import build_supply_chain_query
from graphload.utils.logging import get_logger

log = get_logger(__name__)

_TIMEOUT_MARKERS = ("timeout", "timed out", "transactiontimedout")
_RESOURCE_MARKERS = ("memory limit", "outofmemory", "memorypool", "memory_limit")


def classify_error(exc: BaseException) -> FailureKind:
    """
    Map a driver or server error to a failure kind.

    Uses the exception type first, then the server status code and message.
    """
    if isinstance(exc, (ServiceUnavailable, SessionExpired, ConnectionError)):
        return FailureKind.CONNECTION

    code = (getattr(exc, "code", None) or "").lower()
    message = (getattr(exc, "message", None) or str(exc)).lower()
    text = f"{code} {message}"

    if isinstance(exc, TimeoutError) or any(marker in text for marker in _TIMEOUT_MARKERS):
        return FailureKind.TIMEOUT
    if isinstance(exc, MemoryError) or any(marker in text for marker in _RESOURCE_MARKERS):
        return FailureKind.RESOURCE_LIMIT
    if isinstance(exc, OSError):
        return FailureKind.CONNECTION
    return FailureKind.OTHER


def _describe(exc: BaseException) -> str:
    message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
    code = getattr(exc, "code", None)
    return f"{code}: {message}" if code else message


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((ServiceUnavailable, OSError)),
)
def _verify(driver: Driver) -> None:
    driver.verify_connectivity()


def build_driver(settings: Optional[Settings] = None, verify: bool = True) -> Driver:
    """
    Create the Bolt driver and optionally verify the server is reachable.

    Connectivity is checked up to 3 times with exponential backoff.

    Raises
    ------
    ClientStartupError
        If the driver cannot be created or the server stays unreachable.
    """
    settings = settings or get_settings()
    auth = (settings.db_user, settings.db_password or "") if settings.db_user else None
    try:
        driver = GraphDatabase.driver(
            settings.uri,
            auth=auth,
            max_connection_lifetime=settings.max_connection_lifetime,
            liveness_check_timeout=settings.connection_liveness_check_timeout,
        )
    except Exception as exc:  # noqa: BLE001 - any construction failure is fatal at startup
        raise ClientStartupError(f"Failed to create driver for {settings.uri}: {exc}") from exc

    if verify:
        try:
            _verify(driver)
        except RetryError as exc:
            driver.close()
            cause = exc.last_attempt.exception()
            raise ClientStartupError(f"Graph store at {settings.uri} is unreachable: {cause}") from cause
        except Exception as exc:  # noqa: BLE001 - auth or protocol errors are fatal too
            driver.close()
            raise ClientStartupError(f"Graph store at {settings.uri} rejected connection: {exc}") from exc
    return driver


class BoltQueryClient:
    """
    Runs the supply chain traversal through a shared Bolt driver.

    Safe to call from many runner threads: sessions are opened per call and
    the driver owns the connection pool.
    """

    def __init__(self, driver: Driver, query: Optional[str] = None, database: Optional[str] = None) -> None:
        self._driver = driver
        self._query = query or build_supply_chain_query()
        self._database = database

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, verify: bool = True) -> "BoltQueryClient":
        settings = settings or get_settings()
        driver = build_driver(settings, verify=verify)
        query = build_supply_chain_query(
            result_limit=settings.query_result_limit,
            memory_limit_mb=settings.query_memory_limit_mb,
        )
        return cls(driver, query=query)

    def execute(self, entity_id: str, timeout: float) -> int:
        try:
            with self._driver.session(database=self._database) as session:
                result = session.run(Query(self._query, timeout=timeout), {"id": entity_id})
                return sum(1 for _ in result)
        except Exception as exc:  # noqa: BLE001 - every failure is classified and reported
            raise QueryFailed(classify_error(exc), _describe(exc)) from exc

    def close(self) -> None:
        self._driver.close()


__all__ = ["BoltQueryClient", "build_driver", "classify_error"]
