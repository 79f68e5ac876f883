from __future__ import annotations

import threading
from collections import Counter

import pytest

from graphload.dispatch.cursor import RoundRobinCursor
from graphload.domain.models import Entity
from graphload.errors import CursorExhausted, EmptyEntityListError, StartupError

LIST_LENGTH = 7
CONSUMER_COUNT = 8
CALLS_PER_CONSUMER = 1_000


def _entities(count: int) -> list[Entity]:
    return [Entity(id=str(i), supply_chain_size=10_000 + i) for i in range(count)]


def test_single_consumer_cycles_in_order_and_wraps() -> None:
    cursor = RoundRobinCursor(_entities(LIST_LENGTH))

    first_lap = [cursor.next().id for _ in range(LIST_LENGTH)]

    assert first_lap == [str(i) for i in range(LIST_LENGTH)]
    assert cursor.next().id == "0"
    assert cursor.position == 1


def test_single_entity_list_always_returns_it() -> None:
    only = Entity(id="only", supply_chain_size=9_999)
    cursor = RoundRobinCursor([only])

    assert [cursor.next() for _ in range(3)] == [only, only, only]
    assert cursor.position == 0


def test_concurrent_consumers_get_near_even_distribution() -> None:
    cursor = RoundRobinCursor(_entities(LIST_LENGTH))
    seen: list[list[str]] = [[] for _ in range(CONSUMER_COUNT)]
    barrier = threading.Barrier(CONSUMER_COUNT)

    def consume(slot: int) -> None:
        barrier.wait()
        for _ in range(CALLS_PER_CONSUMER):
            seen[slot].append(cursor.next().id)

    threads = [threading.Thread(target=consume, args=(i,)) for i in range(CONSUMER_COUNT)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    total = CONSUMER_COUNT * CALLS_PER_CONSUMER
    counts = Counter(entity_id for ids in seen for entity_id in ids)
    low, high = total // LIST_LENGTH, -(-total // LIST_LENGTH)

    assert sum(counts.values()) == total
    assert set(counts) == {str(i) for i in range(LIST_LENGTH)}
    assert all(low <= count <= high for count in counts.values())
    assert cursor.handed_out == total
    assert cursor.position == total % LIST_LENGTH


def test_empty_list_is_rejected_at_construction() -> None:
    with pytest.raises(EmptyEntityListError):
        RoundRobinCursor([])


def test_empty_list_error_is_a_startup_error() -> None:
    assert issubclass(EmptyEntityListError, StartupError)


def test_single_pass_hands_out_each_entity_once() -> None:
    cursor = RoundRobinCursor(_entities(3), single_pass=True)

    ids = [cursor.next().id for _ in range(3)]

    assert ids == ["0", "1", "2"]
    with pytest.raises(CursorExhausted):
        cursor.next()


def test_cursor_copies_input_sequence() -> None:
    source = _entities(2)
    cursor = RoundRobinCursor(source)
    source.append(Entity(id="late", supply_chain_size=1))

    assert len(cursor) == 2
    assert [cursor.next().id for _ in range(3)] == ["0", "1", "0"]
