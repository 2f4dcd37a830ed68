"""Concurrent scorers on a file-backed database must not lose updates."""

import threading

import pytest

from cricket_scoring.database import build_engine, create_tables
from cricket_scoring.qa import ConsistencyChecker
from cricket_scoring.scoring import AuthContext, AuthenticationError, KeyedLockRegistry, NotFoundError

from .helpers import ball


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'scoring.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()


def test_parallel_deliveries_keep_counters_and_numbering_consistent(
    service, session_factory, umpire, viewer, match, innings, roster
):
    a, b = roster["a"]["players"], roster["b"]["players"]
    threads_count, per_thread = 4, 15
    errors = []

    def score():
        try:
            for _ in range(per_thread):
                service.record_delivery(umpire, match.id, innings.id, ball(a[0], b[10], 1, over=0))
        except Exception as e:  # surfaced by the assertion below
            errors.append(e)

    threads = [threading.Thread(target=score) for _ in range(threads_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    total = threads_count * per_thread

    detail = service.get_match_state(viewer, match.id).innings[0]
    assert detail.total_runs == total
    assert detail.total_balls == total
    assert len(detail.balls) == total
    assert [over.legal_balls for over in detail.overs] == [6] * (total // 6)
    for over in detail.overs:
        numbers = [row.ball_number for row in detail.balls if row.over_id == over.id]
        assert numbers == [1, 2, 3, 4, 5, 6]

    batting = next(row for row in detail.batting_stats if row.player_id == a[0])
    assert batting.runs == total
    assert batting.balls_faced == total

    assert ConsistencyChecker(session_factory).check(match.id)["consistent"] is True


def test_lock_registry_drops_keys_once_released():
    registry = KeyedLockRegistry()
    with registry.hold("match:1"):
        # Re-entrant for the holding thread
        with registry.hold("match:1"):
            assert len(registry) == 1
        with registry.hold("innings:1"):
            assert len(registry) == 2
        assert len(registry) == 1
    assert len(registry) == 0


def test_lock_registry_serializes_holders_of_one_key():
    registry = KeyedLockRegistry()
    order = []

    def worker():
        with registry.hold("innings:1"):
            order.append("worker")

    with registry.hold("innings:1"):
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join(timeout=0.2)
        assert thread.is_alive()
        # The waiting worker keeps the key registered
        assert len(registry) == 1
        order.append("main")
    thread.join()

    assert order == ["main", "worker"]
    assert len(registry) == 0


def test_rejected_writes_leave_no_locks_behind(service, umpire, match, innings):
    anonymous = AuthContext.anonymous()
    for n in range(50):
        with pytest.raises(AuthenticationError):
            service.delete_delivery(anonymous, f"match-{n}", f"innings-{n}", f"ball-{n}")
        with pytest.raises(NotFoundError):
            service.delete_delivery(umpire, f"match-{n}", f"innings-{n}", f"ball-{n}")
        with pytest.raises(NotFoundError):
            service.delete_delivery(umpire, match.id, innings.id, f"ball-{n}")
    assert len(service.locks) == 0
