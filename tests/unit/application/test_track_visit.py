"""Tests for VisitTracker with an in-memory fake visit API."""

from __future__ import annotations

import asyncio

import pytest

from vinculo.adapters.guard_store.json_file_store import JsonFileGuardStore
from vinculo.application.ports.visit_api_port import (
    RateLimitedError,
    VisitApiError,
    VisitApiPort,
)
from vinculo.application.services.increment_guard import IncrementGuard
from vinculo.application.use_cases.track_visit import VisitTracker
from vinculo.domain.value_objects.enums import GuardState, ResourceKind
from vinculo.domain.value_objects.resource_key import ResourceKey

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeVisitApi(VisitApiPort):
    """Returns queued outcomes in order; an Exception instance is raised."""

    def __init__(self, *outcomes, gate: asyncio.Event | None = None):
        self._outcomes = list(outcomes)
        self._gate = gate
        self.calls: list[ResourceKey] = []

    async def increment(self, key):
        self.calls.append(key)
        if self._gate is not None:
            await self._gate.wait()
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _tracker(key, guard, api, initial_count=0):
    return VisitTracker(key, guard=guard, api=api, initial_count=initial_count)


# ─── Success ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_success_sets_server_count(guard, profile_key):
    api = FakeVisitApi(42)
    tracker = _tracker(profile_key, guard, api, initial_count=7)

    snapshot = await tracker.mount()

    assert snapshot.visit_count == 42
    assert snapshot.is_loading is False
    assert snapshot.error is None
    assert guard.state(profile_key) == GuardState.COMPLETED
    assert api.calls == [profile_key]


@pytest.mark.asyncio
async def test_count_comes_only_from_server(guard, profile_key):
    """The server value replaces the initial one; nothing is added locally."""
    api = FakeVisitApi(3)
    tracker = _tracker(profile_key, guard, api, initial_count=100)
    await tracker.mount()
    assert tracker.visit_count == 3


@pytest.mark.asyncio
async def test_loading_flag_while_in_flight(guard, profile_key):
    gate = asyncio.Event()
    api = FakeVisitApi(5, gate=gate)
    tracker = _tracker(profile_key, guard, api)

    task = asyncio.create_task(tracker.increment_visit())
    await asyncio.sleep(0)
    assert tracker.is_loading is True
    assert tracker.visit_count == 0
    assert guard.state(profile_key) == GuardState.IN_FLIGHT

    gate.set()
    await task
    assert tracker.is_loading is False
    assert tracker.visit_count == 5


# ─── Rate limited ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_rate_limited_counts_as_done(guard, store, profile_key):
    api = FakeVisitApi(RateLimitedError("Demasiadas visitas", status_code=429))
    tracker = _tracker(profile_key, guard, api, initial_count=9)

    snapshot = await tracker.mount()

    assert snapshot.visit_count == 9
    assert snapshot.error is None
    assert snapshot.is_loading is False
    assert guard.state(profile_key) == GuardState.COMPLETED
    assert store.is_completed(profile_key)


# ─── Other errors ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_error_surfaces_message_and_allows_retry(guard, store, profile_key):
    api = FakeVisitApi(VisitApiError("Error al registrar visita", status_code=500), 11)
    tracker = _tracker(profile_key, guard, api, initial_count=4)

    snapshot = await tracker.mount()

    assert snapshot.error == "Error al registrar visita"
    assert snapshot.visit_count == 4
    assert snapshot.is_loading is False
    assert guard.state(profile_key) == GuardState.IDLE
    assert not store.is_completed(profile_key)

    await tracker.increment_visit()
    assert len(api.calls) == 2
    assert tracker.visit_count == 11
    assert tracker.error is None
    assert guard.state(profile_key) == GuardState.COMPLETED


@pytest.mark.asyncio
async def test_server_message_is_kept(guard, profile_key):
    api = FakeVisitApi(VisitApiError("Error al incrementar visitas", status_code=500))
    tracker = _tracker(profile_key, guard, api)
    await tracker.mount()
    assert tracker.error == "Error al incrementar visitas"


@pytest.mark.asyncio
async def test_unexpected_exception_does_not_propagate(guard, profile_key):
    api = FakeVisitApi(RuntimeError("boom"))
    tracker = _tracker(profile_key, guard, api)

    await tracker.mount()

    assert tracker.error == "Error al registrar visita"
    assert tracker.is_loading is False
    assert guard.can_increment(profile_key) is True


@pytest.mark.asyncio
async def test_remount_after_error_retries(guard, profile_key):
    api = FakeVisitApi(VisitApiError(status_code=502), 8)
    first = _tracker(profile_key, guard, api)
    await first.mount()

    second = _tracker(profile_key, guard, api)
    await second.mount()

    assert len(api.calls) == 2
    assert second.visit_count == 8


# ─── Idempotency ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_repeated_calls_hit_network_once(guard, profile_key):
    api = FakeVisitApi(1)
    tracker = _tracker(profile_key, guard, api)

    await tracker.mount()
    await tracker.mount()
    await tracker.increment_visit()

    assert len(api.calls) == 1


@pytest.mark.asyncio
async def test_double_mount_same_key_single_call(guard, profile_key):
    """Two views for one slug mounted together issue one request."""
    api = FakeVisitApi(1, 2)
    first = _tracker(profile_key, guard, api)
    second = _tracker(profile_key, guard, api)

    await asyncio.gather(first.mount(), second.mount())

    assert len(api.calls) == 1
    assert first.visit_count == 1
    assert second.visit_count == 0
    assert second.error is None


@pytest.mark.asyncio
async def test_already_completed_key_skips_network(store, profile_key):
    store.mark_completed(profile_key)
    api = FakeVisitApi()
    tracker = _tracker(profile_key, IncrementGuard(store), api, initial_count=5)

    snapshot = await tracker.mount()

    assert api.calls == []
    assert snapshot.visit_count == 5
    assert snapshot.is_loading is False


@pytest.mark.asyncio
async def test_profile_and_family_counted_separately(guard, profile_key, family_key):
    api = FakeVisitApi(1, 2)
    await _tracker(profile_key, guard, api).mount()
    await _tracker(family_key, guard, api).mount()
    assert api.calls == [profile_key, family_key]


@pytest.mark.asyncio
@pytest.mark.parametrize("slug", ["", "  "])
async def test_empty_slug_is_noop(guard, slug):
    api = FakeVisitApi()
    tracker = _tracker(ResourceKey(kind=ResourceKind.PROFILE, slug=slug), guard, api)

    await tracker.mount()
    await tracker.increment_visit()

    assert api.calls == []
    assert tracker.error is None
    assert tracker.is_loading is False


# ─── Guard store and cancellation failures ──────────────────────────


@pytest.fixture
def unwritable_guard(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    g = IncrementGuard(JsonFileGuardStore(blocker / "guard.json"))
    yield g
    g.close()


@pytest.mark.asyncio
async def test_rate_limited_with_unwritable_store_does_not_raise(unwritable_guard, profile_key):
    api = FakeVisitApi(RateLimitedError(status_code=429))
    tracker = _tracker(profile_key, unwritable_guard, api, initial_count=2)

    snapshot = await tracker.mount()

    assert snapshot.visit_count == 2
    assert snapshot.error is None
    assert snapshot.is_loading is False
    assert unwritable_guard.state(profile_key) == GuardState.COMPLETED


@pytest.mark.asyncio
async def test_success_with_unwritable_store_does_not_raise(unwritable_guard, profile_key):
    tracker = _tracker(profile_key, unwritable_guard, FakeVisitApi(6))

    snapshot = await tracker.mount()

    assert snapshot.visit_count == 6
    assert snapshot.error is None


@pytest.mark.asyncio
async def test_cancelled_request_leaves_key_retryable(guard, profile_key):
    gate = asyncio.Event()
    api = FakeVisitApi(5, 9, gate=gate)
    tracker = _tracker(profile_key, guard, api)

    task = asyncio.create_task(tracker.increment_visit())
    await asyncio.sleep(0)
    assert guard.state(profile_key) == GuardState.IN_FLIGHT

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert guard.state(profile_key) == GuardState.IDLE
    assert tracker.is_loading is False
    assert guard.can_increment(profile_key) is True

    gate.set()
    await tracker.increment_visit()
    assert len(api.calls) == 2
    assert tracker.visit_count == 5
