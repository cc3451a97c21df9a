"""Pytest configuration and shared fixtures."""

import pytest

from vinculo.adapters.guard_store.memory_store import InMemoryGuardStore
from vinculo.application.services.increment_guard import IncrementGuard
from vinculo.domain.value_objects.enums import ResourceKind
from vinculo.domain.value_objects.resource_key import ResourceKey


@pytest.fixture
def profile_key():
    return ResourceKey(kind=ResourceKind.PROFILE, slug="abc123")


@pytest.fixture
def family_key():
    return ResourceKey(kind=ResourceKind.FAMILY, slug="abc123")


@pytest.fixture
def store():
    return InMemoryGuardStore()


@pytest.fixture
def guard(store):
    g = IncrementGuard(store)
    yield g
    g.close()
