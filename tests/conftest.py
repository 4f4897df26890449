"""Shared pytest fixtures for haptic-player tests."""

from __future__ import annotations

from datetime import timedelta

import pytest

from haptic_player.feedback import (
    EffectChain,
    MockBackend,
    VirtualClock,
    VirtualDispatcher,
)

# ============================================================================
# Timing Fixtures
# ============================================================================


@pytest.fixture
def clock() -> VirtualClock:
    """Virtual clock starting at t=0."""
    return VirtualClock()


@pytest.fixture
def dispatcher(clock: VirtualClock) -> VirtualDispatcher:
    """Deterministic dispatcher on the virtual clock."""
    return VirtualDispatcher(clock)


# ============================================================================
# Backend & Chain Fixtures
# ============================================================================


@pytest.fixture
def backend(clock: VirtualClock) -> MockBackend:
    """Mock backend that timestamps triggers with the virtual clock."""
    return MockBackend(clock=clock)


@pytest.fixture
def make_chain(backend, clock, dispatcher):
    """Factory for chains wired to the virtual fixtures."""

    def _make(after: timedelta | None = None) -> EffectChain:
        return EffectChain(backend, clock, dispatcher, after=after)

    return _make


@pytest.fixture
def chain(make_chain) -> EffectChain:
    """A fresh chain starting at t=0."""
    return make_chain()

