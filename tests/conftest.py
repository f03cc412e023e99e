"""
CYBERK - Test Configuration
===========================
Pytest fixtures shared by all test modules.
"""

import asyncio
import random

import pytest

from cyberk.core.actions import SetCurrentPhase, UpdateTargetStatus
from cyberk.core.models import TargetStatus
from cyberk.core.store import SimulationStore
from cyberk.engine.stepper import SimulationEngine


# ===========================================
# Store Fixtures
# ===========================================

@pytest.fixture
def store() -> SimulationStore:
    """Fresh store at the seed configuration."""
    return SimulationStore()


@pytest.fixture
def exploitation_store(store: SimulationStore) -> SimulationStore:
    """Store moved to the exploitation phase."""
    store.dispatch(SetCurrentPhase("exploitation"))
    return store


@pytest.fixture
def compromised_store(store: SimulationStore) -> SimulationStore:
    """Store with the database server compromised."""
    store.dispatch(UpdateTargetStatus("target-2", TargetStatus.COMPROMISED))
    return store


# ===========================================
# Engine Fixtures
# ===========================================

@pytest.fixture
def make_engine(store: SimulationStore):
    """Factory for engines with a forced outcome and a seeded generator."""
    def _make(succeed: bool = True, seed: int = 1, **kwargs) -> SimulationEngine:
        return SimulationEngine(
            store,
            rng=random.Random(seed),
            outcome=lambda: succeed,
            **kwargs,
        )
    return _make


# ===========================================
# Sleep Stubs
# ===========================================

async def _fast_sleep(_seconds: float) -> None:
    await asyncio.sleep(0)


async def _never_wake(_seconds: float) -> None:
    await asyncio.Event().wait()


@pytest.fixture
def fast_sleep():
    """Sleep that only yields to the loop, so ticks fire immediately."""
    return _fast_sleep


@pytest.fixture
def never_wake():
    """Sleep that never returns, so no tick ever fires."""
    return _never_wake
