"""
CYBERK - Simulation Store

Single owner of the simulation state. Every change goes through
dispatch(), which runs the reducer and notifies subscribers with the
new and previous snapshots. A listener that raises is logged and skipped;
the state change it was notified about still stands.
"""

from typing import Callable, List, Optional

from cyberk.core.actions import SimulationAction
from cyberk.core.models import SimulationState
from cyberk.core.reducer import reduce
from cyberk.core.seed import initial_state
from cyberk.errors import StoreNotBoundError
from cyberk.utils.logger import logger

Listener = Callable[[SimulationState, SimulationState], None]


class SimulationStore:
    """
    Holds the current SimulationState.

    Usage:
        store = SimulationStore()
        unsubscribe = store.subscribe(lambda new, old: print(new.current_phase))
        store.dispatch(StartSimulation())
    """

    def __init__(self, state: Optional[SimulationState] = None):
        self._state = state if state is not None else initial_state()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> SimulationState:
        """Current snapshot. Frozen, so readers cannot modify it."""
        return self._state

    def dispatch(self, action: SimulationAction) -> SimulationState:
        """Apply `action` and notify subscribers if the state changed."""
        previous = self._state
        self._state = reduce(previous, action)
        logger.debug(f"dispatch {getattr(action, 'type', type(action).__name__)}")
        if self._state is not previous:
            self._notify(previous)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reset(self) -> SimulationState:
        """Discard everything and start again from the seed network."""
        previous = self._state
        self._state = initial_state()
        logger.debug("store reset to seed configuration")
        self._notify(previous)
        return self._state

    def _notify(self, previous: SimulationState):
        # Listener failures are isolated; the remaining listeners still run
        for listener in list(self._listeners):
            try:
                listener(self._state, previous)
            except Exception:
                logger.exception(f"listener {getattr(listener, '__qualname__', listener)} failed")


def require_store(store: Optional[SimulationStore], component: str) -> SimulationStore:
    """Return `store`, or fail fast when a component was wired without one."""
    if store is None:
        raise StoreNotBoundError(component)
    return store
