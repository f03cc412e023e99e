"""
CYBERK - Automatic Stepping

Runs the engine on a fixed interval while the simulation is running.

A single asyncio task owns the interval. It is cancelled when the
simulation stops and is cancelled and recreated whenever the delay or
(externally) the phase changes, so two timers never coexist. Step
execution has no await points: cancellation can only land between ticks.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from cyberk.config import MAX_STEP_DELAY_MS, MIN_STEP_DELAY_MS
from cyberk.core.actions import StartSimulation, StopSimulation
from cyberk.core.models import SimulationState
from cyberk.core.store import SimulationStore, require_store
from cyberk.engine.stepper import SimulationEngine
from cyberk.errors import InvalidStepDelayError
from cyberk.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_STEP_DELAY_MS = 3000


def validate_delay(delay_ms: int) -> int:
    if not MIN_STEP_DELAY_MS <= delay_ms <= MAX_STEP_DELAY_MS:
        raise InvalidStepDelayError(delay_ms, MIN_STEP_DELAY_MS, MAX_STEP_DELAY_MS)
    return delay_ms


class AutoStepper:
    """
    Timer-driven stepping tied to the store's running flag.

    Usage:
        stepper = AutoStepper(store, engine, delay_ms=2000)
        await stepper.start()
        ...
        await stepper.stop()
    """

    def __init__(
        self,
        store: SimulationStore,
        engine: SimulationEngine,
        delay_ms: int = DEFAULT_STEP_DELAY_MS,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.store = require_store(store, "AutoStepper")
        self.engine = engine
        self.delay_ms = validate_delay(delay_ms)
        self._sleep = sleep or asyncio.sleep
        self._task: Optional[asyncio.Task] = None
        self._in_tick = False
        self._stopped = asyncio.Event()
        self._stopped.set()
        self.ticks = 0
        self._tick_budget: Optional[int] = None
        self._unsubscribe = self.store.subscribe(self._on_state_change)

    @property
    def running(self) -> bool:
        return self.store.state.is_running

    @property
    def active(self) -> bool:
        """True while a scheduled task exists and has not finished."""
        return self._task is not None and not self._task.done()

    async def start(self):
        """Set the running flag and schedule the interval task."""
        if self.running and self.active:
            return
        self._stopped.clear()
        self.store.dispatch(StartSimulation())
        self._schedule()
        logger.info("auto_stepper_started", delay_ms=self.delay_ms)

    async def stop(self):
        """Clear the running flag and cancel any pending tick."""
        task, self._task = self._task, None
        if self.running:
            self.store.dispatch(StopSimulation())
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._stopped.set()
        logger.info("auto_stepper_stopped", ticks=self.ticks)

    def set_delay(self, delay_ms: int):
        """Change the interval; a running timer is cancelled and recreated."""
        self.delay_ms = validate_delay(delay_ms)
        if self.running and self.active:
            self._reschedule("delay_changed")

    async def run_for(self, steps: int) -> int:
        """Auto-step until `steps` more ticks ran, then stop. Returns ticks run."""
        if steps <= 0:
            return 0
        start_ticks = self.ticks
        self._tick_budget = start_ticks + steps
        try:
            await self.start()
            await self._stopped.wait()
        finally:
            self._tick_budget = None
            await self.stop()
        return self.ticks - start_ticks

    def close(self):
        """Detach from the store. Cancels a pending tick without awaiting it."""
        self._unsubscribe()
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _schedule(self):
        self._task = asyncio.get_running_loop().create_task(self._run_loop())

    def _reschedule(self, reason: str):
        if self._task is not None:
            self._task.cancel()
        self._schedule()
        logger.info("auto_stepper_rescheduled", reason=reason, delay_ms=self.delay_ms)

    def _on_state_change(self, new: SimulationState, old: SimulationState):
        if not new.is_running:
            self._stopped.set()
        if self._in_tick:
            return
        if old.is_running and not new.is_running:
            if self._task is not None:
                self._task.cancel()
                self._task = None
        elif new.is_running and new.current_phase != old.current_phase and self.active:
            self._reschedule("phase_changed")

    async def _run_loop(self):
        while self.running:
            await self._sleep(self.delay_ms / 1000)
            if not self.running:
                break
            self._in_tick = True
            try:
                self.engine.execute_step()
                self.ticks += 1
                if self._tick_budget is not None and self.ticks >= self._tick_budget:
                    self.store.dispatch(StopSimulation())
            except Exception:
                logger.exception("auto_step_failed", tick=self.ticks + 1)
                self.store.dispatch(StopSimulation())
                raise
            finally:
                self._in_tick = False
