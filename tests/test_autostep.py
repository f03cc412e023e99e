"""
CYBERK Automatic Stepping Tests
"""

import asyncio

import pytest

from cyberk.core.actions import SetCurrentPhase, StopSimulation
from cyberk.engine.autostep import AutoStepper
from cyberk.errors import InvalidStepDelayError, StepRejectedError


async def settle(rounds: int = 5):
    for _ in range(rounds):
        await asyncio.sleep(0)


class TestStartStop:
    """Test the running lifecycle."""

    @pytest.mark.asyncio
    async def test_start_then_stop_before_tick(self, store, make_engine):
        """Test no step runs when stopped before the first tick."""
        stepper = AutoStepper(store, make_engine(), delay_ms=1000)

        await stepper.start()
        assert store.state.is_running is True
        await stepper.stop()
        await settle()

        assert store.state.is_running is False
        assert store.state.attack_steps == ()
        assert not stepper.active

    @pytest.mark.asyncio
    async def test_run_for_executes_exact_ticks(self, store, make_engine, fast_sleep):
        """Test run_for stops after the requested number of steps."""
        stepper = AutoStepper(store, make_engine(succeed=True), sleep=fast_sleep)

        ran = await stepper.run_for(3)

        assert ran == 3
        assert len(store.state.attack_steps) == 3
        assert store.state.is_running is False
        assert store.state.current_phase == "lateral_movement"
        assert not stepper.active

    @pytest.mark.asyncio
    async def test_run_for_zero_runs_nothing(self, store, make_engine, fast_sleep):
        """Test a zero-step run neither steps nor changes phase."""
        stepper = AutoStepper(store, make_engine(succeed=True), sleep=fast_sleep)

        ran = await stepper.run_for(0)
        await settle()

        assert ran == 0
        assert store.state.attack_steps == ()
        assert store.state.current_phase == "reconnaissance"
        assert store.state.is_running is False
        assert not stepper.active

    @pytest.mark.asyncio
    async def test_no_steps_after_stop(self, store, make_engine, fast_sleep):
        """Test stopping halts stepping for good."""
        stepper = AutoStepper(store, make_engine(succeed=False), sleep=fast_sleep)

        await stepper.start()
        await settle(10)
        await stepper.stop()
        count = len(store.state.attack_steps)
        await settle(10)

        assert count > 0
        assert len(store.state.attack_steps) == count

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, store, make_engine, never_wake):
        """Test a second start keeps the same task."""
        stepper = AutoStepper(store, make_engine(), sleep=never_wake)

        await stepper.start()
        task = stepper._task
        await stepper.start()

        assert stepper._task is task
        await stepper.stop()

    @pytest.mark.asyncio
    async def test_external_stop_cancels_task(self, store, make_engine, never_wake):
        """Test a STOP_SIMULATION from elsewhere cancels the pending tick."""
        stepper = AutoStepper(store, make_engine(), sleep=never_wake)
        await stepper.start()
        task = stepper._task

        store.dispatch(StopSimulation())

        with pytest.raises(asyncio.CancelledError):
            await task
        assert not stepper.active
        await stepper.stop()


class TestManualDuringAuto:
    """Test manual stepping is disabled while auto stepping."""

    @pytest.mark.asyncio
    async def test_manual_step_rejected(self, store, make_engine, never_wake):
        """Test manual step raises and appends nothing."""
        engine = make_engine()
        stepper = AutoStepper(store, engine, sleep=never_wake)
        await stepper.start()

        with pytest.raises(StepRejectedError):
            engine.manual_step()
        assert store.state.attack_steps == ()

        await stepper.stop()
        engine.manual_step()
        assert len(store.state.attack_steps) == 1


class TestRescheduling:
    """Test configuration changes replace the timer instead of stacking."""

    @pytest.mark.asyncio
    async def test_delay_change_reschedules(self, store, make_engine, never_wake):
        """Test a new delay cancels the old task and creates one new task."""
        stepper = AutoStepper(store, make_engine(), sleep=never_wake)
        await stepper.start()
        old = stepper._task

        stepper.set_delay(2000)

        assert stepper.delay_ms == 2000
        assert stepper._task is not old
        assert stepper.active
        with pytest.raises(asyncio.CancelledError):
            await old
        await stepper.stop()

    @pytest.mark.asyncio
    async def test_delay_change_while_idle(self, store, make_engine):
        """Test changing the delay when stopped schedules nothing."""
        stepper = AutoStepper(store, make_engine())
        stepper.set_delay(5000)
        assert stepper.delay_ms == 5000
        assert not stepper.active

    @pytest.mark.asyncio
    async def test_external_phase_change_reschedules(self, store, make_engine, never_wake):
        """Test a phase set from outside a tick restarts the interval."""
        stepper = AutoStepper(store, make_engine(), sleep=never_wake)
        await stepper.start()
        old = stepper._task

        store.dispatch(SetCurrentPhase("exploitation"))

        assert stepper._task is not old
        with pytest.raises(asyncio.CancelledError):
            await old
        await stepper.stop()

    @pytest.mark.asyncio
    async def test_uses_configured_delay(self, store, make_engine):
        """Test the sleep receives the delay in seconds."""
        waits = []

        async def recording_sleep(seconds):
            waits.append(seconds)
            await asyncio.sleep(0)

        stepper = AutoStepper(store, make_engine(), delay_ms=2500, sleep=recording_sleep)
        await stepper.run_for(2)

        assert waits[:2] == [2.5, 2.5]


class TestDelayValidation:
    """Test delay bounds."""

    @pytest.mark.parametrize("delay", [0, 999, 10001])
    def test_out_of_range_rejected(self, store, make_engine, delay):
        """Test delays outside 1000-10000ms are refused."""
        with pytest.raises(InvalidStepDelayError):
            AutoStepper(store, make_engine(), delay_ms=delay)

    def test_set_delay_validates(self, store, make_engine):
        """Test set_delay refuses bad values and keeps the old one."""
        stepper = AutoStepper(store, make_engine(), delay_ms=3000)
        with pytest.raises(ValueError):
            stepper.set_delay(50)
        assert stepper.delay_ms == 3000


class TestClose:
    """Test detaching a stepper from its store."""

    @pytest.mark.asyncio
    async def test_close_unsubscribes_and_cancels(self, store, make_engine, never_wake):
        """Test a closed stepper no longer reacts to store changes."""
        stepper = AutoStepper(store, make_engine(), sleep=never_wake)
        await stepper.start()
        task = stepper._task

        stepper.close()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert not stepper.active
        assert store._listeners == []
        store.dispatch(SetCurrentPhase("exploitation"))
        assert stepper._task is None
