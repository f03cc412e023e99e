"""
CYBERK - Simulation Session

Wires one store, one engine and one auto-stepper together and exposes
the operator controls: start, stop, single step, reset, delay and
report export.
"""

import random
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from cyberk.config import Settings, get_settings
from cyberk.core.models import AttackStep, SimulationState
from cyberk.core.store import SimulationStore
from cyberk.engine.autostep import AutoStepper
from cyberk.engine.stepper import SimulationEngine
from cyberk.output.json_formatter import JSONFormatter
from cyberk.report.generator import ReportGenerator, ThreatReport
from cyberk.utils.logger import logger


class SimulationSession:
    """
    One simulation run.

    Usage:
        with SimulationSession() as session:
            session.step()
            await session.start()
            await session.stop()
            session.export_report("./reports")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        outcome: Optional[Callable[[], bool]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.settings = settings or get_settings()
        if rng is None:
            rng = random.Random(self.settings.random_seed)

        self.store = SimulationStore()
        self.engine = SimulationEngine(
            self.store,
            rng=rng,
            success_rate=self.settings.success_rate,
            label_with_target=self.settings.label_steps_with_target,
            outcome=outcome,
        )
        self.stepper = AutoStepper(
            self.store,
            self.engine,
            delay_ms=self.settings.step_delay_ms,
            sleep=sleep,
        )
        self.reports = ReportGenerator(self.store)

    @property
    def state(self) -> SimulationState:
        return self.store.state

    async def start(self):
        await self.stepper.start()

    async def stop(self):
        await self.stepper.stop()

    async def run(self, steps: int) -> int:
        """Automatic run of `steps` ticks."""
        return await self.stepper.run_for(steps)

    def step(self) -> AttackStep:
        """Manual single step; rejected while auto stepping is active."""
        return self.engine.manual_step()

    def set_delay(self, delay_ms: int):
        self.stepper.set_delay(delay_ms)

    def close(self):
        """Detach the auto-stepper from the store."""
        self.stepper.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    async def reset(self) -> SimulationState:
        """Stop any auto stepping and reinitialize to the seed network."""
        await self.stepper.stop()
        logger.info("Resetting simulation")
        return self.store.reset()

    def build_report(self) -> ThreatReport:
        return self.reports.generate()

    def export_report(self, output_dir: Union[str, Path, None] = None) -> Path:
        """Write the JSON report, named by today's date."""
        path = JSONFormatter().save(
            self.build_report(),
            output_dir or self.settings.report_dir,
        )
        logger.info(f"Report saved: {path}")
        return path
