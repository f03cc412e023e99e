"""
CYBERK - Step Execution

Turns one AI decision into one logged attack step plus its follow-on
state changes: target compromise on a successful exploitation and phase
advance on any success.
"""

import random
from datetime import datetime
from typing import Callable, Optional

from cyberk.core.actions import (
    AddAttackStep,
    CompromiseTarget,
    SetAIDecision,
    SetCurrentPhase,
    UpdateTargetStatus,
)
from cyberk.core.models import (
    AttackStep,
    Phase,
    StepResult,
    TargetStatus,
    next_phase,
)
from cyberk.core.store import SimulationStore, require_store
from cyberk.engine.decision import AIDecision, generate_ai_decision
from cyberk.errors import StepRejectedError
from cyberk.utils.helpers import generate_step_id
from cyberk.utils.logger import logger

DEFAULT_SUCCESS_RATE = 0.7
PLACEHOLDER_TARGET = "Simulated Target"
SUCCESS_DETAIL = "Successful execution"
FAILURE_DETAIL = "Attack failed, adapting strategy"


class SimulationEngine:
    """
    Decision and step execution over a SimulationStore.

    Randomness is injectable: pass a seeded `random.Random` as `rng`, or
    an `outcome` callable returning True/False to force the success draw.

    Usage:
        engine = SimulationEngine(store, rng=random.Random(7))
        step = engine.manual_step()
    """

    def __init__(
        self,
        store: SimulationStore,
        rng: Optional[random.Random] = None,
        success_rate: float = DEFAULT_SUCCESS_RATE,
        label_with_target: bool = True,
        outcome: Optional[Callable[[], bool]] = None,
    ):
        self.store = require_store(store, "SimulationEngine")
        self.rng = rng or random.Random()
        self.success_rate = success_rate
        self.label_with_target = label_with_target
        self._outcome = outcome

    def decide(self) -> AIDecision:
        return generate_ai_decision(self.store.state, self.rng)

    def manual_step(self) -> AttackStep:
        """Run exactly one step. Refused while automatic stepping is active."""
        if self.store.state.is_running:
            raise StepRejectedError(
                "Manual stepping is disabled while the simulation is running"
            )
        return self.execute_step()

    def execute_step(self, decision: Optional[AIDecision] = None) -> AttackStep:
        """Execute one decision and apply its effects to the store."""
        snapshot = self.store.state
        if decision is None:
            decision = generate_ai_decision(snapshot, self.rng)

        self.store.dispatch(SetAIDecision(decision.reasoning))
        logger.decision(decision.reasoning)

        label = PLACEHOLDER_TARGET
        if self.label_with_target and decision.target_name:
            label = decision.target_name
        logger.attack_start(decision.action, label)

        success = self._draw_outcome()
        result = StepResult.SUCCESS if success else StepResult.FAILURE
        now = datetime.now()

        step = AttackStep(
            id=generate_step_id(now.timestamp()),
            timestamp=now,
            phase=decision.phase,
            action=decision.action,
            target=label,
            result=result,
            details=f"{decision.reasoning} Result: "
                    f"{SUCCESS_DETAIL if success else FAILURE_DETAIL}",
            mitre_id=f"T{self.rng.randint(1000, 9999)}",
        )
        self.store.dispatch(AddAttackStep(step))

        if success:
            logger.attack_success(step.action, step.mitre_id)
        else:
            logger.attack_fail(step.action)
            return step

        if decision.phase == Phase.EXPLOITATION:
            # First online target in seed order, not necessarily the one named in the decision
            victim = next(
                (t for t in snapshot.targets if t.status == TargetStatus.ONLINE),
                None,
            )
            if victim is not None:
                self.store.dispatch(UpdateTargetStatus(victim.id, TargetStatus.COMPROMISED))
                self.store.dispatch(CompromiseTarget(victim.id))
                logger.compromise(victim.name, victim.id)

        following = next_phase(snapshot.current_phase)
        if following != snapshot.current_phase:
            self.store.dispatch(SetCurrentPhase(following))
            logger.phase_start(following)

        return step

    def _draw_outcome(self) -> bool:
        if self._outcome is not None:
            return bool(self._outcome())
        return self.rng.random() < self.success_rate
