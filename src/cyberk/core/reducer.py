"""
CYBERK - State Reducer

reduce(state, action) -> new state. Pure, total and non-raising:
anything it does not recognize returns the input state unchanged.
"""

from dataclasses import replace

from cyberk.core.actions import (
    AddAttackStep,
    CompromiseTarget,
    SetAIDecision,
    SetCurrentPhase,
    SimulationAction,
    StartSimulation,
    StopSimulation,
    UpdateTargetStatus,
)
from cyberk.core.models import SimulationState


def reduce(state: SimulationState, action: SimulationAction) -> SimulationState:
    if isinstance(action, StartSimulation):
        return replace(state, is_running=True)

    if isinstance(action, StopSimulation):
        return replace(state, is_running=False)

    if isinstance(action, AddAttackStep):
        return replace(state, attack_steps=state.attack_steps + (action.step,))

    if isinstance(action, UpdateTargetStatus):
        if state.get_target(action.target_id) is None:
            return state
        return replace(
            state,
            targets=tuple(
                replace(target, status=action.status)
                if target.id == action.target_id else target
                for target in state.targets
            ),
        )

    if isinstance(action, SetAIDecision):
        return replace(state, ai_decision=action.text)

    if isinstance(action, SetCurrentPhase):
        phase = action.phase.value if hasattr(action.phase, "value") else action.phase
        return replace(state, current_phase=phase)

    if isinstance(action, CompromiseTarget):
        return replace(
            state,
            compromised_targets=state.compromised_targets + (action.target_id,),
        )

    return state
