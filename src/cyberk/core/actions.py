"""
CYBERK - Store Actions

The seven kinds of action the store accepts. `type` carries the action
name, which is what the reducer and the debug log key on.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from cyberk.core.models import AttackStep, TargetStatus


@dataclass(frozen=True)
class StartSimulation:
    type: ClassVar[str] = "START_SIMULATION"


@dataclass(frozen=True)
class StopSimulation:
    type: ClassVar[str] = "STOP_SIMULATION"


@dataclass(frozen=True)
class AddAttackStep:
    step: AttackStep
    type: ClassVar[str] = "ADD_ATTACK_STEP"


@dataclass(frozen=True)
class UpdateTargetStatus:
    target_id: str
    status: TargetStatus
    type: ClassVar[str] = "UPDATE_TARGET_STATUS"


@dataclass(frozen=True)
class SetAIDecision:
    text: str
    type: ClassVar[str] = "SET_AI_DECISION"


@dataclass(frozen=True)
class SetCurrentPhase:
    phase: str
    type: ClassVar[str] = "SET_CURRENT_PHASE"


@dataclass(frozen=True)
class CompromiseTarget:
    target_id: str
    type: ClassVar[str] = "COMPROMISE_TARGET"


SimulationAction = Union[
    StartSimulation,
    StopSimulation,
    AddAttackStep,
    UpdateTargetStatus,
    SetAIDecision,
    SetCurrentPhase,
    CompromiseTarget,
]
