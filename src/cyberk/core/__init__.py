"""CYBERK Core Components"""

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
from cyberk.core.models import (
    PHASE_ORDER,
    AttackStep,
    Phase,
    Service,
    ServiceStatus,
    Severity,
    SimulationState,
    StepResult,
    Target,
    TargetStatus,
    Vulnerability,
    next_phase,
)
from cyberk.core.reducer import reduce
from cyberk.core.seed import initial_state, seed_targets
from cyberk.core.store import SimulationStore, require_store

__all__ = [
    # Actions
    "AddAttackStep",
    "CompromiseTarget",
    "SetAIDecision",
    "SetCurrentPhase",
    "SimulationAction",
    "StartSimulation",
    "StopSimulation",
    "UpdateTargetStatus",

    # Models
    "PHASE_ORDER",
    "AttackStep",
    "Phase",
    "Service",
    "ServiceStatus",
    "Severity",
    "SimulationState",
    "StepResult",
    "Target",
    "TargetStatus",
    "Vulnerability",
    "next_phase",

    # Store
    "reduce",
    "initial_state",
    "seed_targets",
    "SimulationStore",
    "require_store",
]
