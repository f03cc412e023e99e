"""
CYBERK - Decision & Stepping Engine
===================================
"""

from .autostep import AutoStepper, DEFAULT_STEP_DELAY_MS, validate_delay
from .decision import AIDecision, generate_ai_decision
from .stepper import PLACEHOLDER_TARGET, SimulationEngine

__all__ = [
    "AIDecision",
    "AutoStepper",
    "DEFAULT_STEP_DELAY_MS",
    "PLACEHOLDER_TARGET",
    "SimulationEngine",
    "generate_ai_decision",
    "validate_delay",
]
