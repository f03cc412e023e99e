"""
CYBERK - Exceptions
===================
"""


class CyberkError(Exception):
    """Base class for all simulator errors."""


class StoreNotBoundError(CyberkError):
    """A component tried to reach simulation state without an owning store."""

    def __init__(self, component: str):
        super().__init__(
            f"{component} must be given a SimulationStore; "
            "simulation state is only reachable through its owning store"
        )
        self.component = component


class StepRejectedError(CyberkError):
    """Manual stepping was requested while automatic stepping is active."""


class InvalidStepDelayError(CyberkError, ValueError):
    """Auto step delay outside the allowed range."""

    def __init__(self, delay_ms: int, minimum: int, maximum: int):
        super().__init__(
            f"Step delay {delay_ms}ms is outside the allowed range "
            f"{minimum}-{maximum}ms"
        )
        self.delay_ms = delay_ms
