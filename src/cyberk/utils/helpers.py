"""
CYBERK - Helper Functions
"""

import time
import uuid


def generate_id(prefix: str = "") -> str:
    """Generate a unique ID."""
    uid = uuid.uuid4().hex[:8]
    if prefix:
        return f"{prefix}-{uid}"
    return uid


def generate_step_id(timestamp: float = None) -> str:
    """Attack step id derived from its creation time (epoch ms)."""
    if timestamp is None:
        timestamp = time.time()
    return generate_id(f"step-{int(timestamp * 1000)}")


def format_phase(phase: str) -> str:
    """Human label for a phase value: 'lateral_movement' -> 'Lateral Movement'."""
    return phase.replace("_", " ").title()
