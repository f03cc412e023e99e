"""
CYBERK - Terminal UI
====================
"""

from .dashboard import (
    SimulationDashboard,
    render_report,
    render_status,
    render_targets,
    render_timeline,
)

__all__ = [
    "SimulationDashboard",
    "render_report",
    "render_status",
    "render_targets",
    "render_timeline",
]
