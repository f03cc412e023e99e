"""
CYBERK - AI Red Team Simulator
==============================

An educational simulator of an "AI red-team" attack moving through the
reconnaissance -> exploitation -> privilege escalation -> lateral
movement -> persistence lifecycle against a small fictitious network.
Nothing touches a real network; the "AI" is a rule table plus a random
draw.

Modules:
--------
- core: data model, seed network, actions, reducer and store
- engine: decision rules, step execution and automatic stepping
- report: threat report derived from the state
- output: JSON export
- ui: rich terminal views

Quick Start:
------------
    from cyberk import SimulationSession

    session = SimulationSession()
    session.step()
    session.export_report("./reports")

CLI Usage:
----------
    cyberk simulate --steps 10 --delay 1000
"""

__version__ = "1.0.0"

from cyberk.session import SimulationSession

__all__ = [
    "SimulationSession",
    "__version__",
]
