"""CYBERK Report Generation"""

from .generator import (
    RECOMMENDATIONS,
    ReportGenerator,
    ReportSummary,
    ThreatReport,
    build_report,
    group_by_phase,
    phase_status,
    risk_level,
)

__all__ = [
    "RECOMMENDATIONS",
    "ReportGenerator",
    "ReportSummary",
    "ThreatReport",
    "build_report",
    "group_by_phase",
    "phase_status",
    "risk_level",
]
