"""
CYBERK - Threat Report

Derives the assessment report from a simulation snapshot: summary
counts, per-phase status, risk level and the fixed recommendations.
Read-only over the state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from cyberk.core.models import (
    PHASE_ORDER,
    AttackStep,
    Severity,
    SimulationState,
    StepResult,
    Target,
    TargetStatus,
)
from cyberk.core.store import SimulationStore, require_store

RECOMMENDATIONS: Tuple[str, ...] = (
    "Implement network segmentation to limit lateral movement",
    "Patch critical and high severity vulnerabilities immediately",
    "Deploy endpoint detection and response (EDR) solutions",
    "Enhance monitoring and logging capabilities",
    "Conduct regular security assessments and penetration testing",
)

PHASE_NOT_STARTED = "not-started"
PHASE_SUCCESS = "success"
PHASE_PARTIAL = "partial"
PHASE_FAILED = "failed"


def group_by_phase(steps: Tuple[AttackStep, ...]) -> Dict[str, List[AttackStep]]:
    """Steps grouped by phase, phases in lifecycle order, empty phases omitted."""
    grouped: Dict[str, List[AttackStep]] = {}
    for phase in PHASE_ORDER:
        in_phase = [s for s in steps if s.phase == phase]
        if in_phase:
            grouped[phase] = in_phase
    # Steps tagged with a phase outside the ordering go last
    for step in steps:
        if step.phase not in PHASE_ORDER:
            grouped.setdefault(step.phase, []).append(step)
    return grouped


def phase_status(steps: List[AttackStep]) -> str:
    if not steps:
        return PHASE_NOT_STARTED
    if any(s.result == StepResult.SUCCESS for s in steps):
        return PHASE_SUCCESS
    if any(s.result == StepResult.PARTIAL for s in steps):
        return PHASE_PARTIAL
    return PHASE_FAILED


def risk_level(compromised: int, critical_vulns: int, high_vulns: int) -> str:
    if compromised > 1 or critical_vulns > 0:
        return "HIGH"
    if compromised == 1 or high_vulns > 0:
        return "MEDIUM"
    return "LOW"


@dataclass
class ReportSummary:
    total_targets: int
    compromised_targets: int
    total_attack_steps: int
    successful_attacks: int
    failed_attacks: int
    partial_attacks: int
    success_rate: float
    vulnerabilities: int
    critical_vulnerabilities: int
    high_vulnerabilities: int
    risk_level: str
    compromise_events: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalTargets": self.total_targets,
            "compromisedTargets": self.compromised_targets,
            "totalAttackSteps": self.total_attack_steps,
            "successfulAttacks": self.successful_attacks,
            "failedAttacks": self.failed_attacks,
            "partialAttacks": self.partial_attacks,
            "successRate": self.success_rate,
            "vulnerabilities": self.vulnerabilities,
            "criticalVulnerabilities": self.critical_vulnerabilities,
            "highVulnerabilities": self.high_vulnerabilities,
            "riskLevel": self.risk_level,
            "compromiseEvents": self.compromise_events,
        }


@dataclass
class ThreatReport:
    """Everything the exported document contains."""
    generated_at: datetime
    summary: ReportSummary
    phase_status: Dict[str, str] = field(default_factory=dict)
    attack_timeline: List[AttackStep] = field(default_factory=list)
    compromised_assets: List[Target] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=lambda: list(RECOMMENDATIONS))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.generated_at.isoformat(),
            "summary": self.summary.to_dict(),
            "phaseStatus": dict(self.phase_status),
            "attackTimeline": [s.to_dict() for s in self.attack_timeline],
            "compromisedAssets": [t.to_dict() for t in self.compromised_assets],
            "recommendations": list(self.recommendations),
        }


def build_report(state: SimulationState, now: Optional[datetime] = None) -> ThreatReport:
    """Build the report for one snapshot."""
    steps = state.attack_steps
    successful = sum(1 for s in steps if s.result == StepResult.SUCCESS)
    failed = sum(1 for s in steps if s.result == StepResult.FAILURE)
    partial = sum(1 for s in steps if s.result == StepResult.PARTIAL)
    compromised = list(state.targets_with_status(TargetStatus.COMPROMISED))

    vulns = [v for t in state.targets for v in t.vulnerabilities]
    critical = sum(1 for v in vulns if v.severity == Severity.CRITICAL)
    high = sum(1 for v in vulns if v.severity == Severity.HIGH)

    success_rate = round(successful / len(steps) * 100, 1) if steps else 0.0

    summary = ReportSummary(
        total_targets=len(state.targets),
        compromised_targets=len(compromised),
        total_attack_steps=len(steps),
        successful_attacks=successful,
        failed_attacks=failed,
        partial_attacks=partial,
        success_rate=success_rate,
        vulnerabilities=len(vulns),
        critical_vulnerabilities=critical,
        high_vulnerabilities=high,
        risk_level=risk_level(len(compromised), critical, high),
        compromise_events=len(state.compromised_targets),
    )

    return ThreatReport(
        generated_at=now or datetime.now(),
        summary=summary,
        phase_status={p: phase_status(list(state.steps_in_phase(p))) for p in PHASE_ORDER},
        attack_timeline=list(steps),
        compromised_assets=compromised,
    )


class ReportGenerator:
    """
    Report view bound to a store.

    Usage:
        report = ReportGenerator(store).generate()
    """

    def __init__(self, store: SimulationStore):
        self.store = require_store(store, "ReportGenerator")

    def generate(self, now: Optional[datetime] = None) -> ThreatReport:
        return build_report(self.store.state, now)
