"""
CYBERK - Simulation Data Model

Targets, services, vulnerabilities, the attack step log and the
aggregate simulation state. Every value is frozen: state changes are
expressed by building new values, never by mutating a snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Phase(str, Enum):
    """Attack lifecycle phases, in order."""
    RECONNAISSANCE = "reconnaissance"
    EXPLOITATION = "exploitation"
    PRIVILEGE_ESCALATION = "privilege_escalation"
    LATERAL_MOVEMENT = "lateral_movement"
    PERSISTENCE = "persistence"


PHASE_ORDER: Tuple[str, ...] = tuple(p.value for p in Phase)


def next_phase(current: str) -> str:
    """
    Phase that follows `current`.

    The last phase is terminal. A value outside the ordering maps to the
    first phase.
    """
    value = current.value if isinstance(current, Phase) else current
    try:
        index = PHASE_ORDER.index(value)
    except ValueError:
        index = -1
    if index < len(PHASE_ORDER) - 1:
        return PHASE_ORDER[index + 1]
    return value


class TargetStatus(str, Enum):
    ONLINE = "online"
    COMPROMISED = "compromised"
    OFFLINE = "offline"


class ServiceStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    FILTERED = "filtered"


class Severity(str, Enum):
    """Vulnerability severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def exploitable(self) -> bool:
        return self in (Severity.HIGH, Severity.CRITICAL)


class StepResult(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    PARTIAL = "partial"


@dataclass(frozen=True)
class Service:
    """A network service exposed by a target."""
    port: int
    name: str
    version: str
    status: ServiceStatus = ServiceStatus.OPEN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "port": self.port,
            "name": self.name,
            "version": self.version,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class Vulnerability:
    """A (fictitious) vulnerability on a target."""
    id: str
    cve: str
    severity: Severity
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "cve": self.cve,
            "severity": self.severity.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class Target:
    """A simulated host."""
    id: str
    name: str
    ip: str
    os: str
    services: Tuple[Service, ...] = ()
    vulnerabilities: Tuple[Vulnerability, ...] = ()
    status: TargetStatus = TargetStatus.ONLINE

    def has_exploitable_vulnerability(self) -> bool:
        return any(v.severity.exploitable for v in self.vulnerabilities)

    def first_exploitable_vulnerability(self) -> Optional[Vulnerability]:
        """First high or critical vulnerability, in declaration order."""
        for vuln in self.vulnerabilities:
            if vuln.severity.exploitable:
                return vuln
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "ip": self.ip,
            "os": self.os,
            "status": self.status.value,
            "services": [s.to_dict() for s in self.services],
            "vulnerabilities": [v.to_dict() for v in self.vulnerabilities],
        }


@dataclass(frozen=True)
class AttackStep:
    """One entry in the attack log. Created by the engine, never changed."""
    id: str
    timestamp: datetime
    phase: str
    action: str
    target: str
    result: StepResult
    details: str = ""
    mitre_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.result == StepResult.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "phase": self.phase,
            "action": self.action,
            "target": self.target,
            "result": self.result.value,
            "details": self.details,
            "mitreId": self.mitre_id,
        }


@dataclass(frozen=True)
class SimulationState:
    """
    Aggregate simulation state.

    `current_phase` is a plain string: SET_CURRENT_PHASE is applied
    without validation. `compromised_targets` may hold the same id more
    than once, one entry per compromise event.
    """
    targets: Tuple[Target, ...] = ()
    attack_steps: Tuple[AttackStep, ...] = ()
    current_phase: str = Phase.RECONNAISSANCE.value
    is_running: bool = False
    ai_decision: str = ""
    compromised_targets: Tuple[str, ...] = field(default_factory=tuple)

    def get_target(self, target_id: str) -> Optional[Target]:
        for target in self.targets:
            if target.id == target_id:
                return target
        return None

    def targets_with_status(self, status: TargetStatus) -> Tuple[Target, ...]:
        return tuple(t for t in self.targets if t.status == status)

    def steps_for_target(self, target_name: str) -> Tuple[AttackStep, ...]:
        """Steps whose target label mentions `target_name`."""
        return tuple(s for s in self.attack_steps if target_name in s.target)

    def steps_in_phase(self, phase: str) -> Tuple[AttackStep, ...]:
        return tuple(s for s in self.attack_steps if s.phase == phase)
