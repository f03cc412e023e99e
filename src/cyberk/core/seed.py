"""
CYBERK - Seed Network

The fixed set of fictitious targets every session starts from.
"""

from typing import Tuple

from cyberk.core.models import (
    Phase,
    Service,
    SimulationState,
    Severity,
    Target,
    TargetStatus,
    Vulnerability,
)

INITIAL_AI_DECISION = "Initializing AI simulation engine..."


def seed_targets() -> Tuple[Target, ...]:
    return (
        Target(
            id="target-1",
            name="Web Server (DMZ)",
            ip="192.168.1.10",
            os="Ubuntu 20.04",
            status=TargetStatus.ONLINE,
            services=(
                Service(80, "HTTP", "Apache 2.4.41"),
                Service(443, "HTTPS", "Apache 2.4.41"),
                Service(22, "SSH", "OpenSSH 8.2"),
            ),
            vulnerabilities=(
                Vulnerability(
                    id="vuln-1",
                    cve="CVE-2023-1234",
                    severity=Severity.HIGH,
                    description="Simulated Apache vulnerability for educational purposes",
                ),
            ),
        ),
        Target(
            id="target-2",
            name="Database Server",
            ip="192.168.1.20",
            os="CentOS 7",
            status=TargetStatus.ONLINE,
            services=(
                Service(3306, "MySQL", "5.7.32"),
                Service(22, "SSH", "OpenSSH 7.4"),
            ),
            vulnerabilities=(
                Vulnerability(
                    id="vuln-2",
                    cve="CVE-2023-5678",
                    severity=Severity.CRITICAL,
                    description="Simulated MySQL privilege escalation vulnerability",
                ),
            ),
        ),
        Target(
            id="target-3",
            name="Domain Controller",
            ip="192.168.1.5",
            os="Windows Server 2019",
            status=TargetStatus.ONLINE,
            services=(
                Service(389, "LDAP", "Active Directory"),
                Service(3389, "RDP", "Terminal Services"),
                Service(445, "SMB", "SMB 3.1.1"),
            ),
            vulnerabilities=(
                Vulnerability(
                    id="vuln-3",
                    cve="CVE-2023-9999",
                    severity=Severity.HIGH,
                    description="Simulated Active Directory vulnerability",
                ),
            ),
        ),
    )


def initial_state() -> SimulationState:
    """Fresh state built from the seed network."""
    return SimulationState(
        targets=seed_targets(),
        attack_steps=(),
        current_phase=Phase.RECONNAISSANCE.value,
        is_running=False,
        ai_decision=INITIAL_AI_DECISION,
        compromised_targets=(),
    )
