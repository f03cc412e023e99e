"""
CYBERK - AI Decision Engine

Rule table that picks the next simulated action for the current phase.
The "AI" is a lookup plus a random draw; there is no inference.
"""

import random
from dataclasses import dataclass
from typing import Optional

from cyberk.core.models import Phase, SimulationState, TargetStatus


@dataclass(frozen=True)
class AIDecision:
    """What the engine intends to do next and why."""
    action: str
    phase: str
    reasoning: str
    target_name: Optional[str] = None


LATERAL_MOVEMENT_ACTION = "Network discovery and credential harvesting"
PERSISTENCE_ACTION = "Install backdoor and maintain access"
FALLBACK_ACTION = "Analyzing current state and planning next move"


def generate_ai_decision(state: SimulationState, rng: random.Random = None) -> AIDecision:
    """
    Choose the next action for `state.current_phase`.

    Reconnaissance, exploitation and privilege escalation pick a target
    uniformly at random among the eligible ones. Lateral movement and
    persistence always return the same action. When a phase has no
    eligible target, or the phase is not recognized, a generic analysis
    action tagged with the current phase is returned.
    """
    rng = rng or random
    phase = state.current_phase

    if phase == Phase.RECONNAISSANCE:
        online = state.targets_with_status(TargetStatus.ONLINE)
        if online:
            target = rng.choice(online)
            return AIDecision(
                action=f"Port scan and service enumeration on {target.name}",
                phase=Phase.RECONNAISSANCE.value,
                reasoning=(
                    f"AI identified {target.name} as an accessible target. Gathering "
                    "information about open services and potential attack vectors."
                ),
                target_name=target.name,
            )

    elif phase == Phase.EXPLOITATION:
        vulnerable = [
            t for t in state.targets
            if t.status == TargetStatus.ONLINE and t.has_exploitable_vulnerability()
        ]
        if vulnerable:
            target = rng.choice(vulnerable)
            vuln = target.first_exploitable_vulnerability()
            return AIDecision(
                action=f"Exploit {vuln.cve} on {target.name}",
                phase=Phase.EXPLOITATION.value,
                reasoning=(
                    f"AI detected critical vulnerability {vuln.cve} on {target.name}. "
                    "Attempting simulated exploitation to gain initial foothold."
                ),
                target_name=target.name,
            )

    elif phase == Phase.PRIVILEGE_ESCALATION:
        compromised = state.targets_with_status(TargetStatus.COMPROMISED)
        if compromised:
            target = rng.choice(compromised)
            return AIDecision(
                action=f"Local privilege escalation on {target.name}",
                phase=Phase.PRIVILEGE_ESCALATION.value,
                reasoning=(
                    f"AI gained initial access to {target.name}. Now attempting to "
                    "escalate privileges to gain administrative control."
                ),
                target_name=target.name,
            )

    elif phase == Phase.LATERAL_MOVEMENT:
        return AIDecision(
            action=LATERAL_MOVEMENT_ACTION,
            phase=Phase.LATERAL_MOVEMENT.value,
            reasoning=(
                "AI is exploring the network topology, looking for additional targets "
                "and harvesting credentials for lateral movement."
            ),
        )

    elif phase == Phase.PERSISTENCE:
        return AIDecision(
            action=PERSISTENCE_ACTION,
            phase=Phase.PERSISTENCE.value,
            reasoning=(
                "AI is establishing persistence mechanisms to maintain long-term "
                "access to compromised systems."
            ),
        )

    return AIDecision(
        action=FALLBACK_ACTION,
        phase=phase,
        reasoning=(
            "AI is evaluating available options and formulating the optimal "
            "attack strategy."
        ),
    )
