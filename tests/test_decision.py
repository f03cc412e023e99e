"""
CYBERK Decision Engine Tests
"""

import random
from dataclasses import replace

from cyberk.core.models import Severity, TargetStatus, Vulnerability
from cyberk.core.seed import initial_state
from cyberk.engine.decision import (
    FALLBACK_ACTION,
    LATERAL_MOVEMENT_ACTION,
    PERSISTENCE_ACTION,
    generate_ai_decision,
)


def state_with(phase: str, statuses=None, **kwargs):
    """Seed state at `phase`, optionally overriding target statuses in order."""
    state = initial_state()
    targets = state.targets
    if statuses is not None:
        targets = tuple(replace(t, status=s) for t, s in zip(targets, statuses))
    return replace(state, current_phase=phase, targets=targets, **kwargs)


ALL_ONLINE = (TargetStatus.ONLINE,) * 3
ALL_OFFLINE = (TargetStatus.OFFLINE,) * 3


class TestReconnaissanceDecision:
    """Test reconnaissance rules."""

    def test_picks_online_target(self):
        """Test the action names one of the online targets."""
        state = state_with("reconnaissance")
        names = {t.name for t in state.targets}
        for seed in range(20):
            decision = generate_ai_decision(state, random.Random(seed))
            assert decision.phase == "reconnaissance"
            assert decision.action.startswith("Port scan and service enumeration on ")
            assert decision.target_name in names
            assert decision.target_name in decision.reasoning

    def test_only_online_targets_eligible(self):
        """Test compromised or offline targets are skipped."""
        state = state_with(
            "reconnaissance",
            (TargetStatus.COMPROMISED, TargetStatus.ONLINE, TargetStatus.OFFLINE),
        )
        for seed in range(20):
            decision = generate_ai_decision(state, random.Random(seed))
            assert decision.target_name == "Database Server"

    def test_falls_back_without_online_targets(self):
        """Test the generic action when nothing is online."""
        decision = generate_ai_decision(state_with("reconnaissance", ALL_OFFLINE), random.Random(1))
        assert decision.action == FALLBACK_ACTION
        assert decision.phase == "reconnaissance"
        assert decision.target_name is None


class TestExploitationDecision:
    """Test exploitation rules."""

    def test_references_vulnerability_cve(self):
        """Test the chosen target's CVE appears in the action."""
        state = state_with("exploitation")
        cves = {t.name: t.vulnerabilities[0].cve for t in state.targets}
        for seed in range(20):
            decision = generate_ai_decision(state, random.Random(seed))
            assert decision.phase == "exploitation"
            assert decision.action == f"Exploit {cves[decision.target_name]} on {decision.target_name}"

    def test_first_matching_vulnerability_is_used(self):
        """Test the first high/critical vulnerability wins, not a random one."""
        state = state_with("exploitation", (TargetStatus.ONLINE, TargetStatus.OFFLINE, TargetStatus.OFFLINE))
        web = replace(
            state.targets[0],
            vulnerabilities=(
                Vulnerability("v-low", "CVE-2000-0001", Severity.LOW),
                Vulnerability("v-crit", "CVE-2000-0002", Severity.CRITICAL),
                Vulnerability("v-high", "CVE-2000-0003", Severity.HIGH),
            ),
        )
        state = replace(state, targets=(web,) + state.targets[1:])
        for seed in range(10):
            decision = generate_ai_decision(state, random.Random(seed))
            assert "CVE-2000-0002" in decision.action

    def test_targets_without_severe_vulnerabilities_skipped(self):
        """Test low/medium-only targets are not eligible."""
        state = state_with("exploitation")
        downgraded = tuple(
            replace(t, vulnerabilities=(Vulnerability("v", "CVE-1", Severity.MEDIUM),))
            for t in state.targets
        )
        decision = generate_ai_decision(replace(state, targets=downgraded), random.Random(3))
        assert decision.action == FALLBACK_ACTION
        assert decision.phase == "exploitation"

    def test_falls_back_when_nothing_online(self):
        """Test the generic action when no target is online."""
        decision = generate_ai_decision(state_with("exploitation", ALL_OFFLINE), random.Random(1))
        assert decision.action == FALLBACK_ACTION


class TestPrivilegeEscalationDecision:
    """Test privilege escalation rules."""

    def test_picks_compromised_target(self):
        """Test only compromised targets are picked."""
        state = state_with(
            "privilege_escalation",
            (TargetStatus.ONLINE, TargetStatus.ONLINE, TargetStatus.COMPROMISED),
        )
        decision = generate_ai_decision(state, random.Random(5))
        assert decision.action == "Local privilege escalation on Domain Controller"
        assert decision.phase == "privilege_escalation"

    def test_falls_back_without_compromised_target(self):
        """Test the generic action with no foothold."""
        decision = generate_ai_decision(state_with("privilege_escalation", ALL_ONLINE), random.Random(5))
        assert decision.action == FALLBACK_ACTION
        assert decision.phase == "privilege_escalation"


class TestFixedPhaseDecisions:
    """Test phases whose action never varies."""

    def test_lateral_movement_is_fixed(self):
        """Test the same action regardless of targets or seed."""
        for statuses in (ALL_ONLINE, ALL_OFFLINE, (TargetStatus.COMPROMISED,) * 3):
            for seed in range(5):
                decision = generate_ai_decision(
                    state_with("lateral_movement", statuses), random.Random(seed)
                )
                assert decision.action == LATERAL_MOVEMENT_ACTION
                assert decision.phase == "lateral_movement"
                assert decision.target_name is None

    def test_persistence_is_fixed(self):
        """Test the same action regardless of targets or seed."""
        for statuses in (ALL_ONLINE, ALL_OFFLINE):
            for seed in range(5):
                decision = generate_ai_decision(
                    state_with("persistence", statuses), random.Random(seed)
                )
                assert decision.action == PERSISTENCE_ACTION
                assert decision.phase == "persistence"

    def test_unknown_phase_uses_fallback(self):
        """Test an unrecognized phase gets the generic action tagged with it."""
        decision = generate_ai_decision(state_with("made_up"), random.Random(1))
        assert decision.action == FALLBACK_ACTION
        assert decision.phase == "made_up"
        assert "evaluating available options" in decision.reasoning
