"""
CYBERK - Terminal Dashboard
===========================
Rich views over the simulation state: engine status, network targets,
attack timeline and the threat report summary. Views only read the
store; they never dispatch.
"""

from typing import Optional

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cyberk.core.models import SimulationState, TargetStatus
from cyberk.core.store import SimulationStore, require_store
from cyberk.report.generator import ThreatReport, group_by_phase
from cyberk.utils.helpers import format_phase

COLORS = {
    "critical": "#dc3545",
    "high": "#fd7e14",
    "medium": "#ffc107",
    "low": "#28a745",
    "brand": "#10b981",
    "muted": "#6c757d",
}

STATUS_STYLES = {
    TargetStatus.ONLINE: "green",
    TargetStatus.COMPROMISED: "bold red",
    TargetStatus.OFFLINE: "dim",
}

RESULT_STYLES = {
    "success": "green",
    "failure": "red",
    "partial": "yellow",
}

RISK_STYLES = {
    "HIGH": "bold red",
    "MEDIUM": "bold #fd7e14",
    "LOW": "bold green",
}


def render_status(state: SimulationState) -> Panel:
    """Engine status: phase, running flag, compromise count, latest reasoning."""
    running = "[green]Processing[/green]" if state.is_running else "[dim]Idle[/dim]"
    text = (
        f"[bold]Phase:[/bold] {format_phase(state.current_phase)} | "
        f"[bold]Status:[/bold] {running} | "
        f"[bold]Compromised:[/bold] [red]{len(state.compromised_targets)}[/red] | "
        f"[bold]Steps:[/bold] {len(state.attack_steps)}\n"
        f"[bold]AI:[/bold] {state.ai_decision}"
    )
    return Panel(text, title="AI Simulation Engine", box=ROUNDED, border_style="dim")


def render_targets(state: SimulationState) -> Panel:
    """Network topology table. Service and CVE detail lives in `cyberk targets`."""
    table = Table(show_header=True, header_style="bold", box=ROUNDED, expand=True)
    table.add_column("Target")
    table.add_column("IP", no_wrap=True, min_width=15)
    table.add_column("OS")
    table.add_column("Status", no_wrap=True, min_width=11)
    table.add_column("Steps", justify="right")

    for target in state.targets:
        style = STATUS_STYLES.get(target.status, "white")
        table.add_row(
            target.name,
            target.ip,
            target.os,
            f"[{style}]{target.status.value.upper()}[/]",
            str(len(state.steps_for_target(target.name))),
        )

    compromised = len(state.targets_with_status(TargetStatus.COMPROMISED))
    return Panel(
        table,
        title=f"Network ({len(state.targets)} targets, {compromised} compromised)",
        border_style="dim",
    )


def render_timeline(state: SimulationState, limit: int = 10) -> Panel:
    """Most recent attack steps, grouped by phase."""
    table = Table(show_header=True, header_style="bold", box=ROUNDED, expand=True)
    table.add_column("Time", width=8)
    table.add_column("Phase", width=20)
    table.add_column("Action")
    table.add_column("Target", width=20)
    table.add_column("Result", width=8)
    table.add_column("MITRE", width=6)

    recent = state.attack_steps[-limit:]
    if not recent:
        table.add_row("[dim]No attack steps yet...[/dim]", "", "", "", "", "")
    for phase, steps in group_by_phase(recent).items():
        for step in steps:
            style = RESULT_STYLES.get(step.result.value, "white")
            table.add_row(
                step.timestamp.strftime("%H:%M:%S"),
                format_phase(phase),
                step.action,
                step.target,
                f"[{style}]{step.result.value}[/]",
                step.mitre_id or "",
            )

    return Panel(table, title="Attack Timeline", border_style="dim")


def render_report(report: ThreatReport) -> Panel:
    """Summary block of a threat report."""
    s = report.summary
    risk_style = RISK_STYLES.get(s.risk_level, "white")

    lines = Text.from_markup(
        f"[bold]Risk:[/bold] [{risk_style}]{s.risk_level}[/]\n"
        f"Targets: {s.total_targets} | Compromised: {s.compromised_targets} | "
        f"Vulnerabilities: {s.vulnerabilities} "
        f"([{COLORS['critical']}]{s.critical_vulnerabilities} critical[/], "
        f"[{COLORS['high']}]{s.high_vulnerabilities} high[/])\n"
        f"Steps: {s.total_attack_steps} | Successful: {s.successful_attacks} | "
        f"Failed: {s.failed_attacks} | Success rate: {s.success_rate}%"
    )

    phases = Table(show_header=False, box=None)
    for phase, status in report.phase_status.items():
        phases.add_row(format_phase(phase), status)

    return Panel(
        Group(lines, "", phases),
        title="Threat Report",
        border_style=COLORS["brand"],
        box=ROUNDED,
    )


class SimulationDashboard:
    """
    Live terminal dashboard that redraws on every state change.

    Usage:
        with SimulationDashboard(store):
            await stepper.run_for(10)
    """

    def __init__(self, store: SimulationStore, console: Optional[Console] = None):
        self.store = require_store(store, "SimulationDashboard")
        self.console = console or Console()
        self.live: Optional[Live] = None
        self._unsubscribe = None

    def render(self) -> Panel:
        state = self.store.state
        return Panel(
            Group(
                render_status(state),
                render_targets(state),
                render_timeline(state),
            ),
            title="[bold white]CYBERK[/bold white]",
            border_style=COLORS["brand"],
            box=ROUNDED,
        )

    def __enter__(self):
        self.live = Live(
            self.render(),
            console=self.console,
            refresh_per_second=4,
            transient=False,
        )
        self.live.__enter__()
        self._unsubscribe = self.store.subscribe(self._refresh)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        if self.live:
            self.live.update(self.render())
            self.live.__exit__(exc_type, exc_val, exc_tb)
            self.live = None

    def _refresh(self, new, old):
        if self.live:
            self.live.update(self.render())
