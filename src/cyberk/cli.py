#!/usr/bin/env python3
"""
CYBERK CLI
==========

AI Red Team Simulator - educational attack lifecycle walkthrough.

Usage:
    cyberk simulate                    # Automatic run, 10 steps
    cyberk step --count 3              # Manual single steps
    cyberk report -o ./reports         # Run and export JSON report

Examples:
    cyberk simulate --steps 20 --delay 1000 --seed 7
    cyberk targets
"""

import asyncio
import random
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from cyberk import __version__
from cyberk.config import get_settings
from cyberk.core.models import PHASE_ORDER
from cyberk.errors import CyberkError
from cyberk.logging_config import configure_logging
from cyberk.session import SimulationSession
from cyberk.ui.dashboard import (
    SimulationDashboard,
    render_report,
    render_status,
    render_targets,
    render_timeline,
)
from cyberk.utils.helpers import format_phase
from cyberk.utils.logger import logger, setup_logging

app = typer.Typer(
    name="cyberk",
    help="CYBERK - AI Red Team Simulator (educational, fully simulated)",
    add_completion=True,
    rich_markup_mode="rich",
)
console = Console()

PHASE_DESCRIPTIONS = {
    "reconnaissance": "Information gathering",
    "exploitation": "Initial compromise",
    "privilege_escalation": "Gaining higher access",
    "lateral_movement": "Expanding access",
    "persistence": "Maintaining access",
}


def _build_session(
    seed: Optional[int] = None,
    delay: Optional[int] = None,
    placeholder_labels: bool = False,
    verbose: bool = False,
) -> SimulationSession:
    """Session with CLI overrides applied on top of the environment settings."""
    settings = get_settings()
    updates = {}
    if seed is not None:
        updates["random_seed"] = seed
    if delay is not None:
        updates["step_delay_ms"] = delay
    if placeholder_labels:
        updates["label_steps_with_target"] = False
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logging(level=settings.log_level, verbose=verbose)
    configure_logging(debug=settings.debug or verbose)

    return SimulationSession(settings=settings, rng=random.Random(settings.random_seed))


# ============== SIMULATION COMMANDS ==============

@app.command()
def simulate(
    steps: int = typer.Option(
        10, "--steps", "-n", min=1,
        help="Number of automatic steps to run"
    ),
    delay: Optional[int] = typer.Option(
        None, "--delay", "-d",
        help="Delay between steps in ms (1000-10000)"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", "-s",
        help="Random seed for reproducible runs"
    ),
    report: Optional[Path] = typer.Option(
        None, "--report", "-r",
        help="Export a JSON report into this directory when done"
    ),
    live: bool = typer.Option(
        True, "--live/--no-live",
        help="Redraw the dashboard on every step"
    ),
    placeholder_labels: bool = typer.Option(
        False, "--placeholder-labels",
        help="Label steps 'Simulated Target' instead of the chosen target"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Verbose output"
    ),
):
    """
    Run the automatic simulation.

    The engine steps on a fixed interval through reconnaissance,
    exploitation, privilege escalation, lateral movement and persistence.
    """
    logger.banner()
    try:
        with _build_session(seed, delay, placeholder_labels, verbose) as session:
            if live:
                with SimulationDashboard(session.store, console=console):
                    asyncio.run(session.run(steps))
            else:
                asyncio.run(session.run(steps))
                console.print(render_status(session.state))
                console.print(render_timeline(session.state, limit=steps))

            console.print(render_report(session.build_report()))
            if report:
                path = session.export_report(report)
                console.print(f"[green]Report saved: {path}[/green]")

    except KeyboardInterrupt:
        console.print("\n[yellow][!] Interrupted[/yellow]")
        raise typer.Exit(code=130)
    except CyberkError as e:
        console.print(f"[red][!] {e}[/red]")
        raise typer.Exit(code=2)


@app.command()
def step(
    count: int = typer.Option(
        1, "--count", "-n", min=1,
        help="Number of manual steps"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", "-s",
        help="Random seed for reproducible runs"
    ),
    placeholder_labels: bool = typer.Option(
        False, "--placeholder-labels",
        help="Label steps 'Simulated Target' instead of the chosen target"
    ),
):
    """Execute single steps manually and show the resulting state."""
    try:
        with _build_session(seed, placeholder_labels=placeholder_labels) as session:
            for _ in range(count):
                session.step()
            state = session.state
    except CyberkError as e:
        console.print(f"[red][!] {e}[/red]")
        raise typer.Exit(code=2)

    console.print(render_status(state))
    console.print(render_targets(state))
    console.print(render_timeline(state, limit=count))


@app.command()
def report(
    steps: int = typer.Option(
        10, "--steps", "-n", min=0,
        help="Manual steps to run before reporting"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", "-s",
        help="Random seed for reproducible runs"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Output directory for the report (default: CYBERK_REPORT_DIR)"
    ),
):
    """Run a session and export the threat report as JSON."""
    try:
        with _build_session(seed) as session:
            for _ in range(steps):
                session.step()
            path = session.export_report(output)
            threat_report = session.build_report()
    except CyberkError as e:
        console.print(f"[red][!] {e}[/red]")
        raise typer.Exit(code=2)

    console.print(render_report(threat_report))
    console.print(f"[green]Report saved: {path}[/green]")


# ============== UTILITY COMMANDS ==============

@app.command()
def targets():
    """Show the seed network."""
    with _build_session() as session:
        state = session.state
    console.print(render_targets(state))

    table = Table(box=box.ROUNDED)
    table.add_column("Target", style="cyan")
    table.add_column("Port", justify="right")
    table.add_column("Service")
    table.add_column("Version")
    table.add_column("CVE")
    for target in state.targets:
        cves = ", ".join(v.cve for v in target.vulnerabilities)
        for service in target.services:
            table.add_row(target.name, str(service.port), service.name, service.version, cves)
    console.print(table)


@app.command("list-phases")
def list_phases():
    """List the attack phases in order."""
    console.print("[bold]CYBERK Attack Phases[/bold]\n")
    for num, phase in enumerate(PHASE_ORDER, start=1):
        console.print(f"[cyan]Phase {num}:[/cyan] [bold]{format_phase(phase)}[/bold]")
        console.print(f"  {PHASE_DESCRIPTIONS[phase]}\n")


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]CYBERK[/bold] v{__version__}")
    console.print("[dim]AI Red Team Simulator[/dim]")


# ============== ENTRY POINT ==============

def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
