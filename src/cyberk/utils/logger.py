"""
CYBERK - Logging System

Provides logging with Rich formatting for terminal output. Helper
messages carry theme markup; the file handler writes them as plain text.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.errors import MarkupError
from rich.logging import RichHandler
from rich.markup import escape
from rich.text import Text
from rich.theme import Theme

CYBERK_THEME = Theme({
    "decision": "cyan dim",
    "attack": "blue",
    "success": "green bold",
    "fail": "yellow",
    "compromise": "magenta bold",
    "phase": "cyan bold",
})

console = Console(theme=CYBERK_THEME)


class PlainFormatter(logging.Formatter):
    """Formatter that strips Rich markup so log files stay readable."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        try:
            return Text.from_markup(line).plain
        except MarkupError:
            # Not valid markup; keep the line as written
            return line


class SimLogger(logging.Logger):
    """Logger with simulation-specific helpers."""

    def __init__(self, name: str, level: int = logging.DEBUG):
        super().__init__(name, level)
        self._phase = "reconnaissance"

    def decision(self, reasoning: str):
        """Log the reasoning published by the decision engine."""
        self.debug(f"[decision]{escape(self._phase)} decision:[/] {escape(reasoning)}")

    def attack_start(self, action: str, target: str):
        """Log the start of a simulated action."""
        self.debug(f"[attack]ATTACK[/] {escape(action)} -> {escape(target)}")

    def attack_success(self, action: str, mitre_id: str = ""):
        """Log a successful simulated action."""
        suffix = f" ({mitre_id})" if mitre_id else ""
        self.info(f"[success]SUCCESS[/] {escape(action)}{suffix}")

    def attack_fail(self, action: str):
        """Log a failed simulated action."""
        self.info(f"[fail]FAIL[/] {escape(action)} - adapting strategy")

    def compromise(self, target_name: str, target_id: str):
        """Log a target transitioning to compromised."""
        self.warning(f"[compromise]COMPROMISED[/] {escape(target_name)} {escape(f'[{target_id}]')}")

    def phase_start(self, phase: str):
        """Log a phase transition."""
        self._phase = phase
        self.info(f"[phase]Phase -> {escape(phase)}[/]")

    def banner(self):
        """Print the CYBERK banner."""
        banner = """
[bold red]
  ██████╗██╗   ██╗██████╗ ███████╗██████╗ ██╗  ██╗
 ██╔════╝╚██╗ ██╔╝██╔══██╗██╔════╝██╔══██╗██║ ██╔╝
 ██║      ╚████╔╝ ██████╔╝█████╗  ██████╔╝█████╔╝
 ██║       ╚██╔╝  ██╔══██╗██╔══╝  ██╔══██╗██╔═██╗
 ╚██████╗   ██║   ██████╔╝███████╗██║  ██║██║  ██╗
  ╚═════╝   ╚═╝   ╚═════╝ ╚══════╝╚═╝  ╚═╝╚═╝  ╚═╝
[/bold red]
[dim]AI Red Team Simulator[/dim]
[dim]Educational use only. Every target is fictitious.[/dim]
"""
        console.print(banner)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    verbose: bool = False
) -> SimLogger:
    """
    Set up logging for CYBERK.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for log output
        verbose: Enable verbose debug output
    """
    logging.setLoggerClass(SimLogger)

    sim_logger = logging.getLogger("cyberk")
    sim_logger.__class__ = SimLogger
    if not hasattr(sim_logger, "_phase"):
        sim_logger._phase = "reconnaissance"

    sim_logger.handlers.clear()

    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    sim_logger.setLevel(log_level)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
    )
    rich_handler.setLevel(log_level)
    rich_handler.setFormatter(logging.Formatter("%(message)s"))
    sim_logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(PlainFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        ))
        sim_logger.addHandler(file_handler)

    return sim_logger


# Default logger instance
logger: SimLogger = setup_logging()
