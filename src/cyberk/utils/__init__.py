"""CYBERK utilities."""

from cyberk.utils.helpers import format_phase, generate_id, generate_step_id
from cyberk.utils.logger import console, logger, setup_logging

__all__ = [
    "console",
    "format_phase",
    "generate_id",
    "generate_step_id",
    "logger",
    "setup_logging",
]
