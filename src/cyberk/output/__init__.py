"""
CYBERK - Output Formatters
==========================
Export threat reports.
"""

from .json_formatter import JSONFormatter, report_filename

__all__ = [
    "JSONFormatter",
    "report_filename",
]
