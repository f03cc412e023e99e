"""
CYBERK - JSON Output Formatter
==============================
Export threat reports to JSON.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional, Union

from cyberk.report.generator import ThreatReport

REPORT_PREFIX = "cyberk-report"


def report_filename(day: Optional[date] = None) -> str:
    """Download name for a report: cyberk-report-YYYY-MM-DD.json"""
    day = day or date.today()
    return f"{REPORT_PREFIX}-{day.isoformat()}.json"


class JSONFormatter:
    """
    Format threat reports as JSON.

    Output is machine-readable and suitable for archiving a session or
    feeding it to other tooling.
    """

    def __init__(self, pretty: bool = True):
        """
        Initialize the JSON formatter.

        Args:
            pretty: Whether to format with indentation (default True)
        """
        self.pretty = pretty

    def format(self, report: ThreatReport) -> str:
        """Serialize `report` to a JSON string."""
        if self.pretty:
            return json.dumps(report.to_dict(), indent=2, default=str)
        return json.dumps(report.to_dict(), default=str)

    def save(
        self,
        report: ThreatReport,
        output_dir: Union[str, Path] = ".",
        filename: Optional[str] = None,
    ) -> Path:
        """
        Write `report` into `output_dir`.

        Args:
            report: Report to export
            output_dir: Directory to write into (created if missing)
            filename: Override the dated default name

        Returns:
            Path of the written file
        """
        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / (filename or report_filename(report.generated_at.date()))
        path.write_text(self.format(report))
        return path
