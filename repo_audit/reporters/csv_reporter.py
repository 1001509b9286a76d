"""
CSV report generator.

One row per warning with ``owner,name,type,message`` columns, suitable
for spreadsheets and for feeding back into other tooling.
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING

from repo_audit.constants import CSV_COLUMNS
from repo_audit.reporters.base import BaseReporter

if TYPE_CHECKING:
    from repo_audit.core.result import AuditReport


class CSVReporter(BaseReporter):
    """Generate CSV format audit reports."""

    @property
    def format_name(self) -> str:
        return "CSV"

    @property
    def file_extension(self) -> str:
        return ".csv"

    def generate(self, report: "AuditReport") -> str:
        """Generate CSV report."""
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, lineterminator="\n")
        writer.writeheader()

        for warning in report.warnings:
            row = warning.to_dict()
            row["message"] = self._sanitize_text(row["message"])
            writer.writerow(row)

        return buffer.getvalue()
