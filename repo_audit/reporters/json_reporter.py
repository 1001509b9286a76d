"""
JSON report generator.

Generates machine-readable JSON reports suitable for integration
with other tools and systems.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from repo_audit.reporters.base import BaseReporter

if TYPE_CHECKING:
    from repo_audit.core.result import AuditReport, AuditWarning, CheckResult


class JSONReporter(BaseReporter):
    """
    Generate JSON format audit reports.

    Output is a single JSON object with:
    - Audit metadata
    - Summary statistics
    - Every warning
    - Checks that failed to run
    """

    @property
    def format_name(self) -> str:
        return "JSON"

    @property
    def file_extension(self) -> str:
        return ".json"

    def __init__(self, pretty: bool = True) -> None:
        """
        Initialize JSON reporter.

        Args:
            pretty: If True, output formatted JSON with indentation
        """
        self.pretty = pretty

    def generate(self, report: "AuditReport") -> str:
        """Generate JSON report."""
        report_data = self._build_report_data(report)

        if self.pretty:
            return json.dumps(report_data, indent=2, default=str, ensure_ascii=False)
        return json.dumps(report_data, default=str, ensure_ascii=False)

    def _build_report_data(self, report: "AuditReport") -> dict[str, Any]:
        """Build the report data structure."""
        return {
            "schema_version": "1.0",
            "audit": {
                "started_at": report.started_at.isoformat(),
                "completed_at": report.completed_at.isoformat() if report.completed_at else None,
                "duration_seconds": report.duration_seconds,
                "tool_version": report.tool_version,
                "server_version": report.server_version,
                "repositories": [str(r) for r in report.repositories],
            },
            "summary": {
                "repositories_audited": len(report.repositories),
                "total_warnings": len(report.warnings),
                "warning_counts": report.warning_counts,
                "checks_run": len(report.check_results),
                "checks_failed": len(report.failed_checks),
            },
            "warnings": [self._format_warning(w) for w in report.warnings],
            "failed_checks": [self._format_check_result(r) for r in report.failed_checks],
        }

    def _format_warning(self, warning: "AuditWarning") -> dict[str, Any]:
        data = warning.to_dict()
        data["message"] = self._sanitize_text(warning.message)
        return data

    def _format_check_result(self, result: "CheckResult") -> dict[str, Any]:
        return {
            "type": result.check_type,
            "owner": result.owner,
            "name": result.repo,
            "duration_ms": round(result.duration_ms, 2),
            "error": self._sanitize_text(result.error.message if result.error else None),
        }
