"""
Markdown report generator.

Generates human-readable Markdown reports suitable for documentation,
GitHub issues, or wiki pages.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from repo_audit.reporters.base import BaseReporter

if TYPE_CHECKING:
    from repo_audit.core.result import AuditReport


class MarkdownReporter(BaseReporter):
    """
    Generate Markdown format audit reports.

    Output is a Markdown document with:
    - Summary of warnings per check type
    - Warnings grouped by repository
    - Checks that failed to run
    """

    @property
    def format_name(self) -> str:
        return "Markdown"

    @property
    def file_extension(self) -> str:
        return ".md"

    def generate(self, report: "AuditReport") -> str:
        """Generate Markdown report."""
        lines: list[str] = []

        lines.extend(self._generate_header(report))
        lines.extend(self._generate_summary(report))

        if report.warnings:
            lines.extend(self._generate_warnings_section(report))
        else:
            lines.append("## ✅ No Warnings\n")
            lines.append("None of the audited repositories triggered a warning.\n")

        if report.failed_checks:
            lines.extend(self._generate_failed_checks(report))

        lines.extend(self._generate_footer(report))

        return "\n".join(lines)

    def _generate_header(self, report: "AuditReport") -> list[str]:
        lines = [
            "# Repository Audit Report\n",
            f"**Date:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n",
            f"**Repositories:** {len(report.repositories)}\n",
        ]
        if report.server_version:
            lines.append(f"**GitHub Enterprise Server:** {report.server_version}\n")
        lines.extend(["", "---\n"])
        return lines

    def _generate_summary(self, report: "AuditReport") -> list[str]:
        lines = [
            "## Summary\n",
            "| Check | Warnings |",
            "|-------|----------|",
        ]
        for check_type, count in report.warning_counts.items():
            lines.append(f"| `{check_type}` | {count} |")

        lines.append("")
        lines.append(f"**Total Warnings:** {len(report.warnings)}\n")
        return lines

    def _generate_warnings_section(self, report: "AuditReport") -> list[str]:
        lines = ["## Warnings\n"]

        for repository in report.repositories:
            warnings = report.warnings_for(repository)
            if not warnings:
                continue

            lines.append(f"### {repository}\n")
            for warning in warnings:
                lines.append(f"- **{warning.type}**: {self._sanitize_text(warning.message)}")
            lines.append("")

        return lines

    def _generate_failed_checks(self, report: "AuditReport") -> list[str]:
        lines = [
            "## ⚠️ Checks That Failed To Run\n",
            "A failed check produces no warnings, so these repositories may "
            "have issues this report does not show.\n",
            "| Repository | Check | Error |",
            "|------------|-------|-------|",
        ]
        for result in report.failed_checks:
            error = self._sanitize_text(result.error.message if result.error else "")
            error = error.replace("|", "\\|")
            lines.append(
                f"| {result.name_with_owner} | `{result.check_type}` | "
                f"{error} |"
            )
        lines.append("")
        return lines

    def _generate_footer(self, report: "AuditReport") -> list[str]:
        lines = [
            "---\n",
            f"*Generated by gh-repo-audit v{report.tool_version}*\n",
        ]

        if report.duration_seconds:
            lines.append(f"*Audit duration: {report.duration_seconds:.2f} seconds*\n")

        return lines
