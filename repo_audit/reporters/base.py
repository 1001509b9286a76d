"""
Abstract base class for report generators.

Provides common functionality for all report types including
output sanitization and file writing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from repo_audit.exceptions import ReportError, ValidationError
from repo_audit.logging_config import get_logger
from repo_audit.utils.file_utils import safe_write_file
from repo_audit.utils.sanitizer import sanitize_for_display

if TYPE_CHECKING:
    from repo_audit.core.result import AuditReport

logger = get_logger("reporters")


class BaseReporter(ABC):
    """
    Abstract base class for report generators.

    Subclasses must implement:
    - format_name: Name of the output format
    - file_extension: File extension for output
    - generate: Main report generation logic
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the report format (e.g., 'CSV', 'Markdown')."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension for output files (e.g., '.csv')."""
        ...

    @abstractmethod
    def generate(self, report: "AuditReport") -> str:
        """
        Generate the report content.

        Args:
            report: Audit report to render

        Returns:
            Report content as string
        """
        ...

    def write(self, report: "AuditReport", output_path: Path) -> Path:
        """
        Generate and write report to file.

        Args:
            report: Audit report to render
            output_path: Directory or file path for output

        Returns:
            Path to the written report file

        Raises:
            ReportError: If generating or writing fails
        """
        if output_path.is_dir():
            file_path = output_path / f"gh-repo-audit{self.file_extension}"
        else:
            file_path = output_path

        try:
            content = self.generate(report)
        except Exception as e:
            raise ReportError(
                f"Failed to generate {self.format_name} report: {e}"
            ) from e

        try:
            written = safe_write_file(file_path, content)
        except (OSError, ValidationError) as e:
            raise ReportError(
                f"Failed to write report to {file_path}: {e}"
            ) from e

        logger.info(f"{self.format_name} report written to: {written}")
        return written

    def _sanitize_text(self, text: str | None) -> str:
        """Truncate long values and redact anything that looks like a credential."""
        return sanitize_for_display(text)
