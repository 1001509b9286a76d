"""Report generators module."""

from repo_audit.exceptions import ReportError
from repo_audit.reporters.base import BaseReporter
from repo_audit.reporters.csv_reporter import CSVReporter
from repo_audit.reporters.json_reporter import JSONReporter
from repo_audit.reporters.markdown_reporter import MarkdownReporter

REPORTERS: dict[str, type[BaseReporter]] = {
    "csv": CSVReporter,
    "json": JSONReporter,
    "markdown": MarkdownReporter,
}


def get_reporter(format: str) -> BaseReporter:
    """Return a reporter instance for ``csv``, ``json`` or ``markdown``."""
    try:
        return REPORTERS[format]()
    except KeyError:
        raise ReportError(f"Unknown report format: {format}") from None


__all__ = [
    "BaseReporter",
    "CSVReporter",
    "JSONReporter",
    "MarkdownReporter",
    "REPORTERS",
    "get_reporter",
]
