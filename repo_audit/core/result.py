"""
Audit result data structures.

Warnings are immutable and gain labels as they travel upwards: a check
emits an ``AuditorWarning``, the dispatcher tags it with the check type,
and the batch auditor tags it with the repository it came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from repo_audit.exceptions import CheckExecutionError, ValidationError


@dataclass(frozen=True)
class NameWithOwner:
    """A repository coordinate, e.g. ``octo-org/octo-repo``."""

    owner: str
    name: str

    def __post_init__(self) -> None:
        if not self.owner or not self.name:
            raise ValidationError("Repository owner and name cannot be empty")

    @classmethod
    def from_string(cls, value: str) -> "NameWithOwner":
        """
        Parse an ``owner/name`` string.

        Raises:
            ValidationError: If the string is not exactly two non-empty parts
        """
        parts = value.strip().split("/")
        if len(parts) != 2 or not all(part.strip() for part in parts):
            raise ValidationError(
                "Repository must be given as owner/name",
                field="repository",
                value=value,
            )
        return cls(owner=parts[0].strip(), name=parts[1].strip())

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class AuditorWarning:
    """A finding as emitted by a single check."""

    message: str

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("message cannot be empty")

    def with_type(self, check_type: str) -> "RepositoryAuditWarning":
        return RepositoryAuditWarning(message=self.message, type=check_type)


@dataclass(frozen=True)
class RepositoryAuditWarning:
    """A finding labelled with the check type that produced it."""

    message: str
    type: str

    def for_repository(self, owner: str, name: str) -> "AuditWarning":
        return AuditWarning(message=self.message, type=self.type, name=name, owner=owner)


@dataclass(frozen=True)
class AuditWarning:
    """A fully labelled finding: message, check type, and repository."""

    message: str
    type: str
    name: str
    owner: str

    @property
    def name_with_owner(self) -> str:
        return f"{self.owner}/{self.name}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "owner": self.owner,
            "name": self.name,
            "type": self.type,
            "message": self.message,
        }


@dataclass
class CheckResult:
    """
    Outcome of running one check against one repository.

    Either the check succeeded (``error`` is None, ``warnings`` holds what
    it found, possibly nothing) or it failed (``error`` holds the wrapped
    exception and ``warnings`` is empty). This keeps "passed" and
    "crashed" distinguishable even though both contribute no warnings.
    """

    check_type: str
    owner: str
    repo: str
    warnings: list[RepositoryAuditWarning] = field(default_factory=list)
    error: CheckExecutionError | None = None
    duration_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def name_with_owner(self) -> str:
        return f"{self.owner}/{self.repo}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "check_type": self.check_type,
            "owner": self.owner,
            "name": self.repo,
            "succeeded": self.succeeded,
            "warning_count": len(self.warnings),
            "duration_ms": self.duration_ms,
            "error": self.error.message if self.error else None,
        }


@dataclass
class AuditReport:
    """
    Everything the CLI hands to a reporter.

    Contains the audited repositories, the flat warning list, and the
    per-check results collected while the audit ran.
    """

    repositories: list[NameWithOwner] = field(default_factory=list)
    warnings: list[AuditWarning] = field(default_factory=list)
    check_results: list[CheckResult] = field(default_factory=list)

    server_version: str | None = None
    tool_version: str = "0.0.0"

    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None

    @property
    def duration_seconds(self) -> float | None:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def failed_checks(self) -> list[CheckResult]:
        return [r for r in self.check_results if not r.succeeded]

    @property
    def warning_counts(self) -> dict[str, int]:
        """Count warnings by check type, in first-seen order."""
        counts: dict[str, int] = {}
        for warning in self.warnings:
            counts[warning.type] = counts.get(warning.type, 0) + 1
        return counts

    def warnings_for(self, repository: NameWithOwner) -> list[AuditWarning]:
        return [
            w for w in self.warnings
            if w.owner == repository.owner and w.name == repository.name
        ]

    def add_check_result(self, result: CheckResult) -> None:
        self.check_results.append(result)

    def complete(self) -> None:
        """Mark the audit as complete."""
        self.completed_at = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "tool_version": self.tool_version,
            "server_version": self.server_version,
            "summary": {
                "repositories": len(self.repositories),
                "total_warnings": len(self.warnings),
                "warning_counts": self.warning_counts,
                "failed_checks": len(self.failed_checks),
            },
            "warnings": [w.to_dict() for w in self.warnings],
            "failed_checks": [r.to_dict() for r in self.failed_checks],
        }
