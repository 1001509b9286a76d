"""Core audit data structures and snapshot fetching."""

from repo_audit.core.result import (
    AuditReport,
    AuditWarning,
    AuditorWarning,
    CheckResult,
    NameWithOwner,
    RepositoryAuditWarning,
)
from repo_audit.core.snapshot import RepositorySnapshot, get_repository_with_graphql

__all__ = [
    "AuditReport",
    "AuditWarning",
    "AuditorWarning",
    "CheckResult",
    "NameWithOwner",
    "RepositoryAuditWarning",
    "RepositorySnapshot",
    "get_repository_with_graphql",
]
