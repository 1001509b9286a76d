"""
gh-repo-audit

Audits GitHub repositories for configuration that lives outside Git:
rulesets, discussions, Git LFS objects, webhooks, Actions variables, and
Actions, Codespaces and Dependabot secrets.
"""

from typing import Final

__version__: Final[str] = "1.0.0"

# Public API exports
from repo_audit.auth import AuthConfig, create_auth_config
from repo_audit.core.auditor import audit_repositories, audit_repository
from repo_audit.core.result import AuditWarning, NameWithOwner
from repo_audit.github.client import GitHubClient

__all__ = [
    "__version__",
    "AuthConfig",
    "AuditWarning",
    "GitHubClient",
    "NameWithOwner",
    "audit_repositories",
    "audit_repository",
    "create_auth_config",
]
