"""
Repository rulesets check.

Rulesets are configured on the repository itself rather than stored in
Git, so they need separate attention. Organization-level rulesets that
merely apply to the repository are not counted here.
"""

from __future__ import annotations

from typing import Any

from repo_audit.checks.base import CheckContext, CountingCheck, pluralize
from repo_audit.constants import DEFAULT_PER_PAGE, GHES_MIN_VERSION_RULESETS
from repo_audit.github.client import repo_path

TYPE = "repository-rulesets"


class RepositoryRulesetsCheck(CountingCheck):
    """Warn when the repository defines its own rulesets."""

    min_server_version = GHES_MIN_VERSION_RULESETS

    @property
    def type(self) -> str:
        return TYPE

    @property
    def name(self) -> str:
        return "Repository Rulesets"

    @property
    def description(self) -> str:
        return "Detects rulesets (branch and tag protection rules) defined on the repository."

    def endpoint(self, context: CheckContext) -> str:
        return repo_path(context.owner, context.repo, "rulesets")

    def params(self, context: CheckContext) -> dict[str, Any] | None:
        return {"includes_parents": "false", "per_page": DEFAULT_PER_PAGE}

    def message(self, count: int) -> str:
        return (
            f"This repository has {pluralize(count, 'ruleset')} configured. "
            "Rulesets are not stored in Git and must be recreated manually."
        )
