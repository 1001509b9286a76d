"""GitHub Actions configuration checks."""

from __future__ import annotations

from repo_audit.checks.base import CheckContext, CountingCheck, pluralize
from repo_audit.constants import GHES_MIN_VERSION_ACTIONS_VARIABLES
from repo_audit.github.client import repo_path

TYPE = "repository-actions-variables"


class ActionsVariablesCheck(CountingCheck):
    """Warn when the repository defines Actions configuration variables."""

    min_server_version = GHES_MIN_VERSION_ACTIONS_VARIABLES

    @property
    def type(self) -> str:
        return TYPE

    @property
    def name(self) -> str:
        return "Actions Variables"

    @property
    def description(self) -> str:
        return "Detects GitHub Actions configuration variables set on the repository."

    def endpoint(self, context: CheckContext) -> str:
        return repo_path(context.owner, context.repo, "actions", "variables")

    def message(self, count: int) -> str:
        return (
            f"This repository has {pluralize(count, 'GitHub Actions variable')}. "
            "Variables are not stored in Git and must be recreated manually."
        )
