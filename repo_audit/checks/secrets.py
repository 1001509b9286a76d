"""
Repository secrets checks.

GitHub never returns secret values through the API, only their names, so
every secret found here has to be re-entered by someone who knows it.
One check per secret store: Actions, Codespaces, and Dependabot.
"""

from __future__ import annotations

from repo_audit.checks.base import CheckContext, CountingCheck, pluralize
from repo_audit.constants import GHES_MIN_VERSION_DEPENDABOT_SECRETS
from repo_audit.github.client import repo_path


class _RepositorySecretsCheck(CountingCheck):
    """Counts the secrets in one of the repository's secret stores."""

    # URL segment and display name of the secret store
    store: str
    store_name: str

    @property
    def name(self) -> str:
        return f"{self.store_name} Secrets"

    @property
    def description(self) -> str:
        return f"Detects {self.store_name} secrets set on the repository."

    def endpoint(self, context: CheckContext) -> str:
        return repo_path(context.owner, context.repo, self.store, "secrets")

    def message(self, count: int) -> str:
        return (
            f"This repository has {pluralize(count, f'{self.store_name} secret')}. "
            "Secret values cannot be read through the API and must be recreated manually."
        )


class ActionsSecretsCheck(_RepositorySecretsCheck):
    store = "actions"
    store_name = "GitHub Actions"

    @property
    def type(self) -> str:
        return "repository-actions-secrets"


class CodespacesSecretsCheck(_RepositorySecretsCheck):
    store = "codespaces"
    store_name = "Codespaces"

    # Codespaces is not available on GitHub Enterprise Server
    min_server_version = None

    @property
    def type(self) -> str:
        return "repository-codespaces-secrets"


class DependabotSecretsCheck(_RepositorySecretsCheck):
    store = "dependabot"
    store_name = "Dependabot"

    min_server_version = GHES_MIN_VERSION_DEPENDABOT_SECRETS

    @property
    def type(self) -> str:
        return "repository-dependabot-secrets"
