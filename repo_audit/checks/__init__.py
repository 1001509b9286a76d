"""Repository checks and the default check registry."""

from repo_audit.checks.base import BaseCheck, CheckContext, CountingCheck
from repo_audit.checks.rulesets import RepositoryRulesetsCheck
from repo_audit.checks.discussions import RepositoryDiscussionsCheck
from repo_audit.checks.git_lfs import GitLFSObjectsCheck
from repo_audit.checks.webhooks import RepositoryWebhooksCheck
from repo_audit.checks.actions import ActionsVariablesCheck
from repo_audit.checks.secrets import (
    ActionsSecretsCheck,
    CodespacesSecretsCheck,
    DependabotSecretsCheck,
)

# Order determines warning order within a repository
DEFAULT_CHECKS: tuple[BaseCheck, ...] = (
    RepositoryRulesetsCheck(),
    RepositoryDiscussionsCheck(),
    GitLFSObjectsCheck(),
    RepositoryWebhooksCheck(),
    ActionsVariablesCheck(),
    ActionsSecretsCheck(),
    CodespacesSecretsCheck(),
    DependabotSecretsCheck(),
)

__all__ = [
    "BaseCheck",
    "CheckContext",
    "CountingCheck",
    "DEFAULT_CHECKS",
    "RepositoryRulesetsCheck",
    "RepositoryDiscussionsCheck",
    "GitLFSObjectsCheck",
    "RepositoryWebhooksCheck",
    "ActionsVariablesCheck",
    "ActionsSecretsCheck",
    "CodespacesSecretsCheck",
    "DependabotSecretsCheck",
]
