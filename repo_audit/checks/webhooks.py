"""Repository webhooks check."""

from __future__ import annotations

from repo_audit.checks.base import BaseCheck, CheckContext, pluralize
from repo_audit.constants import DEFAULT_PER_PAGE
from repo_audit.core.result import AuditorWarning
from repo_audit.github.client import repo_path

TYPE = "repository-webhooks"


class RepositoryWebhooksCheck(BaseCheck):
    """Warn when the repository has webhooks configured."""

    @property
    def type(self) -> str:
        return TYPE

    @property
    def name(self) -> str:
        return "Repository Webhooks"

    @property
    def description(self) -> str:
        return "Detects webhooks configured on the repository."

    def run(self, context: CheckContext) -> list[AuditorWarning]:
        hooks = context.client.get_or_none(
            repo_path(context.owner, context.repo, "hooks"),
            {"per_page": DEFAULT_PER_PAGE},
        )
        if not hooks:
            return []

        message = (
            f"This repository has {pluralize(len(hooks), 'webhook')} configured. "
            "Webhook secrets cannot be read back through the API and must be "
            "re-entered wherever the webhooks are recreated."
        )
        active = sum(1 for hook in hooks if hook.get("active", True))
        if active != len(hooks):
            message += f" {active} of them {'is' if active == 1 else 'are'} active."
        return [self.create_warning(message)]
