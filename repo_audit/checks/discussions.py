"""Repository discussions check, answered from the GraphQL snapshot."""

from __future__ import annotations

from repo_audit.checks.base import BaseCheck, CheckContext, pluralize
from repo_audit.core.result import AuditorWarning

TYPE = "repository-discussions"


class RepositoryDiscussionsCheck(BaseCheck):
    """Warn when the repository has any discussions."""

    @property
    def type(self) -> str:
        return TYPE

    @property
    def name(self) -> str:
        return "Repository Discussions"

    @property
    def description(self) -> str:
        return "Detects repositories with GitHub Discussions content."

    def run(self, context: CheckContext) -> list[AuditorWarning]:
        count = context.snapshot.discussions_total_count
        if count == 0:
            return []
        return [
            self.create_warning(
                f"This repository has {pluralize(count, 'discussion')}. "
                "Discussions are not stored in Git and must be exported separately."
            )
        ]
