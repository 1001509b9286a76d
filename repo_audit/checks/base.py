"""
Abstract base class for repository checks.

Defines the interface that all checks must implement and the context
each check receives. Checks are read-only: they may call the API but
must never change anything on the audited repository.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from repo_audit.core.result import AuditorWarning
from repo_audit.utils.version import supports_feature

if TYPE_CHECKING:
    from repo_audit.core.snapshot import RepositorySnapshot
    from repo_audit.github.client import GitHubClient


@dataclass(frozen=True)
class CheckContext:
    """Everything a check may look at for one repository."""

    snapshot: "RepositorySnapshot"
    client: "GitHubClient"
    owner: str
    repo: str
    server_version: str | None
    logger: logging.Logger


class BaseCheck(ABC):
    """
    Abstract base class for repository checks.

    Subclasses must implement:
    - type: Unique label attached to every warning from this check
    - name: Human-readable name
    - description: What the check looks for
    - run: Main check logic

    Subclasses may set ``min_server_version`` to skip GitHub Enterprise
    Server releases that lack the API; ``supported`` honours it.

    Expected absence (feature disabled, endpoint 404) must resolve to no
    warnings. Anything unexpected may raise; the dispatcher contains it.
    """

    # First GHES release with the API; None means github.com only
    min_server_version: str | None = "0.0.0"

    @property
    @abstractmethod
    def type(self) -> str:
        """Unique identifier for this check (e.g., 'repository-webhooks')."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the check."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Description of what this check looks for."""
        ...

    @abstractmethod
    def run(self, context: CheckContext) -> list[AuditorWarning]:
        """
        Run the check against one repository.

        Args:
            context: Snapshot, client and coordinates of the repository

        Returns:
            Warnings found, empty if none
        """
        ...

    def supported(self, context: CheckContext) -> bool:
        """Whether the audited server exposes the API this check needs."""
        if supports_feature(context.server_version, self.min_server_version):
            return True
        context.logger.debug(
            f"Skipping {self.type}: not supported on GitHub Enterprise Server "
            f"{context.server_version}",
            extra={"owner": context.owner, "repo": context.repo},
        )
        return False

    def create_warning(self, message: str) -> AuditorWarning:
        return AuditorWarning(message=message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.type!r})"


class CountingCheck(BaseCheck):
    """
    Check that warns when a REST list endpoint reports any items.

    Subclasses provide the endpoint and the wording; the base class
    handles version gating, 404s, and counting.
    """

    @abstractmethod
    def endpoint(self, context: CheckContext) -> str:
        """REST path to query."""
        ...

    @abstractmethod
    def message(self, count: int) -> str:
        """Warning text for ``count`` (always >= 1) items."""
        ...

    def params(self, context: CheckContext) -> dict[str, Any] | None:
        """Query parameters for the request, if any."""
        return None

    def count(self, response: Any) -> int:
        """Extract the item count. Handles ``total_count`` envelopes and bare lists."""
        if isinstance(response, dict):
            return int(response.get("total_count", 0))
        return len(response)

    def run(self, context: CheckContext) -> list[AuditorWarning]:
        if not self.supported(context):
            return []

        response = context.client.get_or_none(self.endpoint(context), self.params(context))
        if response is None:
            return []

        count = self.count(response)
        if count == 0:
            return []
        return [self.create_warning(self.message(count))]


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``pluralize(1, "webhook")`` -> ``"1 webhook"``; 2 -> ``"2 webhooks"``."""
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"
