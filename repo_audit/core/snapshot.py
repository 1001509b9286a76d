"""Minimal per-repository data fetched once and shared by every check."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from repo_audit.constants import REPOSITORY_SNAPSHOT_QUERY
from repo_audit.exceptions import GraphQLError

if TYPE_CHECKING:
    from repo_audit.github.client import GitHubClient


@dataclass(frozen=True)
class RepositorySnapshot:
    """Repository identity plus the discussion count."""

    id: str
    discussions_total_count: int

    @classmethod
    def from_graphql(cls, repository: dict[str, Any]) -> "RepositorySnapshot":
        return cls(
            id=repository["id"],
            discussions_total_count=repository["discussions"]["totalCount"],
        )


def get_repository_with_graphql(
    owner: str,
    name: str,
    client: "GitHubClient",
) -> RepositorySnapshot:
    """
    Fetch the snapshot for ``owner/name`` with a single GraphQL query.

    Client errors propagate unchanged. GitHub answers a query for an
    unknown repository with an ``errors`` payload, which the client raises
    as ``GraphQLError``; a null ``repository`` without errors is treated
    the same way.
    """
    data = client.graphql(REPOSITORY_SNAPSHOT_QUERY, {"owner": owner, "name": name})
    repository = data.get("repository")
    if repository is None:
        raise GraphQLError(
            f"Could not resolve to a Repository with the name '{owner}/{name}'.",
        )
    return RepositorySnapshot.from_graphql(repository)
