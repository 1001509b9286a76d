"""GitHub API access."""

from repo_audit.github.client import GitHubClient, graphql_url_for, repo_path

__all__ = [
    "GitHubClient",
    "graphql_url_for",
    "repo_path",
]
