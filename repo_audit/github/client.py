"""
Thin wrapper over PyGithub exposing the two surfaces checks need.

- ``graphql(query, variables)`` for the repository snapshot
- ``get(path)`` / ``get_or_none(path)`` for REST endpoints

Retries on transient failures and secondary rate limits are PyGithub's
job (``GithubRetry``); nothing here retries or caches.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from github import Github, GithubException, GithubRetry

from repo_audit.constants import (
    DEFAULT_API_URL,
    GHES_GRAPHQL_PATH_SUFFIX,
    GHES_REST_PATH_SUFFIX,
)
from repo_audit.exceptions import GitHubAPIError, GraphQLError
from repo_audit.logging_config import get_logger
from repo_audit.utils.sanitizer import sanitize_for_log

if TYPE_CHECKING:
    from repo_audit.auth import AuthConfig
    from repo_audit.config import GitHubConfig

logger = get_logger("github")


def graphql_url_for(api_url: str) -> str:
    """
    Derive the GraphQL endpoint from a REST API base URL.

    ``https://api.github.com`` becomes ``https://api.github.com/graphql``;
    a GHES ``https://ghe.example.com/api/v3`` becomes
    ``https://ghe.example.com/api/graphql``.
    """
    base = api_url.rstrip("/")
    if base.endswith(GHES_REST_PATH_SUFFIX):
        return base[: -len(GHES_REST_PATH_SUFFIX)] + GHES_GRAPHQL_PATH_SUFFIX
    return base + "/graphql"


def repo_path(owner: str, repo: str, *segments: str) -> str:
    """Build ``/repos/{owner}/{repo}/...`` with each part URL-quoted."""
    parts = [quote(owner, safe=""), quote(repo, safe="")]
    parts.extend(quote(segment, safe="/") for segment in segments)
    return "/repos/" + "/".join(parts)


class GitHubClient:
    """
    GitHub API client used by the snapshot fetcher and every check.

    Example:
        auth_config = create_auth_config(auth_type="token")
        client = GitHubClient.from_auth_config(auth_config, GitHubConfig())
        client.get_or_none(repo_path("octo-org", "octo-repo", "hooks"))
    """

    def __init__(self, github: Github, api_url: str = DEFAULT_API_URL) -> None:
        """
        Initialize the client.

        Args:
            github: Authenticated PyGithub instance
            api_url: REST base URL the instance was created with
        """
        self._github = github
        self.api_url = api_url.rstrip("/")
        self.graphql_url = graphql_url_for(self.api_url)

    @classmethod
    def from_auth_config(
        cls,
        auth_config: "AuthConfig",
        github_config: "GitHubConfig",
    ) -> "GitHubClient":
        """Create a client from resolved credentials and connection settings."""
        github = Github(
            auth=auth_config.build_auth(),
            base_url=github_config.api_url,
            timeout=github_config.timeout_seconds,
            per_page=github_config.per_page,
            retry=GithubRetry(total=github_config.max_retries),
            verify=github_config.verify_ssl,
        )
        return cls(github, api_url=github_config.api_url)

    @property
    def is_github_com(self) -> bool:
        return self.api_url == DEFAULT_API_URL

    def graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """
        Run a GraphQL query and return its ``data`` object.

        Raises:
            GraphQLError: On transport failure or an ``errors`` payload
        """
        try:
            _, payload = self._github.requester.requestJsonAndCheck(
                "POST",
                self.graphql_url,
                input={"query": query, "variables": variables},
            )
        except GithubException as e:
            raise GraphQLError(_exception_message(e), status=e.status) from e

        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            messages = "; ".join(str(error.get("message", error)) for error in errors)
            raise GraphQLError(messages, details={"error_count": len(errors)})

        return payload.get("data") or {}

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a REST endpoint and return its decoded JSON body.

        Raises:
            GitHubAPIError: On any non-success response
        """
        logger.debug(f"GET {sanitize_for_log(path)}")
        try:
            _, data = self._github.requester.requestJsonAndCheck(
                "GET", path, parameters=params
            )
        except GithubException as e:
            raise GitHubAPIError(_exception_message(e), status=e.status) from e
        return data

    def get_or_none(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Like ``get`` but returns None when the endpoint answers 404."""
        try:
            return self.get(path, params)
        except GitHubAPIError as e:
            if e.is_not_found:
                return None
            raise

    def get_server_version(self) -> str | None:
        """
        Return the GitHub Enterprise Server version, or None on github.com.

        GHES reports its version as ``installed_version`` on ``GET /meta``.
        """
        if self.is_github_com:
            return None
        meta = self.get("/meta")
        version = meta.get("installed_version") if isinstance(meta, dict) else None
        logger.info(f"Detected GitHub Enterprise Server version: {version or 'unknown'}")
        return version

    def close(self) -> None:
        self._github.close()


def _exception_message(error: GithubException) -> str:
    data = error.data
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return str(data) if data else type(error).__name__
