"""
Tests for the GitHub API client wrapper.
"""

from unittest.mock import MagicMock, patch

import pytest
from github import GithubException

from repo_audit.auth import AuthConfig, TokenCredentials
from repo_audit.config import GitHubConfig
from repo_audit.exceptions import GitHubAPIError, GraphQLError
from repo_audit.github.client import GitHubClient, graphql_url_for, repo_path


@pytest.fixture
def github():
    mock = MagicMock()
    mock.requester.requestJsonAndCheck.return_value = ({}, {})
    return mock


@pytest.fixture
def client(github):
    return GitHubClient(github)


class TestUrls:
    """Tests for URL helpers."""

    def test_graphql_url_for_github_com(self):
        assert graphql_url_for("https://api.github.com") == "https://api.github.com/graphql"

    def test_graphql_url_for_ghes(self):
        assert (
            graphql_url_for("https://ghe.example.com/api/v3/")
            == "https://ghe.example.com/api/graphql"
        )

    def test_repo_path(self):
        assert repo_path("octo-org", "octo-repo", "actions", "secrets") == (
            "/repos/octo-org/octo-repo/actions/secrets"
        )

    def test_repo_path_quotes_names(self):
        """Test that owner and name cannot inject extra path segments."""
        assert repo_path("org", "a/b", "hooks") == "/repos/org/a%2Fb/hooks"


class TestGraphQL:
    """Tests for GraphQL requests."""

    def test_returns_data(self, client, github):
        github.requester.requestJsonAndCheck.return_value = (
            {},
            {"data": {"repository": {"id": "R_1"}}},
        )

        data = client.graphql("query { viewer { login } }", {"owner": "o"})

        assert data == {"repository": {"id": "R_1"}}
        github.requester.requestJsonAndCheck.assert_called_once_with(
            "POST",
            "https://api.github.com/graphql",
            input={"query": "query { viewer { login } }", "variables": {"owner": "o"}},
        )

    def test_errors_payload(self, client, github):
        github.requester.requestJsonAndCheck.return_value = (
            {},
            {
                "data": {"repository": None},
                "errors": [{"message": "Could not resolve to a Repository with the name 'o/r'."}],
            },
        )

        with pytest.raises(GraphQLError) as exc_info:
            client.graphql("query", {})

        assert exc_info.value.message == "Could not resolve to a Repository with the name 'o/r'."

    def test_transport_failure(self, client, github):
        github.requester.requestJsonAndCheck.side_effect = GithubException(
            401, {"message": "Bad credentials"}
        )

        with pytest.raises(GraphQLError) as exc_info:
            client.graphql("query", {})

        assert exc_info.value.status == 401
        assert exc_info.value.message == "Bad credentials"

    def test_ghes_endpoint(self, github):
        client = GitHubClient(github, api_url="https://ghe.example.com/api/v3")

        client.graphql("query", {})

        assert github.requester.requestJsonAndCheck.call_args[0][1] == (
            "https://ghe.example.com/api/graphql"
        )


class TestRest:
    """Tests for REST requests."""

    def test_get(self, client, github):
        github.requester.requestJsonAndCheck.return_value = ({}, [{"id": 1}])

        assert client.get("/repos/o/r/hooks", {"per_page": 100}) == [{"id": 1}]
        github.requester.requestJsonAndCheck.assert_called_once_with(
            "GET", "/repos/o/r/hooks", parameters={"per_page": 100}
        )

    def test_get_error(self, client, github):
        github.requester.requestJsonAndCheck.side_effect = GithubException(
            403, {"message": "Resource not accessible by integration"}
        )

        with pytest.raises(GitHubAPIError) as exc_info:
            client.get("/repos/o/r/hooks")

        assert exc_info.value.status == 403
        assert not exc_info.value.is_not_found

    def test_get_or_none_on_404(self, client, github):
        github.requester.requestJsonAndCheck.side_effect = GithubException(
            404, {"message": "Not Found"}
        )

        assert client.get_or_none("/repos/o/r/rulesets") is None

    def test_get_or_none_reraises_other_errors(self, client, github):
        github.requester.requestJsonAndCheck.side_effect = GithubException(500, None)

        with pytest.raises(GitHubAPIError) as exc_info:
            client.get_or_none("/repos/o/r/rulesets")

        assert exc_info.value.message == "GithubException"


class TestServerVersion:
    """Tests for GHES version detection."""

    def test_github_com_has_no_version(self, client, github):
        assert client.get_server_version() is None
        github.requester.requestJsonAndCheck.assert_not_called()

    def test_ghes_version_from_meta(self, github):
        github.requester.requestJsonAndCheck.return_value = ({}, {"installed_version": "3.12.1"})
        client = GitHubClient(github, api_url="https://ghe.example.com/api/v3")

        assert client.get_server_version() == "3.12.1"
        assert github.requester.requestJsonAndCheck.call_args[0][:2] == ("GET", "/meta")


class TestFromAuthConfig:
    """Tests for building the PyGithub instance."""

    def test_connection_settings_passed_through(self):
        auth_config = AuthConfig(auth=TokenCredentials(token="ghp_x"))
        github_config = GitHubConfig(
            api_url="https://ghe.example.com/api/v3",
            timeout_seconds=60,
            per_page=50,
            max_retries=2,
        )

        with patch("repo_audit.github.client.Github") as github_cls:
            client = GitHubClient.from_auth_config(auth_config, github_config)

        kwargs = github_cls.call_args.kwargs
        assert kwargs["base_url"] == "https://ghe.example.com/api/v3"
        assert kwargs["timeout"] == 60
        assert kwargs["per_page"] == 50
        assert kwargs["verify"] is True
        assert kwargs["auth"].token == "ghp_x"
        assert client.graphql_url == "https://ghe.example.com/api/graphql"
        assert not client.is_github_com

    def test_close(self, client, github):
        client.close()

        github.close.assert_called_once()
