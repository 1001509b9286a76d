"""
Pytest fixtures and configuration.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Generator
from unittest.mock import MagicMock

import pytest

from repo_audit.checks.base import CheckContext
from repo_audit.core.snapshot import RepositorySnapshot
from repo_audit.exceptions import GitHubAPIError


def graphql_repository(repo_id: str = "R_kgDOExample", discussions: int = 0) -> dict[str, Any]:
    """GraphQL ``data`` payload for the repository snapshot query."""
    return {"repository": {"id": repo_id, "discussions": {"totalCount": discussions}}}


class FakeGitHubClient:
    """
    Stand-in for GitHubClient that answers from canned responses.

    REST paths missing from ``responses`` answer 404. A response that is
    an exception instance is raised instead of returned.
    """

    def __init__(
        self,
        responses: dict[str, Any] | None = None,
        repositories: dict[tuple[str, str], Any] | None = None,
        server_version: str | None = None,
    ) -> None:
        self.responses = dict(responses or {})
        self.repositories = dict(repositories or {})
        self.server_version = server_version
        self.closed = False
        self.calls: list[tuple[Any, ...]] = []

    def graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("graphql", variables["owner"], variables["name"]))
        response = self.repositories.get(
            (variables["owner"], variables["name"]), graphql_repository()
        )
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        self.calls.append(("GET", path, params))
        if path not in self.responses:
            raise GitHubAPIError("Not Found", status=404)
        response = self.responses[path]
        if isinstance(response, Exception):
            raise response
        return response

    def get_or_none(self, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            return self.get(path, params)
        except GitHubAPIError as e:
            if e.is_not_found:
                return None
            raise

    def get_server_version(self) -> str | None:
        self.calls.append(("meta",))
        return self.server_version

    def close(self) -> None:
        self.closed = True

    @property
    def rest_paths(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "GET"]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    return FakeGitHubClient()


@pytest.fixture
def mock_logger() -> MagicMock:
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def snapshot() -> RepositorySnapshot:
    return RepositorySnapshot(id="R_kgDOExample", discussions_total_count=0)


@pytest.fixture
def make_context(fake_client: FakeGitHubClient, snapshot: RepositorySnapshot, mock_logger: MagicMock):
    """Build a CheckContext for octo-org/octo-repo; keyword arguments override fields."""

    def _make(**overrides: Any) -> CheckContext:
        fields: dict[str, Any] = {
            "snapshot": snapshot,
            "client": fake_client,
            "owner": "octo-org",
            "repo": "octo-repo",
            "server_version": None,
            "logger": mock_logger,
        }
        fields.update(overrides)
        return CheckContext(**fields)

    return _make


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo setup_logging() so one CLI test cannot hide log records from the next."""
    yield
    package_logger = logging.getLogger("repo_audit")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
