"""
Tests for repository check modules.
"""

import base64

import pytest

from repo_audit.checks import DEFAULT_CHECKS
from repo_audit.checks.actions import ActionsVariablesCheck
from repo_audit.checks.base import pluralize
from repo_audit.checks.discussions import RepositoryDiscussionsCheck
from repo_audit.checks.git_lfs import GitLFSObjectsCheck
from repo_audit.checks.rulesets import RepositoryRulesetsCheck
from repo_audit.checks.secrets import (
    ActionsSecretsCheck,
    CodespacesSecretsCheck,
    DependabotSecretsCheck,
)
from repo_audit.checks.webhooks import RepositoryWebhooksCheck
from repo_audit.core.snapshot import RepositorySnapshot
from repo_audit.exceptions import GitHubAPIError

REPO = "/repos/octo-org/octo-repo"


def encoded(text: str) -> dict:
    """A contents API response for a small file."""
    return {
        "type": "file",
        "encoding": "base64",
        "content": base64.b64encode(text.encode()).decode(),
    }


class TestRegistry:
    """Tests for the default check list."""

    def test_default_order(self):
        """Test that checks run in a fixed, documented order."""
        assert [check.type for check in DEFAULT_CHECKS] == [
            "repository-rulesets",
            "repository-discussions",
            "git-lfs-objects",
            "repository-webhooks",
            "repository-actions-variables",
            "repository-actions-secrets",
            "repository-codespaces-secrets",
            "repository-dependabot-secrets",
        ]

    def test_types_are_unique(self):
        types = [check.type for check in DEFAULT_CHECKS]
        assert len(types) == len(set(types))

    def test_every_check_is_described(self):
        for check in DEFAULT_CHECKS:
            assert check.name
            assert check.description
            assert check.type in repr(check)


class TestRulesetsCheck:
    """Tests for the repository rulesets check."""

    @pytest.fixture
    def check(self):
        return RepositoryRulesetsCheck()

    def test_rulesets_found(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/rulesets"] = [{"id": 1}, {"id": 2}]

        warnings = check.run(make_context())

        assert len(warnings) == 1
        assert warnings[0].message.startswith("This repository has 2 rulesets configured.")

    def test_excludes_parent_rulesets(self, check, fake_client, make_context):
        """Test that organization rulesets are not requested."""
        fake_client.responses[f"{REPO}/rulesets"] = []

        check.run(make_context())

        _, path, params = fake_client.calls[0]
        assert path == f"{REPO}/rulesets"
        assert params["includes_parents"] == "false"

    def test_no_rulesets(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/rulesets"] = []

        assert check.run(make_context()) == []

    def test_not_found_is_no_warning(self, check, make_context):
        assert check.run(make_context()) == []

    def test_skipped_on_old_ghes(self, check, fake_client, make_context, mock_logger):
        """Test that servers before 3.11 are not queried."""
        fake_client.responses[f"{REPO}/rulesets"] = [{"id": 1}]

        warnings = check.run(make_context(server_version="3.10.4"))

        assert warnings == []
        assert fake_client.calls == []
        mock_logger.debug.assert_called_once()

    def test_runs_on_supported_ghes(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/rulesets"] = [{"id": 1}]

        warnings = check.run(make_context(server_version="3.11.0"))

        assert "1 ruleset configured" in warnings[0].message

    def test_server_error_propagates(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/rulesets"] = GitHubAPIError("Server Error", status=500)

        with pytest.raises(GitHubAPIError):
            check.run(make_context())


class TestDiscussionsCheck:
    """Tests for the discussions check."""

    @pytest.fixture
    def check(self):
        return RepositoryDiscussionsCheck()

    def test_discussions_found(self, check, make_context):
        context = make_context(
            snapshot=RepositorySnapshot(id="R_1", discussions_total_count=3)
        )

        warnings = check.run(context)

        assert len(warnings) == 1
        assert "3 discussions" in warnings[0].message

    def test_single_discussion(self, check, make_context):
        context = make_context(
            snapshot=RepositorySnapshot(id="R_1", discussions_total_count=1)
        )

        assert "has 1 discussion." in check.run(context)[0].message

    def test_no_discussions(self, check, make_context):
        assert check.run(make_context()) == []

    def test_uses_snapshot_only(self, check, fake_client, make_context):
        """Test that the snapshot answers without further API calls."""
        context = make_context(
            snapshot=RepositorySnapshot(id="R_1", discussions_total_count=5)
        )

        check.run(context)

        assert fake_client.calls == []


class TestGitLFSObjectsCheck:
    """Tests for Git LFS detection."""

    @pytest.fixture
    def check(self):
        return GitLFSObjectsCheck()

    def test_lfs_rules_found(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/contents/.gitattributes"] = encoded(
            "*.psd filter=lfs diff=lfs merge=lfs -text\n"
            "*.zip filter=lfs diff=lfs merge=lfs -text\n"
            "*.txt text eol=lf\n"
        )

        warnings = check.run(make_context())

        assert len(warnings) == 1
        assert "2 filter=lfs rules" in warnings[0].message

    def test_commented_rules_ignored(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/contents/.gitattributes"] = encoded(
            "# *.psd filter=lfs diff=lfs merge=lfs -text\n"
        )

        assert check.run(make_context()) == []

    def test_similar_filter_not_matched(self, check, fake_client, make_context):
        """Test that other filters containing 'lfs' are not counted."""
        fake_client.responses[f"{REPO}/contents/.gitattributes"] = encoded(
            "*.bin filter=lfs-custom\n*.dat myfilter=lfs\n"
        )

        assert check.run(make_context()) == []

    def test_no_gitattributes(self, check, make_context):
        assert check.run(make_context()) == []

    def test_directory_listing_ignored(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/contents/.gitattributes"] = [{"name": "x"}]

        assert check.run(make_context()) == []

    def test_undecodable_content(self, check, fake_client, make_context, mock_logger):
        fake_client.responses[f"{REPO}/contents/.gitattributes"] = {
            "encoding": "base64",
            "content": "not base64!",
        }

        assert check.run(make_context()) == []
        mock_logger.debug.assert_called_once()


class TestWebhooksCheck:
    """Tests for the webhooks check."""

    @pytest.fixture
    def check(self):
        return RepositoryWebhooksCheck()

    def test_webhooks_found(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/hooks"] = [
            {"id": 1, "active": True},
            {"id": 2, "active": True},
        ]

        warnings = check.run(make_context())

        assert len(warnings) == 1
        assert warnings[0].message.startswith("This repository has 2 webhooks configured.")
        assert "active" not in warnings[0].message

    def test_inactive_webhooks_reported(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/hooks"] = [
            {"id": 1, "active": True},
            {"id": 2, "active": False},
            {"id": 3, "active": False},
        ]

        message = check.run(make_context())[0].message

        assert message.endswith(" 1 of them is active.")

    def test_no_webhooks(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/hooks"] = []

        assert check.run(make_context()) == []

    def test_forbidden_propagates(self, check, fake_client, make_context):
        """Test that missing admin access is a check failure, not silence."""
        fake_client.responses[f"{REPO}/hooks"] = GitHubAPIError(
            "Must have admin rights to Repository.", status=403
        )

        with pytest.raises(GitHubAPIError) as exc_info:
            check.run(make_context())

        assert exc_info.value.status == 403


class TestActionsVariablesCheck:
    """Tests for the Actions variables check."""

    @pytest.fixture
    def check(self):
        return ActionsVariablesCheck()

    def test_variables_found(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/actions/variables"] = {
            "total_count": 4,
            "variables": [{"name": "A"}],
        }

        warnings = check.run(make_context())

        assert "4 GitHub Actions variables" in warnings[0].message

    def test_zero_variables(self, check, fake_client, make_context):
        fake_client.responses[f"{REPO}/actions/variables"] = {
            "total_count": 0,
            "variables": [],
        }

        assert check.run(make_context()) == []

    @pytest.mark.parametrize("version,expected_calls", [
        ("3.7.9", 0),
        ("3.8.0", 1),
    ])
    def test_ghes_gate(self, check, fake_client, make_context, version, expected_calls):
        fake_client.responses[f"{REPO}/actions/variables"] = {"total_count": 1}

        check.run(make_context(server_version=version))

        assert len(fake_client.calls) == expected_calls


class TestSecretsChecks:
    """Tests for the Actions, Codespaces and Dependabot secrets checks."""

    @pytest.mark.parametrize("check,store,label", [
        (ActionsSecretsCheck(), "actions", "GitHub Actions secrets"),
        (CodespacesSecretsCheck(), "codespaces", "Codespaces secrets"),
        (DependabotSecretsCheck(), "dependabot", "Dependabot secrets"),
    ])
    def test_secrets_found(self, check, store, label, fake_client, make_context):
        fake_client.responses[f"{REPO}/{store}/secrets"] = {
            "total_count": 2,
            "secrets": [{"name": "ONE"}, {"name": "TWO"}],
        }

        warnings = check.run(make_context())

        assert len(warnings) == 1
        assert f"2 {label}" in warnings[0].message
        assert "must be recreated manually" in warnings[0].message

    def test_no_secrets(self, fake_client, make_context):
        fake_client.responses[f"{REPO}/actions/secrets"] = {"total_count": 0, "secrets": []}

        assert ActionsSecretsCheck().run(make_context()) == []

    def test_codespaces_never_on_ghes(self, fake_client, make_context):
        """Test that Codespaces secrets are not queried on any GHES release."""
        fake_client.responses[f"{REPO}/codespaces/secrets"] = {"total_count": 1}

        warnings = CodespacesSecretsCheck().run(make_context(server_version="3.99.0"))

        assert warnings == []
        assert fake_client.calls == []

    def test_dependabot_gate(self, fake_client, make_context):
        fake_client.responses[f"{REPO}/dependabot/secrets"] = {"total_count": 1}
        check = DependabotSecretsCheck()

        assert check.run(make_context(server_version="3.3.0")) == []
        assert len(check.run(make_context(server_version="3.4.0"))) == 1

    def test_secret_names_not_in_message(self, fake_client, make_context):
        fake_client.responses[f"{REPO}/actions/secrets"] = {
            "total_count": 1,
            "secrets": [{"name": "DEPLOY_KEY"}],
        }

        message = ActionsSecretsCheck().run(make_context())[0].message

        assert "DEPLOY_KEY" not in message


class TestPluralize:
    """Tests for the pluralize helper."""

    def test_singular(self):
        assert pluralize(1, "webhook") == "1 webhook"

    def test_plural(self):
        assert pluralize(0, "webhook") == "0 webhooks"
        assert pluralize(3, "webhook") == "3 webhooks"

    def test_irregular_plural(self):
        assert pluralize(2, "repository", "repositories") == "2 repositories"
