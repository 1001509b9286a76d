"""
Audit dispatch.

For each repository: fetch the GraphQL snapshot once, run every check
against it in registration order, and label what they find. A check that
raises is logged and contributes nothing; the remaining checks still
run. A snapshot that cannot be fetched aborts the repository, and with
it the rest of the batch.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

from repo_audit.checks import DEFAULT_CHECKS
from repo_audit.checks.base import CheckContext
from repo_audit.core.result import (
    AuditWarning,
    CheckResult,
    NameWithOwner,
    RepositoryAuditWarning,
)
from repo_audit.core.snapshot import RepositorySnapshot, get_repository_with_graphql
from repo_audit.exceptions import CheckExecutionError, present_error
from repo_audit.logging_config import get_logger

if TYPE_CHECKING:
    from repo_audit.checks.base import BaseCheck
    from repo_audit.github.client import GitHubClient

logger = get_logger("auditor")

CheckResultCallback = Callable[[CheckResult], None]


def audit_repositories(
    client: "GitHubClient",
    name_with_owners: Iterable[NameWithOwner],
    logger: logging.Logger = logger,
    checks: Sequence["BaseCheck"] = DEFAULT_CHECKS,
    server_version: str | None = None,
    on_check_result: CheckResultCallback | None = None,
) -> list[AuditWarning]:
    """
    Audit repositories one after another and flatten their warnings.

    Output order is repository input order, then check order, then the
    order each check emitted its warnings. Repositories are neither
    deduplicated nor audited in parallel.

    Raises:
        GraphQLError: If a repository's snapshot cannot be fetched; the
            remaining repositories are not audited
    """
    warnings: list[AuditWarning] = []

    for repository in name_with_owners:
        repo_warnings = audit_repository(
            client,
            repository.owner,
            repository.name,
            logger=logger,
            checks=checks,
            server_version=server_version,
            on_check_result=on_check_result,
        )
        warnings.extend(
            warning.for_repository(repository.owner, repository.name)
            for warning in repo_warnings
        )

    return warnings


def audit_repository(
    client: "GitHubClient",
    owner: str,
    repo: str,
    logger: logging.Logger = logger,
    checks: Sequence["BaseCheck"] = DEFAULT_CHECKS,
    server_version: str | None = None,
    on_check_result: CheckResultCallback | None = None,
) -> list[RepositoryAuditWarning]:
    """
    Run every check against one repository.

    Args:
        client: API client shared by the snapshot fetch and the checks
        owner: Repository owner (user or organization)
        repo: Repository name
        logger: Receives per-check debug and error lines
        checks: Checks to run, in order
        server_version: GHES version, or None for github.com
        on_check_result: Called with each check's result as it completes

    Returns:
        Warnings labelled with the type of the check that produced them

    Raises:
        GraphQLError: If the snapshot cannot be fetched
    """
    snapshot = get_repository_with_graphql(owner, repo, client)

    warnings: list[RepositoryAuditWarning] = []

    for check in checks:
        result = run_check(
            check,
            client,
            owner,
            repo,
            snapshot,
            logger=logger,
            server_version=server_version,
        )
        warnings.extend(result.warnings)

        if on_check_result:
            on_check_result(result)

    return warnings


def run_check(
    check: "BaseCheck",
    client: "GitHubClient",
    owner: str,
    repo: str,
    snapshot: RepositorySnapshot,
    logger: logging.Logger = logger,
    server_version: str | None = None,
) -> CheckResult:
    """
    Run a single check, containing any failure.

    Returns:
        A result holding either the check's labelled warnings or the
        error it raised; never raises itself
    """
    context_extra = {"owner": owner, "repo": repo}
    logger.debug(f"Running auditor {check.type}", extra=context_extra)

    result = CheckResult(check_type=check.type, owner=owner, repo=repo)
    start_time = time.perf_counter()

    context = CheckContext(
        snapshot=snapshot,
        client=client,
        owner=owner,
        repo=repo,
        server_version=server_version,
        logger=logger,
    )

    try:
        result.warnings = [warning.with_type(check.type) for warning in check.run(context)]
    except Exception as e:
        message = (
            f"Auditor `{check.type}` failed for {owner}/{repo} "
            f"with error: {present_error(e)}"
        )
        logger.error(message, extra=context_extra)

        error = CheckExecutionError(
            message,
            check_type=check.type,
            repository=f"{owner}/{repo}",
        )
        error.__cause__ = e
        result.error = error

    result.duration_ms = (time.perf_counter() - start_time) * 1000

    return result
