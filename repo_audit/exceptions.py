"""
Custom exceptions for gh-repo-audit.

All exceptions inherit from AuditorError to allow catching all auditor-specific
exceptions with a single except clause. Each exception includes context about
the error without exposing sensitive information.
"""

from typing import Any


class AuditorError(Exception):
    """
    Base exception for all auditor-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional context (sanitized, no secrets)
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class ConfigurationError(AuditorError):
    """
    Raised when there's an issue with configuration.

    Examples:
        - Unknown authentication type
        - Invalid configuration file
        - Configuration file not found
    """
    pass


class CredentialError(ConfigurationError):
    """Base class for credential resolution failures."""

    def __init__(
        self,
        message: str,
        field: str,
        argument: str | None = None,
        env_vars: tuple[str, ...] = (),
    ) -> None:
        self.field = field
        self.argument = argument
        self.env_vars = env_vars
        # The message already names its sources, so details stay out of str()
        super().__init__(message)


class MissingCredentialError(CredentialError):
    """
    Raised when a required credential field is absent from every source.

    The message names the field together with the CLI argument and the
    environment variable(s) that would have supplied it.
    """
    pass


class InvalidCredentialError(CredentialError):
    """
    Raised when a credential is present but unusable.

    Examples:
        - App ID or installation ID that is not an integer
        - Private key file that cannot be read
    """
    pass


class ValidationError(AuditorError):
    """
    Raised when input validation fails.

    Examples:
        - Malformed owner/name repository reference
        - Repository list file that is missing or too large
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        # Never include the actual invalid value in logs for security
        if value:
            details["value_length"] = len(value)
        super().__init__(message, details)


class GitHubAPIError(AuditorError):
    """
    Raised by the API client when a GitHub request fails.

    Attributes:
        status: HTTP status code, if the server answered
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status = status
        super().__init__(message, details)

    @property
    def is_not_found(self) -> bool:
        return self.status == 404


class GraphQLError(GitHubAPIError):
    """
    Raised when a GraphQL request fails or returns an ``errors`` payload.

    When raised by the repository snapshot query it aborts that
    repository's audit, since every check depends on the snapshot.
    """
    pass


class CheckExecutionError(AuditorError):
    """
    Wraps an exception raised while a single check was running.

    Note: This is NOT raised when a check produces warnings.
    It is recorded on the check's result and never propagates past the
    dispatcher; the original exception is kept as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        check_type: str | None = None,
        repository: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if check_type:
            details["check"] = check_type
        if repository:
            details["repository"] = repository
        self.check_type = check_type
        self.repository = repository
        super().__init__(message, details)


class ReportError(AuditorError):
    """
    Raised when report generation fails.

    Examples:
        - Output file write permission denied
        - Invalid output format
    """
    pass


def present_error(error: BaseException) -> str:
    """
    Render an exception as a single line for log messages.

    API errors are shown with their HTTP status; anything else as
    ``ClassName: message``.
    """
    if isinstance(error, GitHubAPIError) and error.status is not None:
        return f"HTTP {error.status}: {error.message}"
    if isinstance(error, AuditorError):
        return str(error)

    text = str(error)
    if not text:
        return error.__class__.__name__
    return f"{error.__class__.__name__}: {text}"
