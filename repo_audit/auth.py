"""
Credential resolution for the GitHub API client.

Turns CLI arguments and environment variables into one of three
validated credential bundles:

- ``token``: a personal access token (the default)
- ``installation``: a GitHub App installation
- ``app``: a GitHub App with its OAuth client credentials

Precedence for every field is: explicit argument, then environment
variable, then (private key only) a file path, then failure.

SECURITY NOTES:
- No network calls are made here
- Secrets are masked in repr() and never logged
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Optional, Union

from github import Auth

from repo_audit.constants import (
    ARG_ACCESS_TOKEN,
    ARG_APP_ID,
    ARG_APP_INSTALLATION_ID,
    ARG_CLIENT_ID,
    ARG_CLIENT_SECRET,
    ARG_PRIVATE_KEY,
    ARG_PRIVATE_KEY_FILE,
    AUTH_TYPE_APP,
    AUTH_TYPE_INSTALLATION,
    AUTH_TYPE_TOKEN,
    AUTH_TYPES,
    ENV_GITHUB_APP_ID,
    ENV_GITHUB_APP_INSTALLATION_ID,
    ENV_GITHUB_APP_PRIVATE_KEY,
    ENV_GITHUB_APP_PRIVATE_KEY_FILE,
    ENV_GITHUB_CLIENT_ID,
    ENV_GITHUB_CLIENT_SECRET,
    ENV_GITHUB_TOKEN,
)
from repo_audit.exceptions import (
    ConfigurationError,
    InvalidCredentialError,
    MissingCredentialError,
)
from repo_audit.logging_config import get_logger
from repo_audit.utils.sanitizer import mask_token

logger = get_logger("auth")


@dataclass(frozen=True)
class TokenCredentials:
    """Personal access token (or any bearer token)."""

    token: str = field(repr=False)

    def __repr__(self) -> str:
        return f"TokenCredentials(token={mask_token(self.token)!r})"


@dataclass(frozen=True)
class InstallationCredentials:
    """GitHub App authenticating as one of its installations."""

    app_id: int
    private_key: str = field(repr=False)
    installation_id: int


@dataclass(frozen=True)
class AppCredentials:
    """GitHub App authenticating as itself, with its OAuth client credentials."""

    app_id: int
    private_key: str = field(repr=False)
    client_id: str
    client_secret: str = field(repr=False)


CredentialBundle = Union[TokenCredentials, InstallationCredentials, AppCredentials]


def create_app_auth(credentials: CredentialBundle) -> Auth.Auth:
    """
    Build the PyGithub auth object for a GitHub App bundle.

    Installation bundles yield an installation-token auth that PyGithub
    refreshes on expiry; app bundles authenticate with the app's JWT.
    """
    if isinstance(credentials, InstallationCredentials):
        app_auth = Auth.AppAuth(credentials.app_id, credentials.private_key)
        return app_auth.get_installation_auth(credentials.installation_id)
    if isinstance(credentials, AppCredentials):
        return Auth.AppAuth(credentials.app_id, credentials.private_key)
    raise ConfigurationError(
        f"GitHub App authentication is not available for {type(credentials).__name__}"
    )


@dataclass(frozen=True)
class AuthConfig:
    """
    Resolved credentials plus the strategy that turns them into PyGithub auth.

    ``auth_strategy`` is None for token auth, where the token is used as-is.
    """

    auth: CredentialBundle
    auth_strategy: Optional[Callable[[CredentialBundle], Auth.Auth]] = None

    def build_auth(self) -> Auth.Auth:
        if self.auth_strategy is not None:
            return self.auth_strategy(self.auth)
        if isinstance(self.auth, TokenCredentials):
            return Auth.Token(self.auth.token)
        raise ConfigurationError("No authentication strategy configured for app credentials")


def create_auth_config(
    *,
    auth_type: str | None = None,
    access_token: str | None = None,
    app_id: str | None = None,
    private_key: str | None = None,
    private_key_file: str | Path | None = None,
    app_installation_id: str | None = None,
    client_id: str | None = None,
    client_secret: str | None = None,
    env: Mapping[str, str] | None = None,
    logger: logging.Logger = logger,
) -> AuthConfig:
    """
    Validate the credentials for the selected mode and return them.

    Args:
        auth_type: ``token``, ``installation`` or ``app``; None means token
        env: Environment lookup, defaults to ``os.environ``
        logger: Receives one info line naming the mode, and one error
            line if resolution fails

    Raises:
        MissingCredentialError: A required field resolved to nothing
        InvalidCredentialError: A field is present but unusable
        ConfigurationError: Unknown ``auth_type``
    """
    resolver = _CredentialResolver(os.environ if env is None else env)
    mode = auth_type or AUTH_TYPE_TOKEN

    try:
        if mode == AUTH_TYPE_INSTALLATION:
            logger.info("Validating configuration for installation authentication")
            credentials: CredentialBundle = InstallationCredentials(
                app_id=resolver.app_id(app_id),
                private_key=resolver.private_key(private_key, private_key_file),
                installation_id=resolver.installation_id(app_installation_id),
            )
            return AuthConfig(auth=credentials, auth_strategy=create_app_auth)

        if mode == AUTH_TYPE_APP:
            logger.info("Validating configuration for app authentication")
            credentials = AppCredentials(
                app_id=resolver.app_id(app_id),
                private_key=resolver.private_key(private_key, private_key_file),
                client_id=resolver.client_id(client_id),
                client_secret=resolver.client_secret(client_secret),
            )
            return AuthConfig(auth=credentials, auth_strategy=create_app_auth)

        if mode == AUTH_TYPE_TOKEN:
            logger.info("Validating configuration for token authentication")
            return AuthConfig(auth=TokenCredentials(resolver.token(access_token)))

        raise ConfigurationError(
            f"Unknown authentication type {mode!r}; expected one of: {', '.join(AUTH_TYPES)}"
        )
    except ConfigurationError as e:
        logger.error(f"Error creating and validating auth config: {e}")
        raise


class _CredentialResolver:
    """Looks up each credential field in argument, then environment, order."""

    def __init__(self, env: Mapping[str, str]) -> None:
        self._env = env

    def _lookup(self, explicit: str | None, env_var: str) -> str | None:
        # Empty strings count as absent, in both sources
        return explicit or self._env.get(env_var) or None

    def token(self, access_token: str | None) -> str:
        token = self._lookup(access_token, ENV_GITHUB_TOKEN)
        if not token:
            raise MissingCredentialError(
                "You must specify a GitHub access token using the "
                f"{ARG_ACCESS_TOKEN} argument or {ENV_GITHUB_TOKEN} environment variable.",
                field="access_token",
                argument=ARG_ACCESS_TOKEN,
                env_vars=(ENV_GITHUB_TOKEN,),
            )
        return token

    def app_id(self, app_id: str | None) -> int:
        return self._integer(
            app_id,
            field="app_id",
            label="app ID",
            argument=ARG_APP_ID,
            env_var=ENV_GITHUB_APP_ID,
        )

    def installation_id(self, app_installation_id: str | None) -> int:
        return self._integer(
            app_installation_id,
            field="installation_id",
            label="app installation ID",
            argument=ARG_APP_INSTALLATION_ID,
            env_var=ENV_GITHUB_APP_INSTALLATION_ID,
        )

    def private_key(
        self,
        private_key: str | None,
        private_key_file: str | Path | None,
    ) -> str:
        key = self._lookup(private_key, ENV_GITHUB_APP_PRIVATE_KEY)

        if not key:
            key_file = private_key_file or self._env.get(ENV_GITHUB_APP_PRIVATE_KEY_FILE)
            if key_file:
                key = self._read_private_key_file(Path(key_file))

        if not key:
            raise MissingCredentialError(
                "You must specify a GitHub app private key using the "
                f"{ARG_PRIVATE_KEY} argument or {ENV_GITHUB_APP_PRIVATE_KEY} environment "
                "variable. Alternatively, you can also specify a file containing the "
                f"private key using the {ARG_PRIVATE_KEY_FILE} argument or "
                f"{ENV_GITHUB_APP_PRIVATE_KEY_FILE} environment variable.",
                field="private_key",
                argument=ARG_PRIVATE_KEY,
                env_vars=(ENV_GITHUB_APP_PRIVATE_KEY, ENV_GITHUB_APP_PRIVATE_KEY_FILE),
            )
        return key

    def client_id(self, client_id: str | None) -> str:
        return self._required(
            client_id,
            field="client_id",
            label="app client ID",
            argument=ARG_CLIENT_ID,
            env_var=ENV_GITHUB_CLIENT_ID,
        )

    def client_secret(self, client_secret: str | None) -> str:
        return self._required(
            client_secret,
            field="client_secret",
            label="app client secret",
            argument=ARG_CLIENT_SECRET,
            env_var=ENV_GITHUB_CLIENT_SECRET,
        )

    def _required(
        self,
        explicit: str | None,
        *,
        field: str,
        label: str,
        argument: str,
        env_var: str,
    ) -> str:
        value = self._lookup(explicit, env_var)
        if not value:
            raise MissingCredentialError(
                f"You must specify a GitHub {label} using the {argument} argument "
                f"or {env_var} environment variable.",
                field=field,
                argument=argument,
                env_vars=(env_var,),
            )
        return value

    def _integer(
        self,
        explicit: str | None,
        *,
        field: str,
        label: str,
        argument: str,
        env_var: str,
    ) -> int:
        value = self._required(
            explicit, field=field, label=label, argument=argument, env_var=env_var
        )
        try:
            return int(str(value).strip())
        except ValueError:
            raise InvalidCredentialError(
                f"The GitHub {label} given using the {argument} argument or "
                f"{env_var} environment variable must be an integer.",
                field=field,
                argument=argument,
                env_vars=(env_var,),
            ) from None

    def _read_private_key_file(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            reason = getattr(e, "strerror", None) or type(e).__name__
            raise InvalidCredentialError(
                f"Could not read the GitHub app private key file given using the "
                f"{ARG_PRIVATE_KEY_FILE} argument or {ENV_GITHUB_APP_PRIVATE_KEY_FILE} "
                f"environment variable: {reason}",
                field="private_key_file",
                argument=ARG_PRIVATE_KEY_FILE,
                env_vars=(ENV_GITHUB_APP_PRIVATE_KEY_FILE,),
            ) from e
