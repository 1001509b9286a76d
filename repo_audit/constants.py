"""
Constants for gh-repo-audit.

Environment variable names, CLI argument names, API endpoints, and the
version thresholds used to gate checks on GitHub Enterprise Server.

SECURITY NOTE: All regex patterns are pre-compiled for safety and performance.
Never construct patterns from user input.
"""

import re
from typing import Final

# =============================================================================
# GITHUB API
# =============================================================================

DEFAULT_API_URL: Final[str] = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
DEFAULT_PER_PAGE: Final[int] = 100
DEFAULT_MAX_RETRIES: Final[int] = 3

# GHES serves REST under /api/v3 and GraphQL under /api/graphql
GHES_REST_PATH_SUFFIX: Final[str] = "/api/v3"
GHES_GRAPHQL_PATH_SUFFIX: Final[str] = "/api/graphql"

REPOSITORY_SNAPSHOT_QUERY: Final[str] = """
query getRepository($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    id
    discussions {
      totalCount
    }
  }
}
"""

# =============================================================================
# AUTHENTICATION
# =============================================================================

AUTH_TYPE_TOKEN: Final[str] = "token"
AUTH_TYPE_INSTALLATION: Final[str] = "installation"
AUTH_TYPE_APP: Final[str] = "app"
AUTH_TYPES: Final[tuple[str, ...]] = (
    AUTH_TYPE_TOKEN,
    AUTH_TYPE_INSTALLATION,
    AUTH_TYPE_APP,
)

ENV_GITHUB_TOKEN: Final[str] = "GITHUB_TOKEN"
ENV_GITHUB_APP_ID: Final[str] = "GITHUB_APP_ID"
ENV_GITHUB_APP_PRIVATE_KEY: Final[str] = "GITHUB_APP_PRIVATE_KEY"
ENV_GITHUB_APP_PRIVATE_KEY_FILE: Final[str] = "GITHUB_APP_PRIVATE_KEY_FILE"
ENV_GITHUB_APP_INSTALLATION_ID: Final[str] = "GITHUB_APP_INSTALLATION_ID"
ENV_GITHUB_CLIENT_ID: Final[str] = "GITHUB_CLIENT_ID"
ENV_GITHUB_CLIENT_SECRET: Final[str] = "GITHUB_CLIENT_SECRET"

ARG_ACCESS_TOKEN: Final[str] = "--access-token"
ARG_APP_ID: Final[str] = "--app-id"
ARG_PRIVATE_KEY: Final[str] = "--private-key"
ARG_PRIVATE_KEY_FILE: Final[str] = "--private-key-file"
ARG_APP_INSTALLATION_ID: Final[str] = "--app-installation-id"
ARG_CLIENT_ID: Final[str] = "--client-id"
ARG_CLIENT_SECRET: Final[str] = "--client-secret"

# =============================================================================
# GITHUB ENTERPRISE SERVER FEATURE GATES
# =============================================================================

# Minimum GHES version exposing each API. Features missing from this map are
# available on every supported GHES release.
GHES_MIN_VERSION_RULESETS: Final[str] = "3.11.0"
GHES_MIN_VERSION_ACTIONS_VARIABLES: Final[str] = "3.8.0"
GHES_MIN_VERSION_DEPENDABOT_SECRETS: Final[str] = "3.4.0"

# =============================================================================
# CHECK INPUTS
# =============================================================================

GITATTRIBUTES_PATH: Final[str] = ".gitattributes"
LFS_FILTER_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?<!\S)filter=lfs(?!\S)")

# =============================================================================
# SECRET DETECTION PATTERNS (log and report redaction)
# =============================================================================

# SECURITY: Never log matches from these patterns
SECRET_PATTERNS: Final[dict[str, re.Pattern[str]]] = {
    "github_token": re.compile(
        r"gh[pousr]_[A-Za-z0-9_]{36,}",
        re.IGNORECASE
    ),
    "github_fine_grained_token": re.compile(
        r"github_pat_[A-Za-z0-9_]{22,}"
    ),
    "private_key": re.compile(
        r"-----BEGIN (?:RSA |EC |OPENSSH )?PRIVATE KEY-----"
        r"(?:.*?-----END (?:RSA |EC |OPENSSH )?PRIVATE KEY-----)?",
        re.DOTALL,
    ),
    "jwt_token": re.compile(
        r"eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"
    ),
}

# Keywords that might indicate secrets in key=value pairs
SECRET_KEYWORDS: Final[frozenset[str]] = frozenset({
    "password", "secret", "token", "access_token", "private_key",
    "privatekey", "client_secret", "clientsecret", "bearer", "jwt",
})

# =============================================================================
# INPUT / OUTPUT
# =============================================================================

MAX_INPUT_FILE_SIZE_BYTES: Final[int] = 10 * 1024 * 1024  # 10 MB
MAX_REPORT_VALUE_LENGTH: Final[int] = 500

DEFAULT_OUTPUT_BASENAME: Final[str] = "gh-repo-audit"
REPORT_FORMATS: Final[tuple[str, ...]] = ("csv", "json", "markdown")
CSV_COLUMNS: Final[tuple[str, ...]] = ("owner", "name", "type", "message")
