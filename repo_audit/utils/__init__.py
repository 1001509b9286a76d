"""Utility modules."""

from repo_audit.utils.file_utils import (
    read_repository_list,
    safe_write_file,
)
from repo_audit.utils.sanitizer import (
    mask_token,
    redact_secrets,
    sanitize_for_display,
    sanitize_for_log,
)
from repo_audit.utils.version import parse_version, supports_feature

__all__ = [
    "read_repository_list",
    "safe_write_file",
    "mask_token",
    "redact_secrets",
    "sanitize_for_display",
    "sanitize_for_log",
    "parse_version",
    "supports_feature",
]
