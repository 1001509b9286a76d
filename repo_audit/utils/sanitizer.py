"""
Redaction and sanitization for text that leaves the process.

GitHub error bodies, ``.gitattributes`` content and repository names all
end up in logs or reports. Anything resembling a credential is replaced
with ``[REDACTED]`` before that happens.
"""

from __future__ import annotations

import re
from typing import Any

from repo_audit.constants import (
    MAX_REPORT_VALUE_LENGTH,
    SECRET_KEYWORDS,
    SECRET_PATTERNS,
)

REDACTED = "[REDACTED]"

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# ``client_secret=abc``, ``token: "abc"`` and similar pairs
_KEYWORD_PAIR = re.compile(
    r"(" + "|".join(re.escape(kw) for kw in sorted(SECRET_KEYWORDS, key=len, reverse=True)) + r")"
    r"\s*[:=]\s*['\"]?[^\s'\"]+['\"]?",
    re.IGNORECASE,
)


def redact_secrets(text: str) -> str:
    """Replace tokens, private keys, JWTs and keyword pairs with ``[REDACTED]``."""
    if not text:
        return text

    for pattern in SECRET_PATTERNS.values():
        text = pattern.sub(REDACTED, text)

    return _KEYWORD_PAIR.sub(lambda m: f"{m.group(1)}={REDACTED}", text)


def sanitize_for_log(value: Any) -> str:
    """
    Render a value as one redacted log-safe line.

    Control characters are dropped, newlines escaped, and long values
    truncated.
    """
    if value is None:
        return ""

    text = redact_secrets(_CONTROL_CHARS.sub("", str(value)))
    text = _truncate(text, MAX_REPORT_VALUE_LENGTH, "...[truncated]")
    return text.replace("\n", "\\n").replace("\r", "\\r")


def sanitize_for_display(value: Any, max_length: int = MAX_REPORT_VALUE_LENGTH) -> str:
    """Redact and truncate a value for reports and the terminal."""
    if value is None:
        return ""
    return _truncate(redact_secrets(str(value)), max_length, "...")


def mask_token(token: str, visible_chars: int = 4) -> str:
    """
    Mask a token for display, e.g. ``ghp_****wxyz``.

    Tokens too short to keep both ends hidden are masked entirely.
    """
    if not token:
        return ""

    if len(token) <= visible_chars * 2:
        return "*" * len(token)

    return token[:visible_chars] + "****" + token[-visible_chars:]


def _truncate(text: str, max_length: int, marker: str) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + marker
