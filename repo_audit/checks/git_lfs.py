"""
Git LFS usage check.

A repository uses Git LFS when its root ``.gitattributes`` routes paths
through the ``lfs`` filter. LFS objects live outside the Git object
database, so a plain clone or push of the history does not carry them.
"""

from __future__ import annotations

import base64
import binascii

from repo_audit.checks.base import BaseCheck, CheckContext, pluralize
from repo_audit.constants import GITATTRIBUTES_PATH, LFS_FILTER_PATTERN
from repo_audit.core.result import AuditorWarning
from repo_audit.github.client import repo_path

TYPE = "git-lfs-objects"


class GitLFSObjectsCheck(BaseCheck):
    """Warn when ``.gitattributes`` contains ``filter=lfs`` rules."""

    @property
    def type(self) -> str:
        return TYPE

    @property
    def name(self) -> str:
        return "Git LFS Objects"

    @property
    def description(self) -> str:
        return "Detects repositories that store files in Git LFS."

    def run(self, context: CheckContext) -> list[AuditorWarning]:
        contents = context.client.get_or_none(
            repo_path(context.owner, context.repo, "contents", GITATTRIBUTES_PATH)
        )
        # Missing file, or a directory listing
        if not isinstance(contents, dict):
            return []

        text = self._decode(contents, context)
        rules = [
            line for line in text.splitlines()
            if not line.lstrip().startswith("#") and LFS_FILTER_PATTERN.search(line)
        ]
        if not rules:
            return []

        return [
            self.create_warning(
                f"This repository uses Git LFS ({GITATTRIBUTES_PATH} has "
                f"{pluralize(len(rules), 'filter=lfs rule')}). LFS objects are stored "
                "outside the Git history and must be transferred separately."
            )
        ]

    def _decode(self, contents: dict, context: CheckContext) -> str:
        encoded = contents.get("content") or ""
        if contents.get("encoding", "base64") != "base64":
            return encoded
        try:
            return base64.b64decode(encoded).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError):
            context.logger.debug(
                f"Could not decode {GITATTRIBUTES_PATH}",
                extra={"owner": context.owner, "repo": context.repo},
            )
            return ""
