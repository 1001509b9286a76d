"""
File operations.

Reads the list of repositories to audit and writes reports, with
validation and error handling.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path

from repo_audit.constants import MAX_INPUT_FILE_SIZE_BYTES
from repo_audit.core.result import NameWithOwner
from repo_audit.exceptions import ValidationError


def read_repository_list(
    file_path: Path | str,
    max_size: int = MAX_INPUT_FILE_SIZE_BYTES,
    encoding: str = "utf-8",
) -> list[NameWithOwner]:
    """
    Read repositories to audit from a file.

    Two layouts are accepted:

    - one ``owner/name`` per line
    - a CSV file with ``owner`` and ``name`` header columns

    Blank lines and lines starting with ``#`` are skipped. Order is
    preserved and duplicates are kept.

    Raises:
        ValidationError: If the file is missing, too large, or contains
            a malformed repository reference
    """
    path = Path(file_path)

    if not path.exists():
        raise ValidationError("Repository list file does not exist", field="input_path")
    if not path.is_file():
        raise ValidationError("Repository list path is not a file", field="input_path")
    if path.stat().st_size > max_size:
        raise ValidationError(
            "Repository list file is too large",
            field="input_path",
            details={"max_bytes": max_size},
        )

    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(
            f"Could not read repository list file: {type(e).__name__}",
            field="input_path",
        ) from e
    lines = [
        line for line in content.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]
    if not lines:
        return []

    header = [column.strip().lower() for column in lines[0].split(",")]
    if "owner" in header and "name" in header:
        return _read_csv_rows(lines)

    repositories = []
    for line_number, line in enumerate(lines, 1):
        try:
            repositories.append(NameWithOwner.from_string(line))
        except ValidationError as e:
            e.details["line"] = line_number
            raise
    return repositories


def _read_csv_rows(lines: list[str]) -> list[NameWithOwner]:
    reader = csv.DictReader(io.StringIO("\n".join(lines)))
    # Header names are matched case-insensitively
    reader.fieldnames = [name.strip().lower() for name in reader.fieldnames or []]

    repositories = []
    for row_number, row in enumerate(reader, 2):
        owner = (row.get("owner") or "").strip()
        name = (row.get("name") or "").strip()
        if not owner or not name:
            raise ValidationError(
                "CSV row is missing an owner or name",
                field="input_path",
                details={"line": row_number},
            )
        repositories.append(NameWithOwner(owner=owner, name=name))
    return repositories


def safe_write_file(
    file_path: Path | str,
    content: str,
    encoding: str = "utf-8",
) -> Path:
    """
    Write content to a file, creating parent directories.

    Args:
        file_path: Path to write to
        content: Content to write
        encoding: File encoding

    Returns:
        Resolved path to the written file

    Raises:
        ValidationError: If the path is an existing directory or a symlink
    """
    path = Path(file_path)

    if path.is_symlink():
        raise ValidationError("Refusing to write through a symlink", field="output_path")
    if path.is_dir():
        raise ValidationError("Output path is a directory", field="output_path")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding=encoding)

    return path.resolve()
