"""Catalog construction: read discovered files and extract their imports."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import typer

from ctxoptimizer.imports import extract_imports
from ctxoptimizer.models import DEFAULT_MAX_FILE_SIZE, Catalog, FileRecord


class FileTooLargeError(OSError):
    """Raised when a file exceeds the configured size ceiling."""


def read_file(abs_path: Path, max_size_bytes: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read a file as UTF-8 text, enforcing a size ceiling.

    Args:
        abs_path: Absolute path to the file.
        max_size_bytes: Refuse files larger than this.

    Returns:
        The decoded file content.

    Raises:
        FileTooLargeError: If the file is larger than max_size_bytes.
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    size = abs_path.stat().st_size
    if size > max_size_bytes:
        raise FileTooLargeError(f"skipped (>{max_size_bytes} bytes)")
    return abs_path.read_text(encoding="utf-8")


def record_from_content(
    path: str,
    size_bytes: int,
    content: str,
    extension: str | None = None,
) -> FileRecord:
    """Build a FileRecord from already-read content.

    The extension is lower-cased, and derived from the path when not given;
    imports are extracted from the content.
    """
    if extension is None:
        extension = PurePosixPath(path).suffix
    extension = extension.lower()
    return FileRecord(
        path=path,
        size_bytes=size_bytes,
        extension=extension,
        imports=extract_imports(content, extension),
        content=content,
    )


def build_catalog(
    files: list[tuple[Path, Path, int]],
    *,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> Catalog:
    """Read files sequentially into a fresh catalog.

    Oversized and unreadable files are reported as warnings and skipped.

    Args:
        files: (relative_path, absolute_path, size_bytes) tuples from
            discovery.
        max_file_size: Skip files larger than this many bytes.

    Returns:
        Catalog keyed by POSIX relative path, in the order of ``files``.
    """
    catalog: Catalog = {}
    for rel_path, abs_path, size in files:
        if size > max_file_size:
            typer.echo(
                f"Warning: {rel_path}: skipped (>{max_file_size} bytes)", err=True
            )
            continue
        try:
            content = read_file(abs_path, max_file_size)
        except (OSError, UnicodeDecodeError) as exc:
            typer.echo(f"Warning: could not read {rel_path}: {exc}", err=True)
            continue
        record = record_from_content(rel_path.as_posix(), size, content)
        catalog[record.path] = record
    return catalog
