"""Parallel catalog building for the --fast flag."""

from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import typer

from ctxoptimizer.catalog import read_file, record_from_content
from ctxoptimizer.models import DEFAULT_MAX_FILE_SIZE, Catalog, FileRecord


def _read_file_worker(
    rel_path: Path,
    abs_path: Path,
    max_size_bytes: int,
) -> tuple[Path, FileRecord | None, str | None]:
    """Read and index a single file, returning a record or a warning message.

    Module-level function required for ProcessPoolExecutor pickling.

    Args:
        rel_path: Relative path to the file.
        abs_path: Absolute path to the file.
        max_size_bytes: Skip files larger than this.

    Returns:
        Tuple of (rel_path, record_or_None, warning_or_None).
    """
    try:
        size = abs_path.stat().st_size
        content = read_file(abs_path, max_size_bytes)
    except (OSError, UnicodeDecodeError) as exc:
        return (rel_path, None, str(exc))
    return (rel_path, record_from_content(rel_path.as_posix(), size, content), None)


def build_catalog_parallel(
    files: list[tuple[Path, Path, int]],
    *,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    max_workers: int | None = None,
) -> Catalog:
    """Read files in parallel using ProcessPoolExecutor.

    Args:
        files: (relative_path, absolute_path, size_bytes) tuples from
            discovery.
        max_file_size: Skip files larger than this (default 1MB).
        max_workers: Maximum number of worker processes.

    Returns:
        Catalog of successfully read files, in the order of ``files``.
    """
    if not files:
        return {}
    if max_workers is None:
        max_workers = min(os.cpu_count() or 1, len(files))

    records: dict[Path, FileRecord] = {}
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(
                _read_file_worker, rel_path, abs_path, max_file_size
            ): rel_path
            for rel_path, abs_path, _size in files
        }
        for future in as_completed(futures):
            rel_path, record, warning = future.result()
            if warning:
                typer.echo(f"Warning: {rel_path}: {warning}", err=True)
                continue
            records[rel_path] = record

    # Completion order is arbitrary; restore discovery order for stable ties.
    catalog: Catalog = {}
    for rel_path, _abs_path, _size in files:
        record = records.get(rel_path)
        if record is not None:
            catalog[record.path] = record
    return catalog
