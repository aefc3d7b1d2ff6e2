"""File discovery with gitignore support."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pathspec
import typer

from ctxoptimizer.languages import is_code_extension

SKIP_DIRS: frozenset[str] = frozenset(
    {
        "__pycache__",
        "node_modules",
        ".git",
        ".hg",
        ".svn",
        "venv",
        ".venv",
        "env",
        ".env",
        "build",
        "dist",
        ".next",
        "coverage",
        ".tox",
        ".mypy_cache",
        ".ruff_cache",
        ".pytest_cache",
        "egg-info",
    }
)

SKIP_FILES: frozenset[str] = frozenset(
    {
        ".DS_Store",
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
    }
)


def _git_ls_files(root: Path) -> set[str] | None:
    """Return the set of git-tracked and untracked-but-not-ignored files.

    Uses ``git ls-files -z --cached --others --exclude-standard`` to respect
    all gitignore files (root, subdirectory, and global). NUL-separated
    output keeps non-ASCII paths unquoted.

    Returns:
        Set of repo-relative file paths, or None if git is unavailable
        or the directory is not a git repository.
    """
    if not (root / ".git").exists():
        return None
    try:
        result = subprocess.run(
            ["git", "ls-files", "-z", "--cached", "--others", "--exclude-standard"],
            cwd=root,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="surrogateescape",
            timeout=10,
            check=False,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return {path for path in result.stdout.split("\0") if path}


def _warn_unreadable_dir(exc: OSError) -> None:
    typer.echo(f"Warning: could not read directory {exc.filename}: {exc}", err=True)


def discover_files(
    root: Path,
    *,
    extra_ignores: list[str] | None = None,
) -> list[tuple[Path, Path, int]]:
    """Walk root and return the files worth cataloging.

    Args:
        root: Repository root directory.
        extra_ignores: Additional gitignore-style patterns to exclude.

    Returns:
        List of (relative_path, absolute_path, size_bytes) tuples, sorted by
        relative path.
    """
    root = root.resolve()
    git_files = _git_ls_files(root)
    gitignore = _load_gitignore(root) if git_files is None else None

    extra_spec = None
    if extra_ignores:
        extra_spec = pathspec.PathSpec.from_lines("gitignore", extra_ignores)

    results: list[tuple[Path, Path, int]] = []

    for dirpath, dirnames, filenames in os.walk(
        root, onerror=_warn_unreadable_dir, followlinks=False
    ):
        # Prune skip dirs and hidden dirs in-place to prevent descent
        dirnames[:] = sorted(
            d for d in dirnames if d not in SKIP_DIRS and not d.startswith(".")
        )

        rel_dir = Path(dirpath).relative_to(root)

        for fname in sorted(filenames):
            if fname.startswith(".") or fname in SKIP_FILES:
                continue

            if not is_code_extension(Path(fname).suffix):
                continue

            full_path = Path(dirpath) / fname
            if full_path.is_symlink():
                continue

            rel = rel_dir / fname
            rel_str = rel.as_posix()

            if git_files is not None:
                if rel_str not in git_files:
                    continue
            elif gitignore and gitignore.match_file(rel_str):
                continue

            if extra_spec and extra_spec.match_file(rel_str):
                continue

            try:
                size = full_path.stat().st_size
            except OSError as exc:
                typer.echo(f"Warning: {rel}: {exc}", err=True)
                continue

            results.append((rel, full_path, size))

    results.sort()
    return results


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore from root, returning a PathSpec matcher."""
    gitignore_path = root / ".gitignore"
    if gitignore_path.is_file():
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
        return pathspec.PathSpec.from_lines("gitignore", lines)
    return pathspec.PathSpec.from_lines("gitignore", [])
