"""Shared test fixtures for ctxoptimizer."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from ctxoptimizer.catalog import record_from_content
from ctxoptimizer.models import Catalog


def _build_catalog(files: dict[str, str]) -> Catalog:
    return {
        path: record_from_content(path, len(content.encode("utf-8")), content)
        for path, content in files.items()
    }


@pytest.fixture()
def make_catalog() -> Callable[[dict[str, str]], Catalog]:
    """Build an in-memory catalog from path -> content, keeping dict order."""
    return _build_catalog


@pytest.fixture()
def sample_repo(tmp_path: Path) -> Path:
    """Create a small mixed Python/TypeScript project on disk."""
    root = tmp_path / "project"
    (root / "src" / "db").mkdir(parents=True)
    (root / "tests").mkdir()

    (root / "src" / "main.py").write_text(
        """\
from auth import login


def run() -> None:
    login("alice")
""",
        encoding="utf-8",
    )
    (root / "src" / "auth.py").write_text(
        """\
import hashlib


def login(user: str) -> str:
    return hashlib.sha256(user.encode()).hexdigest()
""",
        encoding="utf-8",
    )
    (root / "src" / "api.ts").write_text(
        """\
import { connect } from './db';

export function handler() {
  return connect();
}
""",
        encoding="utf-8",
    )
    (root / "src" / "db" / "client.ts").write_text(
        "export const connect = () => null;\n",
        encoding="utf-8",
    )
    (root / "tests" / "test_auth.py").write_text(
        "from auth import login\n",
        encoding="utf-8",
    )
    (root / "README.md").write_text(
        "# Demo\n\nAuthentication demo.\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture()
def sample_catalog() -> Catalog:
    """Pre-built catalog mirroring sample_repo, in sorted path order."""
    return _build_catalog(
        {
            "README.md": "# Demo\n\nAuthentication demo.\n",
            "src/api.ts": "import { connect } from './db';\n",
            "src/auth.py": "import hashlib\n\ndef login(user):\n    pass\n",
            "src/db/client.ts": "export const connect = () => null;\n",
            "src/main.py": "from auth import login\n",
            "tests/test_auth.py": "from auth import login\n",
        }
    )
