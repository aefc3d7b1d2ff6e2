"""Query relevance scoring for cataloged files."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import PurePosixPath

from ctxoptimizer.models import Catalog, FileRecord

FILENAME_MATCH_SCORE = 10.0
PATH_MATCH_SCORE = 5.0
CONTENT_MATCH_SCORE = 2.0
CONTEXT_FILE_SCORE = 15.0
IMPORTED_BY_CONTEXT_SCORE = 8.0
ENTRY_POINT_SCORE = 5.0

DOC_DECAY = 0.5
TEST_DECAY = 0.7
CONFIG_DECAY = 0.8

DOC_EXTENSIONS: frozenset[str] = frozenset({".md", ".txt"})
CONFIG_EXTENSIONS: frozenset[str] = frozenset({".json", ".yaml", ".yml", ".toml"})
ENTRY_POINT_NAMES: frozenset[str] = frozenset({"package.json", "main.py", "index.ts"})

_WORD = re.compile(r"\w+", re.ASCII)
_RELATIVE_PREFIX = re.compile(r"^(?:\.{1,2}/)+|^\.+")


def tokenize_query(query: str) -> frozenset[str]:
    """Split a query into its set of lower-cased word tokens."""
    return frozenset(_WORD.findall(query.lower()))


def import_match_targets(imports: frozenset[str]) -> frozenset[str]:
    """Strip relative prefixes (``./``, ``../``, leading dots) from targets.

    ``"./db"`` becomes ``"db"`` so it can match ``src/db/client.ts``.
    Targets that are nothing but a prefix (``"."``) are dropped, since an
    empty string would match every path.
    """
    stripped = (_RELATIVE_PREFIX.sub("", target) for target in imports)
    return frozenset(target for target in stripped if target)


def _category_decay(path_lower: str, extension: str) -> float:
    """Return the multiplier for docs, tests and config; first match wins."""
    if extension in DOC_EXTENSIONS:
        return DOC_DECAY
    if "test" in path_lower or "spec" in path_lower:
        return TEST_DECAY
    if "config" in path_lower or extension in CONFIG_EXTENSIONS:
        return CONFIG_DECAY
    return 1.0


def score_file(
    record: FileRecord,
    tokens: frozenset[str],
    context_files: Sequence[str],
    seed_imports: Sequence[frozenset[str]],
) -> float:
    """Score one record against pre-tokenized query terms.

    Args:
        record: The file to score.
        tokens: Lower-cased query tokens.
        context_files: Paths the caller already considers relevant.
        seed_imports: Import match targets (see import_match_targets) of
            the context files present in the catalog, one entry per
            context file.

    Returns:
        The relevance score (unbounded, may be 0).
    """
    filename = PurePosixPath(record.path).name.lower()
    path_lower = record.path.lower()
    content_lower = record.content.lower()

    score = 0.0
    if any(token in filename for token in tokens):
        score += FILENAME_MATCH_SCORE
    score += PATH_MATCH_SCORE * sum(1 for token in tokens if token in path_lower)
    score += CONTENT_MATCH_SCORE * sum(
        1 for token in tokens if token in content_lower
    )

    if record.path in context_files:
        score += CONTEXT_FILE_SCORE
    for imports in seed_imports:
        if any(target in record.path for target in imports):
            score += IMPORTED_BY_CONTEXT_SCORE

    score *= _category_decay(path_lower, record.extension)

    # Entry-point bonus is applied after decay so it is never discounted.
    if filename in ENTRY_POINT_NAMES:
        score += ENTRY_POINT_SCORE
    return score


def calculate_relevance(
    catalog: Catalog,
    query: str,
    context_files: Sequence[str] | None = None,
) -> dict[str, float]:
    """Score every cataloged file against a query.

    Scores are recomputed from scratch on each call; the catalog is not
    modified.

    Args:
        catalog: Files to score.
        query: Free-text query.
        context_files: Optional seed paths. Each one gets a direct boost,
            and files its imports point at get an import boost. Seeds
            missing from the catalog only contribute the direct boost.

    Returns:
        Mapping of path to score, in catalog order.
    """
    tokens = tokenize_query(query)
    context_files = list(context_files or ())
    seed_imports = [
        import_match_targets(catalog[path].imports)
        for path in context_files
        if path in catalog
    ]

    return {
        path: score_file(record, tokens, context_files, seed_imports)
        for path, record in catalog.items()
    }
