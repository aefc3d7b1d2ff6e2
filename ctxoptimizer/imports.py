"""Regex-based import target extraction."""

from __future__ import annotations

from ctxoptimizer.languages import language_for_extension


def extract_imports(content: str, extension: str) -> frozenset[str]:
    """Collect the raw import targets referenced by a file.

    Targets are returned as written (``"./db"``, ``"collections"``,
    ``"stdio.h"``); they are never resolved to files.

    Args:
        content: Decoded file text.
        extension: File extension including the dot (e.g., ".py").

    Returns:
        Set of import targets; empty for extensions without patterns.
    """
    language = language_for_extension(extension)
    if language is None or not content:
        return frozenset()

    targets: set[str] = set()
    for pattern in language.patterns:
        for match in pattern.finditer(content):
            target = match.group(1)
            if not target:
                continue
            targets.add(target)
    return frozenset(targets)
