"""TOON (Token-Oriented Object Notation) encoder for context exports."""

from __future__ import annotations

import re

from ctxoptimizer.models import ContextExport

_NEEDS_QUOTING = re.compile(r'[,:"\\{}\[\]]')
_LOOKS_NUMERIC = re.compile(r"^-?(?:0|[1-9]\d*)(?:\.\d+)?$")
_KEYWORDS = frozenset({"true", "false", "null"})


def encode(export: ContextExport) -> str:
    """Encode a ContextExport into TOON format.

    Args:
        export: The selection export to encode.

    Returns:
        TOON-formatted string (no trailing newline).
    """
    parts: list[str] = [
        f"query: {_encode_value(export.query)}",
        f"totalSize: {_encode_value(export.total_size_bytes)}",
        f"estimatedTokens: {_encode_value(export.estimated_total_tokens)}",
    ]

    file_rows: list[list[str | int | float]] = [
        [f.path, f.relevance_score, f.size_bytes, f.extension]
        for f in export.files
    ]
    parts.append(
        _format_tabular(
            "files", ["path", "relevanceScore", "size", "extension"], file_rows
        )
    )

    return "\n".join(parts)


def _format_score(score: float) -> str:
    """Render a score without a trailing ``.0`` for whole numbers."""
    score = round(float(score), 4)
    if score.is_integer():
        return str(int(score))
    return f"{score:.4f}".rstrip("0").rstrip(".")


def _format_tabular(
    name: str,
    columns: list[str],
    rows: list[list[str | int | float]],
) -> str:
    """Format a tabular array in TOON notation.

    Args:
        name: The array field name.
        columns: Column header names.
        rows: List of row data (each row is a list of cell values).

    Returns:
        TOON tabular array string.
    """
    header = f"{name}[{len(rows)}]{{{','.join(columns)}}}:"
    lines = [header]
    for row in rows:
        encoded = [_encode_value(cell) for cell in row]
        lines.append(f"  {','.join(encoded)}")
    return "\n".join(lines)


def _encode_value(value: str | int | float) -> str:
    """Encode a single value, quoting if necessary per TOON rules.

    Numbers are emitted bare. Strings that would read back as a number,
    keyword or structure are quoted.
    """
    if isinstance(value, float):
        return _format_score(value)
    if isinstance(value, int):
        return str(value)

    if not value:
        return '""'

    if value != value.strip():
        return _quote(value)

    if any(c in value for c in "\n\r\t"):
        return _quote(value)

    if value.lower() in _KEYWORDS:
        return _quote(value)

    if _LOOKS_NUMERIC.match(value):
        return _quote(value)

    if _NEEDS_QUOTING.search(value):
        return _quote(value)

    if value.startswith("-"):
        return _quote(value)

    return value


def _quote(value: str) -> str:
    """Double-quote a string with TOON escape rules."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    return f'"{escaped}"'
