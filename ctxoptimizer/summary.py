"""Human-readable summary and JSON export of a selected context."""

from __future__ import annotations

from ctxoptimizer.models import ContextExport, ExportedFile, ScoredFile


def export_context(query: str, files: list[ScoredFile]) -> ContextExport:
    """Collect the per-file fields and totals of a selection.

    Args:
        query: The query the files were selected for.
        files: Selected files, in selection order.

    Returns:
        A ContextExport mirroring the selection order.
    """
    return ContextExport(
        query=query,
        files=[
            ExportedFile(
                path=f.path,
                relevance_score=f.relevance_score,
                size_bytes=f.size_bytes,
                extension=f.extension,
            )
            for f in files
        ],
        total_size_bytes=sum(f.size_bytes for f in files),
        estimated_total_tokens=sum(f.estimated_tokens for f in files),
    )


def generate_context_summary(files: list[ScoredFile]) -> str:
    """Render a Markdown summary of a selection.

    Args:
        files: Selected files.

    Returns:
        Markdown text listing totals and files by descending score.
    """
    total_size = sum(f.size_bytes for f in files)
    total_tokens = sum(f.estimated_tokens for f in files)

    summary = f"# Context Summary ({len(files)} files)\n\n"
    summary += f"**Total Size:** {total_size:,} bytes\n"
    summary += f"**Estimated Tokens:** {total_tokens:,}\n\n"

    summary += "## Selected Files:\n"
    for f in sorted(files, key=lambda sf: sf.relevance_score, reverse=True):
        summary += f"- `{f.path}` (score: {f.relevance_score:.1f})\n"

    return summary
