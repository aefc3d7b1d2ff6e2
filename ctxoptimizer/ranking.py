"""Token-budget-aware file selection."""

from __future__ import annotations

from ctxoptimizer.models import Catalog, ScoredFile, SelectionConfig
from ctxoptimizer.scoring import calculate_relevance


def rank_files(
    catalog: Catalog,
    query: str,
    context_files: tuple[str, ...] | list[str] = (),
) -> list[ScoredFile]:
    """Score the catalog and sort it by relevance, highest first.

    The sort is stable: equal scores keep catalog (discovery) order.
    """
    scores = calculate_relevance(catalog, query, context_files)
    scored = [
        ScoredFile(record=record, relevance_score=scores[path])
        for path, record in catalog.items()
    ]
    scored.sort(key=lambda sf: sf.relevance_score, reverse=True)
    return scored


def get_optimal_context(
    catalog: Catalog,
    query: str,
    config: SelectionConfig | None = None,
) -> list[ScoredFile]:
    """Greedily pick the highest-scoring files that fit the token budget.

    Walks files by descending score. Once ``min_files`` are selected, the
    walk stops at the first zero-score file, and files that would push the
    total past ``max_tokens`` are skipped. Until then, files are taken even
    if they exceed the budget.

    Args:
        catalog: Files to choose from.
        query: Free-text query.
        config: Budget and seed settings; defaults apply when omitted.

    Returns:
        Selected files in acceptance (score-descending) order.
    """
    if config is None:
        config = SelectionConfig()

    selected: list[ScoredFile] = []
    total_tokens = 0

    for scored in rank_files(catalog, query, config.context_files):
        if scored.relevance_score == 0 and len(selected) >= config.min_files:
            break

        file_tokens = scored.estimated_tokens
        if total_tokens + file_tokens <= config.max_tokens or (
            len(selected) < config.min_files
        ):
            selected.append(scored)
            total_tokens += file_tokens

    return selected
