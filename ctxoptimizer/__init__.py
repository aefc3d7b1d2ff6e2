"""ctxoptimizer: pick the files of a repository most relevant to a query."""

from ctxoptimizer.models import FileRecord, ScoredFile, SelectionConfig
from ctxoptimizer.ranking import get_optimal_context
from ctxoptimizer.scoring import calculate_relevance

__version__ = "0.1.0"
__all__ = [
    "FileRecord",
    "ScoredFile",
    "SelectionConfig",
    "calculate_relevance",
    "get_optimal_context",
]
