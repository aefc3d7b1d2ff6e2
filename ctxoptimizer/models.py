"""Core data structures for ctxoptimizer."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_MAX_TOKENS = 100_000
DEFAULT_MIN_FILES = 3
DEFAULT_MAX_FILE_SIZE = 1_000_000  # 1 MB

CHARS_PER_TOKEN = 4


class ConfigError(ValueError):
    """Raised when a selection configuration is malformed."""


def estimate_tokens(content: str) -> int:
    """Approximate the token cost of a piece of text (4 characters per token)."""
    return math.ceil(len(content) / CHARS_PER_TOKEN)


@dataclass(frozen=True)
class FileRecord:
    """A scanned file: its text and the import targets found in it."""

    path: str
    size_bytes: int
    extension: str
    imports: frozenset[str] = frozenset()
    content: str = field(default="", repr=False)


@dataclass(frozen=True)
class ScoredFile:
    """A catalog record paired with its score for one query."""

    record: FileRecord
    relevance_score: float = 0.0

    @property
    def path(self) -> str:
        return self.record.path

    @property
    def size_bytes(self) -> int:
        return self.record.size_bytes

    @property
    def extension(self) -> str:
        return self.record.extension

    @property
    def imports(self) -> frozenset[str]:
        return self.record.imports

    @property
    def content(self) -> str:
        return self.record.content

    @property
    def estimated_tokens(self) -> int:
        return estimate_tokens(self.record.content)


# Repository-relative path -> record, in discovery order.
Catalog = dict[str, FileRecord]


_CONFIG_KEYS: dict[str, str] = {
    "maxTokens": "max_tokens",
    "max_tokens": "max_tokens",
    "minFiles": "min_files",
    "min_files": "min_files",
    "maxFileSize": "max_file_size",
    "max_file_size": "max_file_size",
    "contextFiles": "context_files",
    "context_files": "context_files",
}


@dataclass(frozen=True)
class SelectionConfig:
    """Budget and seed settings for a selection run."""

    max_tokens: int = DEFAULT_MAX_TOKENS
    min_files: int = DEFAULT_MIN_FILES
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    context_files: tuple[str, ...] = ()

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        defaults: SelectionConfig | None = None,
    ) -> SelectionConfig:
        """Build a config from a JSON-style mapping.

        Accepts both the camelCase keys of the JSON configuration surface
        (``maxTokens``, ``minFiles``, ``maxFileSize``, ``contextFiles``) and
        the snake_case field names.

        Args:
            data: Parsed configuration document.
            defaults: Values for keys missing from data; the class defaults
                when omitted.

        Returns:
            The resulting SelectionConfig.

        Raises:
            ConfigError: On unknown keys or values of the wrong type.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a JSON object")

        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _CONFIG_KEYS.get(key)
            if name is None:
                raise ConfigError(f"unknown configuration key '{key}'")
            if name == "context_files":
                if not isinstance(value, list) or not all(
                    isinstance(item, str) for item in value
                ):
                    raise ConfigError(f"'{key}' must be a list of paths")
                values[name] = tuple(value)
            else:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigError(f"'{key}' must be an integer")
                if value < 0:
                    raise ConfigError(f"'{key}' must not be negative")
                values[name] = value
        return replace(defaults or cls(), **values)


@dataclass(frozen=True)
class ExportedFile:
    """One selected file as it appears in an export."""

    path: str
    relevance_score: float
    size_bytes: int
    extension: str


@dataclass
class ContextExport:
    """The selected context, ready for serialization."""

    query: str
    files: list[ExportedFile] = field(default_factory=list)
    total_size_bytes: int = 0
    estimated_total_tokens: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the persisted JSON document shape."""
        return {
            "query": self.query,
            "files": [
                {
                    "path": f.path,
                    "relevanceScore": f.relevance_score,
                    "size": f.size_bytes,
                    "extension": f.extension,
                }
                for f in self.files
            ],
            "totalSize": self.total_size_bytes,
            "estimatedTokens": self.estimated_total_tokens,
        }

    def to_json(self) -> str:
        """Serialize to a JSON string indented by two spaces."""
        return json.dumps(self.to_dict(), indent=2)
