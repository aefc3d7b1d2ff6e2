"""Tests for core data structures and configuration parsing."""

from __future__ import annotations

import dataclasses

import pytest

from ctxoptimizer.models import (
    ConfigError,
    FileRecord,
    ScoredFile,
    SelectionConfig,
)


class TestSelectionConfig:
    """Tests for SelectionConfig defaults and from_mapping."""

    def test_defaults(self) -> None:
        config = SelectionConfig()
        assert config.max_tokens == 100_000
        assert config.min_files == 3
        assert config.max_file_size == 1_000_000
        assert config.context_files == ()

    def test_camel_case_keys(self) -> None:
        config = SelectionConfig.from_mapping(
            {
                "maxTokens": 500,
                "minFiles": 1,
                "maxFileSize": 2048,
                "contextFiles": ["src/api.ts"],
            }
        )
        assert config == SelectionConfig(
            max_tokens=500,
            min_files=1,
            max_file_size=2048,
            context_files=("src/api.ts",),
        )

    def test_snake_case_keys(self) -> None:
        config = SelectionConfig.from_mapping({"max_tokens": 10, "context_files": []})
        assert config.max_tokens == 10
        assert config.min_files == 3

    def test_empty_mapping_gives_defaults(self) -> None:
        assert SelectionConfig.from_mapping({}) == SelectionConfig()

    def test_explicit_defaults(self) -> None:
        base = SelectionConfig(max_tokens=7, min_files=9)
        config = SelectionConfig.from_mapping({"minFiles": 1}, base)
        assert config.max_tokens == 7
        assert config.min_files == 1

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="unknown configuration key"):
            SelectionConfig.from_mapping({"maxTokenz": 5})

    def test_wrong_type(self) -> None:
        with pytest.raises(ConfigError):
            SelectionConfig.from_mapping({"maxTokens": "many"})

    def test_bool_rejected(self) -> None:
        with pytest.raises(ConfigError):
            SelectionConfig.from_mapping({"minFiles": True})

    def test_negative_rejected(self) -> None:
        with pytest.raises(ConfigError):
            SelectionConfig.from_mapping({"minFiles": -1})

    def test_context_files_must_be_paths(self) -> None:
        with pytest.raises(ConfigError):
            SelectionConfig.from_mapping({"contextFiles": "src/api.ts"})
        with pytest.raises(ConfigError):
            SelectionConfig.from_mapping({"contextFiles": [1, 2]})

    def test_not_an_object(self) -> None:
        with pytest.raises(ConfigError):
            SelectionConfig.from_mapping([1, 2])  # type: ignore[arg-type]

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)


class TestRecords:
    """Tests for FileRecord and ScoredFile."""

    def test_file_record_is_immutable(self) -> None:
        record = FileRecord(path="a.py", size_bytes=1, extension=".py")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.path = "b.py"  # type: ignore[misc]

    def test_scored_file_defaults_to_zero(self) -> None:
        record = FileRecord(path="a.py", size_bytes=1, extension=".py")
        assert ScoredFile(record=record).relevance_score == 0.0

    def test_scored_file_delegates_to_record(self) -> None:
        record = FileRecord(
            path="src/a.py",
            size_bytes=5,
            extension=".py",
            imports=frozenset({"os"}),
            content="hello",
        )
        scored = ScoredFile(record=record, relevance_score=3.5)
        assert scored.path == "src/a.py"
        assert scored.size_bytes == 5
        assert scored.extension == ".py"
        assert scored.imports == {"os"}
        assert scored.content == "hello"
        assert scored.estimated_tokens == 2
