"""Tests for regex-based import extraction."""

from __future__ import annotations

from ctxoptimizer.imports import extract_imports


class TestPythonImports:
    """Tests for Python import statements."""

    def test_import_and_from_import(self) -> None:
        content = "import os\nfrom collections import OrderedDict"
        assert extract_imports(content, ".py") == {"os", "collections"}

    def test_imported_names_are_not_targets(self) -> None:
        result = extract_imports("from typing import Any, Optional\n", ".py")
        assert result == {"typing"}

    def test_relative_and_dotted_modules(self) -> None:
        content = "from .models import User\nimport a.b.c\n"
        assert extract_imports(content, ".py") == {".models", "a.b.c"}

    def test_indented_import(self) -> None:
        content = "def load():\n    import json\n    return json\n"
        assert extract_imports(content, ".py") == {"json"}

    def test_import_word_inside_text_ignored(self) -> None:
        content = 'message = "please import data"\n'
        assert extract_imports(content, ".py") == frozenset()

    def test_duplicates_collapse(self) -> None:
        content = "import os\nimport os\nfrom os import path\n"
        assert extract_imports(content, ".py") == {"os"}


class TestJavaScriptImports:
    """Tests for JS/TS module references."""

    def test_all_import_forms(self) -> None:
        content = (
            "import React from 'react';\n"
            'const fs = require("fs");\n'
            "import './styles.css';\n"
            'export { x } from "./x";\n'
        )
        assert extract_imports(content, ".ts") == {
            "react",
            "fs",
            "./styles.css",
            "./x",
        }

    def test_named_imports(self) -> None:
        content = "import { connect } from './db';\n"
        assert extract_imports(content, ".tsx") == {"./db"}

    def test_vue_and_svelte_share_patterns(self) -> None:
        content = "import Button from './Button.vue'\n"
        assert extract_imports(content, ".vue") == {"./Button.vue"}
        assert extract_imports(content, ".svelte") == {"./Button.vue"}


class TestOtherLanguages:
    """Tests for the remaining language families."""

    def test_java(self) -> None:
        content = "import java.util.List;\nimport com.acme.Foo;\n"
        assert extract_imports(content, ".java") == {"java.util.List", "com.acme.Foo"}

    def test_go(self) -> None:
        assert extract_imports('import "fmt"\n', ".go") == {"fmt"}

    def test_rust(self) -> None:
        content = "use std::collections::HashMap;\nuse crate::db;\n"
        assert extract_imports(content, ".rs") == {
            "std::collections::HashMap",
            "crate::db",
        }

    def test_c_includes(self) -> None:
        content = '#include <stdio.h>\n#include "local.h"\n'
        assert extract_imports(content, ".c") == {"stdio.h", "local.h"}
        assert extract_imports(content, ".hpp") == {"stdio.h", "local.h"}


class TestUnsupported:
    """Tests for extensions without import patterns."""

    def test_unsupported_extension_empty(self) -> None:
        assert extract_imports("require 'json'\n", ".rb") == frozenset()

    def test_no_extension_empty(self) -> None:
        assert extract_imports("import os\n", "") == frozenset()

    def test_empty_content(self) -> None:
        assert extract_imports("", ".py") == frozenset()

    def test_extension_case_insensitive(self) -> None:
        assert extract_imports("import os\n", ".PY") == {"os"}

    def test_returns_frozenset(self) -> None:
        assert isinstance(extract_imports("import os\n", ".py"), frozenset)
