"""Language registry: recognized extensions and their import patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass

CODE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".py",
        ".js",
        ".ts",
        ".jsx",
        ".tsx",
        ".java",
        ".cpp",
        ".c",
        ".h",
        ".hpp",
        ".cs",
        ".go",
        ".rs",
        ".rb",
        ".php",
        ".swift",
        ".kt",
        ".sql",
        ".sh",
        ".bash",
        ".yaml",
        ".yml",
        ".json",
        ".toml",
        ".md",
        ".txt",
        ".vue",
        ".svelte",
    }
)

IGNORE_EXTENSIONS: frozenset[str] = frozenset(
    {".pyc", ".pyo", ".so", ".dylib", ".dll", ".exe", ".bin", ".lock"}
)


@dataclass(frozen=True)
class ImportLanguage:
    """A language family and the patterns that find its import targets.

    Each pattern's first capture group is the import target.
    """

    name: str
    extensions: tuple[str, ...]
    patterns: tuple[re.Pattern[str], ...]


LANGUAGES: dict[str, ImportLanguage] = {
    "python": ImportLanguage(
        name="python",
        extensions=(".py",),
        patterns=(
            re.compile(r"^[ \t]*from\s+([.\w]+)\s+import\b", re.MULTILINE),
            re.compile(r"^[ \t]*import\s+([.\w]+)", re.MULTILINE),
        ),
    ),
    "javascript": ImportLanguage(
        name="javascript",
        extensions=(".js", ".ts", ".jsx", ".tsx", ".vue", ".svelte"),
        patterns=(
            re.compile(r"""from\s+['"]([^'"]+)['"]"""),
            re.compile(r"""require\(['"]([^'"]+)['"]\)"""),
            re.compile(r"""import\s+['"]([^'"]+)['"]"""),
            re.compile(r"""import\s+.*\s+from\s+['"]([^'"]+)['"]"""),
        ),
    ),
    "java": ImportLanguage(
        name="java",
        extensions=(".java",),
        patterns=(re.compile(r"\bimport\s+([.\w]+);"),),
    ),
    "go": ImportLanguage(
        name="go",
        extensions=(".go",),
        patterns=(re.compile(r"""\bimport\s+['"]([^'"]+)['"]"""),),
    ),
    "rust": ImportLanguage(
        name="rust",
        extensions=(".rs",),
        patterns=(re.compile(r"\buse\s+([:\w]+)"),),
    ),
    "c": ImportLanguage(
        name="c",
        extensions=(".c", ".cpp", ".h", ".hpp"),
        patterns=(re.compile(r"""#include\s+[<"]([^>"]+)[>"]"""),),
    ),
}

EXTENSION_MAP: dict[str, str] = {
    ext: lang.name for lang in LANGUAGES.values() for ext in lang.extensions
}


def language_for_extension(ext: str) -> ImportLanguage | None:
    """Look up a language by file extension.

    Args:
        ext: File extension including the dot (e.g., ".py"), any case.

    Returns:
        The ImportLanguage, or None if imports are not extracted for it.
    """
    lang_name = EXTENSION_MAP.get(ext.lower())
    if lang_name is None:
        return None
    return LANGUAGES.get(lang_name)


def is_code_extension(ext: str) -> bool:
    """Return True if files with this extension belong in a catalog."""
    ext = ext.lower()
    return ext in CODE_EXTENSIONS and ext not in IGNORE_EXTENSIONS
