"""Language detection for the source index.

Only the ECMAScript family is analyzed: TypeScript, TSX and JavaScript
(JSX included, the JavaScript grammar parses it natively).
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

# Extension to tree-sitter language mapping
_EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}


def detect_language(filepath: Union[Path, str]) -> str:
    """Detect language from file extension.

    Args:
        filepath: Path object or string

    Returns:
        Language name ("typescript", "tsx", "javascript") or "unknown"
    """
    path = Path(filepath)
    return _EXTENSION_TO_LANGUAGE.get(path.suffix.lower(), "unknown")


def known_extensions() -> set[str]:
    """Return every extension the index knows how to parse."""
    return set(_EXTENSION_TO_LANGUAGE)
