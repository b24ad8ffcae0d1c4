"""Source scanning: language detection, tree-sitter parsing, the source index."""

from .languages import detect_language, known_extensions
from .source_index import ParsedSource, SourceIndex
from .treesitter_parser import TreeSitterParser

__all__ = [
    "detect_language",
    "known_extensions",
    "ParsedSource",
    "SourceIndex",
    "TreeSitterParser",
]
