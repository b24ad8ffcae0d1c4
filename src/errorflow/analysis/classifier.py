"""Error classifier: finds top-level class declarations that look like errors.

Classification is heuristic. A class is an error type when the name of its
declared supertype matches a recognized error name. No type resolution is
attempted, so ``class Foo extends Bar`` where ``Bar`` itself extends
``Error`` is not recognized.

The matching rule is a replaceable ``SupertypeMatcher``:
    - ``SubstringMatcher`` (default): the supertype text contains one of the
      recognized names, case-sensitively. Handles ``errors.BaseError`` and
      ``CustomError<T>`` at the price of false positives such as
      ``ErrorBoundary``.
    - ``ExactMatcher``: the bare supertype name (qualifier and type
      arguments stripped) equals one of the recognized names.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional, Protocol

import tree_sitter

from ..config import DEFAULT_ERROR_SUPERTYPES, AnalysisConfig
from ..scanning.queries import get_class_node_types
from ..scanning.source_index import ParsedSource
from ..scanning.treesitter_parser import node_text
from .models import ErrorTypeInfo, SourceLocation

ANONYMOUS_ERROR_NAME = "AnonymousError"

_TYPE_ARGUMENTS = re.compile(r"<.*>", re.DOTALL)


class SupertypeMatcher(Protocol):
    """Decides whether a declared supertype name marks an error type."""

    def is_error_supertype(self, supertype_name: str) -> bool: ...


class SubstringMatcher:
    """Case-sensitive substring match against the recognized names."""

    def __init__(self, names: Iterable[str] = DEFAULT_ERROR_SUPERTYPES) -> None:
        self.names = tuple(names)

    def is_error_supertype(self, supertype_name: str) -> bool:
        return any(name in supertype_name for name in self.names)


class ExactMatcher:
    """Exact match of the unqualified, non-generic supertype name."""

    def __init__(self, names: Iterable[str] = DEFAULT_ERROR_SUPERTYPES) -> None:
        self.names = frozenset(names)

    def is_error_supertype(self, supertype_name: str) -> bool:
        bare = _TYPE_ARGUMENTS.sub("", supertype_name).strip()
        bare = bare.rsplit(".", 1)[-1]
        return bare in self.names


def matcher_from_config(config: AnalysisConfig) -> SupertypeMatcher:
    if config.supertype_match == "exact":
        return ExactMatcher(config.error_supertypes)
    return SubstringMatcher(config.error_supertypes)


class ErrorClassifier:
    """Produces ``ErrorTypeInfo`` for every error-like top-level class."""

    def __init__(self, matcher: Optional[SupertypeMatcher] = None) -> None:
        self.matcher = matcher or SubstringMatcher()

    def classify(self, parsed: ParsedSource, display_path: str) -> list[ErrorTypeInfo]:
        """Return error declarations in source order. Never raises."""
        found: list[ErrorTypeInfo] = []
        for class_node in _top_level_classes(parsed.root, parsed.language):
            supertype = _supertype_name(class_node)
            if supertype is None or not self.matcher.is_error_supertype(supertype):
                continue
            name_node = class_node.child_by_field_name("name")
            name = node_text(name_node) if name_node is not None else ANONYMOUS_ERROR_NAME
            found.append(
                ErrorTypeInfo(
                    name=name,
                    supertype_name=supertype,
                    location=SourceLocation(display_path, class_node.start_point[0] + 1),
                )
            )
        return found


def _top_level_classes(root: tree_sitter.Node, language: str) -> Iterator[tree_sitter.Node]:
    class_types = get_class_node_types(language)
    for child in root.named_children:
        # a bare class expression is not a statement at top level
        if child.type in class_types and child.type != "class":
            yield child
        elif child.type == "export_statement":
            for exported in child.named_children:
                if exported.type in class_types:
                    yield exported


def _supertype_name(class_node: tree_sitter.Node) -> Optional[str]:
    """Text of the extends target, or None when the class extends nothing."""
    heritage = next((c for c in class_node.named_children if c.type == "class_heritage"), None)
    if heritage is None:
        return None

    # TypeScript wraps the target in extends_clause, JavaScript does not
    extends = next((c for c in heritage.named_children if c.type == "extends_clause"), None)
    if extends is None:
        if any(c.type == "implements_clause" for c in heritage.named_children):
            return None
        extends = heritage

    text = node_text(extends).strip()
    if text.startswith("extends"):
        text = text[len("extends"):]
    return text.strip() or None
