"""Site collector: raise sites and intercept sites of one parsed file.

Raise sites:
    throw new LoginError(...)   -> name "LoginError", kind raised
    throw err                   -> name "err", kind re-raised
    throw makeError()           -> no site (counted as unclassified)

A re-raise keeps the identifier, not the type it was bound to in an
enclosing catch. Consumers see ``kind == re-raised`` and can treat the
site as unknown risk.

Intercept sites: one per distinct ``T`` in ``<bound var> instanceof T``
inside the catch body, all located at the catch clause. A test nested in an
inner catch still belongs to the outer clause unless the inner clause
rebinds the same name. A clause with no such test emits a single fallback
site named after the declared type of the caught variable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import tree_sitter

from ..scanning.queries import get_query
from ..scanning.source_index import ParsedSource
from ..scanning.treesitter_parser import TreeSitterParser, node_text
from .models import ErrorSite, SiteKind, SourceLocation

logger = logging.getLogger(__name__)

DEFAULT_IMPLICIT_CATCH_TYPE = "unknown"


@dataclass
class CollectedSites:
    """Raw collector output for one file."""

    raised: list[ErrorSite] = field(default_factory=list)
    intercepted: list[ErrorSite] = field(default_factory=list)
    unclassified_raises: int = 0


class SiteCollector:
    """Extracts raise and intercept sites from a parsed file.

    Args:
        parser: Parser that owns the compiled queries
        implicit_catch_type: Fallback intercept name when a catch clause
            has no type annotation
    """

    def __init__(
        self,
        parser: TreeSitterParser,
        implicit_catch_type: str = DEFAULT_IMPLICIT_CATCH_TYPE,
    ) -> None:
        self._parser = parser
        self.implicit_catch_type = implicit_catch_type

    def collect(self, parsed: ParsedSource, display_path: str) -> CollectedSites:
        """Collect all sites in source order. Never raises for valid trees."""
        sites = CollectedSites()
        language = parsed.language

        throw_query = get_query(language, "throw")
        if throw_query is not None:
            for node, _ in self._parser.query(parsed.tree, throw_query, language):
                site = self._raise_site(node, display_path)
                if site is None:
                    sites.unclassified_raises += 1
                else:
                    sites.raised.append(site)

        catch_query = get_query(language, "catch")
        if catch_query is not None:
            for node, _ in self._parser.query(parsed.tree, catch_query, language):
                sites.intercepted.extend(self._intercept_sites(node, language, display_path))

        if sites.unclassified_raises:
            logger.debug(
                f"{display_path}: {sites.unclassified_raises} raise statement(s) "
                "with no recognizable error name"
            )
        return sites

    def _raise_site(self, throw_node: tree_sitter.Node, path: str) -> Optional[ErrorSite]:
        expression = _unwrap(_first_expression(throw_node))
        if expression is None:
            return None

        location = SourceLocation(path, throw_node.start_point[0] + 1)
        if expression.type == "new_expression":
            constructor = expression.child_by_field_name("constructor")
            name = node_text(constructor).strip()
            if not name:
                return None
            return ErrorSite(name=name, kind=SiteKind.RAISED, location=location)
        if expression.type == "identifier":
            return ErrorSite(name=node_text(expression), kind=SiteKind.RERAISED, location=location)
        return None

    def _intercept_sites(
        self, catch_node: tree_sitter.Node, language: str, path: str
    ) -> list[ErrorSite]:
        location = SourceLocation(path, catch_node.start_point[0] + 1)
        bound_name = _bound_name(catch_node)

        tested: list[str] = []
        body = catch_node.child_by_field_name("body")
        test_query = get_query(language, "type_test")
        if bound_name is not None and body is not None and test_query is not None:
            for node, _ in self._parser.query_node(body, test_query, language):
                type_name = _instanceof_target(node, bound_name)
                if type_name is None:
                    continue
                if not _same_node(_binding_catch(node, bound_name), catch_node):
                    continue
                if type_name not in tested:
                    tested.append(type_name)

        if tested:
            return [
                ErrorSite(name=name, kind=SiteKind.INTERCEPTED, location=location)
                for name in tested
            ]

        return [
            ErrorSite(
                name=self._declared_type(catch_node),
                kind=SiteKind.INTERCEPTED,
                location=location,
            )
        ]

    def _declared_type(self, catch_node: tree_sitter.Node) -> str:
        annotation = catch_node.child_by_field_name("type")
        if annotation is None:
            return self.implicit_catch_type
        # type_annotation wraps the type after ':'
        inner = annotation.named_children[0] if annotation.named_children else annotation
        text = node_text(inner).lstrip(":").strip()
        return text or self.implicit_catch_type


def _first_expression(throw_node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    for child in throw_node.named_children:
        if child.type != "comment":
            return child
    return None


def _unwrap(node: Optional[tree_sitter.Node]) -> Optional[tree_sitter.Node]:
    while node is not None and node.type == "parenthesized_expression":
        inner = [c for c in node.named_children if c.type != "comment"]
        node = inner[0] if inner else None
    return node


def _is_identifier(node: Optional[tree_sitter.Node]) -> bool:
    return node is not None and node.type == "identifier"


def _instanceof_target(node: tree_sitter.Node, bound_name: str) -> Optional[str]:
    """``T`` when ``node`` is ``<bound_name> instanceof T``, else None."""
    operator = node.child_by_field_name("operator")
    if operator is None or operator.type != "instanceof":
        return None
    left = _unwrap(node.child_by_field_name("left"))
    if not _is_identifier(left) or node_text(left) != bound_name:
        return None
    right = node.child_by_field_name("right")
    name = node_text(right).strip()
    return name or None


def _bound_name(catch_node: tree_sitter.Node) -> Optional[str]:
    parameter = catch_node.child_by_field_name("parameter")
    return node_text(parameter) if _is_identifier(parameter) else None


def _binding_catch(node: tree_sitter.Node, name: str) -> Optional[tree_sitter.Node]:
    """Nearest enclosing catch clause that binds ``name``."""
    parent = node.parent
    while parent is not None:
        if parent.type == "catch_clause" and _bound_name(parent) == name:
            return parent
        parent = parent.parent
    return None


def _same_node(a: Optional[tree_sitter.Node], b: tree_sitter.Node) -> bool:
    # QueryCursor may hand back distinct objects for one node
    return a is not None and (a.start_byte, a.end_byte) == (b.start_byte, b.end_byte)
