"""Tree-sitter query registry.

Maps language names to their query modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import javascript, typescript

if TYPE_CHECKING:
    from types import ModuleType

# Language to query module mapping
QUERY_MODULES: dict[str, ModuleType] = {
    "typescript": typescript,
    "tsx": typescript,
    "javascript": javascript,
}


def get_queries(language: str) -> dict[str, str] | None:
    """Get all queries for a language.

    Args:
        language: Language name (e.g., "typescript", "javascript")

    Returns:
        Dict of query_name -> query_string, or None if language unsupported
    """
    module = QUERY_MODULES.get(language)
    if module is None:
        return None
    return module.get_all_queries()


def get_query(language: str, query_name: str) -> str | None:
    """Get a specific query for a language.

    Args:
        language: Language name
        query_name: Query name (e.g., "throw", "catch")

    Returns:
        Query string or None if not found
    """
    queries = get_queries(language)
    if queries is None:
        return None
    return queries.get(query_name)


def get_class_node_types(language: str) -> tuple[str, ...]:
    """Get the node types that declare a class in this language."""
    module = QUERY_MODULES.get(language)
    if module is None:
        return ()
    return module.CLASS_NODE_TYPES


__all__ = [
    "QUERY_MODULES",
    "get_queries",
    "get_query",
    "get_class_node_types",
]
