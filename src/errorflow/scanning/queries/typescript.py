"""Tree-sitter queries for TypeScript and TSX.

Both grammars ship in tree-sitter-typescript and share node names for
everything queried here.

Extracts:
    - Throw statements
    - Catch clauses
    - Binary expressions (filtered for ``instanceof`` by the collector)
"""

# Query for raise sites
THROW_QUERY = """
(throw_statement) @throw
"""

# Query for intercept clauses
CATCH_QUERY = """
(catch_clause) @catch
"""

# Query for type tests inside a catch body
TYPE_TEST_QUERY = """
(binary_expression) @test
"""

# Top-level node types that declare a class
CLASS_NODE_TYPES = ("class_declaration", "abstract_class_declaration", "class")


def get_all_queries() -> dict[str, str]:
    """Return all TypeScript queries as a dict."""
    return {
        "throw": THROW_QUERY,
        "catch": CATCH_QUERY,
        "type_test": TYPE_TEST_QUERY,
    }
