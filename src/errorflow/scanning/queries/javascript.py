"""Tree-sitter queries for JavaScript (including JSX).

The JavaScript grammar has no ``abstract_class_declaration`` and puts the
extends target directly under ``class_heritage``.
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
CLASS_NODE_TYPES = ("class_declaration", "class")


def get_all_queries() -> dict[str, str]:
    """Return all JavaScript queries as a dict."""
    return {
        "throw": THROW_QUERY,
        "catch": CATCH_QUERY,
        "type_test": TYPE_TEST_QUERY,
    }
