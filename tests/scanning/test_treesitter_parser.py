"""Tests for tree-sitter parser wrapper."""

from errorflow.scanning.queries import get_query
from errorflow.scanning.treesitter_parser import (
    TreeSitterParser,
    node_text,
)


class TestSupportedLanguages:
    """Test grammar registration."""

    def test_registered_grammars(self):
        """TypeScript, TSX and JavaScript grammars are registered."""
        parser = TreeSitterParser()
        for language in ("typescript", "tsx", "javascript"):
            assert parser.is_language_supported(language)

    def test_is_language_supported(self):
        parser = TreeSitterParser()
        assert parser.is_language_supported("typescript")
        assert not parser.is_language_supported("python")


class TestTreeSitterParser:
    """Parsing and querying."""

    def test_parse_typescript_returns_tree(self):
        """parse() returns a tree for valid TypeScript."""
        parser = TreeSitterParser()
        tree = parser.parse(b"function greet(name: string): string { return name; }", "typescript")
        assert tree is not None
        assert tree.root_node.type == "program"
        assert not tree.root_node.has_error

    def test_parse_tsx(self):
        """TSX grammar accepts JSX."""
        parser = TreeSitterParser()
        tree = parser.parse(b"const el = <div>{name}</div>;", "tsx")
        assert tree is not None
        assert not tree.root_node.has_error

    def test_parse_javascript(self):
        parser = TreeSitterParser()
        tree = parser.parse(b"function greet(name) { return name; }", "javascript")
        assert tree is not None
        assert not tree.root_node.has_error

    def test_parse_invalid_language_returns_none(self):
        """parse() returns None for unsupported language."""
        parser = TreeSitterParser()
        assert parser.parse(b"some code", "unknown_language") is None

    def test_query_returns_captures_in_source_order(self):
        """query() returns (node, name) pairs sorted by position."""
        parser = TreeSitterParser()
        code = b"throw new A();\nfunction f() { throw b; }\n"
        tree = parser.parse(code, "typescript")

        captures = parser.query(tree, get_query("typescript", "throw"), "typescript")

        assert [name for _, name in captures] == ["throw", "throw"]
        assert [node.start_point[0] for node, _ in captures] == [0, 1]

    def test_query_none_tree_returns_empty(self):
        parser = TreeSitterParser()
        assert parser.query(None, "(program) @p", "typescript") == []

    def test_query_node_restricted_to_subtree(self):
        """query_node() only sees descendants of the given node."""
        parser = TreeSitterParser()
        code = b"throw new A();\nfunction f() { throw new B(); }\n"
        tree = parser.parse(code, "typescript")
        function_node = tree.root_node.named_children[1]

        captures = parser.query_node(function_node, get_query("typescript", "throw"), "typescript")

        assert len(captures) == 1
        assert "B" in node_text(captures[0][0])


class TestNodeText:
    def test_none_is_empty(self):
        assert node_text(None) == ""

    def test_decodes_source(self):
        parser = TreeSitterParser()
        tree = parser.parse("const café = 1;".encode(), "javascript")
        assert node_text(tree.root_node) == "const café = 1;"
