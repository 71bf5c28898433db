import pytest
import tree_sitter_python as tspython
from tree_sitter import Language
from QLyqlPlayground.errors import TreeDepthError
from QLyqlPlayground.node_types import NodeTypeCache
from QLyqlPlayground.host_tree import iter_styled_ranges
from QLyqlPlayground.parse_adapter import ParseAdapter
from QLyqlPlayground.tag_registry import Category, TagRegistry
from QLyqlPlayground.ts_source import TreeSitterSource, byte_to_char_map


def find(node, tag):
    if node.tag == tag:
        return node
    for child in node.children:
        found = find(child, tag)
        if found is not None:
            return found
    return None


@pytest.fixture
def language():
    return Language(tspython.language())


class TestTreeSitterSource:
    """Tests for the tree-sitter backed parse source"""

    def test_root_is_module(self, language):
        node = TreeSitterSource(language).parse("x = 1\n")
        assert node.tag == "module"
        assert node.span.start == 0

    def test_spans_are_character_offsets(self, language):
        source = "x = 'héllo'\ny = 2\n"
        node = TreeSitterSource(language)(source)
        string = find(node, "string")
        assert source[string.span.start : string.span.end] == "'héllo'"
        integer = find(node, "integer")
        assert source[integer.span.start : integer.span.end] == "2"

    def test_anonymous_nodes(self, language):
        full = TreeSitterSource(language).parse("x = 1\n")
        named = TreeSitterSource(language, named_only=True).parse("x = 1\n")
        assert [c.tag for c in find(full, "assignment").children] == [
            "identifier",
            "=",
            "integer",
        ]
        assert [c.tag for c in find(named, "assignment").children] == [
            "identifier",
            "integer",
        ]

    def test_through_the_adapter(self, language):
        registry = TagRegistry([("string", Category.STRING), ("identifier", Category.IDENTIFIER)])
        adapter = ParseAdapter(TreeSitterSource(language), cache=NodeTypeCache(registry))
        source = "name = 'q'\n"
        outcome = adapter.attempt(source)
        assert outcome.ok
        spans = [(source[r.start : r.end], r.rule.class_name) for r in iter_styled_ranges(outcome.tree)]
        assert ("name", "cm-identifier") in spans
        assert ("'q'", "cm-string") in spans

    def test_depth_bound(self, language):
        # module > expression_statement > assignment > identifier
        assert TreeSitterSource(language, max_depth=4).parse("x = 1\n").tag == "module"
        with pytest.raises(TreeDepthError):
            TreeSitterSource(language, max_depth=3).parse("x = 1\n")

    def test_too_deep_through_the_adapter(self, language):
        adapter = ParseAdapter(TreeSitterSource(language, max_depth=3), cache=NodeTypeCache())
        outcome = adapter.attempt("x = 1\n")
        assert isinstance(outcome.error, TreeDepthError)


def test_byte_to_char_map():
    to_char = byte_to_char_map("aé€b")
    assert [to_char(b) for b in (0, 1, 3, 6, 7)] == [0, 1, 2, 3, 4]
    assert byte_to_char_map("abc")(2) == 2
