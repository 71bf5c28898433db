import random

import pytest
from QLyqlPlayground.ast_nodes import AstNode, DetachedNode, Span
from QLyqlPlayground.errors import TreeDepthError
from QLyqlPlayground.host_tree import EMPTY_TREE
from QLyqlPlayground.node_types import NodeTypeCache
from QLyqlPlayground.tree_builder import ROOT_TAG, build_root, build_tree

TAGS = ["String", "Number", "Identifier", "Symbol", "Select", "Expression"]


@pytest.fixture
def cache():
    return NodeTypeCache()


def make_root(children):
    return AstNode("root", Span(0, 10), tuple(children))


A = AstNode("A", Span(2, 5))
B = AstNode("B", Span(5, 9))


def random_ast(rng: random.Random, start: int, end: int, depth: int) -> AstNode:
    """Build a well-formed AST with disjoint, shuffled children"""
    children = []
    if depth > 0 and end - start >= 2:
        cuts = sorted(rng.sample(range(start, end + 1), min(4, end - start + 1)))
        for lo, hi in zip(cuts[::2], cuts[1::2]):
            children.append(random_ast(rng, lo, hi, depth - 1))
        rng.shuffle(children)
    return AstNode(rng.choice(TAGS), Span(start, end), tuple(children))


def assert_well_formed(tree):
    assert list(tree.positions) == sorted(tree.positions)
    assert len(tree.positions) == len(tree.children)
    for child, pos in zip(tree.children, tree.positions):
        assert pos >= 0
        assert pos + child.length <= tree.length
        assert_well_formed(child)


class TestBuildTree:
    """Tests for the AST -> host tree conversion"""

    def test_sorted_children(self, cache):
        tree = build_tree(make_root([A, B]), cache)
        assert tree.length == 10
        assert [c.type.name for c in tree.children] == ["A", "B"]
        assert tree.positions == (2, 5)
        assert [c.length for c in tree.children] == [3, 4]

    def test_unordered_children_give_the_same_tree(self, cache):
        ordered = build_tree(make_root([A, B]), cache)
        shuffled = build_tree(make_root([B, A]), cache)
        assert shuffled == ordered

    def test_input_is_not_mutated(self, cache):
        root = make_root([B, A])
        build_tree(root, cache)
        assert root.children == (B, A)

    def test_ties_keep_input_order(self, cache):
        first = AstNode("First", Span(3, 4))
        second = AstNode("Second", Span(3, 6))
        tree = build_tree(make_root([first, second]), cache)
        assert [c.type.name for c in tree.children] == ["First", "Second"]
        assert tree.positions == (3, 3)

    def test_positions_are_relative_to_the_parent(self, cache):
        inner = AstNode("Inner", Span(6, 8))
        outer = AstNode("Outer", Span(4, 9), (inner,))
        tree = build_tree(make_root([outer]), cache)
        assert tree.positions == (4,)
        assert tree.children[0].positions == (2,)
        assert tree.children[0].children[0].length == 2

    def test_missing_span_is_the_empty_sentinel(self, cache):
        node = DetachedNode("root", (A, B))
        assert build_tree(node, cache) is EMPTY_TREE

    def test_detached_child_becomes_empty(self, cache):
        tree = build_tree(make_root([B, DetachedNode("Lost")]), cache)
        assert tree.children[0] is EMPTY_TREE
        assert tree.positions == (0, 5)

    def test_leaf(self, cache):
        tree = build_tree(AstNode("Number", Span(3, 7)), cache)
        assert tree.children == ()
        assert tree.positions == ()
        assert tree.length == 4

    def test_same_tag_shares_a_descriptor(self, cache):
        one = build_tree(make_root([A, B]), cache)
        two = build_tree(make_root([AstNode("A", Span(0, 1))]), cache)
        assert one.children[0].type is two.children[0].type
        assert one.type is two.type

    def test_style_travels_with_the_descriptor(self, cache):
        tree = build_tree(make_root([AstNode("String", Span(1, 4))]), cache)
        assert tree.type.style is None
        assert tree.children[0].type.style.class_name == "cm-string"

    def test_depth_limit(self, cache):
        node = AstNode("Leaf", Span(0, 1))
        for _ in range(10):
            node = AstNode("Wrap", Span(0, 1), (node,))
        with pytest.raises(TreeDepthError):
            build_tree(node, cache, max_depth=5)
        assert build_tree(node, cache, max_depth=20).length == 1

    @pytest.mark.parametrize("seed", range(8))
    def test_random_trees_are_well_formed(self, cache, seed):
        rng = random.Random(seed)
        ast = random_ast(rng, 0, 60, 5)
        tree = build_tree(ast, cache)
        assert tree.length == 60
        assert_well_formed(tree)


class TestBuildRoot:
    """Tests for the synthetic root wrapper"""

    def test_root_wraps_the_parse_result(self, cache):
        node = AstNode("Program", Span(3, 12), (AstNode("Number", Span(4, 6)),))
        tree = build_root(node, cache)
        assert tree.type.name == ROOT_TAG
        assert tree.positions == (3,)
        assert tree.length == 12
        assert tree.children[0].length == 9
        assert tree.children[0].positions == (1,)

    def test_detached_result_is_empty(self, cache):
        assert build_root(DetachedNode("Program"), cache) is EMPTY_TREE
