from __future__ import annotations
from itertools import accumulate
from typing import Callable

from tree_sitter import Language, Node, Parser

from .ast_nodes import DEFAULT_MAX_DEPTH, AstNode, Span
from .errors import TreeDepthError


def byte_to_char_map(text: str) -> Callable[[int], int]:
    """Build a function converting utf-8 byte offsets to str indexes"""
    data = text.encode("utf8")
    if len(data) == len(text):
        return lambda b: b

    # starts[i] is the byte offset of character i
    starts = [0, *accumulate(len(c.encode("utf8")) for c in text)]
    lookup = {b: i for i, b in enumerate(starts)}
    return lookup.__getitem__


class TreeSitterSource:
    """A parse source backed by a tree-sitter grammar

    Node types become tags, so the registry given to the adapter has to
    use the grammar's node type names.
    """

    def __init__(
        self,
        language: Language,
        named_only: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.parser = Parser(language)
        self.named_only = named_only
        self.max_depth = max_depth

    def _convert(
        self, node: Node, to_char: Callable[[int], int], depth: int
    ) -> AstNode:
        if depth <= 0:
            raise TreeDepthError(f"Syntax tree is nested too deeply at {node.type!r}")
        kids = node.named_children if self.named_only else node.children
        children = []
        for kid in kids:
            children.append(self._convert(kid, to_char, depth - 1))
        return AstNode(
            node.type,
            Span(to_char(node.start_byte), to_char(node.end_byte)),
            tuple(children),
        )

    def parse(self, text: str) -> AstNode:
        tree = self.parser.parse(text.encode("utf8"))
        return self._convert(tree.root_node, byte_to_char_map(text), self.max_depth)

    __call__ = parse
