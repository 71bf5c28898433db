from __future__ import annotations

from .ast_nodes import DEFAULT_MAX_DEPTH, AnyNode, AstNode, DetachedNode
from .errors import TreeDepthError
from .host_tree import EMPTY_TREE, HostTree
from .node_types import NodeTypeCache

ROOT_TAG = "_root"


def _start_of(node: AnyNode) -> int:
    # Detached children have nowhere to go, park them at the front
    return node.span.start if isinstance(node, AstNode) else -1


def build_tree(
    node: AnyNode, cache: NodeTypeCache, max_depth: int = DEFAULT_MAX_DEPTH
) -> HostTree:
    """Convert one AST node and its subtree into a HostTree

    Args:
        node: The node to convert
        cache: Supplies the shared type descriptor for each tag
        max_depth: How many levels may be descended before giving up

    Returns:
        The converted tree, or EMPTY_TREE when the node has no span

    Raises:
        TreeDepthError: The subtree is nested deeper than max_depth
    """
    if isinstance(node, DetachedNode):
        return EMPTY_TREE
    if max_depth <= 0:
        raise TreeDepthError(f"AST is nested too deeply at {node.tag!r}")

    start = node.span.start
    ordered = sorted(node.children, key=_start_of)
    children = []
    positions = []
    for child in ordered:
        children.append(build_tree(child, cache, max_depth - 1))
        positions.append(max(_start_of(child) - start, 0))

    return HostTree(
        cache.type_for(node.tag),
        tuple(children),
        tuple(positions),
        node.span.end - start,
    )


def build_root(
    node: AnyNode, cache: NodeTypeCache, max_depth: int = DEFAULT_MAX_DEPTH
) -> HostTree:
    """Convert a parse result and hang it under a synthetic root

    The root starts at document offset 0 so the highlighter always sees a
    single top-level node covering everything that was recognized.
    """
    if isinstance(node, DetachedNode):
        return EMPTY_TREE
    return HostTree(
        cache.type_for(ROOT_TAG),
        (build_tree(node, cache, max_depth - 1),),
        (node.span.start,),
        node.span.end,
    )
