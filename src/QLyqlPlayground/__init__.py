from .ast_nodes import AstNode, DetachedNode, Span, ast_from_mapping
from .host_tree import EMPTY_TREE, HostTree, StyledRange, iter_styled_ranges
from .node_types import NONE_TYPE, NodeTypeCache, TypeDescriptor, default_cache
from .parse_adapter import ParseAdapter, ParseOutcome
from .tag_registry import DEFAULT_REGISTRY, Category, TagRegistry, TagStyleRule
from .tree_builder import build_root, build_tree

__all__ = [
    "AstNode",
    "Category",
    "DEFAULT_REGISTRY",
    "DetachedNode",
    "EMPTY_TREE",
    "HostTree",
    "NONE_TYPE",
    "NodeTypeCache",
    "ParseAdapter",
    "ParseOutcome",
    "Span",
    "StyledRange",
    "TagRegistry",
    "TagStyleRule",
    "TypeDescriptor",
    "ast_from_mapping",
    "build_root",
    "build_tree",
    "default_cache",
    "iter_styled_ranges",
]
