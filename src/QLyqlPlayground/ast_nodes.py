from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .errors import MalformedNodeError, TreeDepthError

DEFAULT_MAX_DEPTH = 512


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) character range into the source text"""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class AstNode:
    """A parser node that covers a known range of the source"""

    tag: str
    span: Span
    children: tuple[AnyNode, ...] = ()


@dataclass(frozen=True)
class DetachedNode:
    """A parser node without a span. It can't be placed in the document"""

    tag: str
    children: tuple[AnyNode, ...] = ()


AnyNode = Union[AstNode, DetachedNode]


def _read_span(raw: Any) -> Span:
    if isinstance(raw, Span):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedNodeError(f"Span must be a mapping, got {type(raw).__name__}")
    try:
        start = int(raw["start"])
        end = int(raw["end"])
    except (KeyError, TypeError, ValueError) as err:
        raise MalformedNodeError(f"Span is missing a usable start/end: {raw!r}") from err
    if end < start:
        raise MalformedNodeError(f"Span ends before it starts: {start}..{end}")
    return Span(start, end)


def ast_from_mapping(obj: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> AnyNode:
    """Read a loosely-typed parser node into the typed node records

    The parser hands back plain mappings shaped like
    ``{"name": str, "span": {"start": int, "end": int, ...}, "children": [...]}``.
    ``tag`` is accepted as an alias for ``name``, and ``children`` may be
    missing or None. Nodes that are already typed pass through unchanged.

    Raises:
        MalformedNodeError: The node has no tag or its span is unusable
        TreeDepthError: The mapping is nested deeper than max_depth
    """
    if isinstance(obj, (AstNode, DetachedNode)):
        return obj
    if not isinstance(obj, Mapping):
        raise MalformedNodeError(f"Expected a mapping node, got {type(obj).__name__}")

    tag = obj.get("tag", obj.get("name"))
    if not isinstance(tag, str):
        raise MalformedNodeError(f"Node has no tag: {obj!r}")

    if max_depth <= 0:
        raise TreeDepthError(f"AST is nested too deeply at {tag!r}")

    # A plain loop keeps each level to a single frame
    children = []
    for child in obj.get("children") or ():
        children.append(ast_from_mapping(child, max_depth - 1))
    raw_span = obj.get("span")
    if raw_span is None:
        return DetachedNode(tag, tuple(children))
    return AstNode(tag, _read_span(raw_span), tuple(children))
