from __future__ import annotations
from dataclasses import dataclass
from typing import Generator

from .node_types import NONE_TYPE, TypeDescriptor
from .tag_registry import TagStyleRule


@dataclass(frozen=True)
class HostTree:
    """Offset-relative tree the highlighter consumes

    ``positions[i]`` is the start of ``children[i]`` relative to the start
    of this node. Children are ordered by ascending start.
    """

    type: TypeDescriptor
    children: tuple[HostTree, ...] = ()
    positions: tuple[int, ...] = ()
    length: int = 0

    @property
    def is_empty(self) -> bool:
        return self is EMPTY_TREE


EMPTY_TREE = HostTree(NONE_TYPE)


@dataclass(frozen=True)
class StyledRange:
    start: int
    end: int
    rule: TagStyleRule


def iter_styled_ranges(
    tree: HostTree, offset: int = 0
) -> Generator[StyledRange, None, None]:
    """Walk the tree and yield the absolute range of every styled node

    Parents come before their children, so a painter that applies ranges
    in order lets the innermost style win.
    """
    style = tree.type.style
    if style is not None and tree.length > 0:
        yield StyledRange(offset, offset + tree.length, style)
    for child, pos in zip(tree.children, tree.positions):
        yield from iter_styled_ranges(child, offset + pos)
