from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .tag_registry import DEFAULT_REGISTRY, TagRegistry, TagStyleRule


@dataclass(frozen=True, eq=False)
class TypeDescriptor:
    """One distinct AST tag as seen by the highlighter

    Descriptors compare by identity. The highlighter looks rules up by
    descriptor, so a tag must never get a second descriptor.
    """

    name: str
    id: int
    style: Optional[TagStyleRule] = None


NONE_TYPE = TypeDescriptor("", 0)


class NodeTypeCache:
    """Lazily creates and memoizes one TypeDescriptor per tag

    The cache only grows. It is bounded by the number of tags the grammar
    can produce and lives as long as the editing session that owns it.
    """

    def __init__(self, registry: TagRegistry = DEFAULT_REGISTRY):
        self.registry = registry
        self._types: dict[str, TypeDescriptor] = {}

    def type_for(self, tag: str) -> TypeDescriptor:
        desc = self._types.get(tag)
        if desc is None:
            desc = TypeDescriptor(tag, len(self._types) + 1, self.registry.style_for(tag))
            self._types[tag] = desc
        return desc

    def __contains__(self, tag: str) -> bool:
        return tag in self._types

    def __len__(self) -> int:
        return len(self._types)


_DEFAULT_CACHE: Optional[NodeTypeCache] = None


def default_cache() -> NodeTypeCache:
    """The process-wide cache, for callers that don't bring their own"""
    global _DEFAULT_CACHE
    if _DEFAULT_CACHE is None:
        _DEFAULT_CACHE = NodeTypeCache()
    return _DEFAULT_CACHE
