from __future__ import annotations
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import RegistryError


class Category(Enum):
    """The closed set of highlight categories a tag can map to"""

    STRING = "string"
    NUMBER = "number"
    IDENTIFIER = "identifier"
    BOOLEAN = "boolean"
    LINK = "link"
    KEYWORD = "keyword"
    OPERATOR = "operator"
    NULL = "null"


@dataclass(frozen=True)
class TagStyleRule:
    tag: str
    category: Category
    class_name: str


def class_name_for(names: str) -> str:
    """Build the css-style class name for a registry entry

    Only the first space is replaced, so "Null Undefined" becomes
    "cm-null-undefined"
    """
    return "cm-" + names.lower().replace(" ", "-", 1)


# fmt: off
LYQL_TAGS: tuple[tuple[str, Category], ...] = (
    ("String",         Category.STRING),
    ("Number",         Category.NUMBER),
    ("Identifier",     Category.IDENTIFIER),
    ("Boolean",        Category.BOOLEAN),
    ("Keyword",        Category.LINK),
    ("SqlKeyword",     Category.KEYWORD),
    ("Symbol",         Category.OPERATOR),
    ("Null Undefined", Category.NULL),
)
# fmt: on


class TagRegistry:
    """Maps AST tag names to highlight categories

    The mapping is a hand maintained enumeration. Each entry is a
    ``(names, category)`` pair where ``names`` holds one or more
    space-separated tags that share a single style class. Tags that were
    never registered simply have no style.
    """

    def __init__(self, entries: Sequence[tuple[str, Category]] = LYQL_TAGS):
        self._rules: dict[str, TagStyleRule] = {}
        for names, category in entries:
            class_name = class_name_for(names)
            for tag in names.split():
                if tag in self._rules:
                    raise RegistryError(f"Tag {tag!r} is registered twice")
                self._rules[tag] = TagStyleRule(tag, category, class_name)
        self._ordered: tuple[TagStyleRule, ...] = tuple(self._rules.values())

    def category_of(self, tag: str) -> Optional[Category]:
        rule = self._rules.get(tag)
        return rule.category if rule is not None else None

    def style_for(self, tag: str) -> Optional[TagStyleRule]:
        return self._rules.get(tag)

    def all_style_rules(self) -> tuple[TagStyleRule, ...]:
        """Every rule in registration order"""
        return self._ordered

    def class_names(self) -> list[str]:
        """The distinct class names, in registration order"""
        return list(dict.fromkeys(r.class_name for r in self._ordered))

    def __contains__(self, tag: str) -> bool:
        return tag in self._rules

    def __len__(self) -> int:
        return len(self._rules)


DEFAULT_REGISTRY = TagRegistry()
