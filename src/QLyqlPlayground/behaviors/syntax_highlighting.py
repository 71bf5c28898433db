from __future__ import annotations

import bisect
from itertools import accumulate
from typing import TYPE_CHECKING, Any, Iterable, Optional

from Qt.QtGui import QSyntaxHighlighter, QTextDocument

from . import Behavior
from ..hl_groups import compile_formats, rule_format_specs
from ..host_tree import EMPTY_TREE, HostTree, iter_styled_ranges
from ..tag_registry import TagStyleRule
from ..utils import char_to_utf16_map

if TYPE_CHECKING:
    from ..line_editor import PlaygroundEditor


class HostTreeHighlighter(QSyntaxHighlighter):
    """
    Paints each block from the most recent host tree. The tree is replaced
    wholesale on every reparse, so everything gets rehighlighted.
    """

    def __init__(
        self,
        document: QTextDocument,
        rules: Iterable[TagStyleRule],
        format_specs: dict[str, dict[str, Any]],
    ):
        """
        Args:
            document: The document to paint
            rules: Every style rule the tag registry knows about
            format_specs: Format specs keyed by class name. Classes that are
                missing fall back to their category's format
        """
        super().__init__(document)
        self.formats = compile_formats(rule_format_specs(rules, format_specs))
        self.tree: HostTree = EMPTY_TREE
        # Document ranges as (start, end, class_name), sorted by start
        self._ranges: list[tuple[int, int, str]] = []
        self._starts: list[int] = []
        # _reach[i] is the furthest end among the first i + 1 ranges
        self._reach: list[int] = []

    # ------------------------------------------------------------------
    # Tree updates
    # ------------------------------------------------------------------

    def setTree(self, tree: HostTree, text: str):
        """Swap in a freshly parsed tree for the given document text"""
        self.tree = tree
        to_qt = char_to_utf16_map(text)
        self._ranges = [
            (to_qt(r.start), to_qt(r.end), r.rule.class_name)
            for r in iter_styled_ranges(tree)
            if r.end <= len(text)
        ]
        self._ranges.sort(key=lambda r: r[0])
        self._starts = [r[0] for r in self._ranges]
        self._reach = list(accumulate((r[1] for r in self._ranges), max))
        self.rehighlight()

    # ------------------------------------------------------------------
    # QSyntaxHighlighter entry point
    # ------------------------------------------------------------------

    def highlightBlock(self, text: str):
        if not self._ranges:
            return

        block = self.currentBlock()
        if not block.isValid():
            return

        block_start = block.position()
        block_end = block_start + block.length()

        # Everything before `first` ends before this block starts
        first = bisect.bisect_right(self._reach, block_start)
        last = bisect.bisect_left(self._starts, block_end)
        for idx in range(first, last):
            start, end, class_name = self._ranges[idx]
            if end <= block_start:
                continue
            fmt = self.formats.get(class_name)
            if fmt is None:
                continue

            # Convert to block-local and clamp to boundaries
            local_start = max(0, start - block_start)
            local_end = min(block.length(), end - block_start)
            if local_end > local_start:
                self.setFormat(local_start, local_end - local_start, fmt)


class DummyHighlighter(QSyntaxHighlighter):
    def highlightBlock(self, text):
        return


class SyntaxHighlighting(Behavior):
    LISTEN = frozenset({"highlights"})

    def __init__(self, editor: PlaygroundEditor):
        super().__init__(editor)
        self._highlights = None
        self.highlighter: Optional[HostTreeHighlighter] = None
        self.editor.treeChanged.connect(self._on_tree_changed)
        self.updateAll()

    @property
    def highlights(self):
        return self._highlights

    @highlights.setter
    def highlights(self, value):
        self._highlights = value
        if self.highlighter is not None:
            self.highlighter.setDocument(None)
        if value is None:
            self.highlighter = None
            return
        self.highlighter = HostTreeHighlighter(
            self.editor.document(),
            self.editor.cache.registry.all_style_rules(),
            value,
        )
        self.highlighter.setTree(self.editor.tree, self.editor.parsed_text)

    def _on_tree_changed(self, tree: HostTree):
        if self.highlighter is not None:
            self.highlighter.setTree(tree, self.editor.parsed_text)

    def remove(self):
        self.editor.treeChanged.disconnect(self._on_tree_changed)
        if self.highlighter is not None:
            self.highlighter.setDocument(None)
        self.highlighter = None

        mydoc = self.editor.document()
        newHigh = DummyHighlighter(mydoc)
        newHigh.rehighlight()
