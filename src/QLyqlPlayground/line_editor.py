from __future__ import annotations
import logging
from typing import Collection, Optional, Type, TypeVar

from Qt.QtCore import Signal
from Qt.QtGui import QColor, QPalette
from Qt.QtWidgets import QPlainTextEdit

from .behaviors import Behavior
from .editor_options import EditorOptions
from .host_tree import EMPTY_TREE, HostTree
from .node_types import NodeTypeCache
from .parse_adapter import ParseAdapter, ParseOutcome

T_Behavior = TypeVar("T_Behavior", bound=Behavior)

log = logging.getLogger(__name__)


class PlaygroundEditor(QPlainTextEdit):
    """Plain text editor that reparses its whole text on every change

    The latest host tree is kept on `tree` and announced with
    `treeChanged` so behaviors like syntax highlighting can follow it.
    """

    treeChanged = Signal(object)  # HostTree

    def __init__(
        self,
        options: EditorOptions,
        cache: Optional[NodeTypeCache] = None,
        parent=None,
    ):
        super().__init__(parent=parent)
        self.options = options
        self.cache = cache if cache is not None else NodeTypeCache()
        self.adapter: ParseAdapter
        self.tree: HostTree = EMPTY_TREE
        self.parsed_text: str = ""
        self.last_outcome: Optional[ParseOutcome] = None

        self._behaviors: list[Behavior] = []

        self.document().contentsChanged.connect(self.reparse)
        self.options.optionsUpdated.connect(self.updateOptions)
        self.updateOptions(list(self.options.keys()))

    def updateOptions(self, keylist: Collection[str]):
        keys = set(keylist)
        if "font" in keys:
            self.setFont(self.options["font"])
        if "colors" in keys:
            self.setColors(self.options["colors"])
        if keys & {"parse_source", "keep_last_good"}:
            self.setParseSource(
                self.options["parse_source"],
                self.options["keep_last_good"],
            )

    def setColors(self, colors: dict[str, str]):
        palette = self.palette()
        palette.setColor(QPalette.ColorRole.Base, QColor(colors["bg"]))
        palette.setColor(QPalette.ColorRole.Window, QColor(colors["bg"]))
        palette.setColor(QPalette.ColorRole.Text, QColor(colors["fg"]))
        self.setPalette(palette)
        self.setAutoFillBackground(True)

    def setParseSource(self, parse_fn, keep_last_good: bool = False):
        self.adapter = ParseAdapter(
            parse_fn, cache=self.cache, logger=log, keep_last_good=keep_last_good
        )
        self.reparse(force=True)

    def reparse(self, force: bool = False):
        """Run a full parse over the current text and publish the tree"""
        text = self.toPlainText()
        if text == self.parsed_text and not force:
            # Formatting passes also report content changes
            return
        self.parsed_text = text
        self.last_outcome = self.adapter.attempt(text)
        self.tree = self.last_outcome.tree
        self.treeChanged.emit(self.tree)

    def addBehavior(
        self, behaviorCls: Type[T_Behavior]
    ) -> tuple[Optional[T_Behavior], T_Behavior]:
        """Set the given behavior to the class. If a behavior of the given type already exists, remove it
        Return both the old and newly instantiated behaviors.
        """
        old_bh = self.removeBehavior(behaviorCls)
        behavior = behaviorCls(self)
        self._behaviors.append(behavior)
        return old_bh, behavior

    def removeBehavior(self, behaviorCls: Type[T_Behavior]) -> Optional[T_Behavior]:
        """Remove all existing behaviors of the given type"""
        torem = [bh for bh in self._behaviors if type(bh) is behaviorCls]
        self._behaviors = [bh for bh in self._behaviors if type(bh) is not behaviorCls]
        for rem in torem:
            rem.detach()
        if not torem:
            return None
        if len(torem) > 1:
            log.warning("Multiple behaviors of the same type found to remove")
        return torem[0]
