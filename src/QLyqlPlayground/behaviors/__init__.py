from __future__ import annotations
from typing import Collection, TYPE_CHECKING

if TYPE_CHECKING:
    from ..line_editor import PlaygroundEditor


class Behavior:
    """A feature that attaches to a PlaygroundEditor

    Subclasses list the option keys they follow in `LISTEN` and expose a
    settable property for each one. The property is assigned whenever
    the option changes, and once right after construction via `updateAll`.
    """

    LISTEN: frozenset[str] = frozenset()

    def __init__(self, editor: PlaygroundEditor):
        self.editor: PlaygroundEditor = editor
        self.options = editor.options
        self.options.optionsUpdated.connect(self.updateOptions)

    def updateAll(self):
        self.updateOptions(self.LISTEN)

    def updateOptions(self, keys: Collection[str]):
        for key in set(keys) & self.LISTEN:
            setattr(self, key, self.options.get(key))

    def detach(self):
        """Stop following the options and undo whatever was installed"""
        self.options.optionsUpdated.disconnect(self.updateOptions)
        self.remove()

    def remove(self):
        pass
