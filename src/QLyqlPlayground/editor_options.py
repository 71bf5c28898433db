from __future__ import annotations
from typing import Any, Iterable, Optional

from Qt.QtCore import QObject, Signal

from .hl_groups import COLORS, FORMAT_SPECS
from .lyql_tokenizer import tokenize

# Settings every playground starts from. Fonts need a QApplication so
# they are never defaulted here.
DEFAULT_OPTIONS: dict[str, Any] = {
    "parse_source": tokenize,
    "keep_last_good": False,
    "highlights": FORMAT_SPECS,
    "colors": COLORS,
}


class EditorOptions(QObject):
    """Playground settings, layered over DEFAULT_OPTIONS

    Changing a setting emits `optionsUpdated` with the affected keys so the
    editor and its behaviors can react to just those.
    """

    optionsUpdated = Signal(list)  # list of str

    def __init__(self, opts: Optional[dict[str, Any]] = None):
        super().__init__()
        self._overrides: dict[str, Any] = dict(opts) if opts else {}

    def __getitem__(self, key: str) -> Any:
        if key in self._overrides:
            return self._overrides[key]
        return DEFAULT_OPTIONS[key]

    def __setitem__(self, key: str, value: Any):
        self.update({key: value})

    def __contains__(self, key: str) -> bool:
        return key in self._overrides or key in DEFAULT_OPTIONS

    def update(self, opts: dict[str, Any]):
        self._overrides.update(opts)
        self.optionsUpdated.emit(list(opts))

    def reset(self, keys: Iterable[str]):
        """Drop overrides so the given keys fall back to their defaults"""
        dropped = [k for k in keys if k in self._overrides]
        for key in dropped:
            del self._overrides[key]
        if dropped:
            self.optionsUpdated.emit(dropped)

    def get(self, key: str, default: Any = None) -> Any:
        return self[key] if key in self else default

    def keys(self) -> list[str]:
        return list(dict.fromkeys([*DEFAULT_OPTIONS, *self._overrides]))
