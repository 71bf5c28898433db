from typing import Optional


class PlaygroundError(Exception):
    """Base class for every error raised by the playground"""


class RegistryError(PlaygroundError):
    """A tag was registered more than once"""


class MalformedNodeError(PlaygroundError):
    """A loosely-typed parser node could not be read as an AST node"""


class TreeDepthError(PlaygroundError):
    """The AST nests deeper than the tree builder is willing to recurse"""


class ParserNotReady(PlaygroundError):
    """A reparse was requested before the parser finished initializing"""


class TokenizeError(PlaygroundError):
    def __init__(self, message: str, start: int, end: Optional[int] = None):
        super().__init__(f"{message} at {start}")
        self.start = start
        self.end = start if end is None else end
