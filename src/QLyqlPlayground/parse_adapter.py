from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from .ast_nodes import ast_from_mapping
from .errors import ParserNotReady
from .host_tree import EMPTY_TREE, HostTree
from .node_types import NodeTypeCache, default_cache
from .tree_builder import DEFAULT_MAX_DEPTH, build_root

ParseFn = Callable[[str], Any]
InitFn = Callable[[], Awaitable[Any]]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseOutcome:
    """The result of one reparse. Always carries a renderable tree"""

    tree: HostTree
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ParseAdapter:
    """Runs the parser over the full text and converts what it returns

    Every text change gets a full reparse; nothing from a previous pass
    is reused except the type descriptors in the cache. Failures of any
    kind are logged and turned into an empty tree so the editor always
    has something to render.
    """

    def __init__(
        self,
        parse_fn: ParseFn,
        cache: Optional[NodeTypeCache] = None,
        logger: Optional[logging.Logger] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        keep_last_good: bool = False,
        init_fn: Optional[InitFn] = None,
    ):
        """Initialize the adapter

        Args:
            parse_fn: Called with the full document text. Returns an AstNode
                or a loosely-typed mapping of one
            cache: The type descriptor cache. Defaults to the process-wide one
            logger: Receives the diagnostics for failed passes
            max_depth: Deepest AST nesting that will be converted
            keep_last_good: On failure, return the last tree that converted
                cleanly instead of an empty one
            init_fn: Async callable that must complete before the first parse
        """
        self.parse_fn = parse_fn
        self.cache = cache if cache is not None else default_cache()
        self.logger = logger if logger is not None else log
        self.max_depth = max_depth
        self.keep_last_good = keep_last_good
        self._init_fn = init_fn
        self._init_task: Optional[asyncio.Future] = None
        self._ready = init_fn is None
        self._last_good: HostTree = EMPTY_TREE

    @property
    def ready(self) -> bool:
        return self._ready

    async def initialize(self):
        """Await the parser's one-time initialization

        Only the first call runs the init function, every later or
        concurrent call waits on that same run.
        """
        if self._ready or self._init_fn is None:
            self._ready = True
            return
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._init_fn())
        await self._init_task
        self._ready = True

    def _fallback(self) -> HostTree:
        return self._last_good if self.keep_last_good else EMPTY_TREE

    def attempt(self, text: str) -> ParseOutcome:
        if not self._ready:
            self.logger.debug("Parser not initialized, dropping reparse")
            return ParseOutcome(self._fallback(), ParserNotReady())

        try:
            node = ast_from_mapping(self.parse_fn(text), self.max_depth)
            tree = build_root(node, self.cache, self.max_depth)
        except Exception as err:
            # The parser is foreign code, anything it throws stops here
            self.logger.warning("Failed to parse document: %s", err, exc_info=True)
            return ParseOutcome(self._fallback(), err)

        self._last_good = tree
        return ParseOutcome(tree)

    def reparse(self, text: str) -> HostTree:
        return self.attempt(text).tree
