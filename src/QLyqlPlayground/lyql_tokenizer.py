"""A small LyQL scanner that reports its tokens as an AST

This is the parse source the playground uses out of the box. It only
recognizes tokens, it does not build statements, which is all the
highlighter needs.
"""

from __future__ import annotations
import string
from dataclasses import dataclass
from typing import Optional

from .ast_nodes import AstNode, Span
from .errors import TokenizeError

PROGRAM_TAG = "Program"

# fmt: off
GENERIC_KEYWORDS = frozenset({
    "class", "else", "for", "function", "if", "break", "continue",
    "return", "super", "this", "var", "while", "loop",
})

LITERAL_WORDS = {
    "undefined": "Undefined",
    "false": "Boolean",
    "true": "Boolean",
}

SQL_KEYWORDS = frozenset({
    "ALL", "DISTINCT", "UNION", "INTERSECT", "EXCEPT",
    "BEGIN", "TRANSACTION", "ROLLBACK", "COMMIT",
    "WHERE", "HAVING", "ASC", "DESC", "ORDER", "BY", "AND", "OR", "EXPLAIN",
    "IS", "NOT", "LIKE", "IN", "BETWEEN", "OFFSET", "LIMIT",
    "JOIN", "INNER", "RIGHT", "LEFT", "ON",
    "CREATE", "INSERT", "UPDATE", "DELETE", "DROP", "INTO", "VALUES", "INDEX",
    "SELECT", "FROM", "AS",
    "CROSS", "DEFAULT", "GROUP", "KEY", "OF", "ONLY", "PRIMARY", "REFERENCES",
    "SET", "SYSTEM", "COLLECTION", "UNIQUE", "READ", "WRITE",
})
# fmt: on

DIGITS = frozenset("0123456789")
IDENT_START = frozenset(string.ascii_letters + "_$\\")
SINGLE_SYMBOLS = frozenset("(){},.-+;*[]")
QUOTES = frozenset("\"'`")
# Characters that may start a two character operator
PAIRED = {
    "!": ("=",),
    "=": ("=",),
    "<": ("=",),
    ">": ("=",),
    ":": (":",),
    "&": ("&",),
    "|": ("|",),
}
# The ones that are still a symbol when they stand alone
LONE_OK = frozenset("!=<>:")


@dataclass(frozen=True)
class Token:
    tag: str
    lexeme: str
    start: int
    end: int


def _is_ident_char(c: str) -> bool:
    return c.isalpha() or c in DIGITS or c in "_$\\"


class Scanner:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: list[Token] = []

    def peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx >= len(self.source):
            return "\0"
        return self.source[idx]

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def emit(self, tag: str, start: int) -> None:
        self.tokens.append(Token(tag, self.source[start : self.pos], start, self.pos))

    def scan(self) -> list[Token]:
        while not self.at_end():
            c = self.peek()
            start = self.pos
            if c in " \r\t\n":
                self.pos += 1
            elif c in QUOTES:
                self.scan_string(start, c)
            elif c in DIGITS:
                self.scan_number(start)
            elif c in IDENT_START:
                self.scan_identifier(start)
            elif c == "/":
                self.scan_slash(start)
            elif c in PAIRED:
                self.scan_paired(start, c)
            elif c in SINGLE_SYMBOLS:
                self.pos += 1
                self.emit("Symbol", start)
            else:
                raise TokenizeError(f"Unexpected character {c!r}", start, start + 1)
        return self.tokens

    def scan_string(self, start: int, quote: str) -> None:
        end = self.source.find(quote, start + 1)
        if end == -1:
            raise TokenizeError("Unterminated string", start, len(self.source))
        self.pos = end + 1
        self.emit("String", start)

    def scan_number(self, start: int) -> None:
        while self.peek() in DIGITS:
            self.pos += 1
        if self.peek() == "." and self.peek(1) in DIGITS:
            self.pos += 1
            while self.peek() in DIGITS:
                self.pos += 1
        if self.peek() in "eE":
            self.pos += 1
            if self.peek() in "+-":
                self.pos += 1
            if self.peek() not in DIGITS:
                raise TokenizeError("Malformed number literal", start, self.pos)
            while self.peek() in DIGITS:
                self.pos += 1
        self.emit("Number", start)

    def scan_identifier(self, start: int) -> None:
        while _is_ident_char(self.peek()):
            self.pos += 1
        word = self.source[start : self.pos]

        # A leading backslash or a preceding dot forces an identifier
        prev = self.tokens[-1] if self.tokens else None
        coerced = word.startswith("\\") or (prev is not None and prev.lexeme == ".")

        tag = "Identifier"
        if not coerced:
            if word in GENERIC_KEYWORDS:
                tag = "Keyword"
            elif word in LITERAL_WORDS:
                tag = LITERAL_WORDS[word]
            elif word.upper() in SQL_KEYWORDS:
                tag = "SqlKeyword"
        self.emit(tag, start)

    def scan_slash(self, start: int) -> None:
        if self.peek(1) == "/":
            end = self.source.find("\n", start)
            self.pos = len(self.source) if end == -1 else end
            return
        self.pos += 1
        self.emit("Symbol", start)

    def scan_paired(self, start: int, c: str) -> None:
        if self.peek(1) in PAIRED[c]:
            self.pos += 2
        elif c in LONE_OK:
            self.pos += 1
        else:
            raise TokenizeError(f"Unexpected character {c!r}", start, start + 1)
        self.emit("Symbol", start)


def scan(source: str) -> list[Token]:
    return Scanner(source).scan()


def tokenize(source: str, tag: Optional[str] = None) -> AstNode:
    """Tokenize LyQL source into a flat AST

    Returns:
        A node spanning the whole text with one child per token

    Raises:
        TokenizeError: The text contains something that is not a LyQL token
    """
    children = tuple(AstNode(t.tag, Span(t.start, t.end)) for t in scan(source))
    return AstNode(tag or PROGRAM_TAG, Span(0, len(source)), children)
