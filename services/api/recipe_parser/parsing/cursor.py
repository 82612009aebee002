from enum import Enum
from typing import List, Optional, Tuple

from .tokens import Token, TokenKind


class LineKind(str, Enum):
    HEADER = "header"
    DELIMITER = "delimiter"
    BLANK = "blank"
    TEXT = "text"


class Line:
    """One physical line of the document as a list of tokens (no NEWLINE)."""

    def __init__(self, number: int, tokens: List[Token]):
        self.number = number
        self.tokens = tokens

        kinds = [t.kind for t in tokens]
        if kinds and kinds[0] == TokenKind.HEADER:
            self.kind = LineKind.HEADER
        elif kinds and kinds[0] == TokenKind.DELIMITER:
            self.kind = LineKind.DELIMITER
        elif all(k == TokenKind.WHITESPACE for k in kinds):
            self.kind = LineKind.BLANK
        else:
            self.kind = LineKind.TEXT

    @property
    def text(self) -> str:
        return "".join(t.text for t in self.tokens).strip()

    @property
    def header_level(self) -> int:
        return self.tokens[0].value if self.kind == LineKind.HEADER else 0

    @property
    def header_text(self) -> str:
        return "".join(t.text for t in self.tokens[1:]).strip()

    @property
    def column(self) -> int:
        """Column of the first non-whitespace token."""
        for t in self.tokens:
            if t.kind != TokenKind.WHITESPACE:
                return t.column
        return 1

    def cursor(self) -> "LineCursor":
        return LineCursor(self)

    def __repr__(self):
        return f"Line({self.number}, {self.kind.value}, {self.text!r})"


def split_lines(tokens: List[Token]) -> List[Line]:
    lines = []
    current: List[Token] = []
    number = 1
    for tok in tokens:
        if tok.kind in (TokenKind.NEWLINE, TokenKind.EOF):
            # A trailing newline does not open an extra line
            if tok.kind == TokenKind.NEWLINE or current:
                lines.append(Line(number, current))
            current = []
            number = tok.line + 1
        else:
            current.append(tok)
    return lines


class LineCursor:
    """Recursive-descent cursor over the tokens of a single line."""

    def __init__(self, line: Line):
        self.line = line
        self.tokens = line.tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Optional[Token]:
        i = self.pos + offset
        if i < len(self.tokens):
            return self.tokens[i]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def skip_ws(self) -> None:
        while not self.at_end() and self.tokens[self.pos].kind == TokenKind.WHITESPACE:
            self.pos += 1

    def mark(self) -> int:
        return self.pos

    def reset(self, mark: int) -> None:
        self.pos = mark

    def rest_text(self) -> str:
        return "".join(t.text for t in self.tokens[self.pos:])

    def position(self) -> Tuple[int, int]:
        """(line, column) of the current token, or just past the line end."""
        tok = self.peek()
        if tok is not None:
            return tok.line, tok.column
        if self.tokens:
            last = self.tokens[-1]
            return last.line, last.column + len(last.text)
        return self.line.number, 1
