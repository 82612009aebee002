"""
Lexer for the recipe text format.

Groups raw characters into categorized tokens. The token stream is lossless:
joining the text of every token reproduces the (newline-normalized) input.
"""

import logging
import re
from typing import Iterator, List

from .errors import LexError
from .tokens import Token, TokenKind, VULGAR_FRACTIONS

logger = logging.getLogger(__name__)

# Order matters: line-anchored rules first, FRACTION before INTEGER.
TOKEN_SPECS = [
    ("DELIMITER", r"^(?:-{3,}|={3,}|\*{3,})[ \t]*(?=\n|\Z)"),
    ("HEADER", r"^#{1,6}(?=[ \t])"),
    ("FRACTION", r"[0-9]+/[0-9]+|[" + "".join(VULGAR_FRACTIONS) + r"]"),
    ("INTEGER", r"[0-9]+"),
    ("WORD", r"[^\W\d_](?:[\w'’-]*[^\W_])?"),
    ("WHITESPACE", r"[ \t]+"),
    ("NEWLINE", r"\n"),
    ("CONTROL", r"[\x00-\x08\x0b-\x1f\x7f]"),
    ("PUNCT", r"."),
]

TOKEN_REGEX = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in TOKEN_SPECS),
    re.MULTILINE,
)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield tokens for `text`, ending with a single EOF token.

    Raises:
        LexError: On control characters or a fraction with a zero denominator.
    """
    source = normalize_newlines(text)
    matcher = TOKEN_REGEX.match
    pos = 0
    line = 1
    line_start = 0

    while pos < len(source):
        m = matcher(source, pos)
        kind = m.lastgroup
        value = m.group(kind)
        column = pos - line_start + 1

        if kind == "CONTROL":
            raise LexError(f"Unexpected control character {value!r}", line, column)

        if kind == "FRACTION" and "/" in value and not value.split("/")[1].strip("0"):
            raise LexError(f"Fraction with zero denominator: {value}", line, column)

        yield Token(TokenKind(kind), value, line, column)

        pos = m.end()
        if kind == "NEWLINE":
            line += 1
            line_start = pos

    yield Token(TokenKind.EOF, "", line, pos - line_start + 1)


def tokenize(text: str) -> List[Token]:
    tokens = list(iter_tokens(text))
    logger.debug(f"Tokenized {len(text)} chars into {len(tokens)} tokens")
    return tokens
