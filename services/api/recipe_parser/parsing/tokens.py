from enum import Enum
from fractions import Fraction
from typing import NamedTuple


class TokenKind(str, Enum):
    INTEGER = "INTEGER"
    FRACTION = "FRACTION"
    HEADER = "HEADER"
    DELIMITER = "DELIMITER"
    WORD = "WORD"
    PUNCT = "PUNCT"
    WHITESPACE = "WHITESPACE"
    NEWLINE = "NEWLINE"
    EOF = "EOF"


# Unicode vulgar fractions -> exact value
VULGAR_FRACTIONS = {
    "½": Fraction(1, 2),
    "⅓": Fraction(1, 3),
    "⅔": Fraction(2, 3),
    "¼": Fraction(1, 4),
    "¾": Fraction(3, 4),
    "⅕": Fraction(1, 5),
    "⅖": Fraction(2, 5),
    "⅗": Fraction(3, 5),
    "⅘": Fraction(4, 5),
    "⅙": Fraction(1, 6),
    "⅚": Fraction(5, 6),
    "⅛": Fraction(1, 8),
    "⅜": Fraction(3, 8),
    "⅝": Fraction(5, 8),
    "⅞": Fraction(7, 8),
}


class Token(NamedTuple):
    kind: TokenKind
    text: str
    line: int
    column: int

    @property
    def value(self):
        """Typed value: int for INTEGER, Fraction for FRACTION, level for HEADER."""
        if self.kind == TokenKind.INTEGER:
            return int(self.text)
        if self.kind == TokenKind.FRACTION:
            if self.text in VULGAR_FRACTIONS:
                return VULGAR_FRACTIONS[self.text]
            n, d = self.text.split("/")
            return Fraction(int(n), int(d))
        if self.kind == TokenKind.HEADER:
            return len(self.text)
        return self.text

    def is_punct(self, *chars: str) -> bool:
        return self.kind == TokenKind.PUNCT and self.text in chars

    def is_word(self, *words: str) -> bool:
        return self.kind == TokenKind.WORD and self.text.lower() in words

    def to_dict(self):
        return {
            "kind": self.kind.value,
            "text": self.text,
            "line": self.line,
            "column": self.column,
        }
