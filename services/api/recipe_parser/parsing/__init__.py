from .errors import RecipeError, LexError, ParseError, ScaleError, UnitError
from .tokens import Token, TokenKind
from .lexer import tokenize
from .parser import (
    RecipeParser,
    Recipe,
    Ingredient,
    Direction,
    Quantity,
    ServingRange,
    ParseResult,
    ParseWarning,
)
from .descent_parser import DescentParser, parse, parse_all

__all__ = [
    "RecipeError", "LexError", "ParseError", "ScaleError", "UnitError",
    "Token", "TokenKind", "tokenize",
    "RecipeParser", "Recipe", "Ingredient", "Direction", "Quantity", "ServingRange",
    "ParseResult", "ParseWarning",
    "DescentParser", "parse", "parse_all",
]
