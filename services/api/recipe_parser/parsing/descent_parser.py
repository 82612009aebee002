"""
Recursive-descent parser for recipe documents.

    document := blank* recipe ( DELIMITER blank* recipe )*
    recipe   := HEADER(n) title NEWLINE body(n)
    body(n)  := ( servings | description | section(n) | recipe(m > n) )*
    section  := ingredient-header ingredient-item*
              | direction-header direction-item*

Headers of level <= n close a level-n recipe; a DELIMITER closes every open
recipe. In lenient mode recoverable problems become ParseWarnings; in strict
mode they raise ParseError.
"""

import logging
from typing import List, Optional

from ..core.text import clean_md, join_paragraphs
from .cursor import Line, LineCursor, LineKind, split_lines
from .errors import ParseError
from .ingredient_parser import parse_ingredient, parse_range_tail
from .lexer import tokenize
from .parser import (
    Direction,
    Ingredient,
    MAX_SERVINGS,
    ParseResult,
    ParseWarning,
    Recipe,
    RecipeParser,
    ServingRange,
)
from .tokens import TokenKind

logger = logging.getLogger(__name__)

INGREDIENTS = "ingredients"
DIRECTIONS = "directions"

INGREDIENT_HEADERS = {"ingredients", "ingredient list", "what you need", "shopping list"}
DIRECTION_HEADERS = {"directions", "instructions", "method", "steps", "preparation", "how to make"}

SERVINGS_WORDS = {"serves", "servings", "serving", "yield", "yields", "makes"}
LIST_MARKERS = ("-", "*", "+", "•")

UNTITLED = "Untitled Recipe"


def section_kind(text: str) -> Optional[str]:
    """Map header text to a section name, or None for sub-recipe titles."""
    key = " ".join(clean_md(text).lower().rstrip(":").split())
    if key in INGREDIENT_HEADERS:
        return INGREDIENTS
    if key in DIRECTION_HEADERS:
        return DIRECTIONS
    return None


def _list_marker(cur: LineCursor) -> bool:
    cur.skip_ws()
    tok = cur.peek()
    nxt = cur.peek(1)
    if tok is not None and tok.is_punct(*LIST_MARKERS) and nxt is not None and nxt.kind == TokenKind.WHITESPACE:
        cur.advance()
        return True
    return False


def _direction_marker(cur: LineCursor) -> bool:
    """Consume `N.`, `N)`, `Step N:` or a list bullet."""
    mark = cur.mark()
    cur.skip_ws()
    tok = cur.peek()
    if tok is None:
        return False

    if tok.is_word("step") and cur.peek(1) is not None and cur.peek(1).kind == TokenKind.WHITESPACE:
        cur.advance()
        cur.advance()
        tok = cur.peek()
        if tok is not None and tok.kind == TokenKind.INTEGER:
            cur.advance()
            sep = cur.peek()
            if sep is not None and sep.is_punct(":", ".", ")", "-"):
                cur.advance()
            return True
        cur.reset(mark)
        return False

    if tok.kind == TokenKind.INTEGER:
        sep = cur.peek(1)
        after = cur.peek(2)
        if sep is not None and sep.is_punct(".", ")") and (after is None or after.kind == TokenKind.WHITESPACE):
            cur.advance()
            cur.advance()
            return True
        cur.reset(mark)
        return False

    cur.reset(mark)
    return _list_marker(cur)


def _parse_int(cur: LineCursor) -> Optional[int]:
    tok = cur.peek()
    if tok is not None and tok.kind == TokenKind.INTEGER:
        cur.advance()
        return tok.value
    return None


class _RecipeBuilder:
    """Mutable state for a recipe while its body is being parsed."""

    def __init__(self, title: str):
        self.title = title
        self.servings: Optional[ServingRange] = None
        self.description: List[str] = []
        self.ingredients: List[Ingredient] = []
        self.directions: List[Direction] = []
        self.subrecipes: List[Recipe] = []
        self.sections = set()

    def build(self) -> Recipe:
        return Recipe(
            title=self.title,
            servings=self.servings,
            description=join_paragraphs(self.description) or None,
            ingredients=self.ingredients,
            directions=self.directions,
            subrecipes=self.subrecipes,
        )


class DescentParser(RecipeParser):
    def __init__(self, strict: bool = False):
        self.strict = strict
        self._lines: List[Line] = []
        self._pos = 0
        self._warnings: List[ParseWarning] = []

    def parse(self, text: str) -> ParseResult:
        self._lines = split_lines(tokenize(text))
        self._pos = 0
        self._warnings = []

        recipes = self._parse_document()
        logger.debug(f"Parsed {len(recipes)} recipe(s) with {len(self._warnings)} warning(s)")
        return ParseResult(recipes=recipes, warnings=self._warnings)

    # --- helpers ---

    def _peek(self) -> Optional[Line]:
        if self._pos < len(self._lines):
            return self._lines[self._pos]
        return None

    def _advance(self) -> Line:
        line = self._lines[self._pos]
        self._pos += 1
        return line

    def _skip_blank(self) -> None:
        while self._peek() is not None and self._peek().kind == LineKind.BLANK:
            self._pos += 1

    def _problem(self, line: int, column: int, message: str) -> None:
        """Raise in strict mode, otherwise record a warning."""
        if self.strict:
            raise ParseError(message, line, column)
        self._warn(line, column, message)

    def _warn(self, line: int, column: int, message: str) -> None:
        logger.debug(f"Parse warning at {line}:{column}: {message}")
        self._warnings.append(ParseWarning(line=line, column=column, message=message))

    def _section_label(self, line: Line) -> Optional[str]:
        """A plain "Ingredients:" style line that opens a section."""
        if line.kind != LineKind.TEXT:
            return None
        cur = line.cursor()
        if _list_marker(cur):
            return None
        return section_kind(line.text)

    # --- grammar ---

    def _parse_document(self) -> List[Recipe]:
        recipes = []
        while True:
            self._skip_blank()
            line = self._peek()
            if line is None:
                break
            if line.kind == LineKind.DELIMITER:
                self._advance()
                continue
            recipes.append(self._parse_top_recipe())

        if not recipes and self.strict:
            raise ParseError("Document contains no recipe", 1, 1)
        return recipes

    def _parse_top_recipe(self) -> Recipe:
        line = self._peek()
        if line.kind == LineKind.HEADER:
            self._advance()
            return self._parse_recipe(line.header_level, self._title(line, line.header_text))

        self._problem(line.number, line.column, "Expected a '#' title header")

        # Lenient: a leading plain line is the title, unless it already opens a section
        if self._section_label(line):
            return self._parse_recipe(0, UNTITLED)
        self._advance()
        return self._parse_recipe(0, self._title(line, line.text))

    def _title(self, line: Line, text: str) -> str:
        title = clean_md(text)
        if not title:
            self._problem(line.number, line.column, "Recipe title is empty")
            return UNTITLED
        return title

    def _parse_recipe(self, level: int, title: str) -> Recipe:
        builder = _RecipeBuilder(title)

        while True:
            line = self._peek()
            if line is None or line.kind == LineKind.DELIMITER:
                break

            if line.kind == LineKind.HEADER:
                if line.header_level <= level:
                    break
                self._advance()
                kind = section_kind(line.header_text)
                if kind:
                    self._parse_section(kind, builder, line)
                else:
                    title = self._title(line, line.header_text)
                    builder.subrecipes.append(self._parse_recipe(line.header_level, title))
                continue

            if line.kind == LineKind.BLANK:
                self._advance()
                builder.description.append("")
                continue

            kind = self._section_label(line)
            if kind:
                self._advance()
                self._parse_section(kind, builder, line)
                continue

            self._advance()
            servings = self._parse_servings(line)
            if servings is None:
                builder.description.append(line.text)
            elif builder.servings is not None:
                self._problem(line.number, line.column, "Servings given more than once")
            else:
                builder.servings = servings

        return builder.build()

    def _parse_servings(self, line: Line) -> Optional[ServingRange]:
        cur = line.cursor()
        cur.skip_ws()
        tok = cur.peek()
        if tok is None or not tok.is_word(*SERVINGS_WORDS):
            return None
        cur.advance()
        cur.skip_ws()
        if cur.peek() is not None and cur.peek().is_punct(":"):
            cur.advance()
            cur.skip_ws()

        num_line, num_col = cur.position()
        try:
            low = _parse_int(cur)
            if low is None:
                return None
            high = parse_range_tail(cur, _parse_int)
        except ValueError:
            self._problem(num_line, num_col, "Servings number is too large")
            return None
        if high is None:
            high = low

        if max(low, high) > MAX_SERVINGS:
            self._problem(num_line, num_col, "Servings number is too large")
            return None
        if low < 1:
            self._problem(num_line, num_col, "Servings must be at least 1")
            return None
        if low > high:
            self._problem(num_line, num_col, "Servings range runs backwards")
            low, high = high, low
        return ServingRange(low=low, high=high)

    def _section_ends(self, line: Line) -> bool:
        if line.kind in (LineKind.HEADER, LineKind.DELIMITER):
            return True
        return self._section_label(line) is not None

    def _parse_section(self, kind: str, builder: _RecipeBuilder, opener: Line) -> None:
        if kind in builder.sections:
            self._problem(opener.number, opener.column, f"Duplicate {kind} section in '{builder.title}'")
        builder.sections.add(kind)

        if kind == INGREDIENTS:
            self._parse_ingredients(builder)
        else:
            self._parse_directions(builder)

    def _parse_ingredients(self, builder: _RecipeBuilder) -> None:
        group = builder.ingredients[-1].group if builder.ingredients else None

        while True:
            line = self._peek()
            if line is None or self._section_ends(line):
                return
            self._advance()
            if line.kind == LineKind.BLANK:
                continue

            cur = line.cursor()
            if _list_marker(cur):
                builder.ingredients.append(parse_ingredient(cur, self.strict, self._warn, group))
                continue

            text = clean_md(line.text)
            if text.endswith(":"):
                group = text[:-1].strip() or None
                continue

            self._problem(line.number, line.column, "Expected an ingredient list item")
            builder.ingredients.append(parse_ingredient(line.cursor(), self.strict, self._warn, group))

    def _parse_directions(self, builder: _RecipeBuilder) -> None:
        directions = builder.directions

        while True:
            line = self._peek()
            if line is None or self._section_ends(line):
                return
            self._advance()
            if line.kind == LineKind.BLANK:
                continue

            cur = line.cursor()
            if _direction_marker(cur):
                text = cur.rest_text().strip()
                if not text:
                    self._problem(line.number, line.column, "Direction has no text")
                    continue
                directions.append(Direction(index=len(directions) + 1, text=text))
                continue

            if directions:
                last = directions[-1]
                last.text = f"{last.text} {line.text}"
                continue

            self._problem(line.number, line.column, "Expected a numbered or bulleted direction")
            directions.append(Direction(index=len(directions) + 1, text=line.text))


def parse_all(text: str, strict: bool = False) -> ParseResult:
    return DescentParser(strict=strict).parse(text)


def parse(text: str, strict: bool = False) -> Recipe:
    """Parse the first recipe of `text`.

    Raises:
        LexError: If the text cannot be tokenized.
        ParseError: If the text holds no recipe, or on any problem in strict mode.
    """
    result = parse_all(text, strict=strict)
    if not result.recipes:
        raise ParseError("Document contains no recipe", 1, 1)
    return result.recipes[0]
