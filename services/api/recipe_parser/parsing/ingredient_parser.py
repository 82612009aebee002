"""
Ingredient line grammar.

    ingredient := quantity? unit? "of"? name details?
    quantity   := number ( ("-" | "–" | "to") number )?
    number     := FRACTION | INTEGER ( FRACTION | "." INTEGER | WS FRACTION )?
    details    := "," text | "(" text ")"
"""

from fractions import Fraction
from typing import Callable, List, Optional, Tuple

from ..core.text import collapse_whitespace
from .units import normalize_unit
from .cursor import LineCursor
from .errors import ParseError
from .parser import Ingredient, Quantity
from .tokens import TokenKind

RANGE_SEPARATORS = ("-", "–", "—")

# Callback used to record a recovered problem: (line, column, message)
WarnFn = Callable[[int, int, str], None]


def parse_number(cur: LineCursor) -> Optional[Fraction]:
    tok = cur.peek()
    if tok is None:
        return None

    if tok.kind == TokenKind.FRACTION:
        cur.advance()
        return tok.value

    if tok.kind != TokenKind.INTEGER:
        return None

    cur.advance()
    number = Fraction(tok.value)
    nxt = cur.peek()
    if nxt is None:
        return number

    # 1½
    if nxt.kind == TokenKind.FRACTION:
        cur.advance()
        return number + nxt.value

    after = cur.peek(1)
    # 1.5
    if nxt.is_punct(".") and after is not None and after.kind == TokenKind.INTEGER:
        cur.advance()
        cur.advance()
        return Fraction(f"{tok.text}.{after.text}")

    # 1 1/2
    if nxt.kind == TokenKind.WHITESPACE and after is not None and after.kind == TokenKind.FRACTION:
        cur.advance()
        cur.advance()
        return number + after.value

    return number


def parse_range_tail(cur: LineCursor, parse_item) -> Optional[object]:
    """Parse `("-" | "to") item` after a value, restoring the cursor on failure."""
    mark = cur.mark()
    cur.skip_ws()
    tok = cur.peek()
    if tok is not None and (tok.is_punct(*RANGE_SEPARATORS) or tok.is_word("to")):
        cur.advance()
        cur.skip_ws()
        upper = parse_item(cur)
        if upper is not None:
            return upper
    cur.reset(mark)
    return None


def parse_quantity(cur: LineCursor) -> Optional[Tuple[Fraction, Optional[Fraction]]]:
    low = parse_number(cur)
    if low is None:
        return None
    return low, parse_range_tail(cur, parse_number)


def parse_unit(cur: LineCursor) -> Optional[str]:
    """Consume a recognized unit ("cups", "Tbsp.", "fl oz"), if one comes next."""
    mark = cur.mark()
    cur.skip_ws()
    first = cur.peek()
    if first is None or first.kind != TokenKind.WORD:
        cur.reset(mark)
        return None

    # Two-word units ("fl oz", "fluid ounces"), optionally "fl. oz"
    second_offset = 2 if cur.peek(1) is not None and cur.peek(1).is_punct(".") else 1
    gap = cur.peek(second_offset)
    second = cur.peek(second_offset + 1)
    if gap is not None and gap.kind == TokenKind.WHITESPACE and second is not None and second.kind == TokenKind.WORD:
        unit = normalize_unit(f"{first.text} {second.text}")
        if unit:
            for _ in range(second_offset + 2):
                cur.advance()
            _skip_abbrev_dot(cur)
            return unit

    unit = normalize_unit(first.text)
    if unit:
        cur.advance()
        _skip_abbrev_dot(cur)
        return unit

    cur.reset(mark)
    return None


def _skip_abbrev_dot(cur: LineCursor) -> None:
    tok = cur.peek()
    if tok is not None and tok.is_punct("."):
        cur.advance()


def _skip_of(cur: LineCursor) -> None:
    mark = cur.mark()
    cur.skip_ws()
    tok = cur.peek()
    nxt = cur.peek(1)
    if tok is not None and tok.is_word("of") and nxt is not None and nxt.kind == TokenKind.WHITESPACE:
        cur.advance()
        return
    cur.reset(mark)


def parse_name_and_details(cur: LineCursor, strict: bool, warn: WarnFn) -> Tuple[str, List[str]]:
    name_parts: List[str] = []
    details: List[str] = []

    while not cur.at_end():
        tok = cur.peek()

        if tok.is_punct(","):
            cur.advance()
            rest = collapse_whitespace(cur.rest_text())
            if rest:
                details.append(rest)
            cur.reset(len(cur.tokens))
            break

        if tok.is_punct("("):
            opener = cur.advance()
            depth = 1
            inner: List[str] = []
            while not cur.at_end():
                t = cur.advance()
                if t.is_punct("("):
                    depth += 1
                elif t.is_punct(")"):
                    depth -= 1
                    if depth == 0:
                        break
                inner.append(t.text)

            if depth:
                if strict:
                    raise ParseError("Unclosed '(' in ingredient", opener.line, opener.column)
                warn(opener.line, opener.column, "Unclosed '(' in ingredient; treating the rest as details")

            text = collapse_whitespace("".join(inner))
            if text:
                details.append(text)
            continue

        name_parts.append(cur.advance().text)

    return collapse_whitespace("".join(name_parts)), details


def read_quantity(cur: LineCursor, strict: bool, warn: WarnFn) -> Optional[Quantity]:
    """
    Raises:
        ParseError: In strict mode, if a range runs backwards.
        OverflowError, ValueError: If a number is too large for a float.
    """
    q_line, q_col = cur.position()
    parsed = parse_quantity(cur)
    if parsed is None:
        return None

    low, high = parsed
    if high is not None and low > high:
        if strict:
            raise ParseError("Quantity range runs backwards", q_line, q_col)
        warn(q_line, q_col, "Quantity range runs backwards; swapping bounds")
        low, high = high, low
    return Quantity(value=float(low), upper=float(high) if high is not None else None)


def parse_ingredient(
    cur: LineCursor,
    strict: bool,
    warn: WarnFn,
    group: Optional[str] = None,
) -> Ingredient:
    """Parse the remainder of an ingredient line (after its list marker)."""
    cur.skip_ws()
    start_line, start_col = cur.position()
    raw = collapse_whitespace(cur.rest_text())

    unit = None
    q_line, q_col = cur.position()
    mark = cur.mark()
    try:
        quantity = read_quantity(cur, strict, warn)
    except (OverflowError, ValueError) as e:
        if strict:
            raise ParseError("Quantity is too large", q_line, q_col) from e
        warn(q_line, q_col, "Quantity is too large; keeping it in the name")
        cur.reset(mark)
        quantity = None

    if quantity is not None:
        unit = parse_unit(cur)
        if unit:
            _skip_of(cur)

    cur.skip_ws()
    name, details = parse_name_and_details(cur, strict, warn)

    if not name:
        if strict:
            raise ParseError("Ingredient is missing a name", start_line, start_col)
        warn(start_line, start_col, "Ingredient is missing a name")
        if details:
            name = details.pop(0)
        else:
            name = raw

    return Ingredient(
        name=name,
        quantity=quantity,
        unit=unit,
        details=", ".join(details) if details else None,
        group=group,
    )
