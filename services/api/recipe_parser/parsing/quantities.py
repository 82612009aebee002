from decimal import Decimal
from fractions import Fraction

# Denominators rendered as fractions; anything else is shown as a decimal
COOK_DENOMINATORS = (2, 3, 4, 8)


def _decimal(value: float) -> str:
    """Shortest plain decimal that reads back as the same float ("0.333", not "0.33")."""
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_number(value: float) -> str:
    """Render a quantity the way a cook writes it: "2", "1 1/2", "2/3", "0.333".

    The result always parses back to exactly `value`.
    """
    whole = int(value)
    if whole == value:
        return str(whole)

    for denominator in COOK_DENOMINATORS:
        numerator = round((value - whole) * denominator)
        if not 0 < numerator < denominator:
            continue
        frac = Fraction(numerator, denominator)
        if float(whole + frac) != value:
            continue
        if whole:
            return f"{whole} {frac.numerator}/{frac.denominator}"
        return f"{frac.numerator}/{frac.denominator}"

    return _decimal(value)


def format_range(value: float, upper=None) -> str:
    if upper is None:
        return format_number(value)
    return f"{format_number(value)}-{format_number(upper)}"
