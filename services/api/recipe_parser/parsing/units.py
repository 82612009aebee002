"""
Unit vocabulary shared by the ingredient grammar and unit conversion.
"""

from typing import Optional, Tuple, Literal

UnitType = Literal["mass", "volume", "count", "unknown"]

# --- Data Tables ---

# Canonical unit -> (type, factor_to_base)
# Base units: g (mass), ml (volume), each (count)
UNITS_DB = {
    # Mass (base: g)
    "mg": ("mass", 0.001),
    "g": ("mass", 1.0),
    "kg": ("mass", 1000.0),
    "oz": ("mass", 28.3495),
    "lb": ("mass", 453.592),

    # Volume (base: ml)
    "ml": ("volume", 1.0),
    "l": ("volume", 1000.0),
    "tsp": ("volume", 4.92892),
    "tbsp": ("volume", 14.7868),
    "fl oz": ("volume", 29.5735),
    "cup": ("volume", 236.588), # US Cup
    "pt": ("volume", 473.176),
    "qt": ("volume", 946.353),
    "gal": ("volume", 3785.41),
    "pinch": ("volume", 0.31),
    "dash": ("volume", 0.62),

    # Count (base: each)
    "each": ("count", 1.0),
    "piece": ("count", 1.0),
    "clove": ("count", 1.0), # often treated as count but variable size
    "slice": ("count", 1.0),
    "can": ("count", 1.0),
    "package": ("count", 1.0),
    "bunch": ("count", 1.0),
    "stick": ("count", 1.0),
    "sprig": ("count", 1.0),
    "head": ("count", 1.0),
    "handful": ("count", 1.0),
}

# Spelled-out forms -> canonical unit
ALIASES = {
    "milligram": "mg", "milligrams": "mg",
    "gram": "g", "grams": "g", "gr": "g",
    "kilogram": "kg", "kilograms": "kg", "kgs": "kg",
    "ounce": "oz", "ounces": "oz",
    "pound": "lb", "pounds": "lb", "lbs": "lb",
    "milliliter": "ml", "milliliters": "ml", "millilitre": "ml", "millilitres": "ml",
    "liter": "l", "liters": "l", "litre": "l", "litres": "l",
    "teaspoon": "tsp", "teaspoons": "tsp", "tsps": "tsp",
    "tablespoon": "tbsp", "tablespoons": "tbsp", "tbsps": "tbsp", "tbl": "tbsp", "tbs": "tbsp",
    "fluid ounce": "fl oz", "fluid ounces": "fl oz", "fl. oz": "fl oz",
    "c": "cup",
    "pint": "pt", "pints": "pt",
    "quart": "qt", "quarts": "qt",
    "gallon": "gal", "gallons": "gal",
    "pinches": "pinch",
    "dashes": "dash",
    "bunches": "bunch",
    "pc": "piece", "pcs": "piece",
}

# Synonyms where case matters ('T' vs 't')
SYNONYMS = {
    "t": "tsp",
    "T": "tbsp",
}

# Canonical unit -> plural used when rendering quantities above one
DISPLAY_PLURALS = {
    "piece": "pieces",
    "clove": "cloves",
    "slice": "slices",
    "can": "cans",
    "package": "packages",
    "bunch": "bunches",
    "stick": "sticks",
    "sprig": "sprigs",
    "head": "heads",
    "handful": "handfuls",
    "cup": "cups",
    "pinch": "pinches",
    "dash": "dashes",
}

def normalize_unit(unit: str) -> Optional[str]:
    """Normalize unit string to its canonical key in UNITS_DB."""
    if not unit:
        return None

    # 1. Check strict case synonyms (e.g. 'T' vs 't')
    raw_clean = unit.strip().rstrip('.')
    if raw_clean in SYNONYMS:
        return SYNONYMS[raw_clean]

    u = " ".join(raw_clean.lower().split())

    # Check direct
    if u in UNITS_DB:
        return u

    # Check aliases
    if u in ALIASES:
        return ALIASES[u]

    # Check plural s removal
    if u.endswith('s') and u[:-1] in UNITS_DB:
        return u[:-1]

    return None


def get_unit_info(unit: str) -> Tuple[UnitType, float]:
    """Get type and factor for a normalized unit."""
    return UNITS_DB.get(unit, ("unknown", 1.0))


def display_unit(unit: str, qty=None) -> str:
    """Canonical unit as written next to a quantity ("2 cups", "1 cup", "3 tbsp")."""
    if qty is not None and qty.max_value > 1 and unit in DISPLAY_PLURALS:
        return DISPLAY_PLURALS[unit]
    return unit
