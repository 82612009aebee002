"""
Unit conversion for parsed recipes.

Mass and volume convert through their base units (g, ml). Crossing between
mass and volume needs a density: either one given by the caller or one looked
up from the ingredient name, which lowers the confidence of the result.
"""

import logging
import math
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel

from ..parsing.errors import UnitError
from ..parsing.parser import Quantity, Recipe
from ..parsing.units import get_unit_info, normalize_unit

logger = logging.getLogger(__name__)

UnitSystem = Literal["metric", "us_customary"]
Confidence = Literal["high", "medium", "low", "none"]

UNIT_SYSTEMS = ("metric", "us_customary")


class ConversionResult(BaseModel):
    qty: float
    unit: str
    confidence: Confidence = "high"
    note: Optional[str] = None
    is_approx: bool = False


WATER_DENSITY = 1.0

# g/ml, approximate
DENSITY_DB = {
    "water": 1.0,
    "stock": 1.0,
    "broth": 1.0,
    "milk": 1.03,
    "buttermilk": 1.03,
    "cream": 0.99,
    "heavy cream": 0.99,
    "yogurt": 1.03,
    "oil": 0.92,
    "olive oil": 0.92,
    "vegetable oil": 0.92,
    "butter": 0.911,
    "peanut butter": 1.09,
    "flour": 0.593,          # all purpose, sifted
    "all-purpose flour": 0.593,
    "all purpose flour": 0.593,
    "cornstarch": 0.54,
    "cocoa powder": 0.42,
    "sugar": 0.849,          # granulated
    "granulated sugar": 0.849,
    "brown sugar": 0.93,     # packed
    "powdered sugar": 0.56,
    "honey": 1.42,
    "maple syrup": 1.37,
    "molasses": 1.4,
    "salt": 1.2,             # table salt
    "rice": 0.85,            # uncooked
    "oats": 0.38,            # rolled
}

# Readable units per system: (exclusive upper bound in base units, unit).
# The last unit of each list takes everything above the previous bound.
SYSTEM_STEPS: Dict[str, Dict[str, List[Tuple[float, str]]]] = {
    "metric": {
        "volume": [(1000, "ml"), (0, "l")],
        "mass": [(1000, "g"), (0, "kg")],
    },
    "us_customary": {
        "volume": [(15, "tsp"), (60, "tbsp"), (950, "cup"), (3800, "qt"), (0, "gal")],
        "mass": [(453.592, "oz"), (0, "lb")],
    },
}

# Too small to be worth converting
KEEP_UNITS = ("pinch", "dash")

TOO_LARGE = "Converted quantity is too large"


def estimate_density(ingredient_name: str) -> Tuple[float, str]:
    """
    Look up the density of an ingredient by name.

    Returns (g_per_ml, confidence): "medium" for an exact name, "low" when
    the longest known name inside it matched ("whole milk" -> "milk"), and
    water with "none" otherwise.
    """
    name = " ".join(ingredient_name.lower().split())
    if name in DENSITY_DB:
        return DENSITY_DB[name], "medium"

    matches = [k for k in DENSITY_DB if k in name]
    if matches:
        return DENSITY_DB[max(matches, key=len)], "low"

    return WATER_DENSITY, "none"


def format_qty_cook(qty: float) -> float:
    """Round to cook-friendly precision."""
    if qty < 10:
        return round(qty, 2)
    if qty < 100:
        return round(qty, 1)
    return float(round(qty))


def _unconverted(qty: float, unit: str, note: str) -> ConversionResult:
    return ConversionResult(qty=qty, unit=unit, confidence="low", note=note, is_approx=True)


def convert_unit(
    qty: float,
    from_unit: str,
    to_unit: str,
    ingredient_name: str = "",
    allow_cross_type: bool = False,
    override_density: Optional[float] = None
) -> ConversionResult:
    """
    Convert `qty` between units.

    A conversion that cannot be made returns the quantity unchanged with
    "low" confidence and a note. Mass/volume conversions for an ingredient of
    unknown density are refused unless `allow_cross_type` is set, in which
    case water density is used and confidence is "none".
    """
    src = normalize_unit(from_unit)
    dst = normalize_unit(to_unit)
    if not src or not dst:
        return _unconverted(qty, to_unit, "Unknown unit")

    src_type, src_factor = get_unit_info(src)
    dst_type, dst_factor = get_unit_info(dst)

    if src_type == dst_type:
        if src_type == "count" and src != dst:
            return _unconverted(qty, to_unit, "Cannot convert between count units")
        result = qty * src_factor / dst_factor
        if not math.isfinite(result):
            return _unconverted(qty, to_unit, TOO_LARGE)
        return ConversionResult(qty=result, unit=dst)

    if {src_type, dst_type} != {"mass", "volume"}:
        return _unconverted(qty, to_unit, "Cannot convert count to measurement")

    if override_density:
        density, confidence = override_density, "high"
        note = f"Using density override: {density:.3g} g/ml"
    else:
        density, confidence = estimate_density(ingredient_name)
        if confidence == "none" and not allow_cross_type:
            return _unconverted(qty, dst, "Cannot convert mass to volume without density")
        note = f"Approximated using density of {ingredient_name or 'water'}"

    # g = ml * density
    base = qty * src_factor
    base = base / density if src_type == "mass" else base * density
    result = base / dst_factor
    if not math.isfinite(result):
        return _unconverted(qty, to_unit, TOO_LARGE)

    return ConversionResult(
        qty=result,
        unit=dst,
        confidence=confidence,
        note=note,
        is_approx=not override_density,
    )


def auto_select_unit(qty: float, current_unit: str, target_system: str = "metric") -> str:
    """
    Pick the most readable unit of `target_system` for a quantity.
    Count units, and units the system has no steps for, are returned as-is.
    """
    unit = normalize_unit(current_unit)
    if not unit:
        return current_unit

    u_type, factor = get_unit_info(unit)
    steps = SYSTEM_STEPS.get(target_system, {}).get(u_type)
    if not steps:
        return unit

    base = qty * factor
    for bound, candidate in steps[:-1]:
        if base < bound:
            return candidate
    return steps[-1][1]


def convert_recipe_units(recipe: Recipe, system: str) -> Recipe:
    """
    Return a copy of `recipe` with mass and volume ingredients expressed in
    `system` units. Count units and unitless ingredients are left alone.

    Raises:
        UnitError: If `system` is not a known unit system, or a converted
            quantity no longer fits a float.
    """
    if system not in UNIT_SYSTEMS:
        raise UnitError(f"Unknown unit system: {system}")

    converted = recipe.model_copy(deep=True)

    for sub in converted.walk():
        for ing in sub.ingredients:
            if ing.quantity is None or not ing.unit or ing.unit in KEEP_UNITS:
                continue
            u_type, _ = get_unit_info(ing.unit)
            if u_type not in ("mass", "volume"):
                continue

            target = auto_select_unit(ing.quantity.value, ing.unit, system)
            if target == ing.unit:
                continue

            factor = convert_unit(1.0, ing.unit, target).qty
            q = ing.quantity
            if not math.isfinite(q.max_value * factor):
                raise UnitError(f"Converted quantity of '{ing.name}' is too large")
            ing.quantity = Quantity(
                value=format_qty_cook(q.value * factor),
                upper=format_qty_cook(q.upper * factor) if q.upper is not None else None,
            )
            logger.debug(f"Converted {ing.name}: {q} {ing.unit} -> {ing.quantity} {target}")
            ing.unit = target

    return converted
