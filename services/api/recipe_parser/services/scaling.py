import logging
import math

from ..parsing.errors import ScaleError
from ..parsing.parser import MAX_SERVINGS, Recipe, ServingRange

logger = logging.getLogger(__name__)


def _scale_servings(servings: ServingRange, factor: float) -> ServingRange:
    high = servings.high * factor
    if not math.isfinite(high):
        raise ScaleError(f"Scaling by {factor:g} makes the servings too large")
    return ServingRange(
        low=max(1, round(servings.low * factor)),
        high=max(1, round(high)),
    )


def scale_recipe(recipe: Recipe, factor: float) -> Recipe:
    """
    Return a copy of `recipe` with every quantity multiplied by `factor`.
    Sub-recipes are scaled by the same factor. Directions are unchanged.

    Raises:
        ScaleError: If factor is not a finite positive number, or a scaled
            value no longer fits a float.
    """
    if not math.isfinite(factor) or factor <= 0:
        raise ScaleError(f"Scale factor must be a finite positive number, got {factor}")

    scaled = recipe.model_copy(deep=True)
    for sub in scaled.walk():
        if sub.servings is not None:
            sub.servings = _scale_servings(sub.servings, factor)
        for ing in sub.ingredients:
            if ing.quantity is None:
                continue
            ing.quantity = ing.quantity.scaled(factor)
            if not math.isfinite(ing.quantity.max_value):
                raise ScaleError(f"Scaling by {factor:g} makes the quantity of '{ing.name}' too large")

    logger.debug(f"Scaled '{recipe.title}' by {factor:g}")
    return scaled


def scale_to_servings(recipe: Recipe, servings: int) -> Recipe:
    """
    Scale `recipe` so that it serves `servings` people, based on the low end
    of its serving range.

    Raises:
        ScaleError: If the recipe has no servings or `servings` is outside
            1..MAX_SERVINGS.
    """
    if not 1 <= servings <= MAX_SERVINGS:
        raise ScaleError(f"Servings must be between 1 and {MAX_SERVINGS}, got {servings}")
    if recipe.servings is None:
        raise ScaleError(f"Recipe '{recipe.title}' does not say how many it serves")

    factor = servings / recipe.servings.low
    scaled = scale_recipe(recipe, factor)
    # Keep the requested count exact rather than rounded from the factor
    scaled.servings = ServingRange(
        low=servings,
        high=max(servings, round(recipe.servings.high * factor)),
    )
    return scaled
