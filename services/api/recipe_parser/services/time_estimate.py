import logging
from typing import Tuple

from ..parsing.parser import Recipe
from ..parsing.timers import DURATION_REGEX, duration_seconds

logger = logging.getLogger(__name__)


def estimate_recipe_time(recipe: Recipe) -> Tuple[int, str]:
    """
    Estimate total time for a recipe, sub-recipes included.
    Returns (total_minutes, source).
    source is "parsed" if any duration was found in the directions,
    "heuristic" if only the prep overhead was used.
    """
    recipes = list(recipe.walk())
    directions = [d for r in recipes for d in r.directions]
    ingredients_count = sum(len(r.ingredients) for r in recipes)

    # 1. Durations from direction text (upper bound of ranges)
    parsed_minutes = 0
    has_parsed = False
    for direction in directions:
        for m in DURATION_REGEX.finditer(direction.text):
            amount = int(m.group(2) or m.group(1))
            parsed_minutes += duration_seconds(amount, m.group(3)) // 60
            has_parsed = True

    # 2. Prep overhead based on recipe size
    if ingredients_count > 0:
        prep = max(5, min(25, round(ingredients_count * 1.5)))
    else:
        prep = max(5, min(20, len(directions) * 2))

    total = parsed_minutes + prep

    # Round to nearest 5
    total = round(total / 5) * 5

    # Clamp
    total = max(5, min(total, 240))

    source = "parsed" if has_parsed else "heuristic"
    logger.debug(f"Estimated '{recipe.title}': {total}m ({source})")
    return total, source
