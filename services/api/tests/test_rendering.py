import json

import pytest

from recipe_parser.parsing import Ingredient, ParseWarning, Quantity, parse, parse_all
from recipe_parser.services.rendering import (
    format_ingredient,
    render,
    render_json,
    render_markdown,
    render_text,
)
from recipe_parser.services.scaling import scale_recipe


CANONICAL = """# Buttermilk Pancakes
Serves 4-6

Fluffy weekend pancakes.

## Ingredients
- 2 cups all-purpose flour, sifted
- 1 1/2 cups buttermilk, cold
- 2 large eggs
- 1/2 tsp salt
For the topping:
- 1/4 cup maple syrup

## Directions
1. Whisk the dry ingredients.
2. Fold in the buttermilk and eggs. Do not overmix.
3. Cook on a hot griddle for 2-3 minutes per side.

## Blueberry Compote
Serves 4

### Ingredients
- 1 cup blueberries
- 2 tbsp sugar

### Directions
1. Simmer for 10 minutes.
"""


def test_markdown_is_canonical(pancakes):
    assert render_markdown(pancakes) == CANONICAL


def test_markdown_round_trip(pancakes):
    assert parse(render_markdown(pancakes), strict=True) == pancakes


def test_markdown_round_trip_after_scaling(pancakes):
    scaled = scale_recipe(pancakes, 1.5)
    assert parse(render_markdown(scaled), strict=True) == scaled


def test_markdown_round_trip_keeps_decimals():
    recipe = parse("# A\n## Ingredients\n- 0.333 cup milk\n")
    output = render_markdown(recipe)
    assert "- 0.333 cup milk" in output
    assert parse(output, strict=True) == recipe


def test_markdown_round_trip_deepest_level():
    text = "# A\n## B\n### C\n#### D\n##### E\n###### F\nServes 2\n\nIngredients:\n- 1 egg\n\nDirections:\n1. Fry.\n"
    recipe = parse(text, strict=True)
    output = render_markdown(recipe)
    assert "###### F" in output
    assert "Ingredients:" in output
    assert parse(output, strict=True) == recipe


def test_markdown_multiple_recipes():
    recipes = parse_all("# A\n\n---\n# B\nServes 2\n").recipes
    output = render_markdown(recipes)
    assert output == "# A\n\n---\n\n# B\nServes 2\n"
    assert parse_all(output).recipes == recipes


def test_format_ingredient():
    ing = Ingredient(name="garlic", quantity=Quantity(value=2, upper=3), unit="clove", details="minced")
    assert format_ingredient(ing) == "2-3 cloves garlic, minced"
    assert format_ingredient(ing, details_in_parens=True) == "2-3 cloves garlic (minced)"
    assert format_ingredient(Ingredient(name="salt")) == "salt"


def test_text(pancakes):
    lines = render_text(pancakes).splitlines()
    assert lines[0] == "Buttermilk Pancakes"
    assert lines[1] == "=" * len("Buttermilk Pancakes")
    assert lines[2] == "Serves 4 to 6 | About 25 min"
    assert "  * 1 1/2 cups buttermilk (cold)" in lines
    assert "  For the topping" in lines
    assert "  2. Fold in the buttermilk and eggs. Do not overmix." in lines
    assert "Blueberry Compote" in lines
    assert "Serves 4" in lines


def test_json(pancakes):
    warning = ParseWarning(line=1, column=1, message="Expected a '#' title header")
    data = json.loads(render_json(pancakes, [warning]))
    assert data["recipes"][0]["title"] == "Buttermilk Pancakes"
    assert data["recipes"][0]["servings"] == {"low": 4, "high": 6}
    assert data["warnings"][0]["line"] == 1


def test_render_dispatch(pancakes):
    assert render(pancakes, "markdown") == CANONICAL
    with pytest.raises(ValueError):
        render(pancakes, "yaml")
