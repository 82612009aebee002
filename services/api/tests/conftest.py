import os

# Rate limiting would throttle the test client (all requests share one IP)
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest

from recipe_parser.parsing import parse


PANCAKES = """# Buttermilk Pancakes
Serves 4-6

Fluffy weekend pancakes.

## Ingredients
- 2 cups all-purpose flour, sifted
- 1 1/2 cups buttermilk (cold)
- 2 large eggs
- 1/2 tsp salt
For the topping:
- 1/4 cup maple syrup

## Directions
1. Whisk the dry ingredients.
2. Fold in the buttermilk and eggs.
   Do not overmix.
3. Cook on a hot griddle for 2-3 minutes per side.

## Blueberry Compote
Serves 4

### Ingredients
- 1 cup blueberries
- 2 tbsp sugar

### Directions
- Simmer for 10 minutes.
"""


@pytest.fixture
def pancakes_text():
    return PANCAKES


@pytest.fixture
def pancakes():
    return parse(PANCAKES, strict=True)
