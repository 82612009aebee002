"""
Renderers for parsed recipes.

- markdown: the canonical recipe text format; parsing the output again
  yields equal recipes.
- text: a plain, human-readable layout for the terminal.
- json: the ParseResult model dump.
"""

import textwrap
from typing import Iterable, List, Optional, Union

from ..parsing.parser import Ingredient, ParseResult, ParseWarning, Recipe
from ..parsing.units import display_unit
from .time_estimate import estimate_recipe_time

RENDER_FORMATS = ("json", "markdown", "text")
MAX_HEADER_LEVEL = 6
TEXT_WIDTH = 78

Recipes = Union[Recipe, Iterable[Recipe]]


def _as_list(recipes: Recipes) -> List[Recipe]:
    if isinstance(recipes, Recipe):
        return [recipes]
    return list(recipes)


def format_ingredient(ing: Ingredient, details_in_parens: bool = False) -> str:
    parts = []
    if ing.quantity is not None:
        parts.append(str(ing.quantity))
        if ing.unit:
            parts.append(display_unit(ing.unit, ing.quantity))
    parts.append(ing.name)
    line = " ".join(parts)
    if ing.details:
        line += f" ({ing.details})" if details_in_parens else f", {ing.details}"
    return line


# --- Markdown ---

def _section_heading(name: str, level: int) -> str:
    # Past the deepest header level, sections fall back to "Ingredients:" labels
    if level < MAX_HEADER_LEVEL:
        return f"{'#' * (level + 1)} {name}"
    return f"{name}:"


def _markdown_recipe(recipe: Recipe, level: int) -> List[str]:
    level = min(level, MAX_HEADER_LEVEL)
    lines = [f"{'#' * level} {recipe.title}"]
    if recipe.servings is not None:
        lines.append(f"Serves {recipe.servings}")
    lines.append("")

    if recipe.description:
        lines.extend([recipe.description, ""])

    if recipe.ingredients:
        lines.append(_section_heading("Ingredients", level))
        group = None
        for ing in recipe.ingredients:
            if ing.group and ing.group != group:
                lines.append(f"{ing.group}:")
            group = ing.group
            lines.append(f"- {format_ingredient(ing)}")
        lines.append("")

    if recipe.directions:
        lines.append(_section_heading("Directions", level))
        for direction in recipe.directions:
            lines.append(f"{direction.index}. {direction.text}")
        lines.append("")

    for sub in recipe.subrecipes:
        lines.extend(_markdown_recipe(sub, level + 1))

    return lines


def render_markdown(recipes: Recipes) -> str:
    blocks = ["\n".join(_markdown_recipe(r, 1)).rstrip() + "\n" for r in _as_list(recipes)]
    return "\n---\n\n".join(blocks)


# --- Plain text ---

def _underline(title: str, char: str) -> List[str]:
    return [title, char * len(title)]


def _text_recipe(recipe: Recipe, depth: int) -> List[str]:
    lines = _underline(recipe.title, "=" if depth == 0 else "-")

    facts = []
    if recipe.servings is not None:
        low, high = recipe.servings.low, recipe.servings.high
        facts.append(f"Serves {low}" if low == high else f"Serves {low} to {high}")
    if depth == 0:
        minutes, _ = estimate_recipe_time(recipe)
        facts.append(f"About {minutes} min")
    if facts:
        lines.append(" | ".join(facts))
    lines.append("")

    if recipe.description:
        for paragraph in recipe.description.split("\n\n"):
            lines.extend(textwrap.wrap(paragraph, TEXT_WIDTH))
            lines.append("")

    if recipe.ingredients:
        lines.append("Ingredients")
        group = None
        for ing in recipe.ingredients:
            if ing.group and ing.group != group:
                lines.append(f"  {ing.group}")
            group = ing.group
            lines.append(f"  * {format_ingredient(ing, details_in_parens=True)}")
        lines.append("")

    if recipe.directions:
        lines.append("Directions")
        for direction in recipe.directions:
            prefix = f"  {direction.index}. "
            lines.extend(textwrap.wrap(
                direction.text,
                TEXT_WIDTH,
                initial_indent=prefix,
                subsequent_indent=" " * len(prefix),
            ))
        lines.append("")

    for sub in recipe.subrecipes:
        lines.extend(_text_recipe(sub, depth + 1))

    return lines


def render_text(recipes: Recipes) -> str:
    blocks = ["\n".join(_text_recipe(r, 0)).rstrip() + "\n" for r in _as_list(recipes)]
    return "\n".join(blocks)


# --- JSON ---

def render_json(recipes: Recipes, warnings: Optional[List[ParseWarning]] = None) -> str:
    result = ParseResult(recipes=_as_list(recipes), warnings=warnings or [])
    return result.model_dump_json(indent=2)


def render(recipes: Recipes, fmt: str, warnings: Optional[List[ParseWarning]] = None) -> str:
    if fmt == "json":
        return render_json(recipes, warnings)
    if fmt == "markdown":
        return render_markdown(recipes)
    if fmt == "text":
        return render_text(recipes)
    raise ValueError(f"Unknown render format: {fmt}")
