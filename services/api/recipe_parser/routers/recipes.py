"""
Router for parsing, tokenizing and rendering recipe text.
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from ..infra.rate_limit import limiter
from ..parsing import DescentParser, tokenize
from ..parsing.timers import recipe_timers
from ..schemas import (
    ParseRequest,
    ParseResponse,
    RecipeTextIn,
    RenderRequest,
    RenderResponse,
    TimeEstimate,
    TimersResponse,
    TokenizeResponse,
    TokenOut,
)
from ..services.rendering import render
from ..services.scaling import scale_recipe, scale_to_servings
from ..services.time_estimate import estimate_recipe_time
from ..services.unit_conversion import convert_recipe_units
from ..settings import settings

logger = logging.getLogger("recipe_parser.api")

router = APIRouter()


def _check_size(text: str) -> None:
    if len(text) > settings.max_input_chars:
        raise HTTPException(
            status_code=413,
            detail=f"Recipe text too large: {len(text)} chars (max {settings.max_input_chars})",
        )


def _strict(payload: RecipeTextIn) -> bool:
    return settings.strict_parsing if payload.strict is None else payload.strict


@router.post("/recipes/parse", response_model=ParseResponse)
@limiter.limit(settings.rate_limit)
def parse_recipes(request: Request, payload: ParseRequest):
    """
    Parse recipe text into structured recipes, optionally scaled and converted.
    """
    _check_size(payload.text)
    result = DescentParser(strict=_strict(payload)).parse(payload.text)

    recipes = result.recipes
    if payload.servings is not None:
        recipes = [scale_to_servings(r, payload.servings) for r in recipes]
    elif payload.scale is not None:
        recipes = [scale_recipe(r, payload.scale) for r in recipes]
    if payload.system:
        recipes = [convert_recipe_units(r, payload.system) for r in recipes]

    estimates = []
    for recipe in recipes:
        total, source = estimate_recipe_time(recipe)
        estimates.append(TimeEstimate(title=recipe.title, total_minutes=total, source=source))

    logger.info(f"Parsed {len(recipes)} recipe(s), {len(result.warnings)} warning(s)")
    return ParseResponse(recipes=recipes, warnings=result.warnings, estimates=estimates)


@router.post("/recipes/tokenize", response_model=TokenizeResponse)
@limiter.limit(settings.rate_limit)
def tokenize_recipe(request: Request, payload: RecipeTextIn):
    _check_size(payload.text)
    tokens = [TokenOut(**t.to_dict()) for t in tokenize(payload.text)]
    return TokenizeResponse(tokens=tokens)


@router.post("/recipes/render", response_model=RenderResponse)
@limiter.limit(settings.rate_limit)
def render_recipes(request: Request, payload: RenderRequest):
    """
    Re-render recipe text as canonical markdown, plain text or JSON.
    """
    _check_size(payload.text)
    result = DescentParser(strict=_strict(payload)).parse(payload.text)
    output = render(result.recipes, payload.format, result.warnings)
    return RenderResponse(format=payload.format, output=output)


@router.post("/recipes/timers", response_model=TimersResponse)
@limiter.limit(settings.rate_limit)
def suggest_timers(request: Request, payload: RecipeTextIn):
    _check_size(payload.text)
    result = DescentParser(strict=_strict(payload)).parse(payload.text)
    timers = [t for recipe in result.recipes for t in recipe_timers(recipe)]
    return TimersResponse(timers=timers)
