"""Pydantic schemas for the recipe parser API.

Request/response models for:
- Parsing, tokenizing and rendering recipe text
- Timer suggestions
- Unit conversion
"""

from typing import Optional, Literal

from pydantic import BaseModel, Field

from .parsing.parser import MAX_SERVINGS, ParseWarning, Recipe


# --- Recipe text ---

class RecipeTextIn(BaseModel):
    text: str = Field(..., min_length=1)
    strict: Optional[bool] = None


class ParseRequest(RecipeTextIn):
    scale: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    servings: Optional[int] = Field(None, ge=1, le=MAX_SERVINGS)
    system: Optional[Literal["metric", "us_customary"]] = None


class TimeEstimate(BaseModel):
    title: str
    total_minutes: int
    source: str  # parsed | heuristic


class ParseResponse(BaseModel):
    recipes: list[Recipe]
    warnings: list[ParseWarning] = []
    estimates: list[TimeEstimate] = []


class TokenOut(BaseModel):
    kind: str
    text: str
    line: int
    column: int


class TokenizeResponse(BaseModel):
    tokens: list[TokenOut]


class RenderRequest(RecipeTextIn):
    format: Literal["markdown", "text", "json"] = "markdown"


class RenderResponse(BaseModel):
    format: str
    output: str


# --- Timers ---

class TimerSuggestion(BaseModel):
    client_id: str
    label: str
    recipe: str = ""
    step_index: int
    duration_s: int
    source_text: str


class TimersResponse(BaseModel):
    timers: list[TimerSuggestion]


# --- Units ---

class UnitConvertRequest(BaseModel):
    qty: float = Field(..., allow_inf_nan=False)
    from_unit: str
    to_unit: Optional[str] = None
    ingredient_name: Optional[str] = None
    target_system: Optional[Literal["metric", "us_customary"]] = None
    force_cross_type: Optional[bool] = None
    density_g_per_ml: Optional[float] = Field(None, gt=0, allow_inf_nan=False)


class UnitConvertResponse(BaseModel):
    qty: float
    unit: str
    confidence: Literal["high", "medium", "low", "none"]
    note: Optional[str] = None
    is_approx: bool
