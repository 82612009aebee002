from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from pydantic import BaseModel, model_validator

from .quantities import format_range


class Quantity(BaseModel):
    value: float
    upper: Optional[float] = None

    @property
    def is_range(self) -> bool:
        return self.upper is not None

    @property
    def max_value(self) -> float:
        return self.upper if self.upper is not None else self.value

    def scaled(self, factor: float) -> "Quantity":
        return Quantity(
            value=self.value * factor,
            upper=self.upper * factor if self.upper is not None else None,
        )

    def __str__(self) -> str:
        return format_range(self.value, self.upper)


# Largest servings count accepted from recipe text or a scaling request
MAX_SERVINGS = 10_000


class ServingRange(BaseModel):
    low: int
    high: int

    @model_validator(mode="after")
    def _check_order(self):
        if self.low > self.high:
            raise ValueError(f"servings low ({self.low}) exceeds high ({self.high})")
        return self

    def __str__(self) -> str:
        if self.low == self.high:
            return str(self.low)
        return f"{self.low}-{self.high}"


class Ingredient(BaseModel):
    name: str
    quantity: Optional[Quantity] = None
    unit: Optional[str] = None
    details: Optional[str] = None
    group: Optional[str] = None


class Direction(BaseModel):
    index: int
    text: str


class Recipe(BaseModel):
    title: str
    servings: Optional[ServingRange] = None
    description: Optional[str] = None
    ingredients: List[Ingredient] = []
    directions: List[Direction] = []
    subrecipes: List["Recipe"] = []

    def walk(self) -> Iterator["Recipe"]:
        """Yield this recipe and every nested sub-recipe, depth-first."""
        yield self
        for sub in self.subrecipes:
            yield from sub.walk()


class ParseWarning(BaseModel):
    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.message}"


class ParseResult(BaseModel):
    recipes: List[Recipe] = []
    warnings: List[ParseWarning] = []


class RecipeParser(ABC):
    @abstractmethod
    def parse(self, text: str) -> ParseResult:
        """Parse raw text into structured Recipe objects."""
        pass
