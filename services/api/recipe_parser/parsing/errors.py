from typing import Optional


class RecipeError(Exception):
    """Base exception for recipe-related errors."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.source: Optional[str] = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.line}:{self.column}: {self.message}"

    def to_dict(self):
        return {
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }


class LexError(RecipeError):
    """Input contains characters that cannot be tokenized."""
    pass


class ParseError(RecipeError):
    """Token stream does not form a valid recipe document."""
    pass


class ScaleError(RecipeError):
    """Recipe cannot be scaled as requested."""
    pass


class UnitError(RecipeError):
    """Unit is unknown or conversion is impossible."""
    pass
