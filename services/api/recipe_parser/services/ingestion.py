"""
Discovery and loading of recipe files.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, List, NamedTuple, Union

from ..parsing.descent_parser import DescentParser
from ..parsing.errors import RecipeError
from ..parsing.parser import ParseResult

logger = logging.getLogger(__name__)

RECIPE_EXTENSIONS = (".md", ".markdown", ".txt", ".recipe")
STDIN = "-"


class ScannerError(Exception):
    """Raised when scanning fails."""
    pass


class LoadedRecipes(NamedTuple):
    source: str
    result: ParseResult


def scan_recipe_files(path: Union[str, Path]) -> List[Path]:
    """
    Return recipe files under `path`, sorted.

    A file path is returned as-is; a directory is searched recursively for
    files with a recipe extension.

    Raises:
        ScannerError: If the path does not exist.
    """
    base_path = Path(path)

    if not base_path.exists():
        raise ScannerError(f"Recipe path does not exist: {path}")

    if base_path.is_file():
        return [base_path]

    files = [
        p for p in base_path.rglob("*")
        if p.is_file() and p.suffix.lower() in RECIPE_EXTENSIONS
    ]
    return sorted(files)


def read_source(source: Union[str, Path]) -> str:
    """
    Raises:
        ScannerError: If the text is not valid UTF-8.
    """
    try:
        if str(source) == STDIN:
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ScannerError(f"{source}: not valid UTF-8 ({e.reason} at byte {e.start})") from e


def load_recipes(paths: Iterable[Union[str, Path]], strict: bool = False) -> List[LoadedRecipes]:
    """
    Parse every recipe file reachable from `paths` ("-" reads stdin).

    Raises:
        ScannerError: If a path does not exist or a file is not valid UTF-8.
        RecipeError: If a file fails to tokenize or parse. The error's
            `source` attribute names the file.
    """
    parser = DescentParser(strict=strict)
    loaded = []

    for path in paths:
        sources = [STDIN] if str(path) == STDIN else scan_recipe_files(path)
        for source in sources:
            text = read_source(source)
            try:
                result = parser.parse(text)
            except RecipeError as e:
                e.source = str(source)
                raise
            logger.info(f"Parsed {len(result.recipes)} recipe(s) from {source}")
            for warning in result.warnings:
                logger.warning(f"{source}:{warning}")
            loaded.append(LoadedRecipes(str(source), result))

    return loaded
