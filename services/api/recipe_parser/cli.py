"""
Command-line interface for the recipe parser.

    recipe-parser parse pancakes.md --format markdown --servings 8
    recipe-parser parse recipes/ --format json --system metric
    recipe-parser tokens pancakes.md
    recipe-parser timers pancakes.md
    recipe-parser serve --port 8000
"""

import logging
import sys
from argparse import ArgumentParser
from typing import List, Optional

import uvicorn

from .parsing.errors import RecipeError
from .parsing.lexer import tokenize
from .parsing.timers import recipe_timers
from .services.ingestion import STDIN, ScannerError, load_recipes, read_source
from .services.rendering import RENDER_FORMATS, render
from .services.scaling import scale_recipe, scale_to_servings
from .services.unit_conversion import UNIT_SYSTEMS, convert_recipe_units
from .settings import settings

logger = logging.getLogger("recipe_parser.cli")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="recipe-parser",
        description="""
            Parse recipe text files into structured recipes.
        """,
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level for messages on stderr. Default: %(default)s.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="Parse recipe files and print them.")
    parse_cmd.add_argument(
        "paths",
        nargs="+",
        help="Recipe files or directories to parse. Use '-' to read stdin.",
    )
    parse_cmd.add_argument(
        "--format",
        "-f",
        choices=RENDER_FORMATS,
        default="text",
        help="Output format. Default: %(default)s.",
    )
    parse_cmd.add_argument(
        "--strict",
        action="store_true",
        default=settings.strict_parsing,
        help="Fail on the first problem instead of recovering with a warning.",
    )
    sizing = parse_cmd.add_mutually_exclusive_group()
    sizing.add_argument(
        "--scale",
        type=float,
        help="Multiply every quantity by this factor.",
    )
    sizing.add_argument(
        "--servings",
        "-s",
        type=int,
        help="Scale each recipe to serve this many people.",
    )
    parse_cmd.add_argument(
        "--system",
        choices=UNIT_SYSTEMS,
        help="Convert mass and volume units to this unit system.",
    )

    tokens_cmd = commands.add_parser("tokens", help="Print the token stream of a recipe file.")
    tokens_cmd.add_argument("path", help="Recipe file, or '-' for stdin.")

    timers_cmd = commands.add_parser("timers", help="Suggest timers from recipe directions.")
    timers_cmd.add_argument("paths", nargs="+", help="Recipe files or directories.")
    timers_cmd.add_argument("--strict", action="store_true", default=settings.strict_parsing)

    serve_cmd = commands.add_parser("serve", help="Run the HTTP API.")
    serve_cmd.add_argument("--host", default=settings.api_host, help="Default: %(default)s.")
    serve_cmd.add_argument("--port", type=int, default=settings.api_port, help="Default: %(default)s.")

    return parser


def _format_duration(seconds: int) -> str:
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


def cmd_parse(args) -> int:
    loaded = load_recipes(args.paths, strict=args.strict)

    recipes = [r for item in loaded for r in item.result.recipes]
    warnings = [w for item in loaded for w in item.result.warnings]

    if args.servings is not None:
        recipes = [scale_to_servings(r, args.servings) for r in recipes]
    elif args.scale is not None:
        recipes = [scale_recipe(r, args.scale) for r in recipes]
    if args.system:
        recipes = [convert_recipe_units(r, args.system) for r in recipes]

    logger.debug(f"Rendering {len(recipes)} recipe(s) as {args.format}")
    sys.stdout.write(render(recipes, args.format, warnings))
    return 0


def cmd_tokens(args) -> int:
    for tok in tokenize(read_source(args.path)):
        sys.stdout.write(f"{tok.line}:{tok.column}\t{tok.kind.value}\t{tok.text!r}\n")
    return 0


def cmd_timers(args) -> int:
    for item in load_recipes(args.paths, strict=args.strict):
        for recipe in item.result.recipes:
            for timer in recipe_timers(recipe):
                sys.stdout.write(
                    f"{timer.recipe} / step {timer.step_index}: "
                    f"{timer.label} {_format_duration(timer.duration_s)} ({timer.source_text})\n"
                )
    return 0


def cmd_serve(args) -> int:
    logger.info(f"Serving recipe parser API on http://{args.host}:{args.port}")
    uvicorn.run("recipe_parser.main:app", host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


COMMANDS = {
    "parse": cmd_parse,
    "tokens": cmd_tokens,
    "timers": cmd_timers,
    "serve": cmd_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    try:
        return COMMANDS[args.command](args)
    except RecipeError as e:
        if e.line is None:
            sys.stderr.write(f"error: {e.message}\n")
        else:
            source = e.source or getattr(args, "path", None) or STDIN
            sys.stderr.write(f"{source}:{e.line}:{e.column}: error: {e.message}\n")
        return 1
    except (ScannerError, OSError) as e:
        sys.stderr.write(f"error: {e}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
