#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Command-line interface for the mathedit expression editor.

Replays a sequence of key presses through an editing controller and prints
the resulting TeX.

Examples
--------
Build a fraction:
    $ mathedit 'fn:\\frac:braces,braces' 1 @right 2
    \\frac{1}{2}

Show where the cursor ended up:
    $ mathedit x + 2 @left --show-cursor --cursor-color red
    x+\\textcolor{#ff0000}{\\cursor}2

Replay a script, one event per line:
    $ mathedit --script keys.txt

Use environment variables for defaults:
    $ export MATHEDIT_CONFIG=~/.mathedit.yaml
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import get_args

from mathedit import __version__
from mathedit.cli.config import discover_config_file, load_config_file, options_from_config
from mathedit.cli.events import parse_event, read_script, replay
from mathedit.constants import (
    CONFIG_ENV_VAR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    LogLevelName,
)
from mathedit.controller import MathFieldEditingController
from mathedit.exceptions import ConfigError, CursorStateError, MathEditError, ValidationError
from mathedit.logging_utils import configure_logging
from mathedit.options.editor import EditorOptions
from mathedit.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)

__all__ = [
    "create_parser",
    "main",
]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the mathedit CLI."""
    parser = argparse.ArgumentParser(
        prog="mathedit",
        description="Build a math expression from key presses and print it as TeX.",
    )
    parser.add_argument(
        "events",
        nargs="*",
        help=(
            "Key presses: @left, @right, @back, @clear, @page, fn:NAME:SLOT,SLOT, or a token. "
            "Tokens starting with '-' must follow '--' or be given with --script"
        ),
    )
    parser.add_argument("--script", help="Read further key presses from a file, one per line ('-' for stdin)")
    parser.add_argument("--out", help="Write the TeX to this file instead of stdout")
    parser.add_argument("--show-cursor", action="store_true", help="Include the colored cursor glyph in the output")
    parser.add_argument("--cursor-color", help="Cursor color as #rrggbb, #rgb or a color name")
    parser.add_argument(
        "--no-placeholder", action="store_true", help="Print an empty string instead of the placeholder when empty"
    )
    parser.add_argument("--validate", action="store_true", help="Validate the expression after every key press")
    parser.add_argument("--config", help=f"Configuration file (default: discovered, or ${CONFIG_ENV_VAR})")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=list(get_args(LogLevelName)),
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and call sites")
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    --trace takes precedence, then --verbose, then --log-level.
    """
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _load_options(parsed_args: argparse.Namespace) -> EditorOptions:
    """Resolve editor options from the config file and command-line flags.

    Raises
    ------
    ConfigError
        If a configuration file cannot be loaded

    """
    options = EditorOptions()

    if not parsed_args.no_config:
        config_path = parsed_args.config or os.environ.get(CONFIG_ENV_VAR) or discover_config_file()
        if config_path:
            logger.info("Using configuration file: %s", config_path)
            options = options_from_config(load_config_file(config_path), base=options)

    overrides = {}
    if parsed_args.cursor_color:
        overrides["cursor_color"] = parsed_args.cursor_color
    if parsed_args.no_placeholder:
        overrides["placeholder_when_empty"] = False
    if parsed_args.validate:
        overrides["validate_edits"] = True
    return options.create_updated(**overrides) if overrides else options


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_intermixed_args(args)

    _setup_logging_level(parsed_args)

    try:
        options = _load_options(parsed_args)

        tokens = list(parsed_args.events)
        if parsed_args.script:
            tokens.extend(read_script(parsed_args.script))
        events = [parse_event(token) for token in tokens]

        controller = MathFieldEditingController(options)
        applied = replay(controller, events)
        logger.debug("Applied %d event(s)", applied)

        output = controller.render() if parsed_args.show_cursor else controller.current_editing_value()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except (ValidationError, CursorStateError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except MathEditError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if parsed_args.out:
        try:
            BaseRenderer.write_text_output(output, Path(parsed_args.out))
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
    else:
        print(output)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
