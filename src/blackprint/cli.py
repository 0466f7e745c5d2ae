#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for blackprint.

Examples
--------
Render a markup file to HTML::

    $ blackprint markup post.bp --out post.html

Use extra tags from a dictionary file::

    $ blackprint markup post.bp --tags tags.toml

Render a template with data from a YAML file, resolving ``<ref! import>``
fragments from a template directory::

    $ blackprint template templates/page.bp.html --data page.yaml --templates templates

"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from blackprint import __version__
from blackprint.api import markup_file_to_html, render_template_file
from blackprint.config import load_config_file, load_tag_dictionary
from blackprint.constants import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
)
from blackprint.exceptions import BlackPrintError, ConfigurationError, MarkupError, ParseError, TemplateError
from blackprint.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the ``markup`` and ``template`` subcommands."""
    parser = argparse.ArgumentParser(
        prog="blackprint",
        description="Render blackprint markup and HTML templates.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    subparsers = parser.add_subparsers(dest="command", required=True)

    markup = subparsers.add_parser("markup", help="Render a markup file to an HTML fragment")
    markup.add_argument("input", help="Markup file to render")
    markup.add_argument("--tags", help="Tag dictionary file (TOML, JSON or YAML) extending the default tags")
    markup.add_argument("--out", "-o", help="Output file (default: stdout)")

    template = subparsers.add_parser("template", help="Render an HTML template")
    template.add_argument("input", help="Template file to render")
    template.add_argument("--data", help="Render data file (TOML, JSON or YAML)")
    template.add_argument(
        "--templates",
        help="Directory of templates available to <ref! import>; defaults to the template's directory",
    )
    template.add_argument("--out", "-o", help="Output file (default: stdout)")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code."""
    if isinstance(exception, ConfigurationError):
        return EXIT_CONFIG_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParseError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, (TemplateError, MarkupError)):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _run_markup(parsed_args: argparse.Namespace) -> str:
    dictionary = load_tag_dictionary(parsed_args.tags) if parsed_args.tags else None
    return markup_file_to_html(parsed_args.input, dictionary)


def _run_template(parsed_args: argparse.Namespace) -> str:
    data = load_config_file(parsed_args.data) if parsed_args.data else {}
    return asyncio.run(render_template_file(parsed_args.input, data, template_dir=parsed_args.templates))


def _write_output(content: str, out: Optional[str]) -> None:
    if out is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    Path(out).write_text(content, encoding="utf-8")
    logger.info("Wrote %s", out)


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI and return an exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    console = Console(stderr=True)
    try:
        if parsed_args.command == "markup":
            content = _run_markup(parsed_args)
        else:
            content = _run_template(parsed_args)
        _write_output(content, parsed_args.out)
    except (BlackPrintError, OSError) as e:
        exit_code = get_exit_code_for_exception(e)
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        if parsed_args.trace:
            console.print_exception()
        return exit_code

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
