"""CLI entrypoint for vnquote.

Commands:
- quote: Price a quotation state file
- validate: Check a quotation against product rules and limits
- illustrate: Print the year-by-year premium schedule
- project: Print projected account values (investment-linked products)
- inspect-products: Display product catalog

Every command that reads a quotation takes a JSON state file and honours
VNQUOTE_REFERENCE_DATE, VNQUOTE_LOG_LEVEL and VNQUOTE_CUSTOM_INTEREST_RATE.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

from vnquote.cli.arguments import add_format_arg, add_quote_args, add_verbose_arg
from vnquote.cli.commands import dispatch_command, get_command

# Load .env file from current directory
load_dotenv()


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.getenv("VNQUOTE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="vnquote",
        description="vnquote - insurance premium quotation engine",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    quote_parser = subparsers.add_parser(
        "quote",
        help="Price a quotation",
    )
    add_quote_args(quote_parser)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Check a quotation against product rules",
    )
    add_quote_args(validate_parser)

    illustrate_parser = subparsers.add_parser(
        "illustrate",
        help="Print the premium illustration",
    )
    add_quote_args(illustrate_parser)

    project_parser = subparsers.add_parser(
        "project",
        help="Project account values for an investment-linked product",
    )
    add_quote_args(project_parser)

    products_parser = subparsers.add_parser(
        "inspect-products",
        help="Display product catalog",
    )
    add_format_arg(products_parser)
    add_verbose_arg(products_parser)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    _configure_logging(getattr(args, "verbose", False))

    if get_command(args.command) is None:
        parser.print_help()
        return 1
    return dispatch_command(args.command, args)


if __name__ == "__main__":
    sys.exit(main())
