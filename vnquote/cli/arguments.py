"""Shared argument builders for CLI commands."""

import argparse


def add_format_arg(parser: argparse.ArgumentParser) -> None:
    """Add --format argument for output format selection."""
    parser.add_argument(
        "--format",
        "-f",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )


def add_verbose_arg(parser: argparse.ArgumentParser) -> None:
    """Add --verbose argument for debug logging."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )


def add_state_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional quotation state file argument."""
    parser.add_argument(
        "state",
        type=str,
        help="Path to a JSON quotation state ('-' reads stdin)",
    )


def add_reference_date_arg(parser: argparse.ArgumentParser) -> None:
    """Add --reference-date argument overriding VNQUOTE_REFERENCE_DATE."""
    parser.add_argument(
        "--reference-date",
        "-d",
        type=str,
        default=None,
        help="Date ages are measured against, DD/MM/YYYY (default: today)",
    )


def add_quote_args(parser: argparse.ArgumentParser) -> None:
    """Add the arguments shared by every command that reads a quotation."""
    add_state_arg(parser)
    add_reference_date_arg(parser)
    add_format_arg(parser)
    add_verbose_arg(parser)
