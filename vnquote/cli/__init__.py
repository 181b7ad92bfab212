"""Command-line interface for vnquote."""
