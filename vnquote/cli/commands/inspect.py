"""Inspection commands for CLI.

Includes: inspect-products
"""

import argparse

from vnquote.cli.commands import register_command
from vnquote.cli.formatting import OutputFormatter, money


@register_command("inspect-products")
def inspect_products_command(args: argparse.Namespace) -> int:
    """Display product catalog."""
    from vnquote.quote.catalog import DEFAULT_CATALOG

    products = DEFAULT_CATALOG.list_products()
    formatter = OutputFormatter(args.format)

    if formatter.is_json:
        formatter.print_json(products)
        return 0

    rows = []
    for product in products:
        limits = "-"
        if product["stbh_min"] or product["stbh_max"]:
            low = money(product["stbh_min"]) if product["stbh_min"] else "-"
            high = money(product["stbh_max"]) if product["stbh_max"] else "-"
            limits = f"{low} / {high}"
        rows.append(
            (
                product["id"],
                product["name"],
                product["kind"],
                product["group"] or "-",
                product["calculation"],
                product["renewal_max_age"] or "-",
                limits,
            )
        )
    formatter.print_table(
        ["Id", "Name", "Kind", "Group", "Calculation", "Renewal age", "Sum insured"],
        rows,
        title="Product Catalog",
        numeric_from=5,
    )
    return 0
