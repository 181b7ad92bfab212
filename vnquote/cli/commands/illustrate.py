"""Illustration commands for CLI.

Includes: illustrate, project
"""

import argparse

from vnquote.cli.commands import register_command
from vnquote.cli.formatting import OutputFormatter, money
from vnquote.core.errors import IllustrationError, VnQuoteError


@register_command("illustrate")
def illustrate_command(args: argparse.Namespace) -> int:
    """Print the year-by-year premium schedule."""
    from vnquote.cli.loading import load_quote
    from vnquote.quote.catalog import DEFAULT_CATALOG
    from vnquote.quote.illustration import build_illustration

    formatter = OutputFormatter(args.format)
    try:
        state, config = load_quote(args)
        illustration = build_illustration(state, catalog=DEFAULT_CATALOG, config=config)
    except IllustrationError as e:
        formatter.print_error(e.message)
        return 1
    except (VnQuoteError, ValueError) as e:
        formatter.print_error(str(e))
        return 1

    if formatter.is_json:
        formatter.print_json(illustration.to_dict())
        return 0

    person_ids = list(illustration.persons)
    columns = ["Year", "Age", "Main", "Extra"]
    columns += [f"Riders: {illustration.persons[pid] or pid}" for pid in person_ids]
    columns += ["Total"]
    if illustration.payment_frequency.periods > 1:
        columns += ["Annual equivalent", "Difference"]

    rows = []
    for row in illustration.rows:
        cells = [row.year, row.age, money(row.main_premium), money(row.extra_premium)]
        cells += [money(row.person_supp(pid)) for pid in person_ids]
        cells += [money(row.total)]
        if illustration.payment_frequency.periods > 1:
            cells += [money(row.annual_equivalent), money(row.frequency_diff)]
        rows.append(cells)

    totals = illustration.totals
    total_cells = ["Total", "", money(totals.main_premium), money(totals.extra_premium)]
    total_cells += [money(sum(totals.rider_premiums.get(pid, {}).values())) for pid in person_ids]
    total_cells += [money(totals.total)]
    if illustration.payment_frequency.periods > 1:
        total_cells += [money(totals.annual_equivalent), money(totals.frequency_diff)]
    rows.append(total_cells)

    formatter.print_table(
        columns,
        rows,
        title=(
            f"{illustration.product_key}: age {illustration.start_age} to {illustration.target_age}, "
            f"term {illustration.payment_term}"
        ),
    )
    return 0


@register_command("project")
def project_command(args: argparse.Namespace) -> int:
    """Print projected account values for an investment-linked product."""
    from vnquote.cli.loading import load_quote
    from vnquote.quote.projection import project_quote

    formatter = OutputFormatter(args.format)
    try:
        state, config = load_quote(args)
    except (VnQuoteError, ValueError) as e:
        formatter.print_error(str(e))
        return 1

    result = project_quote(state, config=config)
    if result is None:
        formatter.print_error(
            f"No projection for {state.main_product.key!r}: the product is not investment-linked "
            "or the target age is missing."
        )
        return 1

    if formatter.is_json:
        formatter.print_json(result.to_dict())
        return 0

    rows = [
        (year, result.start_age + year - 1, money(g), money(c), money(f))
        for year, (g, c, f) in enumerate(
            zip(result.guaranteed, result.custom_capped, result.custom_full), start=1
        )
    ]
    formatter.print_table(
        ["Year", "Age", "Guaranteed", "Custom (capped)", "Custom"],
        rows,
        title="Projected account value",
    )
    return 0
