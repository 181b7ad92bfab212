"""Pricing commands for CLI.

Includes: quote, validate
"""

import argparse
import logging

from vnquote.cli.commands import register_command
from vnquote.cli.formatting import OutputFormatter, money
from vnquote.core.errors import VnQuoteError

logger = logging.getLogger(__name__)


@register_command("quote")
def quote_command(args: argparse.Namespace) -> int:
    """Price a quotation and show the fee breakdown."""
    from vnquote.cli.loading import load_quote
    from vnquote.quote.catalog import DEFAULT_CATALOG
    from vnquote.quote.engine import calculate_all
    from vnquote.quote.illustration import allowed_frequencies, frequency_breakdown

    formatter = OutputFormatter(args.format)
    try:
        state, config = load_quote(args)
    except (VnQuoteError, ValueError) as e:
        formatter.print_error(str(e))
        return 1

    fees = calculate_all(state, DEFAULT_CATALOG, waiver_other_person_id=config.waiver_other_person_id)
    breakdown = frequency_breakdown(fees, state.payment_frequency)

    if formatter.is_json:
        formatter.print_json(
            {
                "fees": fees.to_dict(),
                "frequency": breakdown.to_dict(),
                "allowed_frequencies": [f.value for f in allowed_frequencies(fees.base_main, config)],
            }
        )
        return 0

    main_config = DEFAULT_CATALOG.get(state.main_product.key)
    formatter.print_header("Premium Quote")
    formatter.print_line("Main product", main_config.name if main_config else "-")
    formatter.print_line("Base premium", money(fees.base_main))
    formatter.print_line("Extra premium", money(fees.extra))

    names = {p.id: p.name for p in state.persons}
    if state.waiver.other_person is not None:
        names.setdefault(state.waiver.other_person.id, state.waiver.other_person.name)
    rows = []
    for person_id, person_fees in fees.by_person.items():
        for product_id, fee in person_fees.supp_details.items():
            product = DEFAULT_CATALOG.get(product_id)
            rows.append((names.get(person_id, person_id), product.name if product else product_id, money(fee)))
    if rows:
        formatter.print_table(["Person", "Rider", "Premium"], rows, title="Riders", numeric_from=2)

    formatter.print_section("Totals")
    formatter.print_line("Main", money(fees.total_main))
    formatter.print_line("Riders", money(fees.total_supp))
    formatter.print_line("Total", money(fees.total))
    if breakdown.periods > 1:
        formatter.print_line(f"Per installment ({breakdown.periods}/year)", money(breakdown.per_period_total))
        formatter.print_line("Annual equivalent", money(breakdown.annual_equivalent))
        formatter.print_line("Difference", money(breakdown.diff))
    return 0


@register_command("validate")
def validate_command(args: argparse.Namespace) -> int:
    """Check a quotation; exit code 1 when there are issues."""
    from vnquote.cli.loading import load_quote
    from vnquote.quote.validation import validate_quote

    formatter = OutputFormatter(args.format)
    try:
        state, config = load_quote(args)
    except (VnQuoteError, ValueError) as e:
        formatter.print_error(str(e))
        return 1

    issues = validate_quote(state, config=config)

    if formatter.is_json:
        formatter.print_json({"valid": not issues, "issues": [i.to_dict() for i in issues]})
    elif not issues:
        formatter.console.print("[green]Quotation is valid.")
    else:
        formatter.print_table(
            ["Field", "Person", "Message"],
            [(i.field, i.person_id or "-", i.message) for i in issues],
            title=f"{len(issues)} issue(s)",
            numeric_from=3,
        )
    return 0 if not issues else 1
