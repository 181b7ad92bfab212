"""Quotation validation.

Validation reports problems with an entered quotation as field-scoped issues;
it never raises and never changes fees. Pricing still runs on invalid input so
a form can show a premium next to the messages.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from vnquote.core.config import QuoteConfig
from vnquote.core.types import Person, ProductGroup, ProductKind
from vnquote.quote.catalog import (
    DEFAULT_CATALOG,
    HEALTH_PROGRAMS,
    ProductCatalog,
    ProductConfig,
    TermMode,
)
from vnquote.quote.engine import FeeBreakdown, calculate_all, priced_persons, resolve_waiver_target
from vnquote.quote.formatting import format_vnd
from vnquote.quote.illustration import allowed_frequencies
from vnquote.quote.rates import DEFAULT_RATE_TABLES, RateTables
from vnquote.quote.registry import WAIVER_MAX_AGE, WAIVER_MIN_AGE, mul_premium_range
from vnquote.quote.state import QuoteState
from vnquote.quote.target_age import resolve_term

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    """A problem with one input field."""

    field: str
    message: str
    person_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message, "person_id": self.person_id}


def validate_quote(
    state: QuoteState,
    fees: Optional[FeeBreakdown] = None,
    catalog: ProductCatalog = DEFAULT_CATALOG,
    tables: RateTables = DEFAULT_RATE_TABLES,
    config: Optional[QuoteConfig] = None,
) -> list[ValidationIssue]:
    """Check a quotation against product rules and business limits.

    Args:
        state: Quotation state.
        fees: Breakdown from calculate_all; computed when omitted.
        catalog: Product catalog.
        tables: Rate tables (used for the MUL premium range).
        config: Quote config with the business limits.

    Returns:
        Issues in field order; empty when the quotation is valid.
    """
    config = config or QuoteConfig()
    if fees is None:
        fees = calculate_all(state, catalog, tables, config.waiver_other_person_id)

    issues: list[ValidationIssue] = []
    main_person = state.main_person
    if main_person is None:
        issues.append(ValidationIssue("persons", "No main insured person."))
        return issues

    main_config = catalog.get(state.main_product.key)
    if main_config is None or not main_config.is_main:
        issues.append(ValidationIssue("main_product.key", "Select a main product."))
        return issues

    issues.extend(_check_main_product(state, main_person, main_config, fees, catalog, tables, config))
    issues.extend(_check_term(state, main_person, main_config, config))
    for person in priced_persons(state, catalog):
        issues.extend(_check_riders(state, person, main_config, fees, catalog, config))
    issues.extend(_check_hospital_support_total(state, fees, catalog, config))
    issues.extend(_check_waiver(state, config))

    if state.payment_frequency not in allowed_frequencies(fees.base_main, config):
        issues.append(
            ValidationIssue(
                "payment_frequency",
                f"Payment frequency '{state.payment_frequency.value}' is not available "
                f"for a base premium of {format_vnd(fees.base_main)}.",
            )
        )

    if issues:
        logger.debug("Quotation has %d validation issue(s)", len(issues))
    return issues


def _check_main_product(
    state: QuoteState,
    person: Person,
    main_config: ProductConfig,
    fees: FeeBreakdown,
    catalog: ProductCatalog,
    tables: RateTables,
    config: QuoteConfig,
) -> list[ValidationIssue]:
    limits = config.limits
    selection = state.main_product
    issues: list[ValidationIssue] = []

    if not catalog.is_eligible(main_config.id, person, main_config.id):
        issues.append(
            ValidationIssue("main_product.key", f"{main_config.name} is not available for this insured.", person.id)
        )

    # Packages fix their own sum insured and premium
    if main_config.package is not None:
        return issues

    min_stbh = main_config.stbh_min or limits.main_product_min_stbh
    if selection.stbh < min_stbh:
        issues.append(ValidationIssue("main_product.stbh", f"Minimum sum insured is {format_vnd(min_stbh)}."))

    min_premium = main_config.premium_min or limits.main_product_min_premium
    if fees.base_main < min_premium:
        issues.append(ValidationIssue("main_product.premium", f"Minimum premium is {format_vnd(min_premium)}."))

    if main_config.group == ProductGroup.MUL and selection.stbh > 0:
        allowed = mul_premium_range(selection.stbh, person.age, tables)
        if allowed is not None and not allowed.min_premium <= selection.premium <= allowed.max_premium:
            issues.append(
                ValidationIssue(
                    "main_product.premium",
                    f"Premium must be between {format_vnd(allowed.min_premium)} "
                    f"and {format_vnd(allowed.max_premium)}.",
                )
            )

    if selection.extra_premium > fees.base_main * limits.extra_premium_max_factor:
        issues.append(
            ValidationIssue(
                "main_product.extra_premium",
                f"Extra premium may not exceed {limits.extra_premium_max_factor} times the base premium.",
            )
        )
    return issues


def _check_term(
    state: QuoteState,
    person: Person,
    main_config: ProductConfig,
    config: QuoteConfig,
) -> list[ValidationIssue]:
    resolution = resolve_term(main_config, state.main_product, person, state.target_age, config.limits)
    term = resolution.payment_term
    issues: list[ValidationIssue] = []

    if resolution.mode == TermMode.FIXED_TERM:
        return issues

    if resolution.mode == TermMode.SELECTED_TERM:
        options = main_config.term.options_for_age(person.age) if main_config.term else []
        if term not in options:
            choices = ", ".join(str(o) for o in options) or "none"
            issues.append(
                ValidationIssue("main_product.payment_term", f"Payment term must be one of: {choices}.")
            )
        return issues

    if not term:
        issues.append(ValidationIssue("main_product.payment_term", "Enter the payment term."))
        return issues
    if term < resolution.min_term or term > resolution.max_term:
        issues.append(
            ValidationIssue(
                "main_product.payment_term",
                f"Payment term must be between {resolution.min_term} and {resolution.max_term} years.",
            )
        )

    target = resolution.target_age
    if target is None:
        issues.append(ValidationIssue("target_age", "Enter the illustration target age."))
    elif target < resolution.min_target_age or target > resolution.max_target_age:
        issues.append(ValidationIssue("target_age", resolution.hint))
    return issues


def _allowed_programs(main_config: ProductConfig, rider: ProductConfig, base_main: int) -> tuple[str, ...]:
    if main_config.package is not None:
        return HEALTH_PROGRAMS
    allowed: tuple[str, ...] = ()
    for threshold, programs in rider.program_premium_thresholds:
        if base_main >= threshold:
            allowed = programs
    return allowed


def _check_riders(
    state: QuoteState,
    person: Person,
    main_config: ProductConfig,
    fees: FeeBreakdown,
    catalog: ProductCatalog,
    config: QuoteConfig,
) -> list[ValidationIssue]:
    limits = config.limits
    issues: list[ValidationIssue] = []

    for rider in catalog.products(ProductKind.RIDER):
        status = catalog.rider_status(rider.id, person, main_config.id)
        selection = person.rider(rider.id)
        field_name = f"supplements.{rider.id}"

        if selection is None:
            if status.mandatory:
                issues.append(ValidationIssue(field_name, f"{rider.name} is mandatory.", person.id))
            continue

        if not status.selectable:
            issues.append(ValidationIssue(field_name, f"{rider.name} is not available for this person.", person.id))
            continue

        if rider.stbh_min is not None and selection.stbh < rider.stbh_min:
            issues.append(
                ValidationIssue(f"{field_name}.stbh", f"Minimum sum insured is {format_vnd(rider.stbh_min)}.", person.id)
            )
        if rider.stbh_max is not None and selection.stbh > rider.stbh_max:
            issues.append(
                ValidationIssue(f"{field_name}.stbh", f"Maximum sum insured is {format_vnd(rider.stbh_max)}.", person.id)
            )

        if rider.program_premium_thresholds:
            allowed = _allowed_programs(main_config, rider, fees.base_main)
            if not selection.program:
                issues.append(ValidationIssue(f"{field_name}.program", "Select a program.", person.id))
            elif selection.program not in allowed:
                issues.append(
                    ValidationIssue(
                        f"{field_name}.program",
                        f"Program '{selection.program}' requires a higher main premium.",
                        person.id,
                    )
                )
            if not selection.scope:
                issues.append(ValidationIssue(f"{field_name}.scope", "Select a coverage scope.", person.id))

        if rider.calculation.accumulator_keys:
            stbh = selection.stbh
            cap = limits.hospital_support_max_under_18 if person.age < 18 else limits.hospital_support_max_from_18
            if stbh % limits.hospital_support_stbh_multiple != 0:
                issues.append(
                    ValidationIssue(
                        f"{field_name}.stbh",
                        f"Amount must be a multiple of {format_vnd(limits.hospital_support_stbh_multiple)}.",
                        person.id,
                    )
                )
            if stbh > cap:
                issues.append(
                    ValidationIssue(f"{field_name}.stbh", f"Maximum amount is {format_vnd(cap)}.", person.id)
                )
    return issues


def hospital_support_ceiling(base_main: int, config: Optional[QuoteConfig] = None) -> int:
    """Shared hospital support amount allowed across all persons for a base premium."""
    limits = (config or QuoteConfig()).limits
    return (base_main // limits.hospital_support_premium_step) * limits.hospital_support_stbh_multiple


def _check_hospital_support_total(
    state: QuoteState,
    fees: FeeBreakdown,
    catalog: ProductCatalog,
    config: QuoteConfig,
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    ceiling = hospital_support_ceiling(fees.base_main, config)
    for key, total in fees.accumulators.items():
        if total > ceiling:
            issues.append(
                ValidationIssue(
                    f"accumulators.{key}",
                    f"Total hospital support {format_vnd(total)} exceeds the limit of {format_vnd(ceiling)}.",
                )
            )
    return issues


def _check_waiver(state: QuoteState, config: QuoteConfig) -> list[ValidationIssue]:
    if not state.waiver.target_person_id:
        return []
    target = resolve_waiver_target(state, config.waiver_other_person_id)
    if target is None:
        return [ValidationIssue("waiver.target_person_id", "Waiver target was not found.")]

    issues: list[ValidationIssue] = []
    if target.age < WAIVER_MIN_AGE or target.age > WAIVER_MAX_AGE:
        issues.append(
            ValidationIssue(
                "waiver.target_person_id",
                f"Waiver holder must be between {WAIVER_MIN_AGE} and {WAIVER_MAX_AGE} years old.",
                target.id,
            )
        )
    if target.risk_group not in (1, 2, 3, 4):
        issues.append(ValidationIssue("waiver.risk_group", "Waiver holder needs a risk group.", target.id))
    return issues
