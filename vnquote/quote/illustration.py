"""Year-by-year premium illustration.

Building an illustration is the one fail-fast path in the quotation flow: an
invalid date of birth, unknown main product or unresolvable end age raises an
IllustrationError and nothing is returned.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from vnquote.core.config import QuoteConfig
from vnquote.core.errors import InvalidDateOfBirth, InvalidIllustrationEnd, UnknownMainProduct
from vnquote.core.types import PaymentFrequency, Person
from vnquote.quote.age import calculate_age
from vnquote.quote.catalog import DEFAULT_CATALOG, ProductCatalog
from vnquote.quote.engine import FeeBreakdown, calculate_all, priced_persons, resolve_waiver_target
from vnquote.quote.formatting import round_to_1000
from vnquote.quote.rates import DEFAULT_RATE_TABLES, RateTables
from vnquote.quote.registry import RiderInput, WaiverInput, calculate
from vnquote.quote.state import QuoteState
from vnquote.quote.target_age import TermResolution, resolve_term

logger = logging.getLogger(__name__)

# Loading applied to rider premiums paid in installments
RIDER_FREQUENCY_FACTORS = {
    PaymentFrequency.YEAR: 1.0,
    PaymentFrequency.HALF: 1.02,
    PaymentFrequency.QUARTER: 1.04,
}


@dataclass(frozen=True)
class IllustrationRow:
    """One policy year of the schedule."""

    year: int
    age: int
    main_premium: int
    extra_premium: int
    rider_premiums: dict[str, dict[str, int]]  # person id -> product id -> fee
    supp_total: int
    total: int
    annual_equivalent: int
    frequency_diff: int

    def person_supp(self, person_id: str) -> int:
        return sum(self.rider_premiums.get(person_id, {}).values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "age": self.age,
            "main_premium": self.main_premium,
            "extra_premium": self.extra_premium,
            "rider_premiums": {pid: dict(fees) for pid, fees in self.rider_premiums.items()},
            "supp_total": self.supp_total,
            "total": self.total,
            "annual_equivalent": self.annual_equivalent,
            "frequency_diff": self.frequency_diff,
        }


@dataclass(frozen=True)
class IllustrationTotals:
    """Column sums across every row."""

    main_premium: int = 0
    extra_premium: int = 0
    rider_premiums: dict[str, dict[str, int]] = field(default_factory=dict)
    supp_total: int = 0
    total: int = 0
    annual_equivalent: int = 0
    frequency_diff: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "main_premium": self.main_premium,
            "extra_premium": self.extra_premium,
            "rider_premiums": {pid: dict(fees) for pid, fees in self.rider_premiums.items()},
            "supp_total": self.supp_total,
            "total": self.total,
            "annual_equivalent": self.annual_equivalent,
            "frequency_diff": self.frequency_diff,
        }


@dataclass(frozen=True)
class Illustration:
    """Premium schedule for a quotation."""

    product_key: str
    start_age: int
    end_age: int
    payment_term: int
    payment_frequency: PaymentFrequency
    persons: dict[str, str]  # person id -> name, in column order
    rows: list[IllustrationRow]
    totals: IllustrationTotals

    @property
    def target_age(self) -> int:
        return self.end_age - 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "product_key": self.product_key,
            "start_age": self.start_age,
            "end_age": self.end_age,
            "target_age": self.target_age,
            "payment_term": self.payment_term,
            "payment_frequency": self.payment_frequency.value,
            "persons": dict(self.persons),
            "rows": [row.to_dict() for row in self.rows],
            "totals": self.totals.to_dict(),
        }


@dataclass(frozen=True)
class FrequencyBreakdown:
    """First-year premium split into installments."""

    frequency: PaymentFrequency
    periods: int
    per_period_main: int
    per_period_extra: int
    per_period_supp: int
    per_period_total: int
    annual_equivalent: int
    annual_total: int
    diff: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "frequency": self.frequency.value,
            "periods": self.periods,
            "per_period_main": self.per_period_main,
            "per_period_extra": self.per_period_extra,
            "per_period_supp": self.per_period_supp,
            "per_period_total": self.per_period_total,
            "annual_equivalent": self.annual_equivalent,
            "annual_total": self.annual_total,
            "diff": self.diff,
        }


def per_period_main(annual: int, frequency: PaymentFrequency) -> int:
    """Installment for main or extra premium."""
    if frequency.periods == 1:
        return annual
    return round_to_1000(annual / frequency.periods)


def per_period_rider(annual: int, frequency: PaymentFrequency) -> int:
    """Installment for a rider premium, including the installment loading."""
    if frequency.periods == 1:
        return annual
    return round_to_1000(annual * RIDER_FREQUENCY_FACTORS[frequency] / frequency.periods)


def frequency_breakdown(fees: FeeBreakdown, frequency: PaymentFrequency) -> FrequencyBreakdown:
    """Split the first-year premium of a breakdown into installments."""
    periods = frequency.periods
    per_main = per_period_main(fees.base_main, frequency)
    per_extra = per_period_main(fees.extra, frequency)
    per_supp = sum(
        per_period_rider(fee, frequency)
        for person_fees in fees.by_person.values()
        for fee in person_fees.supp_details.values()
    )
    per_total = per_main + per_extra + per_supp
    annual_equivalent = per_total * periods
    return FrequencyBreakdown(
        frequency=frequency,
        periods=periods,
        per_period_main=per_main,
        per_period_extra=per_extra,
        per_period_supp=per_supp,
        per_period_total=per_total,
        annual_equivalent=annual_equivalent,
        annual_total=fees.total,
        diff=annual_equivalent - fees.total,
    )


def allowed_frequencies(base_main: int, config: Optional[QuoteConfig] = None) -> list[PaymentFrequency]:
    """Payment frequencies available for a base main premium."""
    limits = (config or QuoteConfig()).limits
    allowed = [PaymentFrequency.YEAR]
    if base_main >= limits.half_yearly_min_premium:
        allowed.append(PaymentFrequency.HALF)
    if base_main >= limits.quarterly_min_premium:
        allowed.append(PaymentFrequency.QUARTER)
    return allowed


def _start_age(person: Optional[Person], config: QuoteConfig) -> int:
    if person is None:
        raise InvalidDateOfBirth(None)
    age = calculate_age(person.dob, config.reference_date)
    if age is None:
        raise InvalidDateOfBirth(person.dob, person.id)
    return age


def build_illustration(
    state: QuoteState,
    fees: Optional[FeeBreakdown] = None,
    catalog: ProductCatalog = DEFAULT_CATALOG,
    tables: RateTables = DEFAULT_RATE_TABLES,
    config: Optional[QuoteConfig] = None,
) -> Illustration:
    """Build the premium schedule for a quotation.

    Args:
        state: Quotation state.
        fees: Breakdown from calculate_all; computed when omitted.
        catalog: Product catalog.
        tables: Rate tables.
        config: Quote config (reference date, limits).

    Returns:
        Illustration with one row per policy year plus totals.

    Raises:
        InvalidDateOfBirth: Main insured is missing or has an invalid date of birth.
        UnknownMainProduct: Main product key is not in the catalog.
        InvalidIllustrationEnd: End age is missing or not after the start age.
    """
    config = config or QuoteConfig()
    main_person = state.main_person
    start_age = _start_age(main_person, config)

    main_config = catalog.get(state.main_product.key)
    if main_config is None or not main_config.is_main:
        raise UnknownMainProduct(state.main_product.key)

    resolution: TermResolution = resolve_term(
        main_config,
        state.main_product,
        dataclasses.replace(main_person, age=start_age),
        requested_target_age=state.target_age,
        limits=config.limits,
    )
    end_age = resolution.end_age
    if end_age is None or end_age <= start_age:
        raise InvalidIllustrationEnd(start_age, end_age)

    if fees is None:
        fees = calculate_all(state, catalog, tables, config.waiver_other_person_id)

    payment_term = resolution.payment_term or 0
    frequency = state.payment_frequency
    persons = priced_persons(state, catalog)
    waiver_target = resolve_waiver_target(state, config.waiver_other_person_id)

    columns = {p.id: p.name for p in persons}
    if waiver_target is not None and fees.waiver_details:
        columns.setdefault(waiver_target.id, waiver_target.name)

    rows: list[IllustrationRow] = []
    for year in range(1, end_age - start_age + 1):
        in_term = year <= payment_term
        main_premium = fees.base_main if in_term else 0
        extra_premium = fees.extra if in_term else 0

        rider_premiums: dict[str, dict[str, int]] = {pid: {} for pid in columns}
        for person in persons:
            attained = person.age + year - 1
            for product_id in person.supplements:
                product = catalog.get(product_id)
                if product is None or product.calculation.pass_ != 1:
                    continue
                fee = calculate(
                    product.calculation.key,
                    RiderInput(
                        customer=person,
                        config=product,
                        main_premium=fees.base_main,
                        all_persons=state.persons,
                        accumulators=dict(fees.accumulators),
                        age_override=attained,
                    ),
                    tables,
                    catalog,
                )
                if fee > 0:
                    rider_premiums[person.id][product_id] = fee

        if waiver_target is not None:
            attained = waiver_target.age + year - 1
            for waiver_id, detail in fees.waiver_details.items():
                product = catalog.get(waiver_id)
                if product is None:
                    continue
                fee = calculate(
                    product.calculation.key,
                    WaiverInput(
                        target=waiver_target,
                        stbh_base=detail.stbh_base,
                        config=product,
                        age_override=attained,
                    ),
                    tables,
                    catalog,
                )
                if fee > 0:
                    rider_premiums[waiver_target.id][waiver_id] = fee

        supp_total = sum(sum(p.values()) for p in rider_premiums.values())
        total = main_premium + extra_premium + supp_total
        if frequency.periods == 1:
            annual_equivalent = total
        else:
            annual_equivalent = (
                per_period_main(main_premium + extra_premium, frequency) * frequency.periods
                + sum(
                    per_period_rider(fee, frequency) * frequency.periods
                    for person_fees in rider_premiums.values()
                    for fee in person_fees.values()
                )
            )

        rows.append(
            IllustrationRow(
                year=year,
                age=start_age + year - 1,
                main_premium=main_premium,
                extra_premium=extra_premium,
                rider_premiums=rider_premiums,
                supp_total=supp_total,
                total=total,
                annual_equivalent=annual_equivalent,
                frequency_diff=annual_equivalent - total,
            )
        )

    logger.debug("Built %d illustration rows for %s", len(rows), main_config.id)
    return Illustration(
        product_key=main_config.id,
        start_age=start_age,
        end_age=end_age,
        payment_term=payment_term,
        payment_frequency=frequency,
        persons=columns,
        rows=rows,
        totals=_totals(rows),
    )


def _totals(rows: list[IllustrationRow]) -> IllustrationTotals:
    rider_totals: dict[str, dict[str, int]] = {}
    for row in rows:
        for person_id, fees in row.rider_premiums.items():
            person_totals = rider_totals.setdefault(person_id, {})
            for product_id, fee in fees.items():
                person_totals[product_id] = person_totals.get(product_id, 0) + fee
    return IllustrationTotals(
        main_premium=sum(r.main_premium for r in rows),
        extra_premium=sum(r.extra_premium for r in rows),
        rider_premiums=rider_totals,
        supp_total=sum(r.supp_total for r in rows),
        total=sum(r.total for r in rows),
        annual_equivalent=sum(r.annual_equivalent for r in rows),
        frequency_diff=sum(r.frequency_diff for r in rows),
    )
