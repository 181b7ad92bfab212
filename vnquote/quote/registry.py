"""Calculation registry: one pricing formula per CalcKey.

Each premium formula takes a typed input and returns a non-negative VND amount
rounded down to 1,000. A missing sum insured, program, rate or config yields 0;
formulas never raise.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Union

from vnquote.core.types import MainProductSelection, PaymentFrequency, Person
from vnquote.quote.catalog import (
    DEFAULT_CATALOG,
    CalcKey,
    ProductCatalog,
    ProductConfig,
)
from vnquote.quote.formatting import round_down_to_1000, round_vnd
from vnquote.quote.rates import (
    DEFAULT_RATE_TABLES,
    RateTables,
    find_band,
    find_rate_by_age,
    find_rate_by_range,
    find_rate_by_term,
)

logger = logging.getLogger(__name__)

WAIVER_MIN_AGE = 18
WAIVER_MAX_AGE = 60

RISK_GROUP_FACTORS = {1: 1.0, 2: 1.5, 3: 1.5, 4: 2.0}


# =============================================================================
# INPUTS
# =============================================================================


@dataclass(frozen=True)
class MainPremiumInput:
    """Inputs for main product formulas."""

    selection: MainProductSelection
    customer: Person
    config: ProductConfig


@dataclass(frozen=True)
class RiderInput:
    """Inputs for pass-1 rider formulas.

    ``age_override`` prices the rider at an attained age instead of the issue age.
    """

    customer: Person
    config: ProductConfig
    main_premium: int = 0
    all_persons: tuple[Person, ...] = ()
    accumulators: dict[str, int] = field(default_factory=dict)
    age_override: Optional[int] = None

    @property
    def age(self) -> int:
        return self.customer.age if self.age_override is None else self.age_override


@dataclass(frozen=True)
class WaiverInput:
    """Inputs for waiver-of-premium formulas."""

    target: Person
    stbh_base: int
    config: ProductConfig
    age_override: Optional[int] = None

    @property
    def age(self) -> int:
        return self.target.age if self.age_override is None else self.age_override


@dataclass(frozen=True)
class ProjectionInput:
    """Inputs for the account-value projection.

    ``custom_interest_rate`` accepts a fraction (0.047) or a percentage (4.7).
    """

    main_person: Person
    selection: MainProductSelection
    config: ProductConfig
    base_premium: int
    target_age: int
    extra_premium: int = 0
    custom_interest_rate: float = 0.0
    payment_frequency: PaymentFrequency = PaymentFrequency.YEAR
    reference_date: date = field(default_factory=date.today)


FormulaInput = Union[MainPremiumInput, RiderInput, WaiverInput, ProjectionInput]


@dataclass(frozen=True)
class HealthFeeComponents:
    """Health rider fee split into its parts."""

    base: int = 0
    outpatient: int = 0
    dental: int = 0
    total: int = 0


@dataclass(frozen=True)
class PremiumRange:
    """Allowed MUL premium for a sum insured."""

    min_premium: int
    max_premium: int


# =============================================================================
# MAIN PRODUCTS
# =============================================================================


def _rate_table_main(inp: MainPremiumInput, tables: RateTables, catalog: ProductCatalog) -> int:
    stbh = inp.selection.stbh
    if not stbh:
        return 0
    table_key = inp.config.calculation.params.get("rate_table", inp.config.id)
    table = tables.pul.get(table_key, {})
    rate = find_rate_by_age(table, inp.customer.age, inp.customer.gender.rate_key)
    return round_down_to_1000(round_vnd(stbh / 1000 * rate))


def _direct_premium_main(inp: MainPremiumInput, tables: RateTables, catalog: ProductCatalog) -> int:
    return round_down_to_1000(inp.selection.premium)


def _term_banded_main(inp: MainPremiumInput, tables: RateTables, catalog: ProductCatalog) -> int:
    stbh = inp.selection.stbh
    if not stbh or not inp.selection.payment_term:
        return 0
    rate = find_rate_by_term(
        tables.an_binh_uu_viet,
        inp.selection.payment_term,
        inp.customer.age,
        inp.customer.gender.rate_key,
    )
    return round_down_to_1000(round_vnd(stbh / 1000 * rate))


def _package_proxy(inp: MainPremiumInput, tables: RateTables, catalog: ProductCatalog) -> int:
    package = inp.config.package
    if package is None:
        return 0
    underlying = catalog.get(package.underlying_product)
    if underlying is None or underlying.calculation.key == CalcKey.PACKAGE_PROXY:
        logger.debug("Package %s has no priceable underlying product", inp.config.id)
        return 0
    proxied = MainPremiumInput(
        selection=MainProductSelection(
            key=underlying.id,
            stbh=package.fixed_stbh,
            payment_term=package.fixed_payment_term,
        ),
        customer=inp.customer,
        config=underlying,
    )
    return calculate(underlying.calculation.key, proxied, tables, catalog)


# =============================================================================
# RIDERS
# =============================================================================


def _past_renewal(config: ProductConfig, age: int) -> bool:
    return config.renewal_max_age is not None and age > config.renewal_max_age


def health_fee_components(inp: RiderInput, tables: RateTables = DEFAULT_RATE_TABLES) -> HealthFeeComponents:
    """Health rider fee by component at the input's (attained) age.

    Dental is only charged when outpatient cover is also selected.
    """
    age = inp.age
    selection = inp.customer.rider(inp.config.id)
    if selection is None or _past_renewal(inp.config, age):
        return HealthFeeComponents()
    if not selection.program or not selection.scope:
        return HealthFeeComponents()

    scope_table = tables.health_scl.get(selection.scope)
    if scope_table is None:
        return HealthFeeComponents()
    base_row = find_band(scope_table, age)
    if base_row is None:
        return HealthFeeComponents()

    base = base_row.get(selection.program, 0)
    outpatient = 0.0
    dental = 0.0
    if selection.outpatient:
        outpatient = find_rate_by_range(tables.health_scl.get("outpatient", {}), age, selection.program)
        if selection.dental:
            dental = find_rate_by_range(tables.health_scl.get("dental", {}), age, selection.program)

    return HealthFeeComponents(
        base=round_down_to_1000(base),
        outpatient=round_down_to_1000(outpatient),
        dental=round_down_to_1000(dental),
        total=round_down_to_1000(base + outpatient + dental),
    )


def _health_rider(inp: RiderInput, tables: RateTables, catalog: ProductCatalog) -> int:
    return health_fee_components(inp, tables).total


def _critical_illness_rider(inp: RiderInput, tables: RateTables, catalog: ProductCatalog) -> int:
    age = inp.age
    selection = inp.customer.rider(inp.config.id)
    if selection is None or not selection.stbh or _past_renewal(inp.config, age):
        return 0
    rate = find_rate_by_range(tables.bhn, age, inp.customer.gender.rate_key)
    return round_down_to_1000(round_vnd(selection.stbh / 1000 * rate))


def _accident_rider(inp: RiderInput, tables: RateTables, catalog: ProductCatalog) -> int:
    selection = inp.customer.rider(inp.config.id)
    if selection is None or not selection.stbh or _past_renewal(inp.config, inp.age):
        return 0
    risk_group = inp.customer.risk_group
    if risk_group < 1 or risk_group > 4:
        return 0
    rate = tables.accident.get(risk_group, 0.0)
    return round_down_to_1000(round_vnd(selection.stbh / 1000 * rate))


def _hospital_support_rider(inp: RiderInput, tables: RateTables, catalog: ProductCatalog) -> int:
    age = inp.age
    selection = inp.customer.rider(inp.config.id)
    if selection is None or not selection.stbh or _past_renewal(inp.config, age):
        return 0
    # Daily cash amount, rated per 100
    rate = find_rate_by_range(tables.hospital_support, age, "rate")
    return round_down_to_1000(round_vnd(selection.stbh / 100 * rate))


# =============================================================================
# WAIVER
# =============================================================================


def _waiver(inp: WaiverInput, tables: RateTables, catalog: ProductCatalog) -> int:
    age = inp.age
    if age < WAIVER_MIN_AGE or age > WAIVER_MAX_AGE:
        return 0
    factor = RISK_GROUP_FACTORS.get(inp.target.risk_group)
    if factor is None or inp.stbh_base <= 0:
        return 0
    rate = find_rate_by_range(tables.mdp3, age, inp.target.gender.rate_key)
    return round_down_to_1000(round_vnd(inp.stbh_base / 1000 * rate * factor))


# =============================================================================
# PROJECTION
# =============================================================================


def _account_value_projection(inp: ProjectionInput, tables: RateTables, catalog: ProductCatalog, data=None):
    from vnquote.quote.projection import project_account_value

    if data is None:
        return project_account_value(inp)
    return project_account_value(inp, data)


_FORMULAS: dict[CalcKey, tuple[type, Callable]] = {
    CalcKey.RATE_TABLE_MAIN: (MainPremiumInput, _rate_table_main),
    CalcKey.DIRECT_PREMIUM_MAIN: (MainPremiumInput, _direct_premium_main),
    CalcKey.TERM_BANDED_MAIN: (MainPremiumInput, _term_banded_main),
    CalcKey.PACKAGE_PROXY: (MainPremiumInput, _package_proxy),
    CalcKey.HEALTH_RIDER: (RiderInput, _health_rider),
    CalcKey.CRITICAL_ILLNESS_RIDER: (RiderInput, _critical_illness_rider),
    CalcKey.ACCIDENT_RIDER: (RiderInput, _accident_rider),
    CalcKey.HOSPITAL_SUPPORT_RIDER: (RiderInput, _hospital_support_rider),
    CalcKey.WAIVER: (WaiverInput, _waiver),
    CalcKey.ACCOUNT_VALUE_PROJECTION: (ProjectionInput, _account_value_projection),
}


def registered_keys() -> frozenset[CalcKey]:
    """Calculation keys that have a formula."""
    return frozenset(_FORMULAS)


def calculate(
    key: Optional[CalcKey],
    inputs: FormulaInput,
    tables: RateTables = DEFAULT_RATE_TABLES,
    catalog: ProductCatalog = DEFAULT_CATALOG,
) -> int:
    """Run the premium formula registered under ``key``.

    Returns 0 for a missing key or an input of the wrong category.
    """
    entry = _FORMULAS.get(key) if key is not None else None
    if entry is None or key == CalcKey.ACCOUNT_VALUE_PROJECTION:
        logger.debug("No premium formula for %s", key)
        return 0
    input_type, formula = entry
    if not isinstance(inputs, input_type):
        logger.debug("Formula %s expects %s, got %s", key.value, input_type.__name__, type(inputs).__name__)
        return 0
    return max(0, int(formula(inputs, tables, catalog)))


def calculate_projection(inputs: ProjectionInput, data=None):
    """Run the account-value projection for an investment-linked product.

    Args:
        inputs: Projection inputs.
        data: InvestmentData to use instead of the default tables.

    Returns:
        ProjectionResult, or None if the product has no account value config.
    """
    _, projection = _FORMULAS[CalcKey.ACCOUNT_VALUE_PROJECTION]
    return projection(inputs, DEFAULT_RATE_TABLES, DEFAULT_CATALOG, data)


def mul_premium_range(stbh: int, age: int, tables: RateTables = DEFAULT_RATE_TABLES) -> Optional[PremiumRange]:
    """Allowed MUL main premium for a sum insured at an issue age.

    Returns None when the sum insured is empty or the age has no coefficient band.
    """
    if not stbh or stbh <= 0:
        return None
    band = find_band(tables.mul_coefficients, age)
    if band is None or not band.get("min") or not band.get("max"):
        return None
    return PremiumRange(
        min_premium=round_down_to_1000(stbh / band["max"]),
        max_premium=round_down_to_1000(stbh / band["min"]),
    )
