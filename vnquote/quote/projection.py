"""Monthly account-value projection for investment-linked products.

Each month of every scenario:

1. in a payment month within the payment term, premium in less initial fee
2. less the monthly admin fee for the calendar year
3. less the cost of insurance on the sum at risk
4. plus interest at the scenario's monthly-compounded rate
5. plus any persistency bonus at a policy-year end

The account value never goes below 0. Values are recorded at each policy-year end.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from vnquote.core.config import QuoteConfig
from vnquote.quote.catalog import DEFAULT_CATALOG, AccountValueConfig, BonusType, ProductCatalog
from vnquote.quote.engine import FeeBreakdown, calculate_all
from vnquote.quote.formatting import round_down_to_1000, round_vnd
from vnquote.quote.investment import DEFAULT_INVESTMENT_DATA, InvestmentData
from vnquote.quote.rates import DEFAULT_RATE_TABLES, RateTables
from vnquote.quote.registry import ProjectionInput
from vnquote.quote.state import QuoteState
from vnquote.quote.target_age import resolve_term

logger = logging.getLogger(__name__)

# Policy years during which the capped scenario may use the custom rate
CUSTOM_RATE_CAPPED_YEARS = 20


class Scenario(str, Enum):
    """Interest scenarios projected side by side."""

    GUARANTEED = "guaranteed"
    CUSTOM_CAPPED = "customCapped"
    CUSTOM_FULL = "customFull"


@dataclass(frozen=True)
class ProjectionResult:
    """Year-end account values per scenario."""

    start_age: int
    guaranteed: list[int] = field(default_factory=list)
    custom_capped: list[int] = field(default_factory=list)
    custom_full: list[int] = field(default_factory=list)

    def values(self, scenario: Scenario) -> list[int]:
        return {
            Scenario.GUARANTEED: self.guaranteed,
            Scenario.CUSTOM_CAPPED: self.custom_capped,
            Scenario.CUSTOM_FULL: self.custom_full,
        }[scenario]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "start_age": self.start_age,
            "guaranteed": list(self.guaranteed),
            "customCapped": list(self.custom_capped),
            "customFull": list(self.custom_full),
        }


def normalize_rate(rate: Optional[float]) -> float:
    """Interest rate as a fraction; values above 1 are percentages."""
    value = float(rate or 0)
    return value / 100 if value > 1 else value


def scenario_rate(scenario: Scenario, policy_year: int, custom_rate: float, guaranteed_rate: float) -> float:
    """Annual interest rate a scenario credits in a policy year.

    Always guaranteed <= capped <= full.
    """
    if scenario == Scenario.GUARANTEED:
        return guaranteed_rate
    if scenario == Scenario.CUSTOM_CAPPED and policy_year > CUSTOM_RATE_CAPPED_YEARS:
        return guaranteed_rate
    return max(custom_rate, guaranteed_rate)


def monthly_rate(annual_rate: float) -> float:
    """Monthly rate compounding to the annual rate."""
    return (1 + annual_rate) ** (1 / 12) - 1


def sum_insured_for_year(av_config: AccountValueConfig, initial_stbh: int, policy_year: int) -> int:
    """Sum insured used for the risk charge in a policy year."""
    step = av_config.sum_insured_step
    if step is None or policy_year <= 1:
        return initial_stbh
    steps = min(policy_year - 1, step.max_steps)
    return initial_stbh + round_vnd(initial_stbh * step.rate * steps)


def _calendar_year(start_year: int, start_month: int, month: int) -> int:
    return start_year + (start_month - 1 + month - 1) // 12


def _bonus(
    av_config: AccountValueConfig,
    data: InvestmentData,
    policy_year: int,
    payment_term: int,
    annual_base_premium: int,
) -> float:
    if av_config.bonus_type == BonusType.MUL_PERIODIC:
        if data.mul_periodic_bonus_from_year <= policy_year <= payment_term:
            return annual_base_premium * data.mul_periodic_bonus_rate
        return 0.0
    if av_config.bonus_type == BonusType.STANDARD_PUL:
        rate = data.persistency_bonus.get(policy_year)
        if rate and payment_term >= policy_year:
            return annual_base_premium * rate
    return 0.0


def project_account_value(
    inputs: ProjectionInput,
    data: InvestmentData = DEFAULT_INVESTMENT_DATA,
) -> Optional[ProjectionResult]:
    """Project account values month by month under the three scenarios.

    Returns:
        ProjectionResult with one value per policy year, or None when the main
        product is not investment-linked.
    """
    av_config = inputs.config.account_value
    if av_config is None:
        logger.debug("Product %s has no account value configuration", inputs.config.id)
        return None

    person = inputs.main_person
    start_age = person.age
    total_years = inputs.target_age - start_age + 1
    if total_years <= 0:
        return ProjectionResult(start_age=start_age)

    gender_key = person.gender.rate_key
    payment_term = inputs.selection.payment_term or 0
    initial_stbh = max(0, inputs.selection.stbh)
    custom_rate = normalize_rate(inputs.custom_interest_rate)

    frequency = inputs.payment_frequency
    periods = frequency.periods
    annual_base = max(0, inputs.base_premium)
    annual_extra = max(0, inputs.extra_premium) if av_config.include_extra_premium else 0
    if periods > 1:
        base_per_period = round_down_to_1000(annual_base / periods)
        extra_per_period = round_down_to_1000(annual_extra / periods)
    else:
        base_per_period = annual_base
        extra_per_period = annual_extra

    start_year = inputs.reference_date.year
    start_month = inputs.reference_date.month

    values = {scenario: 0 for scenario in Scenario}
    year_ends: dict[Scenario, list[int]] = {scenario: [] for scenario in Scenario}

    for month in range(1, total_years * 12 + 1):
        policy_year = (month - 1) // 12 + 1
        month_in_year = (month - 1) % 12 + 1
        attained_age = start_age + policy_year - 1
        is_year_end = month % 12 == 0

        paying = month_in_year in frequency.payment_months and policy_year <= payment_term
        premium_in = base_per_period + extra_per_period if paying else 0
        initial_fee = 0
        if paying:
            initial_fee = round_vnd(
                base_per_period * data.initial_fee_rate(av_config.initial_fee_ref, policy_year)
                + extra_per_period * data.extra_initial_fee
            )

        admin_fee = data.admin_fee(_calendar_year(start_year, start_month, month))
        stbh = sum_insured_for_year(av_config, initial_stbh, policy_year)
        coi_rate = data.cost_of_insurance_rate(av_config.cost_of_insurance_ref, attained_age, gender_key)
        guaranteed = data.guaranteed_rate(policy_year) if av_config.use_guaranteed_interest else 0.0
        bonus = 0
        if is_year_end:
            bonus = round_vnd(_bonus(av_config, data, policy_year, payment_term, annual_base))

        for scenario in Scenario:
            investment = values[scenario] + premium_in - initial_fee
            sum_at_risk = max(0, stbh - investment)
            cost_of_insurance = round_vnd(sum_at_risk * coi_rate / 1000 / 12)
            net = investment - admin_fee - cost_of_insurance

            annual_rate = scenario_rate(scenario, policy_year, custom_rate, guaranteed)
            interest = round_vnd(net * monthly_rate(annual_rate))

            values[scenario] = max(0, round_vnd(net + interest + bonus))
            if is_year_end:
                year_ends[scenario].append(values[scenario])

    return ProjectionResult(
        start_age=start_age,
        guaranteed=year_ends[Scenario.GUARANTEED],
        custom_capped=year_ends[Scenario.CUSTOM_CAPPED],
        custom_full=year_ends[Scenario.CUSTOM_FULL],
    )


def project_quote(
    state: QuoteState,
    fees: Optional[FeeBreakdown] = None,
    catalog: ProductCatalog = DEFAULT_CATALOG,
    tables: RateTables = DEFAULT_RATE_TABLES,
    data: InvestmentData = DEFAULT_INVESTMENT_DATA,
    config: Optional[QuoteConfig] = None,
) -> Optional[ProjectionResult]:
    """Project account values for a quotation state.

    The custom rate comes from the state, falling back to the configured
    default. Returns None when there is no main person, the main product is not
    investment-linked, or no target age can be resolved.
    """
    config = config or QuoteConfig()
    main_person = state.main_person
    main_config = catalog.get(state.main_product.key)
    if main_person is None or main_config is None or main_config.account_value is None:
        return None

    resolution = resolve_term(main_config, state.main_product, main_person, state.target_age, config.limits)
    if resolution.target_age is None:
        logger.debug("No target age for %s; skipping projection", main_config.id)
        return None

    if fees is None:
        fees = calculate_all(state, catalog, tables, config.waiver_other_person_id)

    custom_rate = state.custom_interest_rate
    if custom_rate is None:
        custom_rate = config.default_custom_interest_rate

    return project_account_value(
        ProjectionInput(
            main_person=main_person,
            selection=state.main_product,
            config=main_config,
            base_premium=fees.base_main,
            target_age=resolution.target_age,
            extra_premium=fees.extra,
            custom_interest_rate=custom_rate,
            payment_frequency=state.payment_frequency,
            reference_date=config.reference_date,
        ),
        data,
    )
