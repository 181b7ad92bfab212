"""Tests for the account-value projection."""

from datetime import date

from vnquote.core.config import QuoteConfig
from vnquote.core.types import MainProductSelection, PaymentFrequency
from vnquote.quote.catalog import ProductCatalog
from vnquote.quote.investment import InvestmentData
from vnquote.quote.projection import (
    Scenario,
    normalize_rate,
    project_account_value,
    project_quote,
    scenario_rate,
    sum_insured_for_year,
)
from vnquote.quote.registry import ProjectionInput, calculate_projection
from vnquote.quote.state import QuoteState

# No fees, no mortality, no interest: the account value is just premiums paid
FLAT_DATA = InvestmentData(
    initial_fees={},
    extra_initial_fee=0.0,
    guaranteed_interest_rates={},
    guaranteed_interest_default=0.0,
    admin_fees={},
    admin_fee_default=0,
    cost_of_insurance={},
    persistency_bonus={},
    mul_periodic_bonus_rate=0.0,
)


def _inputs(catalog: ProductCatalog, person, key="PUL_TRON_DOI", term=5, target_age=39, **kwargs):
    return ProjectionInput(
        main_person=person,
        selection=MainProductSelection(key=key, stbh=100_000_000, payment_term=term),
        config=catalog.get(key),
        base_premium=kwargs.pop("base_premium", 10_000_000),
        target_age=target_age,
        reference_date=kwargs.pop("reference_date", date(2025, 1, 1)),
        **kwargs,
    )


class TestRates:
    """Tests for scenario interest rates."""

    def test_scenario_rates(self):
        """Test each scenario within and after the capped period."""
        assert scenario_rate(Scenario.GUARANTEED, 1, 0.047, 0.04) == 0.04
        assert scenario_rate(Scenario.CUSTOM_CAPPED, 20, 0.047, 0.02) == 0.047
        assert scenario_rate(Scenario.CUSTOM_CAPPED, 21, 0.047, 0.02) == 0.02
        assert scenario_rate(Scenario.CUSTOM_FULL, 21, 0.047, 0.02) == 0.047

    def test_custom_rate_never_below_guaranteed(self):
        """Test that a low custom rate falls back to the guaranteed rate."""
        assert scenario_rate(Scenario.CUSTOM_FULL, 1, 0.01, 0.04) == 0.04

    def test_normalize_rate(self):
        """Test percentage and fraction inputs."""
        assert normalize_rate(4.7) == 0.047
        assert normalize_rate(0.05) == 0.05
        assert normalize_rate(None) == 0.0


class TestSumInsuredStep:
    """Tests for the stepped sum insured of KHOE_BINH_AN."""

    def test_steps_and_cap(self, catalog: ProductCatalog):
        """Test 5% steps for ten years, then flat."""
        av_config = catalog.get("KHOE_BINH_AN").account_value
        assert sum_insured_for_year(av_config, 100_000_000, 1) == 100_000_000
        assert sum_insured_for_year(av_config, 100_000_000, 2) == 105_000_000
        assert sum_insured_for_year(av_config, 100_000_000, 11) == 150_000_000
        assert sum_insured_for_year(av_config, 100_000_000, 25) == 150_000_000

    def test_no_step(self, catalog: ProductCatalog):
        """Test that products without steps keep the initial amount."""
        av_config = catalog.get("VUNG_TUONG_LAI").account_value
        assert sum_insured_for_year(av_config, 100_000_000, 8) == 100_000_000


class TestProjectAccountValue:
    """Tests for the monthly projection loop."""

    def test_premiums_accumulate_within_term(self, catalog: ProductCatalog, main_person):
        """Test one value per year and no premium after the term."""
        result = project_account_value(_inputs(catalog, main_person), FLAT_DATA)
        assert result.guaranteed == [10_000_000 * min(y, 5) for y in range(1, 11)]
        assert result.custom_full == result.guaranteed

    def test_quarterly_premiums(self, catalog: ProductCatalog, main_person):
        """Test that four installments add up to the annual premium."""
        inputs = _inputs(catalog, main_person, target_age=30, payment_frequency=PaymentFrequency.QUARTER)
        assert project_account_value(inputs, FLAT_DATA).guaranteed == [10_000_000]

    def test_admin_fee_by_calendar_year(self, catalog: ProductCatalog, main_person):
        """Test that the admin fee follows the calendar year of each month."""
        data = InvestmentData(
            initial_fees={},
            guaranteed_interest_rates={},
            guaranteed_interest_default=0.0,
            admin_fees={2025: 10_000},
            admin_fee_default=20_000,
            cost_of_insurance={},
            persistency_bonus={},
        )
        january = _inputs(catalog, main_person, term=1, target_age=30, base_premium=1_000_000)
        july = _inputs(
            catalog, main_person, term=1, target_age=30, base_premium=1_000_000, reference_date=date(2025, 7, 1)
        )
        assert project_account_value(january, data).guaranteed == [880_000]
        assert project_account_value(july, data).guaranteed == [820_000]

    def test_account_value_never_negative(self, catalog: ProductCatalog, main_person):
        """Test the zero floor when fees exceed the account."""
        inputs = _inputs(catalog, main_person, term=1, target_age=34, base_premium=0)
        result = project_account_value(inputs)
        assert all(v == 0 for v in result.guaranteed + result.custom_capped + result.custom_full)

    def test_persistency_bonus(self, catalog: ProductCatalog, main_person):
        """Test the PUL bonus at year 10 only when paying through year 10."""
        data = InvestmentData(
            initial_fees={},
            guaranteed_interest_rates={},
            guaranteed_interest_default=0.0,
            admin_fees={},
            admin_fee_default=0,
            cost_of_insurance={},
            persistency_bonus={10: 0.3},
        )
        paid_up = project_account_value(_inputs(catalog, main_person, term=10), data)
        short = project_account_value(_inputs(catalog, main_person, term=9), data)
        assert paid_up.guaranteed[-1] == 100_000_000 + 3_000_000
        assert short.guaranteed[-1] == 90_000_000

    def test_mul_periodic_bonus_and_extra_premium(self, catalog: ProductCatalog, main_person):
        """Test the MUL bonus from year 5 and that MUL ignores extra premium."""
        data = InvestmentData(
            initial_fees={},
            guaranteed_interest_rates={},
            guaranteed_interest_default=0.0,
            admin_fees={},
            admin_fee_default=0,
            cost_of_insurance={},
            persistency_bonus={},
            mul_periodic_bonus_rate=0.03,
        )
        inputs = _inputs(catalog, main_person, key="VUNG_TUONG_LAI", term=6, target_age=35, extra_premium=5_000_000)
        result = project_account_value(inputs, data)
        assert result.guaranteed[3] == 40_000_000
        assert result.guaranteed[4] == 50_300_000
        assert result.guaranteed[5] == 60_600_000

    def test_pul_includes_extra_premium(self, catalog: ProductCatalog, main_person):
        """Test that PUL credits extra premium."""
        inputs = _inputs(catalog, main_person, term=1, target_age=30, extra_premium=5_000_000)
        assert project_account_value(inputs, FLAT_DATA).guaranteed == [15_000_000]

    def test_non_investment_product(self, catalog: ProductCatalog, main_person):
        """Test that products without an account value return None."""
        inputs = _inputs(catalog, main_person, key="AN_BINH_UU_VIET")
        assert project_account_value(inputs) is None

    def test_registry_entry_point(self, catalog: ProductCatalog, main_person):
        """Test calculate_projection with custom data."""
        result = calculate_projection(_inputs(catalog, main_person), FLAT_DATA)
        assert result.guaranteed[0] == 10_000_000


class TestProjectQuote:
    """Tests for projecting from a quotation state."""

    def test_scenarios_are_ordered(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test guaranteed <= capped <= full for every year."""
        result = project_quote(pul_state, config=quote_config)
        assert len(result.guaranteed) == 31
        for g, c, f in zip(result.guaranteed, result.custom_capped, result.custom_full):
            assert 0 <= g <= c <= f

    def test_capped_matches_full_for_20_years(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test that the capped and full scenarios agree while the cap applies."""
        result = project_quote(pul_state, config=quote_config)
        assert result.custom_capped[:20] == result.custom_full[:20]

    def test_non_investment_state(self, package_state: QuoteState, quote_config: QuoteConfig):
        """Test that packages have no projection."""
        assert project_quote(package_state, config=quote_config) is None

    def test_to_dict_keys(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test serialized scenario names."""
        data = project_quote(pul_state, config=quote_config).to_dict()
        assert set(data) == {"start_age", "guaranteed", "customCapped", "customFull"}
