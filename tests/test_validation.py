"""Tests for quotation validation."""

import dataclasses

from vnquote.core.config import QuoteConfig
from vnquote.core.types import Gender, MainProductSelection, PaymentFrequency, RiderSelection
from vnquote.quote.catalog import TOTAL_HOSPITAL_SUPPORT_STBH
from vnquote.quote.state import QuoteState, WaiverSelection
from vnquote.quote.validation import hospital_support_ceiling, validate_quote


def _fields(issues) -> set[str]:
    return {issue.field for issue in issues}


def _with_main(state: QuoteState, **changes) -> QuoteState:
    return dataclasses.replace(state, main_product=dataclasses.replace(state.main_product, **changes))


def _with_riders(state: QuoteState, person_index: int, supplements: dict) -> QuoteState:
    persons = list(state.persons)
    persons[person_index] = dataclasses.replace(persons[person_index], supplements=supplements)
    return dataclasses.replace(state, persons=tuple(persons))


class TestValidQuotes:
    """Tests for quotations that should pass."""

    def test_pul_household_is_valid(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test the standard fixture passes every check."""
        assert validate_quote(pul_state, config=quote_config) == []

    def test_package_is_valid(self, package_state: QuoteState, quote_config: QuoteConfig):
        """Test a package with its mandatory rider."""
        assert validate_quote(package_state, config=quote_config) == []


class TestMainProductChecks:
    """Tests for main product checks."""

    def test_no_main_product(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test that a main product is required."""
        state = dataclasses.replace(pul_state, main_product=MainProductSelection())
        assert _fields(validate_quote(state, config=quote_config)) == {"main_product.key"}

    def test_no_main_person(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test that a main insured is required."""
        state = dataclasses.replace(pul_state, persons=(pul_state.persons[1],))
        assert _fields(validate_quote(state, config=quote_config)) == {"persons"}

    def test_ineligible_main_insured(self, pul_state: QuoteState, quote_config: QuoteConfig, person_factory):
        """Test the main product age limit."""
        old = person_factory("p1", "01/01/1949", is_main=True)
        state = dataclasses.replace(pul_state, persons=(old,), waiver=WaiverSelection(), target_age=90)
        assert "main_product.key" in _fields(validate_quote(state, config=quote_config))

    def test_minimum_stbh_and_premium(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test 50M sum insured fails both the stbh and premium minimums."""
        fields = _fields(validate_quote(_with_main(pul_state, stbh=50_000_000), config=quote_config))
        assert {"main_product.stbh", "main_product.premium"} <= fields

    def test_extra_premium_limit(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test extra premium above five times base."""
        fields = _fields(validate_quote(_with_main(pul_state, extra_premium=50_000_000), config=quote_config))
        assert "main_product.extra_premium" in fields

    def test_mul_premium_range(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test a MUL premium above the allowed range."""
        state = _with_main(pul_state, key="KHOE_BINH_AN", premium=50_000_000)
        assert "main_product.premium" in _fields(validate_quote(state, config=quote_config))

    def test_payment_term_bounds(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test a term below the product minimum."""
        state = dataclasses.replace(_with_main(pul_state, payment_term=2), target_age=60)
        assert "main_product.payment_term" in _fields(validate_quote(state, config=quote_config))

    def test_selected_term_must_be_an_option(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test a traditional product with an unavailable term."""
        state = _with_main(pul_state, key="AN_BINH_UU_VIET", stbh=1_000_000_000, payment_term=12)
        assert "main_product.payment_term" in _fields(validate_quote(state, config=quote_config))

    def test_target_age_bounds(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test a target age before the end of the payment term."""
        state = dataclasses.replace(pul_state, target_age=40)
        issues = validate_quote(state, config=quote_config)
        assert [i.message for i in issues if i.field == "target_age"] == ["Valid range: 49 - 99."]

    def test_frequency_needs_premium(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test quarterly payment below the premium threshold."""
        state = dataclasses.replace(
            _with_main(pul_state, stbh=700_000_000), payment_frequency=PaymentFrequency.QUARTER
        )
        assert "payment_frequency" in _fields(validate_quote(state, config=quote_config))


class TestRiderChecks:
    """Tests for rider checks."""

    def test_mandatory_package_rider(self, package_state: QuoteState, quote_config: QuoteConfig):
        """Test a package without its mandatory health rider."""
        state = _with_riders(package_state, 0, {})
        issues = validate_quote(state, config=quote_config)
        assert _fields(issues) == {"supplements.health_scl"}
        assert issues[0].person_id == "p1"

    def test_critical_illness_minimum(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test the 200M critical illness minimum."""
        state = _with_riders(pul_state, 1, {"bhn": RiderSelection(stbh=100_000_000)})
        assert "supplements.bhn.stbh" in _fields(validate_quote(state, config=quote_config))

    def test_accident_maximum(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test the 8B accident maximum."""
        state = _with_riders(pul_state, 1, {"accident": RiderSelection(stbh=9_000_000_000)})
        assert "supplements.accident.stbh" in _fields(validate_quote(state, config=quote_config))

    def test_health_program_needs_premium(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test a comprehensive program on a 7.7M base premium."""
        state = _with_riders(
            pul_state, 0, {"health_scl": RiderSelection(program="toan_dien", scope="main_vn")}
        )
        assert "supplements.health_scl.program" in _fields(validate_quote(state, config=quote_config))

    def test_ineligible_rider(self, pul_state: QuoteState, quote_config: QuoteConfig, person_factory):
        """Test a rider selected for a person outside its age limit."""
        grandparent = person_factory("p3", "01/01/1955", supplements={"hospital_support": RiderSelection(stbh=100_000)})
        state = dataclasses.replace(pul_state, persons=pul_state.persons + (grandparent,))
        issues = validate_quote(state, config=quote_config)
        assert any(i.field == "supplements.hospital_support" and i.person_id == "p3" for i in issues)

    def test_hospital_support_amounts(self, pul_state: QuoteState, quote_config: QuoteConfig, person_factory):
        """Test the multiple, the per-age cap and the shared ceiling."""
        child = person_factory("p3", "01/01/2016", supplements={"hospital_support": RiderSelection(stbh=400_000)})
        state = _with_riders(pul_state, 0, {"hospital_support": RiderSelection(stbh=150_000)})
        state = dataclasses.replace(state, persons=state.persons + (child,))
        issues = validate_quote(state, config=quote_config)

        by_person = {(i.field, i.person_id) for i in issues}
        assert ("supplements.hospital_support.stbh", "p1") in by_person
        assert ("supplements.hospital_support.stbh", "p3") in by_person
        assert f"accumulators.{TOTAL_HOSPITAL_SUPPORT_STBH}" in _fields(issues)

    def test_hospital_support_ceiling(self):
        """Test 100,000 of shared amount per 4M of base premium."""
        assert hospital_support_ceiling(7_700_000) == 100_000
        assert hospital_support_ceiling(12_000_000) == 300_000
        assert hospital_support_ceiling(3_999_000) == 0


class TestWaiverChecks:
    """Tests for waiver checks."""

    def test_waiver_holder_too_old(self, pul_state: QuoteState, quote_config: QuoteConfig, person_factory):
        """Test a waiver holder over 60."""
        payer = person_factory("other", "01/01/1959", gender=Gender.FEMALE)
        state = dataclasses.replace(pul_state, waiver=WaiverSelection(target_person_id="other", other_person=payer))
        assert "waiver.target_person_id" in _fields(validate_quote(state, config=quote_config))

    def test_waiver_holder_without_risk_group(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test a waiver holder with no risk group."""
        state = dataclasses.replace(
            pul_state,
            persons=(pul_state.persons[0], dataclasses.replace(pul_state.persons[1], risk_group=0)),
        )
        assert "waiver.risk_group" in _fields(validate_quote(state, config=quote_config))

    def test_unknown_waiver_target(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test a waiver target id that matches nobody."""
        state = dataclasses.replace(pul_state, waiver=WaiverSelection(target_person_id="ghost"))
        assert "waiver.target_person_id" in _fields(validate_quote(state, config=quote_config))
