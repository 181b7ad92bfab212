"""Tests for the premium illustration and payment frequencies."""

import dataclasses

import pytest

from vnquote.core.config import QuoteConfig
from vnquote.core.errors import InvalidDateOfBirth, InvalidIllustrationEnd, UnknownMainProduct
from vnquote.core.types import MainProductSelection, PaymentFrequency
from vnquote.quote.engine import calculate_all
from vnquote.quote.illustration import (
    allowed_frequencies,
    build_illustration,
    frequency_breakdown,
    per_period_main,
    per_period_rider,
)
from vnquote.quote.state import QuoteState


class TestBuildIllustration:
    """Tests for build_illustration."""

    def test_row_count_covers_target_age(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test one row per policy year, target age inclusive."""
        illustration = build_illustration(pul_state, config=quote_config)
        assert illustration.start_age == 30
        assert illustration.end_age == 61
        assert len(illustration.rows) == 31
        assert illustration.rows[-1].age == 60

    def test_first_row_matches_breakdown(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test that year 1 equals the first-year quotation."""
        fees = calculate_all(pul_state)
        illustration = build_illustration(pul_state, fees, config=quote_config)
        first = illustration.rows[0]
        assert first.main_premium == fees.base_main
        assert first.rider_premiums["p2"]["mdp3"] == 217_000
        assert first.total == fees.total

    def test_main_premium_stops_after_term(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test that main premium is charged only within the payment term."""
        rows = build_illustration(pul_state, config=quote_config).rows
        assert all(r.main_premium == 7_700_000 for r in rows[:20])
        assert all(r.main_premium == 0 for r in rows[20:])

    def test_riders_priced_at_attained_age(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test that rider fees change with age bands."""
        rows = build_illustration(pul_state, config=quote_config).rows
        assert rows[0].rider_premiums["p1"]["bhn"] == 404_000
        assert rows[5].rider_premiums["p1"]["bhn"] == 668_000  # age 35, 3.34 per 1,000

    def test_waiver_stops_after_holder_turns_60(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test that the waiver drops out past the holder's age limit."""
        rows = build_illustration(pul_state, config=quote_config).rows
        # The spouse is 32 in year 1: 60 in year 29, 61 in year 30
        assert "mdp3" in rows[28].rider_premiums["p2"]
        assert "mdp3" not in rows[29].rider_premiums["p2"]

    def test_totals(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test that totals sum the rows."""
        illustration = build_illustration(pul_state, config=quote_config)
        assert illustration.totals.main_premium == 20 * 7_700_000
        assert illustration.totals.total == sum(r.total for r in illustration.rows)

    def test_package_fixed_term(self, package_state: QuoteState, quote_config: QuoteConfig):
        """Test a package illustration runs for its fixed term."""
        illustration = build_illustration(package_state, config=quote_config)
        assert illustration.payment_term == 10
        assert len(illustration.rows) == 10
        assert illustration.rows[0].main_premium == 457_000

    def test_invalid_dob_raises(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test fail-fast on a bad main insured date of birth."""
        bad = dataclasses.replace(pul_state.persons[0], dob="31/02/1990")
        state = dataclasses.replace(pul_state, persons=(bad, pul_state.persons[1]))
        with pytest.raises(InvalidDateOfBirth):
            build_illustration(state, config=quote_config)

    def test_unknown_product_raises(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test fail-fast on an unknown main product."""
        state = dataclasses.replace(pul_state, main_product=MainProductSelection(key="NOPE"))
        with pytest.raises(UnknownMainProduct):
            build_illustration(state, config=quote_config)

    def test_missing_target_age_raises(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test fail-fast when no end age can be resolved."""
        state = dataclasses.replace(pul_state, target_age=None)
        with pytest.raises(InvalidIllustrationEnd):
            build_illustration(state, config=quote_config)

    def test_target_before_start_raises(self, pul_state: QuoteState, quote_config: QuoteConfig):
        """Test fail-fast when the end age is not after the start age."""
        state = dataclasses.replace(pul_state, target_age=20)
        with pytest.raises(InvalidIllustrationEnd) as exc_info:
            build_illustration(state, config=quote_config)
        assert exc_info.value.start_age == 30


class TestFrequencies:
    """Tests for installment splitting."""

    def test_per_period_amounts(self):
        """Test main and rider installments."""
        assert per_period_main(7_700_000, PaymentFrequency.YEAR) == 7_700_000
        assert per_period_main(7_700_000, PaymentFrequency.HALF) == 3_850_000
        assert per_period_main(7_700_000, PaymentFrequency.QUARTER) == 1_925_000
        assert per_period_rider(1_000_000, PaymentFrequency.HALF) == 510_000
        assert per_period_rider(1_000_000, PaymentFrequency.QUARTER) == 260_000

    def test_annual_breakdown_has_no_difference(self, pul_state: QuoteState):
        """Test that annual payment has no installment loading."""
        breakdown = frequency_breakdown(calculate_all(pul_state), PaymentFrequency.YEAR)
        assert breakdown.diff == 0
        assert breakdown.per_period_total == breakdown.annual_total

    def test_quarterly_breakdown(self, pul_state: QuoteState):
        """Test that quarterly payment costs more than annual."""
        fees = calculate_all(pul_state)
        breakdown = frequency_breakdown(fees, PaymentFrequency.QUARTER)
        assert breakdown.periods == 4
        assert breakdown.annual_equivalent == breakdown.per_period_total * 4
        assert breakdown.diff > 0

    def test_allowed_frequencies_by_premium(self):
        """Test the premium thresholds for split payment."""
        assert allowed_frequencies(5_000_000) == [PaymentFrequency.YEAR]
        assert allowed_frequencies(7_000_000) == [PaymentFrequency.YEAR, PaymentFrequency.HALF]
        assert allowed_frequencies(8_000_000) == list(PaymentFrequency)
