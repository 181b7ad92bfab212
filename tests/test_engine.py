"""Tests for fee aggregation."""

import dataclasses

from vnquote.core.types import Gender, MainProductSelection, RiderSelection
from vnquote.quote.catalog import TOTAL_HOSPITAL_SUPPORT_STBH, ProductCatalog, StbhTerm
from vnquote.quote.engine import (
    FeeSnapshot,
    aggregate_accumulators,
    calculate_all,
    priced_persons,
    resolve_waiver_target,
    waiver_stbh_base,
)
from vnquote.quote.state import QuoteState, WaiverSelection


class TestCalculateAll:
    """Tests for the full calculation run."""

    def test_pul_household_breakdown(self, pul_state: QuoteState, catalog: ProductCatalog):
        """Test every figure of a two-person quotation with a waiver."""
        fees = calculate_all(pul_state, catalog)

        assert fees.base_main == 7_700_000
        assert fees.extra == 0
        assert fees.person("p1").supp_details == {"health_scl": 1_939_000, "bhn": 404_000}
        assert fees.person("p2").supp_details == {"bhn": 444_000, "mdp3": 217_000}

        waiver = fees.waiver_details["mdp3"]
        assert waiver.stbh_base == 10_043_000
        assert waiver.target_person_id == "p2"
        assert waiver.premium == 217_000

        assert fees.total_supp == 3_004_000
        assert fees.total == 10_704_000

    def test_totals_are_consistent(self, pul_state: QuoteState):
        """Test that totals equal the sum of their parts."""
        fees = calculate_all(pul_state)
        assert fees.total_main == fees.base_main + fees.extra
        assert fees.total == fees.total_main + fees.total_supp
        assert sum(p.supp for p in fees.by_person.values()) == fees.total_supp
        assert sum(p.total for p in fees.by_person.values()) == fees.total

    def test_every_fee_is_a_multiple_of_1000(self, pul_state: QuoteState):
        """Test rounding of every priced amount."""
        fees = calculate_all(pul_state)
        amounts = [fees.base_main] + [
            fee for person in fees.by_person.values() for fee in person.supp_details.values()
        ]
        assert all(amount % 1000 == 0 for amount in amounts)

    def test_calculation_is_idempotent(self, pul_state: QuoteState):
        """Test that two runs on the same state agree."""
        assert calculate_all(pul_state) == calculate_all(pul_state)

    def test_extra_premium_counts_toward_main(self, pul_state: QuoteState):
        """Test that extra premium adds to the main total but not the base."""
        state = dataclasses.replace(
            pul_state,
            main_product=dataclasses.replace(pul_state.main_product, extra_premium=2_000_000),
        )
        fees = calculate_all(state)
        assert fees.base_main == 7_700_000
        assert fees.extra == 2_000_000
        assert fees.total_main == 9_700_000
        assert fees.person("p1").main == 9_700_000

    def test_missing_main_product_prices_riders(self, pul_state: QuoteState):
        """Test that riders still price when the main product is unknown."""
        state = dataclasses.replace(pul_state, main_product=MainProductSelection(key="UNKNOWN"))
        fees = calculate_all(state)
        assert fees.base_main == 0
        assert fees.person("p1").supp_details["bhn"] == 404_000

    def test_no_persons(self):
        """Test that an empty state gives an empty breakdown."""
        fees = calculate_all(QuoteState())
        assert fees.total == 0
        assert fees.by_person == {}

    def test_waiver_on_other_payer(self, pul_state: QuoteState, person_factory):
        """Test a waiver on a payer who is not insured."""
        payer = person_factory("other", "01/03/1992", gender=Gender.FEMALE)
        state = dataclasses.replace(
            pul_state,
            waiver=WaiverSelection(target_person_id="other", other_person=payer),
        )
        fees = calculate_all(state)
        # Nobody's riders are excluded from the base
        assert fees.waiver_details["mdp3"].stbh_base == 7_700_000 + 2_343_000 + 444_000
        assert fees.person("other").supp_details == {"mdp3": fees.waiver_details["mdp3"].premium}

    def test_no_waiver_without_target(self, pul_state: QuoteState):
        """Test that no target means no waiver."""
        state = dataclasses.replace(pul_state, waiver=WaiverSelection())
        fees = calculate_all(state)
        assert fees.waiver_details == {}
        assert fees.total_supp == 2_787_000

    def test_package_prices_main_person_only(self, package_state: QuoteState, person_factory):
        """Test that a package ignores riders on other persons."""
        child = person_factory("p2", "01/01/2015", supplements={"bhn": RiderSelection(stbh=200_000_000)})
        state = dataclasses.replace(package_state, persons=package_state.persons + (child,))
        fees = calculate_all(state)
        assert fees.base_main == 457_000
        assert fees.person("p1").supp_details == {"health_scl": 1_939_000}
        assert fees.person("p2").supp == 0


class TestHelpers:
    """Tests for the aggregation helpers."""

    def test_waiver_base_is_clamped(self):
        """Test that a negative base becomes 0."""
        snapshot = {"p1": FeeSnapshot(main=0, main_base=0, supp=500_000, total=500_000)}
        base = waiver_stbh_base((StbhTerm.RIDERS_EXCEPT_TARGET,), snapshot, "p1")
        assert base == 0

    def test_waiver_base_terms(self):
        """Test that each term contributes."""
        snapshot = {
            "p1": FeeSnapshot(main=8_000_000, main_base=7_000_000, supp=1_000_000, total=9_000_000),
            "p2": FeeSnapshot(main=0, main_base=0, supp=300_000, total=300_000),
        }
        assert waiver_stbh_base((StbhTerm.MAIN_BASE,), snapshot, "p2") == 7_000_000
        assert waiver_stbh_base((StbhTerm.RIDERS_ALL,), snapshot, "p2") == 1_300_000
        assert waiver_stbh_base(tuple(StbhTerm), snapshot, "p2") == 8_000_000

    def test_accumulators_sum_across_persons(self, catalog: ProductCatalog, person_factory):
        """Test the shared hospital support total."""
        persons = [
            person_factory("p1", supplements={"hospital_support": RiderSelection(stbh=300_000)}),
            person_factory("p2", supplements={"hospital_support": RiderSelection(stbh=200_000)}),
        ]
        assert aggregate_accumulators(persons, catalog) == {TOTAL_HOSPITAL_SUPPORT_STBH: 500_000}

    def test_priced_persons_for_regular_product(self, pul_state: QuoteState, catalog: ProductCatalog):
        """Test that regular products price everyone."""
        assert [p.id for p in priced_persons(pul_state, catalog)] == ["p1", "p2"]

    def test_resolve_waiver_target(self, pul_state: QuoteState):
        """Test lookup by id and unknown ids."""
        assert resolve_waiver_target(pul_state).id == "p2"
        unknown = dataclasses.replace(pul_state, waiver=WaiverSelection(target_person_id="nobody"))
        assert resolve_waiver_target(unknown) is None
