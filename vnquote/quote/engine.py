"""Fee aggregation engine.

``calculate_all`` prices a whole quotation in fixed phases:

1. main product base premium plus extra premium
2. pre-aggregation of cross-person accumulators
3. pass 1: direct riders for every person
4. snapshot of per-person totals
5. pass 2: waivers, priced from the snapshot
6. final totals

A missing main person, main product, rider config or rate contributes 0. The
engine never raises.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from vnquote.core.types import Person
from vnquote.quote.catalog import DEFAULT_CATALOG, ProductCatalog, StbhTerm
from vnquote.quote.rates import DEFAULT_RATE_TABLES, RateTables
from vnquote.quote.registry import MainPremiumInput, RiderInput, WaiverInput, calculate
from vnquote.quote.state import QuoteState

logger = logging.getLogger(__name__)

DEFAULT_WAIVER_OTHER_ID = "other"


@dataclass(frozen=True)
class PersonFees:
    """Fees attributed to one person."""

    main: int = 0
    supp: int = 0
    total: int = 0
    supp_details: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "main": self.main,
            "supp": self.supp,
            "total": self.total,
            "supp_details": dict(self.supp_details),
        }


@dataclass(frozen=True)
class FeeSnapshot:
    """Per-person totals frozen after pass 1, before any waiver is added."""

    main: int
    main_base: int
    supp: int
    total: int


@dataclass(frozen=True)
class WaiverDetail:
    """A priced waiver and the base it was priced on."""

    premium: int
    target_person_id: str
    target_name: str
    stbh_base: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "premium": self.premium,
            "target_person_id": self.target_person_id,
            "target_name": self.target_name,
            "stbh_base": self.stbh_base,
        }


@dataclass(frozen=True)
class FeeBreakdown:
    """Complete result of one calculation run."""

    base_main: int = 0
    extra: int = 0
    total_main: int = 0
    total_supp: int = 0
    total: int = 0
    by_person: dict[str, PersonFees] = field(default_factory=dict)
    waiver_details: dict[str, WaiverDetail] = field(default_factory=dict)
    accumulators: dict[str, int] = field(default_factory=dict)

    def person(self, person_id: str) -> PersonFees:
        """Fees for a person (all zero if the person has none)."""
        return self.by_person.get(person_id, PersonFees())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "base_main": self.base_main,
            "extra": self.extra,
            "total_main": self.total_main,
            "total_supp": self.total_supp,
            "total": self.total,
            "by_person": {pid: fees.to_dict() for pid, fees in self.by_person.items()},
            "waiver_details": {wid: d.to_dict() for wid, d in self.waiver_details.items()},
            "accumulators": dict(self.accumulators),
        }


class _PersonTally:
    """Mutable per-person accumulator used while a run is in progress."""

    def __init__(self) -> None:
        self.main = 0
        self.main_base = 0
        self.supp = 0
        self.details: dict[str, int] = {}

    def freeze(self) -> PersonFees:
        return PersonFees(
            main=self.main,
            supp=self.supp,
            total=self.main + self.supp,
            supp_details=dict(self.details),
        )


def priced_persons(state: QuoteState, catalog: ProductCatalog = DEFAULT_CATALOG) -> list[Person]:
    """Persons whose riders are priced.

    Packages that do not allow supplementary insured only price the main person.
    """
    main_config = catalog.get(state.main_product.key)
    if main_config is not None and main_config.package is not None:
        if main_config.package.no_supplementary_insured:
            return [p for p in state.persons if p.is_main]
    return list(state.persons)


def aggregate_accumulators(persons: list[Person], catalog: ProductCatalog = DEFAULT_CATALOG) -> dict[str, int]:
    """Sum rider sum-insured across persons for every declared accumulator key."""
    accumulators: dict[str, int] = {}
    for person in persons:
        for product_id, selection in person.supplements.items():
            config = catalog.get(product_id)
            if config is None:
                continue
            for key in config.calculation.accumulator_keys:
                accumulators[key] = accumulators.get(key, 0) + max(0, selection.stbh)
    return accumulators


def resolve_waiver_target(state: QuoteState, other_person_id: str = DEFAULT_WAIVER_OTHER_ID) -> Optional[Person]:
    """The person whose premiums a waiver insures.

    The "other" payer comes fully built from the collaborator; it is never
    looked up among the insured persons.
    """
    target_id = state.waiver.target_person_id
    if not target_id:
        return None
    if target_id == other_person_id:
        return state.waiver.other_person
    return state.person(target_id)


def waiver_stbh_base(
    terms: tuple[StbhTerm, ...],
    snapshot: dict[str, FeeSnapshot],
    target_person_id: str,
) -> int:
    """Premium base for a waiver, summed from its configured terms (clamped >= 0)."""
    base = 0
    for term in terms:
        if term == StbhTerm.MAIN_BASE:
            base += sum(s.main_base for s in snapshot.values())
        elif term == StbhTerm.RIDERS_ALL:
            base += sum(s.supp for s in snapshot.values())
        elif term == StbhTerm.RIDERS_EXCEPT_TARGET:
            target = snapshot.get(target_person_id)
            if target is not None:
                base -= target.supp
    return max(0, base)


def calculate_all(
    state: QuoteState,
    catalog: ProductCatalog = DEFAULT_CATALOG,
    tables: RateTables = DEFAULT_RATE_TABLES,
    waiver_other_person_id: str = DEFAULT_WAIVER_OTHER_ID,
) -> FeeBreakdown:
    """Compute the full fee breakdown for a quotation state."""
    tallies: dict[str, _PersonTally] = {p.id: _PersonTally() for p in state.persons}

    # Phase 1: base main premium
    base_main = 0
    extra = 0
    main_person = state.main_person
    main_config = catalog.get(state.main_product.key)
    if main_person is None or main_config is None:
        logger.debug(
            "Main premium is 0: main person %s, main product %r",
            "found" if main_person else "missing",
            state.main_product.key,
        )
    else:
        base_main = calculate(
            main_config.calculation.key,
            MainPremiumInput(selection=state.main_product, customer=main_person, config=main_config),
            tables,
            catalog,
        )
        extra = max(0, state.main_product.extra_premium)
        tallies[main_person.id].main = base_main + extra
        tallies[main_person.id].main_base = base_main

    # Phase 2: pre-aggregation
    persons = priced_persons(state, catalog)
    accumulators = aggregate_accumulators(persons, catalog)

    # Phase 3: pass 1, direct riders
    total_supp = 0
    for person in persons:
        tally = tallies[person.id]
        for product_id in person.supplements:
            config = catalog.get(product_id)
            if config is None or config.calculation.pass_ != 1:
                continue
            fee = calculate(
                config.calculation.key,
                RiderInput(
                    customer=person,
                    config=config,
                    main_premium=base_main,
                    all_persons=state.persons,
                    accumulators=dict(accumulators),
                ),
                tables,
                catalog,
            )
            tally.details[product_id] = fee
            tally.supp += fee
            total_supp += fee

    # Phase 4: snapshot before waivers
    snapshot = {
        pid: FeeSnapshot(
            main=t.main,
            main_base=t.main_base,
            supp=t.supp,
            total=t.main + t.supp,
        )
        for pid, t in tallies.items()
    }

    # Phase 5: pass 2, waivers
    waiver_details: dict[str, WaiverDetail] = {}
    target = resolve_waiver_target(state, waiver_other_person_id)
    if target is not None:
        for waiver_id in state.waiver.enabled_products:
            config = catalog.get(waiver_id)
            if config is None or config.calculation.pass_ != 2:
                continue
            stbh_base = waiver_stbh_base(config.calculation.stbh_terms, snapshot, target.id)
            if stbh_base <= 0:
                continue
            premium = calculate(
                config.calculation.key,
                WaiverInput(target=target, stbh_base=stbh_base, config=config),
                tables,
                catalog,
            )
            if premium <= 0:
                continue
            waiver_details[waiver_id] = WaiverDetail(
                premium=premium,
                target_person_id=target.id,
                target_name=target.name,
                stbh_base=stbh_base,
            )
            total_supp += premium
            tally = tallies.setdefault(target.id, _PersonTally())
            tally.supp += premium
            tally.details[waiver_id] = premium

    # Phase 6: totals
    total_main = base_main + extra
    return FeeBreakdown(
        base_main=base_main,
        extra=extra,
        total_main=total_main,
        total_supp=total_supp,
        total=total_main + total_supp,
        by_person={pid: t.freeze() for pid, t in tallies.items()},
        waiver_details=waiver_details,
        accumulators=accumulators,
    )
