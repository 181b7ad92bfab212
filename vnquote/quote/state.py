"""Quotation input state.

The collaborator (a form, the CLI) builds one QuoteState per calculation. It is
immutable; any input change produces a new state.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from vnquote.core.errors import InvalidQuoteState
from vnquote.core.types import (
    Gender,
    MainProductSelection,
    PaymentFrequency,
    Person,
    RiderSelection,
)
from vnquote.quote.age import calculate_age, days_from_birth


@dataclass(frozen=True)
class WaiverSelection:
    """Waiver-of-premium choice.

    ``target_person_id`` names one of the insured persons, or the configured
    "other" id, in which case ``other_person`` carries the payer the
    collaborator built from its side form.
    """

    target_person_id: Optional[str] = None
    other_person: Optional[Person] = None
    enabled_products: tuple[str, ...] = ("mdp3",)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "target_person_id": self.target_person_id,
            "other_person": self.other_person.to_dict() if self.other_person else None,
            "enabled_products": list(self.enabled_products),
        }


@dataclass(frozen=True)
class QuoteState:
    """Everything a quotation is computed from."""

    persons: tuple[Person, ...] = ()
    main_product: MainProductSelection = field(default_factory=MainProductSelection)
    waiver: WaiverSelection = field(default_factory=WaiverSelection)
    payment_frequency: PaymentFrequency = PaymentFrequency.YEAR
    target_age: Optional[int] = None
    custom_interest_rate: Optional[float] = None

    @property
    def main_person(self) -> Optional[Person]:
        """The main insured (first person flagged is_main)."""
        for person in self.persons:
            if person.is_main:
                return person
        return None

    def person(self, person_id: Optional[str]) -> Optional[Person]:
        """Find an insured person by id."""
        for person in self.persons:
            if person.id == person_id:
                return person
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "persons": [p.to_dict() for p in self.persons],
            "main_product": self.main_product.to_dict(),
            "waiver": self.waiver.to_dict(),
            "payment_frequency": self.payment_frequency.value,
            "target_age": self.target_age,
            "custom_interest_rate": self.custom_interest_rate,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], reference_date: date) -> "QuoteState":
        """Create from dictionary.

        Raises:
            InvalidQuoteState: If the structure is malformed.
        """
        if not isinstance(data, dict):
            raise InvalidQuoteState("Quote state must be a mapping")

        raw_persons = data.get("persons", [])
        if not isinstance(raw_persons, list):
            raise InvalidQuoteState("persons must be a list", "persons")
        persons = tuple(person_from_dict(p, reference_date) for p in raw_persons)

        main_data = data.get("main_product") or {}
        if not isinstance(main_data, dict):
            raise InvalidQuoteState("main_product must be a mapping", "main_product")

        waiver_data = data.get("waiver") or {}
        if not isinstance(waiver_data, dict):
            raise InvalidQuoteState("waiver must be a mapping", "waiver")
        other = waiver_data.get("other_person")

        return cls(
            persons=persons,
            main_product=MainProductSelection(
                key=main_data.get("key"),
                stbh=_to_int(main_data.get("stbh")),
                premium=_to_int(main_data.get("premium")),
                payment_term=_to_optional_int(main_data.get("payment_term")),
                extra_premium=_to_int(main_data.get("extra_premium")),
            ),
            waiver=WaiverSelection(
                target_person_id=waiver_data.get("target_person_id"),
                other_person=person_from_dict(other, reference_date) if other else None,
                enabled_products=_to_product_ids(waiver_data.get("enabled_products", ("mdp3",))),
            ),
            payment_frequency=PaymentFrequency.parse(data.get("payment_frequency")),
            target_age=_to_optional_int(data.get("target_age")),
            custom_interest_rate=_to_optional_float(data.get("custom_interest_rate")),
        )


def person_from_dict(data: dict[str, Any], reference_date: date) -> Person:
    """Build a Person, deriving age from the date of birth when one is given.

    A missing or invalid date of birth leaves the explicit ``age`` (default 0);
    the illustration builder re-checks the main person's date of birth.

    Raises:
        InvalidQuoteState: If the record is not a mapping or lacks an id.
    """
    if not isinstance(data, dict):
        raise InvalidQuoteState("Person record must be a mapping", "persons")
    person_id = data.get("id")
    if not person_id:
        raise InvalidQuoteState("Person record is missing an id", "persons.id")

    dob = data.get("dob")
    age = calculate_age(dob, reference_date)
    if age is None:
        age = max(0, _to_int(data.get("age")))

    supplements_data = data.get("supplements") or {}
    if not isinstance(supplements_data, dict):
        raise InvalidQuoteState("supplements must be a mapping", "persons.supplements")

    return Person(
        id=str(person_id),
        name=data.get("name", ""),
        dob=dob,
        age=age,
        gender=Gender.parse(data.get("gender")),
        risk_group=_to_int(data.get("risk_group")),
        is_main=bool(data.get("is_main", False)),
        days_from_birth=days_from_birth(dob, reference_date),
        supplements={
            str(product_id): _rider_from_dict(values)
            for product_id, values in supplements_data.items()
            if values
        },
    )


def _rider_from_dict(data: Any) -> RiderSelection:
    if not isinstance(data, dict):
        return RiderSelection()
    return RiderSelection(
        stbh=_to_int(data.get("stbh")),
        program=data.get("program"),
        scope=data.get("scope"),
        outpatient=bool(data.get("outpatient", False)),
        dental=bool(data.get("dental", False)),
    )


def _to_int(value: Any) -> int:
    """Lenient integer parse: '1.000.000', 1e6 and None all work; junk is 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    sign = -1 if text.startswith("-") else 1
    digits = "".join(ch for ch in text if ch.isdigit())
    return sign * int(digits) if digits else 0


def _to_product_ids(value: Any) -> tuple[str, ...]:
    """Product ids from a list, or from a single id given as a string."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if not isinstance(value, (list, tuple)):
        raise InvalidQuoteState("waiver.enabled_products must be a list", "waiver.enabled_products")
    return tuple(str(product_id) for product_id in value)


def _to_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return _to_int(value)


def _to_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
