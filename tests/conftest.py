"""Pytest fixtures for vnquote tests."""

from datetime import date
from typing import Optional

import pytest

from vnquote.core.config import QuoteConfig
from vnquote.core.types import Gender, MainProductSelection, Person, RiderSelection
from vnquote.quote.age import calculate_age, days_from_birth
from vnquote.quote.catalog import ProductCatalog
from vnquote.quote.rates import RateTables
from vnquote.quote.state import QuoteState, WaiverSelection

REFERENCE_DATE = date(2025, 1, 1)


def make_person(
    person_id: str = "p1",
    dob: str = "15/06/1994",
    gender: Gender = Gender.MALE,
    risk_group: int = 1,
    is_main: bool = False,
    supplements: Optional[dict] = None,
    name: str = "",
) -> Person:
    """Build a person with age resolved against the test reference date."""
    return Person(
        id=person_id,
        name=name or person_id,
        dob=dob,
        age=calculate_age(dob, REFERENCE_DATE) or 0,
        gender=gender,
        risk_group=risk_group,
        is_main=is_main,
        days_from_birth=days_from_birth(dob, REFERENCE_DATE),
        supplements=supplements or {},
    )


@pytest.fixture
def reference_date() -> date:
    """Fixed reference date for reproducible ages and admin fees."""
    return REFERENCE_DATE


@pytest.fixture
def quote_config(reference_date: date) -> QuoteConfig:
    """Create a default configuration pinned to the reference date."""
    return QuoteConfig(reference_date=reference_date)


@pytest.fixture
def catalog() -> ProductCatalog:
    """Create a product catalog."""
    return ProductCatalog()


@pytest.fixture
def rate_tables() -> RateTables:
    """Create the default rate tables."""
    return RateTables()


@pytest.fixture
def main_person() -> Person:
    """Male, age 30, with a basic health rider and a critical illness rider."""
    return make_person(
        "p1",
        "15/06/1994",
        is_main=True,
        name="Nguyen Van A",
        supplements={
            "health_scl": RiderSelection(program="co_ban", scope="main_vn"),
            "bhn": RiderSelection(stbh=200_000_000),
        },
    )


@pytest.fixture
def spouse() -> Person:
    """Female, age 32, with a critical illness rider."""
    return make_person(
        "p2",
        "01/03/1992",
        gender=Gender.FEMALE,
        name="Tran Thi B",
        supplements={"bhn": RiderSelection(stbh=200_000_000)},
    )


@pytest.fixture
def pul_state(main_person: Person, spouse: Person) -> QuoteState:
    """PUL quotation for two persons, waiver on the spouse."""
    return QuoteState(
        persons=(main_person, spouse),
        main_product=MainProductSelection(
            key="PUL_TRON_DOI",
            stbh=1_000_000_000,
            payment_term=20,
        ),
        waiver=WaiverSelection(target_person_id="p2"),
        target_age=60,
    )


@pytest.fixture
def package_state() -> QuoteState:
    """Package quotation for one male, age 30."""
    person = make_person(
        "p1",
        "15/06/1994",
        is_main=True,
        supplements={"health_scl": RiderSelection(program="co_ban", scope="main_vn")},
    )
    return QuoteState(
        persons=(person,),
        main_product=MainProductSelection(key="TRON_TAM_AN"),
    )


@pytest.fixture
def state_data() -> dict:
    """Serialized PUL quotation as the CLI reads it."""
    return {
        "persons": [
            {
                "id": "p1",
                "name": "Nguyen Van A",
                "dob": "15/06/1994",
                "gender": "Nam",
                "risk_group": 1,
                "is_main": True,
                "supplements": {
                    "health_scl": {"program": "co_ban", "scope": "main_vn"},
                    "bhn": {"stbh": "200.000.000"},
                },
            },
            {
                "id": "p2",
                "name": "Tran Thi B",
                "dob": "01/03/1992",
                "gender": "Nữ",
                "risk_group": 1,
                "supplements": {"bhn": {"stbh": 200000000}},
            },
        ],
        "main_product": {"key": "PUL_TRON_DOI", "stbh": 1000000000, "payment_term": 20},
        "waiver": {"target_person_id": "p2"},
        "payment_frequency": "year",
        "target_age": 60,
    }


@pytest.fixture
def person_factory():
    """Factory for persons with ages resolved against the reference date."""
    return make_person
