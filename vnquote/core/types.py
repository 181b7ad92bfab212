"""Core type definitions for vnquote."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Gender(str, Enum):
    """Insured gender, valued by the Vietnamese labels used on forms."""

    MALE = "Nam"
    FEMALE = "Nữ"

    @property
    def rate_key(self) -> str:
        """Column key used by gender-split rate tables."""
        return "nu" if self is Gender.FEMALE else "nam"

    @classmethod
    def parse(cls, value: Any) -> "Gender":
        """Parse a loose gender value. Anything that is not female is male."""
        if isinstance(value, Gender):
            return value
        text = str(value or "").strip().lower()
        if text in ("nữ", "nu", "female", "f"):
            return cls.FEMALE
        return cls.MALE


class ProductKind(str, Enum):
    """Role a product plays in a quotation."""

    MAIN = "main"
    RIDER = "rider"
    WAIVER = "waiver"


class ProductGroup(str, Enum):
    """Main product families."""

    PUL = "PUL"  # Universal life, premium from rate table
    MUL = "MUL"  # Market unit-linked, premium chosen by customer
    PACKAGE = "PACKAGE"  # Bundle priced through an underlying product
    TRADITIONAL = "TRADITIONAL"  # Endowment with 5/10/15 year terms


class PaymentFrequency(str, Enum):
    """Premium payment frequency."""

    YEAR = "year"
    HALF = "half"
    QUARTER = "quarter"

    @property
    def periods(self) -> int:
        """Number of payments per policy year."""
        return {"year": 1, "half": 2, "quarter": 4}[self.value]

    @property
    def payment_months(self) -> tuple[int, ...]:
        """Months of the policy year (1-based) in which a premium falls due."""
        return {"year": (1,), "half": (1, 7), "quarter": (1, 4, 7, 10)}[self.value]

    @classmethod
    def parse(cls, value: Any) -> "PaymentFrequency":
        """Parse a frequency value, defaulting to annual."""
        try:
            return cls(str(value or "year").strip().lower())
        except ValueError:
            return cls.YEAR


@dataclass(frozen=True)
class RiderSelection:
    """Rider-specific inputs chosen for one person.

    Only the fields relevant to a given rider are read: ``stbh`` for sum-insured
    riders, ``program``/``scope``/``outpatient``/``dental`` for the health rider.
    """

    stbh: int = 0
    program: Optional[str] = None
    scope: Optional[str] = None
    outpatient: bool = False
    dental: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "stbh": self.stbh,
            "program": self.program,
            "scope": self.scope,
            "outpatient": self.outpatient,
            "dental": self.dental,
        }


@dataclass(frozen=True)
class Person:
    """An insured person (or a synthesized waiver payer).

    ``age`` is already resolved against the reference date; ``dob`` is kept so the
    illustration builder can re-validate it.
    """

    id: str
    name: str = ""
    dob: Optional[str] = None
    age: int = 0
    gender: Gender = Gender.MALE
    risk_group: int = 0
    is_main: bool = False
    days_from_birth: Optional[int] = None
    supplements: dict[str, RiderSelection] = field(default_factory=dict)

    def rider(self, product_id: str) -> Optional[RiderSelection]:
        """Get the selection for a rider, if the person has one."""
        return self.supplements.get(product_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "dob": self.dob,
            "age": self.age,
            "gender": self.gender.value,
            "risk_group": self.risk_group,
            "is_main": self.is_main,
            "days_from_birth": self.days_from_birth,
            "supplements": {k: v.to_dict() for k, v in self.supplements.items()},
        }


@dataclass(frozen=True)
class MainProductSelection:
    """Main product key and the raw control values entered for it."""

    key: Optional[str] = None
    stbh: int = 0
    premium: int = 0  # Entered premium, used by MUL products
    payment_term: Optional[int] = None
    extra_premium: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "key": self.key,
            "stbh": self.stbh,
            "premium": self.premium,
            "payment_term": self.payment_term,
            "extra_premium": self.extra_premium,
        }
