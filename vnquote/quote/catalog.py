"""Product catalog.

Defines every main product, rider and waiver the engine can price, with the
rules that govern eligibility and the calculation descriptor that selects its
pricing formula.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from vnquote.core.types import Gender, Person, ProductGroup, ProductKind
from vnquote.quote.rules import (
    AgeRule,
    DaysFromBirthRule,
    DisabledByPackageRule,
    MandatoryInPackageRule,
    RiskGroupRule,
    RuleContext,
    RuleSet,
    evaluate_and,
    evaluate_or,
)

logger = logging.getLogger(__name__)


class CalcKey(str, Enum):
    """Pricing formulas available in the calculation registry."""

    RATE_TABLE_MAIN = "rate_table_main"
    DIRECT_PREMIUM_MAIN = "direct_premium_main"
    TERM_BANDED_MAIN = "term_banded_main"
    PACKAGE_PROXY = "package_proxy"
    HEALTH_RIDER = "health_rider"
    CRITICAL_ILLNESS_RIDER = "critical_illness_rider"
    ACCIDENT_RIDER = "accident_rider"
    HOSPITAL_SUPPORT_RIDER = "hospital_support_rider"
    WAIVER = "waiver"
    ACCOUNT_VALUE_PROJECTION = "account_value_projection"


class StbhTerm(str, Enum):
    """Terms summed into a waiver's premium base."""

    MAIN_BASE = "mainBase"
    RIDERS_ALL = "riders:ALL"
    RIDERS_EXCEPT_TARGET = "riders:EXCEPT_TARGET"


class TermMode(str, Enum):
    """How payment term and illustration end age are resolved."""

    USER_INPUT = "user_input"  # Investment-linked: both entered by the user
    SELECTED_TERM = "selected_term"  # Choice among fixed term options
    FIXED_TERM = "fixed_term"  # Term fixed by the product


class BonusType(str, Enum):
    """Persistency bonus style for account-value projection."""

    MUL_PERIODIC = "mul_periodic"
    STANDARD_PUL = "standard_pul"


# Accumulator names shared between the catalog and the engine
TOTAL_HOSPITAL_SUPPORT_STBH = "total_hospital_support_stbh"


@dataclass(frozen=True)
class CalculationSpec:
    """Which formula prices a product and in which engine pass."""

    key: CalcKey
    pass_: Optional[int] = None  # 1 = direct riders, 2 = waivers, None = main product
    params: dict[str, Any] = field(default_factory=dict)
    accumulator_keys: tuple[str, ...] = ()
    stbh_terms: tuple[StbhTerm, ...] = ()


@dataclass(frozen=True)
class TermConfig:
    """Payment term settings for a main product.

    ``option_max_age`` maps each selectable term to the oldest issue age allowed.
    """

    mode: TermMode
    min_term: int = 1
    default_term: Optional[int] = None
    fixed_term: Optional[int] = None
    option_max_age: dict[int, int] = field(default_factory=dict)

    def options_for_age(self, age: int) -> list[int]:
        """Selectable terms for an issue age, longest first."""
        return sorted(
            (term for term, max_age in self.option_max_age.items() if age <= max_age),
            reverse=True,
        )


@dataclass(frozen=True)
class PackageConfig:
    """Bundle priced through an underlying main product with fixed inputs."""

    underlying_product: str
    fixed_stbh: int
    fixed_payment_term: int
    mandatory_riders: tuple[str, ...] = ()
    no_supplementary_insured: bool = False


@dataclass(frozen=True)
class SumInsuredStep:
    """Sum insured grows by ``rate`` of the initial amount each year from year 2."""

    rate: float
    max_steps: int


@dataclass(frozen=True)
class AccountValueConfig:
    """Projection settings for an investment-linked main product."""

    cost_of_insurance_ref: str
    initial_fee_ref: str
    include_extra_premium: bool
    bonus_type: BonusType
    use_guaranteed_interest: bool = True
    sum_insured_step: Optional[SumInsuredStep] = None


@dataclass(frozen=True)
class ProductConfig:
    """A catalog entry."""

    id: str
    name: str
    kind: ProductKind
    calculation: CalculationSpec
    group: Optional[ProductGroup] = None
    eligibility: RuleSet = None
    mandatory: RuleSet = None
    disabled: RuleSet = None
    renewal_max_age: Optional[int] = None
    stbh_min: Optional[int] = None
    stbh_max: Optional[int] = None
    premium_min: Optional[int] = None
    term: Optional[TermConfig] = None
    package: Optional[PackageConfig] = None
    account_value: Optional[AccountValueConfig] = None
    stbh_by_program: dict[str, int] = field(default_factory=dict)
    # (minimum main premium, programs allowed from that premium)
    program_premium_thresholds: tuple[tuple[int, tuple[str, ...]], ...] = ()

    @property
    def is_main(self) -> bool:
        return self.kind == ProductKind.MAIN

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "group": self.group.value if self.group else None,
            "calculation": self.calculation.key.value,
            "pass": self.calculation.pass_,
            "renewal_max_age": self.renewal_max_age,
            "stbh_min": self.stbh_min,
            "stbh_max": self.stbh_max,
            "premium_min": self.premium_min,
            "term_mode": self.term.mode.value if self.term else None,
            "investment_linked": self.account_value is not None,
        }


@dataclass(frozen=True)
class RiderStatus:
    """Rule evaluation result for one rider and one person."""

    eligible: bool
    mandatory: bool
    disabled: bool

    @property
    def selectable(self) -> bool:
        return self.eligible and not self.disabled


# Health rider programs, cheapest first
HEALTH_PROGRAMS = ("co_ban", "nang_cao", "toan_dien", "hoan_hao")
HEALTH_SCOPES = ("main_vn", "main_global")


def _adult_main_rules(max_age: int) -> list:
    return [DaysFromBirthRule(30), AgeRule(max_age=max_age)]


class ProductCatalog:
    """Catalog of all products, keyed by product id.

    Read-only after construction.
    """

    def __init__(self, products: Optional[list[ProductConfig]] = None):
        self._products: dict[str, ProductConfig] = {}
        if products is None:
            self._initialize_products()
        else:
            for product in products:
                self._products[product.id] = product

    def _initialize_products(self) -> None:
        """Initialize the standard product line."""
        pul_variants = (
            ("PUL_TRON_DOI", "Khoẻ trọn vẹn - Trọn đời", 4, 20),
            ("PUL_15NAM", "Khoẻ trọn vẹn - 15 năm", 15, 15),
            ("PUL_5NAM", "Khoẻ trọn vẹn - 5 năm", 5, 5),
        )
        for product_id, name, min_term, default_term in pul_variants:
            self._add(
                ProductConfig(
                    id=product_id,
                    name=name,
                    kind=ProductKind.MAIN,
                    group=ProductGroup.PUL,
                    eligibility=_adult_main_rules(70),
                    stbh_min=100_000_000,
                    premium_min=5_000_000,
                    calculation=CalculationSpec(
                        CalcKey.RATE_TABLE_MAIN, params={"rate_table": product_id}
                    ),
                    term=TermConfig(TermMode.USER_INPUT, min_term=min_term, default_term=default_term),
                    account_value=AccountValueConfig(
                        cost_of_insurance_ref="pul",
                        initial_fee_ref=product_id,
                        include_extra_premium=True,
                        bonus_type=BonusType.STANDARD_PUL,
                    ),
                )
            )

        mul_variants = (
            ("KHOE_BINH_AN", "MUL - Khoẻ Bình An", SumInsuredStep(rate=0.05, max_steps=10)),
            ("VUNG_TUONG_LAI", "MUL - Vững Tương Lai", None),
        )
        for product_id, name, step in mul_variants:
            self._add(
                ProductConfig(
                    id=product_id,
                    name=name,
                    kind=ProductKind.MAIN,
                    group=ProductGroup.MUL,
                    eligibility=_adult_main_rules(70),
                    stbh_min=100_000_000,
                    premium_min=5_000_000,
                    calculation=CalculationSpec(CalcKey.DIRECT_PREMIUM_MAIN),
                    term=TermConfig(TermMode.USER_INPUT, min_term=4, default_term=20),
                    account_value=AccountValueConfig(
                        cost_of_insurance_ref="mul",
                        initial_fee_ref=product_id,
                        include_extra_premium=False,
                        bonus_type=BonusType.MUL_PERIODIC,
                        sum_insured_step=step,
                    ),
                )
            )

        self._add(
            ProductConfig(
                id="TRON_TAM_AN",
                name="Trọn tâm an",
                kind=ProductKind.MAIN,
                group=ProductGroup.PACKAGE,
                eligibility=[
                    AgeRule(12, 60, Gender.MALE),
                    AgeRule(28, 60, Gender.FEMALE),
                    RiskGroupRule(exclude=(4,), required=True),
                ],
                calculation=CalculationSpec(CalcKey.PACKAGE_PROXY),
                term=TermConfig(TermMode.FIXED_TERM, fixed_term=10),
                package=PackageConfig(
                    underlying_product="AN_BINH_UU_VIET",
                    fixed_stbh=100_000_000,
                    fixed_payment_term=10,
                    mandatory_riders=("health_scl",),
                    no_supplementary_insured=True,
                ),
            )
        )

        self._add(
            ProductConfig(
                id="AN_BINH_UU_VIET",
                name="An Bình Ưu Việt",
                kind=ProductKind.MAIN,
                group=ProductGroup.TRADITIONAL,
                eligibility=[AgeRule(12, 65, Gender.MALE), AgeRule(28, 65, Gender.FEMALE)],
                stbh_min=100_000_000,
                premium_min=5_000_000,
                calculation=CalculationSpec(CalcKey.TERM_BANDED_MAIN),
                term=TermConfig(TermMode.SELECTED_TERM, option_max_age={15: 55, 10: 60, 5: 65}),
            )
        )

        # Riders
        self._add(
            ProductConfig(
                id="health_scl",
                name="Sức khỏe Bùng Gia Lực",
                kind=ProductKind.RIDER,
                eligibility=[
                    DaysFromBirthRule(30),
                    AgeRule(max_age=65),
                    RiskGroupRule(exclude=(4,), required=True),
                ],
                mandatory=[MandatoryInPackageRule("health_scl")],
                renewal_max_age=74,
                calculation=CalculationSpec(CalcKey.HEALTH_RIDER, pass_=1),
                stbh_by_program={
                    "co_ban": 100_000_000,
                    "nang_cao": 250_000_000,
                    "toan_dien": 500_000_000,
                    "hoan_hao": 1_000_000_000,
                },
                program_premium_thresholds=(
                    (5_000_000, ("co_ban", "nang_cao")),
                    (10_000_000, ("co_ban", "nang_cao", "toan_dien")),
                    (15_000_000, HEALTH_PROGRAMS),
                ),
            )
        )
        self._add(
            ProductConfig(
                id="bhn",
                name="Bệnh Hiểm Nghèo 2.0",
                kind=ProductKind.RIDER,
                eligibility=[DaysFromBirthRule(30), AgeRule(max_age=70)],
                disabled=[DisabledByPackageRule("bhn")],
                renewal_max_age=85,
                stbh_min=200_000_000,
                stbh_max=5_000_000_000,
                calculation=CalculationSpec(CalcKey.CRITICAL_ILLNESS_RIDER, pass_=1),
            )
        )
        self._add(
            ProductConfig(
                id="accident",
                name="Bảo hiểm Tai nạn",
                kind=ProductKind.RIDER,
                eligibility=[
                    DaysFromBirthRule(30),
                    AgeRule(max_age=64),
                    RiskGroupRule(required=True),
                ],
                disabled=[DisabledByPackageRule("accident")],
                renewal_max_age=65,
                stbh_min=10_000_000,
                stbh_max=8_000_000_000,
                calculation=CalculationSpec(CalcKey.ACCIDENT_RIDER, pass_=1),
            )
        )
        self._add(
            ProductConfig(
                id="hospital_support",
                name="Hỗ trợ chi phí nằm viện",
                kind=ProductKind.RIDER,
                eligibility=[DaysFromBirthRule(30), AgeRule(max_age=55)],
                disabled=[DisabledByPackageRule("hospital_support")],
                renewal_max_age=59,
                calculation=CalculationSpec(
                    CalcKey.HOSPITAL_SUPPORT_RIDER,
                    pass_=1,
                    accumulator_keys=(TOTAL_HOSPITAL_SUPPORT_STBH,),
                ),
            )
        )

        # Waivers
        self._add(
            ProductConfig(
                id="mdp3",
                name="Miễn đóng phí 3.0",
                kind=ProductKind.WAIVER,
                eligibility=[AgeRule(18, 60), RiskGroupRule(required=True)],
                renewal_max_age=60,
                calculation=CalculationSpec(
                    CalcKey.WAIVER,
                    pass_=2,
                    stbh_terms=(
                        StbhTerm.MAIN_BASE,
                        StbhTerm.RIDERS_ALL,
                        StbhTerm.RIDERS_EXCEPT_TARGET,
                    ),
                ),
            )
        )

    def _add(self, product: ProductConfig) -> None:
        self._products[product.id] = product

    def get(self, product_id: Optional[str]) -> Optional[ProductConfig]:
        """Get a product by id (None if unknown)."""
        if not product_id:
            return None
        return self._products.get(product_id)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def products(self, kind: Optional[ProductKind] = None) -> list[ProductConfig]:
        """All products, optionally filtered by kind, in catalog order."""
        return [p for p in self._products.values() if kind is None or p.kind == kind]

    def list_products(self) -> list[dict[str, Any]]:
        """List all products as dictionaries."""
        return [p.to_dict() for p in self._products.values()]

    def rule_context(self, customer: Optional[Person], main_product_key: Optional[str]) -> RuleContext:
        """Build the rule context for a customer under the selected main product."""
        main_config = self.get(main_product_key)
        package_riders = None
        if main_config is not None and main_config.package is not None:
            package_riders = frozenset(main_config.package.mandatory_riders)
        return RuleContext(
            customer=customer,
            main_product_key=main_product_key,
            main_product_group=main_config.group if main_config else None,
            package_riders=package_riders,
        )

    def is_eligible(self, product_id: str, person: Person, main_product_key: Optional[str] = None) -> bool:
        """Check a product's eligibility rules for a person (unknown products are not eligible)."""
        product = self.get(product_id)
        if product is None:
            return False
        return evaluate_and(product.eligibility, self.rule_context(person, main_product_key))

    def eligible_main_products(self, person: Person) -> list[ProductConfig]:
        """Main products the person may be issued."""
        return [
            p
            for p in self.products(ProductKind.MAIN)
            if evaluate_and(p.eligibility, self.rule_context(person, p.id))
        ]

    def rider_status(self, product_id: str, person: Person, main_product_key: Optional[str]) -> RiderStatus:
        """Evaluate eligibility, mandatory and disabled rules for a rider."""
        product = self.get(product_id)
        if product is None:
            return RiderStatus(eligible=False, mandatory=False, disabled=True)
        context = self.rule_context(person, main_product_key)
        return RiderStatus(
            eligible=evaluate_and(product.eligibility, context),
            mandatory=evaluate_or(product.mandatory, context),
            disabled=evaluate_or(product.disabled, context),
        )


DEFAULT_CATALOG = ProductCatalog()
