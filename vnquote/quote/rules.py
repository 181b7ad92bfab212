"""Declarative eligibility rules.

Product configs carry rule sets for eligibility, visibility, mandatory and
disabled flags. A rule set is ``None``, a bare ``bool``, a single rule, or a
sequence of rules.

AND and OR treat an empty rule set differently: under AND no rules means
"eligible", under OR no rules means "never applies" (not mandatory, not
disabled). Rule kinds this module does not recognise pass.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from vnquote.core.types import Gender, Person, ProductGroup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgeRule:
    """Age within [min_age, max_age]. With ``gender`` set, only applies to that gender."""

    min_age: Optional[int] = None
    max_age: Optional[int] = None
    gender: Optional[Gender] = None


@dataclass(frozen=True)
class GenderRule:
    value: Gender


@dataclass(frozen=True)
class RiskGroupRule:
    """Excludes listed risk groups; ``required`` rejects unclassified (0)."""

    exclude: tuple[int, ...] = ()
    required: bool = False


@dataclass(frozen=True)
class MainProductGroupRule:
    """Selected main product key starts with ``value``."""

    value: str


@dataclass(frozen=True)
class IsMainRule:
    pass


@dataclass(frozen=True)
class IsNotMainRule:
    pass


@dataclass(frozen=True)
class MandatoryInPackageRule:
    """Rider is in the selected package's fixed rider list."""

    product_id: str


@dataclass(frozen=True)
class DisabledByPackageRule:
    """A package is selected and the rider is not one of its fixed riders."""

    product_id: str


@dataclass(frozen=True)
class DaysFromBirthRule:
    min_days: int


@dataclass(frozen=True)
class UnknownRule:
    """A rule kind loaded from data that has no evaluator. Always passes."""

    kind: str


Rule = Union[
    AgeRule,
    GenderRule,
    RiskGroupRule,
    MainProductGroupRule,
    IsMainRule,
    IsNotMainRule,
    MandatoryInPackageRule,
    DisabledByPackageRule,
    DaysFromBirthRule,
    UnknownRule,
]

RuleSet = Union[None, bool, Rule, Sequence[Union[bool, Rule]]]


@dataclass(frozen=True)
class RuleContext:
    """Immutable inputs a rule can inspect.

    ``package_riders`` is the fixed rider list of the selected main product when
    that product is a package, otherwise None.
    """

    customer: Optional[Person] = None
    main_product_key: Optional[str] = None
    main_product_group: Optional[ProductGroup] = None
    package_riders: Optional[frozenset[str]] = None

    @property
    def is_package(self) -> bool:
        return self.main_product_group == ProductGroup.PACKAGE and self.package_riders is not None


def _as_list(rules: RuleSet) -> list:
    if isinstance(rules, (list, tuple)):
        return list(rules)
    return [rules]


def evaluate_and(rules: RuleSet, context: RuleContext) -> bool:
    """True when every rule passes. An empty or missing rule set is True."""
    if rules is None:
        return True
    if isinstance(rules, bool):
        return rules
    return all(evaluate_single(rule, context) for rule in _as_list(rules))


def evaluate_or(rules: RuleSet, context: RuleContext) -> bool:
    """True when at least one rule passes. An empty or missing rule set is False."""
    if rules is None:
        return False
    if isinstance(rules, bool):
        return rules
    return any(evaluate_single(rule, context) for rule in _as_list(rules))


def evaluate_single(rule: Union[bool, Rule, None], context: RuleContext) -> bool:
    """Evaluate one rule against the context."""
    if rule is None:
        return True
    if isinstance(rule, bool):
        return rule

    customer = context.customer
    if customer is None:
        return True

    if isinstance(rule, AgeRule):
        if rule.gender is not None and customer.gender != rule.gender:
            return True
        if rule.min_age is not None and customer.age < rule.min_age:
            return False
        if rule.max_age is not None and customer.age > rule.max_age:
            return False
        return True

    if isinstance(rule, GenderRule):
        return customer.gender == rule.value

    if isinstance(rule, RiskGroupRule):
        if customer.risk_group > 0 and customer.risk_group in rule.exclude:
            return False
        if rule.required and customer.risk_group == 0:
            return False
        return True

    if isinstance(rule, MainProductGroupRule):
        return bool(context.main_product_key) and context.main_product_key.startswith(rule.value)

    if isinstance(rule, IsMainRule):
        return customer.is_main

    if isinstance(rule, IsNotMainRule):
        return not customer.is_main

    if isinstance(rule, MandatoryInPackageRule):
        return context.is_package and rule.product_id in context.package_riders

    if isinstance(rule, DisabledByPackageRule):
        return context.is_package and rule.product_id not in context.package_riders

    if isinstance(rule, DaysFromBirthRule):
        # Unknown birth date cannot be checked here; age rules still apply
        if customer.days_from_birth is None:
            return True
        return customer.days_from_birth >= rule.min_days

    logger.debug("Rule kind %r has no evaluator, passing", getattr(rule, "kind", rule))
    return True


def rule_from_dict(data: Union[bool, dict[str, Any]]) -> Union[bool, Rule]:
    """Build a rule from its JSON form, e.g. ``{"type": "age", "max": 70}``.

    Unrecognised types produce an UnknownRule rather than an error.
    """
    if isinstance(data, bool):
        return data

    kind = data.get("type", "")
    if kind == "age":
        gender = data.get("gender")
        return AgeRule(
            min_age=data.get("min"),
            max_age=data.get("max"),
            gender=Gender.parse(gender) if gender else None,
        )
    if kind == "gender":
        return GenderRule(Gender.parse(data.get("value")))
    if kind == "riskGroup":
        return RiskGroupRule(
            exclude=tuple(int(g) for g in data.get("exclude", ())),
            required=bool(data.get("required", False)),
        )
    if kind == "mainProductGroup":
        return MainProductGroupRule(str(data.get("value", "")))
    if kind == "isMain":
        return IsMainRule()
    if kind == "isNotMain":
        return IsNotMainRule()
    if kind == "mandatoryInPackage":
        return MandatoryInPackageRule(str(data.get("productKey", "")))
    if kind == "disabledByPackage":
        return DisabledByPackageRule(str(data.get("productKey", "")))
    if kind == "daysFromBirth":
        return DaysFromBirthRule(int(data.get("min", 0)))
    return UnknownRule(kind)


def rules_from_list(items: Optional[Sequence[Union[bool, dict[str, Any]]]]) -> Optional[list]:
    """Build a rule set from a list of JSON rules (None stays None)."""
    if items is None:
        return None
    return [rule_from_dict(item) for item in items]
