"""Payment term and illustration end-age resolution.

Target age is the last attained age shown in an illustration (inclusive). The
illustration therefore covers ``target_age - start_age + 1`` policy years and
ends at ``end_age = target_age + 1``.
"""

from dataclasses import dataclass
from typing import Optional

from vnquote.core.config import LimitsConfig
from vnquote.core.types import MainProductSelection, Person
from vnquote.quote.catalog import ProductConfig, TermMode


@dataclass(frozen=True)
class TermResolution:
    """Resolved payment term and target age, with the bounds shown to the user."""

    mode: TermMode
    payment_term: Optional[int]
    target_age: Optional[int]
    target_age_editable: bool
    min_term: Optional[int] = None
    max_term: Optional[int] = None
    min_target_age: Optional[int] = None
    max_target_age: Optional[int] = None
    hint: str = ""

    @property
    def end_age(self) -> Optional[int]:
        """Age at which the illustration stops (exclusive)."""
        return None if self.target_age is None else self.target_age + 1

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "payment_term": self.payment_term,
            "target_age": self.target_age,
            "target_age_editable": self.target_age_editable,
            "min_term": self.min_term,
            "max_term": self.max_term,
            "min_target_age": self.min_target_age,
            "max_target_age": self.max_target_age,
            "hint": self.hint,
        }


def resolve_term(
    config: ProductConfig,
    selection: MainProductSelection,
    main_person: Person,
    requested_target_age: Optional[int] = None,
    limits: Optional[LimitsConfig] = None,
) -> TermResolution:
    """Resolve payment term and target age for a main product.

    Args:
        config: Main product config.
        selection: Entered main product values (payment term for user-input and
            selected-term products).
        main_person: Main insured; ``age`` is the issue age.
        requested_target_age: User-entered target age, read by investment-linked
            products only.
        limits: Business limits (max target age, max coverage age).

    Returns:
        TermResolution. Unresolvable values are None, never guessed.
    """
    limits = limits or LimitsConfig()
    age = main_person.age
    term_config = config.term
    mode = term_config.mode if term_config else TermMode.USER_INPUT

    if mode == TermMode.FIXED_TERM:
        term = term_config.fixed_term
        if term is None and config.package is not None:
            term = config.package.fixed_payment_term
        return TermResolution(
            mode=mode,
            payment_term=term,
            target_age=age + term - 1 if term else None,
            target_age_editable=False,
            min_term=term,
            max_term=term,
            hint="End age follows the fixed contract term.",
        )

    if mode == TermMode.SELECTED_TERM:
        options = term_config.options_for_age(age)
        term = selection.payment_term
        return TermResolution(
            mode=mode,
            payment_term=term,
            target_age=age + term - 1 if term else None,
            target_age_editable=False,
            min_term=min(options) if options else None,
            max_term=max(options) if options else None,
            hint="End age follows the selected payment term.",
        )

    # Investment-linked: both values come from the user
    term = selection.payment_term
    min_term = term_config.min_term if term_config else 1
    max_term = max(0, limits.max_coverage_age - age)
    min_target = age + term - 1 if term else age
    if term:
        hint = f"Valid range: {min_target} - {limits.max_target_age}."
    else:
        hint = "Enter the payment term to determine the illustration age."
    return TermResolution(
        mode=mode,
        payment_term=term,
        target_age=requested_target_age,
        target_age_editable=True,
        min_term=min_term,
        max_term=max_term,
        min_target_age=min_target,
        max_target_age=limits.max_target_age,
        hint=hint,
    )


def waiver_term(holder_age: int, main_age: int, target_age: int, max_age: int = 60) -> int:
    """Years a waiver runs: until the holder passes ``max_age`` or the illustration ends."""
    return max(0, min(max_age - holder_age + 1, target_age - main_age + 1))
