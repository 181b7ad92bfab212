"""vnquote - premium quotation engine for Vietnamese life and health insurance.

Prices a main product with its riders and waivers for a household of insured
persons, builds the year-by-year premium illustration and projects account
values for investment-linked products.

Features:
- Declarative product catalog with rule-based eligibility
- Registry of pricing formulas keyed by calculation type
- Two-pass fee aggregation (direct riders, then waivers)
- Monthly account-value projection under three interest scenarios

Usage:
    from vnquote import QuoteConfig, QuoteState, calculate_all, build_illustration

    config = QuoteConfig.from_env()
    state = QuoteState.from_dict(data, config.reference_date)
    fees = calculate_all(state)
    illustration = build_illustration(state, fees, config=config)
"""

from vnquote.core.config import LimitsConfig, QuoteConfig
from vnquote.core.errors import (
    IllustrationError,
    InvalidDateOfBirth,
    InvalidIllustrationEnd,
    InvalidQuoteState,
    UnknownMainProduct,
    VnQuoteError,
)
from vnquote.core.types import Gender, MainProductSelection, PaymentFrequency, Person, RiderSelection
from vnquote.quote import (
    DEFAULT_CATALOG,
    FeeBreakdown,
    Illustration,
    ProductCatalog,
    ProjectionResult,
    QuoteState,
    Scenario,
    ValidationIssue,
    WaiverSelection,
    build_illustration,
    calculate,
    calculate_all,
    project_account_value,
    project_quote,
    resolve_term,
    validate_quote,
)

__version__ = "0.1.0"

__all__ = [
    # Config
    "LimitsConfig",
    "QuoteConfig",
    # Types
    "Gender",
    "MainProductSelection",
    "PaymentFrequency",
    "Person",
    "RiderSelection",
    "QuoteState",
    "WaiverSelection",
    # Catalog
    "DEFAULT_CATALOG",
    "ProductCatalog",
    # Operations
    "calculate",
    "calculate_all",
    "resolve_term",
    "build_illustration",
    "project_account_value",
    "project_quote",
    "validate_quote",
    # Results
    "FeeBreakdown",
    "Illustration",
    "ProjectionResult",
    "Scenario",
    "ValidationIssue",
    # Errors
    "VnQuoteError",
    "IllustrationError",
    "InvalidDateOfBirth",
    "InvalidIllustrationEnd",
    "InvalidQuoteState",
    "UnknownMainProduct",
]
