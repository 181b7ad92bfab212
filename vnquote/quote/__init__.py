"""Premium quotation: rates, rules, pricing, illustration and projection."""

from vnquote.quote.catalog import (
    DEFAULT_CATALOG,
    CalcKey,
    ProductCatalog,
    ProductConfig,
    RiderStatus,
    TermMode,
)
from vnquote.quote.engine import FeeBreakdown, PersonFees, WaiverDetail, calculate_all
from vnquote.quote.formatting import format_vnd, round_down_to_1000, round_to_1000, round_vnd
from vnquote.quote.illustration import (
    FrequencyBreakdown,
    Illustration,
    IllustrationRow,
    allowed_frequencies,
    build_illustration,
    frequency_breakdown,
)
from vnquote.quote.investment import DEFAULT_INVESTMENT_DATA, InvestmentData
from vnquote.quote.projection import (
    ProjectionResult,
    Scenario,
    project_account_value,
    project_quote,
    scenario_rate,
)
from vnquote.quote.rates import DEFAULT_RATE_TABLES, RateTables
from vnquote.quote.registry import (
    MainPremiumInput,
    ProjectionInput,
    RiderInput,
    WaiverInput,
    calculate,
    calculate_projection,
    mul_premium_range,
)
from vnquote.quote.state import QuoteState, WaiverSelection
from vnquote.quote.target_age import TermResolution, resolve_term
from vnquote.quote.validation import ValidationIssue, validate_quote

__all__ = [
    # Catalog
    "DEFAULT_CATALOG",
    "CalcKey",
    "ProductCatalog",
    "ProductConfig",
    "RiderStatus",
    "TermMode",
    # Data
    "DEFAULT_RATE_TABLES",
    "RateTables",
    "DEFAULT_INVESTMENT_DATA",
    "InvestmentData",
    # State
    "QuoteState",
    "WaiverSelection",
    # Pricing
    "MainPremiumInput",
    "RiderInput",
    "WaiverInput",
    "ProjectionInput",
    "calculate",
    "calculate_projection",
    "mul_premium_range",
    "FeeBreakdown",
    "PersonFees",
    "WaiverDetail",
    "calculate_all",
    # Term and illustration
    "TermResolution",
    "resolve_term",
    "FrequencyBreakdown",
    "Illustration",
    "IllustrationRow",
    "allowed_frequencies",
    "build_illustration",
    "frequency_breakdown",
    # Projection
    "ProjectionResult",
    "Scenario",
    "project_account_value",
    "project_quote",
    "scenario_rate",
    # Validation
    "ValidationIssue",
    "validate_quote",
    # Money
    "format_vnd",
    "round_down_to_1000",
    "round_to_1000",
    "round_vnd",
]
