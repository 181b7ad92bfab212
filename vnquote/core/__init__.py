"""Core types, errors, and configuration for vnquote."""

from vnquote.core.config import (
    LimitsConfig,
    QuoteConfig,
)
from vnquote.core.errors import (
    IllustrationError,
    InvalidDateOfBirth,
    InvalidIllustrationEnd,
    InvalidQuoteState,
    UnknownMainProduct,
    VnQuoteError,
)
from vnquote.core.types import (
    Gender,
    MainProductSelection,
    PaymentFrequency,
    Person,
    ProductGroup,
    ProductKind,
    RiderSelection,
)

__all__ = [
    # Types
    "Gender",
    "MainProductSelection",
    "PaymentFrequency",
    "Person",
    "ProductGroup",
    "ProductKind",
    "RiderSelection",
    # Config
    "LimitsConfig",
    "QuoteConfig",
    # Errors
    "VnQuoteError",
    "IllustrationError",
    "InvalidDateOfBirth",
    "InvalidIllustrationEnd",
    "InvalidQuoteState",
    "UnknownMainProduct",
]
