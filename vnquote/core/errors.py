"""Custom exceptions for vnquote.

Pricing and aggregation never raise: missing products, rates or people degrade
to a zero fee. Exceptions here belong to the two fail-fast boundaries, building
an illustration and loading a quotation state.
"""

from typing import Any, Optional


class VnQuoteError(Exception):
    """Base exception for all vnquote errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class IllustrationError(VnQuoteError):
    """Raised when an illustration cannot be generated.

    No partial schedule is ever returned alongside one of these.
    """

    pass


class InvalidDateOfBirth(IllustrationError):
    """Raised when the main insured's date of birth is not a valid DD/MM/YYYY date."""

    def __init__(self, dob: Optional[str], person_id: Optional[str] = None):
        super().__init__(
            "Invalid date of birth.",
            details={"dob": dob, "person_id": person_id},
        )
        self.dob = dob
        self.person_id = person_id


class InvalidIllustrationEnd(IllustrationError):
    """Raised when the illustration end age is missing or not after the start age."""

    def __init__(self, start_age: int, end_age: Optional[int]):
        super().__init__(
            "Invalid illustration end age.",
            details={"start_age": start_age, "end_age": end_age},
        )
        self.start_age = start_age
        self.end_age = end_age


class UnknownMainProduct(IllustrationError):
    """Raised when the selected main product is not in the catalog."""

    def __init__(self, product_key: Optional[str]):
        super().__init__(
            "Unknown main product.",
            details={"product_key": product_key},
        )
        self.product_key = product_key


class InvalidQuoteState(VnQuoteError):
    """Raised when a serialized quotation state cannot be loaded.

    Examples:
    - No person marked as main insured
    - A person record without an id
    - A field with the wrong type (e.g. a list where a mapping is expected)
    """

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message, details={"field": field_name})
        self.field_name = field_name
