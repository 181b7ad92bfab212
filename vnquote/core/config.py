"""Configuration dataclasses for vnquote."""

import os
from dataclasses import dataclass, field
from datetime import date, datetime

DATE_FORMAT = "%d/%m/%Y"


@dataclass
class LimitsConfig:
    """Business limits applied by validation and frequency selection."""

    main_product_min_premium: int = 5_000_000
    main_product_min_stbh: int = 100_000_000
    extra_premium_max_factor: int = 5
    max_supplementary_insured: int = 10

    # Minimum annual base premium for split payments
    half_yearly_min_premium: int = 7_000_000
    quarterly_min_premium: int = 8_000_000

    # Hospital support daily amount
    hospital_support_stbh_multiple: int = 100_000
    hospital_support_max_under_18: int = 300_000
    hospital_support_max_from_18: int = 1_000_000
    hospital_support_premium_step: int = 4_000_000  # Base premium per 100,000 of shared cap

    # Illustration horizon
    max_target_age: int = 99
    max_coverage_age: int = 100  # Payment term may run up to this age

    def validate(self) -> None:
        """Validate limits."""
        if self.half_yearly_min_premium > self.quarterly_min_premium:
            raise ValueError("half_yearly_min_premium must not exceed quarterly_min_premium")
        if self.hospital_support_stbh_multiple <= 0:
            raise ValueError("hospital_support_stbh_multiple must be positive")
        if self.hospital_support_premium_step <= 0:
            raise ValueError("hospital_support_premium_step must be positive")
        if self.extra_premium_max_factor < 0:
            raise ValueError("extra_premium_max_factor must be non-negative")


@dataclass
class QuoteConfig:
    """Process-wide quotation settings.

    ``reference_date`` is the date ages and calendar-year admin fees are measured
    against. It is fixed for the lifetime of one calculation.
    """

    reference_date: date = field(default_factory=date.today)
    limits: LimitsConfig = field(default_factory=LimitsConfig)

    # Waiver target id for the payer who is not one of the insured persons
    waiver_other_person_id: str = "other"

    # Custom interest rate (percent) used when the state does not carry one
    default_custom_interest_rate: float = 4.7

    log_level: str = "WARNING"

    def validate(self) -> None:
        """Validate all configuration."""
        self.limits.validate()
        if not self.waiver_other_person_id:
            raise ValueError("waiver_other_person_id must not be empty")
        if self.default_custom_interest_rate < 0:
            raise ValueError("default_custom_interest_rate must be non-negative")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "reference_date": self.reference_date.strftime(DATE_FORMAT),
            "limits": dict(vars(self.limits)),
            "waiver_other_person_id": self.waiver_other_person_id,
            "default_custom_interest_rate": self.default_custom_interest_rate,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuoteConfig":
        """Create from dictionary."""
        config = cls(
            waiver_other_person_id=data.get("waiver_other_person_id", "other"),
            default_custom_interest_rate=float(data.get("default_custom_interest_rate", 4.7)),
            log_level=data.get("log_level", "WARNING"),
        )
        if data.get("reference_date"):
            config.reference_date = parse_reference_date(data["reference_date"])
        if "limits" in data:
            limits_data = data["limits"]
            config.limits = LimitsConfig(
                **{k: int(v) for k, v in limits_data.items() if hasattr(config.limits, k)}
            )
        return config

    @classmethod
    def from_env(cls) -> "QuoteConfig":
        """Create from VNQUOTE_* environment variables, falling back to defaults."""
        config = cls(log_level=os.getenv("VNQUOTE_LOG_LEVEL", "WARNING").upper())

        reference = os.getenv("VNQUOTE_REFERENCE_DATE")
        if reference:
            config.reference_date = parse_reference_date(reference)

        custom_rate = os.getenv("VNQUOTE_CUSTOM_INTEREST_RATE")
        if custom_rate:
            config.default_custom_interest_rate = float(custom_rate)

        return config


def parse_reference_date(value: str) -> date:
    """Parse a DD/MM/YYYY reference date.

    Raises:
        ValueError: If the value is not a valid date.
    """
    return datetime.strptime(value.strip(), DATE_FORMAT).date()
