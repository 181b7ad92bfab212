"""Investment data for account-value projections.

Fee and interest tables for the investment-linked main products (PUL and MUL).
Rates are fractions (0.04 == 4%). Cost-of-insurance rates are per 1,000 of sum
at risk per year.
"""

from dataclasses import dataclass, field
from typing import Optional

from vnquote.quote.rates import AgeTable, find_rate_by_age

# Initial (acquisition) fee on base premium by policy year; later years are 0
INITIAL_FEES: dict[str, dict[int, float]] = {
    "PUL_TRON_DOI": {1: 0.85, 2: 0.70, 3: 0.50, 4: 0.20, 5: 0.10},
    "PUL_15NAM": {1: 0.85, 2: 0.70, 3: 0.50, 4: 0.20, 5: 0.10},
    "PUL_5NAM": {1: 0.65, 2: 0.45, 3: 0.25, 4: 0.10, 5: 0.05},
    "KHOE_BINH_AN": {1: 0.85, 2: 0.75, 3: 0.50, 4: 0.20, 5: 0.15},
    "VUNG_TUONG_LAI": {1: 0.85, 2: 0.75, 3: 0.50, 4: 0.20, 5: 0.15},
}

# Initial fee on extra (top-up) premium, every year
EXTRA_INITIAL_FEE = 0.02

GUARANTEED_INTEREST_RATES: dict[int, float] = {
    1: 0.04,
    2: 0.04,
    3: 0.035,
    4: 0.03,
    5: 0.03,
}
GUARANTEED_INTEREST_DEFAULT = 0.02

# Monthly admin fee in VND by calendar year
ADMIN_FEES: dict[int, int] = {
    2025: 38_000,
    2026: 40_000,
    2027: 42_000,
}
ADMIN_FEE_DEFAULT = 44_000

# One-time persistency bonus as a fraction of annual base premium, by policy year
PERSISTENCY_BONUS: dict[int, float] = {
    10: 0.30,
    20: 0.50,
    30: 0.70,
}

# Periodic MUL bonus: share of annual base premium paid at each policy-year end
MUL_PERIODIC_BONUS_RATE = 0.03
MUL_PERIODIC_BONUS_FROM_YEAR = 5

PUL_COST_OF_INSURANCE_RATES: AgeTable = {
    0: {"nam": 1.90, "nu": 1.49},
    1: {"nam": 1.66, "nu": 1.29},
    2: {"nam": 1.41, "nu": 1.10},
    3: {"nam": 1.16, "nu": 0.91},
    4: {"nam": 0.92, "nu": 0.72},
    5: {"nam": 0.67, "nu": 0.53},
    6: {"nam": 0.68, "nu": 0.53},
    7: {"nam": 0.68, "nu": 0.53},
    8: {"nam": 0.69, "nu": 0.54},
    9: {"nam": 0.70, "nu": 0.54},
    10: {"nam": 0.70, "nu": 0.55},
    11: {"nam": 0.71, "nu": 0.55},
    12: {"nam": 0.72, "nu": 0.56},
    13: {"nam": 0.73, "nu": 0.57},
    14: {"nam": 0.74, "nu": 0.58},
    15: {"nam": 0.75, "nu": 0.58},
    16: {"nam": 0.76, "nu": 0.59},
    17: {"nam": 0.77, "nu": 0.60},
    18: {"nam": 0.79, "nu": 0.61},
    19: {"nam": 0.80, "nu": 0.63},
    20: {"nam": 0.82, "nu": 0.64},
    21: {"nam": 0.84, "nu": 0.65},
    22: {"nam": 0.86, "nu": 0.67},
    23: {"nam": 0.88, "nu": 0.69},
    24: {"nam": 0.90, "nu": 0.70},
    25: {"nam": 0.93, "nu": 0.72},
    26: {"nam": 0.96, "nu": 0.75},
    27: {"nam": 0.99, "nu": 0.77},
    28: {"nam": 1.02, "nu": 0.80},
    29: {"nam": 1.06, "nu": 0.83},
    30: {"nam": 1.10, "nu": 0.86},
    31: {"nam": 1.14, "nu": 0.89},
    32: {"nam": 1.19, "nu": 0.93},
    33: {"nam": 1.25, "nu": 0.97},
    34: {"nam": 1.30, "nu": 1.02},
    35: {"nam": 1.37, "nu": 1.06},
    36: {"nam": 1.43, "nu": 1.12},
    37: {"nam": 1.51, "nu": 1.18},
    38: {"nam": 1.59, "nu": 1.24},
    39: {"nam": 1.68, "nu": 1.31},
    40: {"nam": 1.78, "nu": 1.39},
    41: {"nam": 1.88, "nu": 1.47},
    42: {"nam": 2.00, "nu": 1.56},
    43: {"nam": 2.13, "nu": 1.66},
    44: {"nam": 2.27, "nu": 1.77},
    45: {"nam": 2.42, "nu": 1.89},
    46: {"nam": 2.58, "nu": 2.01},
    47: {"nam": 2.76, "nu": 2.15},
    48: {"nam": 2.96, "nu": 2.31},
    49: {"nam": 3.17, "nu": 2.48},
    50: {"nam": 3.41, "nu": 2.66},
    51: {"nam": 3.67, "nu": 2.86},
    52: {"nam": 3.95, "nu": 3.08},
    53: {"nam": 4.25, "nu": 3.32},
    54: {"nam": 4.59, "nu": 3.58},
    55: {"nam": 4.95, "nu": 3.86},
    56: {"nam": 5.35, "nu": 4.17},
    57: {"nam": 5.79, "nu": 4.51},
    58: {"nam": 6.26, "nu": 4.88},
    59: {"nam": 6.78, "nu": 5.29},
    60: {"nam": 7.35, "nu": 5.73},
    61: {"nam": 7.97, "nu": 6.21},
    62: {"nam": 8.64, "nu": 6.74},
    63: {"nam": 9.38, "nu": 7.32},
    64: {"nam": 10.18, "nu": 7.94},
    65: {"nam": 11.06, "nu": 8.63},
    66: {"nam": 12.02, "nu": 9.38},
    67: {"nam": 13.07, "nu": 10.20},
    68: {"nam": 14.22, "nu": 11.09},
    69: {"nam": 15.47, "nu": 12.07},
    70: {"nam": 16.84, "nu": 13.13},
    71: {"nam": 18.33, "nu": 14.30},
    72: {"nam": 19.96, "nu": 15.57},
    73: {"nam": 21.74, "nu": 16.95},
    74: {"nam": 23.68, "nu": 18.47},
    75: {"nam": 25.80, "nu": 20.12},
    76: {"nam": 28.12, "nu": 21.93},
    77: {"nam": 30.65, "nu": 23.90},
    78: {"nam": 33.41, "nu": 26.06},
    79: {"nam": 36.42, "nu": 28.41},
    80: {"nam": 39.72, "nu": 30.98},
    81: {"nam": 43.31, "nu": 33.78},
    82: {"nam": 47.24, "nu": 36.85},
    83: {"nam": 51.53, "nu": 40.19},
    84: {"nam": 56.21, "nu": 43.84},
    85: {"nam": 61.33, "nu": 47.83},
    86: {"nam": 66.91, "nu": 52.19},
    87: {"nam": 73.01, "nu": 56.95},
    88: {"nam": 79.67, "nu": 62.14},
    89: {"nam": 86.94, "nu": 67.81},
    90: {"nam": 94.88, "nu": 74.00},
    91: {"nam": 103.55, "nu": 80.77},
    92: {"nam": 113.02, "nu": 88.15},
    93: {"nam": 123.36, "nu": 96.22},
    94: {"nam": 134.65, "nu": 105.02},
    95: {"nam": 146.97, "nu": 114.64},
    96: {"nam": 160.44, "nu": 125.14},
    97: {"nam": 175.14, "nu": 136.61},
    98: {"nam": 191.19, "nu": 149.13},
    99: {"nam": 208.72, "nu": 162.80},
}

MUL_COST_OF_INSURANCE_RATES: AgeTable = {
    0: {"nam": 2.04, "nu": 1.63},
    1: {"nam": 1.78, "nu": 1.42},
    2: {"nam": 1.51, "nu": 1.21},
    3: {"nam": 1.24, "nu": 1.00},
    4: {"nam": 0.98, "nu": 0.78},
    5: {"nam": 0.71, "nu": 0.57},
    6: {"nam": 0.72, "nu": 0.58},
    7: {"nam": 0.72, "nu": 0.58},
    8: {"nam": 0.73, "nu": 0.58},
    9: {"nam": 0.74, "nu": 0.59},
    10: {"nam": 0.74, "nu": 0.60},
    11: {"nam": 0.75, "nu": 0.60},
    12: {"nam": 0.76, "nu": 0.61},
    13: {"nam": 0.77, "nu": 0.62},
    14: {"nam": 0.78, "nu": 0.63},
    15: {"nam": 0.79, "nu": 0.63},
    16: {"nam": 0.81, "nu": 0.64},
    17: {"nam": 0.82, "nu": 0.66},
    18: {"nam": 0.83, "nu": 0.67},
    19: {"nam": 0.85, "nu": 0.68},
    20: {"nam": 0.87, "nu": 0.69},
    21: {"nam": 0.89, "nu": 0.71},
    22: {"nam": 0.91, "nu": 0.73},
    23: {"nam": 0.93, "nu": 0.75},
    24: {"nam": 0.96, "nu": 0.77},
    25: {"nam": 0.98, "nu": 0.79},
    26: {"nam": 1.02, "nu": 0.81},
    27: {"nam": 1.05, "nu": 0.84},
    28: {"nam": 1.08, "nu": 0.87},
    29: {"nam": 1.12, "nu": 0.90},
    30: {"nam": 1.17, "nu": 0.93},
    31: {"nam": 1.21, "nu": 0.97},
    32: {"nam": 1.26, "nu": 1.01},
    33: {"nam": 1.32, "nu": 1.06},
    34: {"nam": 1.38, "nu": 1.10},
    35: {"nam": 1.45, "nu": 1.16},
    36: {"nam": 1.52, "nu": 1.22},
    37: {"nam": 1.60, "nu": 1.28},
    38: {"nam": 1.69, "nu": 1.35},
    39: {"nam": 1.78, "nu": 1.42},
    40: {"nam": 1.88, "nu": 1.51},
    41: {"nam": 2.00, "nu": 1.60},
    42: {"nam": 2.12, "nu": 1.70},
    43: {"nam": 2.25, "nu": 1.80},
    44: {"nam": 2.40, "nu": 1.92},
    45: {"nam": 2.56, "nu": 2.05},
    46: {"nam": 2.74, "nu": 2.19},
    47: {"nam": 2.93, "nu": 2.34},
    48: {"nam": 3.14, "nu": 2.51},
    49: {"nam": 3.37, "nu": 2.69},
    50: {"nam": 3.61, "nu": 2.89},
    51: {"nam": 3.89, "nu": 3.11},
    52: {"nam": 4.18, "nu": 3.35},
    53: {"nam": 4.51, "nu": 3.61},
    54: {"nam": 4.86, "nu": 3.89},
    55: {"nam": 5.25, "nu": 4.20},
    56: {"nam": 5.67, "nu": 4.54},
    57: {"nam": 6.13, "nu": 4.91},
    58: {"nam": 6.64, "nu": 5.31},
    59: {"nam": 7.19, "nu": 5.75},
    60: {"nam": 7.79, "nu": 6.23},
    61: {"nam": 8.44, "nu": 6.75},
    62: {"nam": 9.16, "nu": 7.33},
    63: {"nam": 9.94, "nu": 7.95},
    64: {"nam": 10.80, "nu": 8.64},
    65: {"nam": 11.73, "nu": 9.38},
    66: {"nam": 12.75, "nu": 10.20},
    67: {"nam": 13.86, "nu": 11.09},
    68: {"nam": 15.07, "nu": 12.06},
    69: {"nam": 16.40, "nu": 13.12},
    70: {"nam": 17.85, "nu": 14.28},
    71: {"nam": 19.43, "nu": 15.54},
    72: {"nam": 21.15, "nu": 16.92},
    73: {"nam": 23.04, "nu": 18.43},
    74: {"nam": 25.10, "nu": 20.08},
    75: {"nam": 27.35, "nu": 21.88},
    76: {"nam": 29.80, "nu": 23.84},
    77: {"nam": 32.48, "nu": 25.99},
    78: {"nam": 35.41, "nu": 28.33},
    79: {"nam": 38.61, "nu": 30.89},
    80: {"nam": 42.10, "nu": 33.68},
    81: {"nam": 45.91, "nu": 36.73},
    82: {"nam": 50.07, "nu": 40.06},
    83: {"nam": 54.62, "nu": 43.70},
    84: {"nam": 59.58, "nu": 47.67},
    85: {"nam": 65.00, "nu": 52.00},
    86: {"nam": 70.92, "nu": 56.74},
    87: {"nam": 77.39, "nu": 61.91},
    88: {"nam": 84.45, "nu": 67.56},
    89: {"nam": 92.15, "nu": 73.72},
    90: {"nam": 100.57, "nu": 80.46},
    91: {"nam": 109.76, "nu": 87.81},
    92: {"nam": 119.80, "nu": 95.84},
    93: {"nam": 130.76, "nu": 104.61},
    94: {"nam": 142.72, "nu": 114.18},
    95: {"nam": 155.79, "nu": 124.63},
    96: {"nam": 170.06, "nu": 136.05},
    97: {"nam": 185.65, "nu": 148.52},
    98: {"nam": 202.66, "nu": 162.13},
    99: {"nam": 221.25, "nu": 177.00},
}


@dataclass(frozen=True)
class InvestmentData:
    """Fee, interest and mortality tables consumed by the projection."""

    initial_fees: dict[str, dict[int, float]] = field(default_factory=lambda: INITIAL_FEES)
    extra_initial_fee: float = EXTRA_INITIAL_FEE
    guaranteed_interest_rates: dict[int, float] = field(
        default_factory=lambda: GUARANTEED_INTEREST_RATES
    )
    guaranteed_interest_default: float = GUARANTEED_INTEREST_DEFAULT
    admin_fees: dict[int, int] = field(default_factory=lambda: ADMIN_FEES)
    admin_fee_default: int = ADMIN_FEE_DEFAULT
    cost_of_insurance: dict[str, AgeTable] = field(
        default_factory=lambda: {
            "pul": PUL_COST_OF_INSURANCE_RATES,
            "mul": MUL_COST_OF_INSURANCE_RATES,
        }
    )
    persistency_bonus: dict[int, float] = field(default_factory=lambda: PERSISTENCY_BONUS)
    mul_periodic_bonus_rate: float = MUL_PERIODIC_BONUS_RATE
    mul_periodic_bonus_from_year: int = MUL_PERIODIC_BONUS_FROM_YEAR

    def initial_fee_rate(self, fee_ref: str, policy_year: int) -> float:
        """Initial fee rate on base premium for a product and policy year."""
        return self.initial_fees.get(fee_ref, {}).get(policy_year, 0.0)

    def guaranteed_rate(self, policy_year: int) -> float:
        """Guaranteed annual interest rate as a fraction.

        Values above 1 are treated as percentages.
        """
        rate = self.guaranteed_interest_rates.get(policy_year, self.guaranteed_interest_default)
        rate = float(rate or 0)
        return rate / 100 if rate > 1 else rate

    def admin_fee(self, calendar_year: int) -> int:
        """Monthly admin fee for a calendar year, falling back to the default."""
        return int(self.admin_fees.get(calendar_year, self.admin_fee_default) or 0)

    def cost_of_insurance_rate(self, table_ref: str, age: int, gender_key: str) -> float:
        """Annual cost-of-insurance rate per 1,000 of sum at risk."""
        table: Optional[AgeTable] = self.cost_of_insurance.get(table_ref)
        if table is None:
            return 0.0
        return find_rate_by_age(table, age, gender_key)


DEFAULT_INVESTMENT_DATA = InvestmentData()
