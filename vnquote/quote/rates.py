"""Actuarial rate tables and lookups.

Tables follow one of three shapes:
- exact age: ``{age: {"nam": rate, "nu": rate}}``
- age band: ``{(age_min, age_max): {column: rate}}``
- term then exact age: ``{term: {age: {...}}}``

Dict order is significant: bands are searched in insertion order and the first
containing band wins. Ages outside every band are "not found" and price at 0.

Main product and rider rates are per 1,000 of sum insured per year, except the
hospital support rider (per 100 of daily amount) and the health rider (flat VND
fee per program tier).
"""

from dataclasses import dataclass, field
from typing import Optional

AgeTable = dict[int, dict[str, float]]
RangeTable = dict[tuple[int, int], dict[str, float]]


# =============================================================================
# PUL MAIN PRODUCTS
# Per 1,000 sum insured, exact age, gender split
# =============================================================================

_PUL_RATE_ROWS = [
    # age, tron_doi (nam, nu), 15 year (nam, nu), 5 year (nam, nu)
    (0, 6.1, 5.7, 6.1, 5.7, 7.8, 6.0),
    (1, 6.1, 5.7, 6.1, 5.7, 7.8, 6.0),
    (2, 6.1, 5.7, 6.1, 5.7, 7.8, 6.0),
    (3, 6.1, 5.7, 6.1, 5.7, 7.8, 6.0),
    (4, 6.1, 5.7, 6.1, 5.7, 7.8, 6.0),
    (5, 6.1, 5.7, 6.1, 5.7, 7.9, 6.2),
    (6, 6.1, 5.7, 6.1, 5.7, 8.1, 6.3),
    (7, 6.1, 5.8, 6.1, 5.8, 8.1, 6.3),
    (8, 6.2, 5.8, 6.2, 5.8, 8.5, 6.4),
    (9, 6.2, 5.8, 6.2, 5.8, 8.8, 6.8),
    (10, 6.3, 5.9, 6.3, 5.9, 9.1, 7.0),
    (11, 6.3, 5.9, 6.3, 5.9, 9.4, 7.3),
    (12, 6.3, 6.0, 6.3, 6.0, 9.8, 7.5),
    (13, 6.4, 6.0, 6.4, 6.0, 9.8, 7.8),
    (14, 6.4, 6.0, 6.4, 6.0, 10.3, 8.1),
    (15, 6.5, 6.1, 6.5, 6.1, 10.7, 8.3),
    (16, 6.5, 6.1, 6.5, 6.1, 11.4, 8.8),
    (17, 6.5, 6.1, 6.5, 6.1, 11.5, 9.2),
    (18, 6.6, 6.2, 6.6, 6.2, 12.3, 9.6),
    (19, 6.6, 6.2, 6.6, 6.2, 12.5, 9.8),
    (20, 6.7, 6.3, 6.7, 6.3, 13.0, 10.5),
    (21, 6.8, 6.3, 6.8, 6.3, 13.6, 11.0),
    (22, 6.8, 6.4, 6.8, 6.4, 14.5, 11.6),
    (23, 6.9, 6.5, 6.9, 6.5, 15.3, 12.2),
    (24, 7.0, 6.6, 7.0, 6.6, 16.2, 12.8),
    (25, 7.1, 6.7, 7.1, 6.7, 17.1, 13.5),
    (26, 7.2, 6.8, 7.2, 6.8, 18.0, 14.3),
    (27, 7.4, 6.9, 7.4, 6.9, 19.1, 14.9),
    (28, 7.5, 7.1, 7.5, 7.1, 20.6, 15.9),
    (29, 7.6, 7.2, 7.6, 7.2, 21.8, 16.9),
    (30, 7.7, 7.4, 7.7, 7.4, 23.6, 17.6),
    (31, 7.9, 7.6, 8.2, 7.6, 25.3, 18.3),
    (32, 8.1, 7.8, 9.0, 7.8, 27.0, 19.4),
    (33, 8.3, 7.9, 9.9, 7.9, 28.9, 20.6),
    (34, 8.5, 8.1, 10.5, 8.1, 31.7, 22.1),
    (35, 8.7, 8.3, 11.1, 8.3, 34.0, 23.4),
    (36, 9.1, 8.7, 11.8, 8.7, 36.6, 25.2),
    (37, 9.5, 9.1, 12.5, 9.1, 39.2, 26.7),
    (38, 10.0, 9.5, 13.5, 9.5, 42.3, 28.5),
    (39, 10.5, 10.0, 14.6, 10.1, 45.3, 30.5),
    (40, 11.1, 10.5, 15.7, 10.8, 49.4, 33.3),
    (41, 11.5, 10.9, 16.9, 11.5, 52.6, 34.9),
    (42, 11.9, 11.2, 18.2, 12.2, 56.1, 37.8),
    (43, 12.3, 11.6, 19.6, 13.1, 62.1, 40.9),
    (44, 12.8, 12.0, 21.3, 14.4, 66.2, 43.1),
    (45, 13.3, 12.5, 23.0, 15.5, 71.4, 47.3),
    (46, 14.3, 13.3, 24.6, 16.8, 77.2, 50.8),
    (47, 15.4, 14.3, 26.7, 17.4, 80.5, 54.5),
    (48, 16.7, 15.4, 29.4, 19.6, 88.5, 58.6),
    (49, 18.2, 16.7, 31.1, 21.6, 93.8, 63.5),
    (50, 20.0, 18.2, 32.6, 23.1, 100.6, 68.7),
    (51, 21.3, 19.2, 36.2, 25.3, 106.7, 73.4),
    (52, 22.7, 20.4, 36.2, 27.2, 112.7, 77.9),
    (53, 24.4, 21.7, 40.1, 29.4, 119.6, 87.0),
    (54, 26.3, 23.3, 42.5, 31.3, 126.2, 91.0),
    (55, 28.6, 25.0, 45.3, 33.3, 132.4, 99.3),
    (56, 30.3, 26.3, 49.4, 35.4, 138.3, 105.0),
    (57, 32.3, 27.8, 51.2, 38.5, 144.5, 113.1),
    (58, 34.5, 29.4, 53.2, 41.7, 152.7, 118.9),
    (59, 37.0, 31.3, 57.2, 45.0, 157.5, 131.0),
    (60, 40.0, 33.3, 58.8, 45.9, 164.1, 134.6),
    (61, 41.7, 34.5, 62.5, 47.1, 169.6, 141.3),
    (62, 43.5, 35.7, 66.0, 52.1, 176.4, 152.2),
    (63, 45.5, 37.0, 68.0, 56.0, 183.1, 160.1),
    (64, 47.6, 38.5, 71.0, 58.5, 187.4, 165.7),
    (65, 55.6, 43.5, 74.0, 62.5, 192.3, 171.8),
    (66, 62.5, 47.6, 76.7, 65.4, 196.2, 178.9),
    (67, 71.4, 52.6, 80.2, 68.7, 202.4, 186.7),
    (68, 83.3, 58.8, 83.1, 71.2, 205.7, 190.9),
    (69, 100.0, 66.7, 111.1, 83.3, 222.3, 196.7),
    (70, 100.0, 66.7, 125.0, 100.0, 250.0, 250.0),
]

PUL_RATES: dict[str, AgeTable] = {
    "PUL_TRON_DOI": {row[0]: {"nam": row[1], "nu": row[2]} for row in _PUL_RATE_ROWS},
    "PUL_15NAM": {row[0]: {"nam": row[3], "nu": row[4]} for row in _PUL_RATE_ROWS},
    "PUL_5NAM": {row[0]: {"nam": row[5], "nu": row[6]} for row in _PUL_RATE_ROWS},
}

# =============================================================================
# AN BINH UU VIET (TRADITIONAL)
# Per 1,000 sum insured by payment term, then exact age.
# Female rates start at 28.
# =============================================================================

AN_BINH_UU_VIET_RATES: dict[int, AgeTable] = {
    5: {
        12: {"nam": 4.20},
        13: {"nam": 4.19},
        14: {"nam": 4.17},
        15: {"nam": 4.16},
        16: {"nam": 4.16},
        17: {"nam": 4.17},
        18: {"nam": 4.17},
        19: {"nam": 4.17},
        20: {"nam": 4.22},
        21: {"nam": 4.26},
        22: {"nam": 4.28},
        23: {"nam": 4.29},
        24: {"nam": 4.31},
        25: {"nam": 4.33},
        26: {"nam": 4.34},
        27: {"nam": 4.36},
        28: {"nam": 4.39, "nu": 3.71},
        29: {"nam": 4.44, "nu": 3.73},
        30: {"nam": 4.52, "nu": 3.75},
        31: {"nam": 4.62, "nu": 3.78},
        32: {"nam": 4.77, "nu": 3.84},
        33: {"nam": 4.96, "nu": 3.93},
        34: {"nam": 5.16, "nu": 4.05},
        35: {"nam": 5.37, "nu": 4.20},
        36: {"nam": 5.55, "nu": 4.37},
        37: {"nam": 5.79, "nu": 4.55},
        38: {"nam": 6.02, "nu": 4.70},
        39: {"nam": 6.27, "nu": 4.88},
        40: {"nam": 6.54, "nu": 5.08},
        41: {"nam": 6.85, "nu": 5.30},
        42: {"nam": 7.18, "nu": 5.52},
        43: {"nam": 7.54, "nu": 5.76},
        44: {"nam": 7.93, "nu": 6.03},
        45: {"nam": 8.36, "nu": 6.31},
        46: {"nam": 8.81, "nu": 6.62},
        47: {"nam": 9.31, "nu": 6.94},
        48: {"nam": 9.88, "nu": 7.30},
        49: {"nam": 10.49, "nu": 7.69},
        50: {"nam": 11.32, "nu": 8.23},
        51: {"nam": 12.21, "nu": 8.82},
        52: {"nam": 13.24, "nu": 9.48},
        53: {"nam": 14.41, "nu": 10.22},
        54: {"nam": 15.77, "nu": 11.15},
        55: {"nam": 17.43, "nu": 12.33},
        56: {"nam": 18.82, "nu": 13.19},
        57: {"nam": 20.41, "nu": 14.15},
        58: {"nam": 22.29, "nu": 15.32},
        59: {"nam": 24.15, "nu": 16.49},
        60: {"nam": 26.19, "nu": 17.83},
        61: {"nam": 28.51, "nu": 19.36},
        62: {"nam": 31.13, "nu": 21.05},
        63: {"nam": 34.09, "nu": 22.97},
        64: {"nam": 37.02, "nu": 24.87},
        65: {"nam": 40.21, "nu": 27.03},
    },
    10: {
        12: {"nam": 3.55},
        13: {"nam": 3.66},
        14: {"nam": 3.77},
        15: {"nam": 3.87},
        16: {"nam": 3.96},
        17: {"nam": 4.06},
        18: {"nam": 4.20},
        19: {"nam": 4.22},
        20: {"nam": 4.28},
        21: {"nam": 4.32},
        22: {"nam": 4.35},
        23: {"nam": 4.35},
        24: {"nam": 4.36},
        25: {"nam": 4.38},
        26: {"nam": 4.40},
        27: {"nam": 4.42},
        28: {"nam": 4.44, "nu": 3.75},
        29: {"nam": 4.50, "nu": 3.77},
        30: {"nam": 4.57, "nu": 3.79},
        31: {"nam": 4.68, "nu": 3.83},
        32: {"nam": 4.83, "nu": 3.89},
        33: {"nam": 5.01, "nu": 3.97},
        34: {"nam": 5.21, "nu": 4.09},
        35: {"nam": 5.42, "nu": 4.24},
        36: {"nam": 5.64, "nu": 4.40},
        37: {"nam": 5.90, "nu": 4.57},
        38: {"nam": 6.18, "nu": 4.76},
        39: {"nam": 6.48, "nu": 4.97},
        40: {"nam": 6.81, "nu": 5.21},
        41: {"nam": 7.19, "nu": 5.47},
        42: {"nam": 7.62, "nu": 5.74},
        43: {"nam": 8.07, "nu": 6.04},
        44: {"nam": 8.57, "nu": 6.36},
        45: {"nam": 9.12, "nu": 6.71},
        46: {"nam": 9.75, "nu": 7.12},
        47: {"nam": 10.46, "nu": 7.57},
        48: {"nam": 11.24, "nu": 8.04},
        49: {"nam": 12.11, "nu": 8.58},
        50: {"nam": 13.07, "nu": 9.17},
        51: {"nam": 14.14, "nu": 9.91},
        52: {"nam": 15.35, "nu": 10.65},
        53: {"nam": 16.71, "nu": 11.46},
        54: {"nam": 18.25, "nu": 12.45},
        55: {"nam": 20.04, "nu": 13.68},
        56: {"nam": 21.76, "nu": 14.75},
        57: {"nam": 23.69, "nu": 15.95},
        58: {"nam": 25.89, "nu": 17.33},
        59: {"nam": 28.11, "nu": 18.74},
        60: {"nam": 30.52, "nu": 20.29},
    },
    15: {
        12: {"nam": 3.64},
        13: {"nam": 3.73},
        14: {"nam": 3.83},
        15: {"nam": 3.92},
        16: {"nam": 4.00},
        17: {"nam": 4.09},
        18: {"nam": 4.21},
        19: {"nam": 4.23},
        20: {"nam": 4.29},
        21: {"nam": 4.34},
        22: {"nam": 4.38},
        23: {"nam": 4.40},
        24: {"nam": 4.44},
        25: {"nam": 4.47},
        26: {"nam": 4.51},
        27: {"nam": 4.56},
        28: {"nam": 4.61, "nu": 3.84},
        29: {"nam": 4.70, "nu": 3.88},
        30: {"nam": 4.81, "nu": 3.93},
        31: {"nam": 4.95, "nu": 4.00},
        32: {"nam": 5.14, "nu": 4.09},
        33: {"nam": 5.37, "nu": 4.21},
        34: {"nam": 5.61, "nu": 4.37},
        35: {"nam": 5.88, "nu": 4.55},
        36: {"nam": 6.17, "nu": 4.75},
        37: {"nam": 6.63, "nu": 4.97},
        38: {"nam": 7.01, "nu": 5.22},
        39: {"nam": 7.43, "nu": 5.49},
        40: {"nam": 7.78, "nu": 5.82},
        41: {"nam": 8.29, "nu": 6.16},
        42: {"nam": 8.86, "nu": 6.52},
        43: {"nam": 9.49, "nu": 6.90},
        44: {"nam": 10.17, "nu": 7.32},
        45: {"nam": 10.91, "nu": 7.77},
        46: {"nam": 11.73, "nu": 8.25},
        47: {"nam": 12.64, "nu": 8.78},
        48: {"nam": 13.64, "nu": 9.37},
        49: {"nam": 14.74, "nu": 10.04},
        50: {"nam": 15.94, "nu": 10.75},
        51: {"nam": 17.30, "nu": 11.58},
        52: {"nam": 18.81, "nu": 12.51},
        53: {"nam": 20.49, "nu": 13.54},
        54: {"nam": 22.35, "nu": 14.70},
        55: {"nam": 24.45, "nu": 16.07},
    },
}

# =============================================================================
# HEALTH RIDER (health_scl)
# Flat annual fee in VND by age band and program tier
# =============================================================================

HEALTH_SCL_RATES: dict[str, RangeTable] = {
    "main_vn": {
        (0, 4): {"co_ban": 3829000, "nang_cao": 7669000, "toan_dien": 13909000, "hoan_hao": 20149000},
        (5, 9): {"co_ban": 1459000, "nang_cao": 2929000, "toan_dien": 5449000, "hoan_hao": 7859000},
        (10, 14): {"co_ban": 769000, "nang_cao": 1489000, "toan_dien": 2719000, "hoan_hao": 4019000},
        (15, 19): {"co_ban": 1079000, "nang_cao": 2159000, "toan_dien": 3939000, "hoan_hao": 5719000},
        (20, 24): {"co_ban": 1239000, "nang_cao": 2579000, "toan_dien": 4719000, "hoan_hao": 6779000},
        (25, 29): {"co_ban": 1579000, "nang_cao": 3069000, "toan_dien": 5649000, "hoan_hao": 8229000},
        (30, 34): {"co_ban": 1939000, "nang_cao": 3359000, "toan_dien": 6149000, "hoan_hao": 9039000},
        (35, 39): {"co_ban": 2139000, "nang_cao": 3839000, "toan_dien": 7019000, "hoan_hao": 10099000},
        (40, 44): {"co_ban": 2359000, "nang_cao": 4229000, "toan_dien": 7789000, "hoan_hao": 11349000},
        (45, 49): {"co_ban": 2909000, "nang_cao": 5089000, "toan_dien": 9329000, "hoan_hao": 13559000},
        (50, 54): {"co_ban": 3279000, "nang_cao": 6039000, "toan_dien": 11009000, "hoan_hao": 16069000},
        (55, 59): {"co_ban": 3479000, "nang_cao": 6799000, "toan_dien": 12459000, "hoan_hao": 18029000},
        (60, 64): {"co_ban": 3939000, "nang_cao": 7809000, "toan_dien": 14159000, "hoan_hao": 20579000},
        (65, 65): {"co_ban": 4269000, "nang_cao": 8339000, "toan_dien": 15209000, "hoan_hao": 22079000},
        (66, 69): {"co_ban": 4269000, "nang_cao": 8339000, "toan_dien": 15209000, "hoan_hao": 22079000},
        (70, 74): {"co_ban": 4679000, "nang_cao": 9209000, "toan_dien": 16759000, "hoan_hao": 24309000},
    },
    "main_global": {
        (0, 4): {"co_ban": 5149000, "nang_cao": 10309000, "toan_dien": 18709000, "hoan_hao": 27229000},
        (5, 9): {"co_ban": 1969000, "nang_cao": 3939000, "toan_dien": 7269000, "hoan_hao": 10489000},
        (10, 14): {"co_ban": 1029000, "nang_cao": 2009000, "toan_dien": 3699000, "hoan_hao": 5449000},
        (15, 19): {"co_ban": 1469000, "nang_cao": 2929000, "toan_dien": 5329000, "hoan_hao": 7739000},
        (20, 24): {"co_ban": 1689000, "nang_cao": 3469000, "toan_dien": 6339000, "hoan_hao": 9099000},
        (25, 29): {"co_ban": 2069000, "nang_cao": 4159000, "toan_dien": 7629000, "hoan_hao": 11059000},
        (30, 34): {"co_ban": 2299000, "nang_cao": 4509000, "toan_dien": 8269000, "hoan_hao": 12209000},
        (35, 39): {"co_ban": 2589000, "nang_cao": 5189000, "toan_dien": 9429000, "hoan_hao": 13659000},
        (40, 44): {"co_ban": 2879000, "nang_cao": 5669000, "toan_dien": 10479000, "hoan_hao": 15299000},
        (45, 49): {"co_ban": 3449000, "nang_cao": 6829000, "toan_dien": 12599000, "hoan_hao": 18279000},
        (50, 54): {"co_ban": 4159000, "nang_cao": 8129000, "toan_dien": 14879000, "hoan_hao": 21729000},
        (55, 59): {"co_ban": 4709000, "nang_cao": 9199000, "toan_dien": 16789000, "hoan_hao": 24299000},
        (60, 64): {"co_ban": 5329000, "nang_cao": 10519000, "toan_dien": 19109000, "hoan_hao": 27779000},
        (65, 65): {"co_ban": 5759000, "nang_cao": 11269000, "toan_dien": 20519000, "hoan_hao": 29799000},
        (66, 69): {"co_ban": 5759000, "nang_cao": 11269000, "toan_dien": 20519000, "hoan_hao": 29799000},
        (70, 74): {"co_ban": 6219000, "nang_cao": 12289000, "toan_dien": 22379000, "hoan_hao": 32419000},
    },
    "outpatient": {
        (0, 4): {"co_ban": 1889000, "nang_cao": 3559000, "toan_dien": 7649000, "hoan_hao": 11349000},
        (5, 9): {"co_ban": 979000, "nang_cao": 1849000, "toan_dien": 3989000, "hoan_hao": 5919000},
        (10, 14): {"co_ban": 869000, "nang_cao": 1629000, "toan_dien": 3519000, "hoan_hao": 5219000},
        (15, 19): {"co_ban": 889000, "nang_cao": 1689000, "toan_dien": 3629000, "hoan_hao": 5389000},
        (20, 24): {"co_ban": 799000, "nang_cao": 1529000, "toan_dien": 3279000, "hoan_hao": 4869000},
        (25, 29): {"co_ban": 859000, "nang_cao": 1619000, "toan_dien": 3489000, "hoan_hao": 5179000},
        (30, 34): {"co_ban": 939000, "nang_cao": 1779000, "toan_dien": 3819000, "hoan_hao": 5669000},
        (35, 39): {"co_ban": 1009000, "nang_cao": 1909000, "toan_dien": 4119000, "hoan_hao": 6109000},
        (40, 44): {"co_ban": 1029000, "nang_cao": 1939000, "toan_dien": 4189000, "hoan_hao": 6209000},
        (45, 49): {"co_ban": 1089000, "nang_cao": 2049000, "toan_dien": 4419000, "hoan_hao": 6559000},
        (50, 54): {"co_ban": 1089000, "nang_cao": 2059000, "toan_dien": 4449000, "hoan_hao": 6589000},
        (55, 59): {"co_ban": 1109000, "nang_cao": 2089000, "toan_dien": 4509000, "hoan_hao": 6699000},
        (60, 64): {"co_ban": 1119000, "nang_cao": 2099000, "toan_dien": 4529000, "hoan_hao": 6729000},
        (65, 65): {"co_ban": 1119000, "nang_cao": 2109000, "toan_dien": 4549000, "hoan_hao": 6769000},
        (66, 69): {"co_ban": 1119000, "nang_cao": 2109000, "toan_dien": 4549000, "hoan_hao": 6769000},
        (70, 74): {"co_ban": 1409000, "nang_cao": 2659000, "toan_dien": 5719000, "hoan_hao": 8479000},
    },
    "dental": {
        (0, 4): {"co_ban": 509000, "nang_cao": 939000, "toan_dien": 2189000, "hoan_hao": 4009000},
        (5, 9): {"co_ban": 869000, "nang_cao": 1619000, "toan_dien": 3749000, "hoan_hao": 6869000},
        (10, 14): {"co_ban": 779000, "nang_cao": 1449000, "toan_dien": 3359000, "hoan_hao": 6149000},
        (15, 19): {"co_ban": 709000, "nang_cao": 1329000, "toan_dien": 3079000, "hoan_hao": 5649000},
        (20, 24): {"co_ban": 579000, "nang_cao": 1089000, "toan_dien": 2539000, "hoan_hao": 4639000},
        (25, 29): {"co_ban": 579000, "nang_cao": 1079000, "toan_dien": 2519000, "hoan_hao": 4599000},
        (30, 34): {"co_ban": 599000, "nang_cao": 1129000, "toan_dien": 2629000, "hoan_hao": 4819000},
        (35, 39): {"co_ban": 629000, "nang_cao": 1189000, "toan_dien": 2749000, "hoan_hao": 5039000},
        (40, 44): {"co_ban": 719000, "nang_cao": 1349000, "toan_dien": 3129000, "hoan_hao": 5729000},
        (45, 49): {"co_ban": 759000, "nang_cao": 1429000, "toan_dien": 3309000, "hoan_hao": 6069000},
        (50, 54): {"co_ban": 739000, "nang_cao": 1389000, "toan_dien": 3209000, "hoan_hao": 5889000},
        (55, 59): {"co_ban": 729000, "nang_cao": 1379000, "toan_dien": 3179000, "hoan_hao": 5839000},
        (60, 74): {"co_ban": 729000, "nang_cao": 1379000, "toan_dien": 3179000, "hoan_hao": 5839000},
    },
}

# =============================================================================
# CRITICAL ILLNESS RIDER (bhn)
# Per 1,000 sum insured, age band, gender split
# =============================================================================

BHN_RATES: RangeTable = {
    (0, 4): {"nam": 1.98, "nu": 1.47},
    (5, 9): {"nam": 1.49, "nu": 1.16},
    (10, 14): {"nam": 1.64, "nu": 1.24},
    (15, 17): {"nam": 1.35, "nu": 1.08},
    (18, 19): {"nam": 1.38, "nu": 1.10},
    (20, 21): {"nam": 1.60, "nu": 1.32},
    (22, 24): {"nam": 1.11, "nu": 1.04},
    (25, 29): {"nam": 1.34, "nu": 1.45},
    (30, 34): {"nam": 2.02, "nu": 2.22},
    (35, 39): {"nam": 3.34, "nu": 3.76},
    (40, 44): {"nam": 5.37, "nu": 5.75},
    (45, 49): {"nam": 8.67, "nu": 8.86},
    (50, 54): {"nam": 12.41, "nu": 11.88},
    (55, 59): {"nam": 19.22, "nu": 18.26},
    (60, 64): {"nam": 28.31, "nu": 26.42},
    (65, 69): {"nam": 35.51, "nu": 31.31},
    (70, 70): {"nam": 47.55, "nu": 43.06},
    (71, 74): {"nam": 46.43, "nu": 42.70},
    (75, 79): {"nam": 74.05, "nu": 65.40},
    (80, 84): {"nam": 108.52, "nu": 93.54},
    (85, 85): {"nam": 126.75, "nu": 109.46},
}

# =============================================================================
# ACCIDENT RIDER
# Per 1,000 sum insured, by occupation risk group
# =============================================================================

ACCIDENT_RATES: dict[int, float] = {
    1: 0.6,
    2: 0.9,
    3: 1.3,
    4: 2.0,
}

# =============================================================================
# HOSPITAL SUPPORT RIDER
# Per 100 of the daily cash amount, age band
# =============================================================================

HOSPITAL_SUPPORT_RATES: RangeTable = {
    (0, 4): {"rate": 4.5},
    (5, 9): {"rate": 3.0},
    (10, 17): {"rate": 2.5},
    (18, 29): {"rate": 2.8},
    (30, 39): {"rate": 3.2},
    (40, 49): {"rate": 3.9},
    (50, 55): {"rate": 4.8},
    (56, 59): {"rate": 5.6},
}

# =============================================================================
# WAIVER OF PREMIUM (mdp3)
# Per 1,000 of the premium base, age band, gender split
# =============================================================================

MDP3_RATES: RangeTable = {
    (18, 24): {"nam": 18.5, "nu": 17.2},
    (25, 29): {"nam": 20.1, "nu": 18.9},
    (30, 34): {"nam": 23.4, "nu": 21.7},
    (35, 39): {"nam": 28.2, "nu": 25.9},
    (40, 44): {"nam": 35.6, "nu": 31.8},
    (45, 49): {"nam": 45.9, "nu": 39.7},
    (50, 54): {"nam": 60.3, "nu": 50.8},
    (55, 60): {"nam": 79.8, "nu": 66.1},
}

# =============================================================================
# MUL SUM-INSURED COEFFICIENTS
# Allowed sum insured / premium ratio by age band
# =============================================================================

MUL_COEFFICIENTS: RangeTable = {
    (0, 9): {"min": 55, "max": 150},
    (10, 16): {"min": 45, "max": 150},
    (17, 19): {"min": 40, "max": 150},
    (20, 29): {"min": 35, "max": 140},
    (30, 34): {"min": 25, "max": 120},
    (35, 39): {"min": 20, "max": 100},
    (40, 44): {"min": 20, "max": 70},
    (45, 49): {"min": 20, "max": 50},
    (50, 54): {"min": 15, "max": 40},
    (55, 59): {"min": 8, "max": 20},
    (60, 70): {"min": 5, "max": 10},
}


# =============================================================================
# LOOKUPS
# =============================================================================


def find_band(table: RangeTable, age: int) -> Optional[dict[str, float]]:
    """Find the first band containing the age."""
    for (age_min, age_max), row in table.items():
        if age_min <= age <= age_max:
            return row
    return None


def find_rate_by_range(table: RangeTable, age: int, column: str) -> float:
    """Rate from an age-band table, 0 when no band or column matches."""
    row = find_band(table, age)
    if row is None:
        return 0.0
    return row.get(column, 0.0) or 0.0


def find_rate_by_age(table: AgeTable, age: int, column: str) -> float:
    """Rate from an exact-age table, 0 when the age or column is missing."""
    row = table.get(age)
    if row is None:
        return 0.0
    return row.get(column, 0.0) or 0.0


def find_rate_by_term(table: dict[int, AgeTable], term: Optional[int], age: int, column: str) -> float:
    """Rate from a term-keyed table of exact-age tables."""
    if not term:
        return 0.0
    sub_table = table.get(int(term))
    if sub_table is None:
        return 0.0
    return find_rate_by_age(sub_table, age, column)


@dataclass(frozen=True)
class RateTables:
    """The full set of premium rate tables used by the calculation registry.

    Read-only after construction. Tests and alternative tariffs substitute
    individual tables with ``dataclasses.replace``.
    """

    pul: dict[str, AgeTable] = field(default_factory=lambda: PUL_RATES)
    an_binh_uu_viet: dict[int, AgeTable] = field(default_factory=lambda: AN_BINH_UU_VIET_RATES)
    health_scl: dict[str, RangeTable] = field(default_factory=lambda: HEALTH_SCL_RATES)
    bhn: RangeTable = field(default_factory=lambda: BHN_RATES)
    accident: dict[int, float] = field(default_factory=lambda: ACCIDENT_RATES)
    hospital_support: RangeTable = field(default_factory=lambda: HOSPITAL_SUPPORT_RATES)
    mdp3: RangeTable = field(default_factory=lambda: MDP3_RATES)
    mul_coefficients: RangeTable = field(default_factory=lambda: MUL_COEFFICIENTS)


DEFAULT_RATE_TABLES = RateTables()
