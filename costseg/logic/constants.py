# costseg/logic/constants.py
"""
Centralized Constants Module

Schedule horizon, election priorities and tolerances used across the
depreciation engine, summaries and validators.

References:
- IRS Publication 946
- IRC Sections 168(k), 179
"""

# ==============================================================================
# SCHEDULE HORIZON
# ==============================================================================

# Number of calendar years produced for every schedule, starting with the
# placed-in-service year. Longest table (39-year real property) has 40 entries.
SCHEDULE_YEARS = 40

# Summary windows (first N schedule years)
FIVE_YEAR_WINDOW = 5
TEN_YEAR_WINDOW = 10


# ==============================================================================
# ELECTIONS
# ==============================================================================

# Section 179 is absorbed first-come-first-served in this exact order.
# Do not reorder and do not switch to proportional allocation.
SECTION_179_PRIORITY = ("5year", "7year", "15year")

# Bonus depreciation applies to the same recovery classes (independently)
BONUS_ELIGIBLE_CATEGORIES = ("5year", "7year", "15year")

# Recovery lives that qualify for Section 179 and bonus depreciation
ACCELERATED_LIVES = (5, 7, 15)


# ==============================================================================
# ALLOCATION
# ==============================================================================

ALLOCATION_MIN_PCT = 0.0
ALLOCATION_MAX_PCT = 100.0
ALLOCATION_TARGET_PCT = 100.0

# Allowed drift before the allocation-sum advisory fires
ALLOCATION_SUM_TOLERANCE = 0.01


# ==============================================================================
# NUMERIC
# ==============================================================================

# Output rounding for JSON responses (cents)
CURRENCY_DECIMALS = 2
