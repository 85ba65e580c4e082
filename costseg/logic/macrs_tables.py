"""
MACRS Depreciation Tables (IRS Publication 946)

Percentage-of-basis tables used by the schedule engine, keyed by recovery
period. Conventions are already baked into the percentages:

- HY: Half-Year (5, 7, 15 year property) - table length is life + 1
- MM: Mid-Month (27.5 and 39 year real property) - approximated as a
  first-year stub rate, a constant full-year rate and a final stub rate

Methods:
- 200DB: 200% Declining Balance (5, 7 year property)
- 150DB: 150% Declining Balance (15 year property)
- SL: Straight Line (real property)
"""

import logging
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# ==============================================================================
# 200% DECLINING BALANCE - HALF-YEAR CONVENTION
# ==============================================================================

# 5-Year Property (200% DB, HY)
MACRS_200DB_5Y_HY = (
    0.2000,  # Year 1
    0.3200,  # Year 2
    0.1920,  # Year 3
    0.1152,  # Year 4
    0.1152,  # Year 5
    0.0576,  # Year 6
)

# 7-Year Property (200% DB, HY)
MACRS_200DB_7Y_HY = (
    0.1429,  # Year 1
    0.2449,  # Year 2
    0.1749,  # Year 3
    0.1249,  # Year 4
    0.0893,  # Year 5
    0.0892,  # Year 6
    0.0893,  # Year 7
    0.0446,  # Year 8
)

# ==============================================================================
# 150% DECLINING BALANCE - HALF-YEAR CONVENTION
# ==============================================================================

# 15-Year Property (150% DB, HY)
MACRS_150DB_15Y_HY = (
    0.0500,  # Year 1
    0.0950,  # Year 2
    0.0855,  # Year 3
    0.0770,  # Year 4
    0.0693,  # Year 5
    0.0623,  # Year 6
    0.0590,  # Year 7
    0.0590,  # Year 8
    0.0591,  # Year 9
    0.0590,  # Year 10
    0.0591,  # Year 11
    0.0590,  # Year 12
    0.0591,  # Year 13
    0.0590,  # Year 14
    0.0591,  # Year 15
    0.0295,  # Year 16
)

# ==============================================================================
# STRAIGHT LINE - REAL PROPERTY (MID-MONTH APPROXIMATION)
# ==============================================================================

def build_sl_mm_table(
    first_year_pct: float,
    full_year_pct: float,
    last_year_pct: float,
    length: int
) -> Tuple[float, ...]:
    """
    Build a real-property straight-line table.

    The mid-month convention is not modeled month by month. Instead the
    table is a first-year stub, (length - 2) full years and a final stub.

    Args:
        first_year_pct: Rate for the placed-in-service year
        full_year_pct: Rate for every interior year
        last_year_pct: Rate for the final year
        length: Total number of years in the table

    Returns:
        Tuple of depreciation percentages
    """
    table = [first_year_pct]
    for _ in range(length - 2):
        table.append(full_year_pct)
    table.append(last_year_pct)
    return tuple(table)


# Residential rental property (27.5-year, SL) - 28 entries
MACRS_SL_27_5Y_MM = build_sl_mm_table(0.03636, 0.03636, 0.01515, 28)

# Nonresidential real property (39-year, SL) - 40 entries
MACRS_SL_39Y_MM = build_sl_mm_table(0.02461, 0.02564, 0.00107, 40)

# ==============================================================================
# TABLE LOOKUP
# ==============================================================================

MACRS_TABLES: Dict[float, Tuple[float, ...]] = {
    5: MACRS_200DB_5Y_HY,
    7: MACRS_200DB_7Y_HY,
    15: MACRS_150DB_15Y_HY,
    27.5: MACRS_SL_27_5Y_MM,
    39: MACRS_SL_39Y_MM,
}


def get_macrs_table(recovery_period: float) -> Optional[Tuple[float, ...]]:
    """
    Get the MACRS percentage table for a recovery period.

    Args:
        recovery_period: 5, 7, 15, 27.5 or 39

    Returns:
        Tuple of yearly percentages, or None if no table exists
    """
    table = MACRS_TABLES.get(recovery_period)
    if table is None:
        logger.debug(f"No MACRS table for {recovery_period}-year property")
    return table


def get_macrs_rate(recovery_period: float, year_index: int) -> Optional[float]:
    """
    Look up the MACRS percentage for a year of recovery.

    Args:
        recovery_period: Recovery period in years
        year_index: 0-based year index (0 = placed-in-service year)

    Returns:
        Percentage as decimal, or None when the recovery period has no table
        or the index falls outside it (fully depreciated)
    """
    table = get_macrs_table(recovery_period)
    if table is None:
        return None
    if year_index < 0 or year_index >= len(table):
        return None
    return table[year_index]


def calculate_macrs_depreciation(
    basis: float,
    recovery_period: float,
    year_index: int
) -> float:
    """
    Calculate MACRS depreciation for a single year.

    Args:
        basis: Depreciable basis (cost - Section 179 - bonus)
        recovery_period: Recovery period in years
        year_index: 0-based year index

    Returns:
        Depreciation amount (0.0 past the end of the table)
    """
    if basis <= 0:
        return 0.0

    rate = get_macrs_rate(recovery_period, year_index)
    if rate is None:
        return 0.0

    return basis * rate


def table_total(recovery_period: float) -> float:
    """Sum of a table's percentages (~1.0 for full recovery)."""
    table = get_macrs_table(recovery_period)
    return sum(table) if table else 0.0


def supported_recovery_periods() -> List[float]:
    """Recovery periods that have a MACRS table, ascending."""
    return sorted(MACRS_TABLES.keys())
