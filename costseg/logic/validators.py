# costseg/logic/validators.py
"""
Property Input Validation Module

Advisory checks on a depreciation run. Nothing here blocks a calculation:
the schedule engine computes on whatever inputs it is given, and these
messages are for the caller to show next to the result.

Checks:
- Allocation percentages should total 100%
- Structure allocation should match the property type
- Bonus depreciation year coverage
- Section 179 request vs. eligible basis and statutory limit
- Placed-in-service year support status
"""

from typing import List, Dict, Tuple, Any

from ..logging_utils import get_logger
from ..models.property import PropertyInputs
from .asset_categories import CATEGORIES_BY_ID, inactive_structure_category
from .constants import ALLOCATION_TARGET_PCT, ALLOCATION_SUM_TOLERANCE, SECTION_179_PRIORITY
from .tax_year_config import (
    BONUS_RATES,
    TaxYearStatus,
    get_bonus_percentage,
    get_section_179_limits,
    get_tax_year_status,
)

logger = get_logger(__name__)


def eligible_section_179_basis(inputs: PropertyInputs) -> float:
    """Allocated basis of the categories Section 179 can absorb."""
    total_cost = max(inputs.total_cost, 0.0)
    return sum((inputs.allocation_for(cat_id) / 100) * total_cost for cat_id in SECTION_179_PRIORITY)


def validate_inputs(inputs: PropertyInputs) -> Tuple[List[str], Dict[str, Any]]:
    """
    Advisory validation of property inputs.

    Returns:
        issues: list of short messages; "INFO:" prefixed ones are informational
        details: dict of issue_key -> supporting values
    """
    issues = []
    details = {}

    service_year = inputs.placed_in_service_year

    # ==========================================================================
    # 1. COST
    # ==========================================================================

    if inputs.total_cost <= 0:
        issues.append("Total cost is zero or negative - every amount in the schedule will be zero.")
        details["non_positive_cost"] = {"total_cost": inputs.total_cost}

    # ==========================================================================
    # 2. ALLOCATION
    # ==========================================================================

    total_pct = inputs.total_allocation
    if abs(total_pct - ALLOCATION_TARGET_PCT) > ALLOCATION_SUM_TOLERANCE:
        issues.append(
            f"Allocations total {total_pct:.1f}%, not 100%. "
            f"Schedule is computed on {total_pct:.1f}% of total cost."
        )
        details["allocation_sum"] = {"total_pct": total_pct, "expected_pct": ALLOCATION_TARGET_PCT}

    inactive = inactive_structure_category(inputs.property_type)
    inactive_pct = inputs.allocation_for(inactive)
    if inactive_pct > 0:
        issues.append(
            f"{CATEGORIES_BY_ID[inactive].name} has {inactive_pct:.1f}% allocated "
            f"but property type is {inputs.property_type.value}."
        )
        details["inactive_structure_allocation"] = {"category_id": inactive, "allocation_pct": inactive_pct}

    # ==========================================================================
    # 3. BONUS DEPRECIATION
    # ==========================================================================

    if inputs.use_bonus_depreciation:
        rate = get_bonus_percentage(service_year)
        if service_year not in BONUS_RATES:
            issues.append(
                f"No bonus depreciation rate for {service_year} "
                f"(table covers {min(BONUS_RATES)}-{max(BONUS_RATES)}). Bonus treated as 0%."
            )
            details["bonus_year_out_of_range"] = {"year": service_year}
        elif rate <= 0:
            issues.append(f"INFO: Bonus depreciation rate for {service_year} is 0%. No bonus applied.")

    # ==========================================================================
    # 4. SECTION 179
    # ==========================================================================

    if inputs.use_section_179 and inputs.section_179_amount > 0:
        eligible = eligible_section_179_basis(inputs)
        if inputs.section_179_amount > eligible:
            unused = inputs.section_179_amount - eligible
            issues.append(
                f"Section 179 request ${inputs.section_179_amount:,.0f} exceeds eligible "
                f"5/7/15-year basis ${eligible:,.0f}; ${unused:,.0f} will not be used."
            )
            details["section_179_excess"] = {
                "requested": inputs.section_179_amount,
                "eligible_basis": eligible,
                "unused": unused,
            }

        limits = get_section_179_limits(service_year)
        max_deduction = limits.get("max_deduction")
        if max_deduction is not None and inputs.section_179_amount > max_deduction:
            issues.append(
                f"Section 179 request ${inputs.section_179_amount:,.0f} exceeds the "
                f"{service_year} dollar limit of ${max_deduction:,.0f}. "
                f"Deduction is also limited by business income and phase-out."
            )
            details["section_179_limit"] = {"requested": inputs.section_179_amount, **limits}

    # ==========================================================================
    # 5. TAX YEAR STATUS
    # ==========================================================================

    status, message = get_tax_year_status(service_year)
    if status == TaxYearStatus.UNSUPPORTED:
        issues.append(message)
        details["tax_year_status"] = {"year": service_year, "status": status.value}
    elif status == TaxYearStatus.ESTIMATED:
        issues.append(f"INFO: {message}")
        details["tax_year_status"] = {"year": service_year, "status": status.value}

    if issues:
        logger.debug(f"Input validation produced {len(issues)} advisories")

    return issues, details


def get_warnings(issues: List[str]) -> List[str]:
    """Issues that are not purely informational."""
    return [i for i in issues if not i.startswith("INFO:")]


def has_allocation_mismatch(inputs: PropertyInputs) -> bool:
    """True when allocations do not total 100%."""
    return abs(inputs.total_allocation - ALLOCATION_TARGET_PCT) > ALLOCATION_SUM_TOLERANCE
