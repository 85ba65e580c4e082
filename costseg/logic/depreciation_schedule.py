"""
Cost Segregation Depreciation Schedule

Builds the year-by-year depreciation schedule for one property:

1. Allocate total cost across the asset categories
2. Apply Section 179 to 5-, 7- and 15-year property, in that order
3. Apply bonus depreciation to what is left of the same categories
4. Depreciate the remaining basis with MACRS tables or straight-line
   over a fixed 40-year horizon, adding Section 179 and bonus to year one

Step order matters: each step works on the basis the previous one left.
The computation is a pure function of its inputs.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Any
import logging

from .asset_categories import ASSET_CATEGORIES, AssetCategory
from .constants import SCHEDULE_YEARS, SECTION_179_PRIORITY, BONUS_ELIGIBLE_CATEGORIES
from .macrs_tables import calculate_macrs_depreciation
from .tax_year_config import get_bonus_percentage
from ..logging_utils import timed
from ..models.property import PropertyInputs, DepreciationMethod

logger = logging.getLogger(__name__)


# ==============================================================================
# RESULT TYPES
# ==============================================================================

@dataclass(frozen=True)
class ScheduleYear:
    """One calendar year of the schedule."""
    year: int
    year_index: int
    depreciation: Dict[str, float]
    total_depreciation: float

    def to_dict(self, decimals: Optional[int] = None) -> Dict[str, Any]:
        def _r(x):
            return round(x, decimals) if decimals is not None else x
        return {
            "year": self.year,
            "year_index": self.year_index,
            "depreciation": {k: _r(v) for k, v in self.depreciation.items()},
            "total_depreciation": _r(self.total_depreciation),
        }


@dataclass(frozen=True)
class CategorySchedule:
    """Final state of one category after a run."""
    category: AssetCategory
    allocated_basis: float   # allocation% x total cost
    section_179: float
    bonus: float
    remaining_basis: float   # basis left for periodic depreciation
    cumulative: float        # everything deducted over the horizon, incl. 179/bonus
    yearly_depreciation: Tuple[float, ...]

    @property
    def category_id(self) -> str:
        return self.category.id

    @property
    def first_year_depreciation(self) -> float:
        return self.yearly_depreciation[0] if self.yearly_depreciation else 0.0

    def to_dict(self, decimals: Optional[int] = None) -> Dict[str, Any]:
        def _r(x):
            return round(x, decimals) if decimals is not None else x
        return {
            "category_id": self.category.id,
            "name": self.category.name,
            "life": self.category.life,
            "allocated_basis": _r(self.allocated_basis),
            "section_179": _r(self.section_179),
            "bonus": _r(self.bonus),
            "remaining_basis": _r(self.remaining_basis),
            "cumulative": _r(self.cumulative),
            "first_year_depreciation": _r(self.first_year_depreciation),
        }


@dataclass(frozen=True)
class DepreciationSchedule:
    """Complete result of compute_schedule()."""
    placed_in_service_year: int
    method: DepreciationMethod
    bonus_rate: float  # rate actually applied (0 when not elected)
    years: Tuple[ScheduleYear, ...]
    categories: Dict[str, CategorySchedule]

    @property
    def total_section_179(self) -> float:
        return sum(c.section_179 for c in self.categories.values())

    @property
    def total_bonus(self) -> float:
        return sum(c.bonus for c in self.categories.values())

    @property
    def total_depreciation(self) -> float:
        return sum(y.total_depreciation for y in self.years)

    def category(self, category_id: str) -> CategorySchedule:
        return self.categories[category_id]

    def to_dict(self, decimals: Optional[int] = None) -> Dict[str, Any]:
        return {
            "placed_in_service_year": self.placed_in_service_year,
            "method": self.method.value,
            "bonus_rate": self.bonus_rate,
            "years": [y.to_dict(decimals) for y in self.years],
            "categories": {k: c.to_dict(decimals) for k, c in self.categories.items()},
        }


# ==============================================================================
# WORKING STATE
# ==============================================================================

@dataclass
class _CategoryBasis:
    """Mutable per-category accumulator, local to one computation."""
    category: AssetCategory
    allocated_basis: float
    basis: float
    section_179: float = 0.0
    bonus: float = 0.0
    cumulative: float = 0.0
    yearly_depreciation: List[float] = field(default_factory=list)

    def freeze(self) -> CategorySchedule:
        return CategorySchedule(
            category=self.category,
            allocated_basis=self.allocated_basis,
            section_179=self.section_179,
            bonus=self.bonus,
            remaining_basis=self.basis,
            cumulative=self.cumulative,
            yearly_depreciation=tuple(self.yearly_depreciation),
        )


# ==============================================================================
# PIPELINE STEPS
# ==============================================================================

def allocate_basis(inputs: PropertyInputs) -> Dict[str, _CategoryBasis]:
    """Step 1: split total cost across every category."""
    state = {}
    for cat in ASSET_CATEGORIES:
        basis = inputs.allocated_amount(cat.id)
        state[cat.id] = _CategoryBasis(category=cat, allocated_basis=basis, basis=basis)
    return state


def apply_section_179(state: Dict[str, _CategoryBasis], elected_amount: float) -> float:
    """
    Step 2: expense the elected amount against eligible categories in
    SECTION_179_PRIORITY order, each capped at its own basis.

    Returns:
        Amount of the election left unused
    """
    remaining = max(elected_amount, 0.0)

    for cat_id in SECTION_179_PRIORITY:
        if remaining <= 0:
            break
        cat_state = state[cat_id]
        deduction = min(remaining, cat_state.basis)
        cat_state.section_179 = deduction
        cat_state.basis -= deduction
        remaining -= deduction

    if remaining > 0:
        logger.debug(f"Section 179: {remaining:,.2f} of election exceeds eligible basis")
    return remaining


def apply_bonus(state: Dict[str, _CategoryBasis], bonus_rate: float) -> None:
    """Step 3: bonus on each eligible category's post-179 basis."""
    if bonus_rate <= 0:
        return

    for cat_id in BONUS_ELIGIBLE_CATEGORIES:
        cat_state = state[cat_id]
        bonus = cat_state.basis * bonus_rate
        cat_state.bonus = bonus
        cat_state.basis -= bonus


def periodic_depreciation(
    basis: float,
    life: float,
    year_index: int,
    method: DepreciationMethod
) -> float:
    """
    Regular depreciation for one category-year, before year-one add-ons.

    MACRS uses the table rate, 0 past the end of the table. Straight-line
    spreads the basis evenly over the nominal life with no stub year.
    """
    if life <= 0:
        return 0.0

    if method == DepreciationMethod.MACRS:
        return calculate_macrs_depreciation(basis, life, year_index)

    if year_index < life:
        return basis / life
    return 0.0


# ==============================================================================
# SCHEDULE
# ==============================================================================

@timed
def compute_schedule(inputs: PropertyInputs, years: int = SCHEDULE_YEARS) -> DepreciationSchedule:
    """
    Compute the full depreciation schedule for a property.

    Args:
        inputs: Property inputs and elections
        years: Horizon in calendar years (default 40)

    Returns:
        DepreciationSchedule with one row per year and final per-category state
    """
    service_year = inputs.placed_in_service_year
    method = inputs.depreciation_method

    state = allocate_basis(inputs)

    if inputs.use_section_179:
        apply_section_179(state, inputs.section_179_amount)

    bonus_rate = get_bonus_percentage(service_year) if inputs.use_bonus_depreciation else 0.0
    if bonus_rate > 0:
        apply_bonus(state, bonus_rate)

    rows = []
    for year_index in range(years):
        depreciation = {}
        year_total = 0.0

        for cat in ASSET_CATEGORIES:
            cat_state = state[cat.id]
            if not cat.is_depreciable:
                cat_state.yearly_depreciation.append(0.0)
                depreciation[cat.id] = 0.0
                continue

            amount = periodic_depreciation(cat_state.basis, cat.life, year_index, method)

            if year_index == 0:
                amount += cat_state.section_179 + cat_state.bonus

            cat_state.yearly_depreciation.append(amount)
            cat_state.cumulative += amount
            depreciation[cat.id] = amount
            year_total += amount

        rows.append(ScheduleYear(
            year=service_year + year_index,
            year_index=year_index,
            depreciation=depreciation,
            total_depreciation=year_total,
        ))

    logger.debug(
        f"Computed {years}-year {method.value} schedule for {service_year}: "
        f"179={sum(s.section_179 for s in state.values()):,.2f}, "
        f"bonus={sum(s.bonus for s in state.values()):,.2f} at {bonus_rate:.0%}"
    )

    return DepreciationSchedule(
        placed_in_service_year=service_year,
        method=method,
        bonus_rate=bonus_rate,
        years=tuple(rows),
        categories={cat_id: cat_state.freeze() for cat_id, cat_state in state.items()},
    )


def category_ids_with_allocation(inputs: PropertyInputs, depreciable_only: bool = False) -> List[str]:
    """Category ids with a positive allocation, in display order."""
    result = []
    for cat in ASSET_CATEGORIES:
        if inputs.allocation_for(cat.id) <= 0:
            continue
        if depreciable_only and not cat.is_depreciable:
            continue
        result.append(cat.id)
    return result
