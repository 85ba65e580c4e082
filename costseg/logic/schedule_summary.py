"""
Depreciation Schedule Summaries

Pure reductions over a computed schedule: first-year, 5-year and 10-year
totals, total depreciable basis, per-category summaries and running
cumulative depreciation. Also builds pandas tables for display and export
by the presentation layer.
"""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any
import pandas as pd

from .asset_categories import ASSET_CATEGORIES, CATEGORIES_BY_ID, LAND
from .constants import FIVE_YEAR_WINDOW, TEN_YEAR_WINDOW
from .depreciation_schedule import DepreciationSchedule, category_ids_with_allocation
from ..models.property import PropertyInputs


# ==============================================================================
# SUMMARY FIGURES
# ==============================================================================

@dataclass(frozen=True)
class ScheduleSummary:
    first_year_total: float
    five_year_total: float
    ten_year_total: float
    total_depreciable_basis: float
    # Same figures as percent of total cost (0.0 when cost is 0)
    first_year_pct: float
    five_year_pct: float
    ten_year_pct: float
    depreciable_basis_pct: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def total_for_years(schedule: DepreciationSchedule, n_years: int) -> float:
    """Total depreciation over the first n schedule years."""
    return sum(row.total_depreciation for row in schedule.years[:n_years])


def first_year_total(schedule: DepreciationSchedule) -> float:
    return schedule.years[0].total_depreciation if schedule.years else 0.0


def five_year_total(schedule: DepreciationSchedule) -> float:
    return total_for_years(schedule, FIVE_YEAR_WINDOW)


def ten_year_total(schedule: DepreciationSchedule) -> float:
    return total_for_years(schedule, TEN_YEAR_WINDOW)


def total_depreciable_basis(inputs: PropertyInputs) -> float:
    """Total cost less the land allocation (0 when cost is not positive)."""
    total_cost = max(inputs.total_cost, 0.0)
    return total_cost - inputs.allocated_amount(LAND.id)


def _pct_of_cost(amount: float, total_cost: float) -> float:
    if total_cost <= 0:
        return 0.0
    return amount / total_cost * 100


def summarize(schedule: DepreciationSchedule, inputs: PropertyInputs) -> ScheduleSummary:
    """Headline figures for a schedule."""
    first = first_year_total(schedule)
    five = five_year_total(schedule)
    ten = ten_year_total(schedule)
    depreciable = total_depreciable_basis(inputs)

    return ScheduleSummary(
        first_year_total=first,
        five_year_total=five,
        ten_year_total=ten,
        total_depreciable_basis=depreciable,
        first_year_pct=_pct_of_cost(first, inputs.total_cost),
        five_year_pct=_pct_of_cost(five, inputs.total_cost),
        ten_year_pct=_pct_of_cost(ten, inputs.total_cost),
        depreciable_basis_pct=_pct_of_cost(depreciable, inputs.total_cost),
    )


def cumulative_totals(schedule: DepreciationSchedule) -> List[float]:
    """Running total of depreciation through each schedule year."""
    result = []
    running = 0.0
    for row in schedule.years:
        running += row.total_depreciation
        result.append(running)
    return result


# ==============================================================================
# PER-CATEGORY SUMMARY
# ==============================================================================

def category_summaries(schedule: DepreciationSchedule, inputs: PropertyInputs) -> List[Dict[str, Any]]:
    """
    One row per category that received an allocation, in display order.

    Land is included (it carries allocated cost) but always shows zero
    depreciation.
    """
    rows = []
    for cat_id in category_ids_with_allocation(inputs):
        cat = CATEGORIES_BY_ID[cat_id]
        pct = inputs.allocation_for(cat_id)
        result = schedule.category(cat_id)
        rows.append({
            "category_id": cat.id,
            "name": cat.name,
            "life": cat.life,
            "allocation_pct": pct,
            "allocated_amount": result.allocated_basis,
            "section_179": result.section_179,
            "bonus": result.bonus,
            "remaining_basis": result.remaining_basis,
            "first_year_depreciation": result.first_year_depreciation,
            "cumulative": result.cumulative,
        })
    return rows


# ==============================================================================
# DATAFRAME VIEWS
# ==============================================================================

def schedule_to_dataframe(
    schedule: DepreciationSchedule,
    inputs: PropertyInputs,
    include_inactive: bool = False
) -> pd.DataFrame:
    """
    Year-by-year schedule as a wide table.

    Columns:
    - Year
    - One column per depreciable category (only allocated ones unless
      include_inactive)
    - Total
    - Cumulative

    Args:
        schedule: Computed schedule
        inputs: Inputs the schedule was computed from
        include_inactive: Keep categories with no allocation

    Returns:
        DataFrame with one row per schedule year
    """
    if include_inactive:
        columns = [cat for cat in ASSET_CATEGORIES if cat.is_depreciable]
    else:
        columns = [CATEGORIES_BY_ID[cat_id] for cat_id in category_ids_with_allocation(inputs, depreciable_only=True)]

    cumulative = cumulative_totals(schedule)
    data = []
    for row, running in zip(schedule.years, cumulative):
        record = {"Year": row.year}
        for cat in columns:
            record[cat.name] = row.depreciation[cat.id]
        record["Total"] = row.total_depreciation
        record["Cumulative"] = running
        data.append(record)

    return pd.DataFrame(data, columns=["Year"] + [cat.name for cat in columns] + ["Total", "Cumulative"])


def category_summary_dataframe(schedule: DepreciationSchedule, inputs: PropertyInputs) -> pd.DataFrame:
    """Per-category summary table (see category_summaries)."""
    rows = category_summaries(schedule, inputs)
    df = pd.DataFrame(rows, columns=[
        "category_id", "name", "life", "allocation_pct", "allocated_amount",
        "section_179", "bonus", "remaining_basis", "first_year_depreciation", "cumulative",
    ])
    return df.rename(columns={
        "category_id": "Category ID",
        "name": "Category",
        "life": "Recovery Period",
        "allocation_pct": "Allocation %",
        "allocated_amount": "Allocated Amount",
        "section_179": "Section 179",
        "bonus": "Bonus Depreciation",
        "remaining_basis": "Depreciable Basis",
        "first_year_depreciation": "First Year",
        "cumulative": "Total Depreciation",
    })
