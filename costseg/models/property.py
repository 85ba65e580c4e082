from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing import Dict, Mapping, Optional
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
import math
import logging

from ..logic.asset_categories import CATEGORY_IDS, DEFAULT_ALLOCATIONS
from ..logic.constants import ALLOCATION_MIN_PCT, ALLOCATION_MAX_PCT

logger = logging.getLogger(__name__)


class PropertyType(str, Enum):
    COMMERCIAL = "commercial"
    RESIDENTIAL = "residential"


class DepreciationMethod(str, Enum):
    MACRS = "macrs"
    STRAIGHT_LINE = "straight-line"


_METHOD_ALIASES = {
    "macrs": DepreciationMethod.MACRS,
    "straight-line": DepreciationMethod.STRAIGHT_LINE,
    "straight_line": DepreciationMethod.STRAIGHT_LINE,
    "straight": DepreciationMethod.STRAIGHT_LINE,
    "sl": DepreciationMethod.STRAIGHT_LINE,
}


def _to_float(v) -> float:
    if v is None or v == "":
        return 0.0
    if isinstance(v, str):
        v = v.replace(",", "").replace("$", "").strip()
    try:
        result = float(v)
    except (ValueError, TypeError):
        return 0.0
    # "nan" and "inf" parse but are not amounts
    if not math.isfinite(result):
        return 0.0
    return result


class PropertyInputs(BaseModel):
    """
    Everything one depreciation run needs, as an immutable record.

    Raw form values are coerced the way the calculator form treats them:
    unparseable numbers become 0 and allocation percentages are clamped to
    [0, 100]. Nothing here checks that allocations add up to 100; see
    logic.validators for the advisory checks.
    """
    model_config = ConfigDict(frozen=True)

    property_name: Optional[str] = Field(None, description="Informational label")
    total_cost: float = Field(0.0, description="Total property cost (purchase price + capitalized costs)")
    placed_in_service_date: date = Field(
        default_factory=lambda: date(date.today().year, 1, 1),
        description="Date Placed in Service"
    )
    property_type: PropertyType = Field(PropertyType.COMMERCIAL, description="Gates the active structure category")
    allocations: Mapping[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_ALLOCATIONS),
        validate_default=True,
        description="Category id -> percent of total cost (read-only)"
    )
    depreciation_method: DepreciationMethod = DepreciationMethod.MACRS

    # Elections
    use_section_179: bool = False
    section_179_amount: float = Field(0.0, description="Requested Section 179 expense (only used if elected)")
    use_bonus_depreciation: bool = True

    @field_validator('placed_in_service_date', mode='before')
    @classmethod
    def parse_date(cls, v):
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        if isinstance(v, str):
            formats = ['%Y-%m-%d', '%m/%d/%Y', '%Y/%m/%d']
            for fmt in formats:
                try:
                    return datetime.strptime(v.strip(), fmt).date()
                except ValueError:
                    continue
            raise ValueError(f"Unrecognized placed-in-service date: {v!r}")
        # pandas Timestamp and similar
        if hasattr(v, "date") and callable(v.date):
            return v.date()
        return v

    @field_validator('total_cost', 'section_179_amount', mode='before')
    @classmethod
    def validate_numeric_fields(cls, v):
        return _to_float(v)

    @field_validator('allocations', mode='before')
    @classmethod
    def clamp_allocations(cls, v):
        if v is None:
            v = {}
        if not isinstance(v, Mapping):
            raise ValueError("allocations must be a mapping of category id to percent")

        unknown = [k for k in v if k not in CATEGORY_IDS]
        if unknown:
            logger.warning(f"Ignoring allocations for unknown categories: {unknown}")

        result = {}
        for cat_id in CATEGORY_IDS:
            pct = _to_float(v.get(cat_id, 0.0))
            result[cat_id] = max(ALLOCATION_MIN_PCT, min(ALLOCATION_MAX_PCT, pct))
        return result

    @field_validator('allocations')
    @classmethod
    def freeze_allocations(cls, v):
        return MappingProxyType(dict(v))

    @field_serializer('allocations')
    def serialize_allocations(self, v) -> Dict[str, float]:
        return dict(v)

    @field_validator('depreciation_method', mode='before')
    @classmethod
    def normalize_method(cls, v):
        if isinstance(v, str):
            return _METHOD_ALIASES.get(v.strip().lower(), v)
        return v

    @field_validator('property_type', mode='before')
    @classmethod
    def normalize_property_type(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def placed_in_service_year(self) -> int:
        return self.placed_in_service_date.year

    @property
    def total_allocation(self) -> float:
        """Sum of allocation percentages (should be 100)."""
        return sum(self.allocations.values())

    def allocation_for(self, category_id: str) -> float:
        return self.allocations.get(category_id, 0.0)

    def allocated_amount(self, category_id: str) -> float:
        """Dollar amount assigned to a category before any elections."""
        return (self.allocation_for(category_id) / 100) * max(self.total_cost, 0.0)
