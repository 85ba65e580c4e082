"""
Cost Segregation Asset Categories

The six fixed recovery classes a property cost is split across, plus the
property-type gating of the two real-property classes.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Mapping, Optional

from .constants import ACCELERATED_LIVES


@dataclass(frozen=True)
class AssetCategory:
    """One cost segregation bucket."""
    id: str
    name: str
    life: float  # Recovery period in years, 0 for land
    description: str

    @property
    def is_depreciable(self) -> bool:
        return self.life > 0

    @property
    def is_section_179_eligible(self) -> bool:
        return self.life in ACCELERATED_LIVES

    @property
    def is_bonus_eligible(self) -> bool:
        return self.life in ACCELERATED_LIVES

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["section_179_eligible"] = self.is_section_179_eligible
        data["bonus_eligible"] = self.is_bonus_eligible
        return data


LAND = AssetCategory("land", "Land (Non-Depreciable)", 0, "Raw land value - not depreciable")
FIVE_YEAR = AssetCategory("5year", "5-Year Property", 5, "Appliances, carpeting, certain equipment")
SEVEN_YEAR = AssetCategory("7year", "7-Year Property", 7, "Furniture, fixtures, office equipment")
FIFTEEN_YEAR = AssetCategory("15year", "15-Year Property", 15, "Land improvements, landscaping, parking lots")
RESIDENTIAL = AssetCategory("residential", "Residential (27.5 yr)", 27.5, "Residential rental property structures")
COMMERCIAL = AssetCategory("commercial", "Commercial (39 yr)", 39, "Nonresidential real property")

# Display and computation order
ASSET_CATEGORIES = (LAND, FIVE_YEAR, SEVEN_YEAR, FIFTEEN_YEAR, RESIDENTIAL, COMMERCIAL)

CATEGORIES_BY_ID: Dict[str, AssetCategory] = {cat.id: cat for cat in ASSET_CATEGORIES}

CATEGORY_IDS = tuple(cat.id for cat in ASSET_CATEGORIES)

# Large-life structure category enabled for each property type
STRUCTURE_CATEGORY_BY_PROPERTY_TYPE = {
    "commercial": COMMERCIAL.id,
    "residential": RESIDENTIAL.id,
}

# Original form defaults: 15% land, 25% short-life, 60% structure
DEFAULT_ALLOCATIONS = {
    "land": 15.0,
    "5year": 8.0,
    "7year": 5.0,
    "15year": 12.0,
    "residential": 0.0,
    "commercial": 60.0,
}


def get_category(category_id: str) -> Optional[AssetCategory]:
    """Look up a category by id (None if unknown)."""
    return CATEGORIES_BY_ID.get(category_id)


def _type_value(property_type) -> str:
    return getattr(property_type, "value", property_type)


def active_structure_category(property_type) -> str:
    """Structure category id enabled for the property type."""
    return STRUCTURE_CATEGORY_BY_PROPERTY_TYPE[_type_value(property_type)]


def inactive_structure_category(property_type) -> str:
    """Structure category id gated off for the property type."""
    active = active_structure_category(property_type)
    return RESIDENTIAL.id if active == COMMERCIAL.id else COMMERCIAL.id


def active_categories(property_type) -> List[AssetCategory]:
    """Categories a user may allocate to for the given property type."""
    inactive = inactive_structure_category(property_type)
    return [cat for cat in ASSET_CATEGORIES if cat.id != inactive]


def switch_property_type(allocations: Mapping[str, float], property_type) -> Dict[str, float]:
    """
    Move the structure allocation onto the category the property type enables.

    Mirrors what happens when the user flips property type: the gated-off
    structure percentage is folded into the active one and zeroed.

    Args:
        allocations: Current category -> percentage mapping
        property_type: "commercial" or "residential" (or PropertyType)

    Returns:
        New allocation mapping; the input is not modified
    """
    active = active_structure_category(property_type)
    inactive = inactive_structure_category(property_type)

    result = {cat_id: float(allocations.get(cat_id, 0.0) or 0.0) for cat_id in CATEGORY_IDS}
    result[active] = result[active] + result[inactive]
    result[inactive] = 0.0
    return result
