"""Shared fixtures for the depreciation tests."""

import pytest
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from costseg.models.property import PropertyInputs


# Typical commercial study: $1M building, 25% of cost reclassified to
# 5/7/15-year property.
STUDY_ALLOCATIONS = {
    "land": 15,
    "5year": 8,
    "7year": 5,
    "15year": 12,
    "residential": 0,
    "commercial": 60,
}


@pytest.fixture
def make_inputs():
    """Factory for PropertyInputs with the standard study as defaults."""
    def _make(**overrides):
        values = {
            "property_name": "Test Property",
            "total_cost": 1_000_000,
            "placed_in_service_date": date(2024, 1, 1),
            "property_type": "commercial",
            "allocations": dict(STUDY_ALLOCATIONS),
            "depreciation_method": "macrs",
            "use_section_179": False,
            "section_179_amount": 0,
            "use_bonus_depreciation": True,
        }
        values.update(overrides)
        return PropertyInputs(**values)
    return _make
