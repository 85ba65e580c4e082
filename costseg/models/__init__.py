"""
Data Models for the cost segregation engine

Contains the Pydantic input record for a depreciation run.
"""

from .property import PropertyInputs, PropertyType, DepreciationMethod

__all__ = ["PropertyInputs", "PropertyType", "DepreciationMethod"]
