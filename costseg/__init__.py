# costseg/__init__.py
"""
Cost Segregation Depreciation Package

Multi-year tax depreciation schedules for a single real-estate asset:
- Cost segregation allocation across MACRS recovery classes
- Section 179 expensing (5-, 7- and 15-year property, in priority order)
- Bonus depreciation by placed-in-service year
- MACRS table or straight-line periodic depreciation over a 40-year horizon
"""

__version__ = "1.0.0"
__author__ = "Cost Segregation Team"
