# costseg/logic/__init__.py
"""
Cost Segregation Logic Module

Module Structure:
- constants.py: Schedule horizon, election priorities, tolerances
- macrs_tables.py: MACRS percentage tables by recovery period
- tax_year_config.py: Bonus rates, Section 179 limits, tax year status
- asset_categories.py: The six cost segregation categories
- depreciation_schedule.py: Schedule engine (basis -> 179 -> bonus -> periodic)
- schedule_summary.py: Summary reductions and DataFrame views
- validators.py: Advisory input checks
- config_manager.py: Application configuration
"""
