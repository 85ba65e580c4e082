# costseg/logic/tax_year_config.py
"""
Tax Year Configuration Module

Centralizes all placed-in-service-year dependent values:
- Bonus depreciation percentage (TCJA phase-down, IRC §168(k))
- Section 179 dollar limit and phase-out threshold (IRC §179(b))
- Tax year support status

CONFIGURATION SOURCE:
- Primary: JSON rules file (COSTSEG_TAX_RULES env var, else
  costseg/config/tax_rules.json)
- Fallback: Embedded defaults in this file

ANNUAL UPDATE INSTRUCTIONS:
1. Edit costseg/config/tax_rules.json with new IRS-published values
2. Update the "_meta.last_updated" field
3. Call reload_config() or restart the service
"""

from typing import Dict, Any, Optional, List, Tuple
from enum import Enum
import json
import os
import logging

logger = logging.getLogger(__name__)


# ==============================================================================
# JSON CONFIGURATION LOADER
# ==============================================================================

TAX_RULES_ENV_VAR = "COSTSEG_TAX_RULES"


def _get_config_path() -> str:
    """Get path to the tax rules JSON file."""
    # Explicit override wins
    env_path = os.environ.get(TAX_RULES_ENV_VAR)
    if env_path:
        return env_path

    # Bundled file relative to this module
    this_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(this_dir, "..", "config", "tax_rules.json")


def _load_json_config() -> Optional[Dict[str, Any]]:
    """
    Load tax rules from JSON configuration file.

    Returns:
        Dict with configuration or None if file not found/invalid
    """
    config_path = _get_config_path()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Tax rules config not found at {config_path}, using embedded defaults")
        return None
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in tax rules config: {e}, using embedded defaults")
        return None
    except OSError as e:
        logger.error(f"Error reading tax rules config: {e}, using embedded defaults")
        return None

    if not isinstance(config, dict):
        logger.error(f"Tax rules config at {config_path} is not a JSON object, using embedded defaults")
        return None

    meta = config.get("_meta", {})
    logger.info(f"Loaded tax rules from: {config_path}")
    logger.info(f"Tax rules version: {meta.get('version', 'unknown')}, "
                f"last updated: {meta.get('last_updated', 'unknown')}")
    return config


# Load configuration at module import (with fallback to defaults)
_JSON_CONFIG: Optional[Dict[str, Any]] = _load_json_config()


# ==============================================================================
# VERSION TRACKING
# ==============================================================================

_meta = _JSON_CONFIG.get("_meta", {}) if _JSON_CONFIG else {}
CONFIG_VERSION = _meta.get("version", "1.0.0")
CONFIG_LAST_UPDATED = _meta.get("last_updated", "2024-01-01")


# ==============================================================================
# BONUS DEPRECIATION - TCJA PHASE-DOWN
# ==============================================================================
# 100% for property placed in service in 2022, stepping down 20 points a year
# to 0% in 2027. Years outside the table get no bonus.

def _load_bonus_rates() -> Dict[int, float]:
    """Load bonus rates from JSON or use defaults."""
    if _JSON_CONFIG and "bonus_rates" in _JSON_CONFIG:
        result = {}
        for year_str, rate in _JSON_CONFIG["bonus_rates"].items():
            if year_str.startswith("_"):  # Skip description fields
                continue
            try:
                result[int(year_str)] = float(rate)
            except (ValueError, TypeError):
                logger.warning(f"Invalid bonus_rates entry: {year_str}={rate}")
        if result:
            return result

    # Embedded defaults
    return {
        2022: 1.00,
        2023: 0.80,
        2024: 0.60,
        2025: 0.40,
        2026: 0.20,
        2027: 0.00,
    }


BONUS_RATES: Dict[int, float] = _load_bonus_rates()


def get_bonus_percentage(placed_in_service_year: int) -> float:
    """
    Get bonus depreciation percentage for a placed-in-service year.

    Args:
        placed_in_service_year: Calendar year the property was placed in service

    Returns:
        Bonus percentage as decimal (1.00 for 100%, 0.60 for 60%, etc.).
        0.0 for any year outside the table.
    """
    return BONUS_RATES.get(placed_in_service_year, 0.0)


# ==============================================================================
# SECTION 179 LIMITS (advisory)
# ==============================================================================

def _load_section_179_limits() -> Dict[int, Dict[str, Any]]:
    """Load Section 179 limits from JSON or use defaults."""
    if _JSON_CONFIG and "section_179_limits" in _JSON_CONFIG:
        result = {}
        for year_str, limits in _JSON_CONFIG["section_179_limits"].items():
            if year_str.startswith("_"):
                continue
            try:
                year = int(year_str)
                result[year] = {
                    "max_deduction": limits.get("max_deduction"),
                    "phaseout_threshold": limits.get("phaseout_threshold"),
                }
            except (ValueError, TypeError, AttributeError):
                logger.warning(f"Invalid section_179_limits entry: {year_str}")
        if result:
            return result

    # Embedded defaults
    return {
        2022: {"max_deduction": 1080000, "phaseout_threshold": 2700000},
        2023: {"max_deduction": 1160000, "phaseout_threshold": 2890000},
        2024: {"max_deduction": 1220000, "phaseout_threshold": 3050000},
        2025: {"max_deduction": 1250000, "phaseout_threshold": 3130000},
        2026: {"max_deduction": 1250000, "phaseout_threshold": 3130000},
    }


SECTION_179_LIMITS: Dict[int, Dict[str, Any]] = _load_section_179_limits()


def get_section_179_limits(tax_year: int) -> Dict[str, Any]:
    """
    Get Section 179 dollar limit and phase-out threshold.

    These limits never cap the schedule engine; they only feed the
    validation advisories.

    Args:
        tax_year: Tax year

    Returns:
        Dict with 'max_deduction' and 'phaseout_threshold'
    """
    if tax_year in SECTION_179_LIMITS:
        return SECTION_179_LIMITS[tax_year]

    # Year not defined: closest configured year
    if tax_year < min(SECTION_179_LIMITS.keys()):
        return SECTION_179_LIMITS[min(SECTION_179_LIMITS.keys())]
    return SECTION_179_LIMITS[max(SECTION_179_LIMITS.keys())]


# ==============================================================================
# TAX YEAR STATUS
# ==============================================================================

class TaxYearStatus(Enum):
    OFFICIAL = "official"        # Rates published and in the tables
    ESTIMATED = "estimated"      # Past the phase-down, bonus assumed 0%
    UNSUPPORTED = "unsupported"  # Too old or too far in future


# Last year treated as ESTIMATED when no JSON override is present
_ESTIMATED_THROUGH_YEAR = 2030


def _load_supported_years() -> Dict[int, TaxYearStatus]:
    """Load supported years from JSON or derive them from the bonus table."""
    if _JSON_CONFIG and "supported_years" in _JSON_CONFIG:
        result = {}
        for year_str, status_str in _JSON_CONFIG["supported_years"].items():
            if year_str.startswith("_"):
                continue
            try:
                result[int(year_str)] = TaxYearStatus(status_str)
            except (ValueError, KeyError):
                logger.warning(f"Invalid supported_years entry: {year_str}={status_str}")
        if result:
            return result

    result = {year: TaxYearStatus.OFFICIAL for year in BONUS_RATES}
    for year in range(max(BONUS_RATES) + 1, _ESTIMATED_THROUGH_YEAR + 1):
        result[year] = TaxYearStatus.ESTIMATED
    return result


SUPPORTED_TAX_YEARS: Dict[int, TaxYearStatus] = _load_supported_years()

MIN_SUPPORTED_YEAR = min(SUPPORTED_TAX_YEARS.keys())
MAX_SUPPORTED_YEAR = max(SUPPORTED_TAX_YEARS.keys())


def get_tax_year_status(tax_year: int) -> Tuple[TaxYearStatus, str]:
    """
    Get the support status and message for a placed-in-service year.

    Returns:
        Tuple of (status, message)
    """
    status = SUPPORTED_TAX_YEARS.get(tax_year)
    if status == TaxYearStatus.OFFICIAL:
        return status, f"Tax Year {tax_year}: Using published bonus depreciation rates."
    if status == TaxYearStatus.ESTIMATED:
        return status, (
            f"Tax Year {tax_year}: Using ESTIMATED values. "
            f"Bonus depreciation is assumed fully phased out (0%)."
        )

    if tax_year < MIN_SUPPORTED_YEAR:
        return TaxYearStatus.UNSUPPORTED, (
            f"Tax Year {tax_year} is not supported. "
            f"Minimum supported year is {MIN_SUPPORTED_YEAR}."
        )

    if tax_year > MAX_SUPPORTED_YEAR:
        return TaxYearStatus.UNSUPPORTED, (
            f"Tax Year {tax_year} is not yet supported. "
            f"Maximum supported year is {MAX_SUPPORTED_YEAR}."
        )

    return TaxYearStatus.UNSUPPORTED, f"Tax Year {tax_year} not configured."


def get_config_info() -> Dict[str, Any]:
    """
    Get configuration metadata for display.

    Returns:
        Dict with version, source and table domains
    """
    official_years = [y for y, s in SUPPORTED_TAX_YEARS.items() if s == TaxYearStatus.OFFICIAL]
    estimated_years = [y for y, s in SUPPORTED_TAX_YEARS.items() if s == TaxYearStatus.ESTIMATED]

    return {
        "version": CONFIG_VERSION,
        "last_updated": CONFIG_LAST_UPDATED,
        "official_years": sorted(official_years),
        "estimated_years": sorted(estimated_years),
        "min_year": MIN_SUPPORTED_YEAR,
        "max_year": MAX_SUPPORTED_YEAR,
        "bonus_years": sorted(BONUS_RATES.keys()),
        "config_source": "json" if _JSON_CONFIG else "embedded",
        "config_path": _get_config_path() if _JSON_CONFIG else None,
    }


def reload_config() -> bool:
    """
    Reload tax rules from the JSON configuration file.

    Tables are updated in place so modules holding references see new values.
    When the file is missing or invalid the embedded defaults are restored.

    Returns:
        True if the JSON file was loaded, False if defaults are in use
    """
    global _JSON_CONFIG, CONFIG_VERSION, CONFIG_LAST_UPDATED
    global MIN_SUPPORTED_YEAR, MAX_SUPPORTED_YEAR

    _JSON_CONFIG = _load_json_config()

    meta = _JSON_CONFIG.get("_meta", {}) if _JSON_CONFIG else {}
    CONFIG_VERSION = meta.get("version", "1.0.0")
    CONFIG_LAST_UPDATED = meta.get("last_updated", "2024-01-01")

    BONUS_RATES.clear()
    BONUS_RATES.update(_load_bonus_rates())

    SECTION_179_LIMITS.clear()
    SECTION_179_LIMITS.update(_load_section_179_limits())

    SUPPORTED_TAX_YEARS.clear()
    SUPPORTED_TAX_YEARS.update(_load_supported_years())
    MIN_SUPPORTED_YEAR = min(SUPPORTED_TAX_YEARS.keys())
    MAX_SUPPORTED_YEAR = max(SUPPORTED_TAX_YEARS.keys())

    if _JSON_CONFIG:
        logger.info("Tax rules configuration reloaded successfully")
        return True

    logger.warning("Tax rules reload fell back to embedded defaults")
    return False


def bonus_rate_table() -> List[Dict[str, Any]]:
    """Bonus rate table as a list of {year, rate} rows, ascending by year."""
    return [{"year": year, "rate": BONUS_RATES[year]} for year in sorted(BONUS_RATES)]
