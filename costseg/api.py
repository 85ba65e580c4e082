from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Any, Dict, Optional
from contextlib import asynccontextmanager
import logging

from . import __version__
from .logging_utils import setup_logging, log_error
from .logic import tax_year_config
from .logic.asset_categories import ASSET_CATEGORIES, active_categories
from .logic.config_manager import get_config
from .logic.constants import CURRENCY_DECIMALS
from .logic.depreciation_schedule import compute_schedule
from .logic.schedule_summary import summarize, category_summaries, cumulative_totals
from .logic.validators import validate_inputs
from .models.property import PropertyInputs, PropertyType

logger = logging.getLogger(__name__)


# ==============================================================================
# APPLICATION LIFECYCLE
# ==============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    config = get_config()
    setup_logging(
        level=config.get("log_level", "INFO"),
        log_to_file=bool(config.get("log_to_file", False)),
        log_dir=config.get("log_dir", "logs"),
    )
    logger.info(f"Starting cost segregation API {__version__}...")
    info = tax_year_config.get_config_info()
    logger.info(f"Tax rules {info['version']} ({info['config_source']}), "
                f"bonus years {info['bonus_years'][0]}-{info['bonus_years'][-1]}")

    yield

    logger.info("Shutting down cost segregation API...")


app = FastAPI(
    title="Cost Segregation Depreciation API",
    description="MACRS, bonus depreciation and Section 179 schedules for real estate",
    version=__version__,
    lifespan=lifespan
)

# ==============================================================================
# CORS CONFIGURATION
# ==============================================================================
# Configure allowed origins via cors_allowed_origins in config.json or the
# COSTSEG_CORS_ALLOWED_ORIGINS environment variable (comma-separated).

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().get("cors_allowed_origins", []),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# ==============================================================================
# STANDARDIZED ERROR RESPONSES
# ==============================================================================
# {
#   "error": "ERROR_CODE",           # Machine-readable error code
#   "message": "Human readable...",   # User-friendly message
#   "details": {...}                  # Optional additional context
# }


class APIError(BaseModel):
    """Standardized API error response schema."""
    error: str  # Machine-readable error code (e.g., "CALCULATION_FAILED")
    message: str  # Human-readable message
    details: Optional[Dict[str, Any]] = None  # Optional context


def api_error(status_code: int, error_code: str, message: str, details: Dict = None) -> HTTPException:
    """
    Create a standardized API error response.

    Usage:
        raise api_error(500, "CALCULATION_FAILED", "Could not compute schedule")
    """
    detail = {"error": error_code, "message": message}
    if details:
        detail["details"] = details
    return HTTPException(status_code=status_code, detail=detail)


def _round_values(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: round(v, CURRENCY_DECIMALS) if isinstance(v, float) else v
        for k, v in data.items()
    }


# ==============================================================================
# ROUTES
# ==============================================================================

@app.get("/")
def read_root():
    return {"status": "Backend Online", "version": __version__}


@app.get("/categories")
def list_categories(property_type: Optional[PropertyType] = None):
    """
    The six cost segregation categories.

    With property_type, only the categories that type may allocate to.
    """
    categories = active_categories(property_type) if property_type else ASSET_CATEGORIES
    return {"categories": [cat.to_dict() for cat in categories]}


@app.get("/config/tax")
def get_tax_config():
    """Rate table metadata and the bonus depreciation table."""
    return {
        **tax_year_config.get_config_info(),
        "bonus_rates": tax_year_config.bonus_rate_table(),
    }


@app.get("/config/tax/{year}")
def get_tax_year(year: int):
    """Bonus rate, Section 179 limits and support status for one year."""
    status, message = tax_year_config.get_tax_year_status(year)
    return {
        "year": year,
        "bonus_rate": tax_year_config.get_bonus_percentage(year),
        "section_179_limits": tax_year_config.get_section_179_limits(year),
        "status": status.value,
        "message": message,
    }


@app.post("/schedule")
def create_schedule(inputs: PropertyInputs):
    """
    Compute the 40-year depreciation schedule for a property.

    Amounts are rounded to cents. Validation messages are advisory and never
    block the calculation.
    """
    try:
        schedule = compute_schedule(inputs)
        summary = summarize(schedule, inputs)
        issues, _ = validate_inputs(inputs)

        result = schedule.to_dict(decimals=CURRENCY_DECIMALS)
        for row, running in zip(result["years"], cumulative_totals(schedule)):
            row["cumulative"] = round(running, CURRENCY_DECIMALS)

        return {
            "property_name": inputs.property_name,
            "total_cost": inputs.total_cost,
            "total_allocation": inputs.total_allocation,
            "schedule": result,
            "summary": _round_values(summary.to_dict()),
            "category_summary": [_round_values(row) for row in category_summaries(schedule, inputs)],
            "warnings": issues,
        }
    except Exception as e:
        message = log_error(e, "computing the depreciation schedule", __name__)
        raise api_error(500, "CALCULATION_FAILED", message)


def main():
    """Run the API with uvicorn using config_manager settings."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "costseg.api:app",
        host=config.get("server_host", "127.0.0.1"),
        port=int(config.get("server_port", 8000)),
        log_level=str(config.get("log_level", "INFO")).lower(),
    )


if __name__ == "__main__":
    main()
