"""
Cost Manager - Main FastAPI Application

PURPOSE: FastAPI routes, endpoints, and application setup
SCOPE: HTTP API layer and request/response handling
DEPENDENCIES: FastAPI, all cost_manager modules
"""

import logging
from datetime import datetime
from typing import Any
from fastapi import Body, FastAPI, Form, HTTPException, Query

from .aggregations import get_category_totals, get_year_monthly_totals, to_chart_series
from .config import config
from .exceptions import (
    InvalidInputError,
    InvalidRangeError,
    RatesDocumentError,
    StorageError,
    UnsupportedCurrencyError,
)
from .rates import RatesClient
from .services import CostsDB, open_costs_db
from .validators import validate_rates_document

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(title="Cost Manager")

# Initialize service instances
costs_db: CostsDB = None
rates_client = RatesClient()


@app.on_event("startup")
async def startup_event():
    """Open the costs database and load exchange rates on startup."""
    global costs_db
    costs_db = await open_costs_db(config.DB_NAME, config.DB_VERSION)
    logger.info("Database initialized successfully.")
    await load_startup_rates(costs_db)


async def load_startup_rates(db: CostsDB) -> None:
    """Load rates from the last used URL, falling back to the configured one.

    When neither source yields a valid document the default rates stay in use.
    """
    urls = [rates_client.url]
    if config.RATES_URL != rates_client.url:
        urls.append(config.RATES_URL)

    for url in urls:
        try:
            await db.load_rates(rates_client, url)
        except RatesDocumentError as e:
            logger.warning(f"Could not load rates from {url}: {e}")
            continue
        rates_client.url = url
        return

    logger.warning("Failed loading rates, keeping current rates")


def get_db() -> CostsDB:
    if costs_db is None:
        raise HTTPException(status_code=503, detail="DB not ready")
    return costs_db


async def build_report(year: int, month: int, currency: str) -> dict:
    """Run a report, mapping domain errors to HTTP errors."""
    try:
        return await get_db().get_report(year, month, currency)
    except (InvalidRangeError, UnsupportedCurrencyError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        logger.error(f"Report failed for {year}-{month}: {e}")
        raise HTTPException(status_code=500, detail="Failed reading costs")


# ============================================================================
# COST ENDPOINTS
# ============================================================================

@app.post("/costs")
async def add_cost(
    amount: str = Form(..., alias="sum"),
    currency: str = Form(...),
    category: str = Form(...),
    description: str = Form(...)
):
    """Add a new cost item; its date is the moment it is added."""
    cost = {
        'sum': amount.strip(),
        'currency': currency.strip(),
        'category': category.strip(),
        'description': description.strip()
    }

    try:
        return await get_db().add_cost(cost)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail={"errors": e.errors})
    except StorageError as e:
        logger.error(f"Error adding cost: {e}")
        raise HTTPException(status_code=500, detail="Failed saving cost")


@app.get("/report")
async def get_report(
    year: int = Query(...),
    month: int = Query(...),
    currency: str = Query('USD')
):
    """Get the itemized report for one month."""
    return await build_report(year, month, currency)


# ============================================================================
# CHART ENDPOINTS
# ============================================================================

@app.get("/charts/categories")
async def get_category_chart(
    year: int = Query(...),
    month: int = Query(...),
    currency: str = Query('USD')
):
    """Get category totals of one month for a pie chart."""
    report = await build_report(year, month, currency)
    return to_chart_series(get_category_totals(report['costs']))


@app.get("/charts/yearly")
async def get_yearly_chart(year: int = Query(...), currency: str = Query('USD')):
    """Get the twelve monthly totals of a year for a bar chart."""
    try:
        return await get_year_monthly_totals(get_db(), year, currency)
    except (InvalidRangeError, UnsupportedCurrencyError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        logger.error(f"Yearly totals failed for {year}: {e}")
        raise HTTPException(status_code=500, detail="Failed reading costs")


# ============================================================================
# RATES ENDPOINTS
# ============================================================================

@app.get("/rates")
async def get_rates():
    """Get the exchange rates currently in use."""
    return get_db().get_rates()


@app.put("/rates")
async def put_rates(rates: Any = Body(...)):
    """Replace the exchange rates with a complete rates object."""
    is_valid, errors = validate_rates_document(rates)
    if not is_valid:
        raise HTTPException(status_code=400, detail={"errors": errors})

    get_db().set_rates(rates)
    return {"success": True, "rates": get_db().get_rates()}


@app.post("/rates/fetch")
async def fetch_rates(url: str = Query(None)):
    """Fetch a rates document and apply it."""
    db = get_db()
    try:
        rates = await db.load_rates(rates_client, url)
    except RatesDocumentError as e:
        raise HTTPException(status_code=502, detail=f"Failed fetching rates: {e}")

    # Remember the source for the next startup
    if url and url.strip():
        rates_client.url = url.strip()
    return {"success": True, "rates": rates}


# ============================================================================
# UTILITY ENDPOINTS
# ============================================================================

@app.get("/currencies")
async def get_currencies():
    """Get the supported currency codes."""
    return config.SUPPORTED_CURRENCIES


@app.get("/categories")
async def get_categories():
    """Get the cost categories offered to users."""
    return config.CATEGORIES


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


# ============================================================================
# APPLICATION ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
