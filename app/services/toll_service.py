import logging
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, Overflow, localcontext
from typing import List, Optional

from fastapi import HTTPException, status

from app.clients.google_routes import RoutesClient
from app.config import Settings
from app.utils.errors import ProviderRejected

logger = logging.getLogger(__name__)

NANOS_PER_UNIT = Decimal(1_000_000_000)
CENTS = Decimal("0.01")


def build_routes_request(pickup: str, dropoff: str, toll_passes: List[str]) -> dict:
    return {
        "origin": {"address": pickup},
        "destination": {"address": dropoff},
        "travelMode": "DRIVE",
        "routingPreference": "TRAFFIC_AWARE_OPTIMAL",
        "computeAlternativeRoutes": False,
        "routeModifiers": {
            "avoidTolls": False,
            "avoidHighways": False,
            "tollPasses": list(toll_passes),
        },
        "extraComputations": ["TOLLS"],
    }


def _to_decimal(value) -> Optional[Decimal]:
    """Missing or blank pieces count as 0; anything non-numeric gives None."""
    if value is None:
        return Decimal(0)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    if not value.strip():
        return Decimal(0)
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _estimated_prices(data) -> list:
    routes = data.get("routes") if isinstance(data, dict) else None
    if not routes or not isinstance(routes, list):
        logger.warning("Google Routes API response: No routes found or data is empty.")
        return []

    first_route = routes[0] if isinstance(routes[0], dict) else {}
    advisory = first_route.get("travelAdvisory")
    toll_info = advisory.get("tollInfo") if isinstance(advisory, dict) else None
    prices = toll_info.get("estimatedPrice") if isinstance(toll_info, dict) else None
    if not prices or not isinstance(prices, list):
        logger.warning("Google Routes API response: No estimatedPrice or tollInfo found for the route.")
        return []
    return prices


def sum_toll_prices(data, currency_code: str = "INR") -> float:
    """
    Add up the first route's estimated toll prices in one currency.

    Each price is a (units, nanos) pair, nanos being billionths of a unit.
    Other currencies are ignored, entries with non-numeric parts are skipped,
    and the total is rounded to 2 decimal places.
    """
    total = Decimal(0)
    for price in _estimated_prices(data):
        if not isinstance(price, dict) or price.get("currencyCode") != currency_code:
            continue

        units = _to_decimal(price.get("units"))
        nanos = _to_decimal(price.get("nanos"))
        if units is None or nanos is None:
            logger.warning(
                "Skipping %s price entry with non-numeric parts: units=%r nanos=%r",
                currency_code, price.get("units"), price.get("nanos")
            )
            continue

        with localcontext() as ctx:
            # Runaway values become Infinity or NaN and fall through to the reset below.
            ctx.traps[Overflow] = False
            ctx.traps[InvalidOperation] = False
            total += units + nanos / NANOS_PER_UNIT
        logger.debug("Added %s + %s nanos. Running toll total: %s", units, nanos, total)

    if not total.is_finite():
        logger.error("Toll total is not a finite number. Resetting to 0.")
        return 0.0

    return round_to_cents(total)


def round_to_cents(total: Decimal) -> float:
    with localcontext() as ctx:
        # quantize needs every integer digit plus two decimals to fit.
        ctx.prec = max(ctx.prec, total.adjusted() + 3)
        amount = float(total.quantize(CENTS, rounding=ROUND_HALF_UP))

    if not math.isfinite(amount):
        logger.error("Toll total %s does not fit in a float. Resetting to 0.", total)
        return 0.0
    return amount


async def get_toll_amount(routes_client: RoutesClient, settings: Settings, pickup: str, dropoff: str):
    if not pickup or not dropoff:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Pickup and dropoff locations are required."
        )

    body = build_routes_request(pickup, dropoff, settings.TOLL_PASSES)
    try:
        data = await routes_client.compute_routes(body)
    except ProviderRejected as e:
        raise HTTPException(
            status_code=e.status,
            detail={"message": "Error fetching route from Google Maps API", "details": e.message}
        )

    toll_amount = sum_toll_prices(data, settings.TOLL_CURRENCY_CODE)
    logger.info("Toll amount for %s -> %s: %s", pickup, dropoff, toll_amount)
    return {"tollAmount": toll_amount}
