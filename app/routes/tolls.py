import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.clients.google_routes import RoutesClient, get_routes_client
from app.config import Settings, get_settings
from app.models.toll import TollQuoteRequest
from app.services.toll_service import get_toll_amount

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/get-tolls")
async def get_tolls(
    payload: TollQuoteRequest,
    routes_client: RoutesClient = Depends(get_routes_client),
    settings: Settings = Depends(get_settings),
):
    logger.info(
        "Received toll request: pickup=%s dropoff=%s distance=%s vehicleType=%s",
        payload.pickup, payload.dropoff, payload.distance, payload.vehicle_type
    )
    try:
        return await get_toll_amount(routes_client, settings, payload.pickup, payload.dropoff)
    except HTTPException as http_err:
        raise http_err
    except Exception as e:
        logger.exception("Backend server error during toll calculation")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": "Internal server error during toll calculation.",
                "details": str(e) or "Unknown error",
            }
        )
