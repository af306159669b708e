from fastapi import APIRouter, Depends, HTTPException, status

from app.config import Settings, get_settings
from app.models.booking import BookingSmsRequest
from app.services.booking_service import send_booking_sms
from app.utils.twilio import TwilioGateway, get_twilio_gateway

router = APIRouter()


@router.post("/send-booking-sms")
async def send_booking_sms_route(
    payload: BookingSmsRequest,
    gateway: TwilioGateway = Depends(get_twilio_gateway),
    settings: Settings = Depends(get_settings),
):
    try:
        return await send_booking_sms(gateway, settings, payload.phone_number, payload.booking_details)
    except HTTPException as http_err:
        raise http_err
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send booking confirmation SMS."
        )
