from fastapi import APIRouter, Depends, HTTPException, status

from app.config import Settings, get_settings
from app.models.otp import OtpRequest, OtpVerification
from app.services.otp_service import send_otp, verify_otp
from app.utils.twilio import TwilioGateway, get_twilio_gateway

router = APIRouter()


@router.post("/send-otp")
async def send_otp_route(
    payload: OtpRequest,
    gateway: TwilioGateway = Depends(get_twilio_gateway),
    settings: Settings = Depends(get_settings),
):
    try:
        return await send_otp(gateway, settings, payload.phone_number)
    except HTTPException as http_err:
        raise http_err
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Server Error: {str(e)}"
        )


@router.post("/verify-otp")
async def verify_otp_route(
    payload: OtpVerification,
    gateway: TwilioGateway = Depends(get_twilio_gateway),
    settings: Settings = Depends(get_settings),
):
    try:
        return await verify_otp(gateway, settings, payload.phone_number, payload.otp_code)
    except HTTPException as http_err:
        raise http_err
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Server Error: {str(e)}"
        )
