import logging

from fastapi import HTTPException, status

from app.config import Settings
from app.utils.errors import ProviderError, describe_provider_error
from app.utils.phone import normalize_phone
from app.utils.twilio import TwilioGateway

logger = logging.getLogger(__name__)

APPROVED = "approved"


async def send_otp(gateway: TwilioGateway, settings: Settings, phone_number: str):
    phone = normalize_phone(phone_number, settings.DEFAULT_COUNTRY_CODE)
    if not phone:
        logger.warning("Attempted to send OTP with empty or invalid phone number.")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Phone number is required and must be valid."
        )

    try:
        logger.info("Attempting to send OTP to: %s using Service SID: %s", phone, settings.TWILIO_VERIFY_SERVICE_SID)
        sid = await gateway.start_verification(phone, settings.OTP_CHANNEL)
    except ProviderError as e:
        logger.error("Twilio error during OTP send: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=describe_provider_error(e, "Failed to send OTP. Please try again.")
        )

    logger.info("Twilio verification initiated. SID: %s", sid)
    return {"message": "OTP sent successfully!", "sid": sid}


async def verify_otp(gateway: TwilioGateway, settings: Settings, phone_number: str, otp_code: str):
    phone = normalize_phone(phone_number, settings.DEFAULT_COUNTRY_CODE)
    if not phone or not otp_code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Phone number and OTP code are required."
        )

    try:
        logger.info("Attempting to verify OTP for: %s", phone)
        check_status = await gateway.check_verification(phone, otp_code)
    except ProviderError as e:
        logger.error("Twilio error during OTP verification: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=describe_provider_error(e, "Verification failed. Please try again.")
        )

    if check_status != APPROVED:
        logger.warning("OTP verification failed for: %s Status: %s", phone, check_status)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Invalid OTP. Please try again.", "status": check_status}
        )

    logger.info("OTP verification successful for: %s", phone)
    return {"message": "OTP verified successfully!", "status": APPROVED}
