import logging
import re

from fastapi import HTTPException, status

from app.config import Settings
from app.models.booking import BookingDetails
from app.utils.errors import ProviderError, ProviderRejected, describe_provider_error
from app.utils.phone import normalize_phone
from app.utils.twilio import TwilioGateway

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
DRIVER_PENDING = "Assigned Soon"


def _or(value, placeholder: str = NOT_AVAILABLE) -> str:
    if value is None or value == "":
        return placeholder
    return str(value)


def build_booking_message(details: BookingDetails, brand_name: str) -> str:
    total = details.fare_details.total if details.fare_details else None
    fare = f"{total:.2f}" if total is not None else NOT_AVAILABLE

    message = f"""
        {brand_name} Booking Confirmed!
        ID: {_or(details.booking_id)}
        From: {_or(details.pickup)}
        To: {_or(details.dropoff)}
        Date: {_or(details.pickup_date)} {_or(details.pickup_time)}
        Fare: ₹{fare}
        Driver: {_or(details.driver_name, DRIVER_PENDING)} ({_or(details.driver_vehicle)})
        Download App for updates!
    """
    return re.sub(r"\s+", " ", message).strip()


async def send_booking_sms(gateway: TwilioGateway, settings: Settings, phone_number: str, details: BookingDetails):
    if not phone_number or details is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Phone number and booking details are required."
        )

    body = build_booking_message(details, settings.BRAND_NAME)
    logger.info("Sending booking confirmation SMS to %s with message: %s", phone_number, body)

    phone = normalize_phone(phone_number, settings.DEFAULT_COUNTRY_CODE)
    if not phone:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid phone number format for SMS."
        )

    if not settings.TWILIO_PHONE_NUMBER:
        logger.error("TWILIO_PHONE_NUMBER is not set in environment variables.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error: Twilio phone number for sending SMS is missing."
        )

    try:
        await gateway.send_sms(body=body, to=phone, from_=settings.TWILIO_PHONE_NUMBER)
    except ProviderError as e:
        logger.error("Error sending booking confirmation SMS via Twilio: %s", e)
        message = "Failed to send booking confirmation SMS."
        if isinstance(e, ProviderRejected):
            message = describe_provider_error(e, message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message
        )

    logger.info("Booking confirmation SMS sent successfully!")
    return {"message": "Booking confirmation SMS sent."}
