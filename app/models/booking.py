from typing import Optional

from app.models.base import CamelModel


class FareDetails(CamelModel):
    total: Optional[float] = None


class BookingDetails(CamelModel):
    booking_id: Optional[str] = None
    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    pickup_date: Optional[str] = None
    pickup_time: Optional[str] = None
    fare_details: Optional[FareDetails] = None
    driver_name: Optional[str] = None
    driver_vehicle: Optional[str] = None


class BookingSmsRequest(CamelModel):
    phone_number: Optional[str] = None
    booking_details: Optional[BookingDetails] = None
