from typing import Any, Optional

from app.models.base import CamelModel


class TollQuoteRequest(CamelModel):
    pickup: Optional[str] = None
    dropoff: Optional[str] = None
    # Accepted for the front end's benefit; not sent to Google.
    distance: Optional[Any] = None
    vehicle_type: Optional[Any] = None
