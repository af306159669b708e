import logging
from typing import Optional

import httpx
from fastapi import Depends

from app.config import Settings, get_settings
from app.utils.errors import ProviderRejected, TransportFailure

logger = logging.getLogger(__name__)

# Default: only what the toll quote needs; Google bills by requested fields.
FIELD_MASK = "routes.duration,routes.distanceMeters,routes.travelAdvisory.tollInfo"


class RoutesClient:
    def __init__(self, api_key: str, url: str, timeout: float = 30, field_mask: str = FIELD_MASK,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.url = url
        self.field_mask = field_mask
        self.timeout = timeout
        self.transport = transport

    async def compute_routes(self, body: dict) -> dict:
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": self.field_mask,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=body, headers=headers)
        except httpx.HTTPError as e:
            raise TransportFailure(e) from e

        if not response.is_success:
            details = error_details(response)
            logger.error("Google Routes API error response: %s %s", response.status_code, details)
            raise ProviderRejected(response.status_code, details)

        return response.json()


def error_details(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "Could not parse error response from Google API."

    if not isinstance(data, dict):
        return "Unknown error from Google API"
    error = data.get("error")
    if isinstance(error, dict):
        return error.get("message") or "Unknown error from Google API"
    return data.get("message") or "Unknown error from Google API"


def get_routes_client(settings: Settings = Depends(get_settings)) -> RoutesClient:
    return RoutesClient(
        api_key=settings.GOOGLE_ROUTES_API_KEY,
        url=settings.GOOGLE_ROUTES_API_URL,
        timeout=settings.GOOGLE_ROUTES_TIMEOUT_SECONDS,
        field_mask=settings.GOOGLE_ROUTES_FIELD_MASK,
    )
