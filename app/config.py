from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Twilio (Verify + Messaging)
    TWILIO_ACCOUNT_SID: str
    TWILIO_AUTH_TOKEN: str
    TWILIO_VERIFY_SERVICE_SID: str
    TWILIO_PHONE_NUMBER: str

    # Google Maps Platform
    GOOGLE_ROUTES_API_KEY: str
    GOOGLE_ROUTES_API_URL: str = "https://routes.googleapis.com/directions/v2:computeRoutes"
    GOOGLE_ROUTES_TIMEOUT_SECONDS: float = 30
    GOOGLE_ROUTES_FIELD_MASK: str = "routes.duration,routes.distanceMeters,routes.travelAdvisory.tollInfo"

    HOST: str = "0.0.0.0"
    PORT: int = 5000
    ALLOWED_ORIGIN: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    DEFAULT_COUNTRY_CODE: str = "91"
    OTP_CHANNEL: str = "sms"
    BRAND_NAME: str = "Fasttrack Drop Taxi"

    TOLL_CURRENCY_CODE: str = "INR"
    TOLL_PASSES: List[str] = ["IN_FASTAG"]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="allow"
    )

    @field_validator(
        "TWILIO_ACCOUNT_SID",
        "TWILIO_AUTH_TOKEN",
        "TWILIO_VERIFY_SERVICE_SID",
        "TWILIO_PHONE_NUMBER",
        "GOOGLE_ROUTES_API_KEY",
    )
    @classmethod
    def must_not_be_blank(cls, v: str, info):
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def missing_settings(errors: list) -> List[str]:
    """Names of the settings reported by a pydantic ValidationError."""
    names = []
    for err in errors:
        loc = err.get("loc") or ()
        if loc and str(loc[0]) not in names:
            names.append(str(loc[0]))
    return names
