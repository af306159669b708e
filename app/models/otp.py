from typing import Optional

from app.models.base import CamelModel


class OtpRequest(CamelModel):
    phone_number: Optional[str] = None


class OtpVerification(CamelModel):
    phone_number: Optional[str] = None
    otp_code: Optional[str] = None
