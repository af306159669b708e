import logging

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool
from twilio.base.exceptions import TwilioRestException

from app.clients.twilio_client import get_twilio_client
from app.config import Settings, get_settings
from app.utils.errors import ProviderRejected, TransportFailure

logger = logging.getLogger(__name__)


class TwilioGateway:
    """Verify and Messaging calls, with SDK errors mapped to ProviderError."""

    def __init__(self, client, verify_service_sid: str):
        self.client = client
        self.verify_service_sid = verify_service_sid

    async def _call(self, fn, **kwargs):
        # The SDK is blocking; keep it off the event loop.
        try:
            return await run_in_threadpool(fn, **kwargs)
        except TwilioRestException as e:
            raise ProviderRejected(e.status, e.msg) from e
        except Exception as e:
            raise TransportFailure(e) from e

    def _service(self):
        return self.client.verify.v2.services(self.verify_service_sid)

    async def start_verification(self, to: str, channel: str = "sms") -> str:
        verification = await self._call(self._service().verifications.create, to=to, channel=channel)
        return verification.sid

    async def check_verification(self, to: str, code: str) -> str:
        check = await self._call(self._service().verification_checks.create, to=to, code=code)
        return check.status

    async def send_sms(self, body: str, to: str, from_: str) -> str:
        message = await self._call(self.client.messages.create, body=body, to=to, from_=from_)
        return message.sid


def get_twilio_gateway(settings: Settings = Depends(get_settings)) -> TwilioGateway:
    client = get_twilio_client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
    return TwilioGateway(client, settings.TWILIO_VERIFY_SERVICE_SID)
