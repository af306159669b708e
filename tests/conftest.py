import os

os.environ["TWILIO_ACCOUNT_SID"] = "ACtest"
os.environ["TWILIO_AUTH_TOKEN"] = "test-token"
os.environ["TWILIO_VERIFY_SERVICE_SID"] = "VAtest"
os.environ["TWILIO_PHONE_NUMBER"] = "+15005550006"
os.environ["GOOGLE_ROUTES_API_KEY"] = "test-google-key"

import httpx
import pytest
from fastapi.testclient import TestClient

from app.clients.google_routes import RoutesClient, get_routes_client
from app.config import get_settings
from app.main import app
from app.utils.twilio import get_twilio_gateway

ROUTES_URL = "https://routes.example.test/directions/v2:computeRoutes"


class FakeTwilioGateway:
    def __init__(self):
        self.calls = []
        self.verification_sid = "VE0123456789"
        self.check_status = "approved"
        self.error = None

    def _record(self, *call):
        self.calls.append(call)
        if self.error:
            raise self.error

    async def start_verification(self, to, channel="sms"):
        self._record("start_verification", to, channel)
        return self.verification_sid

    async def check_verification(self, to, code):
        self._record("check_verification", to, code)
        return self.check_status

    async def send_sms(self, body, to, from_):
        self._record("send_sms", body, to, from_)
        return "SM0123456789"


class FakeGoogleRoutes:
    def __init__(self):
        self.requests = []
        self.response = httpx.Response(200, json={"routes": []})

    def handler(self, request: httpx.Request):
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture(autouse=True)
def _reset_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def gateway():
    fake = FakeTwilioGateway()
    app.dependency_overrides[get_twilio_gateway] = lambda: fake
    return fake


@pytest.fixture
def google():
    fake = FakeGoogleRoutes()
    app.dependency_overrides[get_routes_client] = lambda: RoutesClient(
        api_key="test-google-key",
        url=ROUTES_URL,
        transport=httpx.MockTransport(fake.handler),
    )
    return fake


@pytest.fixture
def override_settings():
    def _override(**changes):
        patched = get_settings().model_copy(update=changes)
        app.dependency_overrides[get_settings] = lambda: patched
        return patched
    return _override
