import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings, missing_settings
from app.routes import booking, otp, tolls

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

try:
    settings = get_settings()
except ValidationError as e:
    logger.critical(
        "CRITICAL ERROR: Missing or empty environment variables: %s. Please check your .env file.",
        ", ".join(missing_settings(e.errors()))
    )
    sys.exit(1)

logging.getLogger().setLevel(settings.LOG_LEVEL.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Unified backend server running on http://localhost:%s", settings.PORT)
    logger.info("Twilio endpoints: /api/send-otp, /api/verify-otp, /api/send-booking-sms")
    logger.info("Google Maps endpoint: /api/get-tolls")
    yield


app = FastAPI(title="Fasttrack Drop Taxi Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
)


@app.exception_handler(StarletteHTTPException)
async def _http_exception_handler(request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(request, exc: RequestValidationError):
    logger.warning("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request body.", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


app.include_router(otp.router, prefix="/api")
app.include_router(booking.router, prefix="/api")
app.include_router(tolls.router, prefix="/api")


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Unified backend server is running."


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
