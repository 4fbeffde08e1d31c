from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from passgate.api.routers.checkout import router as checkout_router
from passgate.api.routers.confirmation import router as confirmation_router
from passgate.api.routers.entitlements import router as entitlements_router
from passgate.api.routers.health import router as health_router
from passgate.api.routers.paystack_webhook import router as paystack_router
from passgate.api.routers.stripe_webhook import router as stripe_router
from passgate.core.config import settings
from passgate.core.logging import configure_logging

configure_logging(settings.log_level)


def validate_settings() -> None:
    if settings.env == "local" and not settings.db_password and not settings.database_url_override:
        raise RuntimeError("DB_PASSWORD is missing. Check your .env file.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    validate_settings()
    yield


app = FastAPI(title="PassGate", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
)
app.include_router(health_router)
app.include_router(stripe_router)
app.include_router(paystack_router)
app.include_router(confirmation_router)
app.include_router(checkout_router)
app.include_router(entitlements_router)
