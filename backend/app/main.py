import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import ServiceError
from app.logging_config import configure_logging

configure_logging()

from app.routers import (  # noqa: E402
    activities,
    contacts,
    exchange_rates,
    itineraries,
    notifications,
    reference,
    service_fees,
    travelers,
    trips,
)
from app.services.cache_service import cache_service  # noqa: E402
from app.services.exchange_rate_service import exchange_rate_service  # noqa: E402

logger = logging.getLogger(__name__)


async def refresh_exchange_rates_job():
    """Daily job: store today's provider rates for the base currencies."""
    from app.database import async_session_factory

    if not settings.exchange_rate_api_key:
        logger.info("Daily rate refresh skipped: no exchange rate API key configured")
        return
    async with async_session_factory() as db:
        stored = await exchange_rate_service.refresh_daily_rates(db)
        await db.commit()
        logger.info(f"Daily rate refresh: {stored} rates stored")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: background scheduler
    scheduler = None
    if settings.scheduler_enabled:
        from apscheduler.schedulers.asyncio import AsyncIOScheduler
        from apscheduler.triggers.cron import CronTrigger

        scheduler = AsyncIOScheduler(timezone="UTC")
        scheduler.add_job(
            refresh_exchange_rates_job,
            CronTrigger(hour=settings.exchange_rate_refresh_hour, minute=0),
            id="exchange_rate_refresh",
        )
        scheduler.start()
        logger.info("Background scheduler started")

    if settings.auto_seed:
        from app.seed import seed
        await seed()

    yield

    # Shutdown
    if scheduler:
        scheduler.shutdown(wait=False)
        logger.info("Background scheduler stopped")
    await exchange_rate_service.close()
    await cache_service.close()


app = FastAPI(
    title="TripDesk",
    description="Travel agency trip planning and finance API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(contacts.router, prefix="/api/contacts", tags=["contacts"])
app.include_router(trips.router, prefix="/api/trips", tags=["trips"])
app.include_router(travelers.router, prefix="/api/trips/{trip_id}/travelers", tags=["travelers"])
app.include_router(itineraries.router, prefix="/api/trips/{trip_id}/itineraries", tags=["itineraries"])
app.include_router(activities.router, prefix="/api/trips/{trip_id}/activities", tags=["activities"])
app.include_router(service_fees.router, prefix="/api/trips/{trip_id}/service-fees", tags=["service-fees"])
app.include_router(exchange_rates.router, prefix="/api/exchange-rates", tags=["exchange-rates"])
app.include_router(reference.router, prefix="/api/reference", tags=["reference"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "tripdesk"}
