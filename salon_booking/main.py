# salon_booking/main.py

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session

from salon_booking.config import settings
from salon_booking.db import create_db_and_tables, engine
from salon_booking.errors import SalonError
from salon_booking.logger import logger, setup_logging
from salon_booking.routers import bookings_routes, customers_routes, dashboard_routes, services_routes
from salon_booking.seed import seed_default_services

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
    create_db_and_tables()
    if settings.SEED_DEFAULT_SERVICES:
        with Session(engine) as session:
            seed_default_services(session)
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(SalonError)
async def salon_error_handler(request: Request, exc: SalonError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
    )


app.include_router(services_routes.router)
app.include_router(customers_routes.router)
app.include_router(bookings_routes.router)
app.include_router(dashboard_routes.router)


@app.get("/health")
def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT, "timestamp": datetime.now().isoformat()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("salon_booking.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
