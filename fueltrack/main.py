import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from fueltrack.config import settings
from fueltrack.database import check_db_connection
from fueltrack.services.notification_service import ConnectionManager
from fueltrack.utils.exceptions import AppException
from fueltrack.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    generic_exception_handler,
)

from fueltrack.api.v1 import auth
from fueltrack.api.v1 import users
from fueltrack.api.v1 import trips
from fueltrack.api.v1 import drivers
from fueltrack.api.v1 import trucks
from fueltrack.api.v1 import reports
from fueltrack.api.v1 import system_settings
from fueltrack.api.v1 import realtime

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=VERSION,
        description="Fuel truck trip tracking API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # ─── Real-time fan-out (one per process) ──────────────────────────────────
    app.state.notifier = ConnectionManager()

    # ─── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = "/api/v1"
    app.include_router(auth.router,            prefix=PREFIX, tags=["Auth"])
    app.include_router(users.router,           prefix=PREFIX, tags=["Users"])
    app.include_router(trips.router,           prefix=PREFIX, tags=["Trips"])
    app.include_router(drivers.router,         prefix=PREFIX, tags=["Drivers"])
    app.include_router(trucks.router,          prefix=PREFIX, tags=["Trucks"])
    app.include_router(reports.router,         prefix=PREFIX, tags=["Reports"])
    app.include_router(system_settings.router, prefix=PREFIX, tags=["Settings"])
    # Upgrade endpoint lives outside the REST prefix
    app.include_router(realtime.router, tags=["Real-time"])

    # ─── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup():
        ok = check_db_connection()
        logger.info("DB connected" if ok else "DB connection FAILED")

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    def health():
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": VERSION,
            "liveConnections": app.state.notifier.active_count,
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fueltrack.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
