import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, settings as default_settings
from .core.errors import register_error_handlers
from .core.logging import RequestLogMiddleware, setup_logging
from .db import Database
from .routers import (
    activities,
    alerts,
    auth,
    dashboard,
    employees,
    equipment,
    health,
    inventory,
    licenses,
    maintenance,
    spreadsheets,
    tickets,
    users,
)
from .services.user_service import seed_admin

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    db: Database = app.state.db

    if settings.AUTO_DB_BOOTSTRAP:
        # Create tables in dev if missing.
        db.create_all()

    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        with db.session() as session:
            seed_admin(session, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
        logger.info("Seed admin %s ready", settings.ADMIN_EMAIL)

    yield
    db.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(title="Parc Info API", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = Database(settings.DATABASE_URL)

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(employees.router)
    app.include_router(equipment.router)
    app.include_router(inventory.router)
    app.include_router(tickets.router)
    app.include_router(licenses.router)
    app.include_router(alerts.router)
    app.include_router(maintenance.router)
    app.include_router(activities.router)
    app.include_router(dashboard.router)
    app.include_router(spreadsheets.router)

    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
