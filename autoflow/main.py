"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from autoflow.auth import ensure_first_admin
from autoflow.config import get_settings
from autoflow.database import SessionLocal, close_db, init_db
from autoflow.routers import (
    access, appointments, auth, customers, inspections, invoices, repair_orders, users, vehicles,
)

settings = get_settings()

logger = logging.getLogger("autoflow")


def configure_logging(level: str = settings.log_level):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan events for the application.
    Handles startup and shutdown events.
    """
    # Startup
    configure_logging()
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    await init_db()
    async with SessionLocal() as session:
        await ensure_first_admin(session, settings)
    logger.info("Database initialized; API available at %s", settings.api_v1_prefix)

    yield

    # Shutdown
    await close_db()
    logger.info("Shutting down %s", settings.app_name)


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ## AutoFlow Garage Management API

    Shop records behind a role-gated dashboard.

    ### Roles:
    * **Shop Manager** (`admin`): full access
    * **Technician** (`user`): inspections, appointments, repair orders, job board
    * **Client** (`client`): appointments, vehicles, customer portal

    The `/navigation` and `/access/*` endpoints expose the same access
    rules the API enforces, so the front end can build its menu and guard
    its pages.
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix=settings.api_v1_prefix)
app.include_router(access.router, prefix=settings.api_v1_prefix)
app.include_router(users.router, prefix=settings.api_v1_prefix)
app.include_router(customers.router, prefix=settings.api_v1_prefix)
app.include_router(vehicles.router, prefix=settings.api_v1_prefix)
app.include_router(appointments.router, prefix=settings.api_v1_prefix)
app.include_router(repair_orders.router, prefix=settings.api_v1_prefix)
app.include_router(inspections.router, prefix=settings.api_v1_prefix)
app.include_router(invoices.router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to AutoFlow GMS API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "autoflow.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
