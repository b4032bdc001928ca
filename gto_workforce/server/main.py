"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gto_workforce.core.database import init_db
from gto_workforce.core.logging_config import get_logger, setup_logging
from gto_workforce.core.monitoring import initialize_logfire
from gto_workforce.fairwork import create_fairwork_client

from .api.v1 import (
    apprentices,
    awards,
    charge_rates,
    claims,
    compliance,
    dashboard,
    fairwork,
    financial,
    health,
    host_employers,
    leads,
    placements,
    progress_reviews,
    rate_templates,
    rates,
    tasks,
    timesheets,
    users,
    whs,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging(settings.log_level, settings.log_format)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Verifies the database connection and owns the FairWork client, which is
    shared by every request through ``app.state.fairwork``.
    """
    # Startup
    try:
        logger.info("Starting up GTO Workforce Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    app.state.fairwork = create_fairwork_client(settings.fairwork)
    if app.state.fairwork is None:
        logger.warning("FAIRWORK_API_KEY is not set; FairWork integration disabled")
    else:
        logger.info(f"FairWork client ready ({settings.fairwork.environment})")

    yield

    # Shutdown
    logger.info("Shutting down GTO Workforce Server...")
    if app.state.fairwork is not None:
        await app.state.fairwork.aclose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    GTO Workforce API

    Backend for a Group Training Organisation: apprentices, host employers,
    placements and timesheets, award-based pay rates and charge-rate quoting,
    funding claims, WHS incidents and financial reporting.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)
app.state.fairwork = None

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

API = constant.API_V1_STR

app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix=f"{API}/users", tags=["users"])
app.include_router(apprentices.router, prefix=f"{API}/apprentices", tags=["apprentices"])
app.include_router(host_employers.router, prefix=f"{API}/host-employers", tags=["host-employers"])
app.include_router(placements.router, prefix=f"{API}/placements", tags=["placements"])
app.include_router(progress_reviews.router, prefix=f"{API}/progress-reviews", tags=["progress-reviews"])
app.include_router(timesheets.router, prefix=f"{API}/timesheets", tags=["timesheets"])
app.include_router(tasks.router, prefix=f"{API}/tasks", tags=["tasks"])
app.include_router(compliance.router, prefix=f"{API}/compliance", tags=["compliance"])
app.include_router(awards.router, prefix=f"{API}/awards", tags=["awards"])
app.include_router(rates.router, prefix=f"{API}/rates", tags=["rates"])
app.include_router(charge_rates.router, prefix=f"{API}/charge-rates", tags=["charge-rates"])
app.include_router(rate_templates.router, prefix=f"{API}/rate-templates", tags=["rate-templates"])
app.include_router(fairwork.router, prefix=f"{API}/fairwork", tags=["fairwork"])
app.include_router(whs.router, prefix=f"{API}/whs", tags=["whs"])
app.include_router(claims.router, prefix=f"{API}/claims", tags=["claims"])
app.include_router(financial.router, prefix=f"{API}/financial", tags=["financial"])
app.include_router(leads.router, prefix=f"{API}/leads", tags=["leads"])
app.include_router(dashboard.router, prefix=f"{API}/dashboard", tags=["dashboard"])
