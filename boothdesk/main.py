"""boothdesk - event booth check-in, reporting and task tracking."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from boothdesk.core.db_client import close_connection, init_db
from boothdesk.core.logging import configure_logfire, instrument_fastapi
from boothdesk.interface.admin_router import router as admin_router
from boothdesk.interface.staff_router import router as staff_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()

    await init_db()
    logger.info("Database initialized")

    yield
    # Shutdown
    await close_connection()


app = FastAPI(
    title="boothdesk",
    description="Event booth check-in, reporting and task tracking",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(staff_router)
app.include_router(admin_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
