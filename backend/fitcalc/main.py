"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fitcalc.api.v1 import body_fat, calculators, preferences
from fitcalc.config import settings
from fitcalc.db.database import init_db

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"[STARTUP] {settings.app_title} ready")
    yield


app = FastAPI(
    title=settings.app_title,
    description="Health and fitness metric calculators",
    version="1.0.0",
    docs_url="/docs",  # Swagger UI at /docs
    redoc_url="/redoc",  # ReDoc at /redoc
    openapi_url="/openapi.json",  # OpenAPI JSON schema
    lifespan=lifespan,
)

app.include_router(calculators.router, prefix="/api/v1", tags=["calculators"])
app.include_router(body_fat.router, prefix="/api/v1", tags=["body-fat"])
app.include_router(preferences.router, prefix="/api/v1", tags=["preferences"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "FitCalc API"}


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}
