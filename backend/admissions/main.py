"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admissions.api.v1.router import api_router
from admissions.config import settings
from admissions.core.logging import configure_logging
from admissions.db.session import engine

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

API_TITLE = "Admissions Eligibility API"
API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Starting {API_TITLE} ({settings.ENVIRONMENT}): "
        f"policy={settings.ELIGIBILITY_POLICY.value}, "
        f"status_mode={settings.ELIGIBILITY_STATUS_MODE.value}"
    )
    yield
    await engine.dispose()


app = FastAPI(
    title=API_TITLE,
    description="Admission applications, document verification and eligibility evaluation",
    version=API_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict:
    """Service banner with links to the API docs."""
    return {
        "message": API_TITLE,
        "version": API_VERSION,
        "docs": "/api/docs",
    }
