"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router
from .config import get_settings
from . import __version__

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown."""
    logger.info(f"Label Compliance API ready - Version {__version__}")

    yield

    logger.info("Shutting down Label Compliance API...")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
## Alcohol Label Compliance API

Compares text extracted from a label image against the application data
submitted for that label.

### Features
- **Field Comparison**: Brand, class/type, alcohol content, net contents,
  producer, address, country of origin, government warning, beverage type
- **Compliance Check**: Government warning text and formatting against the TTB standard
- **Batch Processing**: Import application data from CSV, compare many labels, export results

### Quick Start
1. Use `/health` to check API status
2. Use `/compare` to compare one extracted label against application data
3. Use `/batch/import`, `/compare/batch` and `/batch/export` for batches
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Include routes
    app.include_router(router, prefix="/api/v1")

    # Root points at the docs
    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": "Label Compliance API",
            "version": __version__,
            "docs": "/docs"
        }

    return app


# Create app instance
app = create_app()
