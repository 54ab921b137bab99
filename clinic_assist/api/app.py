"""FastAPI application factory and configuration.

Application with lifespan management, middleware, and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinic_assist import __version__
from clinic_assist.api.chat import router as chat_router
from clinic_assist.api.forms import router as forms_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown."""
    logger.info("Starting clinical assistant API...")
    yield
    logger.info("Shutting down clinical assistant API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Clinical Assistant API",
        description=(
            "Clinical-protocol assistant with streaming replies, and a form "
            "builder that turns clinical PDFs and images into structured "
            "e-SUS form schemas."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(chat_router)
    application.include_router(forms_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "clinic-assist"}

    return application


app = create_app()
