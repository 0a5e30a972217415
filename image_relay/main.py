"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config.settings import get_settings
from .api.routes import health_router, image_router, models_router
from .api.routes.health import STATIC_DIR
from .api.errors import validation_error_handler

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the configuration the service starts with."""
    settings = get_settings()
    logger.info("=" * 50)
    logger.info("Image Relay Starting")
    if settings.gemini_api_key:
        logger.info(f"API Key loaded. First 10 chars: {settings.key_preview}")
        logger.info(f"API Key length: {len(settings.gemini_api_key)}")
    else:
        logger.warning(
            "GEMINI_API_KEY environment variable is not set. "
            "Please set it to use the image generation feature."
        )
    logger.info(f"Model candidates: {', '.join(settings.image_model_candidates)}")
    logger.info(
        f"Quota retries: {settings.max_quota_retries} "
        f"(every {settings.quota_retry_delay_seconds:g}s)"
    )
    logger.info("=" * 50)
    yield
    logger.info("Image Relay Shutting Down")


# Create FastAPI application
app = FastAPI(
    title="Image Relay",
    description="Relays text prompts to Gemini and returns the generated image",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Malformed /api/* requests get the JSON error envelope instead of a 422
app.add_exception_handler(RequestValidationError, validation_error_handler)

# Include routers
app.include_router(health_router)
app.include_router(models_router)
app.include_router(image_router)

# Static assets (app.js, style.css) are served from the root, after the API routes
app.mount("/", StaticFiles(directory=str(STATIC_DIR)), name="static")


def run() -> None:
    """Run the service with uvicorn; a failed bind (e.g. port in use) exits with status 1."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Server running at http://localhost:{settings.port}")
    try:
        uvicorn.run(app, host=settings.host, port=settings.port)
    except SystemExit as e:
        if e.code:
            logger.error(
                f"Server stopped with status {e.code}. If port {settings.port} is already "
                "in use, stop the process using it or change PORT in .env"
            )
        raise


if __name__ == "__main__":
    run()
