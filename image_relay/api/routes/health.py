"""Health check and landing page endpoints."""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy", "service": "image-relay"}


@router.get("/", include_in_schema=False)
async def root() -> FileResponse:
    """Serve the prompt form."""
    return FileResponse(STATIC_DIR / "index.html")
