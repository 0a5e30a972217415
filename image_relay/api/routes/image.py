"""Image generation API endpoint."""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..dependencies import get_image_relay
from ..errors import error_response
from ...config.settings import Settings, get_settings
from ...domain.errors import ImageGenerationError
from ...domain.services.image_relay import ImageRelay

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["images"])


# Request/Response Models
class ImageGenerateRequest(BaseModel):
    """Request model for image generation."""
    prompt: str | None = Field(None, description="Image generation prompt")


class ImageGenerateResponse(BaseModel):
    """Response model for image generation."""
    success: bool = Field(True, description="Always true on success")
    image: str = Field(..., description="Image as a data URI (data:{mime};base64,{payload})")
    prompt: str = Field(..., description="Original prompt")


@router.post("/generate", response_model=ImageGenerateResponse)
async def generate_image(
    request: ImageGenerateRequest | None = None,
    relay: ImageRelay = Depends(get_image_relay),
    settings: Settings = Depends(get_settings),
) -> ImageGenerateResponse | JSONResponse:
    """
    Generate an image from a text prompt.

    Model candidates are tried in order until one responds. Quota errors
    retry the same model a bounded number of times before moving on.

    Returns:
        The image as a data URI with the prompt echoed back, or an error
        envelope with status 400, 401, 404, 429, 500 or 501
    """
    try:
        result = await relay.generate(request.prompt if request else None)
    except ImageGenerationError as e:
        logger.error(f"Error generating image: {e}")
        return error_response(e, settings)

    logger.info(f"Image generated with {result.model} for prompt: {result.prompt[:50]}")
    return ImageGenerateResponse(image=result.data_uri, prompt=result.prompt)
