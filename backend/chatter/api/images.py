"""
Generated image endpoints: history, generation, viewing and deletion.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status
from fastapi.responses import PlainTextResponse

from chatter.api.deps import ImageClient, ImageSvc
from chatter.core.exceptions import ForbiddenError, NotFoundError, PersistenceError, UpstreamError
from chatter.core.logger import setup_logger
from chatter.models.image import GeneratedImage, ImageGenerateRequest

router = APIRouter()
logger = setup_logger(__name__)


@router.get("/history", response_model=list[GeneratedImage])
async def list_images(
    image_service: ImageSvc,
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """List a user's generated images, newest first."""
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID required")

    try:
        return await image_service.list_images(user_id)
    except PersistenceError as e:
        logger.error(f"Error listing images: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list images",
        )


@router.post("/generate", response_model=GeneratedImage)
async def generate_image(
    request: ImageGenerateRequest,
    image_service: ImageSvc,
    image_client: ImageClient,
):
    """Generate an image from a prompt and store it in the user's image history."""
    if not request.prompt:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing prompt")
    if not request.user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID required")

    try:
        data = await image_client.generate(
            request.prompt,
            width=request.width,
            height=request.height,
            steps=request.steps,
        )
    except UpstreamError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)

    try:
        return await image_service.store_image(request.user_id, data, request.prompt)
    except PersistenceError as e:
        logger.error(f"Error storing generated image: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate image",
        )


@router.get("/view")
async def view_image(
    image_service: ImageSvc,
    key: Optional[str] = Query(None),
):
    """Return the raw image bytes."""
    if not key:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Key required")

    try:
        stored = await image_service.get_image(key)
    except ForbiddenError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    except PersistenceError as e:
        logger.error(f"Error reading image: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to read image",
        )

    return Response(
        content=stored.data,
        media_type=stored.content_type or "application/octet-stream",
    )


@router.delete("/delete")
async def delete_image(
    image_service: ImageSvc,
    key: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """Delete one of the user's images."""
    if not key or not user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Key and userId required",
        )

    try:
        await image_service.delete_image(user_id, key)
    except ForbiddenError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    except PersistenceError as e:
        logger.error(f"Error deleting image: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete image",
        )
    return PlainTextResponse("Deleted")
