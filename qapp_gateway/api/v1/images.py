import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from qapp_gateway.api.content_type import JSONBodyRoute
from qapp_gateway.api.schemas.images import Image, PushImageRequest
from qapp_gateway.services.image_service import ImageService
from qapp_gateway.dependencies import get_image_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"], route_class=JSONBodyRoute)


@router.get("", response_model=List[Image])
def list_images(image_service: ImageService = Depends(get_image_service)):
    """Liste les images du registre de la plateforme"""
    return image_service.list_images()


@router.post("")
def push_image(
        push_request: PushImageRequest,
        image_service: ImageService = Depends(get_image_service)
):
    """Pousse une image vers la plateforme, sauf si name:tag y est déjà"""
    logger.info("handling push image")
    if not push_request.image:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="empty image")

    image_service.push_image(push_request.image)
    return Response(status_code=status.HTTP_200_OK)
