import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

import qapp_gateway.api.convertors  # noqa: F401  enregistre le convertisseur app_name
from qapp_gateway.api.content_type import JSONBodyRoute
from qapp_gateway.api.schemas.releases import CreateReleaseArgs, CreateReleaseResponse, Release
from qapp_gateway.services.release_service import ReleaseService, ImageNotFoundError
from qapp_gateway.dependencies import get_release_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/apps/{app:app_name}/releases", tags=["releases"], route_class=JSONBodyRoute)


@router.get("", response_model=List[Release], response_model_exclude_none=True)
def list_releases(app: str, release_service: ReleaseService = Depends(get_release_service)):
    """Liste les releases d'une application"""
    logger.info("handling list releases")
    return release_service.list_releases(app)


@router.post("", response_model=CreateReleaseResponse)
def create_release(
        app: str,
        args: CreateReleaseArgs,
        request: Request,
        release_service: ReleaseService = Depends(get_release_service)
):
    """Crée une release à partir d'une image déjà poussée sur la plateforme"""
    logger.info(f"handling create release at {request.url.path}")
    if not args.image:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="empty image")

    try:
        name = release_service.create_release(app, args)
    except ImageNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return CreateReleaseResponse(name=name)
