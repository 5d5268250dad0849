import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

import qapp_gateway.api.convertors  # noqa: F401  enregistre le convertisseur app_name
from qapp_gateway.api.content_type import JSONBodyRoute
from qapp_gateway.api.schemas.deploys import (
    CreateDeployRequest,
    CreateDeployResponse,
    DeleteDeployRequest,
    Deploy,
    Instance
)
from qapp_gateway.services.deploy_service import DeployService
from qapp_gateway.dependencies import get_deploy_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/apps/{app:app_name}/deploys", tags=["deploys"], route_class=JSONBodyRoute)


def _require_region(region: Optional[str]) -> str:
    if not region:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="empty region")
    return region


@router.get("", response_model=List[Deploy])
def list_deploys(
        app: str,
        region: Optional[str] = None,
        release: Optional[List[str]] = Query(None),
        deploy_service: DeployService = Depends(get_deploy_service)
):
    """Liste les déploiements d'une région; seul le premier paramètre release sert de filtre"""
    logger.info("handling list deploys")
    region = _require_region(region)
    release_filter = release[0] if release else None
    return deploy_service.list_deploys(app, region, release_filter)


@router.post("", response_model=CreateDeployResponse)
def create_deploy(
        app: str,
        deploy_request: CreateDeployRequest,
        deploy_service: DeployService = Depends(get_deploy_service)
):
    """Déploie une release dans une région"""
    logger.info("handling create deploy")
    if not deploy_request.region or not deploy_request.release:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="empty region or release")

    deploy = deploy_service.create_deploy(
        app,
        release=deploy_request.release,
        region=deploy_request.region,
        replicas=deploy_request.replicas
    )
    return CreateDeployResponse(id=deploy.id)


@router.delete("")
def delete_deploy(
        app: str,
        deploy_request: DeleteDeployRequest,
        deploy_service: DeployService = Depends(get_deploy_service)
):
    """Supprime un déploiement"""
    logger.info("handling delete deploy")
    if not deploy_request.region or not deploy_request.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="empty region or ID")

    deploy_service.delete_deploy(app, deploy_request.id, deploy_request.region)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/{deploy}/instances", response_model=List[Instance], response_model_exclude_none=True)
def list_deploy_instances(
        app: str,
        deploy: str,
        region: Optional[str] = None,
        deploy_service: DeployService = Depends(get_deploy_service)
):
    """Liste les instances d'un déploiement"""
    logger.info("handling list instances")
    region = _require_region(region)
    return deploy_service.list_instances(app, deploy, region)
