from typing import List

from fastapi import APIRouter, Depends

from qapp_gateway.api.schemas.catalog import App, Flavor, Region
from qapp_gateway.services.catalog_service import CatalogService
from qapp_gateway.dependencies import get_catalog_service

router = APIRouter(tags=["catalog"])


@router.get("/apps", response_model=List[App], response_model_exclude_none=True)
def list_apps(catalog_service: CatalogService = Depends(get_catalog_service)):
    return catalog_service.list_apps()


@router.get("/flavors", response_model=List[Flavor], response_model_exclude_none=True)
def list_flavors(catalog_service: CatalogService = Depends(get_catalog_service)):
    return catalog_service.list_flavors()


@router.get("/regions", response_model=List[Region], response_model_exclude_none=True)
def list_regions(catalog_service: CatalogService = Depends(get_catalog_service)):
    return catalog_service.list_regions()
