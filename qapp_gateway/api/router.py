from fastapi import APIRouter

from qapp_gateway.api.v1 import images, catalog, releases, deploys

router = APIRouter()

router.include_router(images.router)
router.include_router(catalog.router)
router.include_router(releases.router)
router.include_router(deploys.router)


@router.get("/health")
def health():
    return {"status": "healthy"}
