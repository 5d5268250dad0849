from fastapi import Depends, Request

from qapp_gateway.config import Settings
from qapp_gateway.external.control_plane_client import ControlPlaneClient
from qapp_gateway.external.docker_client import DockerClient
from qapp_gateway.services.image_service import ImageService
from qapp_gateway.services.catalog_service import CatalogService
from qapp_gateway.services.release_service import ReleaseService
from qapp_gateway.services.deploy_service import DeployService


# === CLIENTS EXTERNES ===
def build_control_plane_client(settings: Settings) -> ControlPlaneClient:
    return ControlPlaneClient(
        binary=settings.QAPPCTL_BIN,
        access_key=settings.ACCESS_KEY,
        secret_key=settings.SECRET_KEY
    )


def build_docker_client(settings: Settings) -> DockerClient:
    return DockerClient(binary=settings.DOCKER_BIN)


def get_control_plane_client(request: Request) -> ControlPlaneClient:
    """Client qappctl partagé, créé au démarrage de l'application"""
    return request.app.state.control_plane


def get_docker_client(request: Request) -> DockerClient:
    return request.app.state.docker


# === SERVICES ===
def get_image_service(
        control_plane: ControlPlaneClient = Depends(get_control_plane_client),
        docker_client: DockerClient = Depends(get_docker_client)
) -> ImageService:
    return ImageService(control_plane, docker_client)


def get_catalog_service(
        control_plane: ControlPlaneClient = Depends(get_control_plane_client)
) -> CatalogService:
    return CatalogService(control_plane)


def get_release_service(
        control_plane: ControlPlaneClient = Depends(get_control_plane_client),
        image_service: ImageService = Depends(get_image_service)
) -> ReleaseService:
    return ReleaseService(control_plane, image_service)


def get_deploy_service(
        control_plane: ControlPlaneClient = Depends(get_control_plane_client)
) -> DeployService:
    return DeployService(control_plane)
