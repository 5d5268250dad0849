from typing import List
import logging

from qapp_gateway.api.schemas.catalog import App, Flavor, Region
from qapp_gateway.external.control_plane_client import ControlPlaneClient

logger = logging.getLogger(__name__)


class CatalogService:
    """Listes en lecture seule: applications, flavors et régions"""

    def __init__(self, control_plane: ControlPlaneClient):
        self.control_plane = control_plane

    def list_apps(self) -> List[App]:
        apps = self.control_plane.list_apps()
        logger.info(f"Récupération de {len(apps)} applications")
        return apps

    def list_flavors(self) -> List[Flavor]:
        return self.control_plane.list_flavors()

    def list_regions(self) -> List[Region]:
        return self.control_plane.list_regions()
