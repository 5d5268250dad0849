from typing import List, Optional
import logging

from qapp_gateway.api.schemas.deploys import Deploy, Instance
from qapp_gateway.external.control_plane_client import ControlPlaneClient

logger = logging.getLogger(__name__)


class DeployService:
    def __init__(self, control_plane: ControlPlaneClient):
        self.control_plane = control_plane

    def list_deploys(self, app: str, region: str, release: Optional[str] = None) -> List[Deploy]:
        """Liste les déploiements d'une application dans une région, filtrés par release si demandé"""
        deploys = self.control_plane.list_deploys(app, region)
        if release is None:
            return list(deploys)
        return [deploy for deploy in deploys if deploy.release == release]

    def create_deploy(self, app: str, release: str, region: str, replicas: int = 0) -> Deploy:
        deploy = self.control_plane.create_deploy(app, release, region, replicas)
        logger.info(f"Déploiement {deploy.id} créé pour {app} ({release}, {region}, {replicas} réplicas)")
        return deploy

    def delete_deploy(self, app: str, deploy_id: str, region: str) -> None:
        self.control_plane.delete_deploy(app, deploy_id, region)
        logger.info(f"Déploiement {deploy_id} supprimé pour {app} ({region})")

    def list_instances(self, app: str, deploy_id: str, region: str) -> List[Instance]:
        return self.control_plane.list_instances(app, deploy_id, region)
