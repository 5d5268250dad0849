import logging

from qapp_gateway.external.control_plane_client import ControlPlaneError, run_command

logger = logging.getLogger(__name__)


class DockerClient:
    """Accès au démon Docker de la machine de build, d'où qappctl pousse les images"""

    def __init__(self, binary: str = "docker"):
        self.binary = binary

    def has_image(self, ref: str) -> bool:
        try:
            run_command([self.binary, "image", "inspect", ref], f"inspect image {ref}")
            return True
        except ControlPlaneError:
            return False

    def ensure_image(self, ref: str) -> None:
        """S'assure que l'image est présente localement, sinon la récupère avec docker pull"""
        if self.has_image(ref):
            logger.debug(f"Image {ref} déjà présente dans docker")
            return

        logger.info(f"Image {ref} absente de docker, pull en cours")
        try:
            run_command([self.binary, "pull", ref], f"pull image {ref}")
        except ControlPlaneError as e:
            raise ControlPlaneError(f"ensure image {ref} in docker", e.cause, e.output) from e
