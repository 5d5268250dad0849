from typing import List
import logging

from qapp_gateway.api.schemas.images import Image
from qapp_gateway.external.control_plane_client import ControlPlaneClient
from qapp_gateway.external.docker_client import DockerClient

logger = logging.getLogger(__name__)


class ImageService:
    def __init__(self, control_plane: ControlPlaneClient, docker_client: DockerClient):
        self.control_plane = control_plane
        self.docker_client = docker_client

    def list_images(self) -> List[Image]:
        """Récupère les images du registre de la plateforme"""
        images = self.control_plane.list_images()
        logger.info(f"Récupération de {len(images)} images")
        return images

    @staticmethod
    def normalize_reference(ref: str) -> str:
        """Retire le préfixe registre/namespace: 'registry.example.com/team/web:v1' -> 'web:v1'"""
        return ref.split("/")[-1]

    def image_exists(self, ref: str) -> bool:
        """Vérifie si l'image name:tag est déjà présente dans le registre de la plateforme"""
        wanted = self.normalize_reference(ref)
        return any(image.reference == wanted for image in self.control_plane.list_images())

    def push_image(self, ref: str) -> bool:
        """
        Pousse une image vers la plateforme si elle n'y est pas déjà.

        L'image est d'abord rendue disponible dans le docker local, puis poussée
        avec qappctl. Retourne False si l'image existait déjà (rien n'est poussé).
        """
        if self.image_exists(ref):
            logger.info(f"Image {ref} déjà présente, push ignoré")
            return False

        try:
            self.docker_client.ensure_image(ref)
            self.control_plane.push_image(ref)
        except Exception as e:
            logger.error(f"Erreur lors du push de l'image {ref}: {e}")
            raise

        logger.info(f"Image {ref} poussée avec succès")
        return True
