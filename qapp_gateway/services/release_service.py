from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple
import logging
import tempfile

import yaml

from qapp_gateway.api.schemas.releases import CreateReleaseArgs, Release
from qapp_gateway.external.control_plane_client import ControlPlaneClient
from qapp_gateway.services.image_service import ImageService

logger = logging.getLogger(__name__)

RELEASE_FILE_NAME = "dora.yaml"
RELEASE_DIR_PREFIX = "qapp-release-yml"

# Champs obligatoires de dora.yaml, écrits même vides (release, config, fichiers, variables)
ALWAYS_RENDERED_FIELDS = ("name", "image", "flavor", "files", "filename", "mount_path", "key", "value")


class ImageNotFoundError(Exception):
    """L'image référencée par une release n'existe pas dans le registre de la plateforme"""

    def __init__(self, image: str):
        self.image = image
        super().__init__(f"image '{image}' not exists, please upload firstly")


def default_release_name(now: Optional[datetime] = None) -> str:
    """Nom de release par défaut: v + horodatage local, ex. v240315-093012"""
    return (now or datetime.now()).strftime("v%y%m%d-%H%M%S")


def _omit_empty(value: Any, always_kept: Tuple[str, ...]) -> Any:
    """Retire récursivement les champs vides (None, "", 0, [], {}) sauf ceux de always_kept"""
    if isinstance(value, dict):
        cleaned = {}
        for key, item in value.items():
            item = _omit_empty(item, always_kept)
            if key in always_kept or item not in (None, "", 0, [], {}):
                cleaned[key] = item
        return cleaned
    if isinstance(value, list):
        return [_omit_empty(item, always_kept) for item in value]
    return value


def render_release_yaml(args: CreateReleaseArgs) -> str:
    """Sérialise les arguments de release au format attendu par 'qappctl release create'"""
    document = _omit_empty(args.model_dump(), ALWAYS_RENDERED_FIELDS)
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True, default_flow_style=False)


class ReleaseService:
    def __init__(self, control_plane: ControlPlaneClient, image_service: ImageService):
        self.control_plane = control_plane
        self.image_service = image_service

    def list_releases(self, app: str) -> List[Release]:
        releases = self.control_plane.list_releases(app)
        logger.info(f"Récupération de {len(releases)} releases pour {app}")
        return releases

    def create_release(self, app: str, args: CreateReleaseArgs) -> str:
        """
        Crée une release de l'application et retourne le nom utilisé.

        Le nom est généré s'il est absent. L'image doit déjà exister dans le
        registre de la plateforme, sinon ImageNotFoundError est levée avant
        toute écriture. Le fichier dora.yaml est écrit dans un répertoire
        temporaire supprimé après l'appel à qappctl, même en cas d'erreur.
        """
        if not args.name:
            args = args.model_copy(update={"name": default_release_name()})

        if not self.image_service.image_exists(args.image):
            raise ImageNotFoundError(args.image)

        content = render_release_yaml(args)
        with tempfile.TemporaryDirectory(prefix=RELEASE_DIR_PREFIX) as config_dir:
            Path(config_dir, RELEASE_FILE_NAME).write_text(content, encoding="utf-8")
            logger.debug(f"Configuration de release écrite dans {config_dir}")
            self.control_plane.create_release(app, config_dir)

        logger.info(f"Release {args.name} créée pour {app}")
        return args.name
