import json
import logging
import subprocess
from typing import Any, List, Sequence, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from qapp_gateway.api.schemas.images import Image
from qapp_gateway.api.schemas.catalog import App, Flavor, Region
from qapp_gateway.api.schemas.releases import Release
from qapp_gateway.api.schemas.deploys import Deploy, Instance

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ControlPlaneError(Exception):
    """Échec d'une commande externe: code de sortie non nul, lancement impossible ou sortie illisible"""

    def __init__(self, action: str, cause: Any, output: str = ""):
        self.action = action
        self.cause = cause
        self.output = output
        super().__init__(f"err {action}: {cause}, {output}")


def run_command(argv: Sequence[str], action: str) -> bytes:
    """Exécute une commande et renvoie stdout+stderr combinés"""
    try:
        result = subprocess.run(list(argv), stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    except OSError as e:
        logger.error(f"Impossible de lancer {argv[0]} ({action}): {e}")
        raise ControlPlaneError(action, e) from e

    output = result.stdout or b""
    if result.returncode != 0:
        text = output.decode("utf-8", errors="replace")
        logger.error(f"Échec de '{action}' (code {result.returncode}): {text.strip()}")
        raise ControlPlaneError(action, f"exit status {result.returncode}", text)
    return output


class ControlPlaneClient:
    """Client de la plateforme: une méthode par commande qappctl"""

    def __init__(self, binary: str = "qappctl", access_key: str = "", secret_key: str = ""):
        self.binary = binary
        self.access_key = access_key
        self.secret_key = secret_key

    def run(self, args: Sequence[str], action: str) -> bytes:
        argv = [self.binary, *args]
        logger.debug(f"Exécution: {' '.join(argv)}")
        return run_command(argv, action)

    def _decode(self, output: bytes, model: Type[T], action: str) -> T:
        try:
            data = json.loads(output)
            if data is None and getattr(model, "__origin__", None) is list:
                return []
            return TypeAdapter(model).validate_python(data)
        except (ValueError, ValidationError) as e:
            raise ControlPlaneError(action, f"decode output: {e}",
                                    output.decode("utf-8", errors="replace")) from e

    def login(self) -> None:
        self.run(["login", "--ak", self.access_key, "--sk", self.secret_key], "login")

    def push_image(self, ref: str) -> None:
        self.run(["push", ref], f"push image {ref}")

    # qappctl images -o json
    def list_images(self) -> List[Image]:
        out = self.run(["images", "-o", "json"], "list images")
        return self._decode(out, List[Image], "list images")

    # qappctl apps -o json
    def list_apps(self) -> List[App]:
        out = self.run(["apps", "-o", "json"], "list apps")
        return self._decode(out, List[App], "list apps")

    # qappctl flavors -o json
    def list_flavors(self) -> List[Flavor]:
        out = self.run(["flavors", "-o", "json"], "list flavors")
        return self._decode(out, List[Flavor], "list flavors")

    # qappctl regions -o json
    def list_regions(self) -> List[Region]:
        out = self.run(["regions", "-o", "json"], "list regions")
        return self._decode(out, List[Region], "list regions")

    # qappctl release list <app> -o json
    def list_releases(self, app: str) -> List[Release]:
        out = self.run(["release", "list", app, "-o", "json"], "list releases")
        return self._decode(out, List[Release], "list releases")

    # qappctl release create <app> -c <config-dir>
    def create_release(self, app: str, config_dir: str) -> None:
        self.run(["release", "create", app, "-c", config_dir], "create release")

    # qappctl deploy list --region <region> <app> -o json
    def list_deploys(self, app: str, region: str) -> List[Deploy]:
        out = self.run(["deploy", "list", "--region", region, app, "-o", "json"], "list deploys")
        return self._decode(out, List[Deploy], "list deploys")

    def create_deploy(self, app: str, release: str, region: str, replicas: int) -> Deploy:
        """
        qappctl deploy create <app> --region <region> --release <release> --expect_replicas <n> -o json

        Exemple de sortie:
            {"id": "h221201-1658-30080-p8gv", "release": "zenx-v0", "region": "z0",
             "replicas": 0, "ctime": "0001-01-01T00:00:00Z"}
        """
        out = self.run(["deploy", "create", app,
                        "--region", region, "--release", release,
                        "--expect_replicas", str(replicas),
                        "-o", "json"], "create deploy")
        return self._decode(out, Deploy, "create deploy")

    # qappctl deploy delete <app> --id <deploy_id> --region <region>
    def delete_deploy(self, app: str, deploy_id: str, region: str) -> None:
        self.run(["deploy", "delete", app, "--id", deploy_id, "--region", region], "delete deploy")

    # qappctl instance list <app> --deploy <deploy_id> --region <region> -o json
    def list_instances(self, app: str, deploy_id: str, region: str) -> List[Instance]:
        out = self.run(["instance", "list", app, "--deploy", deploy_id, "--region", region, "-o", "json"],
                       "list deploy instances")
        return self._decode(out, List[Instance], "list deploy instances")
