# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Doubles de test pour qappctl et docker: aucun processus n'est lancé.
# Les appels sont enregistrés dans une liste partagée pour vérifier l'ordre.
# =============================================================================

import os

os.environ.setdefault("ACCESS_KEY", "test-access-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timezone
from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient

from qapp_gateway.api.schemas.catalog import App, Flavor, Region
from qapp_gateway.api.schemas.deploys import Deploy, Instance
from qapp_gateway.api.schemas.images import Image
from qapp_gateway.api.schemas.releases import Release
from qapp_gateway.config import Settings
from qapp_gateway.dependencies import get_control_plane_client, get_docker_client
from qapp_gateway.main import create_app

CTIME = datetime(2024, 3, 15, 9, 30, 12, tzinfo=timezone.utc)


class FakeControlPlane:
    def __init__(self, calls):
        self.calls = calls
        self.failures = {}
        self.images = []
        self.apps = []
        self.flavors = []
        self.regions = []
        self.releases = []
        self.deploys = []
        self.instances = []
        self.release_dirs = []
        self.release_documents = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.failures:
            raise self.failures[name]

    def login(self):
        self._record("login")

    def push_image(self, ref):
        self._record("push_image", ref)

    def list_images(self):
        self._record("list_images")
        return list(self.images)

    def list_apps(self):
        self._record("list_apps")
        return list(self.apps)

    def list_flavors(self):
        self._record("list_flavors")
        return list(self.flavors)

    def list_regions(self):
        self._record("list_regions")
        return list(self.regions)

    def list_releases(self, app):
        self._record("list_releases", app)
        return list(self.releases)

    def create_release(self, app, config_dir):
        self.release_dirs.append(config_dir)
        self.release_documents.append(yaml.safe_load(Path(config_dir, "dora.yaml").read_text()))
        self._record("create_release", app, config_dir)

    def list_deploys(self, app, region):
        self._record("list_deploys", app, region)
        return list(self.deploys)

    def create_deploy(self, app, release, region, replicas):
        self._record("create_deploy", app, release, region, replicas)
        return Deploy(id="h221201-1658-30080-p8gv", release=release, region=region,
                      replicas=replicas, ctime=CTIME)

    def delete_deploy(self, app, deploy_id, region):
        self._record("delete_deploy", app, deploy_id, region)

    def list_instances(self, app, deploy_id, region):
        self._record("list_instances", app, deploy_id, region)
        return list(self.instances)


class FakeDocker:
    def __init__(self, calls):
        self.calls = calls
        self.failures = {}

    def ensure_image(self, ref):
        self.calls.append(("ensure_image", ref))
        if "ensure_image" in self.failures:
            raise self.failures["ensure_image"]


def make_image(name, tag):
    return Image(name=name, tag=tag, ctime=CTIME)


def make_deploy(deploy_id, release, region="z0", replicas=1):
    return Deploy(id=deploy_id, release=release, region=region, replicas=replicas, ctime=CTIME)


@pytest.fixture
def calls():
    return []


@pytest.fixture
def control_plane(calls):
    return FakeControlPlane(calls)


@pytest.fixture
def docker(calls):
    return FakeDocker(calls)


@pytest.fixture
def app(control_plane, docker):
    gateway = create_app(Settings(QAPPCTL_BIN="qappctl-not-installed", DOCKER_BIN="docker-not-installed"))
    gateway.state.control_plane = control_plane
    gateway.dependency_overrides[get_control_plane_client] = lambda: control_plane
    gateway.dependency_overrides[get_docker_client] = lambda: docker
    return gateway


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def sample_catalog(control_plane):
    control_plane.apps = [App(name="zenx", desc="demo app")]
    control_plane.flavors = [Flavor(name="C1M1", cpu=1, memory=1024, regions=["z0"])]
    control_plane.regions = [Region(name="z0")]
    control_plane.releases = [
        Release(name="v1", image="web:v1", flavor="C1M1", port=8080, ctime=CTIME)
    ]
    control_plane.instances = [
        Instance(ctime=CTIME, id="ins-1", status="running", ips="10.0.0.1"),
        Instance(ctime=CTIME, id="ins-2", status="pending"),
    ]
    return control_plane
