"""
Tests du client qappctl avec subprocess.run simulé: lignes de commande
construites, messages d'erreur et décodage des sorties JSON.
"""

import subprocess

import pytest

from qapp_gateway.api.schemas.common import ZERO_TIME
from qapp_gateway.external.control_plane_client import ControlPlaneClient, ControlPlaneError


class FakeRun:
    def __init__(self, stdout=b"[]", returncode=0, error=None):
        self.stdout = stdout
        self.returncode = returncode
        self.error = error
        self.argv = []
        self.kwargs = []

    def __call__(self, argv, **kwargs):
        self.argv.append(argv)
        self.kwargs.append(kwargs)
        if self.error:
            raise self.error
        return subprocess.CompletedProcess(argv, self.returncode, stdout=self.stdout)


@pytest.fixture
def client():
    return ControlPlaneClient(binary="qappctl", access_key="ak-123", secret_key="sk-456")


def install(monkeypatch, **kwargs):
    fake = FakeRun(**kwargs)
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


def test_login_passes_credentials(monkeypatch, client):
    fake = install(monkeypatch, stdout=b"login success")

    client.login()

    assert fake.argv == [["qappctl", "login", "--ak", "ak-123", "--sk", "sk-456"]]
    assert fake.kwargs[0]["stderr"] == subprocess.STDOUT


def test_list_images_decodes_output(monkeypatch, client):
    fake = install(monkeypatch, stdout=b'[{"name": "web", "tag": "v1", "ctime": "2024-03-15T09:30:12Z"}]')

    images = client.list_images()

    assert fake.argv == [["qappctl", "images", "-o", "json"]]
    assert [(img.name, img.tag) for img in images] == [("web", "v1")]
    assert images[0].reference == "web:v1"


def test_null_list_output_is_empty(monkeypatch, client):
    install(monkeypatch, stdout=b"null")

    assert client.list_deploys("zenx", "z0") == []


def test_non_zero_exit_raises_with_output(monkeypatch, client):
    install(monkeypatch, stdout=b"Error: app not found\n", returncode=1)

    with pytest.raises(ControlPlaneError) as exc_info:
        client.list_releases("zenx")

    assert str(exc_info.value) == "err list releases: exit status 1, Error: app not found\n"
    assert exc_info.value.output == "Error: app not found\n"


def test_spawn_failure_raises(monkeypatch, client):
    install(monkeypatch, error=FileNotFoundError(2, "No such file or directory", "qappctl"))

    with pytest.raises(ControlPlaneError) as exc_info:
        client.push_image("web:v1")

    assert exc_info.value.action == "push image web:v1"
    assert "No such file or directory" in str(exc_info.value)


def test_invalid_json_output_raises(monkeypatch, client):
    install(monkeypatch, stdout=b"please login first")

    with pytest.raises(ControlPlaneError) as exc_info:
        client.list_images()

    assert "decode output" in str(exc_info.value)
    assert exc_info.value.output == "please login first"


def test_unexpected_shape_raises(monkeypatch, client):
    install(monkeypatch, stdout=b'[{"name": ["web"], "tag": "v1"}]')

    with pytest.raises(ControlPlaneError):
        client.list_images()


def test_missing_fields_decode_to_zero_values(monkeypatch, client):
    install(monkeypatch, stdout=b'[{"id": "i-1", "ips": "10.0.0.1"}]')

    instances = client.list_instances("zenx", "d-1", "z0")

    assert instances[0].id == "i-1"
    assert instances[0].status == ""
    assert instances[0].ctime == ZERO_TIME


def test_deploy_without_ctime_decodes(monkeypatch, client):
    install(monkeypatch, stdout=b'[{"id": "d-1", "release": "zenx-v0", "region": "z0"}]')

    deploys = client.list_deploys("zenx", "z0")

    assert (deploys[0].replicas, deploys[0].ctime) == (0, ZERO_TIME)


def test_create_deploy_command_line(monkeypatch, client):
    fake = install(monkeypatch, stdout=(
        b'{"id": "h221201-1658-30080-p8gv", "release": "zenx-v0", "region": "z0",'
        b' "replicas": 0, "ctime": "0001-01-01T00:00:00Z"}'
    ))

    deploy = client.create_deploy("zenx", "zenx-v0", "z0", 3)

    assert fake.argv == [["qappctl", "deploy", "create", "zenx", "--region", "z0", "--release", "zenx-v0",
                          "--expect_replicas", "3", "-o", "json"]]
    assert deploy.id == "h221201-1658-30080-p8gv"


@pytest.mark.parametrize("call, expected", [
    (lambda c: c.push_image("web:v1"), ["push", "web:v1"]),
    (lambda c: c.list_apps(), ["apps", "-o", "json"]),
    (lambda c: c.list_flavors(), ["flavors", "-o", "json"]),
    (lambda c: c.list_regions(), ["regions", "-o", "json"]),
    (lambda c: c.list_releases("zenx"), ["release", "list", "zenx", "-o", "json"]),
    (lambda c: c.create_release("zenx", "/tmp/cfg"), ["release", "create", "zenx", "-c", "/tmp/cfg"]),
    (lambda c: c.list_deploys("zenx", "z0"), ["deploy", "list", "--region", "z0", "zenx", "-o", "json"]),
    (lambda c: c.delete_deploy("zenx", "d-1", "z0"), ["deploy", "delete", "zenx", "--id", "d-1", "--region", "z0"]),
    (lambda c: c.list_instances("zenx", "d-1", "z0"),
     ["instance", "list", "zenx", "--deploy", "d-1", "--region", "z0", "-o", "json"]),
])
def test_command_lines(monkeypatch, client, call, expected):
    fake = install(monkeypatch)

    call(client)

    assert fake.argv == [["qappctl", *expected]]
