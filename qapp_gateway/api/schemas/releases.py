from pydantic import BaseModel, Field
from datetime import datetime

from qapp_gateway.api.schemas.common import ZERO_TIME
from typing import List, Optional


class ConfigFile(BaseModel):
    filename: str = ""
    mount_path: str = ""
    content: Optional[str] = None


class ReleaseConfig(BaseModel):
    name: str = ""
    files: List[ConfigFile] = []


class HealthCheck(BaseModel):
    path: Optional[str] = None
    timeout: Optional[int] = None  # secondes, 3s par défaut côté plateforme


class EnvVariable(BaseModel):
    key: str = ""
    value: str = ""


class KodoInfo(BaseModel):
    bucket_name: str = ""
    access_key: str = ""
    secret_key: str = ""


class Kodofs(BaseModel):
    volume: str = ""
    access_token: str = ""


class Kodo(BaseModel):
    goofys: Optional[KodoInfo] = None
    fcfs: Optional[KodoInfo] = None
    kodofs: Optional[Kodofs] = None
    region: str = ""
    mount_path: str = ""
    read_only: Optional[bool] = None


class Volume(BaseModel):
    kodo: Optional[Kodo] = None


class Release(BaseModel):
    name: str = ""
    desc: Optional[str] = None
    image: str = ""
    flavor: str = ""
    port: Optional[int] = None
    ctime: datetime = ZERO_TIME
    command: Optional[List[str]] = None
    args: Optional[List[str]] = None
    health_check: Optional[HealthCheck] = None
    env: Optional[List[EnvVariable]] = None
    volumes: Optional[List[Volume]] = None
    log_file_paths: Optional[List[str]] = None
    config: Optional[ReleaseConfig] = None


# === REQUÊTES ===
# Les corps de requête refusent les champs inconnus, y compris dans les objets imbriqués.

class ConfigFileArgs(ConfigFile):
    class Config:
        extra = "forbid"


class ReleaseConfigArgs(ReleaseConfig):
    files: List[ConfigFileArgs] = []

    class Config:
        extra = "forbid"


class HealthCheckArgs(HealthCheck):
    timeout: Optional[int] = Field(None, ge=0, strict=True)

    class Config:
        extra = "forbid"


class EnvVariableArgs(EnvVariable):
    class Config:
        extra = "forbid"


class CreateReleaseArgs(BaseModel):
    """Corps de POST /apps/{app}/releases, sérialisé tel quel dans dora.yaml"""
    name: str = ""
    desc: Optional[str] = None
    image: str = ""
    flavor: str = ""
    port: Optional[int] = Field(None, ge=0, strict=True)
    command: Optional[List[str]] = None
    args: Optional[List[str]] = None
    health_check: Optional[HealthCheckArgs] = None
    env: Optional[List[EnvVariableArgs]] = None
    log_file_paths: Optional[List[str]] = None
    config: Optional[ReleaseConfigArgs] = None

    class Config:
        extra = "forbid"


class CreateReleaseResponse(BaseModel):
    name: str = ""
