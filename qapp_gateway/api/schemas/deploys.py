from pydantic import BaseModel, Field
from datetime import datetime

from qapp_gateway.api.schemas.common import ZERO_TIME
from typing import Optional


class Deploy(BaseModel):
    id: str = ""
    release: str = ""
    region: str = ""
    replicas: int = 0
    ctime: datetime = ZERO_TIME


class Instance(BaseModel):
    ctime: datetime = ZERO_TIME
    id: str = ""
    status: str = ""
    ips: Optional[str] = None


class CreateDeployRequest(BaseModel):
    release: str = ""
    region: str = ""
    replicas: int = Field(0, ge=0, strict=True)

    class Config:
        extra = "forbid"


class CreateDeployResponse(BaseModel):
    id: str = ""


class DeleteDeployRequest(BaseModel):
    id: str = ""
    region: str = ""

    class Config:
        extra = "forbid"
