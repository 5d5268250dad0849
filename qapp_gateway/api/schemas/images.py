from pydantic import BaseModel
from datetime import datetime

from qapp_gateway.api.schemas.common import ZERO_TIME


class Image(BaseModel):
    name: str = ""
    tag: str = ""
    ctime: datetime = ZERO_TIME

    @property
    def reference(self) -> str:
        return f"{self.name}:{self.tag}"


class PushImageRequest(BaseModel):
    image: str = ""

    class Config:
        extra = "forbid"
