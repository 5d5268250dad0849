from pydantic import BaseModel
from typing import List, Optional


class App(BaseModel):
    name: str = ""
    desc: str = ""


class Flavor(BaseModel):
    name: str = ""
    cpu: int = 0
    memory: int = 0
    gpu: Optional[str] = None
    regions: Optional[List[str]] = None


class Region(BaseModel):
    name: str = ""
    desc: Optional[str] = None
