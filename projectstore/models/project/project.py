from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import List

# ---------- Project Models ----------#

class ProjectType(str, Enum):
    TEXT = "text"
    IMAGES = "images"
    NUMBERS = "numbers"
    SOUNDS = "sounds"


class Project(BaseModel):
    userid: str
    classid: str
    type: ProjectType
    name: str
    language: str
    labels: List[str] = []
    is_crowd_sourced: bool = False
    numfields: int = 0


class ProjectOut(Project):
    id: str = Field(..., alias="_id")
    model_config = ConfigDict(protected_namespaces=(), populate_by_name=True, use_enum_values=True)
