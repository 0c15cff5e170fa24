from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List, Optional

# ---------- Numbers Project Field Models ----------#

class FieldType(str, Enum):
    NUMBER = "number"
    MULTICHOICE = "multichoice"


class FieldSpec(BaseModel):
    """A field definition as supplied when creating a numbers project."""
    name: str
    type: FieldType
    choices: Optional[List[str]] = None

    @model_validator(mode="after")
    def check_choices(self):
        if self.type == FieldType.MULTICHOICE and not self.choices:
            raise ValueError("multichoice fields need at least one choice")
        return self


class FieldOut(BaseModel):
    id: str = Field(..., alias="_id")
    userid: str
    classid: str
    projectid: str
    name: str
    type: FieldType
    choices: List[str] = []
    model_config = ConfigDict(protected_namespaces=(), populate_by_name=True, use_enum_values=True)
