from pydantic import BaseModel, Field, ConfigDict
from typing import List, Union

# ---------- Training Data Models ----------#

class TrainingOut(BaseModel):
    id: str = Field(..., alias="_id")
    projectid: str
    label: str
    model_config = ConfigDict(protected_namespaces=(), populate_by_name=True)


class TextTrainingOut(TrainingOut):
    textdata: str


class NumberTrainingOut(TrainingOut):
    numberdata: List[float]


class ImageTrainingOut(TrainingOut):
    imageurl: str


class SoundTrainingOut(TrainingOut):
    audiodata: List[float]


AnyTrainingOut = Union[TextTrainingOut, NumberTrainingOut, ImageTrainingOut, SoundTrainingOut]
