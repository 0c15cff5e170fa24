"""
Training examples, kept in one collection per project type.

Examples are only ever appended here. They are removed all together when
their project is deleted, and their label is never rewritten: an example can
keep a label that has since been removed from its project.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pymongo.errors import DuplicateKeyError, PyMongoError

from config import TRAINING_PAGE_SIZE
from projectstore.database.conn import collection
from projectstore.utils.logger_utils import logger
from projectstore.utils.identifiers import generate_id
from projectstore.models.project.project import ProjectOut, ProjectType
from projectstore.models.training.training import (
    AnyTrainingOut,
    ImageTrainingOut,
    NumberTrainingOut,
    SoundTrainingOut,
    TextTrainingOut,
)
from projectstore.services.errors import (
    DuplicateTrainingError,
    ProjectNotFoundError,
    ProjectStoreError,
    StorageError,
)
from projectstore.services.project_management.project import get_project


# project type -> (collection key, payload field, output model, unique per project)
_TRAINING_TYPES: Dict[ProjectType, tuple] = {
    ProjectType.TEXT: ("TEXT_TRAINING_COLLECTION", "textdata", TextTrainingOut, True),
    ProjectType.NUMBERS: ("NUMBER_TRAINING_COLLECTION", "numberdata", NumberTrainingOut, False),
    ProjectType.IMAGES: ("IMAGE_TRAINING_COLLECTION", "imageurl", ImageTrainingOut, True),
    ProjectType.SOUNDS: ("SOUND_TRAINING_COLLECTION", "audiodata", SoundTrainingOut, False),
}

_DUPLICATE_MESSAGES = {
    ProjectType.TEXT: "Text already stored",
    ProjectType.IMAGES: "Image already in project",
}


def training_collection(project_type: Union[ProjectType, str]):
    key = _TRAINING_TYPES[ProjectType(project_type)][0]
    return collection(key)


async def _insert_training(project_type: ProjectType, projectid: str, payload: Any, label: str) -> AnyTrainingOut:
    key, payload_field, model, unique = _TRAINING_TYPES[project_type]

    # validates the payload shape before anything is written
    out = model(_id=generate_id(), projectid=projectid, label=label, **{payload_field: payload})
    doc = out.model_dump(by_alias=True)
    doc["created_at"] = datetime.utcnow()

    try:
        if unique:
            # upsert keyed on the payload so a repeated example is refused
            # atomically; the unique index covers concurrent first inserts
            identity = {"projectid": projectid, payload_field: doc[payload_field]}
            on_insert = {k: v for k, v in doc.items() if k not in identity}
            res = await collection(key).update_one(identity, {"$setOnInsert": on_insert}, upsert=True)
            if res.upserted_id is None:
                raise DuplicateTrainingError(_DUPLICATE_MESSAGES[project_type])
        else:
            await collection(key).insert_one(doc)
        return out
    except ProjectStoreError:
        raise
    except DuplicateKeyError as e:
        raise DuplicateTrainingError(_DUPLICATE_MESSAGES.get(project_type, "Training already stored")) from e
    except PyMongoError as e:
        logger.error(f"store {project_type.value} training error for project {projectid}: {e}")
        raise StorageError(str(e)) from e


async def store_text_training(projectid: str, textdata: str, label: str) -> TextTrainingOut:
    return await _insert_training(ProjectType.TEXT, projectid, textdata, label)


async def store_number_training(projectid: str, numberdata: List[float], label: str) -> NumberTrainingOut:
    return await _insert_training(ProjectType.NUMBERS, projectid, numberdata, label)


async def store_image_training(projectid: str, imageurl: str, label: str) -> ImageTrainingOut:
    return await _insert_training(ProjectType.IMAGES, projectid, imageurl, label)


async def store_sound_training(projectid: str, audiodata: List[float], label: str) -> SoundTrainingOut:
    return await _insert_training(ProjectType.SOUNDS, projectid, audiodata, label)


async def store_training(projectid: str, payload: Any, label: str) -> AnyTrainingOut:
    """
    Store an example in the collection matching the project's type.

    The label is stored as given; it does not have to be one of the
    project's current labels.

    Raises:
        ProjectNotFoundError: if the project does not exist
    """
    project = await get_project(projectid)
    if project is None:
        logger.warning(f"store_training: project {projectid} not found")
        raise ProjectNotFoundError()
    return await _insert_training(ProjectType(project.type), projectid, payload, label)


async def get_training(project: ProjectOut, start: int = 0, limit: Optional[int] = None) -> List[AnyTrainingOut]:
    """A page of the project's examples, oldest first."""
    if limit is None:
        limit = TRAINING_PAGE_SIZE
    _, _, model, _ = _TRAINING_TYPES[ProjectType(project.type)]
    try:
        docs = await training_collection(project.type).find(
            {"projectid": project.id},
            sort=[("created_at", 1), ("_id", 1)],
            skip=start,
            limit=limit,
        ).to_list(length=None)
        return [model(**doc) for doc in docs]
    except PyMongoError as e:
        logger.error(f"get_training error for project {project.id}: {e}")
        raise StorageError(str(e)) from e


async def count_training(project: ProjectOut) -> int:
    try:
        return await training_collection(project.type).count_documents({"projectid": project.id})
    except PyMongoError as e:
        logger.error(f"count_training error for project {project.id}: {e}")
        raise StorageError(str(e)) from e


async def delete_training(project_type: Union[ProjectType, str], projectid: str) -> int:
    try:
        res = await training_collection(project_type).delete_many({"projectid": projectid})
        return res.deleted_count
    except PyMongoError as e:
        logger.error(f"delete_training error for project {projectid}: {e}")
        raise StorageError(str(e)) from e
