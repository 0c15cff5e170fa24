from projectstore.database.conn import collection
from projectstore.utils.logger_utils import logger
from projectstore.utils.identifiers import generate_id
from projectstore.models.project.project import Project, ProjectOut, ProjectType
from projectstore.models.field.field import FieldSpec
from projectstore.services.field_management.field import add_field
from projectstore.services.errors import ProjectStoreError, StorageError
from pymongo.errors import PyMongoError
from datetime import datetime
from typing import List, Optional, Sequence, Union


async def store_project(
    userid: str,
    classid: str,
    type: Union[ProjectType, str],
    name: str,
    language: str,
    fields: Sequence[Union[FieldSpec, dict]],
    is_crowd_sourced: bool,
) -> ProjectOut:
    """
    Create a project and, for numbers projects, its field definitions.

    Fields are added one at a time in the order given, which is the order
    they are read back in.
    """
    payload = Project(
        userid=userid,
        classid=classid,
        type=type,
        name=name,
        language=language,
        labels=[],
        is_crowd_sourced=is_crowd_sourced,
        numfields=0,
    )
    specs: List[FieldSpec] = [f if isinstance(f, FieldSpec) else FieldSpec(**f) for f in fields]

    try:
        doc = payload.model_dump(mode="json")
        doc["_id"] = generate_id()
        doc["created_at"] = datetime.utcnow()
        await collection("PROJECT_COLLECTION").insert_one(doc)
        logger.info(f"Created {doc['type']} project {doc['_id']} for user {userid} in class {classid}")
    except PyMongoError as e:
        logger.error(f"store_project error: {e}")
        raise StorageError(str(e)) from e

    try:
        for spec in specs:
            await add_field(userid, classid, doc["_id"], spec)
    except ProjectStoreError as e:
        logger.error(f"store_project: project {doc['_id']} left incomplete, adding fields failed: {e}")
        raise
    doc["numfields"] = len(specs)

    return ProjectOut(**doc)


async def get_project(projectid: str) -> Optional[ProjectOut]:
    """Look a project up by id. Returns ``None`` if there is no such project."""
    try:
        doc = await collection("PROJECT_COLLECTION").find_one({"_id": projectid})
        if not doc:
            return None
        return ProjectOut(**doc)
    except PyMongoError as e:
        logger.error(f"get_project error: {e}")
        raise StorageError(str(e)) from e
