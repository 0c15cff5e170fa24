from projectstore.database.conn import collection
from projectstore.utils.logger_utils import logger
from projectstore.utils.identifiers import generate_id
from projectstore.models.field.field import FieldSpec, FieldOut, FieldType
from projectstore.services.errors import ProjectStoreError, ProjectNotFoundError, StorageError
from projectstore.services.project_query.project_query import owned_project_filter
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from typing import List, Union


async def add_field(userid: str, classid: str, projectid: str, field_spec: Union[FieldSpec, dict]) -> FieldOut:
    """
    Append a field to the end of a numbers project's field list.

    The project's ``numfields`` counter is incremented atomically and the
    value it had before the increment becomes the new field's position, so
    concurrent calls never share a slot.
    """
    spec = field_spec if isinstance(field_spec, FieldSpec) else FieldSpec(**field_spec)
    try:
        project = await collection("PROJECT_COLLECTION").find_one_and_update(
            owned_project_filter(userid, classid, projectid),
            {"$inc": {"numfields": 1}},
            return_document=ReturnDocument.AFTER,
        )
        if project is None:
            logger.warning(f"add_field: project {projectid} not found for user {userid} in class {classid}")
            raise ProjectNotFoundError()

        doc = {
            "_id": generate_id(),
            "userid": userid,
            "classid": classid,
            "projectid": projectid,
            "name": spec.name,
            "type": spec.type.value,
            "choices": list(spec.choices) if spec.type == FieldType.MULTICHOICE else [],
            "position": project["numfields"] - 1,
        }
        await collection("FIELD_COLLECTION").insert_one(doc)
        return FieldOut(**doc)
    except ProjectStoreError:
        raise
    except PyMongoError as e:
        logger.error(f"add_field error: {e}")
        raise StorageError(str(e)) from e


async def get_number_project_fields(userid: str, classid: str, projectid: str) -> List[FieldOut]:
    """Fields of a project in the order they were added. Empty if there are none."""
    try:
        docs = await collection("FIELD_COLLECTION").find(
            owned_project_filter(userid, classid, projectid, key="projectid"),
            sort=[("position", 1)],
        ).to_list(length=None)
        return [FieldOut(**doc) for doc in docs]
    except PyMongoError as e:
        logger.error(f"get_number_project_fields error: {e}")
        raise StorageError(str(e)) from e


async def delete_project_fields(projectid: str) -> int:
    try:
        res = await collection("FIELD_COLLECTION").delete_many({"projectid": projectid})
        return res.deleted_count
    except PyMongoError as e:
        logger.error(f"delete_project_fields error: {e}")
        raise StorageError(str(e)) from e

