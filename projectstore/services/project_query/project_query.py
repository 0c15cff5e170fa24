"""
Read-side queries over the projects collection.

Every listing has a matching count built from the same filter, so a count
always equals the length of the corresponding listing. The filters line up
with the ``(classid, userid)`` and ``classid`` indexes.
"""
from projectstore.database.conn import collection
from projectstore.utils.logger_utils import logger
from projectstore.models.project.project import ProjectOut
from projectstore.services.errors import StorageError
from pymongo.errors import PyMongoError
from typing import Any, Dict, List


def owned_project_filter(userid: str, classid: str, projectid: str, key: str = "_id") -> Dict[str, Any]:
    """Match one project (or its child records, via ``key``) only under its owner."""
    return {key: projectid, "userid": userid, "classid": classid}


def _user_filter(userid: str, classid: str) -> Dict[str, Any]:
    return {"classid": classid, "userid": userid}


def _class_filter(classid: str) -> Dict[str, Any]:
    return {"classid": classid}


def _visible_filter(userid: str, classid: str) -> Dict[str, Any]:
    return {"classid": classid, "$or": [{"userid": userid}, {"is_crowd_sourced": True}]}


async def _find_projects(query: Dict[str, Any]) -> List[ProjectOut]:
    try:
        docs = await collection("PROJECT_COLLECTION").find(
            query, sort=[("created_at", 1), ("_id", 1)]
        ).to_list(length=None)
        return [ProjectOut(**doc) for doc in docs]
    except PyMongoError as e:
        logger.error(f"project query {query} failed: {e}")
        raise StorageError(str(e)) from e


async def _count_projects(query: Dict[str, Any]) -> int:
    try:
        return await collection("PROJECT_COLLECTION").count_documents(query)
    except PyMongoError as e:
        logger.error(f"project count {query} failed: {e}")
        raise StorageError(str(e)) from e


async def get_projects_by_user_id(userid: str, classid: str) -> List[ProjectOut]:
    """Projects owned by the user within the class."""
    return await _find_projects(_user_filter(userid, classid))


async def count_projects_by_user_id(userid: str, classid: str) -> int:
    return await _count_projects(_user_filter(userid, classid))


async def get_projects_by_class_id(classid: str) -> List[ProjectOut]:
    """Projects in the class, whoever owns them."""
    return await _find_projects(_class_filter(classid))


async def count_projects_by_class_id(classid: str) -> int:
    return await _count_projects(_class_filter(classid))


async def get_projects_visible_to_user(userid: str, classid: str) -> List[ProjectOut]:
    """The user's own projects plus crowd-sourced projects shared with the class."""
    return await _find_projects(_visible_filter(userid, classid))
