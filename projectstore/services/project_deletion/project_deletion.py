"""
Project deletion service for cascading cleanup.

Deletes run leaf first: training examples, then field definitions, then the
project document. A teardown that stops part way leaves the project in
place for a retry, and every step tolerates records that are already missing
so the same call can simply be repeated. Bulk deletes work through the listed
projects by id and never delete children by owner.
"""
from typing import Any, Dict, List

from projectstore.database.conn import collection
from projectstore.models.project.project import ProjectOut
from projectstore.services.errors import ProjectNotFoundError, StorageError
from projectstore.services.field_management.field import delete_project_fields
from projectstore.services.project_query.project_query import (
    get_projects_by_class_id,
    get_projects_by_user_id,
    owned_project_filter,
)
from projectstore.services.training_data.training import delete_training
from projectstore.utils.logger_utils import logger
from pymongo.errors import PyMongoError


async def delete_entire_project(userid: str, classid: str, project: ProjectOut) -> Dict[str, Any]:
    """
    Delete a project with its fields and training data.

    Args:
        userid: The owner of the project
        classid: The class the project belongs to
        project: The project to delete

    Returns:
        Dictionary with the number of records removed at each step

    Raises:
        ProjectNotFoundError: If the project is not owned by userid in classid
    """
    if project.userid != userid or project.classid != classid:
        logger.warning(f"Refusing to delete project {project.id}: not owned by user {userid} in class {classid}")
        raise ProjectNotFoundError()

    logger.info(f"Starting deletion of project {project.id} (user: {userid}, class: {classid})")

    # Step 1: training examples
    training_deleted = await delete_training(project.type, project.id)

    # Step 2: field definitions
    fields_deleted = await delete_project_fields(project.id)

    # Step 3: project document
    project_deleted = await _delete_project_document(userid, classid, project.id)

    deletion_summary = {
        "project_id": project.id,
        "deletion_results": {
            "training": training_deleted,
            "fields": fields_deleted,
            "project_document": project_deleted,
        },
    }
    logger.info(f"Deleted project {project.id}: {deletion_summary['deletion_results']}")
    return deletion_summary


async def _delete_project_document(userid: str, classid: str, projectid: str) -> int:
    try:
        result = await collection("PROJECT_COLLECTION").delete_one(
            owned_project_filter(userid, classid, projectid)
        )
        if result.deleted_count == 0:
            logger.info(f"Project document {projectid} was already deleted")
        return result.deleted_count
    except PyMongoError as e:
        logger.error(f"Error deleting project document {projectid}: {e}")
        raise StorageError(str(e)) from e


async def _delete_projects(projects: List[ProjectOut]) -> List[Dict[str, Any]]:
    summaries = []
    for project in projects:
        summaries.append(await delete_entire_project(project.userid, project.classid, project))
    return summaries


async def delete_entire_user(userid: str, classid: str) -> Dict[str, Any]:
    """Delete every project the user owns in the class."""
    projects = await get_projects_by_user_id(userid, classid)
    summaries = await _delete_projects(projects)

    logger.info(f"Deleted {len(summaries)} projects of user {userid} in class {classid}")
    return {
        "userid": userid,
        "classid": classid,
        "projects": summaries,
    }


async def delete_projects_by_class_id(classid: str) -> Dict[str, Any]:
    """Delete every project in the class, whoever owns it."""
    projects = await get_projects_by_class_id(classid)
    summaries = await _delete_projects(projects)

    logger.info(f"Deleted {len(summaries)} projects in class {classid}")
    return {
        "classid": classid,
        "projects": summaries,
    }
