"""
Label list of a project.

Label changes are single atomic updates on the project document
(``$addToSet`` / ``$pull`` through ``find_one_and_update``), so concurrent
adds and removes on the same project cannot overwrite each other.

Invalid input is ignored rather than rejected: adding an empty or existing
label, or removing an empty or unknown one, returns the labels unchanged.
A missing project is always an error.
"""
from projectstore.database.conn import collection
from projectstore.utils.logger_utils import logger
from projectstore.utils.identifiers import normalize_label
from projectstore.models.project.project import ProjectOut
from projectstore.services.errors import ProjectNotFoundError, StorageError
from projectstore.services.project_query.project_query import owned_project_filter
from projectstore.services.training_data.training import training_collection
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from typing import Any, Dict, List


async def _current_labels(query: Dict[str, Any]) -> List[str]:
    doc = await collection("PROJECT_COLLECTION").find_one(query)
    if doc is None:
        raise ProjectNotFoundError()
    return doc["labels"]


async def _update_labels(query: Dict[str, Any], update: Dict[str, Any]) -> List[str]:
    doc = await collection("PROJECT_COLLECTION").find_one_and_update(
        query, update, return_document=ReturnDocument.AFTER
    )
    if doc is None:
        raise ProjectNotFoundError()
    return doc["labels"]


async def add_label_to_project(userid: str, classid: str, projectid: str, label: str) -> List[str]:
    """Append a label to the project's labels. Returns the resulting labels."""
    label = normalize_label(label)
    query = owned_project_filter(userid, classid, projectid)
    try:
        if not label:
            return await _current_labels(query)
        return await _update_labels(query, {"$addToSet": {"labels": label}})
    except ProjectNotFoundError:
        logger.warning(f"add_label_to_project: project {projectid} not found for user {userid} in class {classid}")
        raise
    except PyMongoError as e:
        logger.error(f"add_label_to_project error: {e}")
        raise StorageError(str(e)) from e


async def remove_label_from_project(userid: str, classid: str, projectid: str, label: str) -> List[str]:
    """
    Remove a label from the project's labels. Returns the resulting labels.

    Training examples stored under the label are left as they are.
    """
    label = normalize_label(label)
    query = owned_project_filter(userid, classid, projectid)
    try:
        if not label:
            return await _current_labels(query)
        return await _update_labels(query, {"$pull": {"labels": label}})
    except ProjectNotFoundError:
        logger.warning(f"remove_label_from_project: project {projectid} not found for user {userid} in class {classid}")
        raise
    except PyMongoError as e:
        logger.error(f"remove_label_from_project error: {e}")
        raise StorageError(str(e)) from e


async def count_training_by_label(project: ProjectOut) -> Dict[str, int]:
    """
    Number of training examples for each of the project's current labels.

    Labels without examples are left out, and so are examples whose label is
    no longer on the project. Keys follow the order of ``project.labels``.
    """
    labels = list(project.labels)
    if not labels:
        return {}
    pipeline = [
        {"$match": {"projectid": project.id, "label": {"$in": labels}}},
        {"$group": {"_id": "$label", "count": {"$sum": 1}}},
    ]
    try:
        rows = await training_collection(project.type).aggregate(pipeline).to_list(length=None)
    except PyMongoError as e:
        logger.error(f"count_training_by_label error for project {project.id}: {e}")
        raise StorageError(str(e)) from e
    counts = {row["_id"]: row["count"] for row in rows}
    return {label: counts[label] for label in labels if counts.get(label, 0) > 0}
