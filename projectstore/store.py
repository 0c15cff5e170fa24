"""
Single entry point to the project store.

    from projectstore import store

    await store.init()
    project = await store.store_project(userid, classid, "text", "pets", "en", [], False)
    await store.add_label_to_project(userid, classid, project.id, "cat")
    ...
    await store.disconnect()
"""
from projectstore.database.conn import mongo_client
from projectstore.database.schema import ensure_collections_and_indexes
from projectstore.services.project_management.project import store_project, get_project
from projectstore.services.project_query.project_query import (
    get_projects_by_user_id,
    get_projects_by_class_id,
    get_projects_visible_to_user,
    count_projects_by_user_id,
    count_projects_by_class_id,
)
from projectstore.services.project_deletion.project_deletion import (
    delete_entire_project,
    delete_entire_user,
    delete_projects_by_class_id,
)
from projectstore.services.field_management.field import add_field, get_number_project_fields
from projectstore.services.label_management.label import (
    add_label_to_project,
    remove_label_from_project,
    count_training_by_label,
)
from projectstore.services.training_data.training import (
    store_training,
    store_text_training,
    store_number_training,
    store_image_training,
    store_sound_training,
    get_training,
    count_training,
)


async def init(client=None) -> None:
    """Connect to MongoDB and make sure collections and indexes exist."""
    await mongo_client.connect(client)
    await ensure_collections_and_indexes()


async def disconnect() -> None:
    await mongo_client.close()


__all__ = [
    "init",
    "disconnect",
    "store_project",
    "get_project",
    "get_projects_by_user_id",
    "get_projects_by_class_id",
    "get_projects_visible_to_user",
    "count_projects_by_user_id",
    "count_projects_by_class_id",
    "delete_entire_project",
    "delete_entire_user",
    "delete_projects_by_class_id",
    "add_field",
    "get_number_project_fields",
    "add_label_to_project",
    "remove_label_from_project",
    "count_training_by_label",
    "store_training",
    "store_text_training",
    "store_number_training",
    "store_image_training",
    "store_sound_training",
    "get_training",
    "count_training",
]
